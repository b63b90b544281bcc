# liftlog/services/set_service.py
from __future__ import annotations
import logging
from liftlog.errors import InvalidStateError, NotFoundError, ValidationError
from liftlog.models import ExerciseSession, ExerciseSet
from liftlog.repositories.session_repo import SessionRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.services.base import BaseService

log = logging.getLogger(__name__)

_UNSET = object()


def _check_reps(reps: int) -> int:
    if reps is None or reps < 0:
        raise ValidationError("reps cannot be negative")
    return reps


def _check_weight(weight: float | None) -> float | None:
    if weight is not None and weight < 0:
        raise ValidationError("weight cannot be negative")
    return weight


class SetService(BaseService):
    """
    Set log of one session. Writes are only accepted while the session is
    active; once it is completed or cancelled its sets are a fixed record.

    Every write locks the owning session row first, so set writes on one
    session are serialized with each other and with complete/cancel.
    """

    def __init__(self, db, **kw):
        super().__init__(db, **kw)
        self.repo = SetRepository(db)
        self.sessions = SessionRepository(db)

    def _lock_active_session(self, session_id: int, requester_id: int) -> ExerciseSession:
        sess = self.sessions.get_for_update(session_id)
        if sess is None:
            raise NotFoundError("Session not found")
        self.ensure_owner(sess.user_id, requester_id)
        if not sess.is_active:
            raise InvalidStateError("Session is not active; its sets can no longer change")
        return sess

    def _lock_set(self, set_id: int, requester_id: int) -> ExerciseSet:
        """Lock the owning session, then reload the set from the database.

        The set is read only after the lock is held so its set_number is
        current, and a set deleted by another client surfaces as NotFoundError.
        """
        session_id = self.repo.session_id_of(set_id)
        if session_id is None:
            raise NotFoundError("Set not found")
        self._lock_active_session(session_id, requester_id)
        s = self.repo.get_fresh(set_id)
        if s is None:
            raise NotFoundError("Set not found")
        return s

    def record(
        self,
        session_id: int,
        requester_id: int,
        exercise_name: str,
        reps: int,
        weight: float | None = None,
        completed: bool = False,
    ) -> ExerciseSet:
        name = (exercise_name or "").strip()
        if not name:
            raise ValidationError("exercise name cannot be blank")
        _check_reps(reps)
        _check_weight(weight)

        with self.unit_of_work():
            sess = self._lock_active_session(session_id, requester_id)
            workout = WorkoutRepository(self.db).get(sess.workout_id)
            # A deleted template accepts any name
            if workout is not None and workout.exercise(name) is None:
                raise ValidationError(f"'{name}' is not an exercise of workout '{workout.name}'")

            s = self.repo.create(
                sess.id,
                exercise_name=name,
                set_number=self.repo.next_set_number(sess.id, name),
                reps=reps,
                weight=weight,
                completed=completed,
                completed_at=self.clock() if completed else None,
            )
        return s

    def update(self, set_id: int, requester_id: int, *, reps=_UNSET, weight=_UNSET, completed=_UNSET) -> ExerciseSet:
        """Apply a partial patch; omitted fields keep their value, `weight=None` clears it."""
        with self.unit_of_work():
            s = self._lock_set(set_id, requester_id)
            if reps is not _UNSET:
                s.reps = _check_reps(reps)
            if weight is not _UNSET:
                s.weight = _check_weight(weight)
            if completed is not _UNSET and completed is not None and completed != s.completed:
                s.completed = completed
                s.completed_at = self.clock() if completed else None
            self.db.flush()
        return s

    def complete_set(self, set_id: int, requester_id: int) -> ExerciseSet:
        return self.update(set_id, requester_id, completed=True)

    def delete(self, set_id: int, requester_id: int) -> None:
        with self.unit_of_work():
            s = self._lock_set(set_id, requester_id)
            session_id, name, number = s.session_id, s.exercise_name, s.set_number
            self.repo.delete(s)
            shifted = self._reindex(session_id, name, number)
        log.info("set deleted id=%s session=%s exercise=%r renumbered=%d",
                 set_id, session_id, name, shifted)

    def _reindex(self, session_id: int, exercise_name: str, removed_number: int) -> int:
        # Runs inside delete's transaction, under the session lock
        return self.repo.shift_down_after(session_id, exercise_name, removed_number)

    def list_for_session(self, session_id: int, requester_id: int) -> list[ExerciseSet]:
        sess = self.sessions.get(session_id)
        if sess is None:
            raise NotFoundError("Session not found")
        self.ensure_owner(sess.user_id, requester_id)
        return self.repo.list_by_session(session_id)
