# liftlog/services/session_service.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError

from liftlog.errors import ConflictError, InvalidStateError, NotFoundError
from liftlog.models import ExerciseSession, ExerciseSet, SessionStatus, Workout
from liftlog.repositories.session_repo import SessionRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.services.base import BaseService
from liftlog.services.workout_service import WorkoutService

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionDetail:
    session: ExerciseSession
    sets: list[ExerciseSet]
    workout: Optional[Workout]  # None once the template has been deleted


class SessionService(BaseService):
    """
    Lifecycle of a workout session: active -> completed | cancelled.

    A user has at most one active session. The partial unique index on
    sessions(user_id) WHERE status = 'active' makes the check in `start`
    atomic; the terminal transitions are compare-and-swap updates.
    """

    def __init__(self, db, **kw):
        super().__init__(db, **kw)
        self.repo = SessionRepository(db)
        self.sets = SetRepository(db)
        self.workouts = WorkoutService(db, **kw)

    def _conflict(self, user_id: int) -> ConflictError:
        active = self.repo.get_active(user_id)
        log.info("start rejected: user=%s already has active session %s",
                 user_id, active.id if active else None)
        return ConflictError(
            "An active session already exists",
            active_session_id=active.id if active else None,
        )

    def start(self, user_id: int, workout_id: int, *, prefill_sets: bool = False) -> ExerciseSession:
        with self.unit_of_work():
            workout = self.workouts.get_owned(workout_id, user_id)
            if self.repo.get_active(user_id) is not None:
                raise self._conflict(user_id)

            now = self.clock()
            try:
                sess = self.repo.create(user_id, workout_id=workout.id,
                                        workout_name=workout.name, started_at=now)
            except IntegrityError:
                # Lost the race against a concurrent start for the same user
                self.db.rollback()
                raise self._conflict(user_id)

            if prefill_sets:
                for spec in workout.exercises:
                    for number in range(1, spec["target_sets"] + 1):
                        self.sets.create(
                            sess.id,
                            exercise_name=spec["name"],
                            set_number=number,
                            reps=spec.get("target_reps") or 0,
                            weight=spec.get("target_weight"),
                        )
        log.info("session started id=%s user=%s workout=%s", sess.id, user_id, workout_id)
        return sess

    def _finish(self, session_id: int, requester_id: int, status: SessionStatus,
                notes: str | None = None) -> ExerciseSession:
        with self.unit_of_work():
            sess = self.get(session_id, requester_id)
            if not sess.is_active or not self.repo.finish(
                session_id, status=status, ended_at=self.clock(), notes=notes
            ):
                raise InvalidStateError("Session is not active")
            self.db.refresh(sess)
        log.info("session %s id=%s user=%s", status.value, session_id, requester_id)
        return sess

    def complete(self, session_id: int, requester_id: int, notes: str | None = None) -> ExerciseSession:
        return self._finish(session_id, requester_id, SessionStatus.completed, notes)

    def cancel(self, session_id: int, requester_id: int) -> ExerciseSession:
        return self._finish(session_id, requester_id, SessionStatus.cancelled)

    def get(self, session_id: int, requester_id: int) -> ExerciseSession:
        sess = self.repo.get(session_id)
        if sess is None:
            raise NotFoundError("Session not found")
        self.ensure_owner(sess.user_id, requester_id)
        return sess

    def get_active(self, user_id: int) -> Optional[ExerciseSession]:
        return self.repo.get_active(user_id)

    def list_active(self, user_id: int) -> list[ExerciseSession]:
        active = self.repo.get_active(user_id)
        return [active] if active else []

    def list_history(self, user_id: int) -> list[ExerciseSession]:
        return self.repo.list_by_user(user_id)

    def get_detail(self, session_id: int, requester_id: int) -> SessionDetail:
        sess = self.get(session_id, requester_id)
        return SessionDetail(
            session=sess,
            sets=self.sets.list_by_session(sess.id),
            workout=self.workouts.repo.get(sess.workout_id),
        )
