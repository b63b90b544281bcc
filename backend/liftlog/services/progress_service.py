# liftlog/services/progress_service.py
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field

from liftlog.errors import NotFoundError
from liftlog.repositories.session_repo import SessionRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.services.base import BaseService


def _percent(done: int, target: int) -> float:
    if target <= 0:
        return 0.0
    return round(100.0 * done / target, 1)


@dataclass(slots=True)
class ExerciseProgress:
    exercise_name: str
    completed_count: int
    target_count: int
    percent: float


@dataclass(slots=True)
class SessionProgress:
    session_id: int
    template_available: bool
    completed_count: int = 0
    target_count: int = 0
    percent: float = 0.0
    exercises: list[ExerciseProgress] = field(default_factory=list)


class ProgressService(BaseService):
    """Completion counts per exercise, recomputed from the set log on every call."""

    def for_session(self, session_id: int, requester_id: int) -> SessionProgress:
        sess = SessionRepository(self.db).get(session_id)
        if sess is None:
            raise NotFoundError("Session not found")
        self.ensure_owner(sess.user_id, requester_id)

        done: dict[str, int] = defaultdict(int)
        numbers: dict[str, set[int]] = defaultdict(set)
        for s in SetRepository(self.db).list_by_session(sess.id):
            numbers[s.exercise_name].add(s.set_number)
            if s.completed:
                done[s.exercise_name] += 1

        workout = WorkoutRepository(self.db).get(sess.workout_id)
        targets: dict[str, int] = {}
        if workout is not None:
            for spec in workout.exercises:
                targets[spec["name"]] = spec["target_sets"]
        # Recorded exercises the template doesn't list (or no template at all)
        for name in sorted(numbers):
            if name not in targets:
                targets[name] = len(numbers[name])

        progress = SessionProgress(session_id=sess.id, template_available=workout is not None)
        for name, target in targets.items():
            progress.exercises.append(
                ExerciseProgress(name, done[name], target, _percent(done[name], target))
            )
            progress.completed_count += done[name]
            progress.target_count += target
        progress.percent = _percent(progress.completed_count, progress.target_count)
        return progress
