# liftlog/services/workout_service.py
from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping

from liftlog.errors import NotFoundError, ValidationError
from liftlog.models import Workout
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.services.base import BaseService

log = logging.getLogger(__name__)

_OPTIONAL_NUMBERS = ("target_reps", "target_weight", "rest_time")


def normalize_exercises(exercises: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Validate ExerciseSpec mappings and return them as plain JSON-ready dicts."""
    specs: list[dict] = []
    seen: set[str] = set()
    for raw in exercises:
        name = (raw.get("name") or "").strip()
        if not name:
            raise ValidationError("exercise name cannot be blank")
        if name in seen:
            raise ValidationError(f"duplicate exercise '{name}'")
        seen.add(name)

        target_sets = raw.get("target_sets")
        if target_sets is None or target_sets < 1:
            raise ValidationError(f"'{name}': target_sets must be at least 1")

        spec = {"name": name, "target_sets": int(target_sets)}
        for field in _OPTIONAL_NUMBERS:
            value = raw.get(field)
            if value is not None and value < 0:
                raise ValidationError(f"'{name}': {field} cannot be negative")
            spec[field] = value
        specs.append(spec)

    if not specs:
        raise ValidationError("a workout needs at least one exercise")
    return specs


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("workout name cannot be blank")
    return name


class WorkoutService(BaseService):
    """Workout templates owned by a single user."""

    def __init__(self, db, **kw):
        super().__init__(db, **kw)
        self.repo = WorkoutRepository(db)

    def create(self, user_id: int, name: str, description: str | None, exercises: Iterable[Mapping[str, Any]]) -> Workout:
        with self.unit_of_work():
            workout = self.repo.create(
                user_id,
                name=_clean_name(name),
                description=description,
                exercises=normalize_exercises(exercises),
            )
        log.info("workout created id=%s user=%s exercises=%d", workout.id, user_id, len(workout.exercises))
        return workout

    def get(self, workout_id: int) -> Workout:
        workout = self.repo.get(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout

    def get_owned(self, workout_id: int, requester_id: int) -> Workout:
        workout = self.get(workout_id)
        self.ensure_owner(workout.user_id, requester_id)
        return workout

    def list_for_user(self, user_id: int, *, ordered: bool = False) -> list[Workout]:
        return self.repo.list_by_user(user_id, ordered=ordered)

    def update(
        self,
        workout_id: int,
        requester_id: int,
        name: str,
        description: str | None,
        exercises: Iterable[Mapping[str, Any]],
    ) -> Workout:
        # Sessions keep their own captured names; nothing downstream is touched
        with self.unit_of_work():
            workout = self.get_owned(workout_id, requester_id)
            workout.name = _clean_name(name)
            workout.description = description
            workout.exercises = normalize_exercises(exercises)
            workout.updated_at = self.clock()
            self.db.flush()
        return workout

    def delete(self, workout_id: int, requester_id: int) -> None:
        with self.unit_of_work():
            workout = self.get_owned(workout_id, requester_id)
            self.repo.delete(workout)
        log.info("workout deleted id=%s user=%s", workout_id, requester_id)
