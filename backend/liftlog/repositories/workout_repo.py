# liftlog/repositories/workout_repo.py
from __future__ import annotations
from sqlalchemy import select

from liftlog.models import Workout
from liftlog.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def list_by_user(self, user_id: int, *, ordered: bool = False) -> list[Workout]:
        stmt = select(Workout).where(Workout.user_id == user_id)
        if ordered:
            stmt = stmt.order_by(Workout.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, name: str, description: str | None, exercises: list[dict]) -> Workout:
        return self.add_and_refresh(
            Workout(user_id=user_id, name=name, description=description, exercises=exercises)
        )

    def delete(self, workout: Workout) -> None:
        self.db.delete(workout)
        self.db.flush()
