# liftlog/repositories/set_repo.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import select, func, update

from liftlog.models import ExerciseSet
from liftlog.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    model = ExerciseSet

    def list_by_session(self, session_id: int) -> list[ExerciseSet]:
        stmt = select(ExerciseSet).where(ExerciseSet.session_id == session_id)\
                                  .order_by(ExerciseSet.exercise_name.asc(), ExerciseSet.set_number.asc())
        return list(self.db.execute(stmt).scalars().all())

    def session_id_of(self, set_id: int) -> Optional[int]:
        # Plain column read, never served from the identity map
        return self.db.execute(
            select(ExerciseSet.session_id).where(ExerciseSet.id == set_id)
        ).scalar_one_or_none()

    def get_fresh(self, set_id: int) -> Optional[ExerciseSet]:
        """Reload the row, overwriting any copy already held by this session."""
        stmt = (
            select(ExerciseSet)
            .where(ExerciseSet.id == set_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def next_set_number(self, session_id: int, exercise_name: str) -> int:
        max_num = self.db.execute(
            select(func.max(ExerciseSet.set_number)).where(
                ExerciseSet.session_id == session_id,
                ExerciseSet.exercise_name == exercise_name,
            )
        ).scalar_one()
        return (max_num or 0) + 1

    def create(
        self,
        session_id: int,
        *,
        exercise_name: str,
        set_number: int,
        reps: int,
        weight: float | None,
        completed: bool = False,
        completed_at: datetime | None = None,
    ) -> ExerciseSet:
        s = ExerciseSet(
            session_id=session_id,
            exercise_name=exercise_name,
            set_number=set_number,
            reps=reps,
            weight=weight,
            completed=completed,
            completed_at=completed_at,
        )
        return self.add_and_refresh(s)

    def delete(self, s: ExerciseSet) -> None:
        self.db.delete(s)
        self.db.flush()

    def shift_down_after(self, session_id: int, exercise_name: str, set_number: int) -> int:
        """Close the gap left at `set_number` with one UPDATE over every later set."""
        stmt = (
            update(ExerciseSet)
            .where(
                ExerciseSet.session_id == session_id,
                ExerciseSet.exercise_name == exercise_name,
                ExerciseSet.set_number > set_number,
            )
            .values(set_number=ExerciseSet.set_number - 1)
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount
