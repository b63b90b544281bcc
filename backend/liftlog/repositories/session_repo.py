# liftlog/repositories/session_repo.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update

from liftlog.models import ExerciseSession, SessionStatus
from liftlog.repositories.base import BaseRepository

class SessionRepository(BaseRepository[ExerciseSession]):
    model = ExerciseSession

    def get_for_update(self, session_id: int) -> Optional[ExerciseSession]:
        """Load the session and hold its row lock until the transaction ends."""
        stmt = (
            select(ExerciseSession)
            .where(ExerciseSession.id == session_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_active(self, user_id: int) -> Optional[ExerciseSession]:
        stmt = select(ExerciseSession).where(
            ExerciseSession.user_id == user_id,
            ExerciseSession.status == SessionStatus.active,
        )
        return self.db.execute(stmt).scalars().first()

    def list_by_user(self, user_id: int) -> list[ExerciseSession]:
        stmt = select(ExerciseSession).where(ExerciseSession.user_id == user_id)\
                                      .order_by(ExerciseSession.started_at.desc(), ExerciseSession.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, workout_id: int, workout_name: str | None, started_at: datetime) -> ExerciseSession:
        sess = ExerciseSession(
            user_id=user_id,
            workout_id=workout_id,
            workout_name=workout_name,
            started_at=started_at,
            status=SessionStatus.active,
        )
        return self.add_and_refresh(sess)

    def finish(self, session_id: int, *, status: SessionStatus, ended_at: datetime, notes: str | None = None) -> bool:
        """Compare-and-swap from active to a terminal status.

        Returns False when the session was no longer active, so exactly one of
        two racing terminal transitions wins.
        """
        values: dict = {"status": status, "ended_at": ended_at}
        if notes is not None:
            values["notes"] = notes
        stmt = (
            update(ExerciseSession)
            .where(ExerciseSession.id == session_id, ExerciseSession.status == SessionStatus.active)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1
