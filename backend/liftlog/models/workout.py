from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text, DateTime, JSON, func
from liftlog.db import Base

class Workout(Base):
    """Reusable template. `exercises` is an ordered list of ExerciseSpec dicts:
    {"name", "target_sets", "target_reps", "target_weight", "rest_time"}."""
    __tablename__ = "workouts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    exercises: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="workouts")

    def exercise(self, name: str) -> dict | None:
        for spec in self.exercises or []:
            if spec["name"] == name:
                return spec
        return None
