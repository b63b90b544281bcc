from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, DateTime, Text, Index, Enum as SAEnum, text
from liftlog.db import Base

class SessionStatus(str, Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"

TERMINAL_STATUSES = (SessionStatus.completed, SessionStatus.cancelled)

class ExerciseSession(Base):
    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_user_id_status", "user_id", "status"),
        # At most one active session per user
        Index(
            "uq_sessions_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # Weak reference: the template may be deleted while its sessions live on
    workout_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    workout_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    started_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)
    ended_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[SessionStatus] = mapped_column(
        SAEnum(SessionStatus, name="session_status", native_enum=False, length=20),
        nullable=False,
        default=SessionStatus.active,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    sets = relationship(
        "ExerciseSet",
        back_populates="session",
        cascade="all, delete-orphan",
    )

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.active
