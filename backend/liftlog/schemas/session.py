from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, StringConstraints

from liftlog.models import SessionStatus
from liftlog.schemas.exercise_set import SetRead
from liftlog.schemas.workout import WorkoutSummary

# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class SessionStart(BaseModel):
    workout_id: int
    # Seed target_sets incomplete sets per exercise from the template
    prefill_sets: bool = False

class SessionComplete(BaseModel):
    notes: NotesStr | None = None

class SessionRead(BaseModel):
    id: int
    user_id: int
    workout_id: int
    workout_name: str | None = None
    status: SessionStatus
    started_at: datetime
    ended_at: datetime | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}

class SessionDetailRead(SessionRead):
    sets: list[SetRead]
    workout: WorkoutSummary | None = None
