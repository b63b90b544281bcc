from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

# Keep max length via Field
ExerciseStr = Annotated[str, Field(max_length=120)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, le=10000)]

class SetCreate(BaseModel):
    exercise_name: ExerciseStr
    reps: NonNegInt
    weight: NonNegFloat | None = None
    completed: bool = False

    @field_validator("exercise_name")
    @classmethod
    def exercise_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise cannot be blank")
        return v2

class SetUpdate(BaseModel):
    """Partial patch; only the fields sent are applied."""
    reps: NonNegInt | None = None
    weight: NonNegFloat | None = None
    completed: bool | None = None

    @field_validator("reps")
    @classmethod
    def reps_not_null(cls, v):
        if v is None:
            raise ValueError("reps cannot be null")
        return v

class SetRead(BaseModel):
    id: int
    session_id: int
    exercise_name: str
    set_number: int
    reps: int
    weight: float | None = None
    completed: bool
    completed_at: datetime | None = None

    model_config = {"from_attributes": True}
