from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
DescriptionStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, le=10000)]

class ExerciseSpec(BaseModel):
    name: NameStr
    target_sets: Annotated[int, Field(ge=1, le=100)]
    target_reps: NonNegInt | None = None
    target_weight: NonNegFloat | None = None
    rest_time: NonNegInt | None = None  # seconds

class WorkoutCreate(BaseModel):
    name: NameStr
    description: DescriptionStr | None = None
    exercises: Annotated[list[ExerciseSpec], Field(min_length=1)]

class WorkoutUpdate(WorkoutCreate):
    pass

class WorkoutRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: str | None = None
    exercises: list[ExerciseSpec]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

class WorkoutSummary(BaseModel):
    id: int
    name: str
    description: str | None = None

    model_config = {"from_attributes": True}
