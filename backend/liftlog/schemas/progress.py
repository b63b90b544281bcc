from pydantic import BaseModel

class ExerciseProgressRead(BaseModel):
    exercise_name: str
    completed_count: int
    target_count: int
    percent: float

    model_config = {"from_attributes": True}

class SessionProgressRead(BaseModel):
    session_id: int
    template_available: bool
    completed_count: int
    target_count: int
    percent: float
    exercises: list[ExerciseProgressRead]

    model_config = {"from_attributes": True}
