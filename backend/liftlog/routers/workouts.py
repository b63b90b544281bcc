from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate
from liftlog.services.workout_service import WorkoutService
from liftlog.deps.auth import get_current_user
from liftlog.models import User

router = APIRouter(prefix="/workouts", tags=["workouts"])

def _specs(payload: WorkoutCreate) -> list[dict]:
    return [e.model_dump() for e in payload.exercises]

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutService(db).create(current.id, payload.name, payload.description, _specs(payload))

@router.get("", response_model=list[WorkoutRead])
def list_workouts(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutService(db).list_for_user(current.id, ordered=True)

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutService(db).get_owned(workout_id, current.id)

@router.put("/{workout_id}", response_model=WorkoutRead)
def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return WorkoutService(db).update(workout_id, current.id, payload.name, payload.description, _specs(payload))

@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    WorkoutService(db).delete(workout_id, current.id)
