from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.schemas.exercise_set import SetCreate, SetRead, SetUpdate
from liftlog.services.set_service import SetService
from liftlog.deps.auth import get_current_user
from liftlog.models import User

router = APIRouter(tags=["sets"])

@router.post("/sessions/{session_id}/sets", response_model=SetRead, status_code=status.HTTP_201_CREATED)
def record_set(
    session_id: int,
    payload: SetCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return SetService(db).record(
        session_id,
        current.id,
        exercise_name=payload.exercise_name,
        reps=payload.reps,
        weight=payload.weight,
        completed=payload.completed,
    )

@router.get("/sessions/{session_id}/sets", response_model=list[SetRead])
def list_sets(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SetService(db).list_for_session(session_id, current.id)

@router.patch("/sets/{set_id}", response_model=SetRead)
def update_set(
    set_id: int,
    payload: SetUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return SetService(db).update(set_id, current.id, **payload.model_dump(exclude_unset=True))

@router.post("/sets/{set_id}/complete", response_model=SetRead)
def complete_set(set_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SetService(db).complete_set(set_id, current.id)

@router.delete("/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_set(set_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    SetService(db).delete(set_id, current.id)
