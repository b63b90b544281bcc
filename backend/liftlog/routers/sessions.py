from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.schemas.session import SessionStart, SessionComplete, SessionRead, SessionDetailRead
from liftlog.schemas.progress import SessionProgressRead
from liftlog.services.session_service import SessionService
from liftlog.services.progress_service import ProgressService
from liftlog.deps.auth import get_current_user
from liftlog.models import User  # type only

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionStart, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SessionService(db).start(current.id, payload.workout_id, prefill_sets=payload.prefill_sets)

@router.get("", response_model=list[SessionRead])
def list_session_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SessionService(db).list_history(current.id)

@router.get("/active", response_model=SessionRead | None)
def get_active_session(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SessionService(db).get_active(current.id)

@router.get("/{session_id}", response_model=SessionDetailRead)
def get_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    detail = SessionService(db).get_detail(session_id, current.id)
    return SessionDetailRead.model_validate(
        {
            **SessionRead.model_validate(detail.session).model_dump(),
            "sets": detail.sets,
            "workout": detail.workout,
        },
        from_attributes=True,
    )

@router.post("/{session_id}/complete", response_model=SessionRead)
def complete_session(
    session_id: int,
    payload: SessionComplete | None = None,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    notes = payload.notes if payload else None
    return SessionService(db).complete(session_id, current.id, notes=notes)

@router.post("/{session_id}/cancel", response_model=SessionRead)
def cancel_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SessionService(db).cancel(session_id, current.id)

@router.get("/{session_id}/progress", response_model=SessionProgressRead)
def session_progress(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ProgressService(db).for_session(session_id, current.id)
