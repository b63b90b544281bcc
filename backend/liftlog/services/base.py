# liftlog/services/base.py
from __future__ import annotations
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

from sqlalchemy.orm import Session

from liftlog.db import utcnow
from liftlog.errors import AuthorizationError

Clock = Callable[[], datetime]

class BaseService:
    """Holds the request's DB session; each public operation is one transaction."""

    def __init__(self, db: Session, *, clock: Clock = utcnow):
        self.db = db
        self.clock = clock

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def ensure_owner(owner_id: int, requester_id: int) -> None:
        if owner_id != requester_id:
            raise AuthorizationError()
