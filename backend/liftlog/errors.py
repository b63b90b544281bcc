"""
Domain errors raised by the services.

Every error is terminal for the call that raised it: nothing here is retried
by the services. `liftlog.main` maps each kind onto an HTTP status code.
"""
from __future__ import annotations


class LiftLogError(Exception):
    """Base class; `code` is the machine-readable kind sent to clients."""

    code = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(LiftLogError):
    """Malformed input: empty exercise list, negative numbers, unknown exercise."""

    code = "validation_error"
    status_code = 422


class NotFoundError(LiftLogError):
    code = "not_found"
    status_code = 404


class AuthorizationError(LiftLogError):
    """The requester does not own the entity.

    The message is always the same so a denial says nothing about the
    other user's data.
    """

    code = "forbidden"
    status_code = 403

    def __init__(self, message: str = "Not allowed"):
        super().__init__(message)


class ConflictError(LiftLogError):
    """A second active session was requested while one is still running."""

    code = "conflict"
    status_code = 409

    def __init__(self, message: str, *, active_session_id: int | None = None):
        super().__init__(message)
        self.active_session_id = active_session_id

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["active_session_id"] = self.active_session_id
        return body


class InvalidStateError(LiftLogError):
    """Operation not legal in the entity's current lifecycle state."""

    code = "invalid_state"
    status_code = 409
