"""Domain errors raised by the booking flow and its read paths.

Every error carries a machine-readable ``error`` code next to the human
message, so callers can tell a seat conflict from a store outage without
parsing text.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base domain error with an HTTP status and an error code."""

    status_code: int = 400
    error: str = "bad_request"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def extra(self) -> Dict[str, Any]:
        """Additional fields rendered alongside ``error`` and ``message``."""
        return {}


# --- Client-correctable ---

class ValidationError(DomainError):
    status_code = 400
    error = "validation_error"


class ValidationFailed(ValidationError):
    error = "validation_failed"

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message)

    def extra(self) -> Dict[str, Any]:
        return {"details": self.errors}


# --- Missing references ---

class NotFoundError(DomainError):
    status_code = 404
    error = "not_found"


class UnknownSession(NotFoundError):
    error = "unknown_session"

    def __init__(self, session_id: int):
        self.session_id = session_id
        super().__init__(f"Session {session_id} does not exist")


# --- Seat already claimed ---

class ConflictError(DomainError):
    status_code = 409
    error = "conflict"


class SeatConflict(ConflictError):
    error = "seat_conflict"

    def __init__(self, session_id: int, seats: List[str]):
        self.session_id = session_id
        self.seats = seats
        super().__init__(
            f"Seat(s) {', '.join(seats)} already booked for session {session_id}"
        )

    def extra(self) -> Dict[str, Any]:
        return {"seats": self.seats}


# --- Store failures ---

class InfrastructureError(DomainError):
    status_code = 503
    error = "infrastructure_error"


class StoreUnavailable(InfrastructureError):
    error = "store_unavailable"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "The booking store is currently unavailable")
