from typing import Any, Dict, Iterable, List
from pydantic import BaseModel

# Primary keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    details: List[FieldError]


class SeatConflictErrorResponse(ErrorResponse):
    seats: List[str]


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into one {field, message} entry per failure.

    The leading "body" location FastAPI adds to request errors is dropped, and
    list positions are joined with dots (``seats.0``).
    """
    result = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        result.append({"field": ".".join(loc) or "body", "message": err["msg"]})
    return result
