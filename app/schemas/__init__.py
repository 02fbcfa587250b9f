from app.schemas.common import (
    ErrorResponse, FieldError, ValidationErrorResponse, SeatConflictErrorResponse,
    field_errors,
)
from app.schemas.movie import Movie, MovieBase
from app.schemas.movie_session import MovieSession, MovieSessionBase
from app.schemas.seat import SessionSeats
from app.schemas.booking import (
    BookingRequest, BookingSummary, BookingResponse,
    BookingDetails, BookingVerification,
)
