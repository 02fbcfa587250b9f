from typing import Annotated, List
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator

from app.schemas.common import MAX_ID
from app.schemas.movie import Movie
from app.schemas.movie_session import MovieSession


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)]
SeatLabel = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10)]


# Booking: Request (POST /book)
class BookingRequest(BaseModel):
    """
    Inbound booking payload. Rejects, field by field:
    - a session_id that is not a positive integer (numeric strings included)
      or does not fit an id column
    - an empty name or phone number
    - a malformed email
    - an empty seat list or an empty seat label

    Repeated seat labels are collapsed, keeping first-seen order.
    """

    session_id: Annotated[int, Field(strict=True, gt=0, le=MAX_ID)]
    name: NonEmptyStr
    email: EmailStr
    phone_number: PhoneNumber
    seats: Annotated[List[SeatLabel], Field(min_length=1)]

    @field_validator("seats")
    @classmethod
    def dedupe_seats(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))


# Booking: Summary of a committed booking
class BookingSummary(BaseModel):
    booking_id: int
    name: str
    email: str
    phone_number: str
    session_id: int
    seats: List[str]


class BookingResponse(BaseModel):
    success: bool = True
    booking_summary: BookingSummary = Field(alias="bookingSummary")

    class Config:
        populate_by_name = True


# Booking: Verification (GET /verify-booking/{id})
class BookingDetails(BaseModel):
    id: int
    name: str
    email: str
    phone_number: str
    seats: List[str]
    session: MovieSession
    movie: Movie


class BookingVerification(BaseModel):
    status: str = "valid"
    booking: BookingDetails
