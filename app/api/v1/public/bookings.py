from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.booking import BookingRequest, BookingResponse, BookingVerification
from app.schemas.common import MAX_ID, ErrorResponse, SeatConflictErrorResponse, ValidationErrorResponse
from app.services.booking import book, get_booking_details

router = APIRouter(tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /book: claim seats for a session
# ---------------------------------------------------------------------------


@router.post(
    "/book",
    response_model=BookingResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": ErrorResponse, "description": "Unknown session"},
        409: {"model": SeatConflictErrorResponse, "description": "Seat already booked"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
)
def create_booking(
    data: BookingRequest,
    db: Session = Depends(get_db),
):
    """
    Book one or more seats for a session.

    All seats are claimed together or not at all. If any seat is already
    taken the response is 409 `seat_conflict` listing the taken seats; the
    client should re-fetch `/sessions/{id}/seats` and pick again.
    """
    summary = book(db, data)
    return BookingResponse(booking_summary=summary)


# ---------------------------------------------------------------------------
# GET /verify-booking/{id}
# ---------------------------------------------------------------------------


@router.get(
    "/verify-booking/{booking_id}",
    response_model=BookingVerification,
    responses={404: {"model": ErrorResponse}},
)
def verify_booking(
    booking_id: Annotated[int, Path(le=MAX_ID)],
    db: Session = Depends(get_db),
):
    """Return a booking with its session, movie and seats, e.g. for a ticket check."""
    return BookingVerification(booking=get_booking_details(db, booking_id))
