"""
Seat-booking transaction and booking verification.

A booking is one ``bookings`` row plus one ``booking_seats`` row per seat,
written in a single unit of work. Seats are never checked for availability
before they are inserted: the unique (session_id, seat) constraint rejects
the losing insert of a race, and that rejection is reported as a
``SeatConflict``.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DomainError,
    NotFoundError,
    SeatConflict,
    StoreUnavailable,
    UnknownSession,
    ValidationFailed,
)
from app.db.session import begin_snapshot
from app.models.booking import Booking, BookingSeat
from app.models.movie import Movie
from app.models.movie_session import MovieSession
from app.schemas.booking import BookingDetails, BookingRequest, BookingSummary
from app.schemas.movie import Movie as MovieSchema
from app.schemas.movie_session import MovieSession as MovieSessionSchema

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_SERIALIZATION_FAILURE = "40001"
PG_DEADLOCK_DETECTED = "40P01"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _violation_kind(exc: IntegrityError) -> Optional[str]:
    """Return "unique", "foreign_key" or None for a constraint failure."""
    code = getattr(exc.orig, "pgcode", None)
    if code == PG_UNIQUE_VIOLATION:
        return "unique"
    if code == PG_FOREIGN_KEY_VIOLATION:
        return "foreign_key"

    # SQLite only reports the constraint kind in the message
    message = str(exc.orig).upper()
    if "UNIQUE CONSTRAINT FAILED" in message:
        return "unique"
    if "FOREIGN KEY CONSTRAINT FAILED" in message:
        return "foreign_key"
    return None


def _is_lock_conflict(exc: DBAPIError) -> bool:
    """True when the store aborted the transaction to resolve a lock wait."""
    code = getattr(exc.orig, "pgcode", None)
    return code in (PG_DEADLOCK_DETECTED, PG_SERIALIZATION_FAILURE)


def _claimed_seats(db: Session, session_id: int, seats: Sequence[str]) -> List[str]:
    """
    Requested seats that are currently claimed for the session, in request order.

    Only used to word a conflict after the booking has been rolled back; it
    never decides whether a booking may proceed.
    """
    try:
        rows = (
            db.query(BookingSeat.seat)
            .filter(BookingSeat.session_id == session_id, BookingSeat.seat.in_(seats))
            .all()
        )
    except SQLAlchemyError:
        logger.warning("Could not list claimed seats for session %s", session_id, exc_info=True)
        return []
    finally:
        db.rollback()

    claimed = {row.seat for row in rows}
    return [seat for seat in seats if seat in claimed]


def _classify_integrity_error(
    db: Session,
    request: BookingRequest,
    pending_seat: Optional[str],
    exc: IntegrityError,
) -> DomainError:
    kind = _violation_kind(exc)

    if kind == "unique" and pending_seat is not None:
        return _seat_conflict(db, request, pending_seat)

    if kind == "foreign_key":
        logger.warning("Booking rejected: session %s does not exist", request.session_id)
        return UnknownSession(request.session_id)

    logger.error(
        "Unexpected constraint failure while booking session %s: %s",
        request.session_id, exc.orig,
    )
    return StoreUnavailable("The booking could not be stored")


def _seat_conflict(db: Session, request: BookingRequest, pending_seat: str) -> SeatConflict:
    seats = _claimed_seats(db, request.session_id, request.seats) or [pending_seat]
    logger.warning(
        "Booking rejected: seat(s) %s already claimed for session %s",
        ", ".join(seats), request.session_id,
    )
    return SeatConflict(request.session_id, seats)


# ---------------------------------------------------------------------------
# Booking transaction
# ---------------------------------------------------------------------------


def book(db: Session, request: BookingRequest) -> BookingSummary:
    """
    Persist one booking and all of its seat claims, or nothing at all.

    ``db`` must not have a transaction in progress. Raises:
    - ValidationFailed : empty seat list (checked before any transaction)
    - SeatConflict     : a requested seat is already claimed for the session
    - UnknownSession   : session_id does not reference a session
    - StoreUnavailable : the store could not be reached or failed to commit

    Any other error propagates after the rollback.
    """
    if not request.seats:
        raise ValidationFailed([{"field": "seats", "message": "At least one seat must be selected"}])

    pending_seat: Optional[str] = None
    try:
        # Commits on exit, rolls back on every exception
        with db.begin():
            booking = Booking(
                session_id=request.session_id,
                name=request.name,
                email=request.email,
                phone_number=request.phone_number,
            )
            db.add(booking)
            db.flush()  # get booking.id; an unknown session fails here

            # One flush per seat so a unique violation names its seat.
            # Sorted so concurrent bookings lock shared seats in the same order.
            for seat in sorted(request.seats):
                pending_seat = seat
                db.add(BookingSeat(
                    booking_id=booking.id,
                    session_id=request.session_id,
                    seat=seat,
                ))
                db.flush()
            pending_seat = None

            summary = BookingSummary(
                booking_id=booking.id,
                name=request.name,
                email=request.email,
                phone_number=request.phone_number,
                session_id=request.session_id,
                seats=list(request.seats),
            )
    except IntegrityError as exc:
        raise _classify_integrity_error(db, request, pending_seat, exc) from exc
    except DBAPIError as exc:
        if pending_seat is not None and _is_lock_conflict(exc):
            raise _seat_conflict(db, request, pending_seat) from exc
        logger.exception("Store failure while booking session %s", request.session_id)
        raise StoreUnavailable() from exc
    except PoolTimeoutError as exc:
        logger.exception("Store failure while booking session %s", request.session_id)
        raise StoreUnavailable() from exc

    logger.info(
        "Booking %s confirmed for session %s: %s",
        summary.booking_id, summary.session_id, ", ".join(summary.seats),
    )
    return summary


# ---------------------------------------------------------------------------
# Booking verification
# ---------------------------------------------------------------------------


def get_booking_details(db: Session, booking_id: int) -> BookingDetails:
    """Load a booking with its session, movie and seats from one snapshot."""
    begin_snapshot(db)

    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")

    session = db.get(MovieSession, booking.session_id)
    if session is None:
        raise NotFoundError("Session not found for this booking")

    movie = db.get(Movie, session.movie_id)
    if movie is None:
        raise NotFoundError("Movie not found for this session")

    return BookingDetails(
        id=booking.id,
        name=booking.name,
        email=booking.email,
        phone_number=booking.phone_number,
        seats=[bs.seat for bs in booking.seats],
        session=MovieSessionSchema.model_validate(session),
        movie=MovieSchema.model_validate(movie),
    )
