from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.session import begin_snapshot
from app.models.booking import BookingSeat
from app.models.movie import Movie
from app.models.movie_session import MovieSession
from app.schemas.movie import Movie as MovieSchema
from app.schemas.movie_session import MovieSession as MovieSessionSchema
from app.schemas.seat import SessionSeats


def get_session_seats(db: Session, session_id: int) -> SessionSeats:
    """
    Claimed seats of a session plus the session and movie needed to draw
    the seat map.

    All three are read inside one read-only snapshot so a booking committing
    mid-request cannot show seats for a different state than the details.
    """
    begin_snapshot(db)

    session = db.get(MovieSession, session_id)
    if session is None:
        raise NotFoundError("Session not found")

    movie = db.get(Movie, session.movie_id)
    if movie is None:
        raise NotFoundError("Movie not found")

    seats = [
        row.seat
        for row in db.query(BookingSeat.seat)
        .filter(BookingSeat.session_id == session_id)
        .order_by(BookingSeat.id)
        .all()
    ]

    return SessionSeats(
        seats=seats,
        session_details=MovieSessionSchema.model_validate(session),
        movie_details=MovieSchema.model_validate(movie),
    )
