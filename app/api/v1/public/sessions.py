from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.movie_session import MovieSession
from app.schemas.common import MAX_ID, ErrorResponse
from app.schemas.movie_session import MovieSession as MovieSessionSchema
from app.schemas.seat import SessionSeats
from app.services.seats import get_session_seats

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=List[MovieSessionSchema])
def list_sessions(db: Session = Depends(get_db)):
    return (
        db.query(MovieSession)
        .order_by(MovieSession.date, MovieSession.time, MovieSession.hall_no)
        .all()
    )


@router.get("/{session_id}", response_model=MovieSessionSchema)
def get_session(session_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    session = db.get(MovieSession, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ---------------------------------------------------------------------------
# Seat map (seat selection screen)
# ---------------------------------------------------------------------------


@router.get(
    "/{session_id}/seats",
    response_model=SessionSeats,
    responses={404: {"model": ErrorResponse}},
)
def get_seats(session_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    """
    Returns the seats already claimed for a session, together with the
    session and movie details. Any seat not listed is free.
    """
    return get_session_seats(db, session_id)
