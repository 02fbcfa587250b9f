from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.movie import Movie
from app.models.movie_session import MovieSession
from app.schemas.common import MAX_ID
from app.schemas.movie import Movie as MovieSchema
from app.schemas.movie_session import MovieSession as MovieSessionSchema

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=List[MovieSchema])
def list_movies(db: Session = Depends(get_db)):
    return db.query(Movie).order_by(Movie.id).all()


@router.get("/{movie_id}", response_model=MovieSchema)
def get_movie(movie_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    movie = db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.get("/{movie_id}/sessions", response_model=List[MovieSessionSchema])
def list_movie_sessions(movie_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    """Sessions of a movie, soonest first. Empty for an unknown movie."""
    return (
        db.query(MovieSession)
        .filter(MovieSession.movie_id == movie_id)
        .order_by(MovieSession.date, MovieSession.time)
        .all()
    )
