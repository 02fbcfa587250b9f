from typing import List
from pydantic import BaseModel, Field

from app.schemas.movie import Movie
from app.schemas.movie_session import MovieSession


# --- Seat Map (GET /sessions/{id}/seats) ---

class SessionSeats(BaseModel):
    seats: List[str]  # claimed seat labels, in claim order
    session_details: MovieSession = Field(alias="sessionDetails")
    movie_details: Movie = Field(alias="movieDetails")

    class Config:
        populate_by_name = True
