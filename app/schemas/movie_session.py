import datetime as dt
from typing import Optional
from pydantic import BaseModel


class MovieSessionBase(BaseModel):
    movie_id: int
    audio: str
    subtitle: Optional[str] = None
    hall_no: int
    date: dt.date
    time: dt.time


class MovieSession(MovieSessionBase):
    id: int

    class Config:
        from_attributes = True
