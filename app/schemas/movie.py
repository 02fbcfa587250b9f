import datetime as dt
from typing import Optional
from pydantic import BaseModel


class MovieBase(BaseModel):
    title: str
    description: str
    duration: int
    genre: Optional[str] = None
    actors: Optional[str] = None
    release_date: dt.date
    transfer_link: Optional[str] = None
    image: str
    wide_image: Optional[str] = None


class Movie(MovieBase):
    id: int

    class Config:
        from_attributes = True
