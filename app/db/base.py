from app.db.session import Base
from app.models.movie import Movie
from app.models.movie_session import MovieSession
from app.models.booking import Booking, BookingSeat
