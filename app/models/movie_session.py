from sqlalchemy import Column, String, Integer, ForeignKey, Date, Time, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

class MovieSession(Base):
    """A screening of a movie in a hall. Stored in the ``sessions`` table."""

    __tablename__ = "sessions"
    __table_args__ = (
        # One screening per hall at a given date/time
        UniqueConstraint("hall_no", "date", "time", name="uq_sessions_hall_date_time"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False, index=True)
    audio = Column(String(50), nullable=False)
    subtitle = Column(String(50), nullable=True)
    hall_no = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)

    # Relationships
    movie = relationship("Movie", back_populates="sessions")
    bookings = relationship("Booking", back_populates="session")
