from sqlalchemy import Column, String, Integer, Text, Date
from sqlalchemy.orm import relationship
from app.db.session import Base

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False) # minutes
    genre = Column(String(100), nullable=True)
    actors = Column(Text, nullable=True)
    release_date = Column(Date, nullable=False)
    transfer_link = Column(Text, nullable=True) # trailer URL
    image = Column(Text, nullable=False) # path under UPLOADS_DIR
    wide_image = Column(Text, nullable=True)

    # Relationships
    sessions = relationship("MovieSession", back_populates="movie")
