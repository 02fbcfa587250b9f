from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("sessions.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(32), nullable=False)

    # Relationships
    session = relationship("MovieSession", back_populates="bookings")
    seats = relationship(
        "BookingSeat",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingSeat.id",
    )

class BookingSeat(Base):
    """A seat claim. (session_id, seat) is unique: the double-booking guard."""

    __tablename__ = "booking_seats"
    __table_args__ = (
        UniqueConstraint("session_id", "seat", name="uq_booking_seats_session_seat"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id"), nullable=False) # Copy of booking.session_id
    seat = Column(String(10), nullable=False) # e.g. "A1"

    booking = relationship("Booking", back_populates="seats")
    session = relationship("MovieSession")
