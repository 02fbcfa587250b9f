import datetime as dt
import os

# Keep the app's own engine off PostgreSQL; each test builds its own store
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.db.session import build_engine, get_db
from app.main import app
from app.models import Booking, BookingSeat, Movie, MovieSession


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'cinema.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_catalogue(session_factory):
    """One movie with two sessions in different halls."""
    with session_factory() as db:
        movie = Movie(
            title="Dune: Part Two",
            description="Paul Atreides unites with the Fremen.",
            duration=166,
            genre="Sci-Fi",
            actors="Timothée Chalamet, Zendaya",
            release_date=dt.date(2024, 3, 1),
            image="uploads/dune.jpg",
        )
        db.add(movie)
        db.flush()

        evening = MovieSession(
            movie_id=movie.id, audio="English", subtitle="Danish",
            hall_no=1, date=dt.date(2030, 1, 10), time=dt.time(19, 30),
        )
        late = MovieSession(
            movie_id=movie.id, audio="English",
            hall_no=2, date=dt.date(2030, 1, 10), time=dt.time(22, 0),
        )
        db.add_all([evening, late])
        db.flush()
        ids = {"movie_id": movie.id, "session_id": evening.id, "other_session_id": late.id}
        db.commit()
    return ids


@pytest.fixture()
def seeded(session_factory):
    return seed_catalogue(session_factory)


@pytest.fixture(params=["sqlite", pytest.param("postgresql", marks=pytest.mark.postgresql)])
def race_store(request, tmp_path):
    """
    Session factory and seeded session id for concurrent booking tests.

    The PostgreSQL variant runs against TEST_POSTGRES_URL and is skipped when
    it is unset. Its tables are dropped afterwards.
    """
    if request.param == "sqlite":
        url = f"sqlite:///{tmp_path / 'race.db'}"
    else:
        url = os.environ.get("TEST_POSTGRES_URL")
        if not url:
            pytest.skip("TEST_POSTGRES_URL is not set")

    engine = build_engine(url)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory, seed_catalogue(factory)["session_id"]
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def row_counts(session_factory):
    """Callable returning (bookings, booking_seats) row counts."""
    def _counts():
        with session_factory() as db:
            return db.query(Booking).count(), db.query(BookingSeat).count()
    return _counts
