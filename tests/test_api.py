import logging

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.db.session import build_engine, get_db
from app.main import app


def booking_payload(session_id, seats, **overrides):
    payload = {
        "session_id": session_id,
        "name": "A",
        "email": "a@x.com",
        "phone_number": "12345678",
        "seats": seats,
    }
    payload.update(overrides)
    return payload


# --- POST /book ---

def test_book_success(client, seeded):
    response = client.post("/book", json=booking_payload(seeded["session_id"], ["A1", "A2"]))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    summary = body["bookingSummary"]
    assert summary["session_id"] == seeded["session_id"]
    assert summary["seats"] == ["A1", "A2"]
    assert summary["email"] == "a@x.com"
    assert isinstance(summary["booking_id"], int)


def test_book_seat_conflict(client, seeded, row_counts):
    client.post("/book", json=booking_payload(seeded["session_id"], ["A1", "A2"]))
    response = client.post("/book", json=booking_payload(seeded["session_id"], ["A2", "A3"]))

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "seat_conflict"
    assert body["seats"] == ["A2"]
    assert "A2" in body["message"]
    assert row_counts() == (1, 2)


def test_book_unknown_session(client, seeded, row_counts):
    response = client.post("/book", json=booking_payload(424242, ["A1"]))
    assert response.status_code == 404
    assert response.json()["error"] == "unknown_session"
    assert row_counts() == (0, 0)


def test_book_validation_lists_fields(client, seeded, row_counts):
    response = client.post(
        "/book",
        json={"session_id": "one", "name": "", "email": "bad", "phone_number": "1", "seats": []},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_failed"
    fields = {d["field"] for d in body["details"]}
    assert fields == {"session_id", "name", "email", "seats"}
    assert row_counts() == (0, 0)


def test_book_missing_body(client, seeded):
    response = client.post("/book")
    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


def test_book_store_unavailable(client, seeded, tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'cinema.db'}")
    broken = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def broken_db():
        db = broken()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = broken_db
    response = client.post("/book", json=booking_payload(seeded["session_id"], ["A1"]))
    engine.dispose()

    assert response.status_code == 503
    assert response.json()["error"] == "store_unavailable"


# --- GET /sessions/{id}/seats ---

def test_session_seats(client, seeded):
    session_id = seeded["session_id"]
    empty = client.get(f"/sessions/{session_id}/seats").json()
    assert empty["seats"] == []

    client.post("/book", json=booking_payload(session_id, ["B1", "B2"]))
    response = client.get(f"/sessions/{session_id}/seats")

    assert response.status_code == 200
    body = response.json()
    assert body["seats"] == ["B1", "B2"]
    assert body["sessionDetails"]["id"] == session_id
    assert body["sessionDetails"]["hall_no"] == 1
    assert body["sessionDetails"]["time"] == "19:30:00"
    assert body["movieDetails"]["id"] == seeded["movie_id"]
    assert body["movieDetails"]["title"] == "Dune: Part Two"


def test_session_seats_not_found(client, seeded):
    response = client.get("/sessions/999/seats")
    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Session not found"}


# --- GET /verify-booking/{id} ---

def test_verify_booking(client, seeded):
    created = client.post("/book", json=booking_payload(seeded["session_id"], ["C1"])).json()
    booking_id = created["bookingSummary"]["booking_id"]

    response = client.get(f"/verify-booking/{booking_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "valid"
    assert body["booking"]["id"] == booking_id
    assert body["booking"]["seats"] == ["C1"]
    assert body["booking"]["session"]["id"] == seeded["session_id"]
    assert body["booking"]["movie"]["id"] == seeded["movie_id"]


def test_verify_booking_not_found(client, seeded):
    response = client.get("/verify-booking/777")
    assert response.status_code == 404
    assert response.json()["message"] == "Booking not found"


def test_verify_booking_non_numeric_id(client, seeded):
    response = client.get("/verify-booking/abc")
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "path.booking_id"


# --- Catalogue ---

def test_list_movies(client, seeded):
    response = client.get("/movies")
    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [seeded["movie_id"]]


def test_get_movie(client, seeded):
    response = client.get(f"/movies/{seeded['movie_id']}")
    assert response.status_code == 200
    assert response.json()["release_date"] == "2024-03-01"
    assert client.get("/movies/999").status_code == 404


def test_movie_sessions(client, seeded):
    response = client.get(f"/movies/{seeded['movie_id']}/sessions")
    assert [s["id"] for s in response.json()] == [seeded["session_id"], seeded["other_session_id"]]
    assert client.get("/movies/999/sessions").json() == []


def test_sessions(client, seeded):
    assert len(client.get("/sessions").json()) == 2
    response = client.get(f"/sessions/{seeded['other_session_id']}")
    assert response.status_code == 200
    assert response.json()["subtitle"] is None
    assert client.get("/sessions/999").status_code == 404


# --- Ids beyond the INTEGER column range ---

def test_book_out_of_range_session_id(client, seeded, row_counts):
    response = client.post("/book", json=booking_payload(2**31, ["A1"]))
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["details"]] == ["session_id"]
    assert row_counts() == (0, 0)


@pytest.mark.parametrize(
    "path, field",
    [
        ("/sessions/99999999999/seats", "path.session_id"),
        ("/sessions/99999999999", "path.session_id"),
        ("/verify-booking/99999999999", "path.booking_id"),
        ("/movies/99999999999", "path.movie_id"),
        ("/movies/99999999999/sessions", "path.movie_id"),
    ],
)
def test_out_of_range_path_id(client, seeded, path, field):
    response = client.get(path)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_failed"
    assert body["details"][0]["field"] == field


# --- Database errors outside the booking flow ---

def test_database_error_is_logged_with_driver_error(client, seeded, caplog):
    driver_error = OperationalError("SELECT ...", {}, Exception("server closed the connection"))

    class FailingSession:
        def query(self, *args, **kwargs):
            raise driver_error

        def close(self):
            pass

    def failing_db():
        yield FailingSession()

    app.dependency_overrides[get_db] = failing_db
    with caplog.at_level(logging.ERROR, logger="app.core.exception_handlers"):
        response = client.get("/sessions")

    assert response.status_code == 503
    assert response.json()["error"] == "store_unavailable"
    logged = [r.exc_info[1] for r in caplog.records if r.exc_info]
    assert driver_error in logged
