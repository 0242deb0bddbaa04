from __future__ import annotations

from datetime import datetime, timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bitcoin_tracking.api import deps
from bitcoin_tracking.api import records as records_api
from bitcoin_tracking.api.errors import register_exception_handlers
from bitcoin_tracking.models.base import Base

PAYLOAD = {
    "price_btc_eur": 50000.12,
    "rate_eur_czk": 25.123,
    "price_btc_czk": 1256153.01,
    "note": "Bought the dip",
}


def _create_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine)
    return engine, TestingSessionLocal


def _create_app(SessionLocal):
    app = FastAPI()

    def override_get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    register_exception_handlers(app)
    app.include_router(records_api.router)
    app.dependency_overrides[deps.get_db] = override_get_db
    return app


def _delete_many(client: TestClient, ids):
    return client.request("DELETE", "/records/", json=ids)


def test_records_crud_flow() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))

        response = client.post("/records/", json=PAYLOAD)
        assert response.status_code == 201
        record = response.json()
        record_id = record["id"]
        assert record["note"] == "Bought the dip"
        assert record["price_btc_eur"] == "50000.12"
        assert record["rate_eur_czk"] == "25.1230"
        assert record["price_btc_czk"] == "1256153.01"
        assert record["formatted_timestamp"]

        response = client.get(f"/records/{record_id}")
        assert response.status_code == 200
        fetched = response.json()
        for field in ("id", "price_btc_eur", "rate_eur_czk", "price_btc_czk", "note"):
            assert fetched[field] == record[field]

        response = client.put(f"/records/{record_id}", json={"id": record_id, "note": "Held the line"})
        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/records/{record_id}").json()["note"] == "Held the line"

        response = client.get("/records/")
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [record_id]

        response = client.delete(f"/records/{record_id}")
        assert response.status_code == 204

        response = client.get(f"/records/{record_id}")
        assert response.status_code == 404
        body = response.json()
        assert body["status_code"] == 404
        assert body["message"] == f"Record with ID {record_id} not found"
        assert "timestamp" in body
    finally:
        engine.dispose()


def test_duplicate_note_returns_bad_request() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))

        assert client.post("/records/", json=PAYLOAD).status_code == 201
        response = client.post("/records/", json=PAYLOAD)

        assert response.status_code == 400
        assert response.json()["message"] == "A record with the same note already exists"
        assert len(client.get("/records/").json()) == 1
    finally:
        engine.dispose()


def test_create_validation_errors_are_joined() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))

        response = client.post("/records/", json={**PAYLOAD, "price_btc_eur": 0, "note": ""})

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Bitcoin price in EUR must be greater than 0., Note is required."
        )
    finally:
        engine.dispose()


def test_malformed_body_is_bad_request() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))

        response = client.post("/records/", json={**PAYLOAD, "price_btc_eur": "lots"})

        assert response.status_code == 400
        assert "price_btc_eur" in response.json()["message"]
    finally:
        engine.dispose()


def test_update_note_error_mapping() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))
        record_id = client.post("/records/", json=PAYLOAD).json()["id"]

        response = client.put(f"/records/{record_id}", json={"id": record_id + 1, "note": "x"})
        assert response.status_code == 400
        assert response.json()["message"] == "ID in URL does not match ID in body."

        response = client.put(f"/records/{record_id}", json={"id": record_id, "note": ""})
        assert response.status_code == 400
        assert client.get(f"/records/{record_id}").json()["note"] == "Bought the dip"

        response = client.put("/records/999", json={"id": 999, "note": "ghost"})
        assert response.status_code == 404

        response = client.delete("/records/999")
        assert response.status_code == 404
    finally:
        engine.dispose()


def test_delete_many_reports_deleted_count() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))
        first = client.post("/records/", json={**PAYLOAD, "note": "first"}).json()["id"]
        second = client.post("/records/", json={**PAYLOAD, "note": "second"}).json()["id"]

        response = _delete_many(client, [first, second, 424242])

        assert response.status_code == 200
        assert response.json() == {"deleted_count": 2, "message": "Deleted 2 record(s)"}
        assert client.get("/records/").json() == []

        response = _delete_many(client, [])
        assert response.status_code == 400
    finally:
        engine.dispose()


def test_paged_listing() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))
        start = datetime(2026, 1, 1, 12, 0)
        for index in range(25):
            response = client.post(
                "/records/",
                json={
                    **PAYLOAD,
                    "note": f"note {index}",
                    "timestamp": (start + timedelta(minutes=index)).isoformat(),
                },
            )
            assert response.status_code == 201

        response = client.get("/records/paged", params={"page": 2, "page_size": 10})
        assert response.status_code == 200
        page = response.json()
        assert page["total"] == 25
        assert page["page"] == 2
        assert page["page_size"] == 10
        assert [item["note"] for item in page["items"]] == [f"note {i}" for i in range(14, 4, -1)]

        response = client.get("/records/paged", params={"page": 0, "page_size": 10})
        assert response.status_code == 400
    finally:
        engine.dispose()


def test_large_decimals_round_trip_exactly() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))
        payload = {
            "price_btc_eur": "1234567890123456.78",
            "rate_eur_czk": "12345678901234.5678",
            "price_btc_czk": "9876543210987654.32",
            "note": "whale",
        }

        created = client.post("/records/", json=payload)
        assert created.status_code == 201

        fetched = client.get(f"/records/{created.json()['id']}").json()
        for field in ("price_btc_eur", "rate_eur_czk", "price_btc_czk"):
            assert fetched[field] == payload[field]
    finally:
        engine.dispose()


def test_offset_timestamps_are_stored_as_the_same_instant() -> None:
    engine, SessionLocal = _create_session()
    try:
        client = TestClient(_create_app(SessionLocal))
        # 05:00 UTC
        client.post("/records/", json={**PAYLOAD, "note": "a", "timestamp": "2026-01-01T10:00:00+05:00"})
        client.post("/records/", json={**PAYLOAD, "note": "b", "timestamp": "2026-01-01T07:00:00Z"})

        records = client.get("/records/").json()

        assert [(r["note"], r["timestamp"], r["formatted_timestamp"]) for r in records] == [
            ("b", "2026-01-01T07:00:00Z", "01.01.2026 08:00"),
            ("a", "2026-01-01T05:00:00Z", "01.01.2026 06:00"),
        ]
    finally:
        engine.dispose()
