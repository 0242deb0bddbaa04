from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bitcoin_tracking.db.migration import run_migrations
from bitcoin_tracking.models.base import Base
from bitcoin_tracking.models.records import SavedRecord

INSERT_RECORD = text(
    "INSERT INTO bitcoin_records (timestamp, price_btc_eur, rate_eur_czk, price_btc_czk, note) "
    "VALUES (:ts, 50000.12, 25.123, 1256153.01, :note)"
)


def _assert_schema(database_url: str) -> None:
    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            inspector = inspect(connection)
            assert inspector.has_table("alembic_version")
            assert connection.execute(text("SELECT version_num FROM alembic_version")).scalar() == "0003"

            column_types = {col["name"]: str(col["type"]) for col in inspector.get_columns("bitcoin_records")}
            assert set(column_types) == {"id", "timestamp", "price_btc_eur", "rate_eur_czk", "price_btc_czk", "note"}
            for name in ("price_btc_eur", "rate_eur_czk", "price_btc_czk"):
                assert column_types[name].startswith("VARCHAR")

            indexes = {index["name"] for index in inspector.get_indexes("bitcoin_records")}
            assert "ix_bitcoin_records_timestamp" in indexes

            constraints = {c["name"] for c in inspector.get_unique_constraints("bitcoin_records")}
            assert "uq_bitcoin_records_note" in constraints

        with pytest.raises(IntegrityError):
            with engine.begin() as connection:
                connection.execute(INSERT_RECORD, {"ts": "2026-01-01 00:00:00", "note": "twice"})
                connection.execute(INSERT_RECORD, {"ts": "2026-01-02 00:00:00", "note": "twice"})
    finally:
        engine.dispose()


def test_run_migrations_creates_schema(tmp_path):
    database_url = f"sqlite:///{tmp_path / 'fresh.db'}"

    run_migrations(database_url)
    # a second run is a no-op
    run_migrations(database_url)

    _assert_schema(database_url)


def test_run_migrations_adopts_unversioned_table(tmp_path):
    database_url = f"sqlite:///{tmp_path / 'unversioned.db'}"
    engine = create_engine(database_url)
    try:
        with engine.begin() as connection:
            connection.exec_driver_sql(
                """
                CREATE TABLE bitcoin_records (
                    id INTEGER PRIMARY KEY,
                    timestamp DATETIME NOT NULL,
                    price_btc_eur NUMERIC(18, 2) NOT NULL,
                    rate_eur_czk NUMERIC(18, 4) NOT NULL,
                    price_btc_czk NUMERIC(18, 2) NOT NULL,
                    note VARCHAR(500) NOT NULL DEFAULT ''
                )
                """
            )
            connection.exec_driver_sql(
                "CREATE INDEX ix_bitcoin_records_timestamp ON bitcoin_records (timestamp)"
            )
            connection.execute(INSERT_RECORD, {"ts": "2025-12-24 00:00:00", "note": "legacy"})
    finally:
        engine.dispose()

    run_migrations(database_url)

    _assert_schema(database_url)
    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            notes = connection.execute(text("SELECT note FROM bitcoin_records")).scalars().all()
        assert notes == ["legacy"]

        with Session(engine) as session:
            legacy = session.query(SavedRecord).one()
        assert legacy.price_btc_eur == Decimal("50000.12")
        assert legacy.rate_eur_czk == Decimal("25.123")
        assert legacy.price_btc_czk == Decimal("1256153.01")
    finally:
        engine.dispose()


def test_models_match_migrated_tables():
    assert set(Base.metadata.tables) >= {"bitcoin_records"}
