from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from bitcoin_tracking.core.config import settings

logger = logging.getLogger(__name__)


def _candidate_roots(start: Path) -> Iterable[Path]:
    """Yield potential project roots to look for Alembic configuration files."""

    current = start.resolve()
    for candidate in (current, *current.parents):
        yield candidate


def _find_project_root() -> Path:
    """Locate the directory containing the Alembic configuration.

    Alembic lives at the repository root in a checkout and next to the
    backend sources in the container image, so the parents are walked until
    ``alembic.ini`` shows up.
    """

    for candidate in _candidate_roots(Path(__file__).parent):
        if (candidate / "alembic.ini").exists():
            return candidate

    raise RuntimeError("Unable to locate alembic.ini. Ensure it is bundled with the backend.")


def run_migrations(database_url: str | None = None) -> None:
    """Apply the latest Alembic migrations to the configured database."""

    database_url = database_url or settings.database_url
    project_root = _find_project_root()
    config = Config(str(project_root / "alembic.ini"))
    config.set_main_option("script_location", str(project_root / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)

    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, connect_args=connect_args)

    try:
        with engine.connect() as connection:
            inspector = inspect(connection)
            has_alembic_version = inspector.has_table("alembic_version")
            has_unversioned_records = inspector.has_table("bitcoin_records")

        # tables created outside Alembic still need the later revisions
        if not has_alembic_version and has_unversioned_records:
            logger.warning("Stamping unversioned bitcoin_records table at revision 0001")
            command.stamp(config, "0001")
    finally:
        engine.dispose()

    command.upgrade(config, "head")
    logger.info("Database schema is up to date")
