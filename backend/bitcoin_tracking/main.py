from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bitcoin_tracking.api import health, rates, records
from bitcoin_tracking.api.errors import register_exception_handlers
from bitcoin_tracking.core.config import settings
from bitcoin_tracking.core.logging import setup_logging
from bitcoin_tracking.db import base  # noqa: F401
from bitcoin_tracking.db.migration import run_migrations

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.run_migrations_on_startup:
        run_migrations()
    logger.info("%s started", settings.app_name)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
def root():
    return {"app": settings.app_name}


app.include_router(health.router)
app.include_router(rates.router)
app.include_router(records.router)
