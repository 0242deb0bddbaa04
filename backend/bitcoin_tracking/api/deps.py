from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from bitcoin_tracking.core.config import get_settings
from bitcoin_tracking.db.session import get_db
from bitcoin_tracking.services.rates import RateAggregator, build_rate_aggregator
from bitcoin_tracking.services.records import RecordService


@lru_cache()
def get_rate_aggregator() -> RateAggregator:
    return build_rate_aggregator(get_settings())


def get_record_service(db: Session = Depends(get_db)) -> RecordService:
    return RecordService(db)


__all__ = ["get_db", "get_rate_aggregator", "get_record_service"]
