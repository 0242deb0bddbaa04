from __future__ import annotations

from fastapi import APIRouter, Depends

from bitcoin_tracking.api import deps
from bitcoin_tracking.schemas.rates import RateSnapshotResponse
from bitcoin_tracking.services.rates import RateAggregator, RateSnapshot

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/current", response_model=RateSnapshotResponse)
def get_current_rate(
    aggregator: RateAggregator = Depends(deps.get_rate_aggregator),
) -> RateSnapshot:
    return aggregator.get_current_rate()
