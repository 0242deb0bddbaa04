from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class RateSnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fetched_at: datetime
    price_btc_eur: Decimal
    rate_eur_czk: Decimal
    price_btc_czk: Decimal
    source: str
