from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from bitcoin_tracking.utils.time import as_utc, format_local


class RecordCreate(BaseModel):
    # left optional so missing values are reported by the record validator
    price_btc_eur: Optional[Decimal] = None
    rate_eur_czk: Optional[Decimal] = None
    price_btc_czk: Optional[Decimal] = None
    note: Optional[str] = None
    timestamp: Optional[datetime] = None


class RecordNoteUpdate(BaseModel):
    id: int
    note: Optional[str] = None


class RecordResponse(BaseModel):
    """A saved record. Decimals are serialized as exact strings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    price_btc_eur: Decimal
    rate_eur_czk: Decimal
    price_btc_czk: Decimal
    note: str

    @field_validator("timestamp")
    @classmethod
    def timestamp_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @computed_field
    @property
    def formatted_timestamp(self) -> str:
        return format_local(self.timestamp)


class RecordPage(BaseModel):
    items: List[RecordResponse]
    total: int
    page: int
    page_size: int


class RecordsDeleteResponse(BaseModel):
    deleted_count: int
    message: str
