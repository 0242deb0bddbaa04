from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, UniqueConstraint

from .base import Base
from .types import ExactNumeric

MAX_NOTE_LENGTH = 500


class SavedRecord(Base):
    __tablename__ = "bitcoin_records"
    __table_args__ = (
        UniqueConstraint("note", name="uq_bitcoin_records_note"),
        Index("ix_bitcoin_records_timestamp", "timestamp"),
    )

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    price_btc_eur = Column(ExactNumeric(18, 2), nullable=False)
    rate_eur_czk = Column(ExactNumeric(18, 4), nullable=False)
    price_btc_czk = Column(ExactNumeric(18, 2), nullable=False)
    note = Column(String(MAX_NOTE_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"SavedRecord(id={self.id!r}, timestamp={self.timestamp!r}, note={self.note!r})"
