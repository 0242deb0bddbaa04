from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from bitcoin_tracking.core.errors import NotFoundError, ValidationError
from bitcoin_tracking.models.records import SavedRecord
from bitcoin_tracking.services.record_store import RecordStore
from bitcoin_tracking.services.validation import validate_create, validate_note_update

__all__ = ["RECORD_RESOURCE", "RecordService"]

logger = logging.getLogger(__name__)

RECORD_RESOURCE = "Record"


class RecordService:
    """Validation, logging and not-found handling on top of :class:`RecordStore`."""

    def __init__(self, db: Session, store: RecordStore | None = None) -> None:
        self.store = store or RecordStore(db)

    def list_records(self) -> List[SavedRecord]:
        records = self.store.list_all()
        logger.info("Fetched %s records", len(records))
        return records

    def get_record(self, record_id: int) -> SavedRecord:
        record = self.store.get_by_id(record_id)
        if record is None:
            logger.warning("Record with ID %s not found", record_id)
            raise NotFoundError(RECORD_RESOURCE, record_id)
        return record

    def list_page(self, page_number: int, page_size: int) -> Tuple[List[SavedRecord], int]:
        logger.info("Fetching records page %s (size %s)", page_number, page_size)
        items = self.store.list_paged(page_number, page_size)
        return items, self.store.count()

    def count_records(self) -> int:
        return self.store.count()

    def create_record(
        self,
        *,
        price_btc_eur: Optional[Decimal],
        rate_eur_czk: Optional[Decimal],
        price_btc_czk: Optional[Decimal],
        note: Optional[str],
        timestamp: Optional[datetime] = None,
    ) -> SavedRecord:
        try:
            validate_create(price_btc_eur, rate_eur_czk, price_btc_czk, note)
        except ValidationError as exc:
            logger.warning("Record validation failed: %s", exc)
            raise

        record = self.store.create(
            SavedRecord(
                timestamp=timestamp,
                price_btc_eur=price_btc_eur,
                rate_eur_czk=rate_eur_czk,
                price_btc_czk=price_btc_czk,
                note=note,
            )
        )
        logger.info("Created record with ID %s", record.id)
        return record

    def update_note(self, record_id: int, note: Optional[str]) -> None:
        try:
            validate_note_update(record_id, note)
        except ValidationError as exc:
            logger.warning("Note update validation failed for record %s: %s", record_id, exc)
            raise

        if not self.store.update_note(record_id, note):
            logger.warning("Cannot update note, record %s not found", record_id)
            raise NotFoundError(RECORD_RESOURCE, record_id)
        logger.info("Updated note for record %s", record_id)

    def delete_record(self, record_id: int) -> None:
        if not self.store.delete(record_id):
            logger.warning("Cannot delete record %s, not found", record_id)
            raise NotFoundError(RECORD_RESOURCE, record_id)
        logger.info("Deleted record %s", record_id)

    def delete_records(self, record_ids: Iterable[int]) -> int:
        ids = list(record_ids)
        if not ids:
            raise ValidationError(["No IDs provided."])
        deleted = self.store.delete_many(ids)
        logger.info("Deleted %s of %s requested records", deleted, len(ids))
        return deleted
