from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bitcoin_tracking.core.errors import DuplicateNoteError, ValidationError
from bitcoin_tracking.models.records import SavedRecord
from bitcoin_tracking.services.validation import note_violations
from bitcoin_tracking.utils.time import as_utc, utc_now

__all__ = ["RecordStore"]


class RecordStore:
    """Persistence for saved rate snapshots.

    Each write commits on its own. Note uniqueness is left to the database
    constraint; a violation is reported as :class:`DuplicateNoteError`.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _ordered(self):
        return self.db.query(SavedRecord).order_by(
            SavedRecord.timestamp.desc(),
            SavedRecord.id.desc(),
        )

    def list_all(self) -> List[SavedRecord]:
        return self._ordered().all()

    def get_by_id(self, record_id: int) -> Optional[SavedRecord]:
        return self.db.get(SavedRecord, record_id)

    def list_paged(self, page_number: int, page_size: int) -> List[SavedRecord]:
        if page_number < 1 or page_size < 1:
            raise ValidationError(["Page number and page size must be at least 1."])
        return self._ordered().offset((page_number - 1) * page_size).limit(page_size).all()

    def count(self) -> int:
        return self.db.query(SavedRecord).count()

    def exists(self, record_id: int) -> bool:
        return bool(self.db.query(exists().where(SavedRecord.id == record_id)).scalar())

    def create(self, record: SavedRecord) -> SavedRecord:
        # SQLite drops the offset, so every instant is written as UTC
        if record.timestamp is None:
            record.timestamp = utc_now()
        else:
            record.timestamp = as_utc(record.timestamp)

        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            self._raise_if_duplicate(record.note, exc)
            raise
        self.db.refresh(record)
        return record

    def update_note(self, record_id: int, note: Optional[str]) -> bool:
        record = self.get_by_id(record_id)
        if record is None:
            return False

        note = note or ""
        violations = note_violations(note)
        if violations:
            raise ValidationError(violations)

        record.note = note
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            self._raise_if_duplicate(note, exc, exclude_id=record_id)
            raise
        return True

    def delete(self, record_id: int) -> bool:
        record = self.get_by_id(record_id)
        if record is None:
            return False

        self.db.delete(record)
        self.db.commit()
        return True

    def delete_many(self, record_ids: Iterable[int]) -> int:
        ids = set(record_ids)
        if not ids:
            return 0

        deleted = (
            self.db.query(SavedRecord)
            .filter(SavedRecord.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    def _raise_if_duplicate(
        self,
        note: Optional[str],
        exc: IntegrityError,
        exclude_id: Optional[int] = None,
    ) -> None:
        query = self.db.query(SavedRecord.id).filter(SavedRecord.note == note)
        if exclude_id is not None:
            query = query.filter(SavedRecord.id != exclude_id)
        if query.first() is not None:
            raise DuplicateNoteError(note or "") from exc
