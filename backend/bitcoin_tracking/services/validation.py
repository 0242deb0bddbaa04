from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from bitcoin_tracking.core.errors import ValidationError
from bitcoin_tracking.models.records import MAX_NOTE_LENGTH

__all__ = [
    "create_violations",
    "note_violations",
    "update_violations",
    "validate_create",
    "validate_note_update",
]


def _is_positive(value: Optional[Decimal]) -> bool:
    return value is not None and value > 0


def note_violations(note: Optional[str]) -> List[str]:
    if note is None or not note.strip():
        return ["Note is required."]
    if len(note) > MAX_NOTE_LENGTH:
        return [f"Note must be at most {MAX_NOTE_LENGTH} characters long."]
    return []


def create_violations(
    price_btc_eur: Optional[Decimal],
    rate_eur_czk: Optional[Decimal],
    price_btc_czk: Optional[Decimal],
    note: Optional[str],
) -> List[str]:
    violations: List[str] = []
    if not _is_positive(price_btc_eur):
        violations.append("Bitcoin price in EUR must be greater than 0.")
    if not _is_positive(rate_eur_czk):
        violations.append("EUR/CZK exchange rate must be greater than 0.")
    if not _is_positive(price_btc_czk):
        violations.append("Bitcoin price in CZK must be greater than 0.")
    violations.extend(note_violations(note))
    return violations


def update_violations(record_id: Optional[int], note: Optional[str]) -> List[str]:
    violations: List[str] = []
    if record_id is None or record_id <= 0:
        violations.append("Record ID must be greater than 0.")
    violations.extend(note_violations(note))
    return violations


def validate_create(
    price_btc_eur: Optional[Decimal],
    rate_eur_czk: Optional[Decimal],
    price_btc_czk: Optional[Decimal],
    note: Optional[str],
) -> None:
    violations = create_violations(price_btc_eur, rate_eur_czk, price_btc_czk, note)
    if violations:
        raise ValidationError(violations)


def validate_note_update(record_id: Optional[int], note: Optional[str]) -> None:
    violations = update_violations(record_id, note)
    if violations:
        raise ValidationError(violations)
