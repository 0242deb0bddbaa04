from __future__ import annotations

from bitcoin_tracking.models.base import Base
from bitcoin_tracking.models.records import SavedRecord  # noqa: F401

__all__ = ["Base"]
