from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    status_code: int
    message: str
    timestamp: datetime
