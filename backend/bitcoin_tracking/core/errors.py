from __future__ import annotations

from enum import Enum
from typing import Iterable

__all__ = [
    "BitcoinTrackingError",
    "DuplicateNoteError",
    "ExternalErrorKind",
    "ExternalServiceError",
    "InvalidComputationError",
    "NotFoundError",
    "ValidationError",
]


class BitcoinTrackingError(Exception):
    """Base class for every business error raised by the core."""


class ExternalErrorKind(str, Enum):
    NETWORK = "network"
    HTTP_STATUS = "http-status"
    PARSE = "parse"


class ExternalServiceError(BitcoinTrackingError):
    """Raised when an upstream rate feed cannot deliver a usable value."""

    def __init__(
        self,
        service: str,
        message: str,
        *,
        kind: ExternalErrorKind,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.message = message
        self.kind = kind
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"ExternalServiceError(service={self.service!r}, kind={self.kind.value!r}, "
            f"status_code={self.status_code!r})"
        )


class ValidationError(BitcoinTrackingError):
    def __init__(self, violations: Iterable[str]) -> None:
        self.violations = list(violations)
        super().__init__(", ".join(self.violations))


class DuplicateNoteError(BitcoinTrackingError):
    def __init__(self, note: str) -> None:
        self.note = note
        super().__init__("A record with the same note already exists")


class NotFoundError(BitcoinTrackingError):
    def __init__(self, resource: str, identifier: object) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with ID {identifier} not found")


class InvalidComputationError(BitcoinTrackingError):
    """Raised when the derived price is requested for non-positive inputs."""
