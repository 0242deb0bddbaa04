from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

# enough for NUMERIC(18, s) plus sign and decimal point
SQLITE_DECIMAL_LENGTH = 40


class ExactNumeric(TypeDecorator):
    """``Numeric(precision, scale)`` that keeps every digit on SQLite.

    SQLite has no decimal storage and rounds values through a float, so
    there the quantized value is stored as text. Other backends get a
    plain ``NUMERIC``.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(SQLITE_DECIMAL_LENGTH))
        return dialect.type_descriptor(Numeric(self.impl.precision, self.impl.scale))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        value = value.quantize(Decimal(1).scaleb(-self.impl.scale), rounding=ROUND_HALF_EVEN)
        if dialect.name == "sqlite":
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(str(value))
