# pos_app/core/money.py
from decimal import Decimal
from typing import Any


def to_decimal(value: Any) -> Decimal:
    """
    Convert a numeric value coming back from PostgREST into a Decimal.

    Postgres `numeric` arrives as int, float or string depending on the
    column and client; going through `str()` keeps floats like 0.1 exact
    as written instead of their binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_wire(value: Decimal) -> str:
    """Serialize a Decimal for a JSON insert into a numeric column."""
    return format(value, "f")
