from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

CENT = Decimal("0.01")


def capitalize_gender(value: Optional[str]) -> str:
    """Display form of a stored gender; "-" when unknown"""
    if not value:
        return "-"
    lowered = value.lower()
    return lowered[0].upper() + lowered[1:]


def next_code(prefix: str, n: int, width: int = 4) -> str:
    """next_code("PAT", 7) -> "PAT-0007" """
    return f"{prefix}-{str(n).zfill(width)}"


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def money(value: Any) -> Decimal:
    """Round to cents"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
