# salesboard/months.py
from typing import Optional

DEFAULT_MONTH = "03"


def normalize_month(value: Optional[str]) -> str:
    """
    Normalises a raw ``month`` query value to a two-digit month code.

    Absent, non-string, empty, oversized (more than 2 characters) or non-numeric
    values fall back to ``DEFAULT_MONTH``. Anything else is zero-padded to width 2.
    The 01-12 range is not enforced: ``"99"`` passes through and matches no rows.
    """
    if not value or not isinstance(value, str) or len(value) > 2:
        return DEFAULT_MONTH
    if not (value.isascii() and value.isdigit()):
        return DEFAULT_MONTH
    return value.zfill(2)
