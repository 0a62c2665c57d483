"""Field-level normalization helpers used by log parsing and pruning."""

from __future__ import annotations

import re

from .errors import FormatError
from .models import DataIssue

# Counts wider than a signed 64-bit integer are rejected like any other bad value.
_COUNT_RE = re.compile(r"[0-9]{1,18}")


def parse_count(value: str, *, field: str, line: int | None = None) -> tuple[int | None, list[DataIssue]]:
    """Parse a quantity/amount column as a non-negative integer.

    Returns `None` with an `invalid_quantity` issue for non-numeric, fractional,
    negative or overlong values so the caller can skip the line.
    """

    cleaned = value.strip()
    if _COUNT_RE.fullmatch(cleaned):
        return int(cleaned), []

    return None, [
        DataIssue(
            code="invalid_quantity",
            message=f"{field} is not a non-negative integer: {value!r}",
            line=line,
        )
    ]


def to_iso8601(value: str) -> str:
    """Convert a chest log `M/D/YYYY HH:MM:SS` date to `YYYY-MM-DDTHH:MM:SS.000Z`.

    Month and day may be unpadded. The time part is copied as-is.
    """

    parts = value.split(" ")
    if len(parts) != 2:
        raise FormatError(f"Date is not in 'MM/DD/YYYY HH:MM:SS' format: {value!r}")
    date_part, time_part = parts

    date_fields = date_part.split("/")
    if len(date_fields) != 3:
        raise FormatError(f"Date part is not in 'MM/DD/YYYY' format: {value!r}")
    month, day, year = date_fields

    return f"{year}-{month.zfill(2)}-{day.zfill(2)}T{time_part}.000Z"
