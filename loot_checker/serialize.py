"""Render record collections back to their log text formats."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .models import CheckRecord, LootRecord
from .parser import CHEST_LOG, LOOT_LOG


def serialize_loot_records(records: Iterable[LootRecord]) -> str:
    """Return Loot Logger text: header plus one semicolon-joined line per record."""

    lines = [LOOT_LOG.header]
    lines.extend(LOOT_LOG.join(record.fields()) for record in records)
    return "\n".join(lines)


def serialize_check_records(records: Iterable[CheckRecord]) -> str:
    """Return Chest Log text with every field quoted and tab-joined."""

    lines = [CHEST_LOG.header]
    lines.extend(CHEST_LOG.join(record.fields()) for record in records)
    return "\n".join(lines)


def write_output(text: str, *, output_path: Path) -> None:
    """Write serialized log text to disk, creating the parent directory."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
