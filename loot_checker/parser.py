"""Header-checked parsers for Loot Logger and Chest Log exports."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import EmptyInputError, HeaderMismatchError
from .models import CheckRecord, DataIssue, LootRecord, ParseResult
from .normalize import parse_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LogFormat:
    """Defines the exact header and delimiter of one log format."""

    name: str
    label: str
    delimiter: str
    columns: tuple[str, ...]
    quoted: bool = False

    @property
    def header(self) -> str:
        """Return the literal header line, quoting each column when required."""

        return self.join(self.columns)

    def join(self, values: Iterable[str]) -> str:
        """Join one line of values, quoting each value for quoted formats."""

        if self.quoted:
            return self.delimiter.join(f'"{value}"' for value in values)
        return self.delimiter.join(values)


LOOT_LOG = LogFormat(
    name="loot_log",
    label="Loot Logger",
    delimiter=";",
    columns=(
        "timestamp_utc",
        "looted_by__alliance",
        "looted_by__guild",
        "looted_by__name",
        "item_id",
        "item_name",
        "quantity",
        "looted_from__alliance",
        "looted_from__guild",
        "looted_from__name",
    ),
)

CHEST_LOG = LogFormat(
    name="chest_log",
    label="Chest Log",
    delimiter="\t",
    columns=("Date", "Player", "Item", "Enchantment", "Quality", "Amount"),
    quoted=True,
)


def _content_lines(text: str) -> list[tuple[int, str]]:
    """Return `(line_number, line)` pairs for every non-blank line.

    A trailing carriage return is dropped so CRLF exports compare equal to the
    expected header.
    """

    lines: list[tuple[int, str]] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if line.strip() == "":
            continue
        lines.append((line_number, line))
    return lines


def _data_lines(text: str, log_format: LogFormat) -> list[tuple[int, str]]:
    """Validate the header and return the remaining non-blank lines."""

    lines = _content_lines(text)
    if not lines:
        raise EmptyInputError(log_format.label)

    _, header = lines[0]
    if header != log_format.header:
        raise HeaderMismatchError(log_format.label, header)
    return lines[1:]


def _field_count_issue(line_number: int, found: int, log_format: LogFormat) -> DataIssue:
    return DataIssue(
        code="field_count_mismatch",
        message=f"Line {line_number} has {found} fields, expected {len(log_format.columns)}",
        line=line_number,
    )


def parse_loot_log(text: str) -> ParseResult[LootRecord]:
    """Parse Loot Logger text into records and per-line issues.

    Raises `EmptyInputError` or `HeaderMismatchError` for unusable input.
    Lines with the wrong field count or an invalid quantity are skipped.
    """

    records: list[LootRecord] = []
    issues: list[DataIssue] = []

    for line_number, line in _data_lines(text, LOOT_LOG):
        fields = line.split(LOOT_LOG.delimiter)
        if len(fields) != len(LOOT_LOG.columns):
            issues.append(_field_count_issue(line_number, len(fields), LOOT_LOG))
            continue

        quantity, quantity_issues = parse_count(fields[6], field="quantity", line=line_number)
        if quantity is None:
            issues.extend(quantity_issues)
            continue

        records.append(
            LootRecord(
                timestamp_utc=fields[0],
                looted_by_alliance=fields[1],
                looted_by_guild=fields[2],
                looted_by_name=fields[3],
                item_id=fields[4],
                item_name=fields[5],
                quantity=quantity,
                looted_from_alliance=fields[7],
                looted_from_guild=fields[8],
                looted_from_name=fields[9],
            )
        )

    logger.debug("Parsed %d loot records, skipped %d lines", len(records), len(issues))
    return ParseResult(format_name=LOOT_LOG.name, records=records, issues=issues)


def parse_check_log(text: str) -> ParseResult[CheckRecord]:
    """Parse Chest Log text into records and per-line issues.

    Every double quote is stripped from a data line before it is split on tabs.
    """

    records: list[CheckRecord] = []
    issues: list[DataIssue] = []

    for line_number, line in _data_lines(text, CHEST_LOG):
        fields = line.replace('"', "").split(CHEST_LOG.delimiter)
        if len(fields) != len(CHEST_LOG.columns):
            issues.append(_field_count_issue(line_number, len(fields), CHEST_LOG))
            continue

        amount, amount_issues = parse_count(fields[5], field="amount", line=line_number)
        if amount is None:
            issues.extend(amount_issues)
            continue

        records.append(
            CheckRecord(
                date=fields[0],
                player=fields[1],
                item=fields[2],
                enchantment=fields[3],
                quality=fields[4],
                amount=amount,
            )
        )

    logger.debug("Parsed %d chest log records, skipped %d lines", len(records), len(issues))
    return ParseResult(format_name=CHEST_LOG.name, records=records, issues=issues)


def parse_loot_records(text: str) -> list[LootRecord]:
    """Parse Loot Logger text and return only the well-formed records."""

    return parse_loot_log(text).records


def parse_check_records(text: str) -> list[CheckRecord]:
    """Parse Chest Log text and return only the well-formed records."""

    return parse_check_log(text).records


def merge_loot_records(record_sets: Iterable[Iterable[LootRecord]]) -> list[LootRecord]:
    """Concatenate loot record sets, keeping set order and order within each set.

    Duplicates are kept. Identical events logged by two players are resolved
    later by matching and pruning.
    """

    return [record for records in record_sets for record in records]


def read_log_text(path: str | Path) -> str:
    """Read a log export as UTF-8, dropping a leading byte-order mark.

    Undecodable bytes become U+FFFD instead of failing the run.
    """

    return Path(path).read_text(encoding="utf-8-sig", errors="replace")


def parse_loot_file(path: str | Path) -> ParseResult[LootRecord]:
    """Parse one Loot Logger export from disk."""

    return parse_loot_log(read_log_text(path))


def parse_check_file(path: str | Path) -> ParseResult[CheckRecord]:
    """Parse one Chest Log export from disk."""

    return parse_check_log(read_log_text(path))
