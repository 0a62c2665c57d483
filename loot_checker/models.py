"""Core typed models shared by parser, reconciliation and serializer modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeAlias, TypedDict, TypeVar

RecordKey: TypeAlias = tuple[str, str]


@dataclass(frozen=True, slots=True)
class DataIssue:
    """Structured issue for one data line that was skipped during parsing."""

    code: str
    message: str
    line: int | None = None


@dataclass(slots=True)
class LootRecord:
    """One loot event from a Loot Logger export."""

    timestamp_utc: str
    looted_by_alliance: str
    looted_by_guild: str
    looted_by_name: str
    item_id: str
    item_name: str
    quantity: int
    looted_from_alliance: str
    looted_from_guild: str
    looted_from_name: str

    @property
    def key(self) -> RecordKey:
        """Return the `(actor, item)` key used for matching against the chest log."""

        return (self.looted_by_name, self.item_name)

    def fields(self) -> list[str]:
        """Return the field values in Loot Logger column order."""

        return [
            self.timestamp_utc,
            self.looted_by_alliance,
            self.looted_by_guild,
            self.looted_by_name,
            self.item_id,
            self.item_name,
            str(self.quantity),
            self.looted_from_alliance,
            self.looted_from_guild,
            self.looted_from_name,
        ]


@dataclass(slots=True)
class CheckRecord:
    """One deposit line from a Chest Log export.

    `date` starts in the raw `MM/DD/YYYY HH:MM:SS` form and is rewritten to
    ISO-8601 when the record survives pruning.
    """

    date: str
    player: str
    item: str
    enchantment: str
    quality: str
    amount: int

    @property
    def key(self) -> RecordKey:
        return (self.player, self.item)

    def fields(self) -> list[str]:
        return [self.date, self.player, self.item, self.enchantment, self.quality, str(self.amount)]


RecordT = TypeVar("RecordT", LootRecord, CheckRecord)


@dataclass(slots=True)
class ParseResult(Generic[RecordT]):
    """Parsed output for one log text."""

    format_name: str
    records: list[RecordT]
    issues: list[DataIssue] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        """Return the number of well-formed records."""

        return len(self.records)

    @property
    def skipped_lines(self) -> int:
        return len(self.issues)


class ReconciliationSummary(TypedDict):
    """Record counts collected while the pipeline runs."""

    loot_files: int
    loot_records_parsed: int
    check_records_parsed: int
    check_records_pruned: int
    loot_records_removed: int
    check_records_removed: int
    loot_records_remaining: int
    check_records_remaining: int


@dataclass(slots=True)
class ReconciliationResult:
    """Output of one reconciliation run: mutated collections and serialized texts."""

    loot_records: list[LootRecord]
    check_records: list[CheckRecord]
    loot_output: str
    check_output: str
    summary: ReconciliationSummary
    issues: list[DataIssue] = field(default_factory=list)
