"""Public API exports for the loot log parsers and reconciliation helpers."""

from .errors import EmptyInputError, FormatError, HeaderMismatchError
from .models import CheckRecord, DataIssue, LootRecord, ParseResult, ReconciliationResult, ReconciliationSummary
from .normalize import to_iso8601
from .parser import (
    CHEST_LOG,
    LOOT_LOG,
    merge_loot_records,
    parse_check_file,
    parse_check_log,
    parse_check_records,
    parse_loot_file,
    parse_loot_log,
    parse_loot_records,
)
from .pipeline import reconcile_logs
from .reconcile import match_and_reduce, prune_stale
from .serialize import serialize_check_records, serialize_loot_records

__all__ = [
    "CHEST_LOG",
    "CheckRecord",
    "DataIssue",
    "EmptyInputError",
    "FormatError",
    "HeaderMismatchError",
    "LOOT_LOG",
    "LootRecord",
    "ParseResult",
    "ReconciliationResult",
    "ReconciliationSummary",
    "match_and_reduce",
    "merge_loot_records",
    "parse_check_file",
    "parse_check_log",
    "parse_check_records",
    "parse_loot_file",
    "parse_loot_log",
    "parse_loot_records",
    "prune_stale",
    "reconcile_logs",
    "serialize_check_records",
    "serialize_loot_records",
    "to_iso8601",
]
