"""Reconciliation of Loot Logger records against a Chest Log.

Both operations mutate the lists passed in so callers holding a reference see
the surviving records.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from .models import CheckRecord, LootRecord, RecordKey
from .normalize import to_iso8601

logger = logging.getLogger(__name__)


def latest_timestamp(loot_records: list[LootRecord]) -> str | None:
    """Return the lexically greatest `timestamp_utc`, or None for no records."""

    if not loot_records:
        return None
    return max(record.timestamp_utc for record in loot_records)


def prune_stale(loot_records: list[LootRecord], check_records: list[CheckRecord]) -> int:
    """Drop chest log records older than the latest loot timestamp.

    Surviving records get their `date` rewritten to ISO-8601. With no loot
    records nothing is touched. Returns the number of removed check records.
    """

    latest = latest_timestamp(loot_records)
    if latest is None:
        logger.debug("No loot records, skipping timestamp pruning")
        return 0

    survivors: list[CheckRecord] = []
    for record in check_records:
        iso_date = to_iso8601(record.date)
        if iso_date < latest:
            continue
        record.date = iso_date
        survivors.append(record)

    removed = len(check_records) - len(survivors)
    check_records[:] = survivors
    logger.debug("Pruned %d chest log records older than %s", removed, latest)
    return removed


def index_check_records(check_records: list[CheckRecord]) -> dict[RecordKey, list[int]]:
    """Group check record positions by `(player, item)`, in collection order."""

    buckets: defaultdict[RecordKey, list[int]] = defaultdict(list)
    for index, record in enumerate(check_records):
        buckets[record.key].append(index)
    return dict(buckets)


def match_and_reduce(loot_records: list[LootRecord], check_records: list[CheckRecord]) -> tuple[int, int]:
    """Offset loot quantities against chest log amounts sharing the same key.

    Loot records are processed in order. Each consumes its bucket's check
    records first-in-first-consumed and stops as soon as its quantity is
    covered, leaving later entries for later loot records. A loot record that
    is fully covered is removed; otherwise its `quantity` becomes what is
    left. A check record reaching zero is removed.

    Zero-quantity loot records are removed only when their key has a bucket.
    Zero-amount check records are removed when a walk reaches them.

    Returns `(loot_removed, check_removed)`.
    """

    buckets = index_check_records(check_records)
    loot_removals: set[int] = set()
    check_removals: set[int] = set()

    for loot_index, loot in enumerate(loot_records):
        bucket = buckets.get(loot.key)
        if bucket is None:
            continue

        remaining = loot.quantity
        for check_index in bucket:
            if remaining <= 0:
                break
            entry = check_records[check_index]
            consumed = min(remaining, entry.amount)
            entry.amount -= consumed
            remaining -= consumed
            if entry.amount == 0:
                check_removals.add(check_index)

        if remaining == 0:
            loot_removals.add(loot_index)
        else:
            loot.quantity = remaining

    loot_records[:] = [record for index, record in enumerate(loot_records) if index not in loot_removals]
    check_records[:] = [record for index, record in enumerate(check_records) if index not in check_removals]

    logger.debug(
        "Matched loot against chest log: removed %d loot records and %d chest log records",
        len(loot_removals),
        len(check_removals),
    )
    return len(loot_removals), len(check_removals)
