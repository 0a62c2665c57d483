"""End-to-end reconciliation of raw log texts.

The caller supplies already-read text for each Loot Logger export, in order,
and for the single Chest Log export.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeAlias

from .models import DataIssue, ReconciliationResult
from .parser import merge_loot_records, parse_check_log, parse_loot_log
from .reconcile import match_and_reduce, prune_stale
from .serialize import serialize_check_records, serialize_loot_records

logger = logging.getLogger(__name__)

ProgressFn: TypeAlias = Callable[[int, str], None]


def _no_progress(percent: int, message: str) -> None:
    return None


def reconcile_logs(
    loot_texts: Sequence[str],
    check_text: str,
    *,
    progress: ProgressFn | None = None,
) -> ReconciliationResult:
    """Parse, merge, prune, match and serialize one set of exports.

    Parse errors propagate to the caller and no partial result is returned.
    """

    if not loot_texts:
        raise ValueError("At least one Loot Logger file is required")
    report = progress or _no_progress

    report(10, "Parsing files...")
    loot_results = [parse_loot_log(text) for text in loot_texts]
    check_result = parse_check_log(check_text)

    report(30, "Merging Loot Logger files...")
    loot_records = merge_loot_records(result.records for result in loot_results)

    report(40, "Processing Chest Log...")
    check_records = check_result.records
    loot_parsed = len(loot_records)
    check_parsed = len(check_records)

    report(60, "Pruning old timestamps...")
    pruned = prune_stale(loot_records, check_records)

    report(80, "Matching and reducing quantities...")
    loot_removed, check_removed = match_and_reduce(loot_records, check_records)

    report(90, "Generating output files...")
    loot_output = serialize_loot_records(loot_records)
    check_output = serialize_check_records(check_records)

    issues: list[DataIssue] = [issue for result in loot_results for issue in result.issues]
    issues.extend(check_result.issues)

    report(100, "Complete!")
    logger.debug("Reconciliation finished with %d skipped lines", len(issues))

    return ReconciliationResult(
        loot_records=loot_records,
        check_records=check_records,
        loot_output=loot_output,
        check_output=check_output,
        summary={
            "loot_files": len(loot_texts),
            "loot_records_parsed": loot_parsed,
            "check_records_parsed": check_parsed,
            "check_records_pruned": pruned,
            "loot_records_removed": loot_removed,
            "check_records_removed": check_removed,
            "loot_records_remaining": len(loot_records),
            "check_records_remaining": len(check_records),
        },
        issues=issues,
    )
