"""Command-line runner for loot reconciliation.

This script reads one or more Loot Logger exports and one Chest Log export,
reconciles them, and writes the missing loot and remaining chest items under
`output/` by default.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Final

from rich.logging import RichHandler

from loot_checker import FormatError, reconcile_logs
from loot_checker.models import ReconciliationResult
from loot_checker.parser import read_log_text
from loot_checker.serialize import write_output

DEFAULT_OUTPUT_DIR: Final = Path("output")
LOOT_OUTPUT_NAME: Final = "missing_loot_items.txt"
CHEST_OUTPUT_NAME: Final = "remaining_chest_items.txt"
ACCEPTED_SUFFIXES: Final[frozenset[str]] = frozenset({".txt", ".csv"})

logger = logging.getLogger(__name__)


def validate_input_paths(paths: list[Path]) -> None:
    """Reject inputs that are not `.txt` or `.csv` exports."""

    for path in paths:
        if path.suffix.lower() not in ACCEPTED_SUFFIXES:
            raise FormatError(f"Please provide valid text files (.txt or .csv): {path}")


def run(
    *,
    loot_paths: list[Path],
    chest_path: Path,
    output_dir: Path,
) -> ReconciliationResult:
    """Reconcile the given exports and write both output files."""

    validate_input_paths([*loot_paths, chest_path])
    loot_texts = [read_log_text(path) for path in loot_paths]
    chest_text = read_log_text(chest_path)

    result = reconcile_logs(
        loot_texts,
        chest_text,
        progress=lambda percent, message: logger.info("[%3d%%] %s", percent, message),
    )

    write_output(result.loot_output, output_path=output_dir / LOOT_OUTPUT_NAME)
    write_output(result.check_output, output_path=output_dir / CHEST_OUTPUT_NAME)
    return result


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a reconciliation run."""

    parser = argparse.ArgumentParser(description="Remove loot already deposited in the chest from Loot Logger exports.")
    parser.add_argument(
        "--loot",
        type=Path,
        action="append",
        required=True,
        help="Path to a Loot Logger export (repeat for several files, in order)",
    )
    parser.add_argument("--chest", type=Path, required=True, help="Path to the Chest Log export")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Directory for output files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for command-line execution."""

    args = _parse_args(argv)
    _configure_logging(args.verbose)

    try:
        result = run(loot_paths=args.loot, chest_path=args.chest, output_dir=args.output_dir)
    except (FormatError, OSError) as exc:
        logger.error("Error processing files: %s", exc)
        return 1

    summary = result.summary
    logger.info(
        "Loot records: %d parsed, %d matched, %d missing",
        summary["loot_records_parsed"],
        summary["loot_records_removed"],
        summary["loot_records_remaining"],
    )
    logger.info(
        "Chest log records: %d parsed, %d pruned, %d matched, %d remaining",
        summary["check_records_parsed"],
        summary["check_records_pruned"],
        summary["check_records_removed"],
        summary["check_records_remaining"],
    )
    for issue in result.issues:
        logger.debug("Skipped line: %s", issue.message)
    logger.info("Wrote %s and %s to %s", LOOT_OUTPUT_NAME, CHEST_OUTPUT_NAME, args.output_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
