"""Make the source tree importable when the project is not pip-installed."""

from __future__ import annotations

import sys
from pathlib import Path

SOURCE_ROOT = Path(__file__).resolve().parent.parent

if str(SOURCE_ROOT) not in sys.path:
    # `loot_checker` and the `loot_reconcile` runner both live at the repository root.
    sys.path.insert(0, str(SOURCE_ROOT))
