# path: src/runtime/report.py
"""
Run report for a single extraction run.

Collects every non-fatal problem encountered while loading mods and
normalizing the data tree, so that one malformed package or recipe never
hides the rest of the output.

This module defines:
- SkipReason (why something was skipped)
- SkipRecord (one skipped package / resource / recipe)
- RunReport (ordered collection + summary helpers)

Records are JSON-serializable via `.to_dict()`, mirroring the other
report-ish dataclasses in this code base.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


# ============================================================
# Skip reasons
# ============================================================

class SkipReason(Enum):
    """Non-fatal failure categories surfaced to the user."""

    # Data-tree normalization (per recipe entry)
    MISSING_NAME = "missing_name"
    INVALID_ITEM_SHAPE = "invalid_item_shape"

    # Script execution (per package)
    DATA_EXECUTION_FAILED = "data_execution_failed"
    SETTINGS_EXECUTION_FAILED = "settings_execution_failed"
    PATCH_EXECUTION_FAILED = "patch_execution_failed"

    # Storage (per package / file)
    MANIFEST_UNREADABLE = "manifest_unreadable"
    LOCALE_UNREADABLE = "locale_unreadable"


@dataclass
class SkipRecord:
    """
    One skipped unit of work.

    - reason: SkipReason category
    - subject: what was skipped (package name, recipe key, file path)
    - detail: human-readable cause, usually the exception text
    """
    reason: SkipReason
    subject: str
    detail: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reason"] = self.reason.value
        return data

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason.value}: {self.subject} ({self.detail})"
        return f"{self.reason.value}: {self.subject}"


@dataclass
class RunReport:
    """
    Ordered collection of SkipRecords plus the final recipe count.
    """
    skipped: List[SkipRecord] = field(default_factory=list)
    recipe_count: int = 0

    def record(self, reason: SkipReason, subject: str, detail: str = "") -> SkipRecord:
        """Append a SkipRecord and log it at WARNING level."""
        rec = SkipRecord(reason=reason, subject=subject, detail=detail)
        self.skipped.append(rec)
        logger.warning("Skipped %s", rec)
        return rec

    def by_reason(self, reason: SkipReason) -> List[SkipRecord]:
        return [r for r in self.skipped if r.reason is reason]

    def reason_counts(self) -> Dict[str, int]:
        """Return {reason_value: count} for summary output."""
        counts = Counter(r.reason.value for r in self.skipped)
        return dict(sorted(counts.items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipe_count": self.recipe_count,
            "skipped": [r.to_dict() for r in self.skipped],
        }


__all__ = [
    "SkipReason",
    "SkipRecord",
    "RunReport",
]
