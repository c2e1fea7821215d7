"""
Progress ledger: per-category counters for a seeding run
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ProgressEntry:
    category: str
    completed: bool = False
    count: int = 0
    failed: int = 0
    expected_count: Optional[int] = None
    already_present: int = 0


class ProgressLedger:
    """
    Tracks processed/failed/expected counts and completion per category.

    Entries are created when a category starts, mutated while its items are
    processed and finalized when the category completes. The ledger lives
    for exactly one run.
    """

    def __init__(self):
        self._entries: Dict[str, ProgressEntry] = {}

    def start(
        self,
        category: str,
        expected_count: Optional[int] = None,
        already_present: int = 0
    ) -> ProgressEntry:
        """Create (or reset, when a category is retried) the entry for a category"""
        entry = ProgressEntry(
            category=category,
            expected_count=expected_count,
            already_present=already_present
        )
        self._entries[category] = entry
        return entry

    def get(self, category: str) -> Optional[ProgressEntry]:
        return self._entries.get(category)

    def record_success(self, category: str, count: int = 1) -> None:
        self._entry(category).count += count

    def record_failure(self, category: str, count: int = 1) -> None:
        self._entry(category).failed += count

    def complete(self, category: str) -> ProgressEntry:
        entry = self._entry(category)
        entry.completed = True
        return entry

    def entries(self) -> List[ProgressEntry]:
        return list(self._entries.values())

    def summary(self) -> str:
        entries = self.entries()
        completed = sum(1 for e in entries if e.completed)
        processed = sum(e.count for e in entries)
        failed = sum(e.failed for e in entries)
        return (
            f"Progress: {completed}/{len(entries)} categories completed, "
            f"{processed} items processed, {failed} failed"
        )

    def snapshot(self) -> Dict[str, dict]:
        return {category: asdict(entry) for category, entry in self._entries.items()}

    def _entry(self, category: str) -> ProgressEntry:
        entry = self._entries.get(category)
        if entry is None:
            entry = self.start(category)
        return entry
