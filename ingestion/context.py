"""
Run context shared by every component of one seeding run
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Set

from core.config import Settings
from ingestion.cache import ResponseCache
from ingestion.progress import ProgressLedger


@dataclass
class SeedingStats:
    """Run-wide request counters and append-only error log"""
    total_requests: int = 0
    failed_requests: int = 0
    start_time: datetime = field(default_factory=datetime.utcnow)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def record_error(self, url: str, error: Any) -> None:
        self.errors.append({
            "url": url,
            "error": str(error),
            "timestamp": datetime.utcnow().isoformat(),
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_requests": self.total_requests,
            "failed_requests": self.failed_requests,
            "start_time": self.start_time.isoformat(),
            "duration_seconds": (datetime.utcnow() - self.start_time).total_seconds(),
            "error_count": len(self.errors),
        }


@dataclass
class RunContext:
    """
    Mutable state scoped to one run.

    Attributes:
        settings: Static configuration for the run
        cache: Response cache shared by both transport strategies
        ledger: Progress ledger
        stats: Request counters and error log
        evolution_mappings: species id -> evolves-from species id
        evolution_chain_mappings: species id -> evolution chain id
        known_ids: Existence sets per entity kind, loaded lazily by the upsert engine
        lineages: Resolved evolution lineages (chain id -> species ids)
    """
    settings: Settings
    cache: ResponseCache = field(default_factory=ResponseCache)
    ledger: ProgressLedger = field(default_factory=ProgressLedger)
    stats: SeedingStats = field(default_factory=SeedingStats)
    evolution_mappings: Dict[int, int] = field(default_factory=dict)
    evolution_chain_mappings: Dict[int, int] = field(default_factory=dict)
    known_ids: Dict[Any, Set[int]] = field(default_factory=dict)
    lineages: Dict[int, List[int]] = field(default_factory=dict)

    def clear_transient(self) -> None:
        """Drop everything that can be rebuilt or is only an optimization"""
        self.cache.clear()
        self.known_ids.clear()
        self.evolution_mappings.clear()
        self.evolution_chain_mappings.clear()
