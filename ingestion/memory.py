"""
Memory governor: evicts run caches when resident memory crosses a watermark
"""

import asyncio
import gc
import logging
from typing import Optional

import psutil

from core.config import Settings
from ingestion.context import RunContext

logger = logging.getLogger(__name__)


class MemoryGovernor:
    """
    Samples resident memory of the seeding process.

    Above the watermark, and only if no cleanup is already running, it clears
    the response cache, the existence sets and the evolution maps, requests a
    garbage collection and pauses before letting the run continue.
    """

    def __init__(
        self,
        context: RunContext,
        settings: Settings,
        process: Optional[psutil.Process] = None
    ):
        self.context = context
        self.settings = settings
        self.process = process or psutil.Process()
        self._cleaning = False

    def rss_mb(self) -> float:
        return self.process.memory_info().rss / (1024 * 1024)

    def log_memory_usage(self, label: str = "") -> float:
        usage = self.rss_mb()
        prefix = f"{label}: " if label else ""
        logger.info(
            f"{prefix}Memory usage {usage:.1f}MB "
            f"(cache entries: {len(self.context.cache)})"
        )
        return usage

    async def check_and_cleanup(self) -> bool:
        """
        Clean up if memory is above the watermark.

        Returns:
            True if a cleanup ran
        """
        if self._cleaning:
            return False

        usage = self.rss_mb()
        if usage <= self.settings.MEMORY_WATERMARK_MB:
            return False

        self._cleaning = True
        try:
            logger.warning(
                f"Memory usage {usage:.1f}MB above {self.settings.MEMORY_WATERMARK_MB}MB, "
                f"clearing caches"
            )
            self.context.clear_transient()
            gc.collect()

            await asyncio.sleep(self.settings.MEMORY_CLEANUP_PAUSE_SECONDS)
            self.log_memory_usage("After cleanup")
            await asyncio.sleep(self.settings.MEMORY_SETTLE_SECONDS)
        finally:
            self._cleaning = False

        return True
