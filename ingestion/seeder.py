"""
Resumable generic seeding procedure with per-category timeout and retry
"""

import asyncio
from typing import Any, List, Optional

from core.config import Settings
from core.exceptions import CategorySeedingError, MissingRelationshipError
from ingestion.base import SeedProcessor
from ingestion.context import RunContext
from ingestion.crawler import ResourceCrawler
from ingestion.memory import MemoryGovernor
from ingestion.progress import ProgressEntry
from ingestion.transport import Strategy
from models.base import SeedMode
from schemas.resources import NamedResource
import logging

logger = logging.getLogger(__name__)


class GenericSeeder:
    """
    Runs one processor over its whole collection.

    Steps per attempt:
    1. Crawl the endpoint
    2. Drop references whose id is already materialized; short-circuit if none remain
    3. Process the rest, batched-parallel (premium) or sequentially (standard)
    4. Run the processor's post-pass with the non-null results
    5. Mark the category completed

    Each attempt is bounded by a timeout; failed attempts are retried with
    linearly increasing backoff and a memory check in between.
    """

    def __init__(
        self,
        context: RunContext,
        crawler: ResourceCrawler,
        governor: MemoryGovernor,
        settings: Settings
    ):
        self.context = context
        self.crawler = crawler
        self.governor = governor
        self.settings = settings

    async def seed(self, processor: SeedProcessor, mode: SeedMode) -> ProgressEntry:
        """
        Seed one category.

        Raises:
            CategorySeedingError: Every attempt failed or timed out
        """
        category = processor.category
        timeout = processor.timeout_seconds or self.settings.SEED_TIMEOUT_SECONDS
        max_retries = (
            processor.max_retries
            if processor.max_retries is not None
            else self.settings.SEED_MAX_RETRIES
        )
        attempts = max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(self._seed_once(processor, mode), timeout)
            except Exception as e:
                reason = (
                    f"timed out after {timeout}s"
                    if isinstance(e, asyncio.TimeoutError)
                    else f"{type(e).__name__}: {e}"
                )

                if attempt >= attempts:
                    logger.error(f"{category} failed after {attempts} attempts: {reason}")
                    raise CategorySeedingError(
                        f"Seeding {category} failed after {attempts} attempts",
                        context={"category": category, "attempts": attempts, "reason": reason},
                        original_exception=e
                    )

                backoff = self.settings.SEED_RETRY_BACKOFF_SECONDS * attempt
                logger.warning(
                    f"{category} attempt {attempt}/{attempts} {reason}. "
                    f"Retrying in {backoff}s"
                )
                await asyncio.sleep(backoff)
                await self.governor.check_and_cleanup()

    async def _seed_once(self, processor: SeedProcessor, mode: SeedMode) -> ProgressEntry:
        category = processor.category
        ledger = self.context.ledger
        self.context.known_ids.clear()

        logger.info(f"Seeding {category} ({mode.value} mode)")

        references = await self.crawler.crawl(processor.endpoint, Strategy.for_mode(mode))
        pending = [ref for ref in references if ref.id is not None]
        if len(pending) < len(references):
            logger.warning(
                f"{category}: skipping {len(references) - len(pending)} references without an id"
            )

        existing = await processor.existing_ids()
        if existing is not None:
            pending = [ref for ref in pending if ref.id not in existing]
            already_present = len(references) - len(pending)
            entry = ledger.start(
                category,
                expected_count=len(references),
                already_present=already_present
            )
            logger.info(
                f"{category}: {already_present}/{len(references)} already present, "
                f"{len(pending)} to process"
            )
            if not pending:
                ledger.complete(category)
                logger.info(f"{category} already complete, skipping")
                return entry
        else:
            entry = ledger.start(category, expected_count=len(references))

        if mode == SeedMode.STANDARD or processor.sequential_only:
            results = await self._process_sequential(processor, pending, mode)
        else:
            results = await self._process_batched(processor, pending, mode)

        self.context.known_ids.clear()
        await processor.post_process(results)

        ledger.complete(category)
        logger.info(
            f"Completed {category}: {entry.count} processed, {entry.failed} failed"
        )
        return entry

    async def _process_batched(
        self,
        processor: SeedProcessor,
        pending: List[NamedResource],
        mode: SeedMode
    ) -> List[Any]:
        batch_size = processor.batch_size or self.settings.BATCH_SIZE
        interval = max(1, processor.progress_log_interval)
        results: List[Any] = []

        for start in range(0, len(pending), batch_size):
            batch = pending[start:start + batch_size]
            outcomes = await asyncio.gather(
                *(self._process_one(processor, ref, mode) for ref in batch)
            )
            results.extend(outcome for outcome in outcomes if outcome is not None)

            done = start + len(batch)
            if done // interval > start // interval or done == len(pending):
                self._log_progress(processor, done, len(pending))

        return results

    async def _process_sequential(
        self,
        processor: SeedProcessor,
        pending: List[NamedResource],
        mode: SeedMode
    ) -> List[Any]:
        interval = max(1, processor.progress_log_interval // 5)
        results: List[Any] = []

        for index, ref in enumerate(pending, start=1):
            outcome = await self._process_one(processor, ref, mode)
            if outcome is not None:
                results.append(outcome)

            if index % interval == 0 or index == len(pending):
                self._log_progress(processor, index, len(pending))

            if processor.memory_check_interval and index % processor.memory_check_interval == 0:
                await self.governor.check_and_cleanup()

        return results

    async def _process_one(
        self,
        processor: SeedProcessor,
        ref: NamedResource,
        mode: SeedMode
    ) -> Optional[Any]:
        """Process one reference; failures are counted, never propagated"""
        category = processor.category
        try:
            result = await processor.process_item(ref, mode)
        except MissingRelationshipError as e:
            self.context.ledger.record_failure(category)
            logger.warning(f"Skipped {category} {ref.name}: {e.message}")
            return None
        except Exception as e:
            self.context.ledger.record_failure(category)
            logger.error(f"Failed to process {category} {ref.name}: {e}")
            return None

        self.context.ledger.record_success(category)
        return result

    def _log_progress(self, processor: SeedProcessor, done: int, total: int) -> None:
        entry = self.context.ledger.get(processor.category)
        failed = entry.failed if entry else 0
        logger.info(f"{processor.category}: {done}/{total} processed ({failed} failed)")
