# ============================================================================
# File: ingestion/runner.py
# Description: Seeding orchestrator running every phase in dependency order
# ============================================================================
"""
Seed Runner - Orchestrates the catalog seeding pipeline.

This module provides the run loop with:
- Phases executed strictly in dependency order with pacing in between
- Per-category timeout/retry through the generic seeder
- Phase hooks (id-0 meta defaults, type matrix completion)
- A seed_runs audit row per run
- Structured result instead of process exit
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from core.config import Settings, settings as default_settings
from core.database import check_connection, create_engine, create_session_factory
from core.exceptions import CategorySeedingError, SeedingError
from ingestion.base import SeedProcessor
from ingestion.context import RunContext
from ingestion.crawler import ResourceCrawler
from ingestion.loaders.upsert import UpsertEngine
from ingestion.memory import MemoryGovernor
from ingestion.oracle import ExistingIdOracle
from ingestion.processors import (
    AbilityProcessor,
    BerryFirmnessProcessor,
    BerryFlavorProcessor,
    BerryProcessor,
    CharacteristicProcessor,
    ContestEffectProcessor,
    ContestTypeProcessor,
    EggGroupProcessor,
    EncounterConditionProcessor,
    EncounterMethodProcessor,
    EvolutionChainProcessor,
    EvolutionTriggerProcessor,
    GenderProcessor,
    GenderSpeciesAssociationProcessor,
    GenerationProcessor,
    GrowthRateProcessor,
    ItemAttributeProcessor,
    ItemCategoryProcessor,
    ItemFlingEffectProcessor,
    ItemPocketProcessor,
    ItemProcessor,
    LanguageProcessor,
    LocationAreaProcessor,
    LocationProcessor,
    MachineProcessor,
    MoveAilmentProcessor,
    MoveBattleStyleProcessor,
    MoveCategoryProcessor,
    MoveDamageClassProcessor,
    MoveLearnMethodProcessor,
    MoveProcessor,
    MoveTargetProcessor,
    NatureProcessor,
    PalParkAreaProcessor,
    PokeathlonStatProcessor,
    PokedexProcessor,
    PokemonColorProcessor,
    PokemonHabitatProcessor,
    PokemonProcessor,
    PokemonShapeProcessor,
    PokemonSpeciesProcessor,
    PokemonSpeciesVarietyProcessor,
    RegionProcessor,
    StatProcessor,
    SuperContestEffectProcessor,
    TypeProcessor,
    VersionGroupProcessor,
    ensure_default_meta_ailment,
    ensure_default_meta_category,
)
from ingestion.seeder import GenericSeeder
from ingestion.transport import Transport
from ingestion.type_matrix import TypeMatrixCompleter
from models.ability import Ability
from models.base import RunStatus, SeedMode
from models.item import Item
from models.language import Generation, Language, Region
from models.location import Location, PokemonEncounter
from models.move import Move
from models.pokemon import Pokemon
from models.seed_run import SeedRun
from models.species import PokemonSpecies
from models.types import Type as PokemonTypeModel
import logging

logger = logging.getLogger(__name__)

PhaseHook = Callable[["SeedRunner"], Awaitable[Any]]


@dataclass
class Phase:
    """A group of categories seeded one after another"""
    name: str
    processors: Sequence[Type[SeedProcessor]]
    before: Optional[PhaseHook] = None
    after: Optional[PhaseHook] = None


async def _ensure_meta_category(runner: "SeedRunner") -> None:
    await ensure_default_meta_category(runner.upsert_engine)


async def _ensure_move_defaults(runner: "SeedRunner") -> None:
    await ensure_default_meta_ailment(runner.upsert_engine)
    await ensure_default_meta_category(runner.upsert_engine)


async def _complete_type_matrix(runner: "SeedRunner") -> int:
    return await TypeMatrixCompleter(runner.upsert_engine).complete()


PHASES: List[Phase] = [
    Phase("foundation", [
        LanguageProcessor,
        RegionProcessor,
        GenerationProcessor,
        VersionGroupProcessor,
    ]),
    Phase("supplementary", [
        MoveDamageClassProcessor,
        MoveTargetProcessor,
        StatProcessor,
        MoveLearnMethodProcessor,
        EggGroupProcessor,
        GrowthRateProcessor,
        PokemonColorProcessor,
        PokemonShapeProcessor,
        PokemonHabitatProcessor,
        BerryFlavorProcessor,
        BerryFirmnessProcessor,
        MoveAilmentProcessor,
        MoveCategoryProcessor,
        ContestTypeProcessor,
        ContestEffectProcessor,
        SuperContestEffectProcessor,
        MoveBattleStyleProcessor,
    ], after=_ensure_meta_category),
    Phase("item supplementary", [
        ItemPocketProcessor,
        ItemCategoryProcessor,
        ItemFlingEffectProcessor,
    ]),
    Phase("types", [TypeProcessor], after=_complete_type_matrix),
    Phase("abilities", [AbilityProcessor]),
    Phase("moves", [MoveProcessor], before=_ensure_move_defaults),
    Phase("items", [
        ItemProcessor,
        MachineProcessor,
        ItemAttributeProcessor,
    ]),
    Phase("berries, natures and stats", [
        BerryProcessor,
        PokeathlonStatProcessor,
        NatureProcessor,
        CharacteristicProcessor,
        GenderProcessor,
    ]),
    Phase("locations", [
        LocationProcessor,
        LocationAreaProcessor,
        PalParkAreaProcessor,
    ]),
    Phase("encounter and evolution vocabularies", [
        EncounterConditionProcessor,
        EncounterMethodProcessor,
        EvolutionTriggerProcessor,
    ]),
    Phase("species", [
        PokemonSpeciesProcessor,
        EvolutionChainProcessor,
        PokedexProcessor,
    ]),
    Phase("pokemon", [
        PokemonProcessor,
        PokemonSpeciesVarietyProcessor,
        GenderSpeciesAssociationProcessor,
    ]),
]

STATISTIC_MODELS = {
    "languages": Language,
    "generations": Generation,
    "regions": Region,
    "types": PokemonTypeModel,
    "abilities": Ability,
    "moves": Move,
    "items": Item,
    "species": PokemonSpecies,
    "pokemon": Pokemon,
    "locations": Location,
    "encounters": PokemonEncounter,
}


class SeedRunner:
    """
    Seeding Orchestrator

    Responsibilities:
    - Build the run context and every component of one run
    - Run all phases in order, pacing between them
    - Treat an exhausted category as fatal for the run
    - Capture stray task exceptions into the error log
    - Always release the transport and clear the cache
    - Record the run in seed_runs and return a result mapping
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[async_sessionmaker] = None,
        db_engine: Optional[AsyncEngine] = None,
        mode: Optional[SeedMode] = None,
        phases: Optional[Sequence[Phase]] = None,
        transport: Optional[Transport] = None,
        governor: Optional[MemoryGovernor] = None
    ):
        self.settings = settings or default_settings
        self.mode = mode or SeedMode(self.settings.SEED_MODE.lower())
        self.phases = list(PHASES if phases is None else phases)

        self._owns_engine = session_factory is None and db_engine is None
        self.db_engine = db_engine or (
            create_engine(self.settings.DATABASE_URL) if session_factory is None else None
        )
        self.session_factory = session_factory or create_session_factory(self.db_engine)

        self.context = RunContext(settings=self.settings)
        self.transport = transport or Transport(self.settings, self.context)
        self.crawler = ResourceCrawler(self.transport, self.settings)
        self.governor = governor or MemoryGovernor(self.context, self.settings)
        self.oracle = ExistingIdOracle(self.session_factory)
        self.upsert_engine = UpsertEngine(self.session_factory, self.context, self.oracle)
        self.seeder = GenericSeeder(self.context, self.crawler, self.governor, self.settings)

    def build_processor(self, processor_class: Type[SeedProcessor]) -> SeedProcessor:
        return processor_class(self.context, self.transport, self.upsert_engine, self.oracle)

    async def run(self) -> Dict[str, Any]:
        """
        Run the full seeding pipeline.

        Returns:
            Dictionary with run results:
            - status: "success", "partial" or "failed"
            - summary: Progress summary line
            - progress: Per-category ledger snapshot
            - stats: Request counters
            - errors: Error log entries
            - statistics: Row counts after seeding (when the run got that far)
        """
        loop = asyncio.get_running_loop()
        previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(self._handle_loop_exception)

        status = RunStatus.FAILED
        error_message: Optional[str] = None
        statistics: Dict[str, int] = {}
        seed_run_id: Optional[int] = None

        logger.info("=" * 60)
        logger.info(f"Starting catalog seeding ({self.mode.value} mode)")
        logger.info("=" * 60)

        try:
            if self.db_engine is not None:
                await check_connection(self.db_engine)
            seed_run_id = await self._start_seed_run()

            await self.log_model_statistics("Before seeding")
            self.governor.log_memory_usage("Start")

            for index, phase in enumerate(self.phases):
                if index > 0:
                    await asyncio.sleep(self.settings.PHASE_DELAY_SECONDS)
                await self.run_phase(phase)

            statistics = await self.log_model_statistics("After seeding")
            failed_items = sum(entry.failed for entry in self.context.ledger.entries())
            status = RunStatus.SUCCESS if failed_items == 0 else RunStatus.PARTIAL

        except CategorySeedingError as e:
            error_message = e.message
            logger.error(
                f"Seeding aborted: {e.message}",
                extra={"error_context": e.to_dict()}
            )

        except SeedingError as e:
            error_message = e.message
            logger.error(
                f"Seeding failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )

        except Exception as e:
            error_message = str(e)
            logger.exception("Unexpected error in seeding pipeline")

        finally:
            await self.transport.aclose()
            self.context.cache.clear()
            loop.set_exception_handler(previous_handler)

        if error_message:
            self.context.stats.errors.append({
                "url": None,
                "error": error_message,
                "timestamp": datetime.utcnow().isoformat(),
            })

        if seed_run_id is not None:
            await self._complete_seed_run(seed_run_id, status, error_message)

        if self._owns_engine and self.db_engine is not None:
            await self.db_engine.dispose()

        summary = self.context.ledger.summary()
        result = {
            "status": status.value,
            "summary": summary,
            "progress": self.context.ledger.snapshot(),
            "stats": self.context.stats.to_dict(),
            "errors": list(self.context.stats.errors),
            "statistics": statistics,
        }

        logger.info("=" * 60)
        logger.info(f"Seeding finished: {status.value}")
        logger.info(
            f"Requests: {self.context.stats.total_requests} total, "
            f"{self.context.stats.failed_requests} failed"
        )
        logger.info(summary)
        return result

    async def run_phase(self, phase: Phase) -> None:
        # --------------------------------------------------
        # PHASE: one dependency level of the catalog
        # --------------------------------------------------
        logger.info(f"--- Phase: {phase.name} ---")

        if phase.before is not None:
            await phase.before(self)

        for processor_class in phase.processors:
            processor = self.build_processor(processor_class)
            await self.seeder.seed(processor, self.mode)

        if phase.after is not None:
            await phase.after(self)

        self.governor.log_memory_usage(f"After {phase.name}")

    async def log_model_statistics(self, label: str) -> Dict[str, int]:
        counts = {}
        for name, model in STATISTIC_MODELS.items():
            counts[name] = await self.upsert_engine.count(model)

        logger.info(f"{label}: " + ", ".join(f"{name}={count}" for name, count in counts.items()))
        return counts

    # ------------------------------------------------------------------
    # Uncaught task errors
    # ------------------------------------------------------------------

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exception = context.get("exception")
        message = context.get("message", "Unhandled exception in event loop")
        detail = f"{message}: {exception!r}" if exception is not None else message

        logger.error(f"Uncaught error during seeding: {detail}")
        self.context.stats.errors.append({
            "url": None,
            "error": detail,
            "timestamp": datetime.utcnow().isoformat(),
        })

    # ------------------------------------------------------------------
    # Audit row
    # ------------------------------------------------------------------

    async def _start_seed_run(self) -> int:
        seed_run = SeedRun(
            mode=self.mode,
            status=RunStatus.RUNNING,
            started_at=self.context.stats.start_time,
            config_snapshot={
                "mode": self.mode.value,
                "batch_size": self.settings.BATCH_SIZE,
                "max_retries": self.settings.MAX_RETRIES,
                "seed_max_retries": self.settings.SEED_MAX_RETRIES,
                "seed_timeout_seconds": self.settings.SEED_TIMEOUT_SECONDS,
                "phases": [phase.name for phase in self.phases],
            }
        )
        async with self.session_factory() as session:
            session.add(seed_run)
            await session.commit()
            await session.refresh(seed_run)

        logger.info(f"Started seed run {seed_run.run_id}")
        return seed_run.id

    async def _complete_seed_run(
        self,
        seed_run_id: int,
        status: RunStatus,
        error_message: Optional[str]
    ) -> None:
        entries = self.context.ledger.entries()
        completed_at = datetime.utcnow()

        try:
            async with self.session_factory() as session:
                seed_run = await session.get(SeedRun, seed_run_id)
                if seed_run is None:
                    logger.warning(f"Seed run {seed_run_id} not found, audit row not updated")
                    return

                seed_run.status = status
                seed_run.completed_at = completed_at
                seed_run.duration_seconds = (completed_at - seed_run.started_at).total_seconds()
                seed_run.total_requests = self.context.stats.total_requests
                seed_run.failed_requests = self.context.stats.failed_requests
                seed_run.items_processed = sum(entry.count for entry in entries)
                seed_run.items_failed = sum(entry.failed for entry in entries)
                seed_run.categories_completed = sum(1 for entry in entries if entry.completed)
                seed_run.error_message = error_message
                seed_run.error_log = list(self.context.stats.errors)
                seed_run.progress_snapshot = self.context.ledger.snapshot()
                await session.commit()

        except SQLAlchemyError as e:
            logger.error(f"Failed to update seed run {seed_run_id}: {e}")
