"""
Abstract base class for entity processors
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Set, Type, TypeVar

from pydantic import BaseModel

from core.exceptions import MissingRelationshipError
from ingestion.context import RunContext
from ingestion.loaders.upsert import UpsertEngine, reference_id
from ingestion.oracle import ExistingIdOracle, RelationshipCheck
from ingestion.registry import EntityKind, to_camel_case
from ingestion.transport import Strategy, Transport
from models.base import SeedMode
from schemas.resources import NamedResource
import logging

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class SeedProcessor(ABC):
    """
    Maps one catalog resource kind onto relational writes.

    Responsibilities:
    - Fetch and validate one resource per reference
    - Write the primary row and its relationships through the upsert engine
    - Optionally report already-materialized ids (resumability)
    - Optionally run a post-pass once every item was processed

    Attributes:
        endpoint: Catalog collection endpoint (``pokemon-species``)
        kind: Entity kind whose existing ids are skipped; None processes everything
        batch_size: Concurrent items per round in batched mode (None: settings)
        progress_log_interval: Items between progress log lines
        timeout_seconds: Per-attempt timeout for the whole category (None: settings)
        max_retries: Category retries (None: settings)
        sequential_only: Never process items concurrently
        memory_check_interval: Sequential items between memory checks (0: never)
    """

    endpoint: str = ""
    kind: Optional[EntityKind] = None
    batch_size: Optional[int] = None
    progress_log_interval: int = 50
    timeout_seconds: Optional[float] = None
    max_retries: Optional[int] = None
    sequential_only: bool = False
    memory_check_interval: int = 0

    def __init__(
        self,
        context: RunContext,
        transport: Transport,
        engine: UpsertEngine,
        oracle: ExistingIdOracle
    ):
        self.context = context
        self.transport = transport
        self.engine = engine
        self.oracle = oracle

    @property
    def category(self) -> str:
        return to_camel_case(self.endpoint)

    async def existing_ids(self) -> Optional[Set[int]]:
        """Ids to skip; None means every reference is processed"""
        if self.kind is None:
            return None
        return await self.oracle.all_ids(self.kind)

    @abstractmethod
    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        """
        Fetch one resource and write it.

        Returns:
            Anything the post-pass needs; None results are dropped
        """
        pass

    async def post_process(self, results: List[Any]) -> None:
        """Runs once after every item of the category was processed"""
        pass

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    async def fetch(self, url: str, mode: SeedMode, schema: Type[SchemaT]) -> SchemaT:
        return await self.transport.fetch_resource(url, Strategy.for_mode(mode), schema)

    async def existing_reference(self, kind: EntityKind, reference: Any) -> Optional[int]:
        """Id of an optional reference, or None when absent or not seeded yet"""
        ref_id = reference_id(reference)
        if ref_id is not None and await self.engine.exists(kind, ref_id):
            return ref_id
        return None

    async def require_reference(
        self,
        kind: EntityKind,
        reference: Any,
        field_name: str,
        resource_id: Any
    ) -> int:
        """
        Id of a required reference.

        Raises:
            MissingRelationshipError: The reference is absent or not seeded yet
        """
        ref_id = await self.existing_reference(kind, reference)
        if ref_id is None:
            raise MissingRelationshipError(
                f"{self.category} {resource_id}: required {field_name} is missing",
                context={
                    "kind": self.category,
                    "resource_id": resource_id,
                    "field_name": field_name,
                    "reference": getattr(reference, "url", None),
                }
            )
        return ref_id


class GapFillingProcessor(SeedProcessor):
    """
    Processor that also re-processes rows whose relationships are incomplete.

    A primary row only counts as done when every table in
    ``relationship_checks`` holds at least one row for it.
    """

    relationship_checks: Sequence[RelationshipCheck] = ()

    async def existing_ids(self) -> Optional[Set[int]]:
        if self.kind is None:
            return None
        return await self.oracle.complete_ids(self.kind, self.relationship_checks)
