"""
Type-effectiveness matrix completion.

The catalog only publishes non-neutral multipliers. This pass inserts a 1.0
relation for every ordered pair of types that has none, so the stored matrix
is total. Existing relations are never overwritten.
"""

from itertools import product
from typing import Set, Tuple

from ingestion.loaders.upsert import UpsertEngine
from models.types import Type, TypeEfficacy
import logging

logger = logging.getLogger(__name__)

NEUTRAL_FACTOR = 1.0


class TypeMatrixCompleter:

    def __init__(self, engine: UpsertEngine):
        self.engine = engine

    async def complete(self) -> int:
        """
        Fill every missing (damage type, target type) pair.

        Returns:
            Number of relations inserted
        """
        type_ids = sorted(row[0] for row in await self.engine.select_rows(Type.id))
        existing: Set[Tuple[int, int]] = set(
            await self.engine.select_rows(TypeEfficacy.damage_type_id, TypeEfficacy.target_type_id)
        )

        inserted = 0
        for damage_type_id, target_type_id in product(type_ids, repeat=2):
            if (damage_type_id, target_type_id) in existing:
                continue
            await self.engine.upsert_composite(
                TypeEfficacy,
                {"damage_type_id": damage_type_id, "target_type_id": target_type_id},
                {"damage_factor": NEUTRAL_FACTOR},
                overwrite=False
            )
            inserted += 1

        logger.info(
            f"Type matrix: {len(type_ids)} types, {len(existing)} existing relations, "
            f"{inserted} neutral relations added"
        )
        return inserted
