"""
Type processor: types, names, current and past damage relations
"""

from typing import Any, Iterator, List, Tuple

from ingestion.base import GapFillingProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.types import Type, TypeEfficacy, TypeEfficacyPast, TypeName
from schemas.resources import NamedResource, TypeRelations, TypeResource
import logging

logger = logging.getLogger(__name__)

# (relation list, factor, the owning type deals the damage)
DAMAGE_RELATIONS: Tuple[Tuple[str, float, bool], ...] = (
    ("double_damage_to", 2.0, True),
    ("half_damage_to", 0.5, True),
    ("no_damage_to", 0.0, True),
    ("double_damage_from", 2.0, False),
    ("half_damage_from", 0.5, False),
    ("no_damage_from", 0.0, False),
)


def efficacy_pairs(type_id: int, relations: TypeRelations) -> Iterator[Tuple[int, int, float]]:
    """
    Yield ``(damage_type_id, target_type_id, factor)`` for every listed relation.

    "to" lists have the owning type as the attacker; "from" lists swap the roles.
    """
    for attribute, factor, owner_attacks in DAMAGE_RELATIONS:
        for other in getattr(relations, attribute):
            other_id = other.id
            if other_id is None:
                continue
            if owner_attacks:
                yield type_id, other_id, factor
            else:
                yield other_id, type_id, factor


class TypeProcessor(GapFillingProcessor):
    """
    Types are processed concurrently, so a relation may name a type that is
    not stored yet. Such relations are skipped during the item and written
    again by the post-pass once every type exists.
    """

    endpoint = "type"
    kind = EntityKind.TYPE
    progress_log_interval = 10
    relationship_checks = (
        RelationshipCheck.on(TypeName, "type_id"),
        RelationshipCheck.on(TypeEfficacy, "damage_type_id", "target_type_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        type_ = await self.fetch(reference.url, mode, TypeResource)

        await self.engine.upsert_record(Type, type_.id, {
            "name": type_.name,
            "generation_id": await self.existing_reference(EntityKind.GENERATION, type_.generation),
            "move_damage_class_id": await self.existing_reference(
                EntityKind.MOVE_DAMAGE_CLASS, type_.move_damage_class
            ),
        })
        await self.engine.add_joined_record_data(TypeName, "type_id", type_.id, type_.names, ["name"])

        await self.write_efficacy(type_)
        await self.write_past_efficacy(type_)
        return type_

    async def write_efficacy(self, type_: TypeResource) -> int:
        written = 0
        for damage_type_id, target_type_id, factor in efficacy_pairs(type_.id, type_.damage_relations):
            if not (
                await self.engine.exists(EntityKind.TYPE, damage_type_id)
                and await self.engine.exists(EntityKind.TYPE, target_type_id)
            ):
                continue
            await self.engine.upsert_composite(
                TypeEfficacy,
                {"damage_type_id": damage_type_id, "target_type_id": target_type_id},
                {"damage_factor": factor}
            )
            written += 1
        return written

    async def write_past_efficacy(self, type_: TypeResource) -> int:
        written = 0
        for past in type_.past_damage_relations:
            generation_id = await self.existing_reference(EntityKind.GENERATION, past.generation)
            if generation_id is None:
                logger.warning(f"Type {type_.name}: past relations for unknown generation skipped")
                continue

            for damage_type_id, target_type_id, factor in efficacy_pairs(type_.id, past.damage_relations):
                if not (
                    await self.engine.exists(EntityKind.TYPE, damage_type_id)
                    and await self.engine.exists(EntityKind.TYPE, target_type_id)
                ):
                    continue
                await self.engine.upsert_composite(
                    TypeEfficacyPast,
                    {
                        "damage_type_id": damage_type_id,
                        "target_type_id": target_type_id,
                        "generation_id": generation_id,
                    },
                    {"damage_factor": factor}
                )
                written += 1
        return written

    async def post_process(self, results: List[TypeResource]) -> None:
        """Re-apply relations now that every type of this run is stored"""
        written = 0
        for type_ in results:
            written += await self.write_efficacy(type_)
            written += await self.write_past_efficacy(type_)
        logger.info(f"Type post-pass wrote {written} efficacy relations for {len(results)} types")
