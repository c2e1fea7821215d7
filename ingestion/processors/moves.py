"""
Move processor
"""

from typing import Any

from ingestion.base import GapFillingProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.processors.supplementary import (
    DEFAULT_META_AILMENT_ID, DEFAULT_META_CATEGORY_ID
)
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.move import (
    Move, MoveEffectEntry, MoveFlavorText, MoveMetaData, MoveName,
    MovePastValue, MoveStatChange
)
from schemas.resources import MoveMeta, MoveResource, NamedResource
import logging

logger = logging.getLogger(__name__)

META_COUNTERS = (
    "drain", "healing", "crit_rate", "ailment_chance", "flinch_chance", "stat_chance"
)


class MoveProcessor(GapFillingProcessor):
    """
    Moves and their dependent rows.

    Generation, type, damage class and target are required; a move missing
    any of them is skipped. Meta data whose ailment or category is unknown
    falls back to the id-0 defaults.
    """

    endpoint = "move"
    kind = EntityKind.MOVE
    progress_log_interval = 100
    timeout_seconds = 1800
    relationship_checks = (
        RelationshipCheck.on(MoveName, "move_id"),
        RelationshipCheck.on(MoveFlavorText, "move_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        move = await self.fetch(reference.url, mode, MoveResource)

        generation_id = await self.require_reference(
            EntityKind.GENERATION, move.generation, "generation", move.name
        )
        type_id = await self.require_reference(EntityKind.TYPE, move.type, "type", move.name)
        damage_class_id = await self.require_reference(
            EntityKind.MOVE_DAMAGE_CLASS, move.damage_class, "damage_class", move.name
        )
        target_id = await self.require_reference(
            EntityKind.MOVE_TARGET, move.target, "target", move.name
        )

        await self.engine.upsert_record(Move, move.id, {
            "name": move.name,
            "generation_id": generation_id,
            "type_id": type_id,
            "move_damage_class_id": damage_class_id,
            "move_target_id": target_id,
            "power": move.power,
            "pp": move.pp,
            "accuracy": move.accuracy,
            "priority": move.priority,
            "effect_chance": move.effect_chance,
            "contest_type_id": await self.existing_reference(EntityKind.CONTEST_TYPE, move.contest_type),
            "contest_effect_id": await self.existing_reference(
                EntityKind.CONTEST_EFFECT, move.contest_effect
            ),
            "super_contest_effect_id": await self.existing_reference(
                EntityKind.SUPER_CONTEST_EFFECT, move.super_contest_effect
            ),
        })

        await self.engine.add_joined_record_data(MoveName, "move_id", move.id, move.names, ["name"])
        await self.engine.add_joined_record_data(
            MoveEffectEntry, "move_id", move.id, move.effect_entries, ["effect", "short_effect"]
        )
        await self.engine.add_versioned_text(
            MoveFlavorText, "move_id", move.id, move.flavor_text_entries, ["flavor_text"]
        )
        await self.engine.add_joined_record_data(
            MoveStatChange,
            "move_id",
            move.id,
            move.stat_changes,
            ["change"],
            secondary_key="stat_id",
            reference_field="stat"
        )

        if move.meta is not None:
            await self.write_meta(move.id, move.meta)
        await self.write_past_values(move)

        return move.id

    async def write_meta(self, move_id: int, meta: MoveMeta) -> None:
        ailment_id = await self.existing_reference(EntityKind.MOVE_META_AILMENT, meta.ailment)
        category_id = await self.existing_reference(EntityKind.MOVE_META_CATEGORY, meta.category)

        fields = {
            "move_meta_ailment_id": DEFAULT_META_AILMENT_ID if ailment_id is None else ailment_id,
            "move_meta_category_id": DEFAULT_META_CATEGORY_ID if category_id is None else category_id,
            "min_hits": meta.min_hits,
            "max_hits": meta.max_hits,
            "min_turns": meta.min_turns,
            "max_turns": meta.max_turns,
        }
        for counter in META_COUNTERS:
            value = getattr(meta, counter)
            fields[counter] = 0 if value is None else value

        await self.engine.upsert_composite(MoveMetaData, {"move_id": move_id}, fields)

    async def write_past_values(self, move: MoveResource) -> None:
        for past in move.past_values:
            version_group_id = await self.existing_reference(
                EntityKind.VERSION_GROUP, past.version_group
            )
            if version_group_id is None:
                continue
            await self.engine.upsert_composite(
                MovePastValue,
                {"move_id": move.id, "version_group_id": version_group_id},
                {
                    "type_id": await self.existing_reference(EntityKind.TYPE, past.type),
                    "power": past.power,
                    "pp": past.pp,
                    "accuracy": past.accuracy,
                    "effect_chance": past.effect_chance,
                }
            )
