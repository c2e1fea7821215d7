"""
Item, machine and item-attribute processors
"""

from typing import Any

from sqlalchemy import and_

from ingestion.base import GapFillingProcessor, SeedProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.processors.common import VocabularyProcessor
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.item import (
    Item, ItemAttribute, ItemAttributeDescription, ItemAttributeMap,
    ItemAttributeName, ItemEffectText, ItemFlavorText, ItemGameIndex, ItemName,
    Machine
)
from schemas.resources import ItemAttributeResource, ItemResource, MachineResource, NamedResource
import logging

logger = logging.getLogger(__name__)


class ItemProcessor(GapFillingProcessor):
    """
    Items with names, effect texts, flavor texts and game indices.

    An item whose name is already stored under a different id is skipped;
    the category is required, an unknown fling effect is stored as empty.
    """

    endpoint = "item"
    kind = EntityKind.ITEM
    progress_log_interval = 100
    timeout_seconds = 1800
    relationship_checks = (
        RelationshipCheck.on(ItemName, "item_id"),
        RelationshipCheck.on(ItemEffectText, "item_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        item = await self.fetch(reference.url, mode, ItemResource)

        conflicts = await self.engine.select_rows(
            Item.id, where=and_(Item.name == item.name, Item.id != item.id)
        )
        if conflicts:
            logger.warning(
                f"Item {item.name} ({item.id}) skipped: name already used by item {conflicts[0][0]}"
            )
            return None

        category_id = await self.require_reference(
            EntityKind.ITEM_CATEGORY, item.category, "category", item.name
        )
        fling_effect_id = await self.existing_reference(EntityKind.ITEM_FLING_EFFECT, item.fling_effect)
        if item.fling_effect is not None and fling_effect_id is None:
            logger.warning(f"Item {item.name}: unknown fling effect {item.fling_effect.name}, left empty")

        await self.engine.upsert_record(Item, item.id, {
            "name": item.name,
            "cost": item.cost,
            "fling_power": item.fling_power,
            "item_category_id": category_id,
            "item_fling_effect_id": fling_effect_id,
        })

        await self.engine.add_joined_record_data(ItemName, "item_id", item.id, item.names, ["name"])
        await self.engine.add_joined_record_data(
            ItemEffectText, "item_id", item.id, item.effect_entries, ["effect", "short_effect"]
        )
        await self.engine.add_versioned_text(
            ItemFlavorText, "item_id", item.id, item.flavor_text_entries, {"flavor_text": "text"}
        )
        await self.engine.add_joined_record_data(
            ItemGameIndex,
            "item_id",
            item.id,
            item.game_indices,
            ["game_index"],
            secondary_key="generation_id"
        )
        return item.id


class MachineProcessor(SeedProcessor):
    endpoint = "machine"
    kind = EntityKind.MACHINE
    progress_log_interval = 100
    timeout_seconds = 1800

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        machine = await self.fetch(reference.url, mode, MachineResource)
        label = f"machine {machine.id}"

        await self.engine.upsert_record(Machine, machine.id, {
            "item_id": await self.require_reference(EntityKind.ITEM, machine.item, "item", label),
            "move_id": await self.require_reference(EntityKind.MOVE, machine.move, "move", label),
            "version_group_id": await self.require_reference(
                EntityKind.VERSION_GROUP, machine.version_group, "version_group", label
            ),
        })
        return machine.id


class ItemAttributeProcessor(VocabularyProcessor):
    """Attributes with names, descriptions and the items carrying them"""

    endpoint = "item-attribute"
    kind = EntityKind.ITEM_ATTRIBUTE
    model = ItemAttribute
    schema = ItemAttributeResource
    owner_key = "item_attribute_id"
    name_model = ItemAttributeName
    description_model = ItemAttributeDescription

    async def write_extras(self, resource: ItemAttributeResource, mode: SeedMode) -> None:
        linked = await self.engine.upsert_join_record(
            ItemAttributeMap, "item_attribute_id", resource.id, resource.items, "item_id"
        )
        logger.debug(f"Item attribute {resource.name}: {linked}/{len(resource.items)} items linked")
