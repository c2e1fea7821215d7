"""
Ability processor
"""

from typing import Any

from ingestion.base import GapFillingProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.registry import EntityKind
from models.ability import (
    Ability, AbilityChangeLog, AbilityChangeLogEffectText, AbilityEffectText,
    AbilityFlavorText, AbilityName
)
from models.base import SeedMode
from schemas.resources import AbilityResource, NamedResource
import logging

logger = logging.getLogger(__name__)


class AbilityProcessor(GapFillingProcessor):
    endpoint = "ability"
    kind = EntityKind.ABILITY
    progress_log_interval = 50
    timeout_seconds = 600
    relationship_checks = (
        RelationshipCheck.on(AbilityName, "ability_id"),
        RelationshipCheck.on(AbilityFlavorText, "ability_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        ability = await self.fetch(reference.url, mode, AbilityResource)
        generation_id = await self.require_reference(
            EntityKind.GENERATION, ability.generation, "generation", ability.name
        )

        await self.engine.upsert_record(Ability, ability.id, {
            "name": ability.name,
            "generation_id": generation_id,
            "is_main_series": ability.is_main_series,
        })

        await self.engine.add_joined_record_data(
            AbilityName, "ability_id", ability.id, ability.names, ["name"]
        )
        await self.engine.add_joined_record_data(
            AbilityEffectText,
            "ability_id",
            ability.id,
            ability.effect_entries,
            ["effect", "short_effect"]
        )
        await self.engine.add_versioned_text(
            AbilityFlavorText,
            "ability_id",
            ability.id,
            ability.flavor_text_entries,
            ["flavor_text"]
        )

        for change in ability.effect_changes:
            version_group_id = await self.existing_reference(
                EntityKind.VERSION_GROUP, change.version_group
            )
            if version_group_id is None:
                logger.warning(
                    f"Ability {ability.name}: change log for unknown version group "
                    f"{change.version_group.name} skipped"
                )
                continue

            await self.engine.upsert_composite(
                AbilityChangeLog,
                {"ability_id": ability.id, "version_group_id": version_group_id}
            )
            for entry in change.effect_entries:
                language_id = await self.existing_reference(EntityKind.LANGUAGE, entry.language)
                if language_id is None or entry.effect is None:
                    continue
                await self.engine.upsert_composite(
                    AbilityChangeLogEffectText,
                    {
                        "ability_id": ability.id,
                        "version_group_id": version_group_id,
                        "language_id": language_id,
                    },
                    {"effect": entry.effect}
                )

        return ability.id
