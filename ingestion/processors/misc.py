"""
Berries, natures, characteristics, genders, pokeathlon stats, encounter
vocabularies and evolution triggers
"""

import json
from typing import Any, List, Optional, Set, Tuple

from ingestion.base import SeedProcessor
from ingestion.processors.common import VocabularyProcessor
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.berry import Berry, BerryFlavorMap
from models.evolution import EvolutionTrigger, EvolutionTriggerName
from models.location import (
    EncounterCondition, EncounterConditionName, EncounterConditionValue,
    EncounterConditionValueName, EncounterMethod, EncounterMethodName
)
from models.species import PokemonSpeciesGender
from models.stat import (
    Characteristic, CharacteristicDescription, Gender, Nature,
    NatureBattleStylePreference, NatureName, NaturePokeathlonStatAffect,
    PokeathlonStat, PokeathlonStatName
)
from schemas.resources import (
    BerryResource,
    CharacteristicResource,
    EncounterConditionResource,
    EncounterConditionValueResource,
    EncounterMethodResource,
    GenderResource,
    NamedResource,
    NatureResource,
)
import logging

logger = logging.getLogger(__name__)


class BerryProcessor(SeedProcessor):
    endpoint = "berry"
    kind = EntityKind.BERRY
    progress_log_interval = 20
    timeout_seconds = 300

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        berry = await self.fetch(reference.url, mode, BerryResource)

        await self.engine.upsert_record(Berry, berry.id, {
            "name": berry.name,
            "growth_time": berry.growth_time,
            "max_harvest": berry.max_harvest,
            "natural_gift_power": berry.natural_gift_power,
            "size": berry.size,
            "smoothness": berry.smoothness,
            "soil_dryness": berry.soil_dryness,
            "berry_firmness_id": await self.require_reference(
                EntityKind.BERRY_FIRMNESS, berry.firmness, "firmness", berry.name
            ),
            "natural_gift_type_id": await self.require_reference(
                EntityKind.TYPE, berry.natural_gift_type, "natural_gift_type", berry.name
            ),
            "item_id": await self.require_reference(EntityKind.ITEM, berry.item, "item", berry.name),
        })

        await self.engine.add_joined_record_data(
            BerryFlavorMap,
            "berry_id",
            berry.id,
            berry.flavors,
            ["potency"],
            secondary_key="berry_flavor_id",
            reference_field="flavor"
        )
        return berry.id


class NatureProcessor(VocabularyProcessor):
    endpoint = "nature"
    kind = EntityKind.NATURE
    model = Nature
    schema = NatureResource
    owner_key = "nature_id"
    name_model = NatureName

    async def record_fields(self, resource: NatureResource) -> dict:
        return {
            "name": resource.name,
            "decreased_stat_id": await self.existing_reference(EntityKind.STAT, resource.decreased_stat),
            "increased_stat_id": await self.existing_reference(EntityKind.STAT, resource.increased_stat),
            "hates_flavor_id": await self.existing_reference(
                EntityKind.BERRY_FLAVOR, resource.hates_flavor
            ),
            "likes_flavor_id": await self.existing_reference(
                EntityKind.BERRY_FLAVOR, resource.likes_flavor
            ),
        }

    async def write_extras(self, resource: NatureResource, mode: SeedMode) -> None:
        await self.engine.add_joined_record_data(
            NaturePokeathlonStatAffect,
            "nature_id",
            resource.id,
            resource.pokeathlon_stat_changes,
            ["max_change"],
            secondary_key="pokeathlon_stat_id"
        )
        await self.engine.add_joined_record_data(
            NatureBattleStylePreference,
            "nature_id",
            resource.id,
            resource.move_battle_style_preferences,
            ["low_hp_preference", "high_hp_preference"],
            secondary_key="move_battle_style_id"
        )


class CharacteristicProcessor(SeedProcessor):
    endpoint = "characteristic"
    kind = EntityKind.CHARACTERISTIC
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        characteristic = await self.fetch(reference.url, mode, CharacteristicResource)
        highest_stat_id = await self.require_reference(
            EntityKind.STAT, characteristic.highest_stat, "highest_stat", characteristic.id
        )

        await self.engine.upsert_record(Characteristic, characteristic.id, {
            "gene_modulo": characteristic.gene_modulo,
            "possible_values": json.dumps(characteristic.possible_values),
            "highest_stat_id": highest_stat_id,
        })
        await self.engine.add_joined_record_data(
            CharacteristicDescription,
            "characteristic_id",
            characteristic.id,
            characteristic.descriptions,
            ["description"]
        )
        return characteristic.id


class GenderProcessor(SeedProcessor):
    endpoint = "gender"
    kind = EntityKind.GENDER
    progress_log_interval = 5

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        gender = await self.fetch(reference.url, mode, GenderResource)
        await self.engine.upsert_record(Gender, gender.id, {"name": gender.name})
        return gender.id


class GenderSpeciesAssociationProcessor(SeedProcessor):
    """
    Species gender rates, read from the gender resources once species exist.

    Pairs already stored are skipped, as are species not stored yet.
    """

    endpoint = "gender"
    progress_log_interval = 5
    timeout_seconds = 600

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._existing_pairs: Set[Tuple[int, int]] = set()

    @property
    def category(self) -> str:
        return "genderSpeciesAssociations"

    async def existing_ids(self) -> Optional[Set[int]]:
        rows = await self.engine.select_rows(
            PokemonSpeciesGender.pokemon_species_id, PokemonSpeciesGender.gender_id
        )
        self._existing_pairs = set(rows)
        logger.info(f"{len(self._existing_pairs)} gender-species associations already stored")
        return None

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        gender = await self.fetch(reference.url, mode, GenderResource)
        if not await self.engine.exists(EntityKind.GENDER, gender.id):
            logger.warning(f"Gender {gender.name} not stored, associations skipped")
            return None

        created = skipped = 0
        for detail in gender.pokemon_species_details:
            species_id = detail.pokemon_species.id
            if (species_id, gender.id) in self._existing_pairs:
                skipped += 1
                continue
            if not await self.engine.exists(EntityKind.POKEMON_SPECIES, species_id):
                skipped += 1
                continue

            await self.engine.upsert_composite(
                PokemonSpeciesGender,
                {"pokemon_species_id": species_id, "gender_id": gender.id},
                {"rate": detail.rate}
            )
            self._existing_pairs.add((species_id, gender.id))
            created += 1

        return created, skipped

    async def post_process(self, results: List[Tuple[int, int]]) -> None:
        created = sum(result[0] for result in results)
        skipped = sum(result[1] for result in results)
        logger.info(f"Gender-species associations: {created} created, {skipped} skipped")


class PokeathlonStatProcessor(VocabularyProcessor):
    endpoint = "pokeathlon-stat"
    kind = EntityKind.POKEATHLON_STAT
    model = PokeathlonStat
    owner_key = "pokeathlon_stat_id"
    name_model = PokeathlonStatName


# ============================================================================
# Encounter vocabularies
# ============================================================================

class EncounterConditionProcessor(VocabularyProcessor):
    """Conditions together with their values and value names"""

    endpoint = "encounter-condition"
    kind = EntityKind.ENCOUNTER_CONDITION
    model = EncounterCondition
    schema = EncounterConditionResource
    owner_key = "encounter_condition_id"
    name_model = EncounterConditionName

    async def write_extras(self, resource: EncounterConditionResource, mode: SeedMode) -> None:
        for value_ref in resource.values:
            value = await self.fetch(value_ref.url, mode, EncounterConditionValueResource)
            await self.engine.upsert_record(EncounterConditionValue, value.id, {
                "name": value.name,
                "encounter_condition_id": resource.id,
                "is_default": False,
            })
            await self.engine.add_joined_record_data(
                EncounterConditionValueName,
                "encounter_condition_value_id",
                value.id,
                value.names,
                ["name"]
            )


class EncounterMethodProcessor(VocabularyProcessor):
    endpoint = "encounter-method"
    kind = EntityKind.ENCOUNTER_METHOD
    model = EncounterMethod
    schema = EncounterMethodResource
    owner_key = "encounter_method_id"
    name_model = EncounterMethodName

    async def record_fields(self, resource: EncounterMethodResource) -> dict:
        return {"name": resource.name, "order": resource.order}


class EvolutionTriggerProcessor(VocabularyProcessor):
    endpoint = "evolution-trigger"
    kind = EntityKind.EVOLUTION_TRIGGER
    model = EvolutionTrigger
    owner_key = "evolution_trigger_id"
    name_model = EvolutionTriggerName
