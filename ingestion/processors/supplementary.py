"""
Supplementary vocabularies referenced by moves, species, berries and items
"""

from typing import Any, Dict

from ingestion.base import SeedProcessor
from ingestion.loaders.upsert import UpsertEngine
from ingestion.processors.common import VocabularyProcessor
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.berry import BerryFirmness, BerryFirmnessName, BerryFlavor, BerryFlavorName
from models.contest import (
    ContestEffect, ContestEffectEffectText, ContestEffectFlavorText, ContestType,
    ContestTypeName, SuperContestEffect, SuperContestEffectFlavorText
)
from models.item import (
    ItemCategory, ItemCategoryName, ItemFlingEffect, ItemFlingEffectEffectText,
    ItemPocket, ItemPocketName
)
from models.move import (
    MoveDamageClass, MoveDamageClassDescription, MoveDamageClassName,
    MoveLearnMethod, MoveLearnMethodDescription, MoveLearnMethodName,
    MoveMetaAilment, MoveMetaAilmentName, MoveMetaCategory,
    MoveMetaCategoryDescription, MoveTarget, MoveTargetDescription, MoveTargetName
)
from models.species import (
    EggGroup, EggGroupName, GrowthRate, GrowthRateDescription,
    GrowthRateExperienceLevel, PokemonColor, PokemonColorName, PokemonHabitat,
    PokemonHabitatName, PokemonShape, PokemonShapeName
)
from models.stat import MoveBattleStyle, MoveBattleStyleName, Stat, StatName
from schemas.resources import (
    ContestEffectResource,
    ContestTypeResource,
    DescribedVocabulary,
    GrowthRateResource,
    ItemCategoryResource,
    ItemFlingEffectResource,
    MoveMetaCategoryResource,
    NamedResource,
    PokemonShapeResource,
    StatResource,
    SuperContestEffectResource,
)
import logging

logger = logging.getLogger(__name__)

DEFAULT_META_CATEGORY_ID = 0
DEFAULT_META_CATEGORY_NAME = "damage"
DEFAULT_META_AILMENT_ID = 0
DEFAULT_META_AILMENT_NAME = "none"


async def ensure_default_meta_category(engine: UpsertEngine) -> None:
    """Id 0 is the fallback category for move meta data"""
    await engine.upsert_record(
        MoveMetaCategory, DEFAULT_META_CATEGORY_ID, {"name": DEFAULT_META_CATEGORY_NAME}
    )
    logger.info(f"Ensured default move meta category {DEFAULT_META_CATEGORY_ID}")


async def ensure_default_meta_ailment(engine: UpsertEngine) -> None:
    """Id 0 is the fallback ailment for move meta data"""
    await engine.upsert_record(
        MoveMetaAilment, DEFAULT_META_AILMENT_ID, {"name": DEFAULT_META_AILMENT_NAME}
    )
    logger.info(f"Ensured default move meta ailment {DEFAULT_META_AILMENT_ID}")


# ============================================================================
# Move vocabularies
# ============================================================================

class MoveDamageClassProcessor(VocabularyProcessor):
    endpoint = "move-damage-class"
    kind = EntityKind.MOVE_DAMAGE_CLASS
    model = MoveDamageClass
    schema = DescribedVocabulary
    owner_key = "move_damage_class_id"
    name_model = MoveDamageClassName
    description_model = MoveDamageClassDescription


class MoveTargetProcessor(VocabularyProcessor):
    endpoint = "move-target"
    kind = EntityKind.MOVE_TARGET
    model = MoveTarget
    schema = DescribedVocabulary
    owner_key = "move_target_id"
    name_model = MoveTargetName
    description_model = MoveTargetDescription


class MoveLearnMethodProcessor(VocabularyProcessor):
    endpoint = "move-learn-method"
    kind = EntityKind.MOVE_LEARN_METHOD
    model = MoveLearnMethod
    schema = DescribedVocabulary
    owner_key = "move_learn_method_id"
    name_model = MoveLearnMethodName
    description_model = MoveLearnMethodDescription


class MoveAilmentProcessor(VocabularyProcessor):
    endpoint = "move-ailment"
    kind = EntityKind.MOVE_META_AILMENT
    model = MoveMetaAilment
    owner_key = "move_meta_ailment_id"
    name_model = MoveMetaAilmentName


class MoveCategoryProcessor(SeedProcessor):
    endpoint = "move-category"
    kind = EntityKind.MOVE_META_CATEGORY
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        category = await self.fetch(reference.url, mode, MoveMetaCategoryResource)
        await self.engine.upsert_record(MoveMetaCategory, category.id, {"name": category.name})
        await self.engine.add_joined_record_data(
            MoveMetaCategoryDescription,
            "move_meta_category_id",
            category.id,
            category.descriptions,
            ["description"]
        )
        return category.id


class MoveBattleStyleProcessor(VocabularyProcessor):
    endpoint = "move-battle-style"
    kind = EntityKind.MOVE_BATTLE_STYLE
    model = MoveBattleStyle
    owner_key = "move_battle_style_id"
    name_model = MoveBattleStyleName


class StatProcessor(VocabularyProcessor):
    endpoint = "stat"
    kind = EntityKind.STAT
    model = Stat
    schema = StatResource
    owner_key = "stat_id"
    name_model = StatName

    async def record_fields(self, resource: StatResource) -> Dict[str, Any]:
        return {
            "name": resource.name,
            "game_index": resource.game_index,
            "is_battle_only": resource.is_battle_only,
            "move_damage_class_id": await self.existing_reference(
                EntityKind.MOVE_DAMAGE_CLASS, resource.move_damage_class
            ),
        }


# ============================================================================
# Species vocabularies
# ============================================================================

class EggGroupProcessor(VocabularyProcessor):
    endpoint = "egg-group"
    kind = EntityKind.EGG_GROUP
    model = EggGroup
    owner_key = "egg_group_id"
    name_model = EggGroupName


class GrowthRateProcessor(SeedProcessor):
    """Growth rates with their descriptions and level/experience table"""

    endpoint = "growth-rate"
    kind = EntityKind.GROWTH_RATE
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        rate = await self.fetch(reference.url, mode, GrowthRateResource)
        await self.engine.upsert_record(GrowthRate, rate.id, {
            "name": rate.name,
            "formula": rate.formula,
        })
        await self.engine.add_joined_record_data(
            GrowthRateDescription, "growth_rate_id", rate.id, rate.descriptions, ["description"]
        )
        for level in rate.levels:
            await self.engine.upsert_composite(
                GrowthRateExperienceLevel,
                {"growth_rate_id": rate.id, "level": level.level},
                {"experience": level.experience}
            )
        return rate.id


class PokemonColorProcessor(VocabularyProcessor):
    endpoint = "pokemon-color"
    kind = EntityKind.POKEMON_COLOR
    model = PokemonColor
    owner_key = "pokemon_color_id"
    name_model = PokemonColorName


class PokemonShapeProcessor(VocabularyProcessor):
    """Shape names carry both the plain and the "awesome" name per language"""

    endpoint = "pokemon-shape"
    kind = EntityKind.POKEMON_SHAPE
    model = PokemonShape
    schema = PokemonShapeResource
    owner_key = "pokemon_shape_id"

    async def write_extras(self, resource: PokemonShapeResource, mode: SeedMode) -> None:
        entries: Dict[str, Dict[str, Any]] = {}
        for name in resource.names:
            entries.setdefault(name.language.url, {"language": name.language})["name"] = name.name
        for awesome in resource.awesome_names:
            entry = entries.setdefault(awesome.language.url, {"language": awesome.language})
            entry["awesome_name"] = awesome.awesome_name

        await self.engine.add_joined_record_data(
            PokemonShapeName,
            "pokemon_shape_id",
            resource.id,
            entries.values(),
            ["name", "awesome_name"]
        )


class PokemonHabitatProcessor(VocabularyProcessor):
    endpoint = "pokemon-habitat"
    kind = EntityKind.POKEMON_HABITAT
    model = PokemonHabitat
    owner_key = "pokemon_habitat_id"
    name_model = PokemonHabitatName


# ============================================================================
# Berry and contest vocabularies
# ============================================================================

class BerryFlavorProcessor(VocabularyProcessor):
    endpoint = "berry-flavor"
    kind = EntityKind.BERRY_FLAVOR
    model = BerryFlavor
    owner_key = "berry_flavor_id"
    name_model = BerryFlavorName


class BerryFirmnessProcessor(VocabularyProcessor):
    endpoint = "berry-firmness"
    kind = EntityKind.BERRY_FIRMNESS
    model = BerryFirmness
    owner_key = "berry_firmness_id"
    name_model = BerryFirmnessName


class ContestTypeProcessor(SeedProcessor):
    endpoint = "contest-type"
    kind = EntityKind.CONTEST_TYPE
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        contest_type = await self.fetch(reference.url, mode, ContestTypeResource)
        await self.engine.upsert_record(ContestType, contest_type.id, {
            "name": contest_type.name,
            "berry_flavor_id": await self.existing_reference(
                EntityKind.BERRY_FLAVOR, contest_type.berry_flavor
            ),
        })
        await self.engine.add_joined_record_data(
            ContestTypeName, "contest_type_id", contest_type.id, contest_type.names, ["name", "color"]
        )
        return contest_type.id


class ContestEffectProcessor(SeedProcessor):
    endpoint = "contest-effect"
    kind = EntityKind.CONTEST_EFFECT
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        effect = await self.fetch(reference.url, mode, ContestEffectResource)
        await self.engine.upsert_record(ContestEffect, effect.id, {
            "appeal": effect.appeal,
            "jam": effect.jam,
        })
        await self.engine.add_joined_record_data(
            ContestEffectEffectText, "contest_effect_id", effect.id, effect.effect_entries, ["effect"]
        )
        await self.engine.add_joined_record_data(
            ContestEffectFlavorText,
            "contest_effect_id",
            effect.id,
            effect.flavor_text_entries,
            ["flavor_text"]
        )
        return effect.id


class SuperContestEffectProcessor(SeedProcessor):
    endpoint = "super-contest-effect"
    kind = EntityKind.SUPER_CONTEST_EFFECT
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        effect = await self.fetch(reference.url, mode, SuperContestEffectResource)
        await self.engine.upsert_record(SuperContestEffect, effect.id, {"appeal": effect.appeal})
        await self.engine.add_joined_record_data(
            SuperContestEffectFlavorText,
            "super_contest_effect_id",
            effect.id,
            effect.flavor_text_entries,
            ["flavor_text"]
        )
        return effect.id


# ============================================================================
# Item vocabularies
# ============================================================================

class ItemPocketProcessor(VocabularyProcessor):
    endpoint = "item-pocket"
    kind = EntityKind.ITEM_POCKET
    model = ItemPocket
    owner_key = "item_pocket_id"
    name_model = ItemPocketName


class ItemCategoryProcessor(VocabularyProcessor):
    endpoint = "item-category"
    kind = EntityKind.ITEM_CATEGORY
    model = ItemCategory
    schema = ItemCategoryResource
    owner_key = "item_category_id"
    name_model = ItemCategoryName

    async def record_fields(self, resource: ItemCategoryResource) -> Dict[str, Any]:
        pocket_id = await self.require_reference(
            EntityKind.ITEM_POCKET, resource.pocket, "pocket", resource.name
        )
        return {"name": resource.name, "item_pocket_id": pocket_id}


class ItemFlingEffectProcessor(SeedProcessor):
    endpoint = "item-fling-effect"
    kind = EntityKind.ITEM_FLING_EFFECT
    progress_log_interval = 10

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        effect = await self.fetch(reference.url, mode, ItemFlingEffectResource)
        await self.engine.upsert_record(ItemFlingEffect, effect.id, {"name": effect.name})
        await self.engine.add_joined_record_data(
            ItemFlingEffectEffectText,
            "item_fling_effect_id",
            effect.id,
            effect.effect_entries,
            ["effect"]
        )
        return effect.id
