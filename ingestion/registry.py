"""
Entity-kind registry.

Maps every primary-keyed entity kind to its model class, and every join
secondary key to the kind whose existence guards the write.
"""

import enum
import re
from typing import Dict, Type

from models.base import Base
from models.ability import Ability
from models.berry import Berry, BerryFirmness, BerryFlavor
from models.contest import ContestEffect, ContestType, SuperContestEffect
from models.evolution import EvolutionChain, EvolutionTrigger
from models.item import (
    Item, ItemAttribute, ItemCategory, ItemFlingEffect, ItemPocket, Machine
)
from models.language import Generation, Language, Region, Version, VersionGroup
from models.location import (
    EncounterCondition, EncounterConditionValue, EncounterMethod,
    Location, LocationArea, PalParkArea
)
from models.move import (
    Move, MoveDamageClass, MoveLearnMethod, MoveMetaAilment,
    MoveMetaCategory, MoveTarget
)
from models.pokemon import Pokemon, PokemonForm
from models.species import (
    EggGroup, GrowthRate, Pokedex, PokemonColor, PokemonHabitat,
    PokemonShape, PokemonSpecies
)
from models.stat import (
    Characteristic, Gender, MoveBattleStyle, Nature, PokeathlonStat, Stat
)
from models.types import Type as PokemonTypeModel
from schemas.resources import extract_id_from_url

__all__ = [
    "EntityKind",
    "FOREIGN_KEY_KINDS",
    "extract_id_from_url",
    "to_camel_case",
]


class EntityKind(str, enum.Enum):
    """Every entity kind identified by a catalog id"""
    LANGUAGE = "language"
    REGION = "region"
    GENERATION = "generation"
    VERSION_GROUP = "version_group"
    VERSION = "version"
    STAT = "stat"
    POKEATHLON_STAT = "pokeathlon_stat"
    CHARACTERISTIC = "characteristic"
    MOVE_BATTLE_STYLE = "move_battle_style"
    NATURE = "nature"
    GENDER = "gender"
    MOVE_DAMAGE_CLASS = "move_damage_class"
    MOVE_TARGET = "move_target"
    MOVE_LEARN_METHOD = "move_learn_method"
    MOVE_META_AILMENT = "move_meta_ailment"
    MOVE_META_CATEGORY = "move_meta_category"
    MOVE = "move"
    CONTEST_TYPE = "contest_type"
    CONTEST_EFFECT = "contest_effect"
    SUPER_CONTEST_EFFECT = "super_contest_effect"
    BERRY_FLAVOR = "berry_flavor"
    BERRY_FIRMNESS = "berry_firmness"
    BERRY = "berry"
    TYPE = "type"
    ABILITY = "ability"
    ITEM_POCKET = "item_pocket"
    ITEM_CATEGORY = "item_category"
    ITEM_FLING_EFFECT = "item_fling_effect"
    ITEM_ATTRIBUTE = "item_attribute"
    ITEM = "item"
    MACHINE = "machine"
    LOCATION = "location"
    LOCATION_AREA = "location_area"
    PAL_PARK_AREA = "pal_park_area"
    ENCOUNTER_METHOD = "encounter_method"
    ENCOUNTER_CONDITION = "encounter_condition"
    ENCOUNTER_CONDITION_VALUE = "encounter_condition_value"
    EGG_GROUP = "egg_group"
    GROWTH_RATE = "growth_rate"
    POKEMON_COLOR = "pokemon_color"
    POKEMON_SHAPE = "pokemon_shape"
    POKEMON_HABITAT = "pokemon_habitat"
    POKEMON_SPECIES = "pokemon_species"
    POKEDEX = "pokedex"
    EVOLUTION_TRIGGER = "evolution_trigger"
    EVOLUTION_CHAIN = "evolution_chain"
    POKEMON = "pokemon"
    POKEMON_FORM = "pokemon_form"

    @property
    def model(self) -> Type[Base]:
        return _MODELS[self]


_MODELS: Dict[EntityKind, Type[Base]] = {
    EntityKind.LANGUAGE: Language,
    EntityKind.REGION: Region,
    EntityKind.GENERATION: Generation,
    EntityKind.VERSION_GROUP: VersionGroup,
    EntityKind.VERSION: Version,
    EntityKind.STAT: Stat,
    EntityKind.POKEATHLON_STAT: PokeathlonStat,
    EntityKind.CHARACTERISTIC: Characteristic,
    EntityKind.MOVE_BATTLE_STYLE: MoveBattleStyle,
    EntityKind.NATURE: Nature,
    EntityKind.GENDER: Gender,
    EntityKind.MOVE_DAMAGE_CLASS: MoveDamageClass,
    EntityKind.MOVE_TARGET: MoveTarget,
    EntityKind.MOVE_LEARN_METHOD: MoveLearnMethod,
    EntityKind.MOVE_META_AILMENT: MoveMetaAilment,
    EntityKind.MOVE_META_CATEGORY: MoveMetaCategory,
    EntityKind.MOVE: Move,
    EntityKind.CONTEST_TYPE: ContestType,
    EntityKind.CONTEST_EFFECT: ContestEffect,
    EntityKind.SUPER_CONTEST_EFFECT: SuperContestEffect,
    EntityKind.BERRY_FLAVOR: BerryFlavor,
    EntityKind.BERRY_FIRMNESS: BerryFirmness,
    EntityKind.BERRY: Berry,
    EntityKind.TYPE: PokemonTypeModel,
    EntityKind.ABILITY: Ability,
    EntityKind.ITEM_POCKET: ItemPocket,
    EntityKind.ITEM_CATEGORY: ItemCategory,
    EntityKind.ITEM_FLING_EFFECT: ItemFlingEffect,
    EntityKind.ITEM_ATTRIBUTE: ItemAttribute,
    EntityKind.ITEM: Item,
    EntityKind.MACHINE: Machine,
    EntityKind.LOCATION: Location,
    EntityKind.LOCATION_AREA: LocationArea,
    EntityKind.PAL_PARK_AREA: PalParkArea,
    EntityKind.ENCOUNTER_METHOD: EncounterMethod,
    EntityKind.ENCOUNTER_CONDITION: EncounterCondition,
    EntityKind.ENCOUNTER_CONDITION_VALUE: EncounterConditionValue,
    EntityKind.EGG_GROUP: EggGroup,
    EntityKind.GROWTH_RATE: GrowthRate,
    EntityKind.POKEMON_COLOR: PokemonColor,
    EntityKind.POKEMON_SHAPE: PokemonShape,
    EntityKind.POKEMON_HABITAT: PokemonHabitat,
    EntityKind.POKEMON_SPECIES: PokemonSpecies,
    EntityKind.POKEDEX: Pokedex,
    EntityKind.EVOLUTION_TRIGGER: EvolutionTrigger,
    EntityKind.EVOLUTION_CHAIN: EvolutionChain,
    EntityKind.POKEMON: Pokemon,
    EntityKind.POKEMON_FORM: PokemonForm,
}


# Join secondary key -> kind that must already exist before the join row is written
FOREIGN_KEY_KINDS: Dict[str, EntityKind] = {
    "language_id": EntityKind.LANGUAGE,
    "local_language_id": EntityKind.LANGUAGE,
    "region_id": EntityKind.REGION,
    "generation_id": EntityKind.GENERATION,
    "version_group_id": EntityKind.VERSION_GROUP,
    "version_id": EntityKind.VERSION,
    "stat_id": EntityKind.STAT,
    "pokeathlon_stat_id": EntityKind.POKEATHLON_STAT,
    "move_battle_style_id": EntityKind.MOVE_BATTLE_STYLE,
    "berry_flavor_id": EntityKind.BERRY_FLAVOR,
    "egg_group_id": EntityKind.EGG_GROUP,
    "type_id": EntityKind.TYPE,
    "ability_id": EntityKind.ABILITY,
    "move_id": EntityKind.MOVE,
    "move_learn_method_id": EntityKind.MOVE_LEARN_METHOD,
    "item_id": EntityKind.ITEM,
    "item_attribute_id": EntityKind.ITEM_ATTRIBUTE,
    "pokedex_id": EntityKind.POKEDEX,
    "pokemon_species_id": EntityKind.POKEMON_SPECIES,
    "pokemon_id": EntityKind.POKEMON,
    "gender_id": EntityKind.GENDER,
    "encounter_condition_value_id": EntityKind.ENCOUNTER_CONDITION_VALUE,
}


def to_camel_case(endpoint: str) -> str:
    """Category name for an endpoint: ``pokemon-species`` -> ``pokemonSpecies``."""
    return re.sub(r"-([a-z0-9])", lambda m: m.group(1).upper(), endpoint)
