"""
Entity processors, one per catalog resource kind.

Modules:
    common: Shared shape for small named vocabularies
    foundation: Languages, regions, generations, version groups
    supplementary: Move/species/berry/contest/item vocabularies and the id-0 meta defaults
    types: Types and damage relations
    abilities: Abilities
    moves: Moves with meta data, stat changes and past values
    items: Items, machines, item attributes
    misc: Berries, natures, characteristics, genders, pokeathlon stats,
        encounter vocabularies, evolution triggers, gender-species associations
    locations: Locations, location areas, pal park areas
    species: Species, evolution chains, pokedexes, species varieties
    pokemon: Pokemon with forms, movesets and encounters

Every processor is constructed with the run context, the transport, the
upsert engine and the existing-id oracle, and is driven by
``ingestion.seeder.GenericSeeder``.
"""

from ingestion.processors.abilities import AbilityProcessor
from ingestion.processors.foundation import (
    GenerationProcessor, LanguageProcessor, RegionProcessor, VersionGroupProcessor
)
from ingestion.processors.items import ItemAttributeProcessor, ItemProcessor, MachineProcessor
from ingestion.processors.locations import (
    LocationAreaProcessor, LocationProcessor, PalParkAreaProcessor
)
from ingestion.processors.misc import (
    BerryProcessor,
    CharacteristicProcessor,
    EncounterConditionProcessor,
    EncounterMethodProcessor,
    EvolutionTriggerProcessor,
    GenderProcessor,
    GenderSpeciesAssociationProcessor,
    NatureProcessor,
    PokeathlonStatProcessor,
)
from ingestion.processors.moves import MoveProcessor
from ingestion.processors.pokemon import PokemonProcessor
from ingestion.processors.species import (
    EvolutionChainProcessor,
    PokedexProcessor,
    PokemonSpeciesProcessor,
    PokemonSpeciesVarietyProcessor,
)
from ingestion.processors.supplementary import (
    BerryFirmnessProcessor,
    BerryFlavorProcessor,
    ContestEffectProcessor,
    ContestTypeProcessor,
    EggGroupProcessor,
    GrowthRateProcessor,
    ItemCategoryProcessor,
    ItemFlingEffectProcessor,
    ItemPocketProcessor,
    MoveAilmentProcessor,
    MoveBattleStyleProcessor,
    MoveCategoryProcessor,
    MoveDamageClassProcessor,
    MoveLearnMethodProcessor,
    MoveTargetProcessor,
    PokemonColorProcessor,
    PokemonHabitatProcessor,
    PokemonShapeProcessor,
    StatProcessor,
    SuperContestEffectProcessor,
    ensure_default_meta_ailment,
    ensure_default_meta_category,
)
from ingestion.processors.types import TypeProcessor

__all__ = [
    "AbilityProcessor",
    "BerryFirmnessProcessor",
    "BerryFlavorProcessor",
    "BerryProcessor",
    "CharacteristicProcessor",
    "ContestEffectProcessor",
    "ContestTypeProcessor",
    "EggGroupProcessor",
    "EncounterConditionProcessor",
    "EncounterMethodProcessor",
    "EvolutionChainProcessor",
    "EvolutionTriggerProcessor",
    "GenderProcessor",
    "GenderSpeciesAssociationProcessor",
    "GenerationProcessor",
    "GrowthRateProcessor",
    "ItemAttributeProcessor",
    "ItemCategoryProcessor",
    "ItemFlingEffectProcessor",
    "ItemPocketProcessor",
    "ItemProcessor",
    "LanguageProcessor",
    "LocationAreaProcessor",
    "LocationProcessor",
    "MachineProcessor",
    "MoveAilmentProcessor",
    "MoveBattleStyleProcessor",
    "MoveCategoryProcessor",
    "MoveDamageClassProcessor",
    "MoveLearnMethodProcessor",
    "MoveProcessor",
    "MoveTargetProcessor",
    "NatureProcessor",
    "PalParkAreaProcessor",
    "PokeathlonStatProcessor",
    "PokedexProcessor",
    "PokemonColorProcessor",
    "PokemonHabitatProcessor",
    "PokemonProcessor",
    "PokemonShapeProcessor",
    "PokemonSpeciesProcessor",
    "PokemonSpeciesVarietyProcessor",
    "RegionProcessor",
    "StatProcessor",
    "SuperContestEffectProcessor",
    "TypeProcessor",
    "VersionGroupProcessor",
    "ensure_default_meta_ailment",
    "ensure_default_meta_category",
]
