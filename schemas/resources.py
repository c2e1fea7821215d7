"""
Pydantic schemas for remote catalog resources.

Every resource kind fetched from the catalog is validated against one of
these schemas at the transport boundary, so processors work with typed
structures instead of raw dictionaries. Unknown keys are ignored; fields the
catalog may omit or null are Optional.
"""

import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List

ID_PATTERN = re.compile(r"/(\d+)/$")


def extract_id_from_url(url: Optional[str]) -> Optional[int]:
    """Return the trailing numeric path segment of a catalog URL, if any."""
    if not url:
        return None
    match = ID_PATTERN.search(url)
    return int(match.group(1)) if match else None


class CatalogModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ============================================================================
# References and pages
# ============================================================================

class NamedResource(CatalogModel):
    """Pointer into the catalog; the primary key is embedded in the url."""

    name: Optional[str] = None
    url: str

    @property
    def id(self) -> Optional[int]:
        return extract_id_from_url(self.url)


class ResourceList(CatalogModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[NamedResource] = Field(default_factory=list)


def ref_id(ref: Optional[NamedResource]) -> Optional[int]:
    """Identifier of an optional reference."""
    return ref.id if ref is not None else None


# ============================================================================
# Localized entries
# ============================================================================

class Name(CatalogModel):
    name: Optional[str] = None
    language: NamedResource


class Description(CatalogModel):
    description: Optional[str] = None
    language: NamedResource


class Effect(CatalogModel):
    effect: Optional[str] = None
    language: NamedResource


class VerboseEffect(CatalogModel):
    effect: Optional[str] = None
    short_effect: Optional[str] = None
    language: NamedResource


class FlavorText(CatalogModel):
    flavor_text: Optional[str] = None
    language: NamedResource
    version: Optional[NamedResource] = None
    version_group: Optional[NamedResource] = None


class ItemFlavorText(CatalogModel):
    text: Optional[str] = None
    language: NamedResource
    version_group: Optional[NamedResource] = None


class Genus(CatalogModel):
    genus: Optional[str] = None
    language: NamedResource


class AwesomeName(CatalogModel):
    awesome_name: Optional[str] = None
    language: NamedResource


class ContestName(CatalogModel):
    name: Optional[str] = None
    color: Optional[str] = None
    language: NamedResource


class NamedVocabulary(CatalogModel):
    """Any small kind that only carries a name and localized names."""

    id: int
    name: str
    names: List[Name] = Field(default_factory=list)


class DescribedVocabulary(NamedVocabulary):
    descriptions: List[Description] = Field(default_factory=list)


# ============================================================================
# Foundation
# ============================================================================

class LanguageResource(CatalogModel):
    id: int
    name: str
    official: bool = False
    iso639: Optional[str] = None
    iso3166: Optional[str] = None
    names: List[Name] = Field(default_factory=list)


class RegionResource(CatalogModel):
    id: int
    name: str


class GenerationResource(CatalogModel):
    id: int
    name: str
    main_region: Optional[NamedResource] = None


class VersionResource(CatalogModel):
    id: int
    name: str
    names: List[Name] = Field(default_factory=list)
    version_group: Optional[NamedResource] = None


class VersionGroupResource(CatalogModel):
    id: int
    name: str
    order: Optional[int] = None
    generation: Optional[NamedResource] = None
    versions: List[NamedResource] = Field(default_factory=list)


# ============================================================================
# Supplementary vocabularies
# ============================================================================

class StatResource(NamedVocabulary):
    game_index: Optional[int] = None
    is_battle_only: bool = False
    move_damage_class: Optional[NamedResource] = None


class GrowthRateLevel(CatalogModel):
    level: int
    experience: int


class GrowthRateResource(CatalogModel):
    id: int
    name: str
    formula: Optional[str] = None
    descriptions: List[Description] = Field(default_factory=list)
    levels: List[GrowthRateLevel] = Field(default_factory=list)


class PokemonShapeResource(NamedVocabulary):
    awesome_names: List[AwesomeName] = Field(default_factory=list)


class MoveMetaCategoryResource(CatalogModel):
    id: int
    name: str
    descriptions: List[Description] = Field(default_factory=list)


class ContestTypeResource(CatalogModel):
    id: int
    name: str
    berry_flavor: Optional[NamedResource] = None
    names: List[ContestName] = Field(default_factory=list)


class ContestEffectResource(CatalogModel):
    id: int
    appeal: int = 0
    jam: int = 0
    effect_entries: List[Effect] = Field(default_factory=list)
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)


class SuperContestEffectResource(CatalogModel):
    id: int
    appeal: int = 0
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)


class ItemCategoryResource(NamedVocabulary):
    pocket: Optional[NamedResource] = None


class ItemFlingEffectResource(CatalogModel):
    id: int
    name: str
    effect_entries: List[Effect] = Field(default_factory=list)


# ============================================================================
# Types and abilities
# ============================================================================

class TypeRelations(CatalogModel):
    no_damage_to: List[NamedResource] = Field(default_factory=list)
    half_damage_to: List[NamedResource] = Field(default_factory=list)
    double_damage_to: List[NamedResource] = Field(default_factory=list)
    no_damage_from: List[NamedResource] = Field(default_factory=list)
    half_damage_from: List[NamedResource] = Field(default_factory=list)
    double_damage_from: List[NamedResource] = Field(default_factory=list)


class TypeRelationsPast(CatalogModel):
    generation: NamedResource
    damage_relations: TypeRelations


class TypeResource(NamedVocabulary):
    generation: Optional[NamedResource] = None
    move_damage_class: Optional[NamedResource] = None
    damage_relations: TypeRelations = Field(default_factory=TypeRelations)
    past_damage_relations: List[TypeRelationsPast] = Field(default_factory=list)


class AbilityEffectChange(CatalogModel):
    effect_entries: List[Effect] = Field(default_factory=list)
    version_group: NamedResource


class AbilityResource(NamedVocabulary):
    is_main_series: bool = True
    generation: Optional[NamedResource] = None
    effect_entries: List[VerboseEffect] = Field(default_factory=list)
    effect_changes: List[AbilityEffectChange] = Field(default_factory=list)
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)


# ============================================================================
# Moves
# ============================================================================

class MoveStatChangeEntry(CatalogModel):
    change: int
    stat: NamedResource


class MoveMeta(CatalogModel):
    ailment: Optional[NamedResource] = None
    category: Optional[NamedResource] = None
    min_hits: Optional[int] = None
    max_hits: Optional[int] = None
    min_turns: Optional[int] = None
    max_turns: Optional[int] = None
    drain: Optional[int] = None
    healing: Optional[int] = None
    crit_rate: Optional[int] = None
    ailment_chance: Optional[int] = None
    flinch_chance: Optional[int] = None
    stat_chance: Optional[int] = None


class PastMoveValues(CatalogModel):
    accuracy: Optional[int] = None
    effect_chance: Optional[int] = None
    power: Optional[int] = None
    pp: Optional[int] = None
    type: Optional[NamedResource] = None
    version_group: NamedResource


class MoveResource(NamedVocabulary):
    accuracy: Optional[int] = None
    effect_chance: Optional[int] = None
    pp: Optional[int] = None
    priority: int = 0
    power: Optional[int] = None
    generation: Optional[NamedResource] = None
    type: Optional[NamedResource] = None
    damage_class: Optional[NamedResource] = None
    target: Optional[NamedResource] = None
    contest_type: Optional[NamedResource] = None
    contest_effect: Optional[NamedResource] = None
    super_contest_effect: Optional[NamedResource] = None
    meta: Optional[MoveMeta] = None
    effect_entries: List[VerboseEffect] = Field(default_factory=list)
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)
    stat_changes: List[MoveStatChangeEntry] = Field(default_factory=list)
    past_values: List[PastMoveValues] = Field(default_factory=list)


# ============================================================================
# Items and berries
# ============================================================================

class GenerationGameIndex(CatalogModel):
    game_index: int
    generation: NamedResource


class ItemResource(NamedVocabulary):
    cost: int = 0
    fling_power: Optional[int] = None
    fling_effect: Optional[NamedResource] = None
    category: Optional[NamedResource] = None
    attributes: List[NamedResource] = Field(default_factory=list)
    effect_entries: List[VerboseEffect] = Field(default_factory=list)
    flavor_text_entries: List[ItemFlavorText] = Field(default_factory=list)
    game_indices: List[GenerationGameIndex] = Field(default_factory=list)


class ItemAttributeResource(DescribedVocabulary):
    items: List[NamedResource] = Field(default_factory=list)


class MachineResource(CatalogModel):
    id: int
    item: NamedResource
    move: NamedResource
    version_group: NamedResource


class BerryFlavorPotency(CatalogModel):
    potency: int
    flavor: NamedResource


class BerryResource(CatalogModel):
    id: int
    name: str
    growth_time: int = 0
    max_harvest: int = 0
    natural_gift_power: int = 0
    size: int = 0
    smoothness: int = 0
    soil_dryness: int = 0
    firmness: Optional[NamedResource] = None
    natural_gift_type: Optional[NamedResource] = None
    item: Optional[NamedResource] = None
    flavors: List[BerryFlavorPotency] = Field(default_factory=list)


# ============================================================================
# Natures, characteristics, genders
# ============================================================================

class NatureStatChange(CatalogModel):
    max_change: int
    pokeathlon_stat: NamedResource


class MoveBattleStylePreference(CatalogModel):
    low_hp_preference: int
    high_hp_preference: int
    move_battle_style: NamedResource


class NatureResource(NamedVocabulary):
    decreased_stat: Optional[NamedResource] = None
    increased_stat: Optional[NamedResource] = None
    hates_flavor: Optional[NamedResource] = None
    likes_flavor: Optional[NamedResource] = None
    pokeathlon_stat_changes: List[NatureStatChange] = Field(default_factory=list)
    move_battle_style_preferences: List[MoveBattleStylePreference] = Field(default_factory=list)


class CharacteristicResource(CatalogModel):
    id: int
    gene_modulo: int
    possible_values: List[int] = Field(default_factory=list)
    highest_stat: Optional[NamedResource] = None
    descriptions: List[Description] = Field(default_factory=list)


class GenderSpeciesDetail(CatalogModel):
    rate: Optional[int] = None
    pokemon_species: NamedResource


class GenderResource(CatalogModel):
    id: int
    name: str
    pokemon_species_details: List[GenderSpeciesDetail] = Field(default_factory=list)


# ============================================================================
# Locations and encounters
# ============================================================================

class LocationResource(NamedVocabulary):
    region: Optional[NamedResource] = None


class LocationAreaResource(NamedVocabulary):
    game_index: Optional[int] = None
    location: Optional[NamedResource] = None


class PalParkEncounterSpecies(CatalogModel):
    base_score: int
    rate: int
    pokemon_species: NamedResource


class PalParkAreaResource(NamedVocabulary):
    pokemon_encounters: List[PalParkEncounterSpecies] = Field(default_factory=list)


class EncounterMethodResource(NamedVocabulary):
    order: Optional[int] = None


class EncounterConditionResource(NamedVocabulary):
    values: List[NamedResource] = Field(default_factory=list)


class EncounterConditionValueResource(NamedVocabulary):
    condition: Optional[NamedResource] = None


class Encounter(CatalogModel):
    min_level: int
    max_level: int
    chance: int
    method: NamedResource
    condition_values: List[NamedResource] = Field(default_factory=list)


class VersionEncounterDetail(CatalogModel):
    version: NamedResource
    max_chance: Optional[int] = None
    encounter_details: List[Encounter] = Field(default_factory=list)


class LocationAreaEncounter(CatalogModel):
    location_area: NamedResource
    version_details: List[VersionEncounterDetail] = Field(default_factory=list)


# ============================================================================
# Species, evolution and pokedexes
# ============================================================================

class PokemonSpeciesVarietyEntry(CatalogModel):
    is_default: bool = False
    pokemon: NamedResource


class PokemonSpeciesResource(NamedVocabulary):
    order: Optional[int] = None
    gender_rate: int = -1
    capture_rate: int = 0
    base_happiness: Optional[int] = None
    is_baby: bool = False
    is_legendary: bool = False
    is_mythical: bool = False
    hatch_counter: Optional[int] = None
    has_gender_differences: bool = False
    forms_switchable: bool = False
    growth_rate: Optional[NamedResource] = None
    egg_groups: List[NamedResource] = Field(default_factory=list)
    color: Optional[NamedResource] = None
    shape: Optional[NamedResource] = None
    habitat: Optional[NamedResource] = None
    generation: Optional[NamedResource] = None
    evolves_from_species: Optional[NamedResource] = None
    evolution_chain: Optional[NamedResource] = None
    genera: List[Genus] = Field(default_factory=list)
    flavor_text_entries: List[FlavorText] = Field(default_factory=list)
    varieties: List[PokemonSpeciesVarietyEntry] = Field(default_factory=list)


class EvolutionDetail(CatalogModel):
    trigger: Optional[NamedResource] = None
    item: Optional[NamedResource] = None
    gender: Optional[int] = None
    held_item: Optional[NamedResource] = None
    known_move: Optional[NamedResource] = None
    known_move_type: Optional[NamedResource] = None
    location: Optional[NamedResource] = None
    party_species: Optional[NamedResource] = None
    party_type: Optional[NamedResource] = None
    trade_species: Optional[NamedResource] = None
    min_level: Optional[int] = None
    min_happiness: Optional[int] = None
    min_beauty: Optional[int] = None
    min_affection: Optional[int] = None
    needs_overworld_rain: bool = False
    relative_physical_stats: Optional[int] = None
    time_of_day: Optional[str] = None
    turn_upside_down: bool = False

    @field_validator("time_of_day")
    @classmethod
    def blank_time_of_day(cls, v):
        """The catalog sends an empty string when there is no time condition"""
        return v or None


class ChainLink(CatalogModel):
    is_baby: bool = False
    species: NamedResource
    evolution_details: List[EvolutionDetail] = Field(default_factory=list)
    evolves_to: List["ChainLink"] = Field(default_factory=list)


class EvolutionChainResource(CatalogModel):
    id: int
    baby_trigger_item: Optional[NamedResource] = None
    chain: ChainLink


class PokedexEntry(CatalogModel):
    entry_number: int
    pokemon_species: NamedResource


class PokedexResource(DescribedVocabulary):
    is_main_series: bool = True
    region: Optional[NamedResource] = None
    version_groups: List[NamedResource] = Field(default_factory=list)
    pokemon_entries: List[PokedexEntry] = Field(default_factory=list)


# ============================================================================
# Pokemon
# ============================================================================

class PokemonAbilityEntry(CatalogModel):
    is_hidden: bool = False
    slot: int
    ability: Optional[NamedResource] = None


class PokemonTypeEntry(CatalogModel):
    slot: int
    type: NamedResource


class PokemonStatEntry(CatalogModel):
    base_stat: int
    effort: int = 0
    stat: NamedResource


class VersionGameIndex(CatalogModel):
    game_index: int
    version: NamedResource


class MoveVersionDetail(CatalogModel):
    level_learned_at: Optional[int] = None
    order: Optional[int] = None
    version_group: NamedResource
    move_learn_method: NamedResource


class PokemonMoveEntry(CatalogModel):
    move: NamedResource
    version_group_details: List[MoveVersionDetail] = Field(default_factory=list)


class PokemonTypePastEntry(CatalogModel):
    generation: NamedResource
    types: List[PokemonTypeEntry] = Field(default_factory=list)


class PokemonAbilityPastEntry(CatalogModel):
    generation: NamedResource
    abilities: List[PokemonAbilityEntry] = Field(default_factory=list)


class PokemonSpritesEntry(CatalogModel):
    front_default: Optional[str] = None
    front_shiny: Optional[str] = None
    front_female: Optional[str] = None
    front_shiny_female: Optional[str] = None
    back_default: Optional[str] = None
    back_shiny: Optional[str] = None
    back_female: Optional[str] = None
    back_shiny_female: Optional[str] = None


class PokemonCries(CatalogModel):
    latest: Optional[str] = None
    legacy: Optional[str] = None


class PokemonResource(CatalogModel):
    id: int
    name: str
    base_experience: Optional[int] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    order: Optional[int] = None
    is_default: bool = True
    species: NamedResource
    abilities: List[PokemonAbilityEntry] = Field(default_factory=list)
    forms: List[NamedResource] = Field(default_factory=list)
    game_indices: List[VersionGameIndex] = Field(default_factory=list)
    moves: List[PokemonMoveEntry] = Field(default_factory=list)
    past_types: List[PokemonTypePastEntry] = Field(default_factory=list)
    past_abilities: List[PokemonAbilityPastEntry] = Field(default_factory=list)
    sprites: PokemonSpritesEntry = Field(default_factory=PokemonSpritesEntry)
    cries: PokemonCries = Field(default_factory=PokemonCries)
    stats: List[PokemonStatEntry] = Field(default_factory=list)
    types: List[PokemonTypeEntry] = Field(default_factory=list)


class PokemonFormResource(NamedVocabulary):
    pokemon: NamedResource
    form_name: Optional[str] = None
    version_group: Optional[NamedResource] = None
    is_default: bool = False
    is_battle_only: bool = False
    is_mega: bool = False
    form_order: Optional[int] = None
    order: Optional[int] = None
    form_names: List[Name] = Field(default_factory=list)
    sprites: PokemonSpritesEntry = Field(default_factory=PokemonSpritesEntry)
    types: List[PokemonTypeEntry] = Field(default_factory=list)
