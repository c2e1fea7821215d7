"""
SQLAlchemy ORM models for the Pokedex catalog tables.

This package defines the relational schema the seeding pipeline writes into:

Models:
    base: Base declarative class and shared enums (SeedMode, RunStatus)
    language: Languages, regions, generations, version groups and versions
    stat: Stats, pokeathlon stats, characteristics, natures, genders
    move: Move vocabularies, moves and their localized/meta data
    contest: Contest types and (super) contest effects
    berry: Berry flavors, firmnesses, berries and flavor potency
    types: Types and the type-effectiveness matrix
    ability: Abilities and their texts/change logs
    item: Item vocabularies, items, item attributes and machines
    location: Locations, areas, pal park and encounters
    species: Species vocabularies, species and pokedexes
    evolution: Evolution triggers, chains and requirements
    pokemon: Pokemon, their stats/types/abilities/moves/sprites and forms
    seed_run: Seeding run audit trail

Database Schema:
    Primary-keyed tables use the remote catalog's numeric identifier as
    their primary key (no autoincrement). Join and localization tables use
    composite primary keys over their foreign keys, which is what makes
    every write an idempotent upsert.

Usage:
    import models  # registers every table on Base.metadata
    from models.base import Base
    from models.species import PokemonSpecies
"""

from models import (  # noqa: F401
    base,
    language,
    stat,
    move,
    contest,
    berry,
    types,
    ability,
    item,
    location,
    species,
    evolution,
    pokemon,
    seed_run,
)
from models.base import Base, SeedMode, RunStatus
from models.seed_run import SeedRun

__all__ = [
    "Base",
    "SeedMode",
    "RunStatus",
    "SeedRun",
]
