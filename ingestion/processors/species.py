"""
Species, evolution-chain, pokedex and species-variety processors
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from ingestion.base import GapFillingProcessor, SeedProcessor
from ingestion.evolution import EvolutionGraphBuilder, chain_members, parse_chain
from ingestion.oracle import RelationshipCheck
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.evolution import EvolutionChain
from models.pokemon import PokemonSpeciesVariety
from models.species import (
    Pokedex, PokedexDescription, PokedexName, PokemonSpecies, PokemonSpeciesEggGroup,
    PokemonSpeciesFlavorText, PokemonSpeciesName, PokemonSpeciesPokedexNumber,
    VersionGroupPokedex
)
from schemas.resources import (
    EvolutionChainResource,
    NamedResource,
    PokedexEntry,
    PokedexResource,
    PokemonSpeciesResource,
)
import logging

logger = logging.getLogger(__name__)


def merge_names_and_genera(species: PokemonSpeciesResource) -> List[Dict[str, Any]]:
    """One entry per language carrying both the name and the genus"""
    entries: Dict[str, Dict[str, Any]] = {}
    for name in species.names:
        entries.setdefault(name.language.url, {"language": name.language})["name"] = name.name
    for genus in species.genera:
        entries.setdefault(genus.language.url, {"language": genus.language})["genus"] = genus.genus
    return list(entries.values())


class PokemonSpeciesProcessor(GapFillingProcessor):
    """
    Species with names/genera, egg groups and flavor texts.

    The evolves-from link and the owning chain are only recorded here; the
    post-pass writes evolves-from once every species of the run is stored and
    the evolution-chain phase stamps chains.
    """

    endpoint = "pokemon-species"
    kind = EntityKind.POKEMON_SPECIES
    progress_log_interval = 100
    timeout_seconds = 1800
    relationship_checks = (
        RelationshipCheck.on(PokemonSpeciesName, "pokemon_species_id"),
        RelationshipCheck.on(PokemonSpeciesEggGroup, "pokemon_species_id"),
        RelationshipCheck.on(PokemonSpeciesFlavorText, "pokemon_species_id"),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.builder = EvolutionGraphBuilder(self.engine, self.context)

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        species = await self.fetch(reference.url, mode, PokemonSpeciesResource)

        await self.engine.upsert_record(PokemonSpecies, species.id, {
            "name": species.name,
            "order": species.order,
            "gender_rate": species.gender_rate,
            "capture_rate": species.capture_rate,
            "base_happiness": species.base_happiness,
            "is_baby": species.is_baby,
            "is_legendary": species.is_legendary,
            "is_mythical": species.is_mythical,
            "hatch_counter": species.hatch_counter,
            "has_gender_differences": species.has_gender_differences,
            "forms_switchable": species.forms_switchable,
            "generation_id": await self.require_reference(
                EntityKind.GENERATION, species.generation, "generation", species.name
            ),
            "growth_rate_id": await self.require_reference(
                EntityKind.GROWTH_RATE, species.growth_rate, "growth_rate", species.name
            ),
            "pokemon_color_id": await self.require_reference(
                EntityKind.POKEMON_COLOR, species.color, "color", species.name
            ),
            "pokemon_shape_id": await self.require_reference(
                EntityKind.POKEMON_SHAPE, species.shape, "shape", species.name
            ),
            "pokemon_habitat_id": await self.existing_reference(
                EntityKind.POKEMON_HABITAT, species.habitat
            ),
        })

        await self.engine.add_joined_record_data(
            PokemonSpeciesName,
            "pokemon_species_id",
            species.id,
            merge_names_and_genera(species),
            ["name", "genus"]
        )
        await self.engine.upsert_join_record(
            PokemonSpeciesEggGroup,
            "pokemon_species_id",
            species.id,
            species.egg_groups,
            "egg_group_id"
        )
        await self.engine.add_versioned_text(
            PokemonSpeciesFlavorText,
            "pokemon_species_id",
            species.id,
            species.flavor_text_entries,
            ["flavor_text"],
            version_key="version_id"
        )

        if species.evolves_from_species is not None and species.evolves_from_species.id is not None:
            self.context.evolution_mappings[species.id] = species.evolves_from_species.id
        if species.evolution_chain is not None and species.evolution_chain.id is not None:
            self.context.evolution_chain_mappings[species.id] = species.evolution_chain.id

        return species.id

    async def post_process(self, results: List[int]) -> None:
        await self.builder.apply_evolves_from()


class EvolutionChainProcessor(GapFillingProcessor):
    """
    Evolution chains: the chain row, the species stamps and requirement rows
    from the tree walk, then cross-chain lineage resolution over the run.

    A chain counts as done once its species are stamped with it; the stamp
    is written in one statement after every requirement row.
    """

    endpoint = "evolution-chain"
    kind = EntityKind.EVOLUTION_CHAIN
    progress_log_interval = 50
    timeout_seconds = 1200
    relationship_checks = (
        RelationshipCheck.on(PokemonSpecies, "evolution_chain_id"),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.builder = EvolutionGraphBuilder(self.engine, self.context)

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        chain = await self.fetch(reference.url, mode, EvolutionChainResource)

        await self.engine.upsert_record(EvolutionChain, chain.id, {
            "baby_trigger_item_id": await self.existing_reference(
                EntityKind.ITEM, chain.baby_trigger_item
            ),
        })

        root = parse_chain(chain.chain)
        if root is None:
            logger.warning(f"Evolution chain {chain.id} has no usable root species")
            return None

        if root.skipped_details:
            logger.debug(f"Evolution chain {chain.id}: {root.skipped_details} details without trigger")

        stamped, created = await self.builder.apply(chain.id, root)
        logger.debug(
            f"Evolution chain {chain.id}: {stamped} species stamped, {created} requirements created"
        )
        return chain.id, chain_members(root)

    async def post_process(self, results: List[Tuple[int, List[int]]]) -> None:
        await self.builder.resolve_lineages(dict(results))


class PokedexProcessor(GapFillingProcessor):
    """Pokedexes; entry numbers are written by the post-pass"""

    endpoint = "pokedex"
    kind = EntityKind.POKEDEX
    progress_log_interval = 10
    timeout_seconds = 600
    relationship_checks = (
        RelationshipCheck.on(VersionGroupPokedex, "pokedex_id"),
        RelationshipCheck.on(PokemonSpeciesPokedexNumber, "pokedex_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        pokedex = await self.fetch(reference.url, mode, PokedexResource)

        await self.engine.upsert_record(Pokedex, pokedex.id, {
            "name": pokedex.name,
            "is_main_series": pokedex.is_main_series,
            "region_id": await self.existing_reference(EntityKind.REGION, pokedex.region),
        })
        await self.engine.add_joined_record_data(
            PokedexName, "pokedex_id", pokedex.id, pokedex.names, ["name"]
        )
        await self.engine.add_joined_record_data(
            PokedexDescription, "pokedex_id", pokedex.id, pokedex.descriptions, ["description"]
        )
        await self.engine.upsert_join_record(
            VersionGroupPokedex, "pokedex_id", pokedex.id, pokedex.version_groups, "version_group_id"
        )
        return pokedex.id, pokedex.pokemon_entries

    async def post_process(self, results: List[Tuple[int, List[PokedexEntry]]]) -> None:
        written = 0
        for pokedex_id, entries in results:
            written += await self.engine.add_joined_record_data(
                PokemonSpeciesPokedexNumber,
                "pokedex_id",
                pokedex_id,
                entries,
                {"pokedex_number": "entry_number"},
                secondary_key="pokemon_species_id"
            )
        logger.info(f"Wrote {written} pokedex numbers for {len(results)} pokedexes")


class PokemonSpeciesVarietyProcessor(SeedProcessor):
    """Links species to their pokemon; species already linked are skipped"""

    endpoint = "pokemon-species"
    progress_log_interval = 100
    timeout_seconds = 1200

    @property
    def category(self) -> str:
        return "pokemonSpeciesVarieties"

    async def existing_ids(self) -> Optional[Set[int]]:
        return await self.oracle.related_ids(
            RelationshipCheck.on(PokemonSpeciesVariety, "pokemon_species_id")
        )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        species = await self.fetch(reference.url, mode, PokemonSpeciesResource)
        if not await self.engine.exists(EntityKind.POKEMON_SPECIES, species.id):
            logger.warning(f"Species {species.name} not stored, varieties skipped")
            return None

        linked = await self.engine.add_joined_record_data(
            PokemonSpeciesVariety,
            "pokemon_species_id",
            species.id,
            species.varieties,
            ["is_default"],
            secondary_key="pokemon_id"
        )
        return linked
