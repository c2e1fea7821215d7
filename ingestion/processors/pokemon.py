"""
Pokemon processor.

The heaviest kind: every pokemon carries hundreds of moveset rows, several
forms and an encounter list fetched from a second endpoint. It is always
processed sequentially with periodic memory checks.
"""

from typing import Any, List

from ingestion.base import GapFillingProcessor
from ingestion.oracle import RelationshipCheck
from ingestion.registry import EntityKind
from ingestion.transport import Strategy
from models.base import SeedMode
from models.location import EncounterConditionValueMap, PokemonEncounter
from models.pokemon import (
    MoveLearnedByPokemon, Pokemon, PokemonAbility, PokemonAbilityPast, PokemonForm,
    PokemonFormName, PokemonFormSprites, PokemonFormType, PokemonGameIndex,
    PokemonMove, PokemonSpeciesVariety, PokemonSprites, PokemonStat, PokemonType,
    PokemonTypePast
)
from schemas.resources import (
    LocationAreaEncounter,
    NamedResource,
    PokemonFormResource,
    PokemonResource,
    PokemonSpritesEntry,
)
import logging

logger = logging.getLogger(__name__)

SPRITE_FIELDS = (
    "front_default", "front_shiny", "front_female", "front_shiny_female",
    "back_default", "back_shiny", "back_female", "back_shiny_female",
)
FORM_SPRITE_FIELDS = ("front_default", "front_shiny", "back_default", "back_shiny")


class PokemonProcessor(GapFillingProcessor):
    endpoint = "pokemon"
    kind = EntityKind.POKEMON
    progress_log_interval = 50
    timeout_seconds = 7200
    sequential_only = True
    memory_check_interval = 5
    relationship_checks = (
        RelationshipCheck.on(PokemonAbility, "pokemon_id"),
        RelationshipCheck.on(PokemonType, "pokemon_id"),
        RelationshipCheck.on(PokemonStat, "pokemon_id"),
        RelationshipCheck.on(PokemonMove, "pokemon_id"),
        RelationshipCheck.on(PokemonSprites, "pokemon_id"),
    )

    async def process_item(self, reference: NamedResource, mode: SeedMode) -> Any:
        pokemon = await self.fetch(reference.url, mode, PokemonResource)
        species_id = await self.require_reference(
            EntityKind.POKEMON_SPECIES, pokemon.species, "species", pokemon.name
        )

        await self.engine.upsert_record(Pokemon, pokemon.id, {
            "name": pokemon.name,
            "pokemon_species_id": species_id,
            "height": pokemon.height,
            "weight": pokemon.weight,
            "base_experience": pokemon.base_experience,
            "order": pokemon.order,
            "is_default": pokemon.is_default,
            "cries_latest": pokemon.cries.latest,
            "cries_legacy": pokemon.cries.legacy,
        })

        await self.write_stats_types_abilities(pokemon)
        await self.write_sprites(pokemon.id, pokemon.sprites)
        await self.engine.add_joined_record_data(
            PokemonGameIndex,
            "pokemon_id",
            pokemon.id,
            pokemon.game_indices,
            ["game_index"],
            secondary_key="version_id"
        )
        await self.write_past_types_abilities(pokemon)

        for form_ref in pokemon.forms:
            await self.write_form(form_ref, pokemon.id, mode)

        moves = await self.write_moveset(pokemon)
        encounters = await self.write_encounters(pokemon.id, mode)
        logger.debug(f"Pokemon {pokemon.name}: {moves} moveset rows, {encounters} encounters")
        return pokemon.id

    # ------------------------------------------------------------------
    # Core relationships
    # ------------------------------------------------------------------

    async def write_stats_types_abilities(self, pokemon: PokemonResource) -> None:
        await self.engine.add_joined_record_data(
            PokemonStat,
            "pokemon_id",
            pokemon.id,
            pokemon.stats,
            ["base_stat", "effort"],
            secondary_key="stat_id"
        )

        for entry in pokemon.types:
            type_id = await self.existing_reference(EntityKind.TYPE, entry.type)
            if type_id is None:
                logger.warning(f"Pokemon {pokemon.name}: unknown type {entry.type.name} skipped")
                continue
            await self.engine.upsert_composite(
                PokemonType, {"pokemon_id": pokemon.id, "slot": entry.slot}, {"type_id": type_id}
            )

        for entry in pokemon.abilities:
            ability_id = await self.existing_reference(EntityKind.ABILITY, entry.ability)
            if ability_id is None:
                logger.warning(f"Pokemon {pokemon.name}: ability in slot {entry.slot} not found, skipped")
                continue
            await self.engine.upsert_composite(
                PokemonAbility,
                {"pokemon_id": pokemon.id, "slot": entry.slot},
                {"ability_id": ability_id, "is_hidden": entry.is_hidden}
            )

    async def write_sprites(self, pokemon_id: int, sprites: PokemonSpritesEntry) -> None:
        await self.engine.upsert_composite(
            PokemonSprites,
            {"pokemon_id": pokemon_id},
            {name: getattr(sprites, name) for name in SPRITE_FIELDS}
        )

    async def write_past_types_abilities(self, pokemon: PokemonResource) -> None:
        for past in pokemon.past_types:
            generation_id = await self.existing_reference(EntityKind.GENERATION, past.generation)
            if generation_id is None:
                continue
            for entry in past.types:
                type_id = await self.existing_reference(EntityKind.TYPE, entry.type)
                if type_id is None:
                    continue
                await self.engine.upsert_composite(
                    PokemonTypePast,
                    {"pokemon_id": pokemon.id, "generation_id": generation_id, "slot": entry.slot},
                    {"type_id": type_id}
                )

        for past in pokemon.past_abilities:
            generation_id = await self.existing_reference(EntityKind.GENERATION, past.generation)
            if generation_id is None:
                continue
            for entry in past.abilities:
                await self.engine.upsert_composite(
                    PokemonAbilityPast,
                    {"pokemon_id": pokemon.id, "generation_id": generation_id, "slot": entry.slot},
                    {
                        "ability_id": await self.existing_reference(EntityKind.ABILITY, entry.ability),
                        "is_hidden": entry.is_hidden,
                    }
                )

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    async def write_form(self, form_ref: NamedResource, pokemon_id: int, mode: SeedMode) -> None:
        form = await self.fetch(form_ref.url, mode, PokemonFormResource)

        await self.engine.upsert_record(PokemonForm, form.id, {
            "name": form.name,
            "pokemon_id": pokemon_id,
            "form_name": form.form_name,
            "version_group_id": await self.existing_reference(
                EntityKind.VERSION_GROUP, form.version_group
            ),
            "is_default": form.is_default,
            "is_battle_only": form.is_battle_only,
            "is_mega": form.is_mega,
            "form_order": form.form_order,
            "order": form.order,
        })

        names = {}
        for entry in form.form_names:
            names.setdefault(entry.language.url, {"language": entry.language})["name"] = entry.name
        for entry in form.names:
            names.setdefault(entry.language.url, {"language": entry.language})["pokemon_name"] = entry.name
        await self.engine.add_joined_record_data(
            PokemonFormName, "pokemon_form_id", form.id, names.values(), ["name", "pokemon_name"]
        )

        for entry in form.types:
            type_id = await self.existing_reference(EntityKind.TYPE, entry.type)
            if type_id is None:
                continue
            await self.engine.upsert_composite(
                PokemonFormType, {"pokemon_form_id": form.id, "slot": entry.slot}, {"type_id": type_id}
            )

        await self.engine.upsert_composite(
            PokemonFormSprites,
            {"pokemon_form_id": form.id},
            {name: getattr(form.sprites, name) for name in FORM_SPRITE_FIELDS}
        )

    # ------------------------------------------------------------------
    # Movesets and encounters
    # ------------------------------------------------------------------

    async def write_moveset(self, pokemon: PokemonResource) -> int:
        written = 0
        for entry in pokemon.moves:
            move_id = await self.existing_reference(EntityKind.MOVE, entry.move)
            if move_id is None:
                continue

            await self.engine.upsert_composite(
                MoveLearnedByPokemon, {"move_id": move_id, "pokemon_id": pokemon.id}
            )
            for detail in entry.version_group_details:
                version_group_id = await self.existing_reference(
                    EntityKind.VERSION_GROUP, detail.version_group
                )
                method_id = await self.existing_reference(
                    EntityKind.MOVE_LEARN_METHOD, detail.move_learn_method
                )
                if version_group_id is None or method_id is None:
                    continue

                await self.engine.upsert_composite(
                    PokemonMove,
                    {
                        "pokemon_id": pokemon.id,
                        "version_group_id": version_group_id,
                        "move_id": move_id,
                        "move_learn_method_id": method_id,
                    },
                    {
                        "level_learned_at": detail.level_learned_at or 0,
                        "order": detail.order,
                    }
                )
                written += 1
        return written

    async def write_encounters(self, pokemon_id: int, mode: SeedMode) -> int:
        """Encounter slots from ``{base}pokemon/{id}/encounters``"""
        url = f"{self.context.settings.POKEAPI_BASE_URL}pokemon/{pokemon_id}/encounters"
        areas: List[LocationAreaEncounter] = await self.transport.fetch_resource_list(
            url, Strategy.for_mode(mode), LocationAreaEncounter
        )

        written = 0
        for area in areas:
            area_id = await self.existing_reference(EntityKind.LOCATION_AREA, area.location_area)
            if area_id is None:
                continue
            for version_detail in area.version_details:
                version_id = await self.existing_reference(EntityKind.VERSION, version_detail.version)
                if version_id is None:
                    continue
                for encounter in version_detail.encounter_details:
                    method_id = await self.existing_reference(
                        EntityKind.ENCOUNTER_METHOD, encounter.method
                    )
                    if method_id is None:
                        continue

                    encounter_id = await self.engine.upsert_composite(
                        PokemonEncounter,
                        {
                            "pokemon_id": pokemon_id,
                            "location_area_id": area_id,
                            "encounter_method_id": method_id,
                            "version_id": version_id,
                            "min_level": encounter.min_level,
                            "max_level": encounter.max_level,
                        },
                        {"chance": encounter.chance},
                        returning="id"
                    )
                    if encounter_id is None:
                        continue
                    await self.engine.upsert_join_record(
                        EncounterConditionValueMap,
                        "pokemon_encounter_id",
                        encounter_id,
                        encounter.condition_values,
                        "encounter_condition_value_id"
                    )
                    written += 1
        return written

    # ------------------------------------------------------------------
    # Post-pass
    # ------------------------------------------------------------------

    async def post_process(self, results: List[int]) -> None:
        """Rebuild species varieties from every stored pokemon"""
        rows = await self.engine.select_rows(
            Pokemon.id, Pokemon.pokemon_species_id, Pokemon.is_default
        )
        rebuilt = 0
        for pokemon_id, species_id, is_default in rows:
            if species_id is None:
                continue
            await self.engine.upsert_composite(
                PokemonSpeciesVariety,
                {"pokemon_species_id": species_id, "pokemon_id": pokemon_id},
                {"is_default": bool(is_default)}
            )
            rebuilt += 1
        logger.info(f"Rebuilt {rebuilt} species varieties from {len(rows)} stored pokemon")
