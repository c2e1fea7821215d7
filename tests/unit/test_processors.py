"""
Unit tests for entity processors
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from core.exceptions import MissingRelationshipError
from ingestion.oracle import ExistingIdOracle, RelationshipCheck
from ingestion.processors import (
    ItemAttributeProcessor,
    ItemProcessor,
    MoveProcessor,
    PokemonProcessor,
    PokemonSpeciesProcessor,
    PokemonSpeciesVarietyProcessor,
    TypeProcessor,
)
from ingestion.processors.supplementary import DEFAULT_META_AILMENT_ID, DEFAULT_META_CATEGORY_ID
from ingestion.registry import EntityKind
from models.base import SeedMode
from models.item import Item, ItemAttributeMap
from models.move import Move, MoveMetaData
from models.species import PokemonSpecies, PokemonSpeciesName
from models.types import TypeEfficacy
from schemas.resources import NamedResource, TypeResource
from tests.helpers import FakeTransport, ref, resource_url


def make_engine(known=None) -> MagicMock:
    """Upsert engine double; ``known`` maps kinds to the ids that exist"""
    known = known or {}
    engine = MagicMock()

    async def exists(kind, record_id):
        return record_id in known.get(kind, set())

    engine.exists = AsyncMock(side_effect=exists)
    engine.upsert_record = AsyncMock(return_value=True)
    engine.upsert_composite = AsyncMock()
    engine.upsert_join_record = AsyncMock(return_value=1)
    engine.add_joined_record_data = AsyncMock(return_value=1)
    engine.add_versioned_text = AsyncMock(return_value=1)
    engine.select_rows = AsyncMock(return_value=[])
    engine.update_fields = AsyncMock(return_value=1)
    engine.update_many = AsyncMock(return_value=1)
    return engine


def build(processor_cls, run_context, payloads=None, known=None, oracle=None):
    return processor_cls(
        run_context,
        FakeTransport(payloads or {}),
        make_engine(known),
        oracle or MagicMock(),
    )


def species_payload(species_id=2, **overrides):
    payload = {
        "id": species_id,
        "name": "ivysaur",
        "order": 2,
        "gender_rate": 1,
        "capture_rate": 45,
        "growth_rate": ref("growth-rate", 4),
        "color": ref("pokemon-color", 5),
        "shape": ref("pokemon-shape", 8),
        "generation": ref("generation", 1),
        "evolves_from_species": ref("pokemon-species", 1, "bulbasaur"),
        "evolution_chain": {"url": resource_url("evolution-chain", 1)},
        "names": [{"name": "Ivysaur", "language": ref("language", 9, "en")}],
        "genera": [{"genus": "Seed Pokémon", "language": ref("language", 9, "en")}],
        "egg_groups": [ref("egg-group", 1)],
    }
    payload.update(overrides)
    return payload


def move_payload(**overrides):
    payload = {
        "id": 33,
        "name": "tackle",
        "power": 40,
        "pp": 35,
        "accuracy": 100,
        "priority": 0,
        "generation": ref("generation", 1),
        "type": ref("type", 1, "normal"),
        "damage_class": ref("move-damage-class", 2, "physical"),
        "target": ref("move-target", 10, "selected-pokemon"),
        "meta": {
            "ailment": ref("move-ailment", 5, "poison"),
            "category": ref("move-category", 0, "damage"),
            "drain": None,
            "crit_rate": 0,
        },
    }
    payload.update(overrides)
    return payload


MOVE_KNOWN = {
    EntityKind.GENERATION: {1},
    EntityKind.TYPE: {1},
    EntityKind.MOVE_DAMAGE_CLASS: {2},
    EntityKind.MOVE_TARGET: {10},
    EntityKind.MOVE_META_CATEGORY: {0},
}


class TestGapFilling:
    """Test resumability of processors with relationship checks"""

    @pytest.mark.asyncio
    async def test_species_skips_only_complete_rows(self, run_context):
        oracle = MagicMock()
        oracle.complete_ids = AsyncMock(return_value={1})
        processor = build(PokemonSpeciesProcessor, run_context, oracle=oracle)

        assert await processor.existing_ids() == {1}

        kind, checks = oracle.complete_ids.await_args.args
        assert kind == EntityKind.POKEMON_SPECIES
        assert RelationshipCheck.on(PokemonSpeciesName, "pokemon_species_id") in checks
        assert len(checks) == 3

    @pytest.mark.asyncio
    async def test_complete_ids_intersects_relationship_tables(self):
        """Species 2 lacks names and 3 lacks egg groups; only 1 is complete"""
        oracle = ExistingIdOracle(MagicMock())
        oracle.all_ids = AsyncMock(return_value={1, 2, 3})
        oracle.related_ids = AsyncMock(side_effect=[{1, 3}, {1, 2}, {1, 2, 3}])

        checks = PokemonSpeciesProcessor.relationship_checks
        complete = await oracle.complete_ids(EntityKind.POKEMON_SPECIES, checks)

        assert complete == {1}

    @pytest.mark.asyncio
    async def test_varieties_skip_linked_species(self, run_context):
        processor = build(PokemonSpeciesVarietyProcessor, run_context)
        processor.oracle.related_ids = AsyncMock(return_value={4})

        assert await processor.existing_ids() == {4}
        assert processor.category == "pokemonSpeciesVarieties"


class TestPokemonSpeciesProcessor:
    """Test species writes"""

    @pytest.mark.asyncio
    async def test_records_evolution_links_for_later(self, run_context):
        url = resource_url("pokemon-species", 2)
        processor = build(
            PokemonSpeciesProcessor,
            run_context,
            payloads={url: species_payload()},
            known={
                EntityKind.GENERATION: {1},
                EntityKind.GROWTH_RATE: {4},
                EntityKind.POKEMON_COLOR: {5},
                EntityKind.POKEMON_SHAPE: {8},
            },
        )

        result = await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM)

        assert result == 2
        model, record_id, fields = processor.engine.upsert_record.await_args.args
        assert model is PokemonSpecies
        assert record_id == 2
        assert fields["growth_rate_id"] == 4
        assert fields["pokemon_shape_id"] == 8
        assert fields["pokemon_habitat_id"] is None
        assert "evolves_from_species_id" not in fields
        assert run_context.evolution_mappings == {2: 1}
        assert run_context.evolution_chain_mappings == {2: 1}

        names_call = processor.engine.add_joined_record_data.await_args_list[0]
        entries = names_call.args[3]
        assert entries[0]["name"] == "Ivysaur"
        assert entries[0]["genus"] == "Seed Pokémon"

    @pytest.mark.asyncio
    async def test_missing_growth_rate_skips_species(self, run_context):
        url = resource_url("pokemon-species", 2)
        processor = build(
            PokemonSpeciesProcessor,
            run_context,
            payloads={url: species_payload()},
            known={EntityKind.GENERATION: {1}, EntityKind.POKEMON_COLOR: {5}},
        )

        with pytest.raises(MissingRelationshipError) as exc_info:
            await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM)

        assert exc_info.value.context["field_name"] == "growth_rate"
        processor.engine.upsert_record.assert_not_awaited()


class TestItemProcessor:
    """Test item writes"""

    @pytest.mark.asyncio
    async def test_name_conflict_skips_item(self, run_context):
        url = resource_url("item", 1000)
        processor = build(
            ItemProcessor,
            run_context,
            payloads={url: {"id": 1000, "name": "potion", "category": ref("item-category", 27)}},
            known={EntityKind.ITEM_CATEGORY: {27}},
        )
        processor.engine.select_rows.return_value = [(17,)]

        assert await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM) is None
        processor.engine.upsert_record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_fling_effect_is_left_empty(self, run_context):
        url = resource_url("item", 17)
        processor = build(
            ItemProcessor,
            run_context,
            payloads={url: {
                "id": 17,
                "name": "potion",
                "cost": 200,
                "category": ref("item-category", 27),
                "fling_effect": ref("item-fling-effect", 99),
            }},
            known={EntityKind.ITEM_CATEGORY: {27}},
        )

        assert await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM) == 17

        model, record_id, fields = processor.engine.upsert_record.await_args.args
        assert model is Item
        assert fields["item_category_id"] == 27
        assert fields["item_fling_effect_id"] is None
        assert fields["cost"] == 200

    @pytest.mark.asyncio
    async def test_missing_category_skips_item(self, run_context):
        url = resource_url("item", 17)
        processor = build(
            ItemProcessor, run_context, payloads={url: {"id": 17, "name": "potion"}}
        )

        with pytest.raises(MissingRelationshipError):
            await processor.process_item(NamedResource(url=url), SeedMode.STANDARD)


class TestMoveProcessor:
    """Test move writes"""

    @pytest.mark.asyncio
    async def test_missing_type_skips_move(self, run_context):
        url = resource_url("move", 33)
        known = {**MOVE_KNOWN, EntityKind.TYPE: set()}
        processor = build(MoveProcessor, run_context, payloads={url: move_payload()}, known=known)

        with pytest.raises(MissingRelationshipError) as exc_info:
            await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM)

        assert exc_info.value.context["field_name"] == "type"
        processor.engine.upsert_record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_meta_falls_back_to_defaults(self, run_context):
        url = resource_url("move", 33)
        processor = build(MoveProcessor, run_context, payloads={url: move_payload()}, known=MOVE_KNOWN)

        assert await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM) == 33

        assert processor.engine.upsert_record.await_args.args[0] is Move
        meta_calls = [
            call for call in processor.engine.upsert_composite.await_args_list
            if call.args[0] is MoveMetaData
        ]
        assert len(meta_calls) == 1
        keys, fields = meta_calls[0].args[1], meta_calls[0].args[2]
        assert keys == {"move_id": 33}
        assert fields["move_meta_ailment_id"] == DEFAULT_META_AILMENT_ID
        assert fields["move_meta_category_id"] == DEFAULT_META_CATEGORY_ID
        assert fields["drain"] == 0
        assert fields["healing"] == 0
        assert fields["crit_rate"] == 0

    @pytest.mark.asyncio
    async def test_optional_contest_references(self, run_context):
        url = resource_url("move", 33)
        payload = move_payload(contest_type=ref("contest-type", 2), meta=None)
        processor = build(MoveProcessor, run_context, payloads={url: payload}, known=MOVE_KNOWN)

        await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM)

        fields = processor.engine.upsert_record.await_args.args[2]
        assert fields["contest_type_id"] is None
        processor.engine.upsert_composite.assert_not_awaited()


class TestTypeProcessor:
    """Test relations written during and after concurrent processing"""

    @pytest.mark.asyncio
    async def test_relations_to_unknown_types_wait_for_post_pass(self, run_context):
        known = {EntityKind.TYPE: {10}}
        processor = build(TypeProcessor, run_context, known=known)
        fire = TypeResource.model_validate({
            "id": 10,
            "name": "fire",
            "damage_relations": {"double_damage_to": [ref("type", 12, "grass")]},
        })

        assert await processor.write_efficacy(fire) == 0

        known[EntityKind.TYPE].add(12)
        await processor.post_process([fire])

        call = processor.engine.upsert_composite.await_args
        assert call.args[0] is TypeEfficacy
        assert call.args[1] == {"damage_type_id": 10, "target_type_id": 12}
        assert call.args[2] == {"damage_factor": 2.0}


class TestVocabularyProcessors:
    """Test the shared vocabulary shape"""

    @pytest.mark.asyncio
    async def test_item_attribute_links_items(self, run_context):
        url = resource_url("item-attribute", 1)
        processor = build(
            ItemAttributeProcessor,
            run_context,
            payloads={url: {
                "id": 1,
                "name": "countable",
                "names": [{"name": "Countable", "language": ref("language", 9)}],
                "descriptions": [{"description": "Has a count", "language": ref("language", 9)}],
                "items": [ref("item", 1), ref("item", 2)],
            }},
        )

        assert await processor.process_item(NamedResource(url=url), SeedMode.PREMIUM) == 1

        assert processor.engine.add_joined_record_data.await_count == 2
        join = processor.engine.upsert_join_record.await_args
        assert join.args[0] is ItemAttributeMap
        assert join.args[4] == "item_id"
        assert len(join.args[3]) == 2


class TestPokemonProcessor:
    """Test scheduling hints of the heaviest kind"""

    def test_is_sequential_with_memory_checks(self):
        assert PokemonProcessor.sequential_only is True
        assert PokemonProcessor.memory_check_interval == 5
        assert PokemonProcessor.timeout_seconds == 7200

    @pytest.mark.asyncio
    async def test_missing_species_skips_pokemon(self, run_context):
        url = resource_url("pokemon", 1)
        processor = build(
            PokemonProcessor,
            run_context,
            payloads={url: {"id": 1, "name": "bulbasaur", "species": ref("pokemon-species", 1)}},
        )

        with pytest.raises(MissingRelationshipError):
            await processor.process_item(NamedResource(url=url), SeedMode.STANDARD)

        processor.engine.upsert_record.assert_not_awaited()
