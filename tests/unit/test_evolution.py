"""
Unit tests for evolution chain parsing, persistence and lineage resolution
"""

import pytest

from core.exceptions import DatabaseError
from ingestion.evolution import (
    CreateRequirementCommand,
    EvolutionGraphBuilder,
    EvolutionRequirement,
    StampChainCommand,
    chain_members,
    parse_chain,
    plan_chain_writes,
    resolve_lineages,
)
from ingestion.registry import EntityKind
from models.evolution import PokemonEvolution
from models.species import PokemonSpecies
from schemas.resources import ChainLink
from tests.helpers import ref


def level_up(min_level=None, **extra):
    detail = {"trigger": ref("evolution-trigger", 1, "level-up"), "min_level": min_level}
    detail.update(extra)
    return detail


def link(species_id, details=(), evolves_to=()):
    return {
        "species": ref("pokemon-species", species_id),
        "evolution_details": list(details),
        "evolves_to": list(evolves_to),
    }


# Bulbasaur -> Ivysaur (level 16) -> Venusaur (level 32)
LINEAR_CHAIN = link(1, evolves_to=[
    link(2, [level_up(16)], evolves_to=[
        link(3, [level_up(32)]),
    ]),
])


class FakeEngine:
    """In-memory stand-in for the upsert engine"""

    def __init__(self, species_ids, rows=(), fail_after=None):
        self.fail_after = fail_after
        self.species_ids = set(species_ids)
        self.rows = list(rows)
        self.updates = []
        self.evolutions = []

    async def exists(self, kind, record_id):
        assert kind == EntityKind.POKEMON_SPECIES
        return record_id in self.species_ids

    async def update_fields(self, model, record_id, fields):
        assert model is PokemonSpecies
        self.updates.append((record_id, fields))
        return 1

    async def update_many(self, model, record_ids, fields):
        assert model is PokemonSpecies
        self.updates.extend((record_id, fields) for record_id in record_ids)
        return len(record_ids)

    async def find_or_create(self, model, criteria):
        assert model is PokemonEvolution
        if self.fail_after is not None and len(self.evolutions) >= self.fail_after:
            raise DatabaseError("connection lost")
        if criteria in self.evolutions:
            return self.evolutions.index(criteria) + 1, False
        self.evolutions.append(criteria)
        return len(self.evolutions), True

    async def select_rows(self, *columns, where=None):
        return self.rows


class TestParseChain:
    """Test conversion of chain links into nodes"""

    def test_linear_chain(self):
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        assert root.species_id == 1
        assert root.requirements == []
        assert root.children[0].species_id == 2
        assert root.children[0].requirements[0].min_level == 16
        assert chain_members(root) == [1, 2, 3]

    def test_duplicate_details_are_collapsed(self):
        chain = link(1, evolves_to=[link(2, [level_up(16), level_up(16)])])

        root = parse_chain(ChainLink.model_validate(chain))

        assert len(root.children[0].requirements) == 1

    def test_details_without_trigger_are_skipped(self):
        chain = link(1, evolves_to=[link(2, [{"trigger": None, "min_level": 5}, level_up(16)])])

        child = parse_chain(ChainLink.model_validate(chain)).children[0]

        assert child.skipped_details == 1
        assert len(child.requirements) == 1

    def test_blank_time_of_day_is_none(self):
        chain = link(1, evolves_to=[link(2, [level_up(None, time_of_day="", min_happiness=220)])])

        requirement = parse_chain(ChainLink.model_validate(chain)).children[0].requirements[0]

        assert requirement.time_of_day is None
        assert requirement.min_happiness == 220

    def test_branching_order(self):
        # Eevee with three branches
        chain = link(133, evolves_to=[
            link(134, [level_up(None, item=ref("item", 84))]),
            link(135, [level_up(None, item=ref("item", 83))]),
            link(136, [level_up(None, item=ref("item", 82))]),
        ])

        root = parse_chain(ChainLink.model_validate(chain))

        assert chain_members(root) == [133, 134, 135, 136]
        assert root.children[0].requirements[0].evolution_item_id == 84


class TestPlanChainWrites:
    """Test the pure traversal producing write commands"""

    def test_linear_chain_commands(self):
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        commands = plan_chain_writes(10, root)

        requirements = [c for c in commands if isinstance(c, CreateRequirementCommand)]
        assert [(c.parent_species_id, c.species_id) for c in requirements] == [(1, 2), (2, 3)]
        assert commands[-1] == StampChainCommand(species_ids=(1, 2, 3), chain_id=10)
        assert len(commands) == 3

    def test_requirement_criteria(self):
        requirement = EvolutionRequirement(evolution_trigger_id=1, min_level=16)

        criteria = requirement.criteria(2)

        assert criteria["pokemon_species_id"] == 2
        assert criteria["evolution_trigger_id"] == 1
        assert criteria["min_level"] == 16
        assert criteria["known_move_id"] is None
        assert criteria["needs_overworld_rain"] is False


class TestEvolutionGraphBuilder:
    """Test persistence of chains and evolves-from links"""

    @pytest.mark.asyncio
    async def test_apply_linear_chain(self, run_context):
        engine = FakeEngine({1, 2, 3})
        builder = EvolutionGraphBuilder(engine, run_context)
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        stamped, created = await builder.apply(10, root)

        assert (stamped, created) == (3, 2)
        assert engine.updates == [
            (1, {"evolution_chain_id": 10}),
            (2, {"evolution_chain_id": 10}),
            (3, {"evolution_chain_id": 10}),
        ]
        assert [e["pokemon_species_id"] for e in engine.evolutions] == [2, 3]
        assert [e["min_level"] for e in engine.evolutions] == [16, 32]

    @pytest.mark.asyncio
    async def test_apply_twice_creates_nothing_new(self, run_context):
        engine = FakeEngine({1, 2, 3})
        builder = EvolutionGraphBuilder(engine, run_context)
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        await builder.apply(10, root)
        _, created = await builder.apply(10, root)

        assert created == 0
        assert len(engine.evolutions) == 2

    @pytest.mark.asyncio
    async def test_missing_species_is_skipped(self, run_context):
        engine = FakeEngine({1, 2})
        builder = EvolutionGraphBuilder(engine, run_context)
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        stamped, created = await builder.apply(10, root)

        assert (stamped, created) == (2, 1)

    @pytest.mark.asyncio
    async def test_interrupted_chain_is_not_stamped(self, run_context):
        """A failure before every requirement is written leaves the chain unstamped"""
        engine = FakeEngine({1, 2, 3}, fail_after=1)
        builder = EvolutionGraphBuilder(engine, run_context)
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))

        with pytest.raises(DatabaseError):
            await builder.apply(10, root)

        assert len(engine.evolutions) == 1
        assert engine.updates == []

    @pytest.mark.asyncio
    async def test_resumed_chain_fills_missing_requirements(self, run_context):
        engine = FakeEngine({1, 2, 3}, fail_after=1)
        builder = EvolutionGraphBuilder(engine, run_context)
        root = parse_chain(ChainLink.model_validate(LINEAR_CHAIN))
        with pytest.raises(DatabaseError):
            await builder.apply(10, root)

        engine.fail_after = None
        stamped, created = await builder.apply(10, root)

        assert (stamped, created) == (3, 1)
        assert [e["pokemon_species_id"] for e in engine.evolutions] == [2, 3]

    @pytest.mark.asyncio
    async def test_apply_evolves_from(self, run_context):
        engine = FakeEngine({1, 2, 3})
        builder = EvolutionGraphBuilder(engine, run_context)
        run_context.evolution_mappings.update({2: 1, 3: 2, 5: 4})

        applied = await builder.apply_evolves_from()

        assert applied == 2
        assert (2, {"evolves_from_species_id": 1}) in engine.updates
        assert (3, {"evolves_from_species_id": 2}) in engine.updates
        assert run_context.evolution_mappings == {}

    @pytest.mark.asyncio
    async def test_resolve_lineages_clears_chain_map(self, run_context):
        engine = FakeEngine({1, 2, 3}, rows=[(1, 10, None), (2, 10, 1), (3, 10, 2)])
        builder = EvolutionGraphBuilder(engine, run_context)
        run_context.evolution_chain_mappings.update({1: 10})

        lineages = await builder.resolve_lineages({10: [1, 2, 3]})

        assert lineages == {10: [1, 2, 3]}
        assert run_context.lineages == {10: [1, 2, 3]}
        assert run_context.evolution_chain_mappings == {}


class TestResolveLineages:
    """Test cross-chain lineage merging"""

    def test_independent_chains_are_kept(self):
        chains = {1: [1, 2, 3], 2: [4, 5]}
        species_chain = {1: 1, 2: 1, 3: 1, 4: 2, 5: 2}
        evolves_from = {2: 1, 3: 2, 5: 4}

        assert resolve_lineages(chains, species_chain, evolves_from) == chains

    def test_cross_chain_child_is_absorbed(self):
        """A child recorded under another chain joins its parent's lineage"""
        chains = {1: [172, 25, 26], 2: [900]}
        species_chain = {172: 1, 25: 1, 26: 1, 900: 2}
        evolves_from = {25: 172, 26: 25, 900: 26}

        lineages = resolve_lineages(chains, species_chain, evolves_from)

        assert lineages == {1: [172, 25, 26, 900]}

    def test_redundant_chain_is_dropped_deterministically(self):
        chains = {7: [1, 2], 3: [2, 1]}
        species_chain = {1: 3, 2: 3}

        lineages = resolve_lineages(chains, species_chain, {})

        assert list(lineages) == [3]

    def test_duplicate_members_are_collapsed(self):
        lineages = resolve_lineages({1: [1, 1, 2]}, {}, {})

        assert lineages == {1: [1, 2]}
