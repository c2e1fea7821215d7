"""
Unit tests for type matrix completion and damage relation mapping
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ingestion.processors.types import efficacy_pairs
from ingestion.type_matrix import NEUTRAL_FACTOR, TypeMatrixCompleter
from models.types import TypeEfficacy
from schemas.resources import TypeRelations
from tests.helpers import ref


class TestTypeMatrixCompleter:
    """Test filling of neutral relations"""

    @pytest.mark.asyncio
    async def test_missing_pairs_are_filled(self):
        """3 types with one existing relation need 8 neutral rows"""
        engine = MagicMock()
        engine.select_rows = AsyncMock(side_effect=[[(3,), (1,), (2,)], [(1, 2)]])
        engine.upsert_composite = AsyncMock()

        inserted = await TypeMatrixCompleter(engine).complete()

        assert inserted == 8
        assert engine.upsert_composite.await_count == 8
        written = [call.args[1] for call in engine.upsert_composite.await_args_list]
        assert {"damage_type_id": 1, "target_type_id": 2} not in written
        assert {"damage_type_id": 2, "target_type_id": 1} in written
        for call in engine.upsert_composite.await_args_list:
            assert call.args[0] is TypeEfficacy
            assert call.args[2] == {"damage_factor": NEUTRAL_FACTOR}
            assert call.kwargs["overwrite"] is False

    @pytest.mark.asyncio
    async def test_complete_matrix_is_left_alone(self):
        engine = MagicMock()
        engine.select_rows = AsyncMock(side_effect=[[(1,), (2,)], [(1, 1), (1, 2), (2, 1), (2, 2)]])
        engine.upsert_composite = AsyncMock()

        assert await TypeMatrixCompleter(engine).complete() == 0
        engine.upsert_composite.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_types(self):
        engine = MagicMock()
        engine.select_rows = AsyncMock(side_effect=[[], []])
        engine.upsert_composite = AsyncMock()

        assert await TypeMatrixCompleter(engine).complete() == 0


class TestEfficacyPairs:
    """Test mapping of damage relations to (attacker, target, factor)"""

    def test_outgoing_and_incoming_relations(self):
        # Fire (10): strong against grass, weak against water, resisted by fire
        relations = TypeRelations.model_validate({
            "double_damage_to": [ref("type", 12, "grass")],
            "half_damage_to": [ref("type", 11, "water")],
            "no_damage_to": [],
            "double_damage_from": [ref("type", 11, "water")],
            "half_damage_from": [ref("type", 12, "grass")],
            "no_damage_from": [],
        })

        pairs = set(efficacy_pairs(10, relations))

        assert (10, 12, 2.0) in pairs
        assert (10, 11, 0.5) in pairs
        assert (11, 10, 2.0) in pairs
        assert (12, 10, 0.5) in pairs
        assert len(pairs) == 4

    def test_immunity(self):
        # Normal (1) cannot hit ghost (8); ghost cannot hit normal
        relations = TypeRelations.model_validate({
            "no_damage_to": [ref("type", 8, "ghost")],
            "no_damage_from": [ref("type", 8, "ghost")],
        })

        pairs = set(efficacy_pairs(1, relations))

        assert pairs == {(1, 8, 0.0), (8, 1, 0.0)}
