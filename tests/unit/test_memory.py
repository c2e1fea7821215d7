"""
Unit tests for the memory governor
"""

import asyncio

import pytest
from unittest.mock import MagicMock, patch

from ingestion.memory import MemoryGovernor

MB = 1024 * 1024


def fake_process(rss_mb: float) -> MagicMock:
    process = MagicMock()
    process.memory_info.return_value.rss = int(rss_mb * MB)
    return process


class TestMemoryGovernor:
    """Test watermark-triggered cleanup"""

    @pytest.mark.asyncio
    async def test_below_watermark_does_nothing(self, run_context, test_settings):
        run_context.cache.set("url", {"id": 1})
        governor = MemoryGovernor(run_context, test_settings, fake_process(100))

        assert await governor.check_and_cleanup() is False
        assert len(run_context.cache) == 1

    @pytest.mark.asyncio
    async def test_above_watermark_clears_transient_state(self, run_context, test_settings):
        run_context.cache.set("url", {"id": 1})
        run_context.evolution_mappings[2] = 1
        governor = MemoryGovernor(run_context, test_settings, fake_process(900))

        with patch("ingestion.memory.gc.collect") as collect:
            assert await governor.check_and_cleanup() is True

        collect.assert_called_once()
        assert len(run_context.cache) == 0
        assert run_context.evolution_mappings == {}

    @pytest.mark.asyncio
    async def test_concurrent_checks_run_one_cleanup(self, run_context, test_settings):
        """A check arriving during a cleanup returns immediately"""
        settings = test_settings.model_copy(update={"MEMORY_CLEANUP_PAUSE_SECONDS": 0.05})
        governor = MemoryGovernor(run_context, settings, fake_process(900))

        with patch.object(run_context, "clear_transient") as clear:
            results = await asyncio.gather(
                governor.check_and_cleanup(),
                governor.check_and_cleanup(),
            )

        assert sorted(results) == [False, True]
        clear.assert_called_once()

    @pytest.mark.asyncio
    async def test_guard_is_released_after_cleanup(self, run_context, test_settings):
        governor = MemoryGovernor(run_context, test_settings, fake_process(900))

        assert await governor.check_and_cleanup() is True
        assert await governor.check_and_cleanup() is True

    def test_log_memory_usage(self, run_context, test_settings):
        governor = MemoryGovernor(run_context, test_settings, fake_process(256))

        assert governor.log_memory_usage("Before seeding") == pytest.approx(256)
