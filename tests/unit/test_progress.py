"""
Unit tests for the progress ledger, response cache and run context
"""

from ingestion.cache import ResponseCache
from ingestion.context import RunContext, SeedingStats
from ingestion.progress import ProgressLedger
from ingestion.registry import EntityKind, to_camel_case


class TestProgressLedger:
    """Test per-category progress tracking"""

    def test_start_and_complete(self):
        ledger = ProgressLedger()
        ledger.start("pokemon", expected_count=10, already_present=4)
        ledger.record_success("pokemon", 5)
        ledger.record_failure("pokemon")

        entry = ledger.complete("pokemon")

        assert entry.completed is True
        assert entry.count == 5
        assert entry.failed == 1
        assert entry.expected_count == 10
        assert entry.already_present == 4

    def test_restart_resets_entry(self):
        """A retried category starts from zero"""
        ledger = ProgressLedger()
        ledger.start("move")
        ledger.record_success("move", 3)

        ledger.start("move")

        assert ledger.get("move").count == 0

    def test_recording_creates_missing_entry(self):
        ledger = ProgressLedger()
        ledger.record_failure("berry")

        assert ledger.get("berry").failed == 1
        assert ledger.get("berry").completed is False

    def test_summary(self):
        ledger = ProgressLedger()
        ledger.start("language")
        ledger.record_success("language", 2)
        ledger.complete("language")
        ledger.start("region")
        ledger.record_failure("region")

        summary = ledger.summary()

        assert "1/2 categories completed" in summary
        assert "2 items processed" in summary
        assert "1 failed" in summary

    def test_snapshot_is_plain_data(self):
        ledger = ProgressLedger()
        ledger.start("type", expected_count=20)

        snapshot = ledger.snapshot()

        assert snapshot["type"]["expected_count"] == 20
        assert snapshot["type"]["category"] == "type"


class TestResponseCache:
    """Test the per-run response cache"""

    def test_set_get_clear(self):
        cache = ResponseCache()
        cache.set("https://pokeapi.co/api/v2/type/1/", {"id": 1})

        assert "https://pokeapi.co/api/v2/type/1/" in cache
        assert cache.get("https://pokeapi.co/api/v2/type/1/") == {"id": 1}
        assert len(cache) == 1

        cache.clear()

        assert len(cache) == 0
        assert cache.get("https://pokeapi.co/api/v2/type/1/") is None


class TestRunContext:
    """Test run-scoped state"""

    def test_clear_transient_keeps_ledger_and_stats(self, test_settings):
        context = RunContext(settings=test_settings)
        context.cache.set("url", {"id": 1})
        context.known_ids[EntityKind.TYPE] = {1, 2}
        context.evolution_mappings[2] = 1
        context.evolution_chain_mappings[2] = 1
        context.ledger.start("type")
        context.stats.record_error("url", "boom")

        context.clear_transient()

        assert len(context.cache) == 0
        assert context.known_ids == {}
        assert context.evolution_mappings == {}
        assert context.evolution_chain_mappings == {}
        assert context.ledger.get("type") is not None
        assert len(context.stats.errors) == 1

    def test_stats_to_dict(self):
        stats = SeedingStats(total_requests=3, failed_requests=1)
        stats.record_error("https://pokeapi.co/api/v2/move/1/", ValueError("bad"))

        data = stats.to_dict()

        assert data["total_requests"] == 3
        assert data["failed_requests"] == 1
        assert data["error_count"] == 1
        assert data["duration_seconds"] >= 0


class TestCategoryNames:
    """Test endpoint to category naming"""

    def test_camel_case(self):
        assert to_camel_case("pokemon-species") == "pokemonSpecies"
        assert to_camel_case("move-learn-method") == "moveLearnMethod"
        assert to_camel_case("type") == "type"
        assert to_camel_case("pal-park-area") == "palParkArea"
