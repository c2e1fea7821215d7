"""
Catalog seeding pipeline.

This package contains every component that turns the remote catalog into
relational rows:

Modules:
    transport: HTTP transport with proxy/tunnel strategies, retry and pacing
    cache: Per-run response cache
    crawler: Paginated crawl of collection endpoints
    oracle: Existing-id lookups used to resume interrupted runs
    registry: Entity kinds, their models and join-key guards
    context: Run context (cache, ledger, stats, evolution maps)
    progress: Per-category progress ledger
    memory: Memory governor
    base: Abstract processor classes
    seeder: Resumable per-category seeding with timeout and retry
    evolution: Evolution chain parsing, persistence and lineage resolution
    type_matrix: Completion of the type-effectiveness matrix
    runner: Orchestrator running every phase in dependency order

Subpackages:
    loaders: Idempotent upsert engine
    processors: One processor per catalog resource kind

Architecture:
    The run follows a fixed phase order (foundation, vocabularies, types,
    abilities, moves, items, ..., species, pokemon). For every category:

    1. Crawl - List every reference of the endpoint
    2. Filter - Drop references that are already fully materialized
    3. Process - Fetch, validate and upsert each resource
    4. Post-pass - Write relationships that need the whole category

    A failed item is counted and skipped; a category that keeps failing
    after its retries aborts the run.

Usage:
    from ingestion.runner import SeedRunner

    runner = SeedRunner()
    result = await runner.run()

    print(result["summary"])
"""

__all__ = [
    "base",
    "cache",
    "context",
    "crawler",
    "evolution",
    "memory",
    "oracle",
    "progress",
    "registry",
    "runner",
    "seeder",
    "transport",
    "type_matrix",
]
