"""
Database loaders with idempotent upsert operations
"""

from ingestion.loaders.upsert import UpsertEngine

__all__ = ["UpsertEngine"]
