"""
Core utilities and configuration for the Pokedex seeding pipeline.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    database: Async engine and session factory creation
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import create_engine, create_session_factory
    from core.exceptions import NetworkError, CategorySeedingError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Build a session factory for the run
    engine = create_engine()
    session_factory = create_session_factory(engine)
"""

from core.config import settings
from core.database import check_connection, create_engine, create_session_factory
from core.exceptions import (
    CategorySeedingError,
    DatabaseError,
    EmptyResponseError,
    LoadError,
    MissingRelationshipError,
    NetworkError,
    NonRetryableError,
    ProcessingError,
    ProxyEnvelopeError,
    RetryableError,
    SchemaValidationError,
    SeedingError,
    TransportError,
    TunnelConfigurationError,
    UpsertError,
)
from core.logging import setup_logging

__all__ = [
    "settings",
    "create_engine",
    "create_session_factory",
    "check_connection",
    "setup_logging",
    # Exceptions
    "SeedingError",
    "RetryableError",
    "NonRetryableError",
    "TransportError",
    "ProxyEnvelopeError",
    "EmptyResponseError",
    "TunnelConfigurationError",
    "NetworkError",
    "ProcessingError",
    "MissingRelationshipError",
    "SchemaValidationError",
    "LoadError",
    "DatabaseError",
    "UpsertError",
    "CategorySeedingError",
]
