"""
Exceptions raised while crawling the remote catalog and writing it into the
relational store.

Every exception carries a ``context`` dict (url, category, kind, table, ...)
which ends up in the run's error log and in structured log records.

Hierarchy:
    SeedingError
    ├── TransportError
    │   ├── ProxyEnvelopeError      (retryable)
    │   ├── EmptyResponseError      (retryable)
    │   ├── NetworkError            (retryable, attempts exhausted)
    │   └── TunnelConfigurationError
    ├── ProcessingError
    │   ├── MissingRelationshipError
    │   └── SchemaValidationError
    ├── LoadError
    │   ├── DatabaseError
    │   └── UpsertError
    └── CategorySeedingError        (fatal for the run)

RetryableError and NonRetryableError are mixed into the leaves above so the
transport can decide whether another attempt is worthwhile.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SeedingError(Exception):
    """
    Base exception for the seeding pipeline.

    Attributes:
        message: Human-readable error message
        context: Diagnostic details, always including ``error_timestamp``
        original_exception: The lower-level error this one wraps, if any
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception
        self.raised_at = datetime.now(timezone.utc)
        self.context = {**(context or {}), "error_timestamp": self.raised_at.isoformat()}
        if original_exception is not None:
            self.__cause__ = original_exception

    @property
    def timestamp(self) -> datetime:
        return self.raised_at

    def __str__(self) -> str:
        parts = [f"{type(self).__name__}: {self.message}"]
        details = {k: v for k, v in self.context.items() if k != "error_timestamp"}
        if details:
            parts.append(" ".join(f"{key}={value}" for key, value in details.items()))
        if self.original_exception is not None:
            cause = self.original_exception
            parts.append(f"caused by {type(cause).__name__}: {cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used for log ``extra`` and the run error list"""
        cause = self.original_exception
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.raised_at.isoformat(),
            "original_error": f"{type(cause).__name__}: {cause}" if cause else None,
        }


class RetryableError(SeedingError):
    """Transient failure: a later attempt may succeed (timeouts, bad proxy bodies)."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0
    ):
        super().__init__(message, context, original_exception)
        self.max_retries = max_retries
        self.retry_delay = retry_delay


class NonRetryableError(SeedingError):
    """Permanent failure: retrying with the same input cannot help."""


# --- transport ---------------------------------------------------------------

class TransportError(SeedingError):
    """A fetch against the remote catalog failed."""


class ProxyEnvelopeError(RetryableError, TransportError):
    """The forwarding proxy answered without a usable ``contents`` envelope (context: url, proxy_url)."""


class EmptyResponseError(RetryableError, TransportError):
    """The tunnel returned an empty body (context: url, status_code)."""


class TunnelConfigurationError(NonRetryableError, TransportError):
    """Tunnel host, port, username or password is missing."""


class NetworkError(RetryableError, TransportError):
    """
    Every attempt at a fetch failed.

    Context carries ``url``, ``strategy`` and ``attempts``.
    """


# --- processing --------------------------------------------------------------

class ProcessingError(SeedingError):
    """A fetched resource could not be mapped onto records."""


class MissingRelationshipError(ProcessingError):
    """
    A required foreign key points at a row that is not stored.

    Context carries ``kind``, ``resource_id`` and ``field_name``. The item is
    counted as failed; the category carries on.
    """


class SchemaValidationError(NonRetryableError, ProcessingError):
    """A payload does not match its resource schema (context: url, schema, errors)."""


# --- loading -----------------------------------------------------------------

class LoadError(SeedingError):
    """Writing to or reading from the store failed."""


class DatabaseError(LoadError):
    """A select or update failed (context: operation, table_name)."""


class UpsertError(LoadError):
    """An insert-or-update failed (context: table_name, key)."""


# --- run control -------------------------------------------------------------

class CategorySeedingError(SeedingError):
    """
    A category kept failing after every retry; the run stops here.

    Context carries ``category``, ``attempts`` and the last ``reason``.
    """
