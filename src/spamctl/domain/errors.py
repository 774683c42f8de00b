"""Exception taxonomy for spam-control operations.

Domain and infrastructure code raise these; the service layer converts
them into ``ServiceResult`` failures at its boundary.
"""

from __future__ import annotations

from typing import Any


class SpamControlError(Exception):
    """Base class for all spamctl errors.

    Attributes:
        code: Stable machine-readable error code (used in ``ServiceError``).
        detail: Structured context for ``--json`` / ``--verbose`` output.
    """

    code = "SPAM_CONTROL_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


# --- Validation ---


class SegmentError(SpamControlError):
    """A domain name cannot be packed into a filter expression."""

    code = "SEGMENT_ERROR"

    def __init__(self, message: str, *, value: str, limit: int | None = None) -> None:
        super().__init__(message, value=value, limit=limit)
        self.value = value
        self.limit = limit


class DomainNameError(SegmentError):
    """A domain name is empty or blank."""

    code = "INVALID_DOMAIN"


# --- Provider ---


class ProviderError(SpamControlError):
    """A filter or domain provider failed (transport or non-success response)."""

    code = "PROVIDER_ERROR"


# --- State ---


class FilterStateError(SpamControlError):
    """An unexpected status kind reached the orchestrator."""

    code = "STATE_ERROR"


# --- Missing resource ---


class SnapshotMissingError(SpamControlError):
    """The persisted domain snapshot does not exist or cannot be read."""

    code = "SNAPSHOT_MISSING"


class NoDomainsError(SpamControlError):
    """A domain list was read successfully but holds no names."""

    code = "NO_DOMAINS"


# --- Storage ---


class StorageError(SpamControlError):
    """A local file could not be written."""

    code = "STORAGE_ERROR"
