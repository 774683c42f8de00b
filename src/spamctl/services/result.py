"""Outcome of one domain or filter operation, as rendered by spamctl.

DomainService and FilterService never raise SpamControlError to their
callers; they return a ServiceResult, which the command layer prints as
text or JSON and maps to the exit status.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: an error code plus the offending paths or ids."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Result of a domain or filter operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, e.g. ``"update_domains"`` or ``"status"``.
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Span timings when telemetry is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
