"""BaseService: shared failure handling for spamctl services.

Services call into the domain and infrastructure layers, which raise
:class:`~spamctl.domain.errors.SpamControlError` subclasses.  The service
boundary turns those into failed ServiceResults; anything else propagates.
"""

from __future__ import annotations

import logging
from typing import Any

from spamctl.domain.errors import SpamControlError
from spamctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes."""

    @staticmethod
    def _failure(op: str, exc: SpamControlError, **data: Any) -> ServiceResult:
        """Build a failed result from a domain error.

        *data* carries whatever partial progress the operation made, so a
        caller can see what was applied before the failure.
        """
        logger.debug("%s failed: %s", op, exc.message)
        detail = {k: v for k, v in exc.detail.items() if v is not None}
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError(code=exc.code, message=exc.message, detail=detail),
        )
