"""Shared error-handling utilities for API routes.

Every failure leaves the API as ``{"error": "<message>"}`` plus any
structured details the domain error carries (e.g. ``received`` for
validation errors).
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from whatsapp_rest.core.domain.errors import WhatsAppRestError

logger = structlog.get_logger(__name__)


def error_response(
    *,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build a standardized JSON error response."""
    content: dict[str, Any] = {"error": message}
    if details:
        content.update(details)
    return JSONResponse(status_code=status_code, content=content)


async def bridge_error_handler(request: Request, exc: WhatsAppRestError) -> JSONResponse:
    """Render domain errors raised by routes or the service."""
    status_code = exc.status_code or 500
    logger.debug(
        "api.request_failed",
        path=request.url.path,
        code=exc.code,
        status_code=status_code,
    )
    return error_response(
        status_code=status_code, message=exc.message, details=exc.details
    )
