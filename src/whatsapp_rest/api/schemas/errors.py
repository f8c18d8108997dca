"""Error response schemas for API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema.

    ``received`` echoes the parsed request body on validation errors.
    """

    error: str
    received: Any | None = None
