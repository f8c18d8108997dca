"""FastAPI dependency injection providers.

The service and settings are created once in ``create_app`` and stored
on ``app.state``; routes receive them through ``Depends()`` so tests can
swap them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from whatsapp_rest.application.service import WhatsAppService
from whatsapp_rest.infrastructure.config.settings import Settings


def get_service(request: Request) -> WhatsAppService:
    """Provide the application's WhatsAppService."""
    return request.app.state.service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
