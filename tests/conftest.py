"""Test configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from whatsapp_rest.api.server import create_app
from whatsapp_rest.application.message_buffer import InboundMessageBuffer
from whatsapp_rest.application.service import WhatsAppService
from whatsapp_rest.core.domain.messages import (
    ChatInfo,
    ContactInfo,
    GatewayContact,
    InboundMessageRecord,
)
from whatsapp_rest.core.domain.session_events import ReadyEvent
from whatsapp_rest.infrastructure.config.settings import Settings
from whatsapp_rest.infrastructure.session.in_memory_gateway import (
    InMemoryIncomingMessage,
    InMemorySessionGateway,
)


def make_record(index: int, **overrides: Any) -> InboundMessageRecord:
    """Build a buffer record whose id encodes its arrival index."""
    fields: dict[str, Any] = {
        "id": f"msg-{index}",
        "sender": "15551234567@c.us",
        "recipient": "15557654321@c.us",
        "body": f"hello {index}",
        "timestamp": 1_700_000_000 + index,
        "contact_name": "Alice",
        "is_group": False,
        "chat_name": "Alice",
    }
    fields.update(overrides)
    return InboundMessageRecord(**fields)


def make_incoming(**overrides: Any) -> InMemoryIncomingMessage:
    fields: dict[str, Any] = {
        "id": "false_15551234567@c.us_3EB0",
        "sender": "15551234567@c.us",
        "recipient": "15557654321@c.us",
        "body": "Hi there",
        "timestamp": 1_700_000_000,
        "contact": ContactInfo(pushname="Alice", name="Alice Smith", number="15551234567"),
        "chat": ChatInfo(name="Alice Smith"),
    }
    fields.update(overrides)
    return InMemoryIncomingMessage(**fields)


@pytest.fixture
def gateway() -> InMemorySessionGateway:
    return InMemorySessionGateway(
        contacts=[
            GatewayContact(
                id="15551234567@c.us",
                number="15551234567",
                pushname="Alice",
                name="Alice Smith",
                is_user=True,
                is_my_contact=True,
            ),
            GatewayContact(id="120363041234567890@g.us", name="Family"),
        ]
    )


@pytest.fixture
def service(gateway: InMemorySessionGateway) -> WhatsAppService:
    svc = WhatsAppService(gateway, InboundMessageBuffer())
    svc.subscribe()
    return svc


@pytest.fixture
def ready_service(
    service: WhatsAppService, gateway: InMemorySessionGateway
) -> WhatsAppService:
    asyncio.run(gateway.emit(ReadyEvent()))
    return service


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def incoming_factory():
    return make_incoming


@pytest.fixture
def settings() -> Settings:
    return Settings(max_body_bytes=1024)


@pytest.fixture
def client(settings: Settings, service: WhatsAppService) -> TestClient:
    """Client over a service that has not seen a ready event."""
    return TestClient(create_app(settings=settings, service=service))


@pytest.fixture
def ready_client(settings: Settings, ready_service: WhatsAppService) -> TestClient:
    return TestClient(create_app(settings=settings, service=ready_service))
