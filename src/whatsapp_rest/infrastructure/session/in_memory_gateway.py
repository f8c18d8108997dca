"""In-memory Session Gateway implementation for local development and tests."""

from __future__ import annotations

import itertools
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

import structlog

from whatsapp_rest.core.domain.messages import (
    ChatInfo,
    ContactInfo,
    GatewayContact,
    SentMessage,
)
from whatsapp_rest.core.domain.session_events import (
    AuthenticatedEvent,
    DisconnectedEvent,
    ReadyEvent,
    SessionEvent,
    SessionEventKind,
)
from whatsapp_rest.core.interfaces.session_gateway import SessionEventHandler

logger = structlog.get_logger(__name__)


@dataclass
class InMemoryIncomingMessage:
    """Incoming message whose lookups return (or raise) preset values."""

    id: str
    sender: str
    recipient: str
    body: str
    timestamp: Any = None
    contact: ContactInfo | Exception | None = None
    chat: ChatInfo | Exception | None = None

    async def get_contact(self) -> ContactInfo:
        if isinstance(self.contact, Exception):
            raise self.contact
        return self.contact or ContactInfo()

    async def get_chat(self) -> ChatInfo:
        if isinstance(self.chat, Exception):
            raise self.chat
        return self.chat or ChatInfo()


@dataclass
class SentRecord:
    destination: str
    text: str
    message_id: str


@dataclass
class InMemorySessionGateway:
    """Session Gateway that keeps everything in process memory.

    Sends are recorded in ``sent`` instead of leaving the process, the
    contact list is whatever the caller provides, and events are pushed
    with ``emit``. With ``auto_ready`` the gateway reports itself paired
    as soon as it is initialized.
    """

    contacts: list[GatewayContact] = field(default_factory=list)
    auto_ready: bool = False
    sent: list[SentRecord] = field(default_factory=list, init=False)
    _ready: bool = field(default=False, init=False, repr=False)
    _handlers: dict[SessionEventKind, list[SessionEventHandler]] = field(
        default_factory=lambda: defaultdict(list), init=False, repr=False
    )
    _ids: Any = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    def __post_init__(self) -> None:
        # Contacts coming from YAML config are plain mappings.
        self.contacts = [
            c if isinstance(c, GatewayContact) else GatewayContact(**c)
            for c in self.contacts
        ]

    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        logger.info("in_memory_gateway.initialized", auto_ready=self.auto_ready)
        if self.auto_ready:
            await self.emit(AuthenticatedEvent())
            await self.emit(ReadyEvent())

    async def destroy(self) -> None:
        if self._ready:
            await self.emit(DisconnectedEvent(reason="destroyed"))

    async def get_contacts(self) -> list[GatewayContact]:
        return list(self.contacts)

    async def send_message(self, destination: str, text: str) -> SentMessage:
        message_id = f"true_{destination}_{next(self._ids):08d}"
        self.sent.append(
            SentRecord(destination=destination, text=text, message_id=message_id)
        )
        return SentMessage(id=message_id)

    def subscribe(self, kind: SessionEventKind, handler: SessionEventHandler) -> None:
        self._handlers[kind].append(handler)

    async def emit(self, event: SessionEvent) -> None:
        """Deliver ``event`` to its subscribers in registration order.

        Handler failures are logged and do not stop delivery.
        """
        if event.kind in (SessionEventKind.READY, SessionEventKind.AUTHENTICATED):
            self._ready = True
        elif event.kind in (SessionEventKind.DISCONNECTED, SessionEventKind.AUTH_FAILURE):
            self._ready = False

        for handler in list(self._handlers[event.kind]):
            try:
                await handler(event)
            except Exception as exc:
                logger.error(
                    "in_memory_gateway.handler_failed",
                    kind=event.kind.value,
                    error=str(exc),
                )
