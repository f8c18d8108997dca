"""Protocol definitions for the Session Gateway.

The gateway is the live connection to the WhatsApp account (pairing,
sending, receiving, contact and chat lookup). The bridge never drives
the browser session itself; it only calls the operations below and
listens to the typed event stream.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from whatsapp_rest.core.domain.messages import (
    ChatInfo,
    ContactInfo,
    GatewayContact,
    SentMessage,
)
from whatsapp_rest.core.domain.session_events import SessionEvent, SessionEventKind

SessionEventHandler = Callable[[SessionEvent], Awaitable[None]]


class IncomingMessageProtocol(Protocol):
    """A message delivered by the gateway with its lookup capabilities."""

    @property
    def id(self) -> str:
        """Serialized message id."""
        ...

    @property
    def sender(self) -> str:
        """Sender identifier, e.g. ``15551234567@c.us``."""
        ...

    @property
    def recipient(self) -> str:
        ...

    @property
    def body(self) -> str:
        ...

    @property
    def timestamp(self) -> Any:
        """Gateway event time (usually epoch seconds)."""
        ...

    async def get_contact(self) -> ContactInfo:
        """Resolve the sender's contact entry.

        Raises:
            Exception: Any failure of the underlying session lookup.
        """
        ...

    async def get_chat(self) -> ChatInfo:
        """Resolve the chat the message belongs to."""
        ...


class SessionGatewayProtocol(Protocol):
    """Opaque capability for a long-lived WhatsApp session."""

    def is_ready(self) -> bool:
        """Whether the session is paired and can accept send/list calls."""
        ...

    async def initialize(self) -> None:
        """Start the session. Pairing events arrive on the event stream."""
        ...

    async def destroy(self) -> None:
        """Tear the session down."""
        ...

    async def get_contacts(self) -> list[GatewayContact]:
        ...

    async def send_message(self, destination: str, text: str) -> SentMessage:
        """Send ``text`` to a normalized destination identifier.

        Raises:
            Exception: Any failure of the underlying session call.
        """
        ...

    def subscribe(self, kind: SessionEventKind, handler: SessionEventHandler) -> None:
        """Register ``handler`` for every event of ``kind``."""
        ...
