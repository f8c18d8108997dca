"""Domain models for messages flowing through the WhatsApp session.

Covers the normalized inbound-message record kept in the buffer and the
value types returned by the Session Gateway (contacts, chats, sent
message receipts).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

GROUP_SUFFIX = "@g.us"
USER_SUFFIX = "@c.us"
UNKNOWN_NAME = "Unknown"


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def is_group_id(identifier: str) -> bool:
    """Return True when the identifier addresses a group chat."""
    return GROUP_SUFFIX in identifier


@dataclass(frozen=True)
class InboundMessageRecord:
    """Normalized record of a message received by the session.

    Attributes:
        id: Serialized message id assigned by the gateway.
        sender: Sender identifier (``from`` on the wire).
        recipient: Recipient identifier (``to`` on the wire).
        body: Message text.
        timestamp: Gateway event time.
        contact_name: Best-effort sender display name.
        is_group: Whether the sender identifier is a group id.
        chat_name: Best-effort chat display name.
        received_at: Wall-clock capture time (ISO-8601, UTC).
    """

    id: str
    sender: str
    recipient: str
    body: str
    timestamp: int | float | None
    contact_name: str
    is_group: bool
    chat_name: str
    received_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the JSON keys exposed by the REST API."""
        return {
            "id": self.id,
            "from": self.sender,
            "to": self.recipient,
            "body": self.body,
            "timestamp": self.timestamp,
            "contactName": self.contact_name,
            "isGroup": self.is_group,
            "chatName": self.chat_name,
            "receivedAt": self.received_at,
        }


@dataclass(frozen=True)
class ContactInfo:
    """Sender metadata returned by a per-message contact lookup."""

    pushname: str | None = None
    name: str | None = None
    number: str | None = None


@dataclass(frozen=True)
class ChatInfo:
    """Chat metadata returned by a per-message chat lookup."""

    name: str | None = None


@dataclass(frozen=True)
class GatewayContact:
    """Entry of the account's contact list."""

    id: str
    number: str | None = None
    pushname: str | None = None
    name: str | None = None
    is_user: bool = False
    is_my_contact: bool = False

    @property
    def display_name(self) -> str | None:
        return self.pushname or self.name or self.number

    @property
    def is_group(self) -> bool:
        return is_group_id(self.id)


@dataclass(frozen=True)
class SentMessage:
    """Receipt for a message accepted by the gateway."""

    id: str
