"""Turn gateway message events into buffer records.

Sender-name and chat-name lookups are separate failure domains: either
may fail without affecting the other, and both degrade to fallback
strings instead of raising.
"""

from __future__ import annotations

import structlog

from whatsapp_rest.core.domain.messages import (
    UNKNOWN_NAME,
    InboundMessageRecord,
    is_group_id,
)
from whatsapp_rest.core.domain.name_resolution import (
    chat_display_name,
    contact_display_name,
    sender_local_part,
)
from whatsapp_rest.core.interfaces.session_gateway import IncomingMessageProtocol

logger = structlog.get_logger(__name__)


async def resolve_contact_name(message: IncomingMessageProtocol) -> str:
    """Resolve the sender's display name, falling back to the sender id."""
    try:
        contact = await message.get_contact()
    except Exception as exc:
        logger.warning("message.contact_lookup_failed", error=str(exc))
        return sender_local_part(getattr(message, "sender", None))
    return contact_display_name(contact)


async def resolve_chat_name(message: IncomingMessageProtocol) -> str:
    try:
        chat = await message.get_chat()
    except Exception as exc:
        logger.warning("message.chat_lookup_failed", error=str(exc))
        return UNKNOWN_NAME
    return chat_display_name(chat)


async def normalize_message(message: IncomingMessageProtocol) -> InboundMessageRecord:
    """Build an ``InboundMessageRecord`` from a gateway message.

    Raises:
        Exception: Only when the raw message lacks the fields a record
            needs (e.g. no id or sender); lookup failures never raise.
    """
    contact_name = await resolve_contact_name(message)
    chat_name = await resolve_chat_name(message)
    sender = message.sender
    return InboundMessageRecord(
        id=message.id,
        sender=sender,
        recipient=message.recipient,
        body=message.body,
        timestamp=message.timestamp,
        contact_name=contact_name,
        is_group=is_group_id(sender),
        chat_name=chat_name,
    )
