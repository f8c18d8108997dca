"""Ordered fallback steps for display-name resolution.

Every function returns a definite string so callers never have to deal
with ``None`` or partial lookups.
"""

from __future__ import annotations

from whatsapp_rest.core.domain.messages import UNKNOWN_NAME, ChatInfo, ContactInfo


def first_present(*candidates: str | None, default: str = UNKNOWN_NAME) -> str:
    """Return the first non-empty candidate, or ``default``."""
    for candidate in candidates:
        if candidate:
            return candidate
    return default


def contact_display_name(contact: ContactInfo) -> str:
    """Display name from a resolved contact: pushname, stored name, number."""
    return first_present(contact.pushname, contact.name, contact.number)


def sender_local_part(sender: str | None) -> str:
    """Fallback name taken from the identifier part before ``@``."""
    if not sender:
        return UNKNOWN_NAME
    return first_present(sender.split("@", 1)[0])


def chat_display_name(chat: ChatInfo) -> str:
    return first_present(chat.name)
