"""Destination identifier normalization for outbound messages."""

from __future__ import annotations

import re

from whatsapp_rest.core.domain.messages import USER_SUFFIX

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def normalize_destination(raw: str) -> str:
    """Turn user input into a gateway destination identifier.

    Identifiers that already carry an ``@`` suffix (``...@c.us``,
    ``...@g.us``) are returned unchanged. Anything else is treated as a
    phone number: every character except digits and ``+`` is dropped and
    the single-recipient suffix is appended.

    Examples:
        >>> normalize_destination("+1 (555) 123-4567")
        '+15551234567@c.us'
        >>> normalize_destination("120363041234567890@g.us")
        '120363041234567890@g.us'
    """
    if "@" in raw:
        return raw
    return _NON_DIAL_CHARS.sub("", raw) + USER_SUFFIX
