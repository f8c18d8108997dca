"""Bounded in-memory store of recently received messages."""

from __future__ import annotations

import re
from collections import deque
from typing import Any

from whatsapp_rest.core.domain.messages import InboundMessageRecord

DEFAULT_CAPACITY = 100
DEFAULT_LIMIT = 50

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw: Any, default: int = DEFAULT_LIMIT) -> int:
    """Turn caller input into a positive read limit.

    Leading digits are honored (``"10abc"`` -> 10, ``"5.5"`` -> 5).
    Missing, non-numeric and non-positive values fall back to ``default``.
    There is no upper clamp; reads are naturally bounded by buffer size.
    """
    if raw is None or isinstance(raw, bool):
        return default
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


class InboundMessageBuffer:
    """FIFO ring of the last ``capacity`` inbound messages.

    Records are kept oldest first. Appending beyond capacity evicts
    exactly one record, the oldest. Neither ``append`` nor
    ``read_recent`` awaits anything, so on a single event loop they
    never interleave.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._default_limit = default_limit
        self._records: deque[InboundMessageRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: InboundMessageRecord) -> None:
        self._records.append(record)

    def read_recent(self, limit: Any = None) -> list[InboundMessageRecord]:
        """Return up to ``limit`` records, most recent first."""
        count = parse_limit(limit, self._default_limit)
        recent = list(self._records)[-count:]
        recent.reverse()
        return recent
