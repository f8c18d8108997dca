"""Typed events emitted by the Session Gateway.

The gateway publishes one event object per lifecycle change or incoming
message. Subscribers register per ``SessionEventKind`` and receive the
matching dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from whatsapp_rest.core.interfaces.session_gateway import IncomingMessageProtocol


class SessionEventKind(str, Enum):
    """Closed set of event kinds a gateway can emit."""

    READY = "ready"
    AUTHENTICATED = "authenticated"
    MESSAGE = "message"
    DISCONNECTED = "disconnected"
    ERROR = "error"
    QR = "qr"
    AUTH_FAILURE = "auth_failure"
    LOADING_SCREEN = "loading_screen"


@dataclass(frozen=True)
class ReadyEvent:
    kind: SessionEventKind = field(default=SessionEventKind.READY, init=False)


@dataclass(frozen=True)
class AuthenticatedEvent:
    kind: SessionEventKind = field(default=SessionEventKind.AUTHENTICATED, init=False)


@dataclass(frozen=True)
class MessageEvent:
    """A message arrived on the session."""

    message: IncomingMessageProtocol
    kind: SessionEventKind = field(default=SessionEventKind.MESSAGE, init=False)


@dataclass(frozen=True)
class DisconnectedEvent:
    reason: str = ""
    kind: SessionEventKind = field(default=SessionEventKind.DISCONNECTED, init=False)


@dataclass(frozen=True)
class ErrorEvent:
    """The gateway reported an error. Not necessarily terminal."""

    error: str
    kind: SessionEventKind = field(default=SessionEventKind.ERROR, init=False)


@dataclass(frozen=True)
class QrEvent:
    """A pairing QR code is available for scanning."""

    code: str
    kind: SessionEventKind = field(default=SessionEventKind.QR, init=False)


@dataclass(frozen=True)
class AuthFailureEvent:
    message: str = ""
    kind: SessionEventKind = field(default=SessionEventKind.AUTH_FAILURE, init=False)


@dataclass(frozen=True)
class LoadingScreenEvent:
    percent: int = 0
    message: str = ""
    kind: SessionEventKind = field(default=SessionEventKind.LOADING_SCREEN, init=False)


SessionEvent = Union[
    ReadyEvent,
    AuthenticatedEvent,
    MessageEvent,
    DisconnectedEvent,
    ErrorEvent,
    QrEvent,
    AuthFailureEvent,
    LoadingScreenEvent,
]
