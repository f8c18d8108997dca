"""WhatsApp bridge service.

Owns the inbound-message buffer and the readiness flag, listens to the
Session Gateway's event stream and exposes the readiness-gated
operations used by the REST routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from whatsapp_rest.application.message_buffer import InboundMessageBuffer
from whatsapp_rest.application.normalizer import normalize_message
from whatsapp_rest.core.domain.destination import normalize_destination
from whatsapp_rest.core.domain.errors import GatewayCallError, NotReadyError
from whatsapp_rest.core.domain.messages import (
    GatewayContact,
    InboundMessageRecord,
    utc_now_iso,
)
from whatsapp_rest.core.domain.session_events import (
    AuthFailureEvent,
    DisconnectedEvent,
    ErrorEvent,
    LoadingScreenEvent,
    MessageEvent,
    QrEvent,
    SessionEvent,
    SessionEventKind,
)
from whatsapp_rest.core.interfaces.session_gateway import SessionGatewayProtocol

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SendResult:
    """Outcome of a successful send."""

    message_id: str
    to: str
    message: str
    timestamp: str


@dataclass(frozen=True)
class ServiceStatus:
    ready: bool
    authenticated: bool
    message_count: int


class WhatsAppService:
    """Single owner of the bridge's mutable state.

    Created once per application and handed to routes via dependency
    injection. All state is touched only from the event loop thread.
    """

    def __init__(
        self,
        gateway: SessionGatewayProtocol,
        buffer: InboundMessageBuffer | None = None,
    ) -> None:
        self._gateway = gateway
        self._buffer = buffer if buffer is not None else InboundMessageBuffer()
        self._ready = False
        self._subscribed = False

    @property
    def gateway(self) -> SessionGatewayProtocol:
        return self._gateway

    @property
    def buffer(self) -> InboundMessageBuffer:
        return self._buffer

    @property
    def is_ready(self) -> bool:
        return self._ready

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def subscribe(self) -> None:
        """Register for every gateway event kind. Idempotent."""
        if self._subscribed:
            return
        for kind in SessionEventKind:
            self._gateway.subscribe(kind, self.handle_event)
        self._subscribed = True

    async def start(self) -> None:
        """Subscribe to the gateway and initialize the session.

        Initialization failures are logged; the service keeps serving
        status and buffer reads while not ready.
        """
        self.subscribe()
        self._ready = bool(self._gateway.is_ready())
        try:
            await self._gateway.initialize()
        except Exception as exc:
            logger.error("session.initialize_failed", error=str(exc))

    async def stop(self) -> None:
        try:
            await self._gateway.destroy()
        except Exception as exc:
            logger.warning("session.destroy_failed", error=str(exc))
        self._ready = False

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    async def handle_event(self, event: SessionEvent) -> None:
        """Apply a gateway event to the service state."""
        kind = event.kind
        if kind in (SessionEventKind.READY, SessionEventKind.AUTHENTICATED):
            self._ready = True
            logger.info("session.ready", trigger=kind.value)
        elif isinstance(event, DisconnectedEvent):
            self._ready = False
            logger.warning("session.disconnected", reason=event.reason)
        elif isinstance(event, AuthFailureEvent):
            self._ready = False
            logger.error("session.auth_failure", message=event.message)
        elif isinstance(event, ErrorEvent):
            logger.error("session.error", error=event.error)
        elif isinstance(event, QrEvent):
            logger.info(
                "session.qr_received",
                qr=event.code,
                hint="WhatsApp > Settings > Linked Devices > Link a Device",
            )
        elif isinstance(event, LoadingScreenEvent):
            logger.info("session.loading", percent=event.percent, message=event.message)
        elif isinstance(event, MessageEvent):
            await self.ingest_message(event)

    async def ingest_message(self, event: MessageEvent) -> InboundMessageRecord | None:
        """Normalize an incoming message and append it to the buffer.

        Never raises. When the record cannot be built, a diagnostic with
        the raw sender, body and timestamp is logged and nothing is
        appended.
        """
        raw = event.message
        try:
            record = await normalize_message(raw)
        except Exception as exc:
            logger.error(
                "message.normalization_failed",
                error=str(exc),
                sender=getattr(raw, "sender", None),
                body=getattr(raw, "body", None),
                timestamp=getattr(raw, "timestamp", None),
            )
            return None
        self._buffer.append(record)
        logger.info(
            "message.received",
            message_id=record.id,
            sender=record.sender,
            contact_name=record.contact_name,
            is_group=record.is_group,
            buffered=len(self._buffer),
        )
        return record

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def ensure_ready(self) -> None:
        """Raise ``NotReadyError`` unless the session is ready."""
        if not self._ready:
            raise NotReadyError()

    async def send_message(self, number: str, message: str) -> SendResult:
        """Send ``message`` to a raw destination after normalizing it.

        Raises:
            NotReadyError: If the session is not ready.
            GatewayCallError: If the gateway rejects the send.
        """
        self.ensure_ready()
        destination = normalize_destination(number)
        try:
            sent = await self._gateway.send_message(destination, message)
        except Exception as exc:
            logger.error("message.send_failed", to=destination, error=str(exc))
            raise GatewayCallError(str(exc), operation="send_message") from exc
        logger.info("message.sent", to=destination, message_id=sent.id)
        return SendResult(
            message_id=sent.id,
            to=destination,
            message=message,
            timestamp=utc_now_iso(),
        )

    async def list_contacts(self) -> list[GatewayContact]:
        """Return the account's contacts.

        Raises:
            NotReadyError: If the session is not ready.
            GatewayCallError: If the gateway lookup fails.
        """
        self.ensure_ready()
        try:
            return list(await self._gateway.get_contacts())
        except Exception as exc:
            logger.error("contacts.list_failed", error=str(exc))
            raise GatewayCallError(str(exc), operation="get_contacts") from exc

    def recent_messages(self, limit: Any = None) -> list[InboundMessageRecord]:
        return self._buffer.read_recent(limit)

    def status(self) -> ServiceStatus:
        return ServiceStatus(
            ready=self._ready,
            authenticated=self._ready,
            message_count=len(self._buffer),
        )
