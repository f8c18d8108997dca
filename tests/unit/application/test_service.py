"""Unit tests for WhatsAppService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from whatsapp_rest.application.message_buffer import InboundMessageBuffer
from whatsapp_rest.application.service import WhatsAppService
from whatsapp_rest.core.domain.errors import GatewayCallError, NotReadyError
from whatsapp_rest.core.domain.messages import SentMessage
from whatsapp_rest.core.domain.session_events import (
    AuthenticatedEvent,
    AuthFailureEvent,
    DisconnectedEvent,
    ErrorEvent,
    MessageEvent,
    QrEvent,
    ReadyEvent,
)


def _stub_gateway(ready: bool = False) -> MagicMock:
    gw = MagicMock()
    gw.is_ready = MagicMock(return_value=ready)
    gw.initialize = AsyncMock()
    gw.destroy = AsyncMock()
    gw.send_message = AsyncMock(return_value=SentMessage(id="msg-1"))
    gw.get_contacts = AsyncMock(return_value=[])
    return gw


class TestReadiness:
    @pytest.mark.asyncio
    async def test_not_ready_before_first_event(self, service):
        assert service.is_ready is False
        assert service.status().ready is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("event", [ReadyEvent(), AuthenticatedEvent()])
    async def test_ready_and_authenticated_set_flag(self, service, gateway, event):
        await gateway.emit(event)
        status = service.status()
        assert status.ready is True
        assert status.authenticated is True

    @pytest.mark.asyncio
    async def test_disconnect_clears_flag(self, service, gateway):
        await gateway.emit(ReadyEvent())
        await gateway.emit(DisconnectedEvent(reason="NAVIGATION"))
        assert service.is_ready is False

    @pytest.mark.asyncio
    async def test_auth_failure_clears_flag(self, service, gateway):
        await gateway.emit(ReadyEvent())
        await gateway.emit(AuthFailureEvent(message="bad session"))
        assert service.is_ready is False

    @pytest.mark.asyncio
    async def test_error_and_qr_do_not_change_flag(self, service, gateway):
        await gateway.emit(ReadyEvent())
        await gateway.emit(ErrorEvent(error="protocol hiccup"))
        await gateway.emit(QrEvent(code="2@abc"))
        assert service.is_ready is True


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_seeds_flag_and_initializes(self):
        gw = _stub_gateway(ready=True)
        service = WhatsAppService(gw)
        await service.start()
        assert service.is_ready is True
        gw.initialize.assert_awaited_once()
        assert gw.subscribe.call_count == 8

    @pytest.mark.asyncio
    async def test_start_survives_initialize_failure(self):
        gw = _stub_gateway()
        gw.initialize.side_effect = RuntimeError("chromium missing")
        service = WhatsAppService(gw)
        await service.start()
        assert service.is_ready is False

    @pytest.mark.asyncio
    async def test_subscribe_is_idempotent(self):
        gw = _stub_gateway()
        service = WhatsAppService(gw)
        service.subscribe()
        service.subscribe()
        assert gw.subscribe.call_count == 8

    @pytest.mark.asyncio
    async def test_stop_destroys_session(self):
        gw = _stub_gateway(ready=True)
        service = WhatsAppService(gw)
        await service.start()
        await service.stop()
        gw.destroy.assert_awaited_once()
        assert service.is_ready is False


class TestIngest:
    def test_empty_buffer_argument_is_kept(self):
        buffer = InboundMessageBuffer(capacity=3, default_limit=2)
        service = WhatsAppService(_stub_gateway(), buffer)
        assert service.buffer is buffer
        assert service.buffer.capacity == 3

    @pytest.mark.asyncio
    async def test_message_event_is_buffered(self, service, gateway, incoming_factory):
        await gateway.emit(MessageEvent(message=incoming_factory()))
        recent = service.recent_messages()
        assert len(recent) == 1
        assert recent[0].contact_name == "Alice"

    @pytest.mark.asyncio
    async def test_contact_failure_still_appends(self, service, gateway, incoming_factory):
        message = incoming_factory(contact=RuntimeError("lookup failed"))
        await gateway.emit(MessageEvent(message=message))
        recent = service.recent_messages()
        assert len(recent) == 1
        assert recent[0].contact_name == "15551234567"

    @pytest.mark.asyncio
    async def test_malformed_message_is_dropped(self, service):
        class Broken:
            sender = "15551234567@c.us"
            body = "no id here"
            timestamp = 1

            async def get_contact(self):
                raise RuntimeError("nope")

            async def get_chat(self):
                raise RuntimeError("nope")

        result = await service.ingest_message(MessageEvent(message=Broken()))
        assert result is None
        assert len(service.buffer) == 0

    @pytest.mark.asyncio
    async def test_messages_buffer_while_not_ready(self, service, gateway, incoming_factory):
        await gateway.emit(MessageEvent(message=incoming_factory()))
        assert service.status().message_count == 1


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_not_ready_skips_gateway(self):
        gw = _stub_gateway()
        service = WhatsAppService(gw)
        with pytest.raises(NotReadyError):
            await service.send_message("15551234567", "hi")
        gw.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_to_normalized_destination(self, ready_service, gateway):
        result = await ready_service.send_message("+1 (555) 123-4567", "hi")
        assert result.to == "+15551234567@c.us"
        assert result.message == "hi"
        assert result.message_id == gateway.sent[0].message_id
        assert gateway.sent[0].destination == "+15551234567@c.us"
        assert result.timestamp

    @pytest.mark.asyncio
    async def test_gateway_failure_is_wrapped(self):
        gw = _stub_gateway()
        gw.send_message.side_effect = RuntimeError("Evaluation failed")
        service = WhatsAppService(gw)
        await service.handle_event(ReadyEvent())
        with pytest.raises(GatewayCallError) as exc_info:
            await service.send_message("15551234567", "hi")
        assert exc_info.value.message == "Evaluation failed"
        assert exc_info.value.status_code == 500
        gw.send_message.assert_awaited_once()


class TestListContacts:
    @pytest.mark.asyncio
    async def test_not_ready_skips_gateway(self):
        gw = _stub_gateway()
        service = WhatsAppService(gw)
        with pytest.raises(NotReadyError):
            await service.list_contacts()
        gw.get_contacts.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_gateway_contacts(self, ready_service):
        contacts = await ready_service.list_contacts()
        assert [c.id for c in contacts] == ["15551234567@c.us", "120363041234567890@g.us"]

    @pytest.mark.asyncio
    async def test_gateway_failure_is_wrapped(self):
        gw = _stub_gateway()
        gw.get_contacts.side_effect = ConnectionError("page crashed")
        service = WhatsAppService(gw)
        await service.handle_event(ReadyEvent())
        with pytest.raises(GatewayCallError, match="page crashed"):
            await service.list_contacts()
