"""Message routes: send a message and read recently received ones.

- ``POST /api/send-message`` -- send one message (JSON or form body)
- ``GET  /api/messages``     -- buffered inbound messages, most recent first
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Query, Request

from whatsapp_rest.api.dependencies import get_service
from whatsapp_rest.api.schemas.bridge_schemas import (
    MessageSchema,
    MessagesResponse,
    SendMessageResponse,
)
from whatsapp_rest.api.schemas.errors import ErrorResponse
from whatsapp_rest.application.service import WhatsAppService
from whatsapp_rest.core.domain.errors import RequestValidationError, WhatsAppRestError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api")

EMPTY_BODY_MESSAGE = (
    "Request body is empty or not properly formatted. "
    "Make sure Content-Type is application/json"
)
MISSING_FIELDS_MESSAGE = "Missing required fields: number and message"

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_body(request: Request) -> Any:
    """Parse the request body as JSON or form data.

    Returns ``None`` for an unparseable JSON body and ``{}`` when the
    content type is neither JSON nor a form.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    if "json" not in content_type:
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _validated_fields(body: Any) -> tuple[str, str]:
    """Extract ``number`` and ``message`` or raise with the body echoed."""
    if not body:
        raise RequestValidationError(EMPTY_BODY_MESSAGE, received=body)
    if not isinstance(body, dict):
        raise RequestValidationError(MISSING_FIELDS_MESSAGE, received=body)
    number = body.get("number")
    message = body.get("message")
    if not number or not message:
        raise RequestValidationError(MISSING_FIELDS_MESSAGE, received=body)
    return str(number), str(message)


@router.post(
    "/send-message",
    response_model=SendMessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def send_message(
    request: Request,
    service: WhatsAppService = Depends(get_service),
) -> SendMessageResponse:
    """Send a message to a phone number or chat id.

    Accepts ``{"number": ..., "message": ...}`` as JSON or form fields.
    Plain phone numbers are normalized to ``<digits>@c.us``.
    """
    body = await _read_body(request)
    logger.debug(
        "send_message.request_received",
        method=request.method,
        path=request.url.path,
        content_type=request.headers.get("content-type"),
        body=body,
    )

    service.ensure_ready()
    number, message = _validated_fields(body)
    result = await service.send_message(number, message)

    return SendMessageResponse(
        message_id=result.message_id,
        to=result.to,
        message=result.message,
        timestamp=result.timestamp,
    )


@router.get(
    "/messages",
    response_model=MessagesResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_messages(
    limit: str | None = Query(None, description="Maximum number of messages (default 50)"),
    service: WhatsAppService = Depends(get_service),
) -> MessagesResponse:
    """Return buffered inbound messages, most recent first."""
    try:
        records = service.recent_messages(limit)
        messages = [MessageSchema(**record.to_dict()) for record in records]
    except Exception as exc:
        logger.error("messages.read_failed", error=str(exc))
        raise WhatsAppRestError(
            str(exc), code="internal_error", status_code=500
        ) from exc
    return MessagesResponse(count=len(messages), messages=messages)
