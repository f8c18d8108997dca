"""API Schemas Package."""

from whatsapp_rest.api.schemas.bridge_schemas import (
    ContactSchema,
    ContactsResponse,
    MessageSchema,
    MessagesResponse,
    RootResponse,
    SendMessageResponse,
    StatusResponse,
)
from whatsapp_rest.api.schemas.errors import ErrorResponse

__all__ = [
    "ContactSchema",
    "ContactsResponse",
    "MessageSchema",
    "MessagesResponse",
    "RootResponse",
    "SendMessageResponse",
    "StatusResponse",
    "ErrorResponse",
]
