"""Response schemas for the bridge endpoints.

Field names follow the camelCase JSON contract of the REST API through
aliases; routes serialize by alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EndpointDirectory(_CamelModel):
    get_contacts: str = Field("GET /api/contacts", alias="getContacts")
    send_message: str = Field("POST /api/send-message", alias="sendMessage")
    get_messages: str = Field("GET /api/messages", alias="getMessages")
    get_status: str = Field("GET /api/status", alias="getStatus")


class RootResponse(BaseModel):
    """Liveness response with the endpoint directory."""

    status: str = "running"
    message: str = "WhatsApp API is running"
    endpoints: EndpointDirectory = Field(default_factory=EndpointDirectory)


class StatusResponse(_CamelModel):
    ready: bool
    authenticated: bool
    message_count: int = Field(..., alias="messageCount")


class ContactSchema(_CamelModel):
    id: str
    number: str | None = None
    name: str | None = None
    is_user: bool = Field(False, alias="isUser")
    is_my_contact: bool = Field(False, alias="isMyContact")
    is_group: bool = Field(False, alias="isGroup")


class ContactsResponse(BaseModel):
    success: bool = True
    count: int
    contacts: list[ContactSchema]


class SendMessageResponse(_CamelModel):
    success: bool = True
    message_id: str = Field(..., alias="messageId")
    to: str
    message: str
    timestamp: str


class MessageSchema(_CamelModel):
    """One buffered inbound message."""

    id: str
    sender: str = Field(..., alias="from")
    recipient: str = Field(..., alias="to")
    body: str
    timestamp: int | float | None = None
    contact_name: str = Field(..., alias="contactName")
    is_group: bool = Field(..., alias="isGroup")
    chat_name: str = Field(..., alias="chatName")
    received_at: str = Field(..., alias="receivedAt")


class MessagesResponse(BaseModel):
    success: bool = True
    count: int
    messages: list[MessageSchema]
