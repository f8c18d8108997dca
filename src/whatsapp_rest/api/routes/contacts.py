"""Contact listing route."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from whatsapp_rest.api.dependencies import get_service
from whatsapp_rest.api.schemas.bridge_schemas import ContactSchema, ContactsResponse
from whatsapp_rest.api.schemas.errors import ErrorResponse
from whatsapp_rest.application.service import WhatsAppService

router = APIRouter(prefix="/api")


@router.get(
    "/contacts",
    response_model=ContactsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def list_contacts(
    service: WhatsAppService = Depends(get_service),
) -> ContactsResponse:
    """List the account's contacts and groups."""
    contacts = await service.list_contacts()
    items = [
        ContactSchema(
            id=contact.id,
            number=contact.number,
            name=contact.display_name,
            is_user=contact.is_user,
            is_my_contact=contact.is_my_contact,
            is_group=contact.is_group,
        )
        for contact in contacts
    ]
    return ContactsResponse(count=len(items), contacts=items)
