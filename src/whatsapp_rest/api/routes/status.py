from fastapi import APIRouter, Depends

from whatsapp_rest.api.dependencies import get_service
from whatsapp_rest.api.schemas.bridge_schemas import StatusResponse
from whatsapp_rest.application.service import WhatsAppService

router = APIRouter(prefix="/api")


@router.get("/status", response_model=StatusResponse)
async def get_status(
    service: WhatsAppService = Depends(get_service),
) -> StatusResponse:
    """Report whether the session can send and list contacts right now."""
    status = service.status()
    return StatusResponse(
        ready=status.ready,
        authenticated=status.authenticated,
        message_count=status.message_count,
    )
