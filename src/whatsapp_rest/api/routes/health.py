from fastapi import APIRouter

from whatsapp_rest.api.schemas.bridge_schemas import RootResponse

router = APIRouter()


@router.get("/", response_model=RootResponse)
async def root() -> RootResponse:
    """Report that the service process is up."""
    return RootResponse()
