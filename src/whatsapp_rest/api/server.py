import logging
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whatsapp_rest import __version__
from whatsapp_rest.api.errors import bridge_error_handler
from whatsapp_rest.api.middleware.body_limit import BodySizeLimitMiddleware
from whatsapp_rest.api.routes import contacts, health, messages, status
from whatsapp_rest.application.message_buffer import InboundMessageBuffer
from whatsapp_rest.application.service import WhatsAppService
from whatsapp_rest.core.domain.errors import WhatsAppRestError
from whatsapp_rest.infrastructure.config.settings import Settings, load_settings
from whatsapp_rest.infrastructure.session.loader import load_gateway

logger = structlog.get_logger()


def configure_logging(level_name: str) -> None:
    """Apply one log level to stdlib logging and structlog."""
    log_level = logging.getLevelName(level_name.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format="%(message)s")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the WhatsApp session with the app and tear it down on exit."""
    service: WhatsAppService = app.state.service
    await logger.ainfo(
        "fastapi.startup",
        message="WhatsApp API starting...",
        gateway=app.state.settings.gateway,
    )
    await service.start()
    yield
    await logger.ainfo("fastapi.shutdown", message="WhatsApp API shutting down...")
    await service.stop()


def build_service(settings: Settings) -> WhatsAppService:
    """Create the service and its gateway from settings."""
    gateway = load_gateway(settings.gateway, settings.gateway_options)
    buffer = InboundMessageBuffer(
        capacity=settings.buffer_capacity,
        default_limit=settings.default_message_limit,
    )
    return WhatsAppService(gateway, buffer)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[WhatsAppService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings; loaded from file/environment if omitted.
        service: Optional prebuilt service; built from settings if omitted.

    Returns:
        Configured FastAPI application
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="WhatsApp REST API",
        description="Send and receive WhatsApp messages over HTTP",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = service or build_service(settings)

    app.add_exception_handler(WhatsAppRestError, bridge_error_handler)

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(status.router, tags=["health"])
    app.include_router(contacts.router, tags=["contacts"])
    app.include_router(messages.router, tags=["messages"])

    return app


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
