"""Domain-specific exception types for the WhatsApp REST bridge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

NOT_READY_MESSAGE = "WhatsApp client is not ready. Please scan QR code first."


@dataclass
class WhatsAppRestError(Exception):
    """Base exception for bridge domain errors."""

    message: str
    code: str = "whatsapp_rest_error"
    details: Dict[str, Any] | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class NotReadyError(WhatsAppRestError):
    """Raised when a gateway-dependent operation runs before the session is ready."""

    def __init__(self, message: str = NOT_READY_MESSAGE) -> None:
        super().__init__(message=message, code="not_ready", status_code=400)


class RequestValidationError(WhatsAppRestError):
    """Raised for malformed or incomplete request payloads.

    The received payload is echoed back under ``received``.
    """

    def __init__(self, message: str, *, received: Any = None) -> None:
        super().__init__(
            message=message,
            code="validation_error",
            details={"received": received},
            status_code=400,
        )


class GatewayCallError(WhatsAppRestError):
    """Raised when a Session Gateway call fails."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message=message, code="gateway_error", status_code=500)


class ConfigError(WhatsAppRestError):
    """Raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)


class PayloadTooLargeError(WhatsAppRestError):
    """Raised when a request body exceeds the configured size limit."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            message=f"Request body exceeds {max_bytes} bytes",
            code="payload_too_large",
            status_code=413,
        )
