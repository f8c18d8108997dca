"""Build the configured Session Gateway from a dotted import path."""

from __future__ import annotations

import importlib
from typing import Any

import structlog

from whatsapp_rest.core.domain.errors import ConfigError
from whatsapp_rest.core.interfaces.session_gateway import SessionGatewayProtocol

logger = structlog.get_logger(__name__)


def load_gateway(path: str, options: dict[str, Any] | None = None) -> SessionGatewayProtocol:
    """Import ``module:ClassName`` and instantiate it with ``options``.

    Raises:
        ConfigError: If the module or class cannot be found or constructed.
    """
    module_name, _, class_name = path.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(
            f"Cannot import gateway module '{module_name}': {exc}",
            details={"gateway": path},
        ) from exc

    gateway_cls = getattr(module, class_name, None)
    if gateway_cls is None:
        raise ConfigError(
            f"Gateway class '{class_name}' not found in '{module_name}'",
            details={"gateway": path},
        )

    try:
        gateway = gateway_cls(**(options or {}))
    except TypeError as exc:
        raise ConfigError(
            f"Invalid options for gateway '{path}': {exc}",
            details={"gateway": path},
        ) from exc

    logger.info("gateway.loaded", gateway=path)
    return gateway
