"""
Runtime settings for the WhatsApp REST bridge.

Sources, later wins:
1. Defaults declared on ``Settings``
2. YAML file named by ``WHATSAPP_REST_CONFIG`` (or an explicit path)
3. Environment variables (``HOST``, ``PORT``, ``LOGLEVEL``,
   ``WHATSAPP_REST_GATEWAY``)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from whatsapp_rest.core.domain.errors import ConfigError

logger = structlog.get_logger(__name__)

CONFIG_PATH_ENV = "WHATSAPP_REST_CONFIG"
DEFAULT_GATEWAY = (
    "whatsapp_rest.infrastructure.session.in_memory_gateway:InMemorySessionGateway"
)

_ENV_FIELDS = {
    "HOST": "host",
    "PORT": "port",
    "LOGLEVEL": "log_level",
    "WHATSAPP_REST_GATEWAY": "gateway",
}


class Settings(BaseModel):
    """Validated bridge configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str = Field("0.0.0.0", description="Bind address for the HTTP server")
    port: int = Field(3000, ge=1, le=65535)
    log_level: str = Field("INFO", description="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    buffer_capacity: int = Field(100, ge=1, description="Inbound messages kept in memory")
    default_message_limit: int = Field(50, ge=1)
    max_body_bytes: int = Field(10 * 1024 * 1024, ge=1)
    gateway: str = Field(
        DEFAULT_GATEWAY,
        description="Session Gateway class as 'module.path:ClassName'",
    )
    gateway_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments passed to the gateway constructor",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @field_validator("gateway")
    @classmethod
    def _check_gateway_path(cls, value: str) -> str:
        module, _, attr = value.partition(":")
        if not module or not attr:
            raise ValueError("gateway must look like 'package.module:ClassName'")
        return value


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", details={"path": str(path)})
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file must contain a mapping: {path}", details={"path": str(path)}
        )
    return data


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build ``Settings`` from defaults, optional YAML file and environment.

    Raises:
        ConfigError: If the file is missing/malformed or a value is invalid.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}

    path = config_path or env.get(CONFIG_PATH_ENV)
    if path:
        raw.update(_read_yaml(Path(path)))
        logger.debug("settings.file_loaded", path=str(path))

    for env_name, field_name in _ENV_FIELDS.items():
        value = env.get(env_name)
        if value:
            raw[field_name] = value

    try:
        return Settings(**raw)
    except ValidationError as exc:
        raise ConfigError(
            "Invalid configuration", details={"errors": exc.errors(include_url=False)}
        ) from exc
