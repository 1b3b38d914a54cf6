from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://api.hubapi.com"


class MissingConfigError(RuntimeError):
    """Raised when a required setting is absent from the environment."""


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)


class HubSpotConfig(BaseModel):
    token: str
    object_type: str = Field(
        default="contacts",
        description="Object type id, e.g. 'contacts' or '2-12345' for a custom object.",
    )
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(default="INFO")
    file: str | None = Field(
        default=None, description="Optional path of a rotating log file."
    )
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class PortalConfig(BaseModel):
    hubspot: HubSpotConfig
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _get(env: Mapping[str, str], name: str) -> str | None:
    raw = (env.get(name) or "").strip()
    return raw or None


def load_portal_config(environ: Mapping[str, str] | None = None) -> PortalConfig:
    """Build the config from environment variables.

    - HUBSPOT_TOKEN is required; MissingConfigError otherwise.
    - Everything else falls back to defaults.
    - Validation is performed by Pydantic.
    """

    env = os.environ if environ is None else environ

    token = _get(env, "HUBSPOT_TOKEN")
    if token is None:
        raise MissingConfigError(
            "HUBSPOT_TOKEN missing in environment. Add it to your .env file (do NOT commit it)."
        )

    hubspot: dict[str, object] = {"token": token}
    for key, name in (
        ("object_type", "CUSTOM_OBJECT_TYPE"),
        ("base_url", "HUBSPOT_BASE_URL"),
        ("timeout_seconds", "HUBSPOT_TIMEOUT"),
    ):
        value = _get(env, name)
        if value is not None:
            hubspot[key] = value

    network: dict[str, object] = {}
    host = _get(env, "BIND_HOST")
    if host is not None:
        network["bind_host"] = host
    port = _get(env, "PORT")
    if port is not None:
        network["port"] = port

    logging_cfg: dict[str, object] = {}
    level = _get(env, "LOG_LEVEL")
    if level is not None:
        logging_cfg["level"] = level.upper()
    log_file = _get(env, "LOG_FILE")
    if log_file is not None:
        logging_cfg["file"] = log_file

    return PortalConfig.model_validate(
        {"hubspot": hubspot, "network": network, "logging": logging_cfg}
    )
