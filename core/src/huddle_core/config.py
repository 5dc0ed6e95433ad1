from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

CONFIG_FILE_ENV = "HUDDLE_CONFIG_FILE"


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)


class AuthConfig(BaseModel):
    app_password: str | None = Field(
        default=None, description="Shared password checked by POST /api/auth."
    )


class LiveKitConfig(BaseModel):
    """Credentials and endpoints of the LiveKit deployment."""

    api_key: str | None = Field(default=None)
    api_secret: str | None = Field(default=None)
    url: str | None = Field(
        default=None,
        description="Service URL, e.g. wss://example.livekit.cloud",
    )
    public_url: str | None = Field(
        default=None,
        description="URL handed to the browser; falls back to `url` when omitted.",
    )

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key and self.api_secret and self.url)

    @property
    def browser_url(self) -> str:
        return self.public_url or self.url or ""

    @property
    def http_url(self) -> str:
        """Management API base URL derived from the service URL."""

        raw = (self.url or "").strip().rstrip("/")
        if raw.startswith("wss://"):
            return "https://" + raw[len("wss://") :]
        if raw.startswith("ws://"):
            return "http://" + raw[len("ws://") :]
        return raw


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    file: str | None = Field(default=None, description="Optional rotating log file path.")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class CoreConfig(BaseModel):
    environment: str = Field(default="development")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    livekit: LiveKitConfig = Field(default_factory=LiveKitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


# (section, key) <- environment variable
_ENV_KEYS: dict[str, tuple[str | None, str]] = {
    "HUDDLE_ENV": (None, "environment"),
    "APP_PASSWORD": ("auth", "app_password"),
    "LIVEKIT_API_KEY": ("livekit", "api_key"),
    "LIVEKIT_API_SECRET": ("livekit", "api_secret"),
    "LIVEKIT_URL": ("livekit", "url"),
    "LIVEKIT_PUBLIC_URL": ("livekit", "public_url"),
    "HUDDLE_BIND": ("network", "bind_host"),
    "HUDDLE_PORT": ("network", "port"),
    "HUDDLE_LOG_LEVEL": ("logging", "level"),
    "HUDDLE_LOG_FILE": ("logging", "file"),
    "HUDDLE_LOG_MAX_SIZE_MB": ("logging", "max_size_mb"),
    "HUDDLE_LOG_BACKUP_COUNT": ("logging", "backup_count"),
}


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(environ: Mapping[str, str] | None = None) -> CoreConfig:
    """Assemble the process configuration once at startup.

    - Starts from the JSON file named by HUDDLE_CONFIG_FILE, if any.
    - Non-empty environment variables override file values.
    - Validation is performed by Pydantic.
    """

    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {}
    config_file = (env.get(CONFIG_FILE_ENV) or "").strip()
    if config_file:
        data = _read_json(Path(config_file).expanduser())
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config format at {config_file}")
        raw = data

    for var, (section, key) in _ENV_KEYS.items():
        value = (env.get(var) or "").strip()
        if not value:
            continue
        if section is None:
            raw[key] = value
        else:
            raw.setdefault(section, {})[key] = value

    return CoreConfig.model_validate(raw)
