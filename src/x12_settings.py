"""Server configuration for the x12json API.

Settings are read once at startup into an explicit ``ServerSettings`` object
that is handed to the app factory and the server runner. Nothing else in the
service looks at the process environment.

Recognized variables (empty values count as unset):
    API_SECRET       shared secret expected in the X-API-KEY header (default "password")
    PORT             listening port (default 8080)
    HOST             bind address (default 0.0.0.0)
    LOG_LEVEL        service log level (default INFO)
    REQUIRE_API_KEY  gate /convert behind the API key (default true)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Fallback used when API_SECRET is not configured. Guessable; kept for existing
# deployments only, and startup warns whenever it is in effect.
DEFAULT_API_SECRET = "password"
DEFAULT_PORT = 8080

# env var name -> settings field
_ENV_FIELDS: Dict[str, str] = {
    "API_SECRET": "api_secret",
    "PORT": "port",
    "HOST": "host",
    "LOG_LEVEL": "log_level",
    "REQUIRE_API_KEY": "require_api_key",
}


class ServerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_secret: str = DEFAULT_API_SECRET
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    require_api_key: bool = True

    @property
    def uses_default_secret(self) -> bool:
        return self.api_secret == DEFAULT_API_SECRET

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> ServerSettings:
    """Build settings from ``environ`` (defaults to ``os.environ``).

    A ``.env`` file is loaded first without overriding variables that are already
    set. Raises ``pydantic.ValidationError`` for values that do not convert
    (e.g. ``PORT=abc`` or ``PORT=70000``).
    """
    load_dotenv(dotenv_path, override=False)
    source = os.environ if environ is None else environ

    values: Dict[str, Any] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = source.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        # The secret is compared byte for byte, so it is passed through as given
        values[field_name] = raw if field_name == "api_secret" else raw.strip()
    return ServerSettings(**values)
