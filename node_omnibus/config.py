"""Node Omnibus server configuration.

Typed settings for the server identity, the external Node.js tooling it
shells out to, and logging.  Uses Pydantic v2 so values are validated at
construction time and round-trip through JSON without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ServerConfig(BaseModel):
    """Global server configuration.

    Created once by the CLI entry point and handed to ``NodeOmnibusServer``.
    """

    server_name: str = Field(default="node-omnibus-server")
    server_version: str = Field(default="1.0.0")
    npm_executable: str = Field(default="npm", description="Package manager used for installs")
    npx_executable: str = Field(default="npx", description="Runner used for project generators")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return upper

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ServerConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a ``ServerConfig`` from environment variables.

        Recognised variables (all optional):
            OMNIBUS_SERVER_NAME, OMNIBUS_NPM, OMNIBUS_NPX, OMNIBUS_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("OMNIBUS_SERVER_NAME"):
            kwargs["server_name"] = os.environ["OMNIBUS_SERVER_NAME"]
        if os.environ.get("OMNIBUS_NPM"):
            kwargs["npm_executable"] = os.environ["OMNIBUS_NPM"]
        if os.environ.get("OMNIBUS_NPX"):
            kwargs["npx_executable"] = os.environ["OMNIBUS_NPX"]
        if os.environ.get("OMNIBUS_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["OMNIBUS_LOG_LEVEL"]
        return cls(**kwargs)
