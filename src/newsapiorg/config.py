"""Configuration model and helpers for the NewsAPI client."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from newsapiorg.exceptions import ConfigurationError

__all__ = ["ClientConfig", "DEFAULT_CONFIG_PATH", "ENV_PREFIX"]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "newsapi.json"
ENV_PREFIX = "NEWSAPI_"


class ClientConfig(BaseModel):
    """Settings shared by every request an :class:`~newsapiorg.client.ApiClient` makes."""

    api_key: Optional[str] = Field(default=None, description="NewsAPI key sent in the Authorization header")
    country: Optional[str] = Field(
        default="se",
        description="Default ISO 3166-1 country code used when the caller does not pass one",
    )
    category: Optional[str] = Field(
        default="technology",
        description="Default category used when the caller does not pass one",
    )
    max_workers: int = Field(default=4, ge=1, description="Worker threads used by the asynchronous calling conventions")
    timeout: Tuple[float, float] = Field(
        default=(10, 30),
        description="Connect and read timeouts in seconds handed to requests",
    )

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "ClientConfig":
        """Load configuration data from a JSON file."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in configuration file: {config_path}") from exc

        try:
            config = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Configuration file is invalid: {config_path}\n{exc}") from exc

        logger.info("Loaded client configuration from %s", config_path)
        return config

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build configuration from ``NEWSAPI_*`` environment variables.

        Unset variables keep their defaults; an empty ``NEWSAPI_COUNTRY`` or
        ``NEWSAPI_CATEGORY`` disables that query parameter.
        """

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in ("api_key", "country", "category"):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            values[name] = raw.strip() or None

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(f"Environment configuration is invalid\n{exc}") from exc

    def dump(self, path: Path | str | None = None) -> None:
        """Persist the configuration back to disk as JSON."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
