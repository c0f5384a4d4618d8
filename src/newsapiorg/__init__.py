"""NewsAPI.org client exposing request construction, decoding and calling conventions."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

ENV_FILE_VARIABLE = "NEWSAPI_ENV_FILE"


def _load_local_env(env_path: Path | str | None = None) -> List[str]:
    """Copy ``KEY=value`` lines of a ``.env`` file into ``os.environ``.

    The file is ``env_path``, else ``$NEWSAPI_ENV_FILE``, else ``.env`` at the
    project root. Variables already set are left alone. Returns the names that
    were set.
    """

    if env_path is None:
        env_path = os.environ.get(ENV_FILE_VARIABLE) or Path(__file__).resolve().parents[2] / ".env"
    env_path = Path(env_path)
    loaded: List[str] = []
    if not env_path.exists():
        return loaded

    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key or key in os.environ:
            continue

        os.environ[key] = value.strip().strip('"').strip("'")
        loaded.append(key)

    return loaded


_load_local_env()

from .client import BASE_URL, ApiClient  # noqa: E402
from .config import ClientConfig  # noqa: E402
from .exceptions import (  # noqa: E402
    ConfigurationError,
    ConstructionError,
    DecodeError,
    NewsAPIClientError,
    NewsAPIError,
    TransportError,
)
from .models import Article, ArticleSource, FetchResult, Source  # noqa: E402
from .request_builder import RequestBuilder, RequestSpec, Scope  # noqa: E402

__all__ = [
    "ApiClient",
    "Article",
    "ArticleSource",
    "BASE_URL",
    "ENV_FILE_VARIABLE",
    "ClientConfig",
    "ConfigurationError",
    "ConstructionError",
    "DecodeError",
    "FetchResult",
    "NewsAPIClientError",
    "NewsAPIError",
    "RequestBuilder",
    "RequestSpec",
    "Scope",
    "Source",
    "TransportError",
]
