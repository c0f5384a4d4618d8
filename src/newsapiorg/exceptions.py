"""Exceptions raised by the NewsAPI client."""

from __future__ import annotations

from typing import Any, List


class NewsAPIClientError(Exception):
    """Base class for every error surfaced by :mod:`newsapiorg`."""


class ConfigurationError(NewsAPIClientError):
    """Raised when client configuration is missing or invalid."""


class ConstructionError(NewsAPIClientError):
    """Raised when an endpoint path cannot be resolved against the base URL."""


class TransportError(NewsAPIClientError):
    """Raised when the HTTP request fails before a response body is available."""


class DecodeError(NewsAPIClientError):
    """Raised when a response body does not match the expected JSON shape."""

    def __init__(self, message: str, errors: List[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @property
    def fields(self) -> List[str]:
        """Dotted locations of the offending fields, when known."""

        return [".".join(str(part) for part in error.get("loc", ())) for error in self.errors]


class NewsAPIError(NewsAPIClientError):
    """Raised when the service answers with an ``"error"`` status envelope."""

    def __init__(self, code: str | None, message: str | None, status_code: int | None = None) -> None:
        super().__init__(f"{code or 'unknown'}: {message or 'no message'}")
        self.code = code
        self.message = message
        self.status_code = status_code


__all__ = [
    "ConfigurationError",
    "ConstructionError",
    "DecodeError",
    "NewsAPIClientError",
    "NewsAPIError",
    "TransportError",
]
