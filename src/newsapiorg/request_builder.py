"""Construction of authenticated GET requests for the NewsAPI endpoints."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Dict, Tuple
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

import requests

from newsapiorg.exceptions import ConstructionError

__all__ = ["RequestBuilder", "RequestSpec", "Scope"]


class Scope(str, enum.Enum):
    """Endpoint scopes and the path each one maps to on the service host."""

    TOP_HEADLINES = "/v2/top-headlines"
    EVERYTHING = "/v2/everything"
    SOURCES = "/v2/sources"

    @property
    def path(self) -> str:
        return self.value


@dataclass(frozen=True)
class RequestSpec:
    """Immutable description of a single request."""

    base_url: str
    path: str
    params: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    api_key: str | None = None

    @property
    def url(self) -> str:
        """Absolute URL with the encoded query string."""

        parts = urlsplit(urljoin(self.base_url, self.path))
        query = urlencode(self.params)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))

    @property
    def headers(self) -> Dict[str, str]:
        if self.api_key is None:
            return {}
        return {"Authorization": self.api_key}

    def with_param(self, name: str, value: str) -> "RequestSpec":
        """Return a copy where ``name`` is set to ``value``.

        An existing parameter with the same name keeps its position and has its
        value replaced, otherwise the pair is appended.
        """

        params = list(self.params)
        for index, (existing, _) in enumerate(params):
            if existing == name:
                params[index] = (name, value)
                break
        else:
            params.append((name, value))
        return replace(self, params=tuple(params))

    def prepare(self) -> requests.PreparedRequest:
        try:
            return requests.Request("GET", self.url, headers=self.headers).prepare()
        except (requests.exceptions.InvalidHeader, requests.exceptions.InvalidURL) as exc:
            raise ConstructionError(f"Cannot prepare request for {self.path!r}: {exc}") from exc


class RequestBuilder:
    """Fluent builder producing one :class:`requests.PreparedRequest`.

    Builders are cheap and meant to be used for a single request::

        request = (
            RequestBuilder.construct("https://newsapi.org/", Scope.TOP_HEADLINES)
            .api_key(key)
            .country("se")
            .category("technology")
            .build()
        )
    """

    def __init__(self, spec: RequestSpec) -> None:
        self._spec = spec

    @classmethod
    def construct(cls, base_url: str, scope: Scope) -> "RequestBuilder":
        """Resolve ``scope`` against ``base_url``.

        Raises :class:`ConstructionError` when the result is not an absolute
        http(s) URL.
        """

        path = Scope(scope).path
        resolved = urlsplit(urljoin(str(base_url), path))
        if resolved.scheme not in {"http", "https"} or not resolved.netloc:
            raise ConstructionError(f"Cannot resolve {path!r} against base URL {base_url!r}")
        return cls(RequestSpec(base_url=str(base_url), path=path))

    @property
    def spec(self) -> RequestSpec:
        return self._spec

    def api_key(self, key: str) -> "RequestBuilder":
        self._spec = replace(self._spec, api_key=key)
        return self

    def query_param(self, name: str, value: str | None) -> "RequestBuilder":
        """Set query parameter ``name``; ``None`` leaves the request untouched."""

        if value is not None:
            self._spec = self._spec.with_param(name, str(value))
        return self

    def country(self, code: str | None) -> "RequestBuilder":
        """Restrict results to an ISO 3166-1 alpha-2 country code."""

        return self.query_param("country", code)

    def category(self, category: str | None) -> "RequestBuilder":
        return self.query_param("category", category)

    def build(self) -> requests.PreparedRequest:
        return self._spec.prepare()
