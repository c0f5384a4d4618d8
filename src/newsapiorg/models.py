"""Domain models decoded from NewsAPI responses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

T = TypeVar("T")


class _WireModel(BaseModel):
    """Base for payload models; accepts camelCase wire names and snake_case alike."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ArticleSource(_WireModel):
    """The ``source`` object embedded in every article."""

    id: Optional[str] = None
    name: Optional[str] = None


class Article(_WireModel):
    """A single news article."""

    title: str
    url: HttpUrl
    description: Optional[str] = None
    author: Optional[str] = None
    source: Optional[ArticleSource] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    url_to_image: Optional[str] = Field(default=None, alias="urlToImage")
    content: Optional[str] = None

    @field_validator("published_at", mode="before")
    @classmethod
    def _parse_iso8601(cls, value: object) -> object:
        """Accept ISO-8601 strings only; epoch numbers are not timestamps here."""

        if value is None or isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValueError("publishedAt must be an ISO-8601 string")
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"publishedAt is not ISO-8601: {value!r}") from exc

    @property
    def source_name(self) -> str | None:
        return self.source.name if self.source is not None else None


class Source(_WireModel):
    """A publisher as listed by the ``/v2/sources`` endpoint."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None


class ArticlesResponse(_WireModel):
    """Envelope returned by the article endpoints."""

    status: str
    total_results: Optional[int] = Field(default=None, alias="totalResults")
    articles: List[Article]


class SourcesResponse(_WireModel):
    """Envelope returned by the sources endpoint."""

    status: str
    sources: List[Source]


class ErrorResponse(_WireModel):
    """Envelope returned when the service rejects a request."""

    status: Literal["error"]
    code: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome handed to callback-style completions.

    Exactly one of ``value`` and ``error`` is meaningful: ``error`` is ``None``
    on success.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "FetchResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = [
    "Article",
    "ArticleSource",
    "ArticlesResponse",
    "ErrorResponse",
    "FetchResult",
    "Source",
    "SourcesResponse",
]
