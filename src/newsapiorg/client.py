"""NewsAPI client exposing article fetches through several calling conventions."""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from newsapiorg.config import ClientConfig
from newsapiorg.exceptions import ConfigurationError, DecodeError, NewsAPIError, TransportError
from newsapiorg.models import Article, ArticlesResponse, ErrorResponse, FetchResult, Source, SourcesResponse
from newsapiorg.publisher import ArticlePublisher
from newsapiorg.request_builder import RequestBuilder, Scope

__all__ = ["ApiClient", "BASE_URL", "Completion"]

logger = logging.getLogger(__name__)

BASE_URL = "https://newsapi.org/"

T = TypeVar("T")
EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)
Completion = Callable[[FetchResult[List[Article]]], None]


class ApiClient:
    """Client for the NewsAPI.org v2 endpoints.

    ``fetch_articles`` is the single synchronous primitive; the callback,
    future, ``asyncio`` and publisher variants all run it (or its transport
    half) on a worker and differ only in how completion is signalled.
    """

    def __init__(
        self,
        api_key: str,
        *,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = BASE_URL
        self._config = config or ClientConfig()
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._owns_executor = executor is None
        self._executor = executor
        self._executor_lock = threading.Lock()
        self._worker_state = threading.local()

    @classmethod
    def from_config(cls, config: ClientConfig | None = None, **kwargs) -> "ApiClient":
        """Create a client from ``config`` (``NEWSAPI_*`` environment variables by default)."""

        resolved = config or ClientConfig.from_env()
        if not resolved.api_key:
            raise ConfigurationError("No NewsAPI key configured; set NEWSAPI_API_KEY or api_key")
        return cls(resolved.api_key, config=resolved, **kwargs)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __repr__(self) -> str:
        masked = f"***{self._api_key[-4:]}" if len(self._api_key) > 8 else "***"
        return f"{type(self).__name__}(api_key='{masked}', base_url={self._base_url!r})"

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the executor and session this client created itself."""

        with self._executor_lock:
            if self._owns_executor and self._executor is not None:
                # A worker cannot join itself; callbacks may close the client.
                in_worker = getattr(self._worker_state, "in_pool", False)
                self._executor.shutdown(wait=not in_worker)
                self._executor = None
        if self._owns_session:
            self._session.close()

    # Request construction and transport

    def build_request(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> requests.PreparedRequest:
        """Return the request for ``scope``, falling back to configured defaults."""

        country = country_code if country_code is not None else self._config.country
        category = category if category is not None else self._config.category
        return (
            RequestBuilder.construct(self._base_url, scope)
            .api_key(self._api_key)
            .country(country)
            .category(category)
            .build()
        )

    def _send(self, request: requests.PreparedRequest) -> requests.Response:
        logger.debug("GET %s", request.url)
        try:
            return self._session.send(request, timeout=self._config.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", request.url, exc)
            raise TransportError(f"Request to {request.url} failed: {exc}") from exc

    def _decode(self, response: requests.Response, envelope: Type[EnvelopeT]) -> EnvelopeT:
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Response from %s is not JSON (HTTP %s)", response.url, response.status_code)
            raise DecodeError(f"Response body is not valid JSON: {exc}") from exc

        if isinstance(payload, dict) and payload.get("status") == "error":
            try:
                error = ErrorResponse.model_validate(payload)
            except ValidationError as exc:
                raise DecodeError("Malformed error response", exc.errors()) from exc
            logger.warning("NewsAPI rejected request: %s (%s)", error.code, error.message)
            raise NewsAPIError(error.code, error.message, response.status_code)

        try:
            decoded = envelope.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Response does not match %s: %d error(s)", envelope.__name__, exc.error_count())
            raise DecodeError(f"Response does not match {envelope.__name__}:\n{exc}", exc.errors()) from exc
        return decoded

    def _decode_articles(self, response: requests.Response) -> List[Article]:
        articles = list(self._decode(response, ArticlesResponse).articles)
        logger.debug("Decoded %d articles", len(articles))
        return articles

    def _decode_sources(self, response: requests.Response) -> List[Source]:
        sources = list(self._decode(response, SourcesResponse).sources)
        logger.debug("Decoded %d sources", len(sources))
        return sources

    # Synchronous calls

    def fetch_articles(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> List[Article]:
        """Fetch and decode the articles for ``scope``.

        Raises :class:`TransportError`, :class:`DecodeError`,
        :class:`NewsAPIError` or :class:`ConstructionError`.
        """

        request = self.build_request(scope, country_code, category)
        return self._decode_articles(self._send(request))

    def fetch_sources(self, country_code: str | None = None, category: str | None = None) -> List[Source]:
        request = self.build_request(Scope.SOURCES, country_code, category)
        return self._decode_sources(self._send(request))

    def fetch_raw(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> bytes:
        """Return the undecoded response body."""

        return self._send(self.build_request(scope, country_code, category)).content

    # Asynchronous calling conventions

    def _get_executor(self) -> Executor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers, thread_name_prefix="newsapi"
                )
            return self._executor

    def _submit(
        self,
        send: Callable[[], requests.Response],
        decode: Callable[[requests.Response], T],
    ) -> "Future[T]":
        """Run ``send`` then ``decode`` on a worker.

        The returned future stays pending while the transport is in flight, so
        ``cancel()`` succeeds until the response arrives and decoding is then
        skipped.
        """

        future: "Future[T]" = Future()

        def run() -> None:
            self._worker_state.in_pool = True
            if future.cancelled():
                return
            try:
                response = send()
            except Exception as exc:
                if future.set_running_or_notify_cancel():
                    future.set_exception(exc)
                return
            if not future.set_running_or_notify_cancel():
                logger.debug("Call cancelled before decoding; discarding response")
                response.close()
                return
            try:
                future.set_result(decode(response))
            except Exception as exc:
                future.set_exception(exc)

        self._get_executor().submit(run)
        return future

    def fetch_articles_future(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> "Future[List[Article]]":
        return self._submit(
            lambda: self._send(self.build_request(scope, country_code, category)),
            self._decode_articles,
        )

    def fetch_raw_future(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> "Future[bytes]":
        return self._submit(
            lambda: self._send(self.build_request(scope, country_code, category)),
            lambda response: response.content,
        )

    def fetch_articles_with_callback(
        self,
        completion: Completion,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> "Future[List[Article]]":
        """Invoke ``completion`` once with a :class:`FetchResult`.

        The completion may run on a worker thread. It is not invoked when the
        returned future is cancelled. Calling :meth:`close` from it does not
        wait for the worker pool to drain.
        """

        future = self.fetch_articles_future(scope, country_code, category)

        def _done(done: "Future[List[Article]]") -> None:
            if done.cancelled():
                return
            error = done.exception()
            if error is not None:
                completion(FetchResult.failure(error))
            else:
                completion(FetchResult.success(done.result()))

        future.add_done_callback(_done)
        return future

    async def fetch_articles_async(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> List[Article]:
        return await asyncio.to_thread(self.fetch_articles, scope, country_code, category)

    def articles_publisher(
        self,
        scope: Scope = Scope.TOP_HEADLINES,
        country_code: str | None = None,
        category: str | None = None,
    ) -> ArticlePublisher:
        return ArticlePublisher(lambda: self.fetch_articles_future(scope, country_code, category))
