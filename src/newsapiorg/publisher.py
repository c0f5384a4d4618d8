"""Reactive-style subscription over a single article request."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, List, Optional

from newsapiorg.models import Article

__all__ = ["ArticlePublisher"]

logger = logging.getLogger(__name__)

OnNext = Callable[[List[Article]], None]
OnError = Callable[[BaseException], None]
OnComplete = Callable[[], None]


class ArticlePublisher:
    """Publishes the articles of one request to each subscriber.

    Every call to :meth:`subscribe` starts its own request. A subscriber
    receives a single ``on_next`` followed by ``on_complete``, or a single
    ``on_error``. Cancelling the returned future before the response has
    arrived suppresses every signal.
    """

    def __init__(self, start: Callable[[], "Future[List[Article]]"]) -> None:
        self._start = start

    def subscribe(
        self,
        on_next: OnNext,
        on_error: Optional[OnError] = None,
        on_complete: Optional[OnComplete] = None,
    ) -> "Future[List[Article]]":
        future = self._start()

        def _deliver(done: "Future[List[Article]]") -> None:
            if done.cancelled():
                return
            error = done.exception()
            if error is not None:
                if on_error is None:
                    logger.warning("Article subscription failed with no error handler: %s", error)
                    return
                on_error(error)
                return
            on_next(done.result())
            if on_complete is not None:
                on_complete()

        future.add_done_callback(_deliver)
        return future
