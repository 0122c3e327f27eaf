"""Broadcast stream of search result snapshots."""

import asyncio
from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

import structlog

from omnisearch.exceptions import StreamClosedError
from omnisearch.models import SearchResult

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[SearchResult[T]], None]

# Marks end-of-stream in listener queues
_CLOSED = object()


class Subscription:
    """Handle returned by `ResultStream.subscribe`."""

    def __init__(self, stream: "ResultStream", key: int):
        self._stream = stream
        self._key = key

    @property
    def active(self) -> bool:
        return self._key in self._stream._callbacks

    def cancel(self) -> None:
        """Stop receiving snapshots. Safe to call more than once."""
        self._stream._callbacks.pop(self._key, None)


class ResultStream(Generic[T]):
    """
    Multi-subscriber stream without replay.

    Subscribers only see snapshots emitted after they attach. Callbacks are
    invoked synchronously in subscription order; async listeners get their
    own queue.
    """

    def __init__(self):
        self._callbacks: dict[int, Listener] = {}
        self._queues: list[asyncio.Queue] = []
        self._close_callbacks: list[Callable[[], None]] = []
        self._next_key = 0
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks) + len(self._queues)

    def subscribe(self, callback: Listener) -> Subscription:
        """Attach a callback and return its subscription handle."""
        key = self._next_key
        self._next_key += 1
        self._callbacks[key] = callback
        return Subscription(self, key)

    def on_close(self, callback: Callable[[], None]) -> None:
        """Run `callback` once the stream closes, or right away if it already has."""
        if self._closed:
            callback()
        else:
            self._close_callbacks.append(callback)

    async def listen(self) -> AsyncIterator[SearchResult[T]]:
        """
        Iterate over snapshots until the stream is closed.

        The listener queue stays registered until the iterator finishes, so
        a consumer that may stop early should wrap it in
        `contextlib.aclosing()`:

            async with aclosing(stream.listen()) as results:
                async for result in results:
                    ...
        """
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue()
        self._queues.append(queue)
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    break
                yield item
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def emit(self, result: SearchResult[T]) -> None:
        """Deliver a snapshot to every current subscriber."""
        if self._closed:
            raise StreamClosedError("Cannot emit on a closed result stream")

        for callback in list(self._callbacks.values()):
            try:
                callback(result)
            except Exception as e:
                logger.error(
                    "Result subscriber failed",
                    query=result.query,
                    error=str(e),
                    exc_info=True,
                )

        for queue in self._queues:
            queue.put_nowait(result)

    def close(self) -> None:
        """Close the stream and release all subscribers."""
        if self._closed:
            return

        self._closed = True
        self._callbacks.clear()
        for queue in self._queues:
            queue.put_nowait(_CLOSED)
        self._queues = []

        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error("Close callback failed", error=str(e), exc_info=True)


def wait_for_result(
    stream: ResultStream[T],
    predicate: Optional[Callable[[SearchResult[T]], bool]] = None,
) -> "asyncio.Future[SearchResult[T]]":
    """
    Return a future resolved by the next snapshot matching `predicate`.

    The future fails with `StreamClosedError` if the stream closes first.
    """
    future: asyncio.Future = asyncio.get_running_loop().create_future()
    subscription: Optional[Subscription] = None

    def _on_close() -> None:
        if not future.done():
            future.set_exception(StreamClosedError("Result stream closed before a match"))

    def _on_result(result: SearchResult[T]) -> None:
        if future.done():
            return
        if predicate is None or predicate(result):
            future.set_result(result)
            if subscription is not None:
                subscription.cancel()
            if _on_close in stream._close_callbacks:
                stream._close_callbacks.remove(_on_close)

    stream.on_close(_on_close)
    if not future.done():
        subscription = stream.subscribe(_on_result)
    return future
