"""Fan-in of several item streams into one.

Each source iterable is drained by a daemon thread into a bounded queue that
the consumer reads from, so items come out in arrival order rather than
source order. The merged stream:

- ends once every source is exhausted,
- re-raises the first error from any source and abandons the others,
- closes every source when it is closed, even before the first ``next()``.

A producer blocked inside its source's ``__next__`` cannot be interrupted;
close() waits for producers at most ``_JOIN_TIMEOUT`` seconds in total.
"""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Iterable, Iterator
from typing import Any

# Items buffered across all sources before producers block
DEFAULT_BUFFER_SIZE = 64

# Seconds a blocked producer waits before re-checking for a stop request
_POLL_INTERVAL = 0.05

# Seconds close() waits for producer threads to exit
_JOIN_TIMEOUT = 1.0

_DONE = object()


class _Failure:
    """Wraps an exception raised by a source."""

    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error


def close_stream(stream: Any) -> None:
    """Close stream if it supports closing (generators, files)."""
    close = getattr(stream, "close", None)
    if callable(close):
        close()


def _put(buffer: queue.Queue, item: Any, stop: threading.Event) -> bool:
    """Put item on buffer unless a stop is requested. Returns False if stopped."""
    while not stop.is_set():
        try:
            buffer.put(item, timeout=_POLL_INTERVAL)
        except queue.Full:
            continue
        return True
    return False


def _pump(stream: Iterable[Any], buffer: queue.Queue, stop: threading.Event) -> None:
    # Anything a source raises, KeyboardInterrupt and SystemExit included,
    # must reach the consumer or it would wait forever.
    try:
        try:
            for item in stream:
                if not _put(buffer, item, stop):
                    break
        finally:
            close_stream(stream)
    except BaseException as e:
        _put(buffer, _Failure(e), stop)
        return

    # no-op once a stop is requested
    _put(buffer, _DONE, stop)


class MergedStream(Iterator[Any]):
    """Iterator over the interleaved items of several source streams.

    Producer threads start on the first ``next()``. ``close()`` stops them
    and closes every source; it is called automatically once the stream
    ends or fails.
    """

    def __init__(self, streams: tuple[Iterable[Any], ...], buffer_size: int):
        self._streams = streams
        self._buffer: queue.Queue = queue.Queue(maxsize=buffer_size)
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []
        self._remaining = len(streams)
        self._started = False
        self._closed = False

    def _start(self) -> None:
        self._started = True
        for index, stream in enumerate(self._streams):
            thread = threading.Thread(
                target=_pump,
                args=(stream, self._buffer, self._stop),
                name=f"uripick-merge-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

    def __next__(self) -> Any:
        if self._closed:
            raise StopIteration
        if not self._started:
            self._start()

        while self._remaining:
            item = self._buffer.get()
            if item is _DONE:
                self._remaining -= 1
                continue
            if isinstance(item, _Failure):
                self.close()
                raise item.error
            return item

        self.close()
        raise StopIteration

    def close(self) -> None:
        """Stop all producers and close every source. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._stop.set()

        if not self._started:
            for stream in self._streams:
                close_stream(stream)
            return

        deadline = time.monotonic() + _JOIN_TIMEOUT
        for thread in self._threads:
            thread.join(max(0.0, deadline - time.monotonic()))

    def __del__(self):
        # producers notice within _POLL_INTERVAL; sources close in their threads
        self._stop.set()


def merge_streams(*streams: Iterable[Any], buffer_size: int = DEFAULT_BUFFER_SIZE) -> MergedStream:
    """Merge streams into a single iterator of interleaved items.

    Args:
        streams: Source iterables.
        buffer_size: Maximum number of items held between producers and the
            consumer.

    Returns:
        MergedStream over the items of every source. With no streams it is
        already exhausted.
    """
    if buffer_size < 1:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")
    return MergedStream(streams, buffer_size)
