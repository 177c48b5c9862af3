"""Inter-stage delivery channels and the fan-out completion barrier.

A channel is a FIFO that producers never block on and that is closed exactly
once. Consumers iterate it and stop when it is closed and drained.
"""

import queue
import threading
from typing import Any, Iterator, Optional

__all__ = ['Channel', 'ChannelClosed', 'CompletionBarrier']

_CLOSED = object()


class ChannelClosed(RuntimeError):
    """Raised when putting into a channel that has already been closed."""


class Channel:
    """Close-on-completion FIFO between two pipeline stages.

    Backed by ``queue.Queue``. The capacity is sized to the largest number
    of items the producer can emit, plus one slot for the close marker, so
    ``put`` never waits.

    Parameters
    ----------
    name : str
        Used in log and error messages.
    capacity : int, optional
        Maximum number of items. 0 (default) means unbounded.

    Examples
    --------
    >>> ch = Channel("years", capacity=2)
    >>> ch.put("2019"); ch.put("2020"); ch.close()
    >>> list(ch)
    ['2019', '2020']
    """

    def __init__(self, name: str, capacity: int = 0):
        self.name = name
        self._queue = queue.Queue(maxsize=capacity + 1 if capacity > 0 else 0)
        self._closed = threading.Event()
        self._lock = threading.Lock()

    def put(self, item: Any) -> None:
        """Enqueue an item without blocking.

        Raises
        ------
        ChannelClosed
            If the channel was already closed.
        queue.Full
            If the producer emits more than the declared capacity.
        """
        with self._lock:
            if self._closed.is_set():
                raise ChannelClosed(f"put on closed channel {self.name!r}")
            self._queue.put_nowait(item)

    def close(self) -> None:
        """Mark the end of the stream. Safe to call more than once."""
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
            self._queue.put_nowait(_CLOSED)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def get(self, timeout: Optional[float] = None) -> Any:
        """Block until an item is available.

        Raises
        ------
        StopIteration
            Once the channel is closed and drained.
        queue.Empty
            If ``timeout`` expires first.
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # leave the marker for any later reader
            self._queue.put_nowait(_CLOSED)
            raise StopIteration
        return item

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.get()
            except StopIteration:
                return


class CompletionBarrier:
    """Counts finished tasks and releases waiters once all launched tasks are done.

    The number of expected tasks is only known when the dispatcher has
    drained its input, so it is set late with :meth:`expect`. Tasks call
    :meth:`done` on exit whether or not they produced output.

    Examples
    --------
    >>> barrier = CompletionBarrier()
    >>> barrier.done(); barrier.done()
    >>> barrier.expect(2)
    >>> barrier.wait(timeout=0)
    True
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._done = 0
        self._expected = None

    def done(self) -> None:
        with self._cond:
            self._done += 1
            self._cond.notify_all()

    def expect(self, count: int) -> None:
        with self._cond:
            self._expected = count
            self._cond.notify_all()

    @property
    def finished(self) -> int:
        with self._cond:
            return self._done

    def _complete(self) -> bool:
        return self._expected is not None and self._done >= self._expected

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every expected task is done. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(self._complete, timeout=timeout)
