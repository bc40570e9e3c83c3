"""
Timer schedulers for notification expiry.

The queue only needs "run this callback after N milliseconds". Real
applications use a thread timer or the running asyncio loop; tests drive a
virtual clock by hand.
"""
import asyncio
import heapq
import itertools
import threading
from typing import Any, Callable, List, Optional, Protocol, Tuple


Callback = Callable[[], None]


class Scheduler(Protocol):
    """Capability to run a callback once after a delay."""

    def call_later(self, delay_ms: int, callback: Callback) -> Any:
        ...


class ThreadingScheduler:
    """Fires callbacks from daemon ``threading.Timer`` threads."""

    def call_later(self, delay_ms: int, callback: Callback) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """
    Fires callbacks on an asyncio event loop.

    Must be used from the loop's own thread; without an explicit loop the
    running loop is looked up on each call.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)


class VirtualClock:
    """Manually advanced clock for deterministic expiry in tests."""

    def __init__(self):
        self.now_ms = 0
        self._pending: List[Tuple[int, int, Callback]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: int, callback: Callback) -> None:
        heapq.heappush(self._pending, (self.now_ms + delay_ms, next(self._sequence), callback))

    def advance(self, delay_ms: int) -> None:
        """Move time forward, firing due callbacks in due order."""
        target = self.now_ms + delay_ms
        while self._pending and self._pending[0][0] <= target:
            due, _, callback = heapq.heappop(self._pending)
            self.now_ms = due
            callback()
        self.now_ms = target

    @property
    def pending(self) -> int:
        """Number of callbacks not yet fired."""
        return len(self._pending)
