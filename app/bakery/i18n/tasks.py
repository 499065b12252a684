"""Fire-and-forget scheduling for loader and saver coroutines.

Coroutines are started on the caller's running event loop when there is
one. Otherwise they run on a daemon thread hosting a private event loop,
created on first use.
"""

import asyncio
import concurrent.futures
import threading
from typing import Any, Coroutine, Optional, Set, Union

from bakery.logging import get_module_logger

logger = get_module_logger()

PendingWork = Union["asyncio.Task[Any]", "concurrent.futures.Future[Any]"]


class TaskRunner:
    """Starts coroutines without awaiting them and tracks what is in flight."""

    def __init__(self, name: str = "bakery-tasks"):
        self.name = name
        self._pending: Set[PendingWork] = set()
        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._closed = False

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> bool:
        """Schedule ``coro`` and return immediately.

        Returns:
            False if the runner is closed (the coroutine is discarded).
        """
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        work: PendingWork
        if running is not None:
            work = running.create_task(coro)
        else:
            loop = self._background_loop()
            if loop is None:
                coro.close()
                logger.warning("task_runner_closed", runner=self.name)
                return False
            work = asyncio.run_coroutine_threadsafe(coro, loop)

        with self._lock:
            self._pending.add(work)
        work.add_done_callback(self._discard)
        return True

    async def drain(self) -> None:
        """Wait until no work is in flight, including work spawned meanwhile."""
        current = asyncio.get_running_loop()
        while True:
            with self._lock:
                pending = list(self._pending)
            awaitables = [
                asyncio.wrap_future(work)
                if isinstance(work, concurrent.futures.Future)
                else work
                for work in pending
                if isinstance(work, concurrent.futures.Future) or work.get_loop() is current
            ]
            if not awaitables:
                return
            await asyncio.gather(*awaitables, return_exceptions=True)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until background-thread work finishes.

        Tasks on the caller's own event loop cannot be waited for from a
        blocking call; use ``drain`` there.

        Returns:
            True if all background work completed within ``timeout``.
        """
        with self._lock:
            futures = [w for w in self._pending if isinstance(w, concurrent.futures.Future)]
        if not futures:
            return True
        _, not_done = concurrent.futures.wait(futures, timeout=timeout)
        return not not_done

    def close(self) -> None:
        """Stop the background loop. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None

        if loop is not None:
            loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=5)
        if loop is not None and not loop.is_running():
            loop.close()
        logger.debug("task_runner_stopped", runner=self.name)

    def _background_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        with self._lock:
            if self._closed:
                return None
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._loop.run_forever, name=self.name, daemon=True
                )
                self._thread.start()
                logger.debug("task_runner_started", runner=self.name)
            return self._loop

    def _discard(self, work: PendingWork) -> None:
        with self._lock:
            self._pending.discard(work)
