"""A round-robin pool of event loops, each driven by its own thread."""

from __future__ import annotations

import asyncio
import threading


class IoServicePool:
    """Hand out event loops in turn; ``run`` blocks until ``stop`` is called."""

    def __init__(self, pool_size: int) -> None:
        if pool_size < 1:
            raise ValueError("io_service_pool size is 0")
        self._loops = [asyncio.new_event_loop() for _ in range(pool_size)]
        self._next = 0
        self._lock = threading.Lock()
        self._stopped = False

    def get_io_service(self) -> asyncio.AbstractEventLoop:
        """Return the next loop, cycling through the pool."""
        with self._lock:
            loop = self._loops[self._next]
            self._next = (self._next + 1) % len(self._loops)
        return loop

    def run(self) -> None:
        """Run every loop on its own thread and wait for all of them to stop."""
        with self._lock:
            if self._stopped:
                return
            threads = [
                threading.Thread(target=self._serve, args=(loop,), daemon=True)
                for loop in self._loops
            ]
            for thread in threads:
                thread.start()
        for thread in threads:
            thread.join()

    def stop(self) -> None:
        """Ask every loop to stop; a later ``run`` returns at once."""
        with self._lock:
            self._stopped = True
            for loop in self._loops:
                if not loop.is_closed():
                    loop.call_soon_threadsafe(loop.stop)

    @staticmethod
    def _serve(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()