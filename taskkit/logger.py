"""A logger that prints messages from a single background worker thread."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections import deque
from typing import TextIO


class ThreadLogger:
    """Queue messages from any thread and write them, in order, on one worker.

    Closing the logger lets the worker drain every queued message before it
    stops.
    """

    def __init__(self, stream: TextIO | None = None, delay: float = 0.01) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._delay = delay
        self._pending: deque[str] = deque()
        self._cond = threading.Condition()
        self._stopped = False
        self._worker = threading.Thread(
            target=self._process, name="thread-logger", daemon=True
        )
        self._worker.start()

    def log(self, msg: str) -> None:
        """Queue a message for the worker thread."""
        with self._cond:
            if self._stopped:
                raise RuntimeError("logger is closed")
            self._pending.append(msg)
            self._cond.notify()

    def close(self) -> None:
        """Stop accepting messages and wait until all queued ones are written."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        if self._worker is not threading.current_thread():
            self._worker.join()

    def __enter__(self) -> ThreadLogger:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _process(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._pending or self._stopped)
                if not self._pending:
                    return
                msg = self._pending.popleft()
            print(f"msg:  {msg}", file=self._stream, flush=True)
            if self._delay > 0:
                time.sleep(self._delay)


def main(argv: list[str] | None = None) -> int:
    """Log from two producer threads through one logger."""
    parser = argparse.ArgumentParser(
        prog="taskkit-logger",
        description="Log messages from two threads through a background worker.",
    )
    parser.add_argument("--count", type=int, default=5, help="messages per thread")
    args = parser.parse_args(argv)

    with ThreadLogger() as logger:

        def produce(label: str) -> None:
            for i in range(args.count):
                logger.log(f"{label} : Log {i}")

        producers = [
            threading.Thread(target=produce, args=(label,))
            for label in ("Thread 1", "Thread 2")
        ]
        for producer in producers:
            producer.start()
        for producer in producers:
            producer.join()
    return 0