"""Millisecond timers: an ordered timer set and a blocking task manager."""

from __future__ import annotations

import argparse
import bisect
import itertools
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, NamedTuple


def get_tick() -> int:
    """Milliseconds on the monotonic clock."""
    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True, order=True)
class TimerNode:
    """A scheduled callback, ordered by expiry time and then by id."""

    expire: int
    id: int
    func: Callable[[TimerNode], object] = field(compare=False, repr=False)


class Timer:
    """A set of timers kept in expiry order, checked from an event loop."""

    _ids = itertools.count()

    def __init__(self, clock: Callable[[], int] = get_tick) -> None:
        self._clock = clock
        self._nodes: list[TimerNode] = []

    def add_timer(self, msec: int, func: Callable[[TimerNode], object]) -> TimerNode:
        """Schedule ``func`` to run ``msec`` milliseconds from now."""
        node = TimerNode(self._clock() + msec, next(Timer._ids), func)
        bisect.insort(self._nodes, node)
        return node

    def del_timer(self, node: TimerNode) -> bool:
        """Cancel a timer; return whether it was still scheduled."""
        return self._discard(node)

    def check_timer(self) -> bool:
        """Run the earliest timer if it is due; return whether one ran."""
        if not self._nodes or self._nodes[0].expire > self._clock():
            return False
        node = self._nodes[0]
        node.func(node)
        self._discard(node)
        return True

    def time_to_sleep(self) -> int:
        """Milliseconds until the next timer is due, or -1 if none is scheduled."""
        if not self._nodes:
            return -1
        return max(self._nodes[0].expire - self._clock(), 0)

    def __len__(self) -> int:
        return len(self._nodes)

    def _discard(self, node: TimerNode) -> bool:
        index = bisect.bisect_left(self._nodes, node)
        if index < len(self._nodes) and self._nodes[index] == node:
            del self._nodes[index]
            return True
        return False


class _Task(NamedTuple):
    expiration: float
    seq: int
    task: Callable[[], object]


class TimerManager:
    """Run delayed tasks in expiry order, sleeping between them."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._seq = itertools.count()
        self._tasks: list[_Task] = []

    def add_task(self, task: Callable[[], object], delay: float | timedelta) -> None:
        """Schedule ``task`` after ``delay`` milliseconds (or a timedelta)."""
        seconds = delay.total_seconds() if isinstance(delay, timedelta) else delay / 1000
        bisect.insort(self._tasks, _Task(self._clock() + seconds, next(self._seq), task))

    def run(self) -> None:
        """Block until every scheduled task has run."""
        while self._tasks:
            entry = self._tasks[0]
            now = self._clock()
            if entry.expiration <= now:
                entry.task()
                self._tasks.remove(entry)
            else:
                self._sleep(entry.expiration - now)

    def __len__(self) -> int:
        return len(self._tasks)


def _run_manager() -> list[int]:
    executed: list[int] = []

    def example_task() -> None:
        stamp = time.monotonic_ns()
        executed.append(stamp)
        print(f"Task executed at {stamp}", flush=True)

    manager = TimerManager()
    for delay in (2000, 1000, 3000):
        manager.add_task(example_task, delay)
    manager.run()
    return executed


def _run_timer() -> None:
    timer = Timer()
    fired = itertools.count(1)

    def report(node: TimerNode) -> None:
        print(f"{get_tick()}node id:{node.id} revoked times:{next(fired)}", flush=True)

    timer.add_timer(1000, report)
    timer.add_timer(1000, report)
    timer.add_timer(3000, report)
    node = timer.add_timer(2100, report)
    timer.del_timer(node)

    print(f"now time:{get_tick()}", flush=True)
    while len(timer):
        time.sleep(timer.time_to_sleep() / 1000)
        while timer.check_timer():
            pass


def main(argv: list[str] | None = None) -> int:
    """Run one of the timer demonstrations."""
    parser = argparse.ArgumentParser(
        prog="taskkit-timers", description="Run a timer demonstration."
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=("manager", "timer"),
        default="manager",
        help="'manager' runs delayed tasks; 'timer' drives a timer set from a loop",
    )
    args = parser.parse_args(argv)
    if args.mode == "manager":
        _run_manager()
    else:
        _run_timer()
    return 0