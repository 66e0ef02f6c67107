import asyncio
import threading

import pytest

from taskkit.io_pool import IoServicePool


def test_zero_size_rejected():
    with pytest.raises(ValueError, match="io_service_pool size is 0"):
        IoServicePool(0)


def test_round_robin():
    pool = IoServicePool(3)
    first = [pool.get_io_service() for _ in range(3)]
    second = [pool.get_io_service() for _ in range(3)]
    assert len({id(loop) for loop in first}) == 3
    assert all(a is b for a, b in zip(first, second))


def test_single_loop_always_returned():
    pool = IoServicePool(1)
    loop = pool.get_io_service()
    assert pool.get_io_service() is loop


def test_run_executes_work_until_stopped():
    pool = IoServicePool(2)
    runner = threading.Thread(target=pool.run, daemon=True)
    runner.start()

    async def double(x):
        return x * 2

    futures = [
        asyncio.run_coroutine_threadsafe(double(n), pool.get_io_service())
        for n in range(4)
    ]
    assert [f.result(timeout=5) for f in futures] == [0, 2, 4, 6]

    pool.stop()
    runner.join(timeout=5)
    assert not runner.is_alive()


def test_stop_before_run_returns_immediately():
    pool = IoServicePool(2)
    pool.stop()
    runner = threading.Thread(target=pool.run, daemon=True)
    runner.start()
    runner.join(timeout=5)
    assert not runner.is_alive()