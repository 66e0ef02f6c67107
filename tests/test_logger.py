import io
import threading

import pytest

from taskkit.logger import ThreadLogger, main


def _lines(stream):
    return stream.getvalue().splitlines()


def test_messages_written_in_order():
    out = io.StringIO()
    logger = ThreadLogger(out, delay=0)
    for word in ("alpha", "beta", "gamma"):
        logger.log(word)
    logger.close()
    assert _lines(out) == ["msg:  alpha", "msg:  beta", "msg:  gamma"]


def test_close_drains_queue_with_delay():
    out = io.StringIO()
    logger = ThreadLogger(out, delay=0.005)
    for i in range(6):
        logger.log(str(i))
    logger.close()
    assert _lines(out) == [f"msg:  {i}" for i in range(6)]


def test_context_manager_flushes_everything():
    out = io.StringIO()
    with ThreadLogger(out, delay=0) as logger:
        logger.log("first")
        logger.log("second")
    assert _lines(out) == ["msg:  first", "msg:  second"]


def test_log_after_close_raises():
    logger = ThreadLogger(io.StringIO(), delay=0)
    logger.close()
    with pytest.raises(RuntimeError):
        logger.log("late")


def test_close_twice_is_harmless():
    out = io.StringIO()
    logger = ThreadLogger(out, delay=0)
    logger.log("once")
    logger.close()
    logger.close()
    assert _lines(out) == ["msg:  once"]


def test_concurrent_producers_keep_per_thread_order():
    out = io.StringIO()
    with ThreadLogger(out, delay=0) as logger:

        def produce(label):
            for i in range(20):
                logger.log(f"{label} {i}")

        threads = [threading.Thread(target=produce, args=(x,)) for x in ("A", "B")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    lines = _lines(out)
    assert len(lines) == 40
    for label in ("A", "B"):
        mine = [line for line in lines if line.startswith(f"msg:  {label} ")]
        assert mine == [f"msg:  {label} {i}" for i in range(20)]


def test_main_logs_from_two_threads(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert [x for x in lines if "Thread 1" in x] == [
        f"msg:  Thread 1 : Log {i}" for i in range(5)
    ]
    assert [x for x in lines if "Thread 2" in x] == [
        f"msg:  Thread 2 : Log {i}" for i in range(5)
    ]