# taskkit

Small building blocks for programs that do work in the background:

- `taskkit.logger` – `ThreadLogger`, which takes messages from any number of
  threads and writes them, in order, from a single worker thread.
- `taskkit.timers` – `Timer`, an ordered set of one-shot timers polled from
  your own loop, and `TimerManager`, which sleeps until each task is due and
  runs it.
- `taskkit.md5hash` – `md5_digest_words`, `md5_hash32` and `md5_hash64`,
  integer keys taken from the MD5 digest of a name.
- `taskkit.msgcodec` – msgpack helpers (`pack`, `pack_args`, `pack_args_str`,
  `unpack`, `error_code`, `result`), the `ResultCode`, `ErrorCode` and
  `RequestType` enums, `UnpackError`, and `RpcHeader`, a fixed 20-byte frame
  header.
- `taskkit.router` – `Router`, which dispatches a msgpack request
  `[name, *args]` to a registered function, and `get_router()` for a shared
  instance.
- `taskkit.rpc_router` – `RpcRouter`, which dispatches by `md5_hash32(name)`
  and returns a `RouteResult` holding a `RouterError` status.
- `taskkit.io_pool` – `IoServicePool`, a round-robin pool of asyncio event
  loops, each run on its own thread.

## Installation

```
pip install taskkit
```

To run the test suite:

```
pip install "taskkit[test]"
pytest
```

## Logging from several threads

```python
import sys
import threading

from taskkit.logger import ThreadLogger


def produce(logger, label):
    for i in range(5):
        logger.log(f"{label} : Log {i}")


with ThreadLogger(sys.stdout, 0.01) as logger:
    workers = [
        threading.Thread(target=produce, args=(logger, f"Thread {n}"))
        for n in (1, 2)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
```

Each message is written as `msg:  <text>`, followed by a pause of `delay`
seconds. Leaving the `with` block (or calling `close()`) lets the worker write
every queued message before it stops; calling `log` after that raises
`RuntimeError`.

## Timers

`Timer` keeps its timers ordered by expiry time, then by creation order.
`add_timer(msec, func)` returns a `TimerNode` that can later be passed to
`del_timer`, which reports whether the timer was still scheduled.
`time_to_sleep()` gives the milliseconds until the next timer is due (`-1`
when none is scheduled), and `check_timer()` runs at most one due timer per
call, passing it its own node.

```python
import time

from taskkit.timers import Timer

timer = Timer()
timer.add_timer(1000, lambda node: print("fired", node.id))
node = timer.add_timer(2100, lambda node: print("never"))
timer.del_timer(node)

while len(timer):
    time.sleep(timer.time_to_sleep() / 1000)
    while timer.check_timer():
        pass
```

`Timer` reads `get_tick()`, the monotonic clock in milliseconds, unless given
another `clock` callable.

`TimerManager` is the simpler variant: `add_task(task, delay)` takes a delay in
milliseconds or a `datetime.timedelta`, and `run()` sleeps until each task is
due, calls it, and returns when none are left. Tasks due at the same moment
run in the order they were added.

```python
from taskkit.timers import TimerManager

manager = TimerManager()
manager.add_task(lambda: print("second"), 2000)
manager.add_task(lambda: print("first"), 1000)
manager.run()
```

## Routing msgpack requests

```python
from taskkit import msgcodec
from taskkit.router import Router

router = Router()
router.register_handler("plus", lambda a, b: a + b)

reply = router.route(msgcodec.pack_args("plus", 2, 3))
print(msgcodec.error_code(reply), msgcodec.result(reply))  # 0 5
```

Replies are msgpack arrays: `[0]` or `[0, value]` on success and
`[1, message]` on failure. A request for an unregistered name, one whose
arguments do not fit the handler, or one whose handler raises comes back as a
failure reply rather than raising. `get_key(func)` returns the name a function
was registered under, or an empty string.

`RpcRouter` looks handlers up by `md5_hash32(name)` and calls them as
`func(conn, *args)`. Registering the same name twice raises `ValueError`.
With `pub=True`, the last argument is itself a packed string and is decoded
before the call. `route(key, data, conn)` returns a `RouteResult` whose `ec`
is `RouterError.OK` or `RouterError.NO_SUCH_FUNCTION` and whose `result`
holds the encoded reply.

## Event-loop pool

```python
import threading

from taskkit.io_pool import IoServicePool

pool = IoServicePool(2)
loop = pool.get_io_service()  # loops are handed out in turn
runner = threading.Thread(target=pool.run)
runner.start()
loop.call_soon_threadsafe(print, "running on a pool thread")
pool.stop()
runner.join()
```

A pool size below 1 raises `ValueError`.

## Command-line demos

```
taskkit-logger [--count N]
taskkit-timers [manager|timer]
```

`taskkit-logger` logs `N` messages (5 by default) from each of two threads
through one `ThreadLogger`. `taskkit-timers manager` (the default) runs three
tasks delayed by 2, 1 and 3 seconds and prints when each ran;
`taskkit-timers timer` schedules four timers, cancels one, and prints each of
the others as it fires.

## What this package does not do

The routers only turn request bytes into reply bytes; the package has no
network server or client, no socket transport for `RpcHeader` frames, and no
loading of handlers from shared libraries or other files. Wiring the routers
to a connection is left to the program that uses them.