"""Threaded logging, timers, a msgpack codec, name-keyed call routers and a loop pool."""

__version__ = "0.1.0"

__all__ = ["io_pool", "logger", "md5hash", "msgcodec", "router", "rpc_router", "timers"]