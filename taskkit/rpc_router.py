"""Dispatch of RPC calls keyed by the 32-bit MD5 hash of the handler name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from taskkit.md5hash import md5_hash32
from taskkit.msgcodec import ResultCode, UnpackError, pack_args_str, unpack

_MISMATCH = "unpack failed: Args not match!"


class RouterError(Enum):
    OK = "ok"
    NO_SUCH_FUNCTION = "no_such_function"
    HAS_EXCEPTION = "has_exception"
    UNKNOWN = "unknown"


@dataclass
class RouteResult:
    """Outcome of routing one request: a status and the encoded response."""

    ec: RouterError = RouterError.UNKNOWN
    result: bytes = b""


def _decode_published(args: list[Any]) -> list[Any]:
    if not args:
        raise UnpackError(_MISMATCH)
    payload = args[-1]
    if isinstance(payload, str):
        payload = payload.encode("utf-8", "surrogateescape")
    if not isinstance(payload, (bytes, bytearray)):
        raise UnpackError(_MISMATCH)
    decoded = unpack(payload)
    if not isinstance(decoded, str):
        raise UnpackError(_MISMATCH)
    return [*args[:-1], decoded]


class _Invoker:
    def __init__(self, func: Callable[..., Any], pub: bool) -> None:
        self._func = func
        self._pub = pub

    def _call(self, conn: Any, args: list[Any]) -> Any:
        try:
            return self._func(conn, *args)
        except TypeError as exc:
            # Stopping in this frame means the arguments did not fit the handler.
            tb = exc.__traceback__
            if tb is not None and tb.tb_next is None:
                raise UnpackError(_MISMATCH) from None
            raise

    def __call__(self, conn: Any, data: bytes) -> bytes:
        try:
            args = unpack(data)
            if not isinstance(args, list):
                raise UnpackError(_MISMATCH)
            if self._pub:
                args = _decode_published(args)
            value = self._call(conn, args)
        except Exception as exc:
            return pack_args_str(ResultCode.FAIL, str(exc))
        if value is None:
            return pack_args_str(ResultCode.OK)
        return pack_args_str(ResultCode.OK, value)


class RpcRouter:
    """Handlers are called as ``func(conn, *args)`` with the decoded arguments."""

    def __init__(self) -> None:
        self._invokers: dict[int, _Invoker] = {}
        self._names: dict[int, str] = {}

    def register_handler(
        self, name: str, func: Callable[..., Any], pub: bool = False
    ) -> None:
        """Register ``func`` under the hash of ``name``.

        With ``pub`` set, the last argument is itself a packed string and is
        decoded before the call.
        """
        key = md5_hash32(name)
        if key in self._names:
            raise ValueError("duplicate registration key !")
        self._names[key] = name
        self._invokers[key] = _Invoker(func, pub)

    def remove_handler(self, name: str) -> None:
        key = md5_hash32(name)
        self._invokers.pop(key, None)
        self._names.pop(key, None)

    def get_name_by_key(self, key: int) -> str:
        """Return the registered name for ``key``, or the key in decimal."""
        return self._names.get(key, str(key))

    def route(self, key: int, data: bytes, conn: Any = None) -> RouteResult:
        """Call the handler for ``key`` with the arguments packed in ``data``."""
        try:
            invoker = self._invokers.get(key)
            if invoker is None:
                return RouteResult(
                    RouterError.NO_SUCH_FUNCTION,
                    pack_args_str(
                        ResultCode.FAIL,
                        "unknown function: " + self.get_name_by_key(key),
                    ),
                )
            return RouteResult(RouterError.OK, invoker(conn, data))
        except Exception as exc:
            return RouteResult(
                RouterError.HAS_EXCEPTION,
                pack_args_str(ResultCode.FAIL, "exception occur when call" + str(exc)),
            )