"""Name-keyed dispatch of MessagePack-encoded calls to registered handlers."""

from __future__ import annotations

from typing import Any, Callable

from taskkit.msgcodec import (
    MAX_BUF_LEN,
    ResultCode,
    UnpackError,
    pack_args_str,
    unpack,
)

_MISMATCH = "unpack failed: Args not match!"


def _call(func: Callable[..., Any], args: list[Any]) -> Any:
    try:
        return func(*args)
    except TypeError as exc:
        # A traceback that stops in this frame means the call itself was
        # rejected: the arguments did not fit the handler.
        tb = exc.__traceback__
        if tb is not None and tb.tb_next is None:
            raise UnpackError(_MISMATCH) from None
        raise


def _invoke(func: Callable[..., Any], args: list[Any]) -> bytes:
    try:
        value = _call(func, args)
    except Exception as exc:
        return pack_args_str(ResultCode.FAIL, str(exc))
    if value is None:
        return pack_args_str(ResultCode.OK)
    return pack_args_str(ResultCode.OK, value)


class Router:
    """Dispatch requests of the form ``[name, *args]`` to named handlers.

    Every response is a MessagePack array: ``[0]`` or ``[0, value]`` on
    success, ``[1, message]`` on failure.
    """

    def __init__(self) -> None:
        self._invokers: dict[str, Callable[..., Any]] = {}
        self._func_names: dict[Callable[..., Any], str] = {}

    def register_handler(self, name: str, func: Callable[..., Any]) -> None:
        """Register ``func`` under ``name``, replacing any earlier handler."""
        self._func_names[func] = name
        self._invokers[name] = func

    def remove_handler(self, name: str) -> None:
        """Forget the handler registered under ``name``, if any."""
        self._invokers.pop(name, None)

    def get_key(self, func: Callable[..., Any]) -> str:
        """Return the name ``func`` was registered under, or an empty string."""
        try:
            return self._func_names.get(func, "")
        except TypeError:
            return ""

    def route(self, data: bytes) -> bytes:
        """Decode a request, call its handler and return the encoded response."""
        try:
            request = unpack(data)
            if not isinstance(request, list) or not request or not isinstance(request[0], str):
                raise UnpackError(_MISMATCH)
            func_name = request[0]
            func = self._invokers.get(func_name)
            if func is None:
                return pack_args_str(ResultCode.FAIL, f"unknown function: {func_name}")
            response = _invoke(func, request[1:])
            if len(response) >= MAX_BUF_LEN:
                return pack_args_str(
                    ResultCode.FAIL,
                    "the response result is out of range: more than 10M " + func_name,
                )
            return response
        except Exception as exc:
            return pack_args_str(ResultCode.FAIL, str(exc))


_default_router = Router()


def get_router() -> Router:
    """Return the process-wide shared router."""
    return _default_router