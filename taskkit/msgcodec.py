"""MessagePack argument codec and the RPC wire header."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import msgpack

MAGIC_NUM = 39
MAX_BUF_LEN = 1048576 * 10
INIT_BUF_SIZE = 2 * 1024

_HEADER = struct.Struct("<BBxxIQI")
HEAD_LEN = _HEADER.size


class ResultCode(IntEnum):
    OK = 0
    FAIL = 1


class ErrorCode(IntEnum):
    OK = 0
    UNKNOWN = 1
    FAIL = 2
    TIMEOUT = 3
    CANCEL = 4
    BADCONNECTION = 5


class RequestType(IntEnum):
    REQ_RES = 0
    SUB_PUB = 1


class UnpackError(ValueError):
    """Raised when a buffer does not decode to the expected shape."""


@dataclass(frozen=True)
class RpcHeader:
    """Fixed-size frame header that precedes every RPC message body."""

    req_type: RequestType
    body_len: int
    req_id: int
    func_id: int
    magic: int = MAGIC_NUM

    def to_bytes(self) -> bytes:
        return _HEADER.pack(
            self.magic, int(self.req_type), self.body_len, self.req_id, self.func_id
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RpcHeader:
        if len(data) < HEAD_LEN:
            raise ValueError(f"header needs {HEAD_LEN} bytes, got {len(data)}")
        magic, req_type, body_len, req_id, func_id = _HEADER.unpack_from(data)
        try:
            kind = RequestType(req_type)
        except ValueError:
            raise ValueError(f"unknown request type: {req_type}") from None
        return cls(kind, body_len, req_id, func_id, magic)


def pack(obj: Any) -> bytes:
    """Encode a single value."""
    return msgpack.packb(obj, use_bin_type=True)


def pack_args(*args: Any) -> bytes:
    """Encode the arguments as one MessagePack array."""
    return msgpack.packb(list(args), use_bin_type=True)


def pack_args_str(code: int, *args: Any) -> bytes:
    """Encode a result code followed by the arguments as one array."""
    return msgpack.packb([int(code), *args], use_bin_type=True)


def unpack(data: bytes) -> Any:
    """Decode one value; arrays come back as lists."""
    try:
        return msgpack.unpackb(bytes(data), raw=False, strict_map_key=False)
    except Exception as exc:
        raise UnpackError("unpack failed: Args not match!") from exc


def _response(data: bytes, size: int) -> list:
    obj = unpack(data)
    if (
        not isinstance(obj, list)
        or len(obj) < size
        or not isinstance(obj[0], int)
        or isinstance(obj[0], bool)
    ):
        raise UnpackError("unpack failed: Args not match!")
    return obj


def error_code(data: bytes) -> int:
    """Return the leading result code of a response."""
    return _response(data, 1)[0]


def result(data: bytes) -> Any:
    """Return the value that follows the result code in a response."""
    return _response(data, 2)[1]