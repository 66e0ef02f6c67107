"""MD5 compression and short integer hashes derived from the digest."""

from __future__ import annotations

import math
import struct

_MASK = 0xFFFFFFFF

_CONSTANTS = tuple(int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64))
_SHIFTS = (7, 12, 17, 22, 5, 9, 14, 20, 4, 11, 16, 23, 6, 10, 15, 21)
_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _padded(message: bytes) -> bytes:
    n = len(message)
    m = ((n + 1 + 8 + 63) // 64) * 64
    bit_length = ((n * 8) & _MASK).to_bytes(8, "little")
    return message + b"\x80" + bytes(m - n - 9) + bit_length


def _mix(i: int, b: int, c: int, d: int) -> int:
    if i < 16:
        return d ^ (b & (c ^ d))
    if i < 32:
        return c ^ (d & (b ^ c))
    if i < 48:
        return b ^ c ^ d
    return c ^ (b | (~d & _MASK))


def _word_index(i: int) -> int:
    if i < 16:
        return i
    if i < 32:
        return (5 * i + 1) % 16
    if i < 48:
        return (3 * i + 5) % 16
    return (7 * i) % 16


def _rotate_left(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _swap_endian(value: int) -> int:
    return int.from_bytes(value.to_bytes(4, "little"), "big")


def md5_digest_words(data: bytes | bytearray | str) -> tuple[int, int, int, int]:
    """Return the four 32-bit state words (A, B, C, D) after hashing ``data``."""
    buf = _padded(_as_bytes(data))
    state = _INITIAL
    for (offset,) in zip(range(0, len(buf), 64)):
        words = struct.unpack_from("<16I", buf, offset)
        a, b, c, d = state
        for i in range(64):
            f = (_mix(i, b, c, d) + a + _CONSTANTS[i] + words[_word_index(i)]) & _MASK
            shift = _SHIFTS[(i // 16) * 4 + i % 4]
            a, b, c, d = d, (b + _rotate_left(f, shift)) & _MASK, b, c
        state = tuple((x + y) & _MASK for x, y in zip(state, (a, b, c, d)))
    return state


def md5_hash32(data: bytes | bytearray | str) -> int:
    """First four digest bytes as a big-endian integer."""
    return _swap_endian(md5_digest_words(data)[0])


def md5_hash64(data: bytes | bytearray | str) -> int:
    """First eight digest bytes as a big-endian integer."""
    a, b, _, _ = md5_digest_words(data)
    return (_swap_endian(a) << 32) | _swap_endian(b)