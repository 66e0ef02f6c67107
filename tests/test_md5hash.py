import hashlib
import struct

import pytest

from taskkit.md5hash import md5_digest_words, md5_hash32, md5_hash64

SAMPLES = [
    b"",
    b"a",
    b"abc",
    b"message digest",
    b"x" * 55,
    b"x" * 56,
    b"x" * 63,
    b"x" * 64,
    b"x" * 65,
    bytes(range(256)) * 5,
]


def test_empty_input_hash32():
    assert md5_hash32(b"") == 0xD41D8CD9


def test_empty_input_hash64():
    assert md5_hash64(b"") == 0xD41D8CD98F00B204


@pytest.mark.parametrize("data", SAMPLES)
def test_digest_words_match_standard_md5(data):
    words = md5_digest_words(data)
    assert struct.pack("<4I", *words) == hashlib.md5(data).digest()


@pytest.mark.parametrize("data", SAMPLES)
def test_hash32_is_digest_prefix(data):
    expected = int.from_bytes(hashlib.md5(data).digest()[:4], "big")
    assert md5_hash32(data) == expected


@pytest.mark.parametrize("data", SAMPLES)
def test_hash64_is_digest_prefix(data):
    expected = int.from_bytes(hashlib.md5(data).digest()[:8], "big")
    assert md5_hash64(data) == expected


def test_hash64_high_half_is_hash32():
    for data in SAMPLES:
        assert md5_hash64(data) >> 32 == md5_hash32(data)


def test_str_hashes_as_utf8():
    assert md5_hash32("publish") == md5_hash32(b"publish")
    assert md5_hash32("héllo") == md5_hash32("héllo".encode("utf-8"))


def test_distinct_names_give_distinct_keys():
    names = ["publish", "publish_by_token", "plus", "echo", "add"]
    assert len({md5_hash32(n) for n in names}) == len(names)