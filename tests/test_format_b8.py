from __future__ import annotations
import io

import numpy as np
import pytest

from shotcodec import make_reader
from shotcodec.errors import EndOfInput, EndOfRecord


def _bits(n: int) -> list[bool]:
    return [(i * 7 + 3) % 5 < 2 for i in range(n)]


def _pack(bits) -> bytes:
    return np.packbits(np.asarray(bits, dtype=bool), bitorder="little").tobytes()


@pytest.mark.parametrize("n", [0, 1, 7, 8, 9, 64])
def test_b8_roundtrip_read_bit(n):
    bits = _bits(n)
    r = make_reader(_pack(bits), "b8", n)
    out = [r.read_bit() for _ in range(n)]
    assert out == bits
    assert r.is_end_of_record()
    with pytest.raises(EndOfRecord):
        r.read_bit()


@pytest.mark.parametrize("n", [0, 1, 7, 8, 9, 64])
def test_b8_roundtrip_read_bytes(n):
    bits = _bits(n)
    r = make_reader(_pack(bits), "b8", n)
    buf = bytearray((n + 7) // 8)
    assert r.read_bytes(buf) == n
    assert bytes(buf) == _pack(bits)
    assert r.read_bytes(bytearray(4)) == 0


def test_b8_read_bytes_after_partial_byte_uses_bitwise_path():
    bits = _bits(20)
    r = make_reader(_pack(bits), "b8", 20)
    assert [r.read_bit() for _ in range(3)] == bits[:3]
    buf = bytearray(3)
    assert r.read_bytes(buf) == 17
    assert np.unpackbits(np.frombuffer(bytes(buf), dtype=np.uint8), bitorder="little")[:17].astype(bool).tolist() == bits[3:]


def test_b8_read_bytes_capacity_smaller_than_record():
    bits = _bits(24)
    r = make_reader(_pack(bits), "b8", 24)
    buf = bytearray(1)
    assert r.read_bytes(buf) == 8
    assert r.position == 8
    assert bytes(buf) == _pack(bits)[:1]


def test_b8_records_are_consecutive_bit_windows():
    bits = _bits(15)            # 3 records de 5 bits, 1 bit de bourrage
    r = make_reader(_pack(bits), "b8", 5)
    got = []
    more = True
    while more:
        got.append(r.read_record_bits())
        more = r.next_record()
    assert got == [bits[0:5], bits[5:10], bits[10:15]]
    with pytest.raises(EndOfInput):
        r.read_bit()


def test_b8_next_record_skips_remainder():
    bits = _bits(24)
    r = make_reader(_pack(bits), "b8", 12)
    assert [r.read_bit() for _ in range(3)] == bits[:3]
    assert r.next_record() is True
    assert r.read_record_bits() == bits[12:24]
    assert r.next_record() is False


def test_b8_next_record_skips_whole_bytes():
    bits = _bits(80)
    r = make_reader(io.BytesIO(_pack(bits)), "b8", 40)
    assert r.next_record() is True
    assert r.read_record_bits() == bits[40:80]


def test_b8_short_stream_is_end_of_record_then_end_of_input():
    r = make_reader(b"\x01", "b8", 12)
    buf = bytearray(2)
    assert r.read_bytes(buf) == 8          # lecture courte : pas une erreur
    assert r.is_end_of_record()
    with pytest.raises(EndOfInput):
        r.read_bit()


def test_b8_is_end_of_record_is_idempotent():
    r = make_reader(b"\x05", "b8", 8)
    assert r.is_end_of_record() is False
    assert r.is_end_of_record() is False
    assert r.read_bit() is True
