from __future__ import annotations

import pytest

from shotcodec import FormatDetsReader, make_reader
from shotcodec.errors import (
    EndOfInput, EndOfRecord, IndexOutOfRange, InvalidSeparator, MalformedInput,
    OutOfOrderIndex, UnknownCategory,
)


def test_dets_category_relative_indices_and_result_types():
    r = make_reader(b"shot M0 D1\n", "dets", 2, 2)
    assert isinstance(r, FormatDetsReader)
    assert r.bits_per_record == 4
    bits, types = [], []
    for _ in range(4):
        types.append(r.current_result_type())
        bits.append(r.read_bit())
    assert bits[:2] == [True, False]      # mesures
    assert bits[2:] == [False, True]      # détecteurs
    assert types == ["M", "M", "D", "D"]
    assert r.is_end_of_record()
    with pytest.raises(EndOfRecord):
        r.read_bit()
    assert r.next_record() is False


def test_dets_all_three_categories():
    r = make_reader(b"shot D0 L0\nshot M0 L0\n", "dets", 1, 1, 1)
    assert r.category_offsets == {"M": 0, "D": 1, "L": 2}
    assert r.read_record_bits() == [False, True, True]
    assert r.next_record() is True
    assert r.read_record_bits() == [True, False, True]
    assert r.next_record() is False
    with pytest.raises(EndOfInput):
        r.read_bit()


def test_dets_empty_records():
    r = make_reader(b"shot\nshot M0\n", "dets", 1)
    assert r.read_record_bits() == [False]
    assert r.next_record() is True
    assert r.read_record_bits() == [True]
    assert r.next_record() is False


def test_dets_result_type_skips_empty_categories():
    r = make_reader(b"shot L1\n", "dets", 0, 0, 2)
    assert r.current_result_type() == "L"
    assert r.read_record_bits() == [False, True]
    assert r.current_result_type() == "L"


def test_dets_result_type_at_end_of_record_is_last_category():
    r = make_reader(b"shot\n", "dets", 2, 2)
    r.read_record_bits()
    assert r.current_result_type() == "D"


def test_dets_missing_shot_keyword():
    with pytest.raises(MalformedInput):
        make_reader(b"shoe M0\n", "dets", 1)


def test_dets_empty_stream_has_no_record():
    r = make_reader(b"", "dets", 2)
    assert not r.has_record()
    assert r.next_record() is False
    with pytest.raises(EndOfInput):
        r.read_bit()


def test_dets_unknown_category():
    with pytest.raises(UnknownCategory):
        make_reader(b"shot X0\n", "dets", 2)


def test_dets_non_increasing_index_in_same_category():
    r = make_reader(b"shot M1 M0\n", "dets", 2)
    assert r.read_record_bits() == [False, True]
    with pytest.raises(OutOfOrderIndex):
        r.next_record()


def test_dets_category_going_backwards_is_out_of_order():
    r = make_reader(b"shot D0 M0\n", "dets", 1, 1)
    with pytest.raises(OutOfOrderIndex):
        r.read_record_bits()
        r.next_record()


def test_dets_index_out_of_range():
    with pytest.raises(IndexOutOfRange):
        make_reader(b"shot D2\n", "dets", 1, 2)


def test_dets_invalid_separators():
    with pytest.raises(InvalidSeparator):
        make_reader(b"shot M0,M1\n", "dets", 2)
    with pytest.raises(InvalidSeparator):
        make_reader(b"shotM0\n", "dets", 2)
    with pytest.raises(InvalidSeparator):
        make_reader(b"shot M0", "dets", 2)        # EOF sans fin de ligne


def test_dets_missing_index_after_tag():
    with pytest.raises(MalformedInput):
        make_reader(b"shot M\n", "dets", 2)
