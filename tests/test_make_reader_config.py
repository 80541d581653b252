from __future__ import annotations
import io
import sys

import pytest

from shotcodec import (
    Format01Reader, FormatB8Reader, FormatDetsReader, FormatHitsReader, FormatR8Reader,
    ReaderConfig, SampleFormat, make_reader, open_reader, parse_format,
)
from shotcodec.errors import InvalidArgument


@pytest.mark.parametrize("fmt, cls", [
    ("01", Format01Reader),
    ("B8", FormatB8Reader),
    ("hits", FormatHitsReader),
    (SampleFormat.R8, FormatR8Reader),
    ("dets", FormatDetsReader),
])
def test_make_reader_selects_reader(fmt, cls):
    r = make_reader(io.BytesIO(b""), fmt, 3)
    assert isinstance(r, cls)
    assert r.bits_per_record == 3
    assert r.position == 0
    assert r.current_result_type() == "M"


def test_make_reader_rejects_detector_counts_outside_dets():
    with pytest.raises(InvalidArgument):
        make_reader(b"", "hits", 3, 1, 0)
    with pytest.raises(InvalidArgument):
        make_reader(b"", "01", 3, 0, 1)


def test_make_reader_rejects_unsupported_and_unknown_formats():
    with pytest.raises(InvalidArgument):
        make_reader(b"", "ptb64", 64)
    with pytest.raises(InvalidArgument):
        make_reader(b"", "csv", 3)
    with pytest.raises(InvalidArgument):
        parse_format(3)


def test_make_reader_rejects_bad_sizes():
    with pytest.raises(InvalidArgument):
        make_reader(b"", "b8", sys.maxsize + 1)
    with pytest.raises(InvalidArgument):
        make_reader(b"", "dets", sys.maxsize, 1)
    with pytest.raises(InvalidArgument):
        make_reader(b"", "01", -1)


def test_make_reader_rejects_text_stream():
    with pytest.raises(InvalidArgument):
        make_reader(io.StringIO("01\n"), "01", 2)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        make_reader(b"", "nope", 1)


def test_reader_config_validation():
    cfg = ReaderConfig(fmt="DETS", num_measurements=2, num_detectors=3, num_observables=1)
    assert cfg.fmt is SampleFormat.DETS
    assert cfg.bits_per_record == 6
    with pytest.raises(InvalidArgument):
        ReaderConfig(fmt="hits", num_measurements=2, num_detectors=1)
    with pytest.raises(InvalidArgument):
        ReaderConfig(fmt="01", num_measurements=-1)
    with pytest.raises(InvalidArgument):
        ReaderConfig(fmt="01", chunk_size=0)


def test_reader_config_is_frozen():
    cfg = ReaderConfig(fmt="01", num_measurements=2)
    with pytest.raises(Exception):
        cfg.num_measurements = 3  # type: ignore[misc]


def test_reader_config_from_env(monkeypatch):
    monkeypatch.setenv("SHOTIO_FORMAT", "r8")
    monkeypatch.setenv("SHOTIO_CHUNK_SIZE", "16")
    cfg = ReaderConfig.from_env(num_measurements=8)
    assert cfg.fmt is SampleFormat.R8
    assert cfg.chunk_size == 16
    assert ReaderConfig.from_env(fmt="b8").fmt is SampleFormat.B8

    monkeypatch.setenv("SHOTIO_CHUNK_SIZE", "big")
    with pytest.raises(InvalidArgument):
        ReaderConfig.from_env()


def test_reader_config_from_env_defaults(monkeypatch):
    monkeypatch.delenv("SHOTIO_FORMAT", raising=False)
    monkeypatch.delenv("SHOTIO_CHUNK_SIZE", raising=False)
    cfg = ReaderConfig.from_env()
    assert cfg.fmt is SampleFormat.F01
    assert cfg.chunk_size == 1 << 16


def test_open_reader_uses_config():
    cfg = ReaderConfig(fmt="dets", num_measurements=1, num_detectors=1)
    r = open_reader(b"shot D0\n", cfg)
    assert isinstance(r, FormatDetsReader)
    assert r.read_record_bits() == [False, True]
