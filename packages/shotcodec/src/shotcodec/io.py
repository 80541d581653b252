# packages/shotcodec/src/shotcodec/io.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import numpy as np

from .config import ReaderConfig
from .errors import EndOfInput, InvalidArgument, MalformedInput
from .formats import POSITIONAL_FORMATS
from .records import RecordReader, make_reader

__all__ = ["open_reader", "iter_records", "read_records", "read_records_file"]

log = logging.getLogger(__name__)


def open_reader(stream, cfg: ReaderConfig) -> RecordReader:
    """Build the reader described by `cfg` over an open binary stream (or bytes)."""
    return make_reader(
        stream,
        cfg.fmt,
        cfg.num_measurements,
        cfg.num_detectors,
        cfg.num_observables,
        chunk_size=cfg.chunk_size,
    )


def iter_records(stream, cfg: ReaderConfig) -> Iterator[np.ndarray]:
    """
    Itère les records d'un flux sous forme de vecteurs numpy `bool` de longueur
    `cfg.bits_per_record`. Un seul record est alloué à la fois.

    Exceptions
    ----------
    EndOfInput si un record positionnel (b8/r8) est tronqué par la fin du flux ;
    MalformedInput si un record textuel est plus court que déclaré. Les erreurs
    de syntaxe des lecteurs sont propagées telles quelles.
    """
    n = cfg.bits_per_record
    if n == 0 and cfg.fmt in POSITIONAL_FORMATS:
        raise InvalidArgument(f"format {cfg.fmt.value} cannot delimit records of 0 bits")
    reader = open_reader(stream, cfg)
    buf = np.zeros((n + 7) // 8, dtype=np.uint8)
    if not reader.has_record():
        return
    index = 0
    while True:
        buf[:] = 0
        got = reader.read_bytes(buf)
        if got < n:
            exc = EndOfInput if cfg.fmt in POSITIONAL_FORMATS else MalformedInput
            raise exc(f"record {index} is truncated: {got} of {n} bits")
        yield np.unpackbits(buf, bitorder="little")[:n].astype(bool)
        index += 1
        if not reader.next_record():
            break
    log.debug("iter_records: %d record(s) decoded (%s, %d bits)", index, cfg.fmt.value, n)


def read_records(stream, cfg: ReaderConfig, max_records: int | None = None) -> np.ndarray:
    """Décode jusqu'à `max_records` records → tableau `bool` de forme (records, bits)."""
    if max_records is not None and max_records < 0:
        raise InvalidArgument("read_records: max_records must be >= 0")
    rows = []
    if max_records != 0:
        for row in iter_records(stream, cfg):
            rows.append(row)
            if max_records is not None and len(rows) >= max_records:
                break
    if not rows:
        return np.zeros((0, cfg.bits_per_record), dtype=bool)
    return np.stack(rows)


def read_records_file(path: str | Path, cfg: ReaderConfig, max_records: int | None = None) -> np.ndarray:
    """Read records from a file on disk (opened in binary mode, closed afterwards)."""
    with Path(path).open("rb") as f:
        return read_records(f, cfg, max_records)
