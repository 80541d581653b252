# packages/shotcodec/src/shotcodec/records/__init__.py
from __future__ import annotations

import logging

from ..errors import InvalidArgument
from ..formats import SampleFormat, parse_format
from ..source import DEFAULT_CHUNK_SIZE, as_byte_source
from .base import MAX_BITS_PER_RECORD, RecordReader
from .format_01 import Format01Reader
from .format_b8 import FormatB8Reader
from .format_dets import CATEGORY_TAGS, FormatDetsReader
from .format_hits import FormatHitsReader
from .format_r8 import FormatR8Reader

__all__ = [
    "RecordReader", "MAX_BITS_PER_RECORD", "CATEGORY_TAGS",
    "Format01Reader", "FormatB8Reader", "FormatHitsReader", "FormatR8Reader", "FormatDetsReader",
    "make_reader",
]

log = logging.getLogger(__name__)

_SIMPLE_READERS = {
    SampleFormat.F01: Format01Reader,
    SampleFormat.B8: FormatB8Reader,
    SampleFormat.HITS: FormatHitsReader,
    SampleFormat.R8: FormatR8Reader,
}


def make_reader(
    stream,
    fmt: str | SampleFormat,
    num_measurements: int,
    num_detectors: int = 0,
    num_observables: int = 0,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> RecordReader:
    """
    Construit le lecteur de records correspondant à `fmt`, lié à `stream`.

    Paramètres
    ----------
    stream
        Flux binaire déjà ouvert (jamais fermé par le lecteur), ou `bytes`.
    fmt : str | SampleFormat
        ``01``, ``b8``, ``hits``, ``r8`` ou ``dets``.
    num_measurements : int
        Taille du record en bits (pour ``dets`` : nombre de mesures M).
    num_detectors, num_observables : int
        Nombre de détecteurs D / d'observables L ; non nuls uniquement pour ``dets``.

    Exceptions
    ----------
    InvalidArgument si le format est inconnu ou non supporté (``ptb64``), si des
    comptes D/L non nuls accompagnent un autre format que ``dets``, ou si la
    taille du record est négative ou dépasse `MAX_BITS_PER_RECORD`.
    """
    f = parse_format(fmt)
    counts = (int(num_measurements), int(num_detectors), int(num_observables))
    if min(counts) < 0:
        raise InvalidArgument(f"record counts must be >= 0, got {counts}")
    if sum(counts) > MAX_BITS_PER_RECORD:
        raise InvalidArgument(f"Record size {sum(counts)} bits is too big")
    if f is not SampleFormat.DETS:
        if counts[1]:
            raise InvalidArgument("Only DETS format supports detection event records")
        if counts[2]:
            raise InvalidArgument("Only DETS format supports logical observable records")
    if f is SampleFormat.PTB64:
        raise InvalidArgument("Sample format ptb64 is incompatible with single record reading")

    src = as_byte_source(stream, chunk_size)
    if f is SampleFormat.DETS:
        reader: RecordReader = FormatDetsReader(src, *counts)
    else:
        reader = _SIMPLE_READERS[f](src, counts[0])
    log.debug("make_reader: %s bits_per_record=%d", f.value, reader.bits_per_record)
    return reader
