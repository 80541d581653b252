# packages/shotcodec/src/shotcodec/__init__.py
from __future__ import annotations

"""shotio - codec de records de mesure (surface publique).

Lecteurs en flux des formats 01 / b8 / hits / r8 / dets, fabrique `make_reader`,
configuration `ReaderConfig` et helpers numpy (`read_records`).
"""

__version__ = "1.0.0"

from .errors import (
    RecordReadError, EndOfInput, EndOfRecord, MalformedInput, InvalidSeparator,
    UnknownCategory, OutOfOrderIndex, IndexOutOfRange, RecordTooLong, InvalidArgument,
)
from .formats import SampleFormat, parse_format
from .source import ByteSource, as_byte_source
from .records import (
    RecordReader, make_reader,
    Format01Reader, FormatB8Reader, FormatHitsReader, FormatR8Reader, FormatDetsReader,
)
from .config import ReaderConfig
from .io import open_reader, iter_records, read_records, read_records_file

__all__ = [
    "__version__",
    # errors
    "RecordReadError", "EndOfInput", "EndOfRecord", "MalformedInput", "InvalidSeparator",
    "UnknownCategory", "OutOfOrderIndex", "IndexOutOfRange", "RecordTooLong", "InvalidArgument",
    # formats / source
    "SampleFormat", "parse_format", "ByteSource", "as_byte_source",
    # readers
    "RecordReader", "make_reader",
    "Format01Reader", "FormatB8Reader", "FormatHitsReader", "FormatR8Reader", "FormatDetsReader",
    # config / bulk
    "ReaderConfig", "open_reader", "iter_records", "read_records", "read_records_file",
]
