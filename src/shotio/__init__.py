"""shotio - unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import shotio as sio
    cfg = sio.ReaderConfig(fmt="hits", num_measurements=6)
    bits = sio.read_records(b"1,3,5\\n", cfg)      # -> bool array (1, 6)

Or detailed modules:

    from shotio import codec, core
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import shotcodec as codec
import shotcore as core

from shotcodec import (
    SampleFormat, ReaderConfig, make_reader, open_reader,
    iter_records, read_records, read_records_file,
    RecordReadError, EndOfInput, EndOfRecord, MalformedInput, InvalidArgument,
)
from shotcore import sample_hit_indices, externally_seeded_rng, make_rng

__version__ = codec.__version__


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers)


__all__ = [
    # sub-namespaces
    "codec", "core",
    # convenience
    "SampleFormat", "ReaderConfig", "make_reader", "open_reader",
    "iter_records", "read_records", "read_records_file",
    "RecordReadError", "EndOfInput", "EndOfRecord", "MalformedInput", "InvalidArgument",
    "sample_hit_indices", "externally_seeded_rng", "make_rng",
    "setup_logging",
    "__version__",
]
