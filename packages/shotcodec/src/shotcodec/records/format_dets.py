# packages/shotcodec/src/shotcodec/records/format_dets.py
# -----------------------------------------------------------------------------
# Format DETS : records étiquetés (mesures M / détecteurs D / observables L)

from __future__ import annotations
from typing import Dict, List, Tuple

from ..errors import (
    EndOfInput, EndOfRecord, IndexOutOfRange, InvalidArgument, InvalidSeparator,
    MalformedInput, OutOfOrderIndex, UnknownCategory,
)
from ..scan import describe_byte, maybe_consume_keyword, read_unsigned_int
from ..source import ByteSource
from .base import RecordReader

__all__ = ["FormatDetsReader", "CATEGORY_TAGS"]

_NL = 0x0A
_SPACE = 0x20
_SHOT = b"shot"

#: Catégories dans l'ordre de leur placement dans le record unifié
CATEGORY_TAGS: Tuple[str, ...] = ("M", "D", "L")


class FormatDetsReader(RecordReader):
    """
    Lecteur du format ``dets``.

    Grammaire d'un record ::

        shot( <tag><index>)*\\n        tag ∈ {M, D, L}

    Le record unifié juxtapose les mesures, puis les détecteurs, puis les
    observables : ``bits_per_record = num_measurements + num_detectors +
    num_observables``. Chaque index est relatif au début de sa catégorie ; il est
    ré-ancré sur le record unifié en lui ajoutant le décalage de sa catégorie
    avant les contrôles d'ordre et de borne. Ainsi ``shot M0 D1`` avec 2 mesures et
    2 détecteurs donne les bits ``[1, 0, 0, 1]``.

    `current_result_type()` renvoie la catégorie qui possède le prochain bit.
    """

    def __init__(
        self,
        src: ByteSource,
        num_measurements: int,
        num_detectors: int = 0,
        num_observables: int = 0,
    ) -> None:
        counts = (int(num_measurements), int(num_detectors), int(num_observables))
        if min(counts) < 0:
            raise InvalidArgument(f"DETS category counts must be >= 0, got {counts}")
        super().__init__(sum(counts))
        self._src = src

        self._offsets: Dict[str, int] = {}
        self._spans: List[Tuple[str, int, int]] = []
        start = 0
        for tag, count in zip(CATEGORY_TAGS, counts):
            self._offsets[tag] = start
            if count:
                self._spans.append((tag, start, start + count))
            start += count

        self._next_shot = -1
        self._separator: int | None = _NL
        self._no_record = False
        self._begin_record()

    @property
    def category_offsets(self) -> Dict[str, int]:
        return dict(self._offsets)

    def _begin_record(self) -> bool:
        self._position = 0
        self._next_shot = -1
        found, c = maybe_consume_keyword(self._src, _SHOT)
        self._no_record = not found
        if not found:
            self._separator = None
            return False
        if c is not None and c != _SPACE and c != _NL:
            raise InvalidSeparator(f"Unexpected separator after 'shot': {describe_byte(c)}")
        self._separator = c
        if c == _SPACE:
            self._update_next_shot()
        return True

    def _update_next_shot(self) -> None:
        tag_byte = self._src.getc()
        if tag_byte is None:
            self._separator = None
            return
        tag = chr(tag_byte)
        if tag not in self._offsets:
            raise UnknownCategory(f"Unknown result type {tag!r}, expected M, D or L")

        value, sep = read_unsigned_int(self._src)
        if value is None:
            raise MalformedInput(f"Failed to parse index after {tag!r} (got {describe_byte(sep)})")
        if sep != _SPACE and sep != _NL:
            raise InvalidSeparator(f"Unexpected separator after {tag}{value}: {describe_byte(sep)}")
        self._separator = sep

        shot = value + self._offsets[tag]
        floor = max(self._position, self._next_shot + 1)
        if shot < floor:
            raise OutOfOrderIndex(f"New shot {tag}{value} is in the past of its position")
        if shot >= self._bits_per_record:
            raise IndexOutOfRange(
                f"New shot {tag}{value} (bit {shot}) is outside record size {self._bits_per_record}"
            )
        self._next_shot = shot

    def read_bit(self) -> bool:
        if self._no_record:
            raise EndOfInput("Attempt to read past end-of-file")
        if self._position >= self._bits_per_record:
            raise EndOfRecord("Attempt to read past end-of-record")
        if self._position > self._next_shot and self._separator == _SPACE:
            self._update_next_shot()
        hit = self._next_shot == self._position
        self._position += 1
        return hit

    def next_record(self) -> bool:
        while self._separator == _SPACE:
            self._update_next_shot()
        return self._begin_record()

    def has_record(self) -> bool:
        return not self._no_record

    def is_end_of_record(self) -> bool:
        return self._no_record or self._position >= self._bits_per_record

    def current_result_type(self) -> str:
        if not self._spans:
            return "M"
        for tag, _start, end in self._spans:
            if self._position < end:
                return tag
        return self._spans[-1][0]
