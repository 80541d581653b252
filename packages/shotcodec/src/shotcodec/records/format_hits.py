# packages/shotcodec/src/shotcodec/records/format_hits.py
from __future__ import annotations

from ..errors import (
    EndOfInput, EndOfRecord, IndexOutOfRange, InvalidSeparator, MalformedInput, OutOfOrderIndex,
)
from ..scan import describe_byte, read_unsigned_int
from ..source import ByteSource
from .base import RecordReader

__all__ = ["FormatHitsReader"]

_NL = 0x0A
_COMMA = 0x2C


class FormatHitsReader(RecordReader):
    """
    Format ``hits`` : une ligne par record, indices croissants des bits à 1
    séparés par des virgules (ex. ``1,3,5\\n``). Tous les autres bits valent 0.

    Le record ne se termine jamais avant `bits_per_record` bits.
    """

    def __init__(self, src: ByteSource, bits_per_record: int) -> None:
        super().__init__(bits_per_record)
        self._src = src
        self._next_hit = -1
        self._separator: int | None = _NL
        self._no_record = False
        self._prime()

    def _prime(self) -> None:
        found = self._update_next_hit()
        # flux vide en début de record : il n'y a pas de record
        self._no_record = not found and self._separator is None

    def _update_next_hit(self) -> bool:
        value, sep = read_unsigned_int(self._src)
        self._separator = sep
        if value is None:
            if sep is not None and sep != _NL:
                raise MalformedInput(f"Unexpected character {describe_byte(sep)} in hit list")
            return False
        if sep != _COMMA and sep != _NL:
            raise InvalidSeparator(f"Invalid separator character {describe_byte(sep)} after hit {value}")
        floor = max(self._position, self._next_hit + 1)
        if value < floor:
            raise OutOfOrderIndex(f"New hit {value} is in the past of {floor}")
        if value >= self._bits_per_record:
            raise IndexOutOfRange(
                f"New hit {value} is outside record size {self._bits_per_record}"
            )
        self._next_hit = value
        return True

    def read_bit(self) -> bool:
        if self._no_record:
            raise EndOfInput("Attempt to read past end-of-file")
        if self._position >= self._bits_per_record:
            raise EndOfRecord("Attempt to read past end-of-record")
        if self._position > self._next_hit and self._separator == _COMMA:
            self._update_next_hit()
        hit = self._next_hit == self._position
        self._position += 1
        return hit

    def next_record(self) -> bool:
        while self._separator == _COMMA:
            self._update_next_hit()
        self._next_hit = -1
        self._position = 0
        self._prime()
        return not self._no_record

    def has_record(self) -> bool:
        return not self._no_record

    def is_end_of_record(self) -> bool:
        return self._no_record or self._position >= self._bits_per_record
