# packages/shotcodec/src/shotcodec/records/format_01.py
from __future__ import annotations

from ..errors import EndOfInput, EndOfRecord, MalformedInput, RecordTooLong
from ..scan import describe_byte
from ..source import ByteSource
from .base import RecordReader

__all__ = ["Format01Reader"]

_NL = 0x0A
_ZERO = 0x30
_ONE = 0x31


class Format01Reader(RecordReader):
    """Format ``01`` : un caractère '0'/'1' par bit, un record par ligne."""

    def __init__(self, src: ByteSource, bits_per_record: int) -> None:
        super().__init__(bits_per_record)
        self._src = src
        self._payload = src.getc()  # lookahead
        self._record_present = self._payload is not None

    def has_record(self) -> bool:
        return self._record_present

    def read_bit(self) -> bool:
        c = self._payload
        if c is None:
            raise EndOfInput("Attempt to read past end-of-file")
        if c == _NL or self._position >= self._bits_per_record:
            raise EndOfRecord("Attempt to read past end-of-record")
        if c != _ZERO and c != _ONE:
            raise MalformedInput(
                f"Expected '0' or '1' because input format was specified as '01', got {describe_byte(c)}"
            )
        self._payload = self._src.getc()
        self._position += 1
        return c == _ONE

    def next_record(self) -> bool:
        # les valeurs des caractères sautés ne sont pas revalidées
        while self._payload is not None and self._payload != _NL:
            if self._position >= self._bits_per_record:
                raise RecordTooLong(f"Record too long (more than {self._bits_per_record} bits)")
            self._position += 1
            self._payload = self._src.getc()
        if self._payload == _NL:
            self._payload = self._src.getc()
        self._position = 0
        self._record_present = self._payload is not None
        return self._record_present

    def is_end_of_record(self) -> bool:
        return (
            self._payload is None
            or self._payload == _NL
            or self._position >= self._bits_per_record
        )
