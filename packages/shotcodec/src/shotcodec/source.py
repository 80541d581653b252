# packages/shotcodec/src/shotcodec/source.py
from __future__ import annotations

import io
from typing import BinaryIO

from .errors import InvalidArgument

__all__ = ["ByteSource", "as_byte_source", "DEFAULT_CHUNK_SIZE"]

DEFAULT_CHUNK_SIZE = 1 << 16


class ByteSource:
    """Sequential byte reader over a binary stream.

    ``getc()`` returns the next byte value (0..255) or ``None`` once the stream
    is exhausted. The wrapped stream is only ever read forward; it is neither
    rewound nor closed here (its owner closes it).
    """

    __slots__ = ("_stream", "_chunk_size", "_buf", "_pos")

    def __init__(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if isinstance(stream, io.TextIOBase):
            raise InvalidArgument("ByteSource needs a binary stream (open the file with 'rb')")
        if not hasattr(stream, "read"):
            raise InvalidArgument(f"ByteSource: object of type {type(stream).__name__} has no read()")
        if int(chunk_size) <= 0:
            raise InvalidArgument("ByteSource.chunk_size must be > 0")
        self._stream = stream
        self._chunk_size = int(chunk_size)
        self._buf = b""
        self._pos = 0

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def _refill(self) -> bool:
        data = self._stream.read(self._chunk_size)
        if not data:
            return False
        self._buf = bytes(data)
        self._pos = 0
        return True

    def getc(self) -> int | None:
        if self._pos >= len(self._buf) and not self._refill():
            return None
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def peek(self) -> int | None:
        """Like ``getc()`` but leaves the byte in place."""
        if self._pos >= len(self._buf) and not self._refill():
            return None
        return self._buf[self._pos]

    def read_into(self, view) -> int:
        """Fill ``view`` (writable byte buffer) from the stream.

        Returns the number of bytes written; a count below ``len(view)`` means
        the stream is exhausted.
        """
        out = memoryview(view).cast("B")
        want = len(out)
        n = min(want, len(self._buf) - self._pos)
        if n > 0:
            out[:n] = self._buf[self._pos:self._pos + n]
            self._pos += n
        while n < want:
            data = self._stream.read(want - n)
            if not data:
                break
            k = len(data)
            out[n:n + k] = data
            n += k
        return n


def as_byte_source(obj, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ByteSource:
    """Accepte un `ByteSource`, un flux binaire, ou un buffer d'octets en mémoire."""
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteSource(io.BytesIO(bytes(obj)), chunk_size)
    return ByteSource(obj, chunk_size)
