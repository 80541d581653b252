# packages/shotcodec/src/shotcodec/records/format_b8.py
from __future__ import annotations

from ..errors import EndOfInput, EndOfRecord
from ..source import ByteSource
from .base import RecordReader

__all__ = ["FormatB8Reader"]

_SKIP_CHUNK = 1 << 12


class FormatB8Reader(RecordReader):
    """
    Format ``b8`` : bits packés 8 par octet, LSB-first.

    Pas de séparateur : les records successifs sont des fenêtres consécutives de
    `bits_per_record` bits d'un même flux d'octets (un record peut donc commencer
    au milieu d'un octet). Les bits restant dans le dernier octet du flux, s'ils ne
    suffisent pas à un record complet, sont du bourrage.
    """

    def __init__(self, src: ByteSource, bits_per_record: int) -> None:
        super().__init__(bits_per_record)
        self._src = src
        self._payload: int | None = 0
        self._bits_available = 0

    def _maybe_update_payload(self) -> None:
        if self._bits_available > 0:
            return
        self._payload = self._src.getc()
        if self._payload is not None:
            self._bits_available = 8

    def read_bit(self) -> bool:
        if self._position >= self._bits_per_record:
            raise EndOfRecord("Attempt to read past end-of-record")
        self._maybe_update_payload()
        if self._payload is None:
            raise EndOfInput("Attempt to read past end-of-file")
        b = self._payload & 1
        self._payload >>= 1
        self._bits_available -= 1
        self._position += 1
        return bool(b)

    def read_bytes(self, buf) -> int:
        if self._position >= self._bits_per_record:
            return 0
        if self._bits_available > 0:
            return super().read_bytes(buf)

        out = memoryview(buf).cast("B")
        n_bits = min(8 * len(out), self._bits_per_record - self._position)
        n_bytes = (n_bits + 7) // 8
        got = self._src.read_into(out[:n_bytes])
        # un flux trop court n'est pas une erreur ici : le prochain read_bit échouera
        n_bits = min(8 * got, n_bits)
        tail = n_bits % 8
        if tail and got * 8 > n_bits:
            # dernier octet partagé avec le record suivant : on garde les bits restants
            last = out[n_bits // 8]
            self._payload = last >> tail
            self._bits_available = 8 - tail
            out[n_bits // 8] = last & ((1 << tail) - 1)
        self._position += n_bits
        return n_bits

    def next_record(self) -> bool:
        remaining = self._bits_per_record - self._position
        while remaining > 0 and self._bits_available > 0:
            self.read_bit()
            remaining -= 1
        if remaining >= 8:
            scratch = bytearray(min(_SKIP_CHUNK, remaining // 8))
            while remaining >= 8:
                want = min(len(scratch), remaining // 8)
                got = self._src.read_into(memoryview(scratch)[:want])
                remaining -= 8 * got
                if got < want:
                    remaining = 0
                    self._payload = None
        while remaining > 0 and not self.is_end_of_record():
            self.read_bit()
            remaining -= 1
        self._position = 0
        return self._has_more_data()

    def _has_more_data(self) -> bool:
        if self._bits_available == 0:
            self._maybe_update_payload()
            return self._bits_available > 0
        # moins d'un record dans l'octet entamé et rien derrière : bits de bourrage
        if self._bits_available >= self._bits_per_record or self._src.peek() is not None:
            return True
        self._bits_available = 0
        self._payload = None
        return False

    def is_end_of_record(self) -> bool:
        if self._position >= self._bits_per_record:
            return True
        self._maybe_update_payload()
        return self._bits_available == 0 and self._payload is None
