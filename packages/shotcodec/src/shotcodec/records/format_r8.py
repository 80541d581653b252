# packages/shotcodec/src/shotcodec/records/format_r8.py
from __future__ import annotations

from ..errors import EndOfInput, EndOfRecord
from ..source import ByteSource
from .base import RecordReader

__all__ = ["FormatR8Reader"]

_CONTINUE = 0xFF


class FormatR8Reader(RecordReader):
    """
    Format ``r8`` : flux de bits continu encodé en longueurs de runs.

    Chaque en-tête de run est une suite d'octets 0xFF (valant 255 chacun) puis un
    octet final 0..254 ; la somme donne le nombre de 0 du run. Un run de 0 est
    toujours suivi d'un unique 1, émis à la lecture de l'en-tête suivant (le 1 qui
    suivrait le dernier en-tête n'existe pas).

    Les frontières de record sont purement positionnelles : l'état du curseur de
    runs survit à `next_record()`, un run peut donc chevaucher deux records.
    """

    def __init__(self, src: ByteSource, bits_per_record: int) -> None:
        super().__init__(bits_per_record)
        self._src = src
        self._run_length_0s = 0
        self._run_length_1s = 0
        self._generated_0s = 0
        self._generated_1s = 0
        self._update_run_length()
        # le premier run n'est précédé d'aucun 1
        self._run_length_1s = 0

    def _update_run_length(self) -> bool:
        r = self._src.getc()
        if r is None:
            return False
        run = 0
        while r == _CONTINUE:
            run += _CONTINUE
            r = self._src.getc()
        if r is not None:
            run += r
        self._run_length_0s = run
        self._run_length_1s = 1
        self._generated_0s = 0
        self._generated_1s = 0
        return True

    def _owes_bits(self) -> bool:
        return (
            self._generated_1s < self._run_length_1s
            or self._generated_0s < self._run_length_0s
        )

    def read_bit(self) -> bool:
        if self._position >= self._bits_per_record:
            raise EndOfRecord("Attempt to read past end-of-record")
        if self._generated_1s < self._run_length_1s:
            self._generated_1s += 1
            self._position += 1
            return True
        if self._generated_0s < self._run_length_0s:
            self._generated_0s += 1
            self._position += 1
            return False
        if not self._update_run_length():
            raise EndOfInput("Attempt to read past end-of-file")
        self._generated_1s += 1
        self._position += 1
        return True

    def read_bytes(self, buf) -> int:
        if self._position >= self._bits_per_record:
            return 0
        out = memoryview(buf).cast("B")
        n = 0
        for i in range(len(out)):
            if (
                self._generated_1s >= self._run_length_1s
                and self._run_length_0s >= self._generated_0s + 8
                and self._bits_per_record >= self._position + 8
            ):
                out[i] = 0
                self._position += 8
                self._generated_0s += 8
                n += 8
                continue
            b = 0
            for k in range(8):
                if self.is_end_of_record():
                    out[i] = b
                    return n
                b |= int(self.read_bit()) << k
                n += 1
            out[i] = b
        return n

    def next_record(self) -> bool:
        remaining = self._bits_per_record - self._position
        while remaining > 0 and not self.is_end_of_record():
            # saute les 0 restants du run courant en bloc
            if self._generated_1s >= self._run_length_1s:
                skip = min(remaining, self._run_length_0s - self._generated_0s)
                if skip > 0:
                    self._generated_0s += skip
                    self._position += skip
                    remaining -= skip
                    continue
            self.read_bit()
            remaining -= 1
        self._position = 0
        return self._has_more_data()

    def _has_more_data(self) -> bool:
        return self._owes_bits() or self._update_run_length()

    def is_end_of_record(self) -> bool:
        if self._position >= self._bits_per_record:
            return True
        if self._owes_bits():
            return False
        return not self._update_run_length()
