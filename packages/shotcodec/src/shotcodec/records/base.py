# packages/shotcodec/src/shotcodec/records/base.py
from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import List

from ..errors import InvalidArgument

__all__ = ["RecordReader", "MAX_BITS_PER_RECORD"]

# Borne "ssize_t" : au-delà, une taille de record n'a pas de sens
MAX_BITS_PER_RECORD = sys.maxsize


class RecordReader(ABC):
    """
    Contrat commun des lecteurs de records de mesure.

    Un record est une suite de `bits_per_record` bits. Le lecteur suit la
    position du prochain bit dans le record courant (0 <= position <= bits_per_record)
    et possède seul toute l'interaction avec le flux sous-jacent.

    Opérations
    ----------
    read_bit()            → bool ; EndOfRecord / EndOfInput / MalformedInput
    read_bytes(buf)       → nombre de bits écrits (LSB-first), 0 en fin de record
    next_record()         → True si un record suivant existe
    is_end_of_record()    → bool, sans effet observable
    current_result_type() → 'M' (sauf format DETS)

    Les instances ne sont pas ré-entrantes : un lecteur par flux.
    """

    def __init__(self, bits_per_record: int) -> None:
        n = int(bits_per_record)
        if n < 0:
            raise InvalidArgument(f"Record size {n} bits is negative")
        if n > MAX_BITS_PER_RECORD:
            raise InvalidArgument(f"Record size {n} bits is too big")
        self._bits_per_record = n
        self._position = 0

    @property
    def bits_per_record(self) -> int:
        return self._bits_per_record

    @property
    def position(self) -> int:
        return self._position

    @abstractmethod
    def read_bit(self) -> bool:
        """Reads the next bit of the current record and advances the position."""

    def read_bytes(self, buf) -> int:
        """
        Remplit `buf` (buffer d'octets inscriptible) avec les bits suivants du
        record, bit k de l'octet n = résultat 8n+k. S'arrête en fin de record.

        Retour : nombre de bits écrits.
        """
        if self.is_end_of_record():
            return 0
        out = memoryview(buf).cast("B")
        n = 0
        for i in range(len(out)):
            b = 0
            for k in range(8):
                b |= int(self.read_bit()) << k
                n += 1
                if self.is_end_of_record():
                    out[i] = b
                    return n
            out[i] = b
        return n

    def next_record(self) -> bool:
        """Skips what is left of the current record; True if another record follows."""
        while not self.is_end_of_record():
            self.read_bit()
        self._position = 0
        return self._has_more_data()

    def _has_more_data(self) -> bool:
        return False

    def has_record(self) -> bool:
        """True si le record courant existe (le flux n'était pas épuisé à son début)."""
        return self._position > 0 or self._has_more_data()

    def is_end_of_record(self) -> bool:
        return self._position >= self._bits_per_record

    def current_result_type(self) -> str:
        return "M"

    def read_record_bits(self) -> List[bool]:
        """Lit le reste du record courant bit par bit."""
        bits: List[bool] = []
        while not self.is_end_of_record():
            bits.append(self.read_bit())
        return bits

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bits_per_record={self._bits_per_record}, "
            f"position={self._position})"
        )
