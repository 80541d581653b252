# packages/shotcodec/src/shotcodec/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

from .errors import InvalidArgument
from .formats import SampleFormat, parse_format
from .records import MAX_BITS_PER_RECORD
from .source import DEFAULT_CHUNK_SIZE

__all__ = ["ReaderConfig"]


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """
    Configuration **immuable** d'une lecture de records.

    Champs
    ------
    fmt : SampleFormat, default="01"
        Format du fichier de records. Les chaînes sont normalisées.
    num_measurements : int, default=0
        Taille du record (bits M). Pour ``dets`` : nombre de mesures.
    num_detectors : int, default=0
        Nombre de détecteurs (``dets`` uniquement).
    num_observables : int, default=0
        Nombre d'observables logiques (``dets`` uniquement).
    chunk_size : int, default=65536
        Taille de lecture anticipée du `ByteSource` (octets).

    ENV
    ---
    SHOTIO_FORMAT      → format par défaut de `from_env`
    SHOTIO_CHUNK_SIZE  → taille de lecture anticipée

    Les validations lèvent `InvalidArgument` (sous-classe de ValueError).
    """

    fmt: SampleFormat = SampleFormat.F01
    num_measurements: int = 0
    num_detectors: int = 0
    num_observables: int = 0
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "fmt", parse_format(self.fmt))
        for name in ("num_measurements", "num_detectors", "num_observables"):
            if int(getattr(self, name)) < 0:
                raise InvalidArgument(f"ReaderConfig.{name} must be >= 0")
        if self.bits_per_record > MAX_BITS_PER_RECORD:
            raise InvalidArgument(f"Record size {self.bits_per_record} bits is too big")
        if self.fmt is not SampleFormat.DETS and (self.num_detectors or self.num_observables):
            raise InvalidArgument("ReaderConfig: only DETS format supports detector/observable counts")
        if int(self.chunk_size) <= 0:
            raise InvalidArgument("ReaderConfig.chunk_size must be > 0")

    @property
    def bits_per_record(self) -> int:
        return int(self.num_measurements) + int(self.num_detectors) + int(self.num_observables)

    @staticmethod
    def from_env(**overrides) -> "ReaderConfig":
        """Construit une config depuis l'ENV ; les arguments explicites sont prioritaires."""
        fields = {
            "fmt": os.getenv("SHOTIO_FORMAT", SampleFormat.F01.value).strip(),
            "chunk_size": _int_env("SHOTIO_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        }
        fields.update(overrides)
        return ReaderConfig(**fields)


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name)
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        raise InvalidArgument(f"ENV {name} must be an integer, got {v!r}") from None
