# packages/shotcodec/src/shotcodec/formats.py
# -----------------------------------------------------------------------------
# Formats de records de mesure (identifiants stables)

from __future__ import annotations
from enum import Enum

from .errors import InvalidArgument

__all__ = ["SampleFormat", "parse_format", "TEXT_FORMATS", "POSITIONAL_FORMATS"]


class SampleFormat(str, Enum):
    """
    Identifiants des formats de fichier de records.

    - ``01``    : un caractère ASCII '0'/'1' par bit, records terminés par '\\n'
    - ``b8``    : 8 bits par octet, LSB-first, records contigus (taille fixe)
    - ``ptb64`` : transposé par paquets de 64 records (non supporté en lecture
                  record par record, conservé pour un refus explicite)
    - ``hits``  : indices des bits à 1 séparés par ',' ; record terminé par '\\n'
    - ``r8``    : longueurs de runs de 0 sur un octet, continuées par 0xFF
    - ``dets``  : ``shot`` puis des paires ``<M|D|L><index>`` séparées par ' '
    """

    F01 = "01"
    B8 = "b8"
    PTB64 = "ptb64"
    HITS = "hits"
    R8 = "r8"
    DETS = "dets"


#: Formats dont les records sont délimités par un séparateur textuel
TEXT_FORMATS = frozenset({SampleFormat.F01, SampleFormat.HITS, SampleFormat.DETS})
#: Formats dont les frontières de record sont purement positionnelles
POSITIONAL_FORMATS = frozenset({SampleFormat.B8, SampleFormat.R8})


def parse_format(fmt: str | SampleFormat) -> SampleFormat:
    """Normalise un nom de format (insensible à la casse) en `SampleFormat`."""
    if isinstance(fmt, SampleFormat):
        return fmt
    if not isinstance(fmt, str):
        raise InvalidArgument(f"format must be a string, got {type(fmt).__name__}")
    try:
        return SampleFormat(fmt.strip().lower())
    except ValueError:
        known = ", ".join(f.value for f in SampleFormat)
        raise InvalidArgument(f"Sample format {fmt!r} not recognized (known: {known})") from None
