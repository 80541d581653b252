# packages/shotcodec/src/shotcodec/scan.py
from __future__ import annotations
from typing import Tuple

from .errors import MalformedInput
from .source import ByteSource

__all__ = ["maybe_consume_keyword", "read_unsigned_int", "describe_byte"]

_DIGIT_0 = 0x30
_DIGIT_9 = 0x39


def describe_byte(c: int | None) -> str:
    """Rendu lisible d'un octet lu (ou de la sentinelle EOF) pour les messages d'erreur."""
    if c is None:
        return "<EOF>"
    return repr(chr(c))


def maybe_consume_keyword(src: ByteSource, keyword: bytes) -> Tuple[bool, int | None]:
    """
    Consomme exactement `keyword` depuis la position courante.

    Retour
    ------
    (found, next)
        - ``(False, None)`` si le flux est épuisé avant le premier octet ;
        - ``(True, next)`` si le mot-clé entier a été lu, ``next`` étant l'octet
          qui le suit (``None`` en fin de flux).

    Exceptions
    ----------
    MalformedInput si le flux contient autre chose que `keyword`.
    """
    c = src.getc()
    if c is None:
        return False, None
    for expected in keyword:
        if c != expected:
            raise MalformedInput(
                f"Failed to find expected string {keyword.decode('ascii')!r} (got {describe_byte(c)})"
            )
        c = src.getc()
    return True, c


def read_unsigned_int(src: ByteSource) -> Tuple[int | None, int | None]:
    """
    Lit une suite maximale de chiffres décimaux.

    Retour
    ------
    (value, next)
        ``value`` vaut None si le premier octet n'est pas un chiffre ; ``next`` est
        l'octet terminal (None en fin de flux).
    """
    c = src.getc()
    if c is None or not (_DIGIT_0 <= c <= _DIGIT_9):
        return None, c
    value = 0
    while c is not None and _DIGIT_0 <= c <= _DIGIT_9:
        value = value * 10 + (c - _DIGIT_0)
        c = src.getc()
    return value, c
