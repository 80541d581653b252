# packages/shotcodec/src/shotcodec/errors.py
from __future__ import annotations

__all__ = [
    "RecordReadError",
    "EndOfInput", "EndOfRecord",
    "MalformedInput", "InvalidSeparator", "UnknownCategory",
    "OutOfOrderIndex", "IndexOutOfRange", "RecordTooLong",
    "InvalidArgument",
]


class RecordReadError(Exception):
    """Base de toutes les erreurs levées par les lecteurs de records."""


# -----------------------------------------------------------------------------
# Conditions de flux
# -----------------------------------------------------------------------------
class EndOfInput(RecordReadError, EOFError):
    """The stream ran out where a value was required."""


class EndOfRecord(RecordReadError, IndexError):
    """Read attempted past the declared record bound (caller contract violation)."""


# -----------------------------------------------------------------------------
# Erreurs de syntaxe (fatales pour l'instance de lecteur)
# -----------------------------------------------------------------------------
class MalformedInput(RecordReadError, ValueError):
    """Token does not match the expected grammar."""


class InvalidSeparator(MalformedInput):
    pass


class UnknownCategory(MalformedInput):
    pass


class OutOfOrderIndex(MalformedInput):
    pass


class IndexOutOfRange(MalformedInput):
    pass


class RecordTooLong(MalformedInput):
    pass


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------
class InvalidArgument(RecordReadError, ValueError):
    """Construction-time parameter mismatch (format, counts, sizes)."""
