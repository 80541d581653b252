from __future__ import annotations
import sys
from typing import Iterator, List

import numpy as np

__all__ = [
    "splitmix64", "derive_seed64", "make_rng", "externally_seeded_rng",
    "RareHitIterator", "iter_hit_indices", "sample_hit_indices", "sample_hit_mask",
    "NEVER",
]

_MASK64 = 0xFFFFFFFFFFFFFFFF

#: Index renvoyé par `RareHitIterator.next` quand p == 0 (aucun succès possible)
NEVER = sys.maxsize


def splitmix64(x: int) -> int:
    x &= _MASK64
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    z ^= z >> 31
    return z & _MASK64


def derive_seed64(*keys: int) -> int:
    s = 0x1234ABCD9876EF01
    for k in keys:
        s = splitmix64(s ^ (k & _MASK64))
    return s  # unsigned 64-bit range


def make_rng(*keys: int) -> np.random.Generator:
    """Deterministic generator: same keys ⇒ same draws."""
    return np.random.default_rng(derive_seed64(*keys))


def externally_seeded_rng() -> np.random.Generator:
    """Generator seeded from OS entropy (non reproductible)."""
    return np.random.default_rng(np.random.SeedSequence())


class RareHitIterator:
    """
    Parcourt les succès d'un processus de Bernoulli de probabilité `probability`
    en tirant directement l'écart (géométrique) jusqu'au prochain succès, au lieu
    de tirer chaque essai. Efficace quand p est petit.
    """

    def __init__(self, probability: float) -> None:
        p = float(probability)
        if not (0.0 <= p <= 1.0):
            raise ValueError(f"Invalid probability {probability!r}, expected 0 <= p <= 1")
        self.probability = p
        self.next_candidate = 0

    def next(self, rng: np.random.Generator) -> int:
        """Index du prochain succès (strictement croissant d'un appel à l'autre)."""
        if self.probability == 0.0:
            return NEVER
        gap = 0 if self.probability == 1.0 else int(rng.geometric(self.probability)) - 1
        result = self.next_candidate + gap
        self.next_candidate = result + 1
        return result


def iter_hit_indices(probability: float, attempts: int, rng: np.random.Generator) -> Iterator[int]:
    """Yields, in increasing order, the indices < attempts whose trial succeeded."""
    it = RareHitIterator(probability)
    while True:
        s = it.next(rng)
        if s >= attempts:
            return
        yield s


def sample_hit_indices(probability: float, attempts: int, rng: np.random.Generator) -> List[int]:
    return list(iter_hit_indices(probability, attempts, rng))


def sample_hit_mask(probability: float, attempts: int, rng: np.random.Generator) -> np.ndarray:
    mask = np.zeros(int(attempts), dtype=bool)
    mask[sample_hit_indices(probability, attempts, rng)] = True
    return mask
