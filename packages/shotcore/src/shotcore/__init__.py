from __future__ import annotations

from .rng import (
    splitmix64, derive_seed64, make_rng, externally_seeded_rng,
    RareHitIterator, iter_hit_indices, sample_hit_indices, sample_hit_mask, NEVER,
)

__all__ = [
    "splitmix64", "derive_seed64", "make_rng", "externally_seeded_rng",
    "RareHitIterator", "iter_hit_indices", "sample_hit_indices", "sample_hit_mask", "NEVER",
]
