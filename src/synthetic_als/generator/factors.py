"""
Latent user/item factors whose inner products are the generated ratings.
"""

from __future__ import annotations
import logging

import numpy as np

from synthetic_als.generator.random_source import RandomSource

logger = logging.getLogger(__name__)


def generate_factor(rng: RandomSource, dimension: int, stdev: float) -> np.ndarray:
    """Return `dimension` independent Gaussian(0, stdev) values."""
    if dimension < 1:
        raise ValueError(f"dimension must be ≥1; got {dimension}")
    return np.asarray(rng.gaussian(0.0, stdev, size=dimension), dtype=np.float64)


class LatentFactorModel:
    """
    Fixed user and item factor matrices drawn at construction time.

    All user factors are drawn first (id order), then all item factors
    (id order). Changing that order changes every downstream draw.
    """

    def __init__(
        self,
        rng: RandomSource,
        nusers: int,
        nitems: int,
        dimension: int,
        stdev: float,
    ):
        if nusers < 0 or nitems < 0:
            raise ValueError(f"counts must be ≥0; got nusers={nusers}, nitems={nitems}")

        logger.info("Constructing latent user factors (%d x %d)", nusers, dimension)
        self.user_factors = self._build(rng, nusers, dimension, stdev)
        logger.info("Constructing latent movie factors (%d x %d)", nitems, dimension)
        self.item_factors = self._build(rng, nitems, dimension, stdev)

    @staticmethod
    def _build(rng: RandomSource, count: int, dimension: int, stdev: float) -> np.ndarray:
        out = np.empty((count, dimension), dtype=np.float64)
        for i in range(count):
            out[i] = generate_factor(rng, dimension, stdev)
        return out

    @property
    def dimension(self) -> int:
        return self.user_factors.shape[1]

    def rating(self, user_id: int, item_id: int) -> float:
        return float(np.dot(self.user_factors[user_id], self.item_factors[item_id]))
