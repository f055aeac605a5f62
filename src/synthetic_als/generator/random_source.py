"""
Seeded random stream shared by every sampling step of a generator run.
"""

from __future__ import annotations
from typing import Optional, Union, Tuple
import logging

import numpy as np
from numpy.random import Generator, default_rng

logger = logging.getLogger(__name__)

DEFAULT_SEED = 31413


class RandomSource:
    """
    Deterministic wrapper around a PCG64 `numpy.random.Generator`.

    All draws come from one underlying stream, so the same seed and the same
    call sequence (order and argument shapes) reproduce the same values.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED):
        self.seed = seed
        self._rng: Generator = default_rng(seed)
        logger.debug("Initialized RandomSource with seed=%s", seed)

    def gaussian(
        self,
        mean: float = 0.0,
        stdev: float = 1.0,
        size: Union[int, Tuple[int, ...], None] = None,
    ) -> Union[float, np.ndarray]:
        """
        Draw normally distributed samples.

        Returns a Python float when `size` is None, otherwise an array of the
        requested shape filled in C order from the stream.
        """
        if stdev < 0:
            raise ValueError(f"stdev must be ≥0; got {stdev}")
        if size is None:
            return float(self._rng.normal(mean, stdev))
        return self._rng.normal(mean, stdev, size=size)

    def uniform(self) -> float:
        """One draw in [0, 1)."""
        return float(self._rng.random())

    def multinomial_cdf(self, cdf: np.ndarray) -> int:
        """
        Inverse-CDF sampling over a cumulative sequence.

        Parameters
        ----------
        cdf : np.ndarray
            Non-decreasing 1-D cumulative masses. The final entry is treated
            as the total mass, so the sequence need not be normalized.

        Returns
        -------
        int
            The smallest index `k` with `cdf[k] >= u * cdf[-1]`, `u` uniform
            in [0, 1).

        Raises
        ------
        ValueError
            If `cdf` is empty or its total mass is not positive and finite.
        """
        if cdf.ndim != 1 or cdf.shape[0] == 0:
            raise ValueError("cdf must be a non-empty 1-D array")
        total = float(cdf[-1])
        if total <= 0 or not np.isfinite(total):
            raise ValueError("cdf total mass must be positive and finite")

        target = self.uniform() * total
        k = int(np.searchsorted(cdf, target, side="left"))
        # guard against rounding pushing target past the last entry
        return min(k, cdf.shape[0] - 1)
