"""
Power-law out-degree table and sampler for the per-movie rating counts.
"""

from __future__ import annotations
import logging

import numpy as np
import polars as pl

from synthetic_als.generator.random_source import RandomSource

logger = logging.getLogger(__name__)


def _power_law_weights(n: int, alpha: float) -> np.ndarray:
    """
    Compute unnormalized power-law masses for ranks 1...n.

    Parameters
    ----------
    n : int
        Number of ranks. Must be ≥1.
    alpha : float
        The power-law exponent (>0).

    Raises
    ------
    ValueError
        If n < 1 or alpha <= 0.

    Returns
    -------
    np.ndarray
        Array of length n where weight[k-1] = k**(-alpha).
    """
    if n < 1:
        raise ValueError(f"number of ranks must be ≥1; got {n}")
    if alpha <= 0:
        raise ValueError(f"alpha must be >0; got {alpha}")

    ranks = np.arange(1, n + 1, dtype=np.float64)
    return ranks ** (-alpha)


def pdf_to_cdf(weights: np.ndarray) -> np.ndarray:
    """Running sum of `weights`, normalized so the last entry is exactly 1."""
    total = weights.sum()
    if total <= 0 or not np.isfinite(total):
        raise ValueError("Weight sum must be positive and finite")
    cdf = np.cumsum(weights)
    # last entry is exactly 1.0
    return cdf / cdf[-1]


def _rank_count(nusers: int, nvalidation: int) -> int:
    n = nusers - nvalidation
    if n <= 0:
        raise ValueError(
            f"nusers ({nusers}) must be greater than nvalidation ({nvalidation})"
        )
    return n


def degree_catalog(nusers: int, nvalidation: int, alpha: float) -> pl.DataFrame:
    """
    Build the out-degree table as a DataFrame.

    Returns
    -------
    pl.DataFrame
        with columns:
        - out_degree (Int64): 1...nusers-nvalidation
        - weight (Float64): normalized power-law probabilities summing to 1
        - cdf (Float64): running sum of `weight`, last entry 1.0
    """
    n = _rank_count(nusers, nvalidation)
    raw = _power_law_weights(n, alpha)
    return pl.DataFrame(
        {
            "out_degree": np.arange(1, n + 1, dtype=np.int64),
            "weight": raw / raw.sum(),
            "cdf": pdf_to_cdf(raw),
        }
    ).with_columns([
        pl.col("out_degree").cast(pl.Int64),
        pl.col("weight").cast(pl.Float64),
        pl.col("cdf").cast(pl.Float64),
    ])


class PowerLawDegreeSampler:
    """
    Draws per-movie out-degrees in [1, nusers - nvalidation] with
    P(degree = k) proportional to k**(-alpha).
    """

    def __init__(self, nusers: int, nvalidation: int, alpha: float, rng: RandomSource):
        n = _rank_count(nusers, nvalidation)
        self.rng = rng
        self.alpha = alpha
        self.cdf = pdf_to_cdf(_power_law_weights(n, alpha))
        logger.debug("Built power-law degree table: ranks=%d alpha=%.3f", n, alpha)

    @property
    def max_degree(self) -> int:
        return int(self.cdf.shape[0])

    def sample_out_degree(self) -> int:
        return self.rng.multinomial_cdf(self.cdf) + 1
