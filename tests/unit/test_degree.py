import math

import numpy as np
import polars as pl
import pytest

from synthetic_als.generator.degree import (
    PowerLawDegreeSampler,
    degree_catalog,
    pdf_to_cdf,
)
from synthetic_als.generator.random_source import RandomSource


def test_cdf_is_monotone_and_normalized():
    sampler = PowerLawDegreeSampler(100, 2, 1.8, RandomSource(0))
    assert sampler.max_degree == 98
    assert np.all(np.diff(sampler.cdf) > 0)
    assert sampler.cdf[-1] == 1.0


def test_pdf_to_cdf_running_sum():
    cdf = pdf_to_cdf(np.array([1.0, 1.0, 2.0]))
    assert np.allclose(cdf, [0.25, 0.5, 1.0])


@pytest.mark.parametrize("nusers,nvalidation", [(2, 2), (3, 5)])
def test_precondition_violation(nusers, nvalidation):
    with pytest.raises(ValueError):
        PowerLawDegreeSampler(nusers, nvalidation, 1.8, RandomSource(0))


def test_degrees_within_rank_range():
    sampler = PowerLawDegreeSampler(12, 2, 1.2, RandomSource(4))
    draws = [sampler.sample_out_degree() for _ in range(5000)]
    assert min(draws) >= 1
    assert max(draws) <= 10


def test_single_rank_always_degree_one():
    sampler = PowerLawDegreeSampler(3, 2, 1.8, RandomSource(4))
    assert {sampler.sample_out_degree() for _ in range(100)} == {1}


def test_empirical_distribution_follows_power_law():
    """
    100k draws: each rank frequency must sit within 5σ of k**(-alpha) / Z.
    """
    nusers, nvalidation, alpha = 20, 2, 1.8
    draws_n = 100_000
    sampler = PowerLawDegreeSampler(nusers, nvalidation, alpha, RandomSource(2024))
    draws = np.array([sampler.sample_out_degree() for _ in range(draws_n)])

    ranks = np.arange(1, nusers - nvalidation + 1, dtype=np.float64)
    expected = ranks ** (-alpha)
    expected /= expected.sum()
    observed = np.bincount(draws, minlength=len(ranks) + 1)[1:] / draws_n

    sigma = np.sqrt(expected * (1 - expected) / draws_n)
    assert np.all(np.abs(observed - expected) <= 5 * sigma + 1e-4)


def test_degree_catalog_matches_sampler_table():
    cat: pl.DataFrame = degree_catalog(50, 5, 1.8)
    assert cat.columns == ["out_degree", "weight", "cdf"]
    assert cat.height == 45
    assert cat["out_degree"].to_list() == list(range(1, 46))
    assert math.isclose(cat["weight"].sum(), 1.0, abs_tol=1e-9)

    sampler = PowerLawDegreeSampler(50, 5, 1.8, RandomSource(0))
    assert np.allclose(cat["cdf"].to_numpy(), sampler.cdf)


def test_degree_catalog_heavy_head():
    """Low degrees dominate: degree 1 alone carries most of the mass at alpha=1.8."""
    weights = degree_catalog(1000, 2, 1.8)["weight"].to_numpy()
    assert weights[0] > 0.5
    assert np.all(np.diff(weights) < 0)


@pytest.mark.parametrize("n,alpha", [(10, 0.1), (1_000, 1.8), (100_000, 0.5), (100_000, 3.0)])
def test_cdf_monotone_with_exact_unit_tail(n, alpha):
    cdf = PowerLawDegreeSampler(n + 2, 2, alpha, RandomSource(0)).cdf
    assert np.all(np.diff(cdf) >= 0)
    assert cdf[-1] == 1.0
    assert cdf.max() == 1.0
