import logging

import numpy as np
import pytest

from simplestats import (
    DomainError,
    GeneratorRandom,
    LatinHypercubeSampler,
    MonteCarloSampler,
    NormalDistribution,
    OrthogonalSampler,
    Sampler,
    UniformDistribution,
    generate_samples,
)

SAMPLERS = [MonteCarloSampler, LatinHypercubeSampler, OrthogonalSampler]


@pytest.fixture(params=SAMPLERS, ids=lambda cls: cls.__name__)
def sampler(request, random):
    return request.param(random)


# Shared behaviour
# --------------------------------------------------------------------

@pytest.mark.parametrize("dimensions,count", [(1, 7), (2, 16), (3, 27)])
def test_points_lie_in_unit_cube(sampler, dimensions, count):
    points = list(sampler.generate(dimensions, count))
    assert len(points) >= count
    for point in points:
        assert point.shape == (dimensions,)
        assert np.all(point >= 0.0)
        assert np.all(point < 1.0)


def test_zero_count_is_empty(sampler):
    assert list(sampler.generate(3, 0)) == []


@pytest.mark.parametrize("dimensions,count", [(0, 5), (-1, 5), (2, -1)])
def test_bad_shape_raises_before_iteration(sampler, dimensions, count):
    with pytest.raises(DomainError):
        sampler.generate(dimensions, count)


def test_samplers_satisfy_protocol(sampler):
    assert isinstance(sampler, Sampler)


def test_default_random_source():
    for cls in SAMPLERS:
        assert len(list(cls().generate(2, 4))) == 4


# Monte Carlo
# --------------------------------------------------------------------

def test_monte_carlo_count_and_reproducibility():
    a = list(MonteCarloSampler(GeneratorRandom(seed=11)).generate(2, 50))
    b = list(MonteCarloSampler(GeneratorRandom(seed=11)).generate(2, 50))
    assert len(a) == 50
    np.testing.assert_array_equal(np.array(a), np.array(b))


# Latin hypercube
# --------------------------------------------------------------------

@pytest.mark.parametrize("count", [1, 5, 40])
def test_latin_hypercube_hits_every_stratum_once(random, count):
    points = np.array(list(LatinHypercubeSampler(random).generate(3, count)))
    assert points.shape == (count, 3)
    strata = np.floor(points * count).astype(int)
    for axis in range(3):
        assert sorted(strata[:, axis]) == list(range(count))


# Orthogonal grid
# --------------------------------------------------------------------

@pytest.mark.parametrize("dimensions,count,expected", [
    (2, 9, 3),
    (2, 10, 4),
    (3, 27, 3),
    (3, 28, 4),
    (1, 5, 5),
    (4, 1, 1),
    (2, 0, 0),
])
def test_orthogonal_parts(dimensions, count, expected):
    assert OrthogonalSampler.parts(dimensions, count) == expected


@pytest.mark.parametrize("count,produced", [(9, 9), (10, 16)])
def test_orthogonal_fills_the_whole_grid(random, count, produced):
    points = np.array(list(OrthogonalSampler(random).generate(2, count)))
    assert len(points) == produced
    parts = int(round(np.sqrt(produced)))
    cells = {tuple(c) for c in np.floor(points * parts).astype(int)}
    assert len(cells) == produced


def test_orthogonal_logs_oversized_grid(random, caplog):
    caplog.set_level(logging.DEBUG, logger="simplestats.core.samplers")
    list(OrthogonalSampler(random).generate(2, 10))
    assert "exceeds" in caplog.text


# Mapping through distributions
# --------------------------------------------------------------------

def test_generate_samples_maps_each_coordinate(random):
    dists = [UniformDistribution(10.0, 11.0), NormalDistribution(0.0, 1.0)]
    samples = list(generate_samples(LatinHypercubeSampler(random), 200, dists))
    assert len(samples) == 200
    values = np.array(samples)
    assert np.all((values[:, 0] >= 10.0) & (values[:, 0] <= 11.0))
    assert abs(values[:, 1].mean()) < 0.2


def test_generate_samples_uses_quantiles():
    class Midpoints:
        def generate(self, dimensions, count):
            return iter([np.full(dimensions, 0.5)] * count)

    dists = [UniformDistribution(2.0, 4.0), NormalDistribution(1.0, 3.0)]
    samples = list(generate_samples(Midpoints(), 3, dists))
    assert len(samples) == 3
    for sample in samples:
        np.testing.assert_allclose(sample, [3.0, 1.0])


def test_generate_samples_validation(random):
    sampler = MonteCarloSampler(random)
    with pytest.raises(DomainError):
        generate_samples(None, 3, [UniformDistribution()])
    with pytest.raises(DomainError):
        generate_samples(sampler, 3, [])
    with pytest.raises(DomainError):
        generate_samples(sampler, 3, [UniformDistribution(), None])
    with pytest.raises(DomainError):
        generate_samples(sampler, -1, [UniformDistribution()])
