import pytest
import numpy as np

from simplestats import GeneratorRandom, NormalDistribution

@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def random(rng):
    return GeneratorRandom(rng)

@pytest.fixture
def standard_normal():
    return NormalDistribution(0.0, 1.0)

@pytest.fixture
def probabilities():
    return [1e-6, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 1.0 - 1e-6]
