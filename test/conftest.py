import numpy as np
import pytest

from har_features.preprocessing import RawSample


def constant_samples(n, acc=(0.0, 0.0, 9.8), gyro=(0.0, 0.0, 0.0)):
    return [RawSample(*acc, *gyro) for _ in range(n)]


def alternating_z_samples(n, low=5.0, high=15.0):
    return [RawSample(0.0, 0.0, low if i % 2 == 0 else high, 0.0, 0.0, 0.0) for i in range(n)]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_samples(rng):
    def make(n):
        acc = rng.normal(0.0, 2.0, size=(n, 3)) + np.array([0.0, 0.0, 9.8])
        gyro = rng.normal(0.0, 0.5, size=(n, 3))
        return [RawSample(*a, *g) for a, g in zip(acc, gyro)]
    return make
