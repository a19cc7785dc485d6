"""Pytest configuration and shared fixtures."""

import random

import pytest

from core.vector import Vector3
from materials.lambertian import Lambertian
from materials.metal import Metal


class ZeroJitterRng:
    """Random source whose uniform draws always land on the interval midpoint."""

    def uniform(self, a, b):
        return (a + b) / 2.0

    def random(self):
        return 0.5


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def zero_jitter_rng():
    return ZeroJitterRng()


@pytest.fixture
def red_diffuse():
    return Lambertian(Vector3(0.7, 0.3, 0.3))


@pytest.fixture
def mirror():
    return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.0)


def assert_vec_close(actual, expected, abs_tol=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs_tol)
    assert actual.y == pytest.approx(expected.y, abs=abs_tol)
    assert actual.z == pytest.approx(expected.z, abs=abs_tol)
