"""Shared fixtures and helpers for opshape tests."""

import itertools

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so failures reproduce."""
    return np.random.default_rng(0)


def all_indices(shape):
    """Every multi-index of shape in row-major order."""
    return [list(idx) for idx in itertools.product(*(range(d) for d in shape))]
