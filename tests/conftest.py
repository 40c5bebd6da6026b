"""
Common pytest fixtures for secondary-vertex feature tests.

Vertices are built with diagonal covariances so that distance errors and
significances can be worked out by hand.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import pytest

from sv_features.objects import Jet, PrimaryVertex, SecondaryVertex

if TYPE_CHECKING:
    from collections.abc import Callable

# Configure logging for tests
logging.getLogger("sv_features").setLevel(logging.DEBUG)


def make_sv(
    x: float,
    y: float = 0.0,
    z: float = 0.0,
    *,
    sigma: float = 0.01,
    pt: float = 20.0,
    eta: float = 0.0,
    phi: float = 0.0,
    mass: float = 1.5,
    n_tracks: int = 3,
    chi2: float = 2.0,
    ndof: float = 4.0,
) -> SecondaryVertex:
    return SecondaryVertex(
        position=[x, y, z],
        covariance=np.eye(3) * sigma**2,
        pt=pt,
        eta=eta,
        phi=phi,
        mass=mass,
        n_tracks=n_tracks,
        chi2=chi2,
        ndof=ndof,
    )


@pytest.fixture
def sv_factory() -> Callable[..., SecondaryVertex]:
    """Factory for secondary vertices with an isotropic position error ``sigma``."""
    return make_sv


@pytest.fixture
def origin_pv() -> PrimaryVertex:
    """Primary vertex at the origin with a negligible covariance."""
    return PrimaryVertex(position=[0.0, 0.0, 0.0], covariance=np.eye(3) * 1e-6)


@pytest.fixture
def exact_pv() -> PrimaryVertex:
    """Primary vertex at the origin without positional uncertainty."""
    return PrimaryVertex(position=[0.0, 0.0, 0.0], covariance=np.zeros((3, 3)))


@pytest.fixture
def central_jet() -> Jet:
    return Jet(pt=500.0, eta=0.0, phi=0.0, energy=520.0, index=0)
