"""
Value types for jets and vertices consumed by the SV filler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence


def _as_position(position) -> np.ndarray:
    arr = np.asarray(position, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Vertex position must have 3 components, got shape {arr.shape}")
    return arr


def _as_covariance(covariance) -> np.ndarray:
    if covariance is None:
        return np.zeros((3, 3))
    arr = np.asarray(covariance, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"Vertex covariance must be 3x3, got shape {arr.shape}")
    return arr


def momentum_from_pt_eta_phi(pt: float, eta: float, phi: float) -> np.ndarray:
    return np.array([pt * np.cos(phi), pt * np.sin(phi), pt * np.sinh(eta)])


def covariance_from_upper(values: Sequence[float]) -> np.ndarray:
    """Build a symmetric 3x3 matrix from ``(xx, xy, xz, yy, yz, zz)``."""
    xx, xy, xz, yy, yz, zz = (float(v) for v in values)
    return np.array([[xx, xy, xz], [xy, yy, yz], [xz, yz, zz]])


@dataclass(frozen=True, eq=False)
class Jet:
    pt: float
    eta: float
    phi: float
    energy: float
    index: int = 0


@dataclass(frozen=True, eq=False)
class PrimaryVertex:
    """Fitted primary vertex with its positional uncertainty."""

    position: np.ndarray
    covariance: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_position(self.position))
        object.__setattr__(self, "covariance", _as_covariance(self.covariance))


@dataclass(frozen=True, eq=False)
class SecondaryVertex:
    """Fitted secondary-vertex candidate.

    Kinematics follow the (pt, eta, phi, mass) four-vector convention; momentum
    and energy are derived from them.
    """

    position: np.ndarray
    covariance: np.ndarray
    pt: float
    eta: float
    phi: float
    mass: float
    n_tracks: int = 0
    chi2: float = 0.0
    ndof: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_position(self.position))
        object.__setattr__(self, "covariance", _as_covariance(self.covariance))

    @property
    def momentum(self) -> np.ndarray:
        return momentum_from_pt_eta_phi(self.pt, self.eta, self.phi)

    @property
    def energy(self) -> float:
        p2 = float(np.dot(self.momentum, self.momentum))
        return float(np.sqrt(p2 + self.mass**2))

    @property
    def normalized_chi2(self) -> float:
        # ndof == 0 yields inf/nan, left to the sanitizer
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.chi2) / np.float64(self.ndof))


@dataclass(frozen=True, eq=False)
class Event:
    primary_vertices: Sequence[PrimaryVertex]
    secondary_vertices: Sequence[SecondaryVertex]
    jets: Sequence[Jet] = ()
    event_id: int | None = None
