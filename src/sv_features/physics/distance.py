"""
Vertex-to-vertex distances with propagated uncertainties.

The uncertainty is the projection of the summed position covariances of both
vertices onto the unit displacement direction:

    error**2 = n^T (C_sv + C_pv) n,    n = d / |d|

For the transverse distance the z component of ``d`` is zeroed before the
projection, so only the xy block of the covariances contributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from sv_features.objects import PrimaryVertex, SecondaryVertex


@dataclass(frozen=True)
class Measurement1D:
    value: float
    error: float = 0.0

    @property
    def significance(self) -> float:
        if self.error == 0:
            return 0.0
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.value) / np.float64(self.error))


def _unit(vector: np.ndarray) -> np.ndarray:
    # A null vector is returned unchanged
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm


def _projected_distance(displacement: np.ndarray, covariance: np.ndarray) -> Measurement1D:
    dist = float(np.linalg.norm(displacement))
    with np.errstate(divide="ignore", invalid="ignore"):
        direction = displacement / dist
    err2 = float(direction @ covariance @ direction)
    if np.isnan(err2):
        return Measurement1D(dist, np.nan)
    err = float(np.sqrt(err2)) if err2 > 0 else 0.0
    return Measurement1D(dist, err)


def vertex_distance_xy(sv: SecondaryVertex, pv: PrimaryVertex) -> Measurement1D:
    """Transverse-plane distance between ``sv`` and ``pv``."""
    displacement = sv.position - pv.position
    displacement[2] = 0.0
    return _projected_distance(displacement, sv.covariance + pv.covariance)


def vertex_distance_3d(sv: SecondaryVertex, pv: PrimaryVertex) -> Measurement1D:
    """Full 3D distance between ``sv`` and ``pv``."""
    displacement = sv.position - pv.position
    return _projected_distance(displacement, sv.covariance + pv.covariance)


def vertex_ddot_p(sv: SecondaryVertex, pv: PrimaryVertex) -> float:
    """Cosine of the angle between the SV momentum and its flight direction from the PV."""
    momentum = _unit(sv.momentum)
    flight = _unit(sv.position - pv.position)
    return float(np.dot(momentum, flight))
