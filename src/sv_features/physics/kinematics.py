from __future__ import annotations

import math

import numpy as np


def delta_phi(a, b) -> float:
    """Azimuthal difference ``a.phi - b.phi`` wrapped into (-pi, pi]."""
    dphi = float(a.phi) - float(b.phi)
    if -math.pi < dphi <= math.pi:
        return dphi
    dphi = math.remainder(dphi, 2.0 * math.pi)
    # remainder() maps odd multiples of pi to -pi
    return math.pi if dphi <= -math.pi else dphi


def delta_r(a, b) -> float:
    deta = float(a.eta) - float(b.eta)
    dphi = delta_phi(a, b)
    return math.sqrt(deta * deta + dphi * dphi)


def eta_sign(jet) -> float:
    """Hemisphere sign of a jet: +1 for ``eta > 0``, -1 otherwise (including eta == 0)."""
    return 1.0 if jet.eta > 0 else -1.0


def eta_rel(candidate, jet) -> float:
    """Pseudorapidity of ``candidate`` relative to ``jet``, mirrored for backward jets.

    Multiplying by :func:`eta_sign` makes the feature point away from the beam
    line in both hemispheres, so a jet at negative eta sees the same sign
    convention as its mirror image at positive eta.
    """
    return eta_sign(jet) * (float(candidate.eta) - float(jet.eta))


def ratio(numerator: float, denominator: float) -> float:
    """Float division with IEEE semantics (x/0 -> +/-inf, 0/0 -> nan)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))
