"""
Column name constants for frame-based event input.
"""

from __future__ import annotations

EVENT_COL = "event"

POSITION_COLS = ("x", "y", "z")

# Upper triangle of the symmetric 3x3 position covariance, row-major.
COVARIANCE_COLS = ("cov_xx", "cov_xy", "cov_xz", "cov_yy", "cov_yz", "cov_zz")

JET_COLS = ("pt", "eta", "phi", "energy")

PV_COLS = POSITION_COLS + COVARIANCE_COLS

SV_KINEMATIC_COLS = ("pt", "eta", "phi", "mass")
SV_QUALITY_COLS = ("ntracks", "chi2", "ndof")
SV_COLS = POSITION_COLS + COVARIANCE_COLS + SV_KINEMATIC_COLS + SV_QUALITY_COLS
