"""Configuration constants for secondary-vertex feature extraction."""

from __future__ import annotations

# Cone half-angle in (eta, phi) used to associate SVs with AK8 jets.
JET_RADIUS = 0.8

# Offset subtracted from the SV-jet separation before bounding sv_deltaR.
DELTA_R_OFFSET = 0.5

# Sanitizer policies as (center, low, high).
DELTA_R_BOUNDS: tuple[float, float, float] = (0.0, -2.0, 0.0)
NORMCHI2_BOUNDS: tuple[float, float, float] = (1000.0, -1000.0, 1000.0)
SIGNIFICANCE_BOUNDS: tuple[float, float, float] = (0.0, -1.0, 800.0)

# Default labels of the event collections read by the filler.
VERTICES_LABEL = "vertices"
SVS_LABEL = "SVs"
