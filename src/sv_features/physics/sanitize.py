"""
Clip-and-bound sanitation of ratio and significance features.
"""

from __future__ import annotations

import math


def clip_and_bound(value: float, center: float, low: float, high: float) -> float:
    """Replace non-finite values by ``center`` and clip the rest into ``[low, high]``.

    Args:
        value: Raw feature value.
        center: Replacement for NaN and +/-inf.
        low: Lower clip boundary.
        high: Upper clip boundary.

    Returns:
        The sanitised value as a Python float.
    """
    value = float(value)
    if not math.isfinite(value):
        return float(center)
    if value < low:
        return float(low)
    if value > high:
        return float(high)
    return value
