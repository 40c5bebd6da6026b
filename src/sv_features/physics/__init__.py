"""Numerical helpers for secondary-vertex features."""

from __future__ import annotations

__all__ = [
    "distance",
    "kinematics",
    "sanitize",
]
