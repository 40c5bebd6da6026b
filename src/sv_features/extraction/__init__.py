"""Secondary-vertex selection and feature filling."""

from __future__ import annotations

__all__ = [
    "filler",
    "selection",
]
