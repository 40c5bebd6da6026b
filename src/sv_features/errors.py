"""
Exception types raised by secondary-vertex feature extraction.
"""

from __future__ import annotations


class SVFeatureError(Exception):
    """Base exception for secondary-vertex feature extraction."""


class PreconditionViolation(SVFeatureError, ValueError):
    """Event content does not satisfy what the filler requires."""


class EmptyPrimaryVertexError(PreconditionViolation):
    """The primary-vertex collection of an event is empty."""

    def __init__(self, label: str = "vertices"):
        self.label = label
        super().__init__(f"Primary-vertex collection '{label}' is empty")


class SchemaError(SVFeatureError, KeyError):
    """A feature name is undeclared or declared twice."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SchemaMismatchError(SVFeatureError, RuntimeError):
    """Multi-valued features of one jet record hold different entry counts."""

    def __init__(self, counts: dict[str, int], expected: int | None = None):
        self.counts = counts
        self.expected = expected
        detail = ", ".join(f"{name}={count}" for name, count in sorted(counts.items()))
        if expected is None:
            message = f"Inconsistent multi-valued entry counts: {detail}"
        else:
            message = f"Expected {expected} entries per multi-valued feature, got: {detail}"
        super().__init__(message)
