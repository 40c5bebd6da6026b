"""Secondary-vertex features for jet tagging.

This package selects the secondary vertices associated with each jet, ranks
them by transverse displacement significance and derives the per-vertex
kinematic and vertex-quality inputs of the tagger. The public API exposes the
filler, its output buffer and the frame-based pipeline entry points.
"""

from __future__ import annotations

from .extraction.filler import SVFeatureExtractor, SVFillerConfig
from .extraction.selection import select_and_rank
from .objects import Event, Jet, PrimaryVertex, SecondaryVertex
from .output.buffer import FeatureBuffer
from .physics.sanitize import clip_and_bound
from .pipeline import process_events, process_frames

__all__ = [
    "Event",
    "FeatureBuffer",
    "Jet",
    "PrimaryVertex",
    "SVFeatureExtractor",
    "SVFillerConfig",
    "SecondaryVertex",
    "clip_and_bound",
    "process_events",
    "process_frames",
    "select_and_rank",
]
