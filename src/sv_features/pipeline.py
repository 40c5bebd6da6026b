"""
Run the SV filler over a stream of events.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sv_features.data.columns import EVENT_COL
from sv_features.data.schema import JET_INDEX_COL
from sv_features.errors import PreconditionViolation
from sv_features.extraction.filler import SVFeatureExtractor, SVFillerConfig
from sv_features.io.frames import events_from_frames
from sv_features.output.buffer import FeatureBuffer

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable

    import pandas as pd

    from sv_features.objects import Event

LOGGER = logging.getLogger(__name__)


def process_events(
    events: Iterable[Event],
    config: SVFillerConfig | None = None,
) -> pd.DataFrame:
    """Fill SV features for every jet of every event.

    Jets of an event that violates the filler's preconditions (no primary
    vertex) are skipped as a whole and counted in ``attrs["n_skipped_jets"]``.

    Returns:
        DataFrame with one row per filled jet, the event id and jet index
        columns first, followed by the feature columns.
    """
    extractor = SVFeatureExtractor(config)
    LOGGER.info("Filling SV features - jet_radius=%g", extractor.jet_radius)

    buffer = FeatureBuffer()
    extractor.book(buffer)

    event_ids = []
    jet_indices = []
    n_events = 0
    n_skipped = 0
    for event in events:
        n_events += 1
        extractor.read_event(event)
        for jet in event.jets:
            try:
                extractor.fill(jet, buffer)
            except PreconditionViolation as exc:
                LOGGER.warning("Skipping jet %d of event %s: %s", jet.index, event.event_id, exc)
                n_skipped += 1
                continue
            event_ids.append(event.event_id)
            jet_indices.append(jet.index)

    frame = buffer.to_frame()
    frame.insert(0, JET_INDEX_COL, jet_indices)
    frame.insert(0, EVENT_COL, event_ids)
    frame.attrs["n_skipped_jets"] = n_skipped
    LOGGER.info(
        "Filled %d jets from %d events (%d skipped)",
        len(frame),
        n_events,
        n_skipped,
    )
    return frame


def process_frames(
    jets: pd.DataFrame,
    primary_vertices: pd.DataFrame,
    secondary_vertices: pd.DataFrame,
    config: SVFillerConfig | None = None,
) -> pd.DataFrame:
    """Frame-based entry point: build events and fill their SV features."""
    events = events_from_frames(jets, primary_vertices, secondary_vertices)
    return process_events(events, config)
