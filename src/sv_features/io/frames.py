"""
Build :class:`~sv_features.objects.Event` objects from long-format frames.

Each frame holds one row per object and an ``event`` column. Row order within
an event defines the collection order, so the first primary-vertex row of an
event is its leading vertex.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from sv_features.data.columns import (
    COVARIANCE_COLS,
    EVENT_COL,
    JET_COLS,
    POSITION_COLS,
    PV_COLS,
    SV_COLS,
)
from sv_features.objects import (
    Event,
    Jet,
    PrimaryVertex,
    SecondaryVertex,
    covariance_from_upper,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterator

    import pandas as pd

LOGGER = logging.getLogger(__name__)


def _require_columns(frame: pd.DataFrame, cols: set[str], context: str) -> None:
    missing = cols.difference(frame.columns)
    if missing:
        raise KeyError(f"Missing columns for {context}: {sorted(missing)}")


def _positions(frame: pd.DataFrame) -> np.ndarray:
    return frame[list(POSITION_COLS)].to_numpy(dtype=float)


def _covariances(frame: pd.DataFrame) -> list[np.ndarray]:
    upper = frame[list(COVARIANCE_COLS)].to_numpy(dtype=float)
    return [covariance_from_upper(row) for row in upper]


def jets_from_frame(frame: pd.DataFrame) -> list[Jet]:
    values = frame[list(JET_COLS)].to_numpy(dtype=float)
    return [
        Jet(pt=pt, eta=eta, phi=phi, energy=energy, index=idx)
        for idx, (pt, eta, phi, energy) in enumerate(values)
    ]


def primary_vertices_from_frame(frame: pd.DataFrame) -> list[PrimaryVertex]:
    return [
        PrimaryVertex(position, covariance)
        for position, covariance in zip(_positions(frame), _covariances(frame))
    ]


def secondary_vertices_from_frame(frame: pd.DataFrame) -> list[SecondaryVertex]:
    positions = _positions(frame)
    covariances = _covariances(frame)
    return [
        SecondaryVertex(
            position=positions[i],
            covariance=covariances[i],
            pt=float(row.pt),
            eta=float(row.eta),
            phi=float(row.phi),
            mass=float(row.mass),
            n_tracks=int(row.ntracks),
            chi2=float(row.chi2),
            ndof=float(row.ndof),
        )
        for i, row in enumerate(frame.itertuples(index=False))
    ]


def events_from_frames(
    jets: pd.DataFrame,
    primary_vertices: pd.DataFrame,
    secondary_vertices: pd.DataFrame,
) -> Iterator[Event]:
    """Yield one :class:`Event` per event id found in ``jets``.

    Events without jets produce nothing. An event missing from the vertex
    frames gets an empty collection, which the filler reports as a
    precondition failure for the primary vertices.
    """
    _require_columns(jets, {EVENT_COL, *JET_COLS}, "jets")
    _require_columns(primary_vertices, {EVENT_COL, *PV_COLS}, "primary vertices")
    _require_columns(secondary_vertices, {EVENT_COL, *SV_COLS}, "secondary vertices")

    pv_groups = dict(tuple(primary_vertices.groupby(EVENT_COL, sort=False)))
    sv_groups = dict(tuple(secondary_vertices.groupby(EVENT_COL, sort=False)))
    empty_pv = primary_vertices.iloc[0:0]
    empty_sv = secondary_vertices.iloc[0:0]

    n_events = 0
    for event_id, jet_frame in jets.groupby(EVENT_COL, sort=False):
        n_events += 1
        yield Event(
            primary_vertices=primary_vertices_from_frame(pv_groups.get(event_id, empty_pv)),
            secondary_vertices=secondary_vertices_from_frame(sv_groups.get(event_id, empty_sv)),
            jets=jets_from_frame(jet_frame),
            event_id=event_id,
        )
    LOGGER.debug("Built %d events from frames", n_events)
