"""
Per-jet secondary-vertex feature filler.

The filler associates the SVs of an event with a jet, ranks them by transverse
displacement significance with respect to the leading primary vertex and
writes the kinematic and vertex-quality features of each selected SV into a
:class:`~sv_features.output.buffer.FeatureBuffer`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sv_features.data import schema
from sv_features.data.config import (
    DELTA_R_BOUNDS,
    DELTA_R_OFFSET,
    JET_RADIUS,
    NORMCHI2_BOUNDS,
    SIGNIFICANCE_BOUNDS,
    SVS_LABEL,
    VERTICES_LABEL,
)
from sv_features.extraction.selection import leading_primary_vertex, select_and_rank
from sv_features.objects import Event
from sv_features.physics.distance import vertex_ddot_p, vertex_distance_3d, vertex_distance_xy
from sv_features.physics.kinematics import delta_phi, delta_r, eta_rel, ratio
from sv_features.physics.sanitize import clip_and_bound

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Mapping, Sequence

    from sv_features.objects import Jet, PrimaryVertex, SecondaryVertex
    from sv_features.output.buffer import FeatureBuffer

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SVFillerConfig:
    jet_radius: float = JET_RADIUS
    vertices: str = VERTICES_LABEL
    svs: str = SVS_LABEL

    def __post_init__(self) -> None:
        if not self.jet_radius > 0:
            raise ValueError(f"jet_radius must be positive, got {self.jet_radius}")


class SVFeatureExtractor:
    """Fill secondary-vertex features for the jets of one event at a time.

    Usage::

        extractor = SVFeatureExtractor(SVFillerConfig(jet_radius=0.8))
        extractor.book(buffer)
        for event in events:
            extractor.read_event(event)
            for jet in event.jets:
                extractor.fill(jet, buffer)
    """

    def __init__(self, config: SVFillerConfig | None = None) -> None:
        self.config = config or SVFillerConfig()
        self._primary_vertices: Sequence[PrimaryVertex] | None = None
        self._secondary_vertices: Sequence[SecondaryVertex] | None = None

    @property
    def jet_radius(self) -> float:
        return self.config.jet_radius

    def book(self, buffer: FeatureBuffer) -> None:
        for spec in schema.SV_SCHEMA:
            if spec.arity == schema.SCALAR:
                buffer.declare_scalar(spec.name, spec.dtype, spec.default)
            else:
                buffer.declare_multi(spec.name, spec.dtype)

    def read_event(self, event: Event | Mapping[str, Sequence]) -> None:
        """Take the vertex collections used by subsequent :meth:`fill` calls."""
        if isinstance(event, Event):
            self._primary_vertices = event.primary_vertices
            self._secondary_vertices = event.secondary_vertices
        else:
            missing = {self.config.vertices, self.config.svs}.difference(event)
            if missing:
                raise KeyError(f"Missing collections for SV filler: {sorted(missing)}")
            self._primary_vertices = event[self.config.vertices]
            self._secondary_vertices = event[self.config.svs]
        LOGGER.debug(
            "Read %d primary and %d secondary vertices",
            len(self._primary_vertices),
            len(self._secondary_vertices),
        )

    def _collections(self) -> tuple[Sequence[PrimaryVertex], Sequence[SecondaryVertex]]:
        if self._primary_vertices is None or self._secondary_vertices is None:
            raise RuntimeError("No event loaded; call read_event() before fill()")
        return self._primary_vertices, self._secondary_vertices

    def select(self, jet: Jet) -> list[SecondaryVertex]:
        """SVs of the current event associated with ``jet``, in ranked order."""
        primary_vertices, secondary_vertices = self._collections()
        order = select_and_rank(jet, primary_vertices, secondary_vertices, self.jet_radius)
        return [secondary_vertices[idx] for idx in order]

    @staticmethod
    def extract_features(
        jet: Jet,
        ranked_vertices: Sequence[SecondaryVertex],
        primary_vertex: PrimaryVertex,
    ) -> dict[str, Any]:
        """Build the feature record of one jet from its ranked SVs.

        Only sv_deltaR, sv_normchi2, sv_dxysig and sv_d3dsig are sanitised;
        the other features are written as computed, including non-finite
        ratios for a jet with zero pt or energy.
        """
        n_sv = len(ranked_vertices)
        record: dict[str, Any] = {
            schema.N_SV: n_sv,
            schema.NSV: float(n_sv),
        }
        for name in schema.MULTI_FEATURE_NAMES:
            record[name] = []

        for sv in ranked_vertices:
            # basic kinematics
            record[schema.SV_PTREL].append(ratio(sv.pt, jet.pt))
            record[schema.SV_EREL].append(ratio(sv.energy, jet.energy))
            record[schema.SV_PHIREL].append(delta_phi(sv, jet))
            record[schema.SV_ETAREL].append(eta_rel(sv, jet))
            record[schema.SV_DELTAR].append(
                clip_and_bound(abs(delta_r(sv, jet)) - DELTA_R_OFFSET, *DELTA_R_BOUNDS)
            )
            record[schema.SV_PT].append(float(sv.pt))
            record[schema.SV_MASS].append(float(sv.mass))

            # vertex properties
            record[schema.SV_NTRACKS].append(float(sv.n_tracks))
            record[schema.SV_CHI2].append(float(sv.chi2))
            record[schema.SV_NDF].append(float(sv.ndof))
            record[schema.SV_NORMCHI2].append(clip_and_bound(sv.normalized_chi2, *NORMCHI2_BOUNDS))

            dxy = vertex_distance_xy(sv, primary_vertex)
            record[schema.SV_DXY].append(dxy.value)
            record[schema.SV_DXYERR].append(dxy.error)
            record[schema.SV_DXYSIG].append(clip_and_bound(dxy.significance, *SIGNIFICANCE_BOUNDS))

            d3d = vertex_distance_3d(sv, primary_vertex)
            record[schema.SV_D3D].append(d3d.value)
            record[schema.SV_D3DERR].append(d3d.error)
            record[schema.SV_D3DSIG].append(clip_and_bound(d3d.significance, *SIGNIFICANCE_BOUNDS))
            record[schema.SV_COSTHETASVPV].append(vertex_ddot_p(sv, primary_vertex))

        return record

    def fill(self, jet: Jet, buffer: FeatureBuffer) -> bool:
        """Select, rank and write the SV features of ``jet``.

        Raises:
            EmptyPrimaryVertexError: if the event has no primary vertex. Nothing
                is written to ``buffer`` in that case.
        """
        primary_vertices, _ = self._collections()
        pv = leading_primary_vertex(primary_vertices, self.config.vertices)
        ranked = self.select(jet)
        record = self.extract_features(jet, ranked, pv)
        buffer.fill_record(record, expected_count=len(ranked))
        return True
