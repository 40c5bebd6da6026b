from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from sv_features.data.config import JET_RADIUS
from sv_features.errors import EmptyPrimaryVertexError
from sv_features.physics.distance import vertex_distance_xy
from sv_features.physics.kinematics import delta_r

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

    from sv_features.objects import Jet, PrimaryVertex, SecondaryVertex

LOGGER = logging.getLogger(__name__)


def leading_primary_vertex(
    primary_vertices: Sequence[PrimaryVertex], label: str = "vertices"
) -> PrimaryVertex:
    """Return the first primary vertex, which is taken as the hard-scatter vertex."""
    if len(primary_vertices) == 0:
        raise EmptyPrimaryVertexError(label)
    return primary_vertices[0]


def select_and_rank(
    jet: Jet,
    primary_vertices: Sequence[PrimaryVertex],
    secondary_vertices: Sequence[SecondaryVertex],
    jet_radius: float = JET_RADIUS,
) -> list[int]:
    """Select the SVs inside the jet cone and rank them by dxy significance.

    Args:
        jet: Jet defining the cone axis.
        primary_vertices: Ordered primary-vertex collection; the first entry is used.
        secondary_vertices: SV candidates of the event.
        jet_radius: Cone half-angle; SVs at ``delta_r >= jet_radius`` are dropped.

    Returns:
        Indices into ``secondary_vertices`` ordered by descending transverse
        displacement significance. NaN significances go last and ties keep
        collection order.
    """
    pv = leading_primary_vertex(primary_vertices)

    ranked = []
    for idx, sv in enumerate(secondary_vertices):
        if delta_r(sv, jet) < jet_radius:
            significance = vertex_distance_xy(sv, pv).significance
            if math.isnan(significance):
                significance = -math.inf
            ranked.append((significance, idx))

    # sorted() is stable, so equal significances stay in collection order
    ranked.sort(key=lambda item: item[0], reverse=True)
    LOGGER.debug(
        "Jet %d: %d of %d SVs within dR < %g",
        jet.index,
        len(ranked),
        len(secondary_vertices),
        jet_radius,
    )
    return [idx for _, idx in ranked]
