from __future__ import annotations

from dataclasses import dataclass

import numpy as np

SCALAR = "scalar"
MULTI = "multi"


@dataclass(frozen=True)
class FeatureSpec:
    name: str
    arity: str
    dtype: type
    default: float | int | None = None


# Per-jet counts
N_SV = "n_sv"
NSV = "nsv"

# Basic kinematics
SV_PTREL = "sv_ptrel"
SV_EREL = "sv_erel"
SV_PHIREL = "sv_phirel"
SV_ETAREL = "sv_etarel"
SV_DELTAR = "sv_deltaR"
SV_PT = "sv_pt"
SV_MASS = "sv_mass"

# Vertex properties
SV_NTRACKS = "sv_ntracks"
SV_CHI2 = "sv_chi2"
SV_NDF = "sv_ndf"
SV_NORMCHI2 = "sv_normchi2"
SV_DXY = "sv_dxy"
SV_DXYERR = "sv_dxyerr"
SV_DXYSIG = "sv_dxysig"
SV_D3D = "sv_d3d"
SV_D3DERR = "sv_d3derr"
SV_D3DSIG = "sv_d3dsig"
SV_COSTHETASVPV = "sv_costhetasvpv"

SCALAR_FEATURES: tuple[FeatureSpec, ...] = (
    FeatureSpec(N_SV, SCALAR, np.int32, 0),
    FeatureSpec(NSV, SCALAR, np.float32, 0.0),
)

MULTI_FEATURE_NAMES: tuple[str, ...] = (
    SV_PTREL,
    SV_EREL,
    SV_PHIREL,
    SV_ETAREL,
    SV_DELTAR,
    SV_PT,
    SV_MASS,
    SV_NTRACKS,
    SV_CHI2,
    SV_NDF,
    SV_NORMCHI2,
    SV_DXY,
    SV_DXYERR,
    SV_DXYSIG,
    SV_D3D,
    SV_D3DERR,
    SV_D3DSIG,
    SV_COSTHETASVPV,
)

MULTI_FEATURES: tuple[FeatureSpec, ...] = tuple(
    FeatureSpec(name, MULTI, np.float32) for name in MULTI_FEATURE_NAMES
)

SV_SCHEMA: tuple[FeatureSpec, ...] = SCALAR_FEATURES + MULTI_FEATURES

# Bookkeeping column added by the pipeline, next to the event id
JET_INDEX_COL = "jet_index"
