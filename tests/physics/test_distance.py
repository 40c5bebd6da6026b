import math

import numpy as np
import pytest

from sv_features.objects import PrimaryVertex
from sv_features.physics.distance import (
    Measurement1D,
    vertex_ddot_p,
    vertex_distance_3d,
    vertex_distance_xy,
)


class TestMeasurement1D:
    def test_significance(self) -> None:
        assert Measurement1D(0.5, 0.05).significance == pytest.approx(10.0)

    def test_zero_error_gives_zero_significance(self) -> None:
        assert Measurement1D(0.5, 0.0).significance == 0.0

    def test_nan_error_gives_nan_significance(self) -> None:
        assert math.isnan(Measurement1D(0.0, math.nan).significance)


class TestVertexDistance:
    def test_isotropic_error(self, sv_factory, exact_pv) -> None:
        sv = sv_factory(0.3, 0.4, 1.2, sigma=0.05)

        dxy = vertex_distance_xy(sv, exact_pv)
        assert dxy.value == pytest.approx(0.5)
        assert dxy.error == pytest.approx(0.05)
        assert dxy.significance == pytest.approx(10.0)

        d3d = vertex_distance_3d(sv, exact_pv)
        assert d3d.value == pytest.approx(1.3)
        assert d3d.error == pytest.approx(0.05)
        assert d3d.significance == pytest.approx(26.0)

    def test_covariances_are_summed(self, sv_factory) -> None:
        sv = sv_factory(1.0, sigma=0.0)
        pv = PrimaryVertex([0.0, 0.0, 0.0], np.diag([0.04, 0.01, 0.0]))
        assert vertex_distance_xy(sv, pv).error == pytest.approx(0.2)

        sv_y = sv_factory(0.0, 2.0, sigma=0.0)
        dxy = vertex_distance_xy(sv_y, pv)
        assert dxy.error == pytest.approx(0.1)
        assert dxy.significance == pytest.approx(20.0)

    def test_xy_ignores_z_uncertainty(self, sv_factory) -> None:
        sv = sv_factory(1.0, 0.0, 5.0, sigma=0.0)
        pv = PrimaryVertex([0.0, 0.0, 0.0], np.diag([0.01, 0.01, 100.0]))
        assert vertex_distance_xy(sv, pv).error == pytest.approx(0.1)

    def test_displacement_relative_to_pv(self, sv_factory) -> None:
        sv = sv_factory(1.3, 0.4, 0.0, sigma=0.1)
        pv = PrimaryVertex([1.0, 0.0, 0.0], np.zeros((3, 3)))
        assert vertex_distance_xy(sv, pv).value == pytest.approx(0.5)
        np.testing.assert_allclose(pv.position, [1.0, 0.0, 0.0])

    def test_zero_covariance_gives_zero_error(self, sv_factory, exact_pv) -> None:
        dxy = vertex_distance_xy(sv_factory(0.5, sigma=0.0), exact_pv)
        assert dxy.error == 0.0
        assert dxy.significance == 0.0

    def test_coincident_vertices_give_nan_error(self, sv_factory, exact_pv) -> None:
        dxy = vertex_distance_xy(sv_factory(0.0, 0.0, 2.0), exact_pv)
        assert dxy.value == 0.0
        assert math.isnan(dxy.error)
        assert math.isnan(dxy.significance)


class TestVertexDdotP:
    @pytest.mark.parametrize(
        "position, expected",
        [
            ((1.0, 0.0, 0.0), 1.0),
            ((0.0, 1.0, 0.0), 0.0),
            ((-2.0, 0.0, 0.0), -1.0),
            ((3.0, 3.0, 0.0), math.sqrt(0.5)),
        ],
    )
    def test_cosine(self, sv_factory, exact_pv, position, expected) -> None:
        sv = sv_factory(*position, eta=0.0, phi=0.0)
        assert vertex_ddot_p(sv, exact_pv) == pytest.approx(expected, abs=1e-12)

    def test_sv_at_pv_gives_zero(self, sv_factory, exact_pv) -> None:
        assert vertex_ddot_p(sv_factory(0.0), exact_pv) == 0.0

    def test_longitudinal_component(self, sv_factory, exact_pv) -> None:
        sv = sv_factory(1.0, 0.0, 0.0, eta=0.1, phi=0.1)
        expected = math.cos(0.1) / math.cosh(0.1)
        assert vertex_ddot_p(sv, exact_pv) == pytest.approx(expected)
