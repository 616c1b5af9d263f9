"""
Simply supported beam under a uniform load.

Closed-form references (w = load, L = span):
- End shears: +wL/2 at x = 0, -wL/2 at x = L
- Midspan moment magnitude: wL²/8
- Midspan deflection magnitude: 5wL⁴/(384EI)
"""

import numpy as np
import pytest
from scipy.integrate import cumulative_trapezoid

from beam import Beam, Material, SimplySupported
from beam_config import AnalysisConfig

L = 6.0
W = 10.0
EI = 210000.0


@pytest.fixture
def beam():
    return Beam(primary_span=L, secondary_span=0.0, j2=1.0, material=Material('steel', {'EI': EI}))


@pytest.fixture
def analyzer():
    return SimplySupported()


def test_sampling_covers_closed_span(beam, analyzer):
    curve = analyzer.bending_moment(beam, W)

    assert len(curve.x) == 101
    assert curve.x[0] == 0.0
    assert curve.x[-1] == L
    assert np.allclose(np.diff(curve.x), L / 100)


def test_midspan_moment_and_end_shear():
    """The worked example: L = 6, w = 10."""
    material = Material('steel', {'EI': EI})
    beam = Beam(primary_span=6, secondary_span=0, j2=1, material=material)
    analyzer = SimplySupported()

    M = analyzer.bending_moment(beam, 10)
    V = analyzer.shear_force(beam, 10)

    assert M.x[50] == pytest.approx(3.0)
    assert M.y[50] == pytest.approx(-45.0)
    assert V.y[0] == pytest.approx(30.0)


def test_bending_moment_boundaries_and_peak(beam, analyzer):
    M = analyzer.bending_moment(beam, W)

    assert M.y[0] == pytest.approx(0.0, abs=1e-12)
    assert M.y[-1] == pytest.approx(0.0, abs=1e-12)

    x_peak, m_peak = M.peak()
    assert x_peak == pytest.approx(L / 2)
    assert abs(m_peak) == pytest.approx(W * L**2 / 8)
    # hogging sign convention
    assert np.all(M.y <= 0.0)


def test_shear_force_is_antisymmetric(beam, analyzer):
    V = analyzer.shear_force(beam, W)

    assert V.y[0] == pytest.approx(W * L / 2)
    assert V.y[-1] == pytest.approx(-W * L / 2)
    assert V.y[50] == pytest.approx(0.0, abs=1e-9)
    assert np.allclose(V.y, -V.y[::-1])


def test_deflection_boundaries_and_midspan(beam, analyzer):
    v = analyzer.deflection(beam, W)

    assert v.y[0] == pytest.approx(0.0, abs=1e-12)
    assert v.y[-1] == pytest.approx(0.0, abs=1e-12)

    # deflection is largest at midspan, downward negative, reported in mm
    assert int(np.argmax(np.abs(v.y))) == 50
    expected = -5 * W * L**4 / (384 * EI) * 1000
    assert v.y[50] == pytest.approx(expected, rel=1e-9)
    assert np.all(v.y <= 0.0)


def test_j2_scales_deflection_only(analyzer):
    steel = Material('steel', {'EI': EI})
    base = Beam(primary_span=L, secondary_span=0.0, j2=1.0, material=steel)
    scaled = Beam(primary_span=L, secondary_span=0.0, j2=2.5, material=steel)

    assert np.allclose(analyzer.deflection(scaled, W).y, 2.5 * analyzer.deflection(base, W).y)
    assert np.array_equal(analyzer.bending_moment(scaled, W).y, analyzer.bending_moment(base, W).y)
    assert np.array_equal(analyzer.shear_force(scaled, W).y, analyzer.shear_force(base, W).y)


def test_secondary_span_is_ignored(analyzer):
    steel = Material('steel', {'EI': EI})
    single = Beam(primary_span=L, secondary_span=0.0, j2=1.0, material=steel)
    extra = Beam(primary_span=L, secondary_span=4.0, j2=1.0, material=steel)

    assert np.array_equal(analyzer.deflection(single, W).x, analyzer.deflection(extra, W).x)
    assert np.array_equal(analyzer.deflection(single, W).y, analyzer.deflection(extra, W).y)


def test_moment_is_negative_integral_of_shear(beam, analyzer):
    """dM/dx = -V under this sign convention; V is linear so trapezoids are exact."""
    M = analyzer.bending_moment(beam, W)
    V = analyzer.shear_force(beam, W)

    M_from_V = -cumulative_trapezoid(V.y, V.x, initial=0.0)
    assert np.allclose(M.y, M_from_V, atol=1e-9)


def test_labels(beam, analyzer):
    assert analyzer.deflection(beam, W).y_label == "Deflection (mm)"
    assert analyzer.bending_moment(beam, W).y_label == "Bending Moment (kNm)"
    assert analyzer.shear_force(beam, W).y_label == "Shear Force (kN)"
    assert analyzer.shear_force(beam, W).x_label == "Span (m)"


def test_repeated_calls_are_identical(beam, analyzer):
    for method in (analyzer.deflection, analyzer.bending_moment, analyzer.shear_force):
        first = method(beam, W)
        second = method(beam, W)
        assert np.array_equal(first.x, second.x)
        assert np.array_equal(first.y, second.y)


def test_sample_count_from_config(beam):
    analyzer = SimplySupported(AnalysisConfig(n_points=11))
    curve = analyzer.shear_force(beam, W)

    assert len(curve.x) == 11
    assert curve.y[5] == pytest.approx(0.0, abs=1e-9)
