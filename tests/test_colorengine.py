# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for pigment_colorengine:
    - sRGB transfer functions (reference values)
    - linear RGB <-> XYZ matrices
    - XYZ <-> LAB and LAB <-> MSH
    - external color un-premultiplication
    - SRGBA validate / clamp / rgba
    - round trips and vectorised engine shapes

Run:
    pytest tests/test_colorengine.py -v
"""

import math
import warnings

import numpy as np
import pytest

import pigment_colorengine as ce
from pigment_colorengine import (
    CIELAB,
    CIEXYZ,
    MSH,
    NRGBA,
    SRGBA,
    ColorLike,
    ColorRangeError,
    ColorSpaceEngine,
    LinearRGB,
    TransparentColorWarning,
    color_to_msh,
    color_to_srgba,
    linear_to_s,
    s_to_linear,
)


# ---------------------------------------------------------------------------
# Transfer functions
# ---------------------------------------------------------------------------

def test_linear_to_s_reference_value():
    # Published gamma value; allow a couple of ulps for libm pow differences.
    assert linear_to_s(0.015299702) == pytest.approx(0.1298716701086684, rel=0, abs=1e-16)


def test_linear_to_s_linear_segment():
    assert linear_to_s(0.001) == pytest.approx(0.01292, abs=1e-15)
    assert linear_to_s(0.0) == 0.0


def test_s_to_linear_reference_values():
    assert s_to_linear(0.735356983) == pytest.approx(0.499999999920366, abs=1e-14)
    assert s_to_linear(0.01292) == pytest.approx(0.001, abs=1e-15)


def test_srgba_to_linear_rgb():
    lrgb = SRGBA(0.759704028, 0.162897038, 0.206033415).linear_rgb()
    np.testing.assert_allclose(
        lrgb, (0.5377665307661512, 0.022698506403451876, 0.035015856125996676),
        rtol=0, atol=1e-12,
    )


def test_srgb_linear_roundtrip():
    v = np.linspace(-0.1, 1.1, 241)
    rgb = np.stack([v, v[::-1], np.full_like(v, 0.5)], axis=-1)
    back = ColorSpaceEngine.linear_to_srgb(ColorSpaceEngine.srgb_to_linear(rgb))
    np.testing.assert_allclose(back, rgb, rtol=0, atol=1e-12)


def test_strict_ieee_toggle_gives_same_curve():
    v = np.linspace(0.0, 1.0, 101)
    rgb = np.stack([v, v, v], axis=-1)
    strict = ColorSpaceEngine.linear_to_srgb(rgb)
    ce.set_strict_ieee(False)
    try:
        fast = ColorSpaceEngine.linear_to_srgb(rgb)
    finally:
        ce.set_strict_ieee(True)
    np.testing.assert_allclose(fast, strict, rtol=1e-12, atol=1e-15)


# ---------------------------------------------------------------------------
# Linear RGB <-> XYZ
# ---------------------------------------------------------------------------

def test_xyz_to_linear_rgb():
    rgb = CIEXYZ(0.128392403, 0.128221351, 0.408477452).linear_rgb()
    assert isinstance(rgb, LinearRGB)
    np.testing.assert_allclose(
        rgb, (0.015299702837399953, 0.1330700251971, 0.4127549680071), rtol=0, atol=1e-12,
    )


def test_linear_rgb_xyz_pair():
    xyz = CIEXYZ(0.151975056, 0.112509738, 0.061066471)
    rgb = LinearRGB(0.28909265477940005, 0.0663313933285, 0.0500602839142)
    np.testing.assert_allclose(xyz.linear_rgb(), rgb, rtol=0, atol=1e-12)
    np.testing.assert_allclose(
        rgb.xyz(), (0.1519777983318093, 0.11251566341324888, 0.061068490182446714),
        rtol=0, atol=1e-12,
    )


# ---------------------------------------------------------------------------
# XYZ <-> LAB
# ---------------------------------------------------------------------------

def test_lab_to_xyz():
    xyz = CIELAB(42.49401592, 4.416911613, -43.38526532).xyz()
    assert isinstance(xyz, CIEXYZ)
    np.testing.assert_allclose(
        xyz, (0.12838835051807143, 0.12822135121812256, 0.40841368569543157),
        rtol=0, atol=1e-12,
    )


def test_xyz_to_lab_known_value():
    lab = CIEXYZ(0.151975056, 0.112509738, 0.061066471).lab()
    # L only depends on Y.
    assert lab.l == pytest.approx(40.00000000055783, abs=1e-9)
    assert lab.a == pytest.approx(30.0, abs=0.01)
    assert lab.b == pytest.approx(20.0, abs=0.01)


def test_lab_to_xyz_second_value():
    lab = CIELAB(40.00000000055783, 30.000000104296763, 19.99999996294335)
    np.testing.assert_allclose(
        lab.xyz(), (0.15197025931227778, 0.11250973800000005, 0.06105693812573921),
        rtol=0, atol=1e-12,
    )


def test_black_and_white_lab():
    assert CIEXYZ(0.0, 0.0, 0.0).lab() == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
    white = CIEXYZ(*ce.REF_WHITE_D65).lab()
    assert white == pytest.approx((100.0, 0.0, 0.0), abs=1e-9)


def test_xyz_lab_xyz_roundtrip_grid():
    g = np.linspace(0.02, 0.95, 12)
    xyz = np.array(np.meshgrid(g, g, g)).reshape(3, -1).T
    back = ColorSpaceEngine.lab_to_xyz(ColorSpaceEngine.xyz_to_lab(xyz))
    np.testing.assert_allclose(back, xyz, rtol=0, atol=1e-6)


def test_lab_xyz_lab_roundtrip_grid():
    L = np.linspace(1.0, 99.0, 9)
    ab = np.linspace(-60.0, 60.0, 9)
    lab = np.array(np.meshgrid(L, ab, ab)).reshape(3, -1).T
    back = ColorSpaceEngine.xyz_to_lab(ColorSpaceEngine.lab_to_xyz(lab))
    np.testing.assert_allclose(back, lab, rtol=0, atol=1e-6)


# ---------------------------------------------------------------------------
# LAB <-> MSH
# ---------------------------------------------------------------------------

def test_msh_to_lab():
    lab = MSH(80.0, 1.08, -1.1).lab()
    assert isinstance(lab, CIELAB)
    np.testing.assert_allclose(
        lab, (37.7062691338992, 32.004211237121645, -62.88058310076059), rtol=0, atol=1e-12,
    )


def test_lab_to_msh():
    msh = CIELAB(43.22418447, 59.07682101, 32.27381441).msh()
    np.testing.assert_allclose(
        msh, (80.00000000197056, 1.0000000000076632, 0.5000000000023601), rtol=0, atol=1e-12,
    )


def test_msh_of_black_is_nan_saturation():
    msh = CIELAB(0.0, 0.0, 0.0).msh()
    assert msh.m == 0.0
    assert math.isnan(msh.s)


def test_lab_to_srgb():
    assert CIELAB(0.0, 0.0, 0.0).srgb(0.0) == SRGBA(0.0, 0.0, 0.0, 0.0)
    rgb = CIELAB(43.22418447, 59.07682101, 32.27381441).srgb(1.0)
    assert rgb.a == 1.0
    np.testing.assert_allclose(
        (rgb.r, rgb.g, rgb.b),
        (0.7596910553350515, 0.16292472671190056, 0.20600836034382436),
        rtol=0, atol=1e-12,
    )


# ---------------------------------------------------------------------------
# External colors
# ---------------------------------------------------------------------------

def test_nrgba_premultiplies():
    assert NRGBA(255, 255, 255).rgba() == (65535, 65535, 65535, 65535)
    assert NRGBA(194, 42, 53, 100).rgba() == (19552, 4232, 5341, 25700)
    assert isinstance(NRGBA(1, 2, 3), ColorLike)


def test_nrgba_rejects_out_of_range():
    with pytest.raises(ValueError):
        NRGBA(256, 0, 0)
    with pytest.raises(ValueError):
        NRGBA(0, 0, 0, -1)


def test_color_to_srgba_unpremultiplies():
    rgb = color_to_srgba(NRGBA(194, 42, 53, 100))
    np.testing.assert_allclose(
        (rgb.r, rgb.g, rgb.b, rgb.a),
        (0.7607782101167315, 0.16466926070038912, 0.20782101167315176, 0.39215686274509803),
        rtol=0, atol=1e-15,
    )


def test_color_to_srgba_transparent_warns_and_propagates_nan():
    with pytest.warns(TransparentColorWarning):
        rgb = color_to_srgba(NRGBA(0, 0, 0, 0))
    assert rgb.a == 0.0
    assert math.isnan(rgb.r) and math.isnan(rgb.g) and math.isnan(rgb.b)


def test_color_to_srgba_opaque_does_not_warn():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        color_to_srgba(NRGBA(10, 20, 30))


def test_color_to_msh_pure_blue():
    msh = color_to_msh(NRGBA(0, 0, 255))
    assert msh.m == pytest.approx(137.64998152940237, abs=0.05)
    assert msh.s == pytest.approx(1.333915268336423, abs=1e-3)
    assert msh.h == pytest.approx(-0.9374394027523394, abs=1e-3)


def test_srgba_is_a_color():
    c = SRGBA(0.2, 0.4, 0.6)
    assert isinstance(c, ColorLike)
    back = color_to_srgba(c)
    assert back.a == 1.0
    assert (back.r, back.g, back.b) == pytest.approx((0.2, 0.4, 0.6), abs=1 / 65535)


# ---------------------------------------------------------------------------
# SRGBA
# ---------------------------------------------------------------------------

def test_srgba_rgba_premultiplies_and_truncates():
    assert SRGBA(1.0, 0.5, 0.0, 0.5).rgba() == (32767, 16383, 0, 32767)
    assert SRGBA(1.0, 1.0, 1.0, 1.0).rgba() == (65535, 65535, 65535, 65535)


def test_srgba_validate():
    good = SRGBA(0.0, 0.5, 1.0, 1.0)
    assert good.validate() is good

    bad = SRGBA(1.2, 0.5, -0.1, 1.0)
    with pytest.raises(ColorRangeError) as exc:
        bad.validate()
    assert exc.value.color is bad
    assert isinstance(exc.value, ValueError)


def test_srgba_validate_rejects_nan():
    with pytest.raises(ColorRangeError):
        SRGBA(float("nan"), 0.0, 0.0, 1.0).validate()


def test_srgba_clamp():
    c = SRGBA(1.2, 0.5, -0.1, 1.5).clamp()
    assert c == SRGBA(1.0, 0.5, 0.0, 1.0)


def test_srgba_is_immutable():
    c = SRGBA(0.1, 0.2, 0.3)
    with pytest.raises(AttributeError):
        c.r = 0.5  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Engine shapes
# ---------------------------------------------------------------------------

def test_handle_shapes_rejects_bad_shape():
    with pytest.raises(ValueError):
        ColorSpaceEngine.srgb_to_linear(np.zeros((10, 5)))


def test_engine_preserves_single_and_batch_shapes():
    single = ColorSpaceEngine.msh_to_srgb(MSH(80.0, 1.08, -1.1))
    assert single.shape == (3,)
    batch = ColorSpaceEngine.msh_to_srgb(np.array([[80.0, 1.08, -1.1], [88.0, 0.0, 0.0]]))
    assert batch.shape == (2, 3)
    np.testing.assert_allclose(batch[0], single, rtol=0, atol=1e-15)


def test_vectorised_pipeline_matches_value_types():
    labs = [CIELAB(43.2, 59.1, 32.3), CIELAB(70.0, -20.0, 10.0), CIELAB(30.0, 5.0, -40.0)]
    batch = ColorSpaceEngine.lab_to_srgb(np.array(labs))
    for row, lab in zip(batch, labs):
        c = lab.srgb(1.0)
        np.testing.assert_allclose(row, (c.r, c.g, c.b), rtol=0, atol=1e-12)


def test_srgb_to_lab_of_white():
    lab = ColorSpaceEngine.srgb_to_lab(np.array([1.0, 1.0, 1.0]))
    assert lab[0] == pytest.approx(100.0, abs=1e-6)
    assert abs(lab[1]) < 0.1 and abs(lab[2]) < 0.1
