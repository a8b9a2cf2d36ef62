# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for pigment_palette: the immutable Palette container and the
all-or-nothing sampler.

Run:
    pytest tests/test_palette.py -v
"""

import numpy as np
import pytest

from pigment_colorengine import SRGBA
from pigment_palette import Palette, PaletteGenerationError, sample_palette


class RecordingMap:
    """Minimal color map that records the scalars it is asked for."""

    def __init__(self, fail_above=None):
        self.seen = []
        self.fail_above = fail_above

    def at(self, scalar):
        self.seen.append(scalar)
        if self.fail_above is not None and scalar > self.fail_above:
            raise ValueError(f"refusing {scalar}")
        return SRGBA(scalar, scalar, scalar, 1.0)


def _palette():
    return Palette([SRGBA(0.0, 0.0, 0.0), SRGBA(0.5, 0.25, 0.75, 0.5), SRGBA(1.0, 1.0, 1.0)])


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

def test_palette_read_path():
    p = _palette()
    assert len(p) == 3
    assert p.colors() == tuple(p)
    assert p[1] == SRGBA(0.5, 0.25, 0.75, 0.5)
    assert p[-1] == SRGBA(1.0, 1.0, 1.0)


def test_palette_has_no_write_path():
    p = _palette()
    with pytest.raises(TypeError):
        p[0] = SRGBA(1.0, 0.0, 0.0)  # type: ignore[index]
    with pytest.raises(AttributeError):
        p.extra = 1  # type: ignore[attr-defined]


def test_palette_copies_input():
    colors = [SRGBA(0.1, 0.2, 0.3)]
    p = Palette(colors)
    colors.append(SRGBA(0.4, 0.5, 0.6))
    assert len(p) == 1


def test_palette_slice_is_palette():
    sub = _palette()[1:]
    assert isinstance(sub, Palette)
    assert len(sub) == 2


def test_palette_equality_and_hash():
    assert _palette() == _palette()
    assert hash(_palette()) == hash(_palette())
    assert _palette() != _palette()[:2]


def test_palette_to_array():
    arr = _palette().to_array()
    assert arr.shape == (3, 4)
    np.testing.assert_array_equal(arr[1], [0.5, 0.25, 0.75, 0.5])
    assert Palette([]).to_array().shape == (0, 4)


# ---------------------------------------------------------------------------
# sample_palette
# ---------------------------------------------------------------------------

def test_sample_palette_hits_both_endpoints_exactly():
    cmap = RecordingMap()
    p = sample_palette(cmap, 10, 0.1, 0.7)
    assert len(p) == 10
    assert cmap.seen[0] == 0.1
    assert cmap.seen[-1] == 0.7
    assert all(b > a for a, b in zip(cmap.seen, cmap.seen[1:]))


def test_sample_palette_single_color_samples_low_end():
    cmap = RecordingMap()
    sample_palette(cmap, 1, 2.0, 5.0)
    assert cmap.seen == [2.0]


@pytest.mark.parametrize("n", [0, -3])
def test_sample_palette_rejects_non_positive_count(n):
    with pytest.raises(ValueError):
        sample_palette(RecordingMap(), n, 0.0, 1.0)


def test_sample_palette_is_all_or_nothing():
    cmap = RecordingMap(fail_above=0.5)
    with pytest.raises(PaletteGenerationError) as exc:
        sample_palette(cmap, 5, 0.0, 1.0)
    assert isinstance(exc.value.__cause__, ValueError)
    # Sampling stops at the first failure.
    assert cmap.seen == [0.0, 0.25, 0.5, 0.75]
