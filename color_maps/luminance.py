# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: luminance.py — Color maps with luminance linear in the scalar.

Control colors are converted to CIELAB and placed on [0, 1] according to
their lightness, ``(L - L_min) / (L_max - L_min)``.  Evaluating the map
linearly interpolates L, a and b between the two bracketing controls, so L
(perceived brightness) is a linear function of the scalar.

Requirements:
  * Control lightness must strictly increase; this is checked once at
    construction (``NonMonotonicLuminanceError``).
  * The domain minimum is fixed at 0 so that scalar 0 always maps to the
    darkest control.  ``set_min`` raises ``UnsupportedOperationError``.

Interpolated results are clamped into [0, 1] rather than validated: the
segments are in gamut by construction and only overshoot by rounding error
at segment boundaries.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from pigment_colorengine import ArrayFloat, CIELAB, ColorLike, SRGBA, color_to_srgba
from pigment_palette import Palette, sample_palette

from .colormap import (
    DegenerateDomainError,
    NonMonotonicLuminanceError,
    OutOfRangeError,
    UnsupportedOperationError,
)

__all__ = ["LuminanceColorMap"]


def _check_monotonic(colors: Sequence[CIELAB]) -> None:
    for i in range(1, len(colors)):
        # "not >" also rejects NaN lightness
        if not colors[i].l > colors[i - 1].l:
            raise NonMonotonicLuminanceError(
                f"luminance of color {i} ({colors[i].l:g}) is not greater "
                f"than that of color {i - 1} ({colors[i - 1].l:g})"
            )


def _normalized_scalars(colors: Sequence[CIELAB]) -> ArrayFloat:
    lightness = np.array([c.l for c in colors], dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        scalars = (lightness - lightness.min()) / (lightness.max() - lightness.min())
    # Pin the ends against rounding.
    scalars[0] = 0.0
    scalars[-1] = 1.0
    return scalars


class LuminanceColorMap:
    """
    Scalar → color map through luminance-ordered control colors.

    Parameters:
        control_colors: One or more external colors (anything with a 16-bit
            premultiplied ``rgba()``), darkest first.
        alpha: Opacity of every returned color, in [0, 1] (default 1).

    Raises:
        ValueError: If ``control_colors`` is empty or alpha is out of range.
        NonMonotonicLuminanceError: If lightness does not strictly increase.

    Examples:
        cmap = LuminanceColorMap([NRGBA(0, 0, 0), NRGBA(178, 34, 34), NRGBA(255, 255, 255)])
        cmap.set_max(10.0)
        color = cmap.at(2.5)
    """

    __slots__ = ("_colors", "_scalars", "_alpha", "_max")

    def __init__(self, control_colors: Sequence[ColorLike], alpha: float = 1.0) -> None:
        if len(control_colors) == 0:
            raise ValueError("LuminanceColorMap needs at least one control color")
        labs = [color_to_srgba(c).lab() for c in control_colors]
        self._setup(labs, None, alpha)

    @classmethod
    def from_lab(
        cls,
        colors: Sequence[CIELAB],
        scalars: Optional[Sequence[float]] = None,
        alpha: float = 1.0,
    ) -> LuminanceColorMap:
        """
        Builds a map directly from CIELAB controls.

        ``scalars``, when given, are used verbatim (precomputed tables); they
        must match ``colors`` in length, start at 0, end at 1 and strictly
        increase.  Otherwise they are derived from lightness.
        """
        if len(colors) == 0:
            raise ValueError("LuminanceColorMap needs at least one control color")
        obj = cls.__new__(cls)
        obj._setup([CIELAB(*map(float, c)) for c in colors], scalars, alpha)
        return obj

    def _setup(
        self,
        labs: List[CIELAB],
        scalars: Optional[Sequence[float]],
        alpha: float,
    ) -> None:
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {alpha}")
        _check_monotonic(labs)

        if scalars is None:
            scalar_arr = _normalized_scalars(labs)
        else:
            scalar_arr = np.asarray(scalars, dtype=np.float64)
            if scalar_arr.shape != (len(labs),):
                raise ValueError(
                    f"expected {len(labs)} scalars, got shape {scalar_arr.shape}"
                )
            if scalar_arr[0] != 0.0 or scalar_arr[-1] != 1.0:
                raise ValueError("scalars must start at 0 and end at 1")
            if np.any(np.diff(scalar_arr) <= 0.0):
                raise ValueError("scalars must be strictly increasing")

        self._colors: Tuple[CIELAB, ...] = tuple(labs)
        self._scalars: ArrayFloat = scalar_arr
        self._scalars.setflags(write=False)
        self._alpha = float(alpha)
        self._max = 0.0

    # -- read-only views --------------------------------------------------
    @property
    def control_colors(self) -> Tuple[CIELAB, ...]:
        return self._colors

    @property
    def scalars(self) -> Tuple[float, ...]:
        return tuple(float(s) for s in self._scalars)

    @property
    def alpha(self) -> float:
        return self._alpha

    # -- ColorMap protocol ------------------------------------------------
    def set_min(self, v: float) -> None:
        """Always raises: the minimum of a luminance map is fixed at 0."""
        raise UnsupportedOperationError(
            "LuminanceColorMap minimum value cannot be changed from zero"
        )

    def set_max(self, v: float) -> None:
        self._max = float(v)

    def min(self) -> float:
        return 0.0

    def max(self) -> float:
        return self._max

    def at(self, scalar: float) -> SRGBA:
        """
        Color of ``scalar``.

        Raises
        ------
        DegenerateDomainError
            If ``max`` was never set (``max == 0``).
        OutOfRangeError
            If ``scalar / max`` lies outside [0, 1].
        """
        if self._max == 0.0:
            raise DegenerateDomainError("LuminanceColorMap: max == 0")
        t = float(scalar) / self._max
        if not 0.0 <= t <= 1.0:
            raise OutOfRangeError(
                f"interpolation value ({t:g}) out of range (0, {self._max:g})"
            )

        i = int(np.searchsorted(self._scalars, t, side="left"))
        if i == 0:
            return self._colors[0].srgb(self._alpha)

        c1 = self._colors[i - 1]
        c2 = self._colors[i]
        s1 = float(self._scalars[i - 1])
        s2 = float(self._scalars[i])
        frac = (t - s1) / (s2 - s1)
        lab = CIELAB(
            frac * (c2.l - c1.l) + c1.l,
            frac * (c2.a - c1.a) + c1.a,
            frac * (c2.b - c1.b) + c1.b,
        )
        return lab.srgb(self._alpha).clamp()

    def palette(self, n_colors: int) -> Palette:
        """
        ``n_colors`` evenly spaced samples from 0 to ``max`` inclusive.

        An unconfigured map (max == 0) is sampled over [0, 1] without
        changing its own domain.
        """
        target = self
        if self._max == 0.0:
            target = LuminanceColorMap.__new__(LuminanceColorMap)
            target._colors = self._colors
            target._scalars = self._scalars
            target._alpha = self._alpha
            target._max = 1.0
        return sample_palette(target, n_colors, 0.0, target._max)

    def __repr__(self) -> str:
        return (
            f"LuminanceColorMap(n_controls={len(self._colors)}, "
            f"alpha={self._alpha:g}, max={self._max:g})"
        )
