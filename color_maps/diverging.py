# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: diverging.py — Smooth diverging color maps in MSH space.

Implements the diverging scheme of Moreland (2009): two saturated endpoint
colors are joined through an achromatic convergence color of magnitude
``converge_m``.  Each half of the map raises M linearly toward the
convergence magnitude while S falls to zero; the hue is "twisted" on the
way so the path through MSH space arcs instead of cutting a chord.

    hue_twist(c) = sign(H) · S · sqrt(converge_m² − M²) / (M · sin S)

At exactly ``t == converge_point`` the result is MSH(converge_m, 0, 0): with
zero saturation the hue is meaningless, so it is pinned to 0.

Configuration
-------------
All tunables live in the frozen ``DivergingConfig`` dataclass and are fixed
at construction.  ``configure(**changes)`` returns a reconfigured copy.
Only the scalar domain (``set_min`` / ``set_max``) is mutable.
"""

from __future__ import annotations

import dataclasses
import warnings
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from numba import njit

from pigment_colorengine import (
    ArrayFloat,
    ColorLike,
    ColorSpaceEngine,
    MSH,
    SRGBA,
    color_to_msh,
)
from pigment_palette import Palette, sample_palette

from .colormap import DegenerateDomainError

__all__ = ["DivergingConfig", "DivergingColorMap", "HueTwistWarning"]


class HueTwistWarning(RuntimeWarning):
    """An endpoint magnitude exceeds the convergence magnitude."""


@dataclass(slots=True, frozen=True)
class DivergingConfig:
    """
    Tunables of a diverging color map.

    Attributes:
        converge_m: MSH magnitude of the neutral convergence color (default 88).
        converge_point: Normalized scalar in (0, 1) where the two halves meet
            (default 0.5).
        alpha: Opacity of every returned color, in [0, 1] (default 1).
    """
    converge_m:     float = 88.0
    converge_point: float = 0.5
    alpha:          float = 1.0

    def __post_init__(self) -> None:
        if not self.converge_m > 0.0:
            raise ValueError(f"converge_m must be > 0, got {self.converge_m}")
        if not 0.0 < self.converge_point < 1.0:
            raise ValueError(
                f"converge_point must be in the open interval (0, 1), got {self.converge_point}"
            )
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {self.alpha}")


# ═══════════════════════════════════════════════════════════════════════════════
# Interpolation kernels
# ═══════════════════════════════════════════════════════════════════════════════

@njit(cache=True, fastmath=False, error_model="numpy")
def _hue_twist(m: float, s: float, h: float, converge_m: float) -> float:
    """Hue rotation accumulated while M rises from ``m`` to ``converge_m``."""
    return np.sign(h) * s * np.sqrt(converge_m * converge_m - m * m) / (m * np.sin(s))


@njit(cache=True, fastmath=False, error_model="numpy")
def _interpolate_diverging_kernel(
    start: ArrayFloat,
    end: ArrayFloat,
    converge_m: float,
    converge_point: float,
    t: ArrayFloat,
) -> ArrayFloat:
    """
    MSH interpolation for an array of normalized scalars.

    start, end : (3,) MSH endpoints
    t          : (N,) normalized scalars
    returns    : (N, 3) MSH colors
    """
    start_twist = _hue_twist(start[0], start[1], start[2], converge_m)
    end_twist = _hue_twist(end[0], end[1], end[2], converge_m)

    n = t.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        s = t[i]
        if s < converge_point:
            interp = s / converge_point
            out[i, 0] = (converge_m - start[0]) * interp + start[0]
            out[i, 1] = start[1] * (1.0 - interp)
            out[i, 2] = start[2] + start_twist * interp
        else:
            interp1 = (s - 1.0) / (converge_point - 1.0)
            interp2 = s / converge_point - 1.0
            out[i, 0] = (converge_m - end[0]) * interp1 + end[0]
            out[i, 1] = end[1] * interp2
            if s > converge_point:
                out[i, 2] = end[2] + end_twist * interp1
            else:
                out[i, 2] = 0.0
    return out


# ═══════════════════════════════════════════════════════════════════════════════
# DivergingColorMap
# ═══════════════════════════════════════════════════════════════════════════════

class DivergingColorMap:
    """
    Scalar → color map diverging from ``start`` to ``end`` through a neutral
    midpoint.

    Parameters:
        start: MSH color at the low end of the domain.
        end: MSH color at the high end of the domain.
        config: Optional ``DivergingConfig``; defaults apply when omitted.
        **overrides: Individual config fields (override ``config``).

    Examples:
        # Defaults (converge_m=88, converge_point=0.5, alpha=1)
        cmap = DivergingColorMap(MSH(80, 1.08, -1.1), MSH(80, 1.08, 0.5))

        # Config object (good for presets / stored settings)
        cmap = DivergingColorMap(start, end, DivergingConfig(alpha=0.5))

        # Hybrid
        cmap = DivergingColorMap(start, end, cfg, converge_point=0.25)

        cmap.set_min(-1.0)
        cmap.set_max(1.0)
        color = cmap.at(0.3)

    Domain:
        The scalar is normalized as ``(scalar - min) / max``, not
        ``(scalar - min) / (max - min)``.  The two agree whenever
        ``min == 0``; this is the normalization the published Moreland
        tables were generated with.
    """

    __slots__ = ("_start", "_end", "_config", "_min", "_max")

    def __init__(
        self,
        start: MSH,
        end: MSH,
        config: Optional[DivergingConfig] = None,
        **overrides: Any,
    ) -> None:
        cfg = config if config is not None else DivergingConfig()
        if overrides:
            cfg = dataclasses.replace(cfg, **overrides)

        self._start = MSH(*map(float, start))
        self._end = MSH(*map(float, end))
        self._config = cfg
        self._min = 0.0
        self._max = 0.0

        for label, c in (("start", self._start), ("end", self._end)):
            if c.m > cfg.converge_m:
                warnings.warn(
                    f"DivergingColorMap: {label} magnitude {c.m:g} exceeds "
                    f"converge_m {cfg.converge_m:g}; hue twist is undefined (NaN).",
                    HueTwistWarning,
                    stacklevel=2,
                )

    @classmethod
    def from_colors(
        cls,
        start_color: ColorLike,
        end_color: ColorLike,
        config: Optional[DivergingConfig] = None,
        **overrides: Any,
    ) -> DivergingColorMap:
        """Builds a diverging map whose endpoints are external colors."""
        return cls(color_to_msh(start_color), color_to_msh(end_color), config, **overrides)

    # -- read-only configuration ------------------------------------------
    @property
    def start(self) -> MSH:
        return self._start

    @property
    def end(self) -> MSH:
        return self._end

    @property
    def config(self) -> DivergingConfig:
        return self._config

    @property
    def converge_m(self) -> float:
        return self._config.converge_m

    @property
    def converge_point(self) -> float:
        return self._config.converge_point

    @property
    def alpha(self) -> float:
        return self._config.alpha

    def configure(self, **changes: Any) -> DivergingColorMap:
        """Returns a copy with ``changes`` applied to the config (domain kept)."""
        clone = DivergingColorMap(self._start, self._end, self._config, **changes)
        clone._min = self._min
        clone._max = self._max
        return clone

    def _copy(self) -> DivergingColorMap:
        # Bypasses __init__: endpoints were already checked for this config.
        clone = DivergingColorMap.__new__(DivergingColorMap)
        clone._start = self._start
        clone._end = self._end
        clone._config = self._config
        clone._min = self._min
        clone._max = self._max
        return clone

    # -- ColorMap protocol ------------------------------------------------
    def set_min(self, v: float) -> None:
        self._min = float(v)

    def set_max(self, v: float) -> None:
        self._max = float(v)

    def min(self) -> float:
        return self._min

    def max(self) -> float:
        return self._max

    def at(self, scalar: float) -> SRGBA:
        """
        Color of ``scalar``.

        Raises
        ------
        DegenerateDomainError
            If ``min == max``.
        ColorRangeError
            If the converted color leaves [0, 1]; the color itself is
            available on the exception's ``.color``.
        """
        if self._min == self._max:
            raise DegenerateDomainError("DivergingColorMap: max == min")
        with np.errstate(divide="ignore", invalid="ignore"):
            t = (np.float64(scalar) - self._min) / self._max
        msh = self.interpolate(float(t))
        r, g, b = ColorSpaceEngine.msh_to_srgb(msh)
        return SRGBA(float(r), float(g), float(b), self._config.alpha).validate()

    def palette(self, n_colors: int) -> Palette:
        """
        ``n_colors`` evenly spaced samples from ``min`` to ``max`` inclusive.

        An unconfigured map (min == max == 0) is sampled over [0, 1] without
        changing its own domain.
        """
        target = self
        if self._min == 0.0 and self._max == 0.0:
            target = self._copy()
            target._max = 1.0
        return sample_palette(target, n_colors, target._min, target._max)

    # -- interpolation ----------------------------------------------------
    def interpolate(self, t: float) -> MSH:
        """MSH color at normalized scalar ``t``."""
        res = self.interpolate_many(np.array([t], dtype=np.float64))
        return MSH(float(res[0, 0]), float(res[0, 1]), float(res[0, 2]))

    def interpolate_many(self, t: ArrayFloat) -> ArrayFloat:
        """Vectorised ``interpolate``: (N,) normalized scalars → (N, 3) MSH."""
        t_arr = np.ascontiguousarray(np.atleast_1d(np.asarray(t, dtype=np.float64)))
        return _interpolate_diverging_kernel(
            np.asarray(self._start, dtype=np.float64),
            np.asarray(self._end, dtype=np.float64),
            self._config.converge_m,
            self._config.converge_point,
            t_arr,
        )

    def __repr__(self) -> str:
        return (
            f"DivergingColorMap(start={self._start}, end={self._end}, "
            f"config={self._config}, domain=({self._min:g}, {self._max:g}))"
        )
