# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: colormap.py — Shared color-map protocol and error kinds.

The diverging and luminance maps have no common state, only a common
contract, so they are tied together by a ``Protocol`` rather than a base
class.  Any object satisfying ``ColorMap`` can be handed to
``pigment_palette.sample_palette`` or to a plotting front end.

Error kinds
-----------
ColorMapError (ValueError)
    ├── NonMonotonicLuminanceError   construction of a luminance map
    ├── DegenerateDomainError        min == max / max == 0 at evaluation
    └── OutOfRangeError              normalized scalar outside [0, 1]

ColorRangeError (ValueError)         output channel outside [0, 1]; the
                                     color is still available on ``.color``

UnsupportedOperationError (RuntimeError)
    Contract violation (e.g. moving the fixed minimum of a luminance map).
    Deliberately *not* a ColorMapError so a blanket ``except ColorMapError``
    does not hide misuse.

PaletteGenerationError (RuntimeError)
    A sample failed while building a palette; chained from the cause.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pigment_colorengine import ColorRangeError, SRGBA
from pigment_palette import Palette, PaletteGenerationError

__all__ = [
    "ColorMap",
    "ColorMapError",
    "NonMonotonicLuminanceError",
    "DegenerateDomainError",
    "OutOfRangeError",
    "ColorRangeError",
    "UnsupportedOperationError",
    "PaletteGenerationError",
]


class ColorMapError(ValueError):
    """Base class for recoverable color-map errors."""


class NonMonotonicLuminanceError(ColorMapError):
    """Control colors of a luminance map do not strictly increase in L*."""


class DegenerateDomainError(ColorMapError):
    """The scalar domain is empty (min == max) or was never configured."""


class OutOfRangeError(ColorMapError):
    """A normalized scalar fell outside [0, 1]."""


class UnsupportedOperationError(RuntimeError):
    """The color map does not support the requested operation."""


@runtime_checkable
class ColorMap(Protocol):
    """
    Minimal interface a scalar → color map must satisfy.

    at(scalar)        → SRGBA
    set_min(v) / set_max(v)
    min() / max()     → current domain bounds
    palette(n)        → Palette of n evenly spaced samples

    Concrete implementations:
      - DivergingColorMap  (MSH interpolation through a neutral midpoint)
      - LuminanceColorMap  (LAB interpolation, luminance linear in scalar)
    """
    def at(self, scalar: float) -> SRGBA: ...
    def set_min(self, v: float) -> None: ...
    def set_max(self, v: float) -> None: ...
    def min(self) -> float: ...
    def max(self) -> float: ...
    def palette(self, n_colors: int) -> Palette: ...
