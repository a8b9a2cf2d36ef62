# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Scalar → color maps (diverging MSH and linear-luminance LAB) and presets.
"""

from .colormap import (
    ColorMap,
    ColorMapError,
    ColorRangeError,
    DegenerateDomainError,
    NonMonotonicLuminanceError,
    OutOfRangeError,
    PaletteGenerationError,
    UnsupportedOperationError,
)
from .diverging import DivergingColorMap, DivergingConfig, HueTwistWarning
from .luminance import LuminanceColorMap
from .presets import PRESETS, get_preset

__all__ = [
    "ColorMap",
    "ColorMapError",
    "ColorRangeError",
    "DegenerateDomainError",
    "NonMonotonicLuminanceError",
    "OutOfRangeError",
    "PaletteGenerationError",
    "UnsupportedOperationError",
    "DivergingColorMap",
    "DivergingConfig",
    "HueTwistWarning",
    "LuminanceColorMap",
    "PRESETS",
    "get_preset",
]
