# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: presets.py — Named color maps from Kenneth Moreland's color advice.

Diverging presets are MSH endpoint pairs.  Luminance presets are tables of
CIELAB controls with their normalized positions; each table was produced
from the ``*_CONTROL_COLORS`` listed next to it and is stored literally so
palettes reproduce the published colors.  Every factory returns a fresh,
independent map.

References:
    - http://www.kennethmoreland.com/color-advice/
    - Moreland, K. (2016). "Why We Use Bad Color Maps and What You Can Do
      About It." Proc. Human Vision and Electronic Imaging (HVEI).
    - Kindlmann, G., Reinhard, E., Creem, S. (2002). "Face-based luminance
      matching for perceptual colormap generation." Proc. IEEE VIS '02, 299-306.
"""

from __future__ import annotations

from typing import Callable, Dict, Final, Tuple, Union

from pigment_colorengine import CIELAB, MSH, NRGBA

from .diverging import DivergingColorMap
from .luminance import LuminanceColorMap

__all__ = [
    "smooth_blue_red",
    "smooth_purple_orange",
    "smooth_green_purple",
    "smooth_blue_tan",
    "smooth_green_red",
    "black_body",
    "extended_black_body",
    "kindlmann",
    "extended_kindlmann",
    "BLACK_BODY_CONTROL_COLORS",
    "EXTENDED_BLACK_BODY_CONTROL_COLORS",
    "KINDLMANN_CONTROL_COLORS",
    "EXTENDED_KINDLMANN_CONTROL_COLORS",
    "PRESETS",
    "get_preset",
]

AnyColorMap = Union[DivergingColorMap, LuminanceColorMap]


# ═══════════════════════════════════════════════════════════════════════════════
# 1.  Diverging presets
# ═══════════════════════════════════════════════════════════════════════════════

_MSH_BLUE   = MSH(80.0, 1.08, -1.1)
_MSH_RED    = MSH(80.0, 1.08, 0.5)
_MSH_PURPLE = MSH(64.97539711, 0.899434815, -0.899431964)
_MSH_ORANGE = MSH(85.00850996, 0.949730284, 0.950636521)
_MSH_GREEN  = MSH(78.04105346, 0.885011982, 2.499491379)


def smooth_blue_red() -> DivergingColorMap:
    """Smooth diverging map from blue to red ("cool to warm")."""
    return DivergingColorMap(_MSH_BLUE, _MSH_RED)


def smooth_purple_orange() -> DivergingColorMap:
    """Smooth diverging map from purple to orange."""
    return DivergingColorMap(_MSH_PURPLE, _MSH_ORANGE)


def smooth_green_purple() -> DivergingColorMap:
    """Smooth diverging map from green to purple."""
    return DivergingColorMap(_MSH_GREEN, _MSH_PURPLE)


def smooth_blue_tan() -> DivergingColorMap:
    """Smooth diverging map from blue to tan."""
    return DivergingColorMap(
        MSH(79.94788321, 0.798754784, -1.401313221),
        MSH(80.07193125, 0.799798811, 1.401089787),
    )


def smooth_green_red() -> DivergingColorMap:
    """Smooth diverging map from green to red."""
    return DivergingColorMap(_MSH_GREEN, MSH(76.96722122, 0.949483656, 0.499492043))


# ═══════════════════════════════════════════════════════════════════════════════
# 2.  Luminance presets
# ═══════════════════════════════════════════════════════════════════════════════

# Black body radiation hues, lightness made perceptually linear.
BLACK_BODY_CONTROL_COLORS: Final[Tuple[NRGBA, ...]] = (
    NRGBA(0, 0, 0),
    NRGBA(178, 34, 34),
    NRGBA(227, 105, 5),
    NRGBA(238, 210, 20),
    NRGBA(255, 255, 255),
)
_BLACK_BODY_LAB: Final[Tuple[CIELAB, ...]] = (
    CIELAB(0.0, 0.0, 0.0),
    CIELAB(39.112572747719774, 55.92470934659227, 37.65159714510402),
    CIELAB(58.45705480680232, 43.34389690857626, 65.95409116544081),
    CIELAB(84.13253643355525, -6.459770854468639, 82.41994470228775),
    CIELAB(100.0, 0.0, 0.0),
)
_BLACK_BODY_SCALARS: Final[Tuple[float, ...]] = (
    0.0, 0.39112572747719776, 0.5845705480680232, 0.8413253643355525, 1.0,
)

# Black body with blue and purple at the dark end (similar to gnuplot's default).
EXTENDED_BLACK_BODY_CONTROL_COLORS: Final[Tuple[NRGBA, ...]] = (
    NRGBA(0, 0, 0),
    NRGBA(0, 24, 168),
    NRGBA(99, 0, 228),
    NRGBA(220, 20, 60),
    NRGBA(255, 117, 56),
    NRGBA(238, 210, 20),
    NRGBA(255, 255, 255),
)
_EXTENDED_BLACK_BODY_LAB: Final[Tuple[CIELAB, ...]] = (
    CIELAB(0.0, 0.0, 0.0),
    CIELAB(21.873483862751876, 50.19882295659109, -74.66982659778306),
    CIELAB(34.506542513775905, 75.41302687474061, -88.73807072507786),
    CIELAB(47.02980511087303, 70.93217189227919, 33.59880053746508),
    CIELAB(65.17482203230537, 49.14591409658836, 56.86480950937553),
    CIELAB(84.13253643355525, -6.459770854468639, 82.41994470228775),
    CIELAB(100.0, 0.0, 0.0),
)
_EXTENDED_BLACK_BODY_SCALARS: Final[Tuple[float, ...]] = (
    0.0, 0.21873483862751875, 0.34506542513775906, 0.4702980511087303,
    0.6517482203230537, 0.8413253643355525, 1.0,
)

# Rainbow with monotonic lightness (Kindlmann, Reinhard & Creem 2002).
KINDLMANN_CONTROL_COLORS: Final[Tuple[NRGBA, ...]] = (
    NRGBA(0, 0, 0),
    NRGBA(46, 4, 76),
    NRGBA(63, 7, 145),
    NRGBA(8, 66, 165),
    NRGBA(5, 106, 106),
    NRGBA(7, 137, 169),
    NRGBA(8, 168, 26),
    NRGBA(84, 194, 9),
    NRGBA(196, 206, 10),
    NRGBA(252, 220, 197),
    NRGBA(255, 255, 255),
)
_KINDLMANN_LAB: Final[Tuple[CIELAB, ...]] = (
    CIELAB(0.0, 0.0, 0.0),
    CIELAB(10.479520542426698, 34.05557958902206, -34.21934877170809),
    CIELAB(21.03011379005111, 52.30473571100955, -61.852601228346536),
    CIELAB(31.03098927978494, 23.814976212074402, -57.73419358300511),
    CIELAB(40.21480513626115, -24.858012706049536, -7.322176588219942),
    CIELAB(52.73108089333358, -19.064976357731634, -25.558178073848147),
    CIELAB(60.007326812392634, -61.75624590074585, 56.43522875191319),
    CIELAB(69.81578343076002, -58.33353084882392, 68.37457857626646),
    CIELAB(79.55703752324776, -22.50477758899383, 78.57946686200843),
    CIELAB(89.818961593653, 7.586705160677109, 15.375961528833981),
    CIELAB(100.0, 0.0, 0.0),
)
_KINDLMANN_SCALARS: Final[Tuple[float, ...]] = (
    0.0, 0.10479520542426699, 0.2103011379005111, 0.3103098927978494,
    0.4021480513626115, 0.5273108089333358, 0.6000732681239264, 0.6981578343076003,
    0.7955703752324775, 0.89818961593653, 1.0,
)

# Kindlmann looping more than 360° around the hue circle; works because the
# low-saturation ends differ so much in lightness.
EXTENDED_KINDLMANN_CONTROL_COLORS: Final[Tuple[NRGBA, ...]] = (
    NRGBA(0, 0, 0),
    NRGBA(44, 5, 103),
    NRGBA(3, 67, 67),
    NRGBA(5, 103, 13),
    NRGBA(117, 124, 6),
    NRGBA(246, 104, 74),
    NRGBA(250, 149, 241),
    NRGBA(232, 212, 253),
    NRGBA(255, 255, 255),
)
_EXTENDED_KINDLMANN_LAB: Final[Tuple[CIELAB, ...]] = (
    CIELAB(0.0, 0.0, 0.0),
    CIELAB(13.371291966477482, 40.39368469479174, -47.73239449160565),
    CIELAB(25.072421338587574, -18.01441053740843, -5.313556572210176),
    CIELAB(37.411516363056116, -43.058336774976055, 39.30203907343062),
    CIELAB(49.75026355291354, -15.774050138318895, 53.507917567416094),
    CIELAB(61.643756252245225, 52.67703578954919, 43.82595336046358),
    CIELAB(74.93187540089825, 50.92061741619164, -30.235411697966242),
    CIELAB(87.64732748562544, 14.355163639545697, -17.471161313826332),
    CIELAB(100.0, 0.0, 0.0),
)
_EXTENDED_KINDLMANN_SCALARS: Final[Tuple[float, ...]] = (
    0.0, 0.13371291966477483, 0.25072421338587575, 0.37411516363056113,
    0.4975026355291354, 0.6164375625224523, 0.7493187540089825, 0.8764732748562544, 1.0,
)


def black_body() -> LuminanceColorMap:
    """Black body radiation colors with perceptually linear lightness."""
    return LuminanceColorMap.from_lab(_BLACK_BODY_LAB, _BLACK_BODY_SCALARS)


def extended_black_body() -> LuminanceColorMap:
    """Black body colors with blue and purple hues added at the low end."""
    return LuminanceColorMap.from_lab(_EXTENDED_BLACK_BODY_LAB, _EXTENDED_BLACK_BODY_SCALARS)


def kindlmann() -> LuminanceColorMap:
    """Kindlmann's luminance-corrected rainbow."""
    return LuminanceColorMap.from_lab(_KINDLMANN_LAB, _KINDLMANN_SCALARS)


def extended_kindlmann() -> LuminanceColorMap:
    """Kindlmann rainbow extended past a full hue loop."""
    return LuminanceColorMap.from_lab(_EXTENDED_KINDLMANN_LAB, _EXTENDED_KINDLMANN_SCALARS)


# ═══════════════════════════════════════════════════════════════════════════════
# 3.  Registry
# ═══════════════════════════════════════════════════════════════════════════════

PRESETS: Final[Dict[str, Callable[[], AnyColorMap]]] = {
    "smooth_blue_red": smooth_blue_red,
    "smooth_purple_orange": smooth_purple_orange,
    "smooth_green_purple": smooth_green_purple,
    "smooth_blue_tan": smooth_blue_tan,
    "smooth_green_red": smooth_green_red,
    "black_body": black_body,
    "extended_black_body": extended_black_body,
    "kindlmann": kindlmann,
    "extended_kindlmann": extended_kindlmann,
}


def get_preset(name: str) -> AnyColorMap:
    """
    Returns a fresh instance of the preset called ``name``.

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise KeyError(
            f"Unknown preset {name!r}. Known presets: {', '.join(sorted(PRESETS))}"
        ) from None
    return factory()
