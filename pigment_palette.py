# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: pigment_palette.py — Discrete palettes sampled from a color map.

A ``Palette`` is produced once and never changes afterwards: colors are
stored in a tuple and only sequential / indexed reads are exposed.
``sample_palette`` is all-or-nothing; if any sample fails the whole palette
fails with ``PaletteGenerationError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Tuple, Union, overload

import numpy as np

from pigment_colorengine import ArrayFloat, SRGBA

if TYPE_CHECKING:
    from color_maps.colormap import ColorMap

__all__ = ["Palette", "PaletteGenerationError", "sample_palette"]


class PaletteGenerationError(RuntimeError):
    """A palette could not be generated because one of its samples failed."""


class Palette:
    """
    Immutable, ordered sequence of ``SRGBA`` colors.

    Read path
    ---------
    ``colors()`` → tuple of colors, plus ``len``, iteration and indexing.
    Slicing returns a new ``Palette``.  There is no write path.
    """

    __slots__ = ("_colors",)

    def __init__(self, colors: Iterable[SRGBA]) -> None:
        self._colors: Tuple[SRGBA, ...] = tuple(colors)

    def colors(self) -> Tuple[SRGBA, ...]:
        return self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[SRGBA]:
        return iter(self._colors)

    @overload
    def __getitem__(self, index: int) -> SRGBA: ...
    @overload
    def __getitem__(self, index: slice) -> Palette: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[SRGBA, Palette]:
        if isinstance(index, slice):
            return Palette(self._colors[index])
        return self._colors[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._colors == other._colors

    def __hash__(self) -> int:
        return hash(self._colors)

    def __repr__(self) -> str:
        return f"Palette(n_colors={len(self._colors)})"

    def to_array(self) -> ArrayFloat:
        """
        Returns the palette as a float64 array of shape (N, 4).

        Columns are non-premultiplied sRGB + alpha in [0, 1], the layout
        matplotlib's ``ListedColormap`` accepts.
        """
        return np.array(
            [(c.r, c.g, c.b, c.a) for c in self._colors], dtype=np.float64
        ).reshape(len(self._colors), 4)


def sample_palette(color_map: ColorMap, n_colors: int, lo: float, hi: float) -> Palette:
    """
    Samples ``color_map`` at ``n_colors`` evenly spaced scalars in [lo, hi].

    Both endpoints are sampled exactly; a single color samples ``lo`` only.

    Raises
    ------
    ValueError
        If ``n_colors < 1``.
    PaletteGenerationError
        If evaluating any sample fails.  No partial palette is returned.
    """
    if n_colors < 1:
        raise ValueError(f"n_colors must be >= 1, got {n_colors}")

    samples = []
    for i, scalar in enumerate(np.linspace(lo, hi, n_colors)):
        try:
            samples.append(color_map.at(float(scalar)))
        except ValueError as err:
            raise PaletteGenerationError(
                f"palette sample {i} of {n_colors} (scalar {scalar:g}) failed: {err}"
            ) from err
    return Palette(samples)
