# -*- coding: utf-8 -*-
"""
Pigment: Perceptual color maps for scalar fields
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Conversion Engine
=======================
Closed-form transforms between the five color spaces used by the Pigment
color maps:

    sRGB (+alpha)  <->  linear RGB  <->  CIE XYZ (D65)  <->  CIE LAB  <->  MSH

The engine has two layers:

1. ``ColorSpaceEngine`` — static, vectorised transforms on ``(N, 3)`` or
   ``(3,)`` float64 arrays, backed by Numba kernels for the non-linear
   transfer functions.
2. Immutable value types (``LinearRGB``, ``CIEXYZ``, ``CIELAB``, ``MSH``,
   ``SRGBA``) whose methods chain single colors through the same engine.

Numeric conventions:
    - sRGB transfer thresholds 0.0031308 (OETF) and 0.04045 (EOTF).
    - The linear RGB <-> XYZ matrices use the four-digit sRGB/D65
      coefficients so palette outputs match the published Moreland tables.
    - LAB uses the 0.008856 / 7.787 split with the D65 white point applied
      in *both* directions, giving exact round trips.
    - MSH is the polar form of LAB: M = |LAB|, S = acos(L/M), H = atan2(B, A).

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
    - Moreland, K. (2009). "Diverging Color Maps for Scientific Visualization."
      Proc. 5th Int. Symposium on Visual Computing. DOI 10.1007/978-3-642-10520-3_9
"""

from __future__ import annotations

import functools
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Final, NamedTuple, Protocol, Tuple, TypeAlias, runtime_checkable

import numpy as np
import numpy.typing as npt
from numba import njit

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "REF_WHITE_D65",
    "M_LINEAR_RGB_TO_XYZ_T",
    "M_XYZ_TO_LINEAR_RGB_T",
    "LAB_EPSILON",
    "LAB_SLOPE",
    "LAB_OFFSET",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Errors / Warnings ---
    "ColorRangeError",
    "TransparentColorWarning",

    # --- Decorators ---
    "handle_shapes",

    # --- Scalar transfer functions ---
    "linear_to_s",
    "s_to_linear",

    # --- Classes ---
    "ColorSpaceEngine",
    "ColorLike",
    "NRGBA",
    "LinearRGB",
    "CIEXYZ",
    "CIELAB",
    "MSH",
    "SRGBA",

    # --- Functions ---
    "color_to_srgba",
    "color_to_msh",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]

# --- Constants & Pre-Transposed Matrices ---

# D65 reference white (Y = 1.0)
REF_WHITE_D65: Final[ArrayFloat] = np.array([0.95047, 1.00000, 1.08883], dtype=np.float64)

# Linear sRGB <-> XYZ (four-digit coefficients, row-vector form after .T)
_M_LINEAR_RGB_TO_XYZ_BASE = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505]
], dtype=np.float64)
M_LINEAR_RGB_TO_XYZ_T: Final[ArrayFloat] = _M_LINEAR_RGB_TO_XYZ_BASE.T.copy()

_M_XYZ_TO_LINEAR_RGB_BASE = np.array([
    [ 3.2406, -1.5372, -0.4986],
    [-0.9689,  1.8758,  0.0415],
    [ 0.0557, -0.2040,  1.0570]
], dtype=np.float64)
M_XYZ_TO_LINEAR_RGB_T: Final[ArrayFloat] = _M_XYZ_TO_LINEAR_RGB_BASE.T.copy()

# CIE 1976 LAB split.  f(t) switches from cube root to the linear segment
# 7.787·t + 16/116 below LAB_EPSILON.
LAB_EPSILON: Final[float] = 0.008856
LAB_SLOPE: Final[float]   = 7.787
LAB_OFFSET: Final[float]  = 16.0 / 116.0
# Value of f(LAB_EPSILON) on the linear segment; the inverse switches here.
_LAB_F_LIMIT: Final[float] = LAB_SLOPE * LAB_EPSILON + LAB_OFFSET

_U16_MAX: Final[float] = 65535.0


# --- Runtime Configuration ---
# When True, Numba transfer kernels use fastmath=False variants that keep
# strict IEEE 754 semantics.  Palette tables are compared bit-for-bit against
# published values, so strict mode is the default here.
#
# Toggle at runtime via:
#     import pigment_colorengine as ce
#     ce.set_strict_ieee(False)  # fast mode
#     ce.set_strict_ieee(True)   # back to strict mode (default)
_STRICT_IEEE: bool = True

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between strict (default) and fast IEEE 754 Numba kernels.

    Args:
        enabled: If True, use the ``fastmath=False`` transfer kernels.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 0. ERRORS & WARNINGS
# =============================================================================

class ColorRangeError(ValueError):
    """
    Raised when a computed sRGBA color has a channel outside [0, 1].

    The offending color is kept on ``.color`` so callers can decide to use
    the out-of-gamut value anyway.
    """

    def __init__(self, color: "SRGBA") -> None:
        self.color = color
        super().__init__(
            f"invalid color r:{color.r:g}, g:{color.g:g}, b:{color.b:g}, a:{color.a:g}"
        )


class TransparentColorWarning(RuntimeWarning):
    """A fully transparent color was un-premultiplied (result is non-finite)."""


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) float64 and safeguard shape.

    Accepts anything ``np.asarray`` understands, including the NamedTuple
    value types of this module.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: Any, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected last dimension size 3, got shape {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. LOW-LEVEL MATH KERNELS (Numba)
# =============================================================================
# error_model="numpy": division by zero yields inf/NaN instead of raising,
# so degenerate inputs (M = 0, S = 0) follow plain float behavior.

@njit(cache=True, fastmath=True, error_model="numpy")
def _fast_gamma_srgb(linear: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB OETF (linear -> gamma encoded).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()

    for i in range(linear.size):
        v = linear_flat[i]
        if v > 0.0031308:
            out_flat[i] = 1.055 * (v ** (1.0/2.4)) - 0.055
        else:
            out_flat[i] = 12.92 * v
    return out

@njit(cache=True, fastmath=True, error_model="numpy")
def _fast_inverse_gamma_srgb(srgb: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB EOTF (gamma encoded -> linear).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()

    for i in range(srgb.size):
        v = srgb_flat[i]
        if v > 0.04045:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
        else:
            out_flat[i] = v / 12.92
    return out

@njit(cache=True, fastmath=True, error_model="numpy")
def _xyz_to_lab_f(t: ArrayFloat) -> ArrayFloat:
    """
    Non-linear transfer function f(t) for CIELAB.

    Cube root above LAB_EPSILON, linear segment below it.
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()

    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0/3.0)
        else:
            out_flat[i] = LAB_SLOPE * v + LAB_OFFSET
    return out

@njit(cache=True, fastmath=True, error_model="numpy")
def _lab_to_xyz_f_inv(t: ArrayFloat) -> ArrayFloat:
    """Inverse of ``_xyz_to_lab_f``; switches branch at f(LAB_EPSILON)."""
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()

    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_F_LIMIT:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (v - LAB_OFFSET) / LAB_SLOPE
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False, error_model="numpy")
def _fast_gamma_srgb_strict(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF — strict IEEE 754 variant."""
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = linear_flat[i]
        if v > 0.0031308:
            out_flat[i] = 1.055 * (v ** (1.0/2.4)) - 0.055
        else:
            out_flat[i] = 12.92 * v
    return out

@njit(cache=True, fastmath=False, error_model="numpy")
def _fast_inverse_gamma_srgb_strict(srgb: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF — strict IEEE 754 variant."""
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()
    for i in range(srgb.size):
        v = srgb_flat[i]
        if v > 0.04045:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
        else:
            out_flat[i] = v / 12.92
    return out

@njit(cache=True, fastmath=False, error_model="numpy")
def _xyz_to_lab_f_strict(t: ArrayFloat) -> ArrayFloat:
    """Lab f(t) — strict IEEE 754 variant."""
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0/3.0)
        else:
            out_flat[i] = LAB_SLOPE * v + LAB_OFFSET
    return out

@njit(cache=True, fastmath=False, error_model="numpy")
def _lab_to_xyz_f_inv_strict(t: ArrayFloat) -> ArrayFloat:
    """Lab f_inv(t) — strict IEEE 754 variant."""
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_F_LIMIT:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (v - LAB_OFFSET) / LAB_SLOPE
    return out


# --- Kernel dispatchers ---

def _gamma_srgb(linear: ArrayFloat) -> ArrayFloat:
    """Dispatch sRGB OETF to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_gamma_srgb_strict(linear)
    return _fast_gamma_srgb(linear)

def _inverse_gamma_srgb(srgb: ArrayFloat) -> ArrayFloat:
    """Dispatch sRGB EOTF to fast or strict kernel."""
    if _STRICT_IEEE:
        return _fast_inverse_gamma_srgb_strict(srgb)
    return _fast_inverse_gamma_srgb(srgb)

def _lab_f(t: ArrayFloat) -> ArrayFloat:
    """Dispatch Lab f(t) to fast or strict kernel."""
    if _STRICT_IEEE:
        return _xyz_to_lab_f_strict(t)
    return _xyz_to_lab_f(t)

def _lab_f_inv(t: ArrayFloat) -> ArrayFloat:
    """Dispatch Lab f_inv(t) to fast or strict kernel."""
    if _STRICT_IEEE:
        return _lab_to_xyz_f_inv_strict(t)
    return _lab_to_xyz_f_inv(t)

@njit(cache=True, fastmath=False, error_model="numpy")
def _lab_to_msh_kernel(lab: ArrayFloat) -> ArrayFloat:
    """
    Low-level kernel for Lab -> MSH conversion.
    Input shape (N, 3), Output shape (N, 3).
    """
    n = lab.shape[0]
    msh = np.empty_like(lab)

    for i in range(n):
        L, a, b = lab[i, 0], lab[i, 1], lab[i, 2]
        M = np.sqrt(L * L + a * a + b * b)
        msh[i, 0] = M
        msh[i, 1] = np.arccos(L / M)
        msh[i, 2] = np.arctan2(b, a)
    return msh

@njit(cache=True, fastmath=False, error_model="numpy")
def _msh_to_lab_kernel(msh: ArrayFloat) -> ArrayFloat:
    """
    Low-level kernel for MSH -> Lab conversion.
    Input shape (N, 3), Output shape (N, 3).
    """
    n = msh.shape[0]
    lab = np.empty_like(msh)

    for i in range(n):
        M, S, H = msh[i, 0], msh[i, 1], msh[i, 2]
        lab[i, 0] = M * np.cos(S)
        lab[i, 1] = M * np.sin(S) * np.cos(H)
        lab[i, 2] = M * np.sin(S) * np.sin(H)
    return lab


# =============================================================================
# 3. COLOR SPACE ENGINE
# =============================================================================

class ColorSpaceEngine:
    """Static utility class for the sRGB / linear / XYZ / LAB / MSH chain.

    Architecture Note:
        Every transform has a public ``@handle_shapes`` decorated entry point
        and an internal ``_raw`` fast-path that assumes validated (N, 3)
        float64 input.  Multi-stage pipelines (e.g. ``msh_to_srgb``) call the
        ``_raw`` variants so shapes are checked once.

        No stage clips.  Out-of-gamut values flow through unchanged and are
        dealt with by ``SRGBA.validate`` / ``SRGBA.clamp`` at the end.
    """

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, 3) float64)
    # =====================================================================

    @staticmethod
    def _srgb_to_linear_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return _inverse_gamma_srgb(rgb_array)

    @staticmethod
    def _linear_to_srgb_raw(linear_array: ArrayFloat) -> ArrayFloat:
        return _gamma_srgb(linear_array)

    @staticmethod
    def _linear_rgb_to_xyz_raw(linear_array: ArrayFloat) -> ArrayFloat:
        return np.dot(linear_array, M_LINEAR_RGB_TO_XYZ_T)

    @staticmethod
    def _xyz_to_linear_rgb_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        return np.dot(xyz_array, M_XYZ_TO_LINEAR_RGB_T)

    @staticmethod
    def _xyz_to_lab_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        xyz_norm = np.ascontiguousarray(xyz_array / illuminant)
        f_xyz = _lab_f(xyz_norm)

        out = np.empty_like(xyz_array)
        out[..., 0] = 116.0 * f_xyz[..., 1] - 16.0
        out[..., 1] = 500.0 * (f_xyz[..., 0] - f_xyz[..., 1])
        out[..., 2] = 200.0 * (f_xyz[..., 1] - f_xyz[..., 2])
        return out

    @staticmethod
    def _lab_to_xyz_raw(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        L, a, b = lab_array[..., 0], lab_array[..., 1], lab_array[..., 2]

        fy = (L + 16.0) / 116.0
        fx = a / 500.0 + fy
        fz = fy - b / 200.0

        xyz = np.empty_like(lab_array)
        xyz[..., 0] = _lab_f_inv(np.ascontiguousarray(fx))
        xyz[..., 1] = _lab_f_inv(np.ascontiguousarray(fy))
        xyz[..., 2] = _lab_f_inv(np.ascontiguousarray(fz))

        xyz *= illuminant
        return xyz

    @staticmethod
    def _lab_to_msh_raw(lab_array: ArrayFloat) -> ArrayFloat:
        return _lab_to_msh_kernel(lab_array)

    @staticmethod
    def _msh_to_lab_raw(msh_array: ArrayFloat) -> ArrayFloat:
        return _msh_to_lab_kernel(msh_array)

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def srgb_to_linear(rgb_array: ArrayFloat) -> ArrayFloat:
        """
        Converts gamma-encoded sRGB to physically linear RGB.

        Args:
            rgb_array: sRGB data, shape (N, 3) or (3,).  Not clipped.

        Returns:
            Linear RGB intensities.
        """
        return ColorSpaceEngine._srgb_to_linear_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def linear_to_srgb(linear_array: ArrayFloat) -> ArrayFloat:
        """
        Converts linear RGB to gamma-encoded sRGB.

        Args:
            linear_array: Linear RGB data, shape (N, 3) or (3,).  Not clipped.

        Returns:
            sRGB coordinates.
        """
        return ColorSpaceEngine._linear_to_srgb_raw(linear_array)

    @staticmethod
    @handle_shapes
    def linear_rgb_to_xyz(linear_array: ArrayFloat) -> ArrayFloat:
        """Converts linear RGB to CIE XYZ (D65)."""
        return ColorSpaceEngine._linear_rgb_to_xyz_raw(linear_array)

    @staticmethod
    @handle_shapes
    def xyz_to_linear_rgb(xyz_array: ArrayFloat) -> ArrayFloat:
        """Converts CIE XYZ (D65) to linear RGB."""
        return ColorSpaceEngine._xyz_to_linear_rgb_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def xyz_to_lab(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to CIELAB (L*a*b*).

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
            illuminant: Reference white point (default D65).

        Returns:
            Lab coordinates.
        """
        return ColorSpaceEngine._xyz_to_lab_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_xyz(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts CIELAB to XYZ.

        Args:
            lab_array: Input Lab data, shape (N, 3) or (3,).
            illuminant: Reference white point (default D65).

        Returns:
            XYZ coordinates.
        """
        return ColorSpaceEngine._lab_to_xyz_raw(lab_array, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_msh(lab_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIELAB to Magnitude-Saturation-Hue.

        M = sqrt(L² + a² + b²), S = acos(L / M), H = atan2(b, a).
        Black (M = 0) yields NaN saturation.

        Args:
            lab_array: Input Lab data, shape (N, 3) or (3,).

        Returns:
            MSH coordinates (angles in radians).
        """
        return ColorSpaceEngine._lab_to_msh_raw(lab_array)

    @staticmethod
    @handle_shapes
    def msh_to_lab(msh_array: ArrayFloat) -> ArrayFloat:
        """
        Converts Magnitude-Saturation-Hue to CIELAB.

        Args:
            msh_array: Input MSH data, shape (N, 3) or (3,).

        Returns:
            Lab coordinates.
        """
        return ColorSpaceEngine._msh_to_lab_raw(msh_array)

    # --- Convenience pipelines ---

    @staticmethod
    @handle_shapes
    def lab_to_srgb(lab_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion CIELAB -> sRGB (unclipped)."""
        xyz = ColorSpaceEngine._lab_to_xyz_raw(lab_array)
        linear = ColorSpaceEngine._xyz_to_linear_rgb_raw(xyz)
        return ColorSpaceEngine._linear_to_srgb_raw(linear)

    @staticmethod
    @handle_shapes
    def srgb_to_lab(rgb_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion sRGB -> CIELAB."""
        linear = ColorSpaceEngine._srgb_to_linear_raw(rgb_array)
        xyz = ColorSpaceEngine._linear_rgb_to_xyz_raw(linear)
        return ColorSpaceEngine._xyz_to_lab_raw(xyz)

    @staticmethod
    @handle_shapes
    def msh_to_srgb(msh_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion MSH -> sRGB (unclipped)."""
        lab = ColorSpaceEngine._msh_to_lab_raw(msh_array)
        xyz = ColorSpaceEngine._lab_to_xyz_raw(lab)
        linear = ColorSpaceEngine._xyz_to_linear_rgb_raw(xyz)
        return ColorSpaceEngine._linear_to_srgb_raw(linear)


# =============================================================================
# 4. SCALAR TRANSFER FUNCTIONS
# =============================================================================

def linear_to_s(v: float) -> float:
    """Converts one linear RGB component to an sRGB component."""
    return float(_gamma_srgb(np.array([v], dtype=np.float64))[0])

def s_to_linear(v: float) -> float:
    """Converts one sRGB component to a linear RGB component."""
    return float(_inverse_gamma_srgb(np.array([v], dtype=np.float64))[0])


# =============================================================================
# 5. VALUE TYPES
# =============================================================================

def _floats(arr: ArrayFloat) -> Tuple[float, float, float]:
    return float(arr[0]), float(arr[1]), float(arr[2])


@runtime_checkable
class ColorLike(Protocol):
    """
    External color capability.

    rgba() → (r, g, b, a), each an int in [0, 65535], with r, g, b already
    multiplied by alpha.
    """
    def rgba(self) -> Tuple[int, int, int, int]: ...


@dataclass(slots=True, frozen=True)
class NRGBA:
    """8-bit, non-premultiplied color (the usual "#RRGGBB" + opacity form)."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if not 0 <= v <= 255:
                raise ValueError(f"NRGBA.{name} must be in [0, 255], got {v}")

    def rgba(self) -> Tuple[int, int, int, int]:
        """Widens to 16 bits and premultiplies by alpha."""
        a16 = self.a * 0x101
        return (
            self.r * 0x101 * self.a // 0xFF,
            self.g * 0x101 * self.a // 0xFF,
            self.b * 0x101 * self.a // 0xFF,
            a16,
        )


class LinearRGB(NamedTuple):
    """Physically linear RGB intensities (not clamped)."""
    r: float
    g: float
    b: float

    def xyz(self) -> CIEXYZ:
        return CIEXYZ(*_floats(ColorSpaceEngine.linear_rgb_to_xyz(self)))

    def srgb(self, alpha: float) -> SRGBA:
        """Gamma-encodes each channel and attaches ``alpha``."""
        r, g, b = _floats(ColorSpaceEngine.linear_to_srgb(self))
        return SRGBA(r, g, b, float(alpha))


class CIEXYZ(NamedTuple):
    """CIE 1931 tristimulus values relative to D65."""
    x: float
    y: float
    z: float

    def linear_rgb(self) -> LinearRGB:
        return LinearRGB(*_floats(ColorSpaceEngine.xyz_to_linear_rgb(self)))

    def lab(self) -> CIELAB:
        return CIELAB(*_floats(ColorSpaceEngine.xyz_to_lab(self)))


class CIELAB(NamedTuple):
    """CIE 1976 L*a*b*.  ``l`` is lightness in [0, 100]."""
    l: float
    a: float
    b: float

    def xyz(self) -> CIEXYZ:
        return CIEXYZ(*_floats(ColorSpaceEngine.lab_to_xyz(self)))

    def msh(self) -> MSH:
        return MSH(*_floats(ColorSpaceEngine.lab_to_msh(self)))

    def srgb(self, alpha: float) -> SRGBA:
        """LAB -> XYZ -> linear RGB -> sRGB, with opacity ``alpha``."""
        return self.xyz().linear_rgb().srgb(alpha)


class MSH(NamedTuple):
    """Magnitude-Saturation-Hue, the polar form of CIELAB (angles in radians)."""
    m: float
    s: float
    h: float

    def lab(self) -> CIELAB:
        return CIELAB(*_floats(ColorSpaceEngine.msh_to_lab(self)))


@dataclass(slots=True, frozen=True)
class SRGBA:
    """
    Gamma-encoded sRGB color with a separate, non-premultiplied alpha.

    This is the output color of every color map.  ``rgba()`` applies the
    alpha premultiplication only at this boundary.
    """
    r: float
    g: float
    b: float
    a: float = 1.0

    def linear_rgb(self) -> LinearRGB:
        return LinearRGB(*_floats(ColorSpaceEngine.srgb_to_linear((self.r, self.g, self.b))))

    def lab(self) -> CIELAB:
        return self.linear_rgb().xyz().lab()

    def rgba(self) -> Tuple[int, int, int, int]:
        """16-bit premultiplied channels, truncated toward zero."""
        return (
            int(self.r * self.a * _U16_MAX),
            int(self.g * self.a * _U16_MAX),
            int(self.b * self.a * _U16_MAX),
            int(self.a * _U16_MAX),
        )

    def validate(self) -> SRGBA:
        """
        Returns ``self`` if every channel lies in [0, 1].

        Raises:
            ColorRangeError: carrying this color otherwise.
        """
        if not all(0.0 <= v <= 1.0 for v in (self.r, self.g, self.b, self.a)):
            raise ColorRangeError(self)
        return self

    def clamp(self) -> SRGBA:
        """Returns a copy with all four channels forced into [0, 1]."""
        r, g, b, a = np.clip(np.array([self.r, self.g, self.b, self.a]), 0.0, 1.0)
        return SRGBA(float(r), float(g), float(b), float(a))


# =============================================================================
# 6. EXTERNAL COLOR ADAPTERS
# =============================================================================

def color_to_srgba(color: ColorLike) -> SRGBA:
    """
    Un-premultiplies an external 16-bit color into an ``SRGBA``.

    A fully transparent color (alpha = 0) cannot be un-premultiplied; the
    channels come back as NaN/inf and a ``TransparentColorWarning`` is
    issued instead of guessing a value.
    """
    r, g, b, a = color.rgba()
    alpha = np.float64(a) / _U16_MAX
    if alpha == 0.0:
        warnings.warn(
            f"color_to_srgba({color!r}): alpha is 0, color channels are undefined.",
            TransparentColorWarning,
            stacklevel=2,
        )
    with np.errstate(divide="ignore", invalid="ignore"):
        return SRGBA(
            float(np.float64(r) / alpha / _U16_MAX),
            float(np.float64(g) / alpha / _U16_MAX),
            float(np.float64(b) / alpha / _U16_MAX),
            float(alpha),
        )

def color_to_msh(color: ColorLike) -> MSH:
    """Converts an external color to MSH (via sRGB, linear RGB, XYZ, LAB)."""
    return color_to_srgba(color).lab().msh()


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Pigment Color Engine Validation ---")

    # 1. Round-Trip Invariant Test (XYZ -> Lab -> XYZ)
    print("1. Testing Round-Trip Stability (XYZ->Lab)...")
    xyz_in = np.random.rand(1000, 3)
    lab = ColorSpaceEngine.xyz_to_lab(xyz_in)
    xyz_out = ColorSpaceEngine.lab_to_xyz(lab)
    max_err = np.max(np.abs(xyz_in - xyz_out))
    print(f"   Max Error (XYZ->Lab->XYZ): {max_err:.2e} "
          f"{'[PASS]' if max_err < 1e-6 else '[FAIL]'}")

    # 2. Shape Safety Test
    print("2. Testing Shape Safety...")
    try:
        ColorSpaceEngine.srgb_to_linear(np.zeros((10, 5)))
    except ValueError as e:
        print(f"   Caught expected error: {e}")

    # 3. MSH Round-Trip
    print("3. Testing MSH Round-Trip...")
    msh = ColorSpaceEngine.lab_to_msh(lab)
    lab_back = ColorSpaceEngine.msh_to_lab(msh)
    max_err_msh = np.max(np.abs(lab - lab_back))
    print(f"   Max Error (Lab->MSH->Lab): {max_err_msh:.2e} "
          f"{'[PASS]' if max_err_msh < 1e-10 else '[FAIL]'}")

    # 4. Gamma curve reproducibility
    print("4. Testing sRGB OETF...")
    g = linear_to_s(0.015299702)
    print(f"   linear_to_s(0.015299702) = {g!r} "
          f"{'[PASS]' if abs(g - 0.1298716701086684) < 1e-16 else '[FAIL]'}")

    # 5. External color adapter
    print("5. Testing NRGBA -> MSH...")
    print(f"   Pure blue: {color_to_msh(NRGBA(0, 0, 255))}")
