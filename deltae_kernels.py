# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Compiled Math Kernels
=====================
Scalar Numba kernels shared by the conversion engine and the Delta-E
engine. Kernels are pure arithmetic: they never validate and never raise.
Range checking happens at value construction, one layer up.

All kernels are compiled with ``fastmath=False``. Strict IEEE 754 semantics
keep NaN propagation intact and make the symmetry and identity properties
of the difference formulas hold bit-for-bit rather than approximately.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE Publication 116-1995 (CIE 1994 colour difference)
    - Sharma, G., Wu, W., & Dalal, E. N. (2005). "The CIEDE2000 color-difference formula".
    - Clarke, McDonald, Rigg (1984). "CMC l:c colour difference formula".
"""

import math
from typing import Final, Tuple

import numpy as np
from numba import njit, float64, prange

__all__ = [
    # --- Constants ---
    "LAB_EPSILON",
    "LAB_KAPPA",
    "LAB_CBRT_EPSILON",
    "C25_7",

    # --- Method codes for the batch kernel ---
    "CODE_DE1976",
    "CODE_DE1994",
    "CODE_DE2000",
    "CODE_DECMC",

    # --- Kernels ---
    "lab_f",
    "lab_f_inv",
    "hue_degrees",
    "xyz_to_lab_kernel",
    "lab_to_xyz_kernel",
    "lab_to_lch_kernel",
    "lch_to_lab_kernel",
    "srgb_encode",
    "srgb_decode",
    "gamma_encode",
    "gamma_decode",
    "lstar_encode",
    "lstar_decode",
    "delta_e_1976",
    "delta_e_1994",
    "delta_e_2000",
    "delta_e_cmc",
    "batch_delta_e",
]

# --- Exact Rational Math Constants ---
# Defined by CIE 1976 for the Lab transformation.
# delta = 6/29 is the threshold where the function switches from cubic to linear.
LAB_EPSILON: Final[float] = 216.0 / 24389.0        # ~0.008856
LAB_KAPPA: Final[float] = 24389.0 / 27.0           # ~903.296
LAB_CBRT_EPSILON: Final[float] = 6.0 / 29.0        # epsilon ** (1/3)

C25_7: Final[float] = 25.0**7

CODE_DE1976: Final[int] = 0
CODE_DE1994: Final[int] = 1
CODE_DE2000: Final[int] = 2
CODE_DECMC: Final[int] = 3


# =============================================================================
# 1. LAB TRANSFER FUNCTIONS
# =============================================================================

@njit(float64(float64), cache=True, fastmath=False)
def lab_f(t: float) -> float:
    """
    Non-linear transfer function f(t) for CIELAB.

    The cube root branch is replaced by a linear slope below epsilon to
    avoid the infinite derivative at zero.
    """
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0


@njit(float64(float64), cache=True, fastmath=False)
def lab_f_inv(t: float) -> float:
    """
    Inverse of ``lab_f``.

    Uses the multiplication form (116*t - 16)/kappa instead of
    (t - 16/116)/(kappa/116) to keep division error small near the threshold.
    """
    if t > LAB_CBRT_EPSILON:
        return t * t * t
    return (116.0 * t - 16.0) / LAB_KAPPA


@njit(float64(float64, float64), cache=True, fastmath=False)
def hue_degrees(a: float, b: float) -> float:
    """Hue angle of (a, b) in degrees, normalised into [0, 360)."""
    # atan2(-0.0, -0.0) is -pi; neutrals get hue 0 regardless of zero signs
    if a == 0.0 and b == 0.0:
        return 0.0
    h = math.degrees(math.atan2(b, a))
    if h < 0.0:
        h += 360.0
    # -1e-20 + 360.0 rounds to exactly 360.0
    if h >= 360.0:
        h -= 360.0
    # Folds -0.0 into +0.0
    return h + 0.0


@njit(cache=True, fastmath=False)
def xyz_to_lab_kernel(x: float, y: float, z: float,
                      xn: float, yn: float, zn: float) -> Tuple[float, float, float]:
    """XYZ -> Lab relative to the white point (xn, yn, zn)."""
    fx = lab_f(x / xn)
    fy = lab_f(y / yn)
    fz = lab_f(z / zn)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


@njit(cache=True, fastmath=False)
def lab_to_xyz_kernel(L: float, a: float, b: float,
                      xn: float, yn: float, zn: float) -> Tuple[float, float, float]:
    """
    Lab -> XYZ relative to the white point (xn, yn, zn).

    The Y channel branches on L directly (L > kappa * epsilon == 8) which is
    algebraically the same threshold as fy > 6/29 but avoids one division.
    """
    fy = (L + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0

    xr = lab_f_inv(fx)
    if L > LAB_KAPPA * LAB_EPSILON:
        yr = fy * fy * fy
    else:
        yr = L / LAB_KAPPA
    zr = lab_f_inv(fz)
    return xr * xn, yr * yn, zr * zn


@njit(cache=True, fastmath=False)
def lab_to_lch_kernel(L: float, a: float, b: float) -> Tuple[float, float, float]:
    return L, math.hypot(a, b), hue_degrees(a, b)


@njit(cache=True, fastmath=False)
def lch_to_lab_kernel(L: float, C: float, h_deg: float) -> Tuple[float, float, float]:
    h_rad = math.radians(h_deg)
    return L, C * math.cos(h_rad), C * math.sin(h_rad)


# =============================================================================
# 2. COMPANDING CURVES
# =============================================================================
# ``decode`` maps stored (companded) values to linear light, ``encode`` is
# the inverse.  Inputs are nominal values on the 0..1 scale.

@njit(float64(float64), cache=True, fastmath=False)
def srgb_decode(v: float) -> float:
    """sRGB EOTF (IEC 61966-2-1)."""
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


@njit(float64(float64), cache=True, fastmath=False)
def srgb_encode(v: float) -> float:
    """sRGB OETF (IEC 61966-2-1)."""
    if v <= 0.0031308:
        return 12.92 * v
    return 1.055 * (v ** (1.0 / 2.4)) - 0.055


@njit(float64(float64, float64), cache=True, fastmath=False)
def gamma_decode(v: float, gamma: float) -> float:
    # Sign is carried through so the curve stays odd-symmetric.
    if v < 0.0:
        return -((-v) ** gamma)
    return v ** gamma


@njit(float64(float64, float64), cache=True, fastmath=False)
def gamma_encode(v: float, gamma: float) -> float:
    if v < 0.0:
        return -((-v) ** (1.0 / gamma))
    return v ** (1.0 / gamma)


@njit(float64(float64), cache=True, fastmath=False)
def lstar_decode(v: float) -> float:
    """L* companding (ECI RGB v2), stored value -> linear."""
    if v <= 0.08:
        return 100.0 * v / LAB_KAPPA
    t = (v + 0.16) / 1.16
    return t * t * t


@njit(float64(float64), cache=True, fastmath=False)
def lstar_encode(v: float) -> float:
    """L* companding (ECI RGB v2), linear -> stored value."""
    if v <= LAB_EPSILON:
        return v * LAB_KAPPA / 100.0
    return 1.16 * (v ** (1.0 / 3.0)) - 0.16


# =============================================================================
# 3. COLOR DIFFERENCE FORMULAS
# =============================================================================

@njit(float64(float64, float64, float64, float64, float64, float64), cache=True, fastmath=False)
def delta_e_1976(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float) -> float:
    """CIE 1976: Euclidean distance in Lab."""
    dL = L1 - L2
    da = a1 - a2
    db = b1 - b2
    return math.sqrt(dL * dL + da * da + db * db)


@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64, float64),
      cache=True, fastmath=False)
def delta_e_1994(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float,
                 k_L: float, K1: float, K2: float) -> float:
    """
    CIE 1994 color difference (CIE 116-1995).

        dE = sqrt((dL / (k_L S_L))^2 + (dC / S_C)^2 + (dH / S_H)^2)
        S_L = 1,  S_C = 1 + K1 C*,  S_H = 1 + K2 C*

    k_L, K1, K2 come from the caller: (1, 0.045, 0.015) for graphic arts,
    (2, 0.048, 0.014) for textiles; k_C = k_H = 1 in both. C* is the
    geometric mean chroma sqrt(C1 C2), the CIE 116 weighting for pairs
    without a designated standard, so the result is symmetric.
    """
    chroma1 = math.hypot(a1, b1)
    chroma2 = math.hypot(a2, b2)
    d_light = L1 - L2
    d_chroma = chroma1 - chroma2
    d_a = a1 - a2
    d_b = b1 - b2
    # dH^2 = da^2 + db^2 - dC^2, clamped against rounding below zero
    d_hue2 = d_a * d_a + d_b * d_b - d_chroma * d_chroma
    if d_hue2 < 0.0:
        d_hue2 = 0.0

    chroma_mean = math.sqrt(chroma1 * chroma2)
    s_chroma = 1.0 + K1 * chroma_mean
    s_hue = 1.0 + K2 * chroma_mean

    w_light = d_light / k_L
    w_chroma = d_chroma / s_chroma
    return math.sqrt(w_light * w_light + w_chroma * w_chroma + d_hue2 / (s_hue * s_hue))


@njit(float64(float64, float64, float64, float64, float64, float64), cache=True, fastmath=False)
def delta_e_2000(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float) -> float:
    """CIEDE2000 following the worked steps of Sharma, Wu & Dalal (2005)."""
    C1 = math.hypot(a1, b1)
    C2 = math.hypot(a2, b2)
    C_bar = (C1 + C2) * 0.5
    C_bar_7 = C_bar**7
    G = 0.5 * (1.0 - math.sqrt(C_bar_7 / (C_bar_7 + C25_7)))
    a1_p = (1.0 + G) * a1
    a2_p = (1.0 + G) * a2

    C1_p = math.hypot(a1_p, b1)
    C2_p = math.hypot(a2_p, b2)
    h1_p = hue_degrees(a1_p, b1)
    h2_p = hue_degrees(a2_p, b2)

    dL_p = L2 - L1
    dC_p = C2_p - C1_p

    chroma_product = C1_p * C2_p
    dh_p = 0.0
    if chroma_product != 0.0:
        diff = h2_p - h1_p
        if abs(diff) <= 180.0:
            dh_p = diff
        elif diff > 180.0:
            dh_p = diff - 360.0
        else:
            dh_p = diff + 360.0
    dH_p = 2.0 * math.sqrt(chroma_product) * math.sin(math.radians(dh_p) * 0.5)

    L_bar_p = (L1 + L2) * 0.5
    C_bar_p = (C1_p + C2_p) * 0.5
    h_bar_p = h1_p + h2_p
    if chroma_product != 0.0:
        if abs(h1_p - h2_p) <= 180.0:
            h_bar_p *= 0.5
        elif h_bar_p < 360.0:
            h_bar_p = (h_bar_p + 360.0) * 0.5
        else:
            h_bar_p = (h_bar_p - 360.0) * 0.5

    T = (1.0
         - 0.17 * math.cos(math.radians(h_bar_p - 30.0))
         + 0.24 * math.cos(math.radians(2.0 * h_bar_p))
         + 0.32 * math.cos(math.radians(3.0 * h_bar_p + 6.0))
         - 0.20 * math.cos(math.radians(4.0 * h_bar_p - 63.0)))

    d_theta = 30.0 * math.exp(-(((h_bar_p - 275.0) / 25.0) ** 2))
    C_bar_p_7 = C_bar_p**7
    RC = 2.0 * math.sqrt(C_bar_p_7 / (C_bar_p_7 + C25_7))
    RT = -math.sin(math.radians(2.0 * d_theta)) * RC

    L_term = (L_bar_p - 50.0) ** 2
    SL = 1.0 + (0.015 * L_term) / math.sqrt(20.0 + L_term)
    SC = 1.0 + 0.045 * C_bar_p
    SH = 1.0 + 0.015 * C_bar_p * T

    tL = dL_p / SL
    tC = dC_p / SC
    tH = dH_p / SH
    return math.sqrt(tL * tL + tC * tC + tH * tH + RT * tC * tH)


@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64),
      cache=True, fastmath=False)
def delta_e_cmc(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float,
                pl: float, pc: float) -> float:
    """
    CMC l:c (1984) color difference, BS 6923 / ISO 105-J03 constants.

        S_L = 0.511                          if L1 < 16
            = 0.040975 L1 / (1 + 0.01765 L1) otherwise
        S_C = 0.0638 C1 / (1 + 0.0131 C1) + 0.638
        T   = 0.56 + |0.2 cos(h1 + 168)|     if 164 <= h1 <= 345
            = 0.36 + |0.4 cos(h1 + 35)|      otherwise
        F   = sqrt(C1^4 / (C1^4 + 1900))
        S_H = S_C (F T + 1 - F)

    Every weight is taken from the first (reference) color, so swapping
    the arguments changes the result.  ``pl`` / ``pc`` are the l:c ratio,
    (2, 1) for acceptability and (1, 1) for perceptibility.
    """
    chroma_ref = math.hypot(a1, b1)
    chroma_smp = math.hypot(a2, b2)
    d_light = L1 - L2
    d_chroma = chroma_ref - chroma_smp
    d_a = a1 - a2
    d_b = b1 - b2
    d_hue2 = d_a * d_a + d_b * d_b - d_chroma * d_chroma
    if d_hue2 < 0.0:
        d_hue2 = 0.0

    hue_ref = hue_degrees(a1, b1)

    if L1 < 16.0:
        s_light = 0.511
    else:
        s_light = (0.040975 * L1) / (1.0 + 0.01765 * L1)

    s_chroma = (0.0638 * chroma_ref) / (1.0 + 0.0131 * chroma_ref) + 0.638

    if 164.0 <= hue_ref <= 345.0:
        hue_t = 0.56 + abs(0.2 * math.cos(math.radians(hue_ref + 168.0)))
    else:
        hue_t = 0.36 + abs(0.4 * math.cos(math.radians(hue_ref + 35.0)))

    chroma4 = chroma_ref ** 4
    hue_f = math.sqrt(chroma4 / (chroma4 + 1900.0))
    s_hue = s_chroma * (hue_f * hue_t + 1.0 - hue_f)

    w_light = d_light / (pl * s_light)
    w_chroma = d_chroma / (pc * s_chroma)
    return math.sqrt(w_light * w_light + w_chroma * w_chroma + d_hue2 / (s_hue * s_hue))


@njit(cache=True, fastmath=False, parallel=True)
def batch_delta_e(lab1: np.ndarray, lab2: np.ndarray, code: int,
                  p0: float, p1: float, p2: float) -> np.ndarray:
    """
    Row-wise difference of two (N, 3) Lab arrays.

    ``code`` selects the formula; ``p0..p2`` carry its parameters
    (k_L, K1, K2 for CIE 1994; l, c for CMC).
    """
    n = lab1.shape[0]
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = lab1[i, 0], lab1[i, 1], lab1[i, 2]
        L2, a2, b2 = lab2[i, 0], lab2[i, 1], lab2[i, 2]
        if code == CODE_DE1976:
            res[i] = delta_e_1976(L1, a1, b1, L2, a2, b2)
        elif code == CODE_DE1994:
            res[i] = delta_e_1994(L1, a1, b1, L2, a2, b2, p0, p1, p2)
        elif code == CODE_DE2000:
            res[i] = delta_e_2000(L1, a1, b1, L2, a2, b2)
        else:
            res[i] = delta_e_cmc(L1, a1, b1, L2, a2, b2, p0, p1)
    return res
