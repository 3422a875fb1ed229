# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

RGB Working Spaces
==================
Reference RGB systems: each fixes an RGB -> XYZ matrix, its inverse, the
reference illuminant the matrices are relative to, and a companding curve.

The matrix tables are pure data (row-major, see ``deltae_matrix``) taken
from Bruce Lindbloom's tabulation:
    http://www.brucelindbloom.com/Eqn_RGB_XYZ_Matrix.html

Companding is a per-system parameter.  sRGB carries the IEC 61966-2-1
curve; the other built-in systems are treated as linear.  ``Companding``
also provides a pure power law and the L* curve for user-defined spaces
built with ``RgbWorkingSpace``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal

from deltae_errors import InvalidInputError
from deltae_illuminant import C, D50, D65, E, Illuminant
from deltae_kernels import (
    gamma_decode,
    gamma_encode,
    lstar_decode,
    lstar_encode,
    srgb_decode,
    srgb_encode,
)
from deltae_matrix import Matrix3x3

__all__ = [
    "Companding",
    "RgbWorkingSpace",
    "RgbSystem",
    "DEFAULT_RGB_SYSTEM",
]

CompandingKind = Literal["linear", "srgb", "gamma", "lstar"]


@dataclass(frozen=True, slots=True)
class Companding:
    """Nonlinear encode/decode curve between linear light and stored RGB."""
    kind:  CompandingKind = "linear"
    gamma: float = 1.0

    def __post_init__(self) -> None:
        if self.kind not in ("linear", "srgb", "gamma", "lstar"):
            raise InvalidInputError(f"Unknown companding kind: '{self.kind}'")
        if self.kind == "gamma" and not self.gamma > 0.0:
            raise InvalidInputError(f"Gamma must be positive, got {self.gamma}")

    @classmethod
    def linear(cls) -> "Companding":
        return cls("linear")

    @classmethod
    def srgb(cls) -> "Companding":
        return cls("srgb")

    @classmethod
    def power(cls, gamma: float) -> "Companding":
        return cls("gamma", float(gamma))

    @classmethod
    def lstar(cls) -> "Companding":
        return cls("lstar")

    def decode(self, v: float) -> float:
        """Stored (companded) nominal value -> linear light."""
        if self.kind == "srgb":
            return srgb_decode(v)
        if self.kind == "gamma":
            return gamma_decode(v, self.gamma)
        if self.kind == "lstar":
            return lstar_decode(v)
        return v

    def encode(self, v: float) -> float:
        """Linear light -> stored (companded) nominal value."""
        if self.kind == "srgb":
            return srgb_encode(v)
        if self.kind == "gamma":
            return gamma_encode(v, self.gamma)
        if self.kind == "lstar":
            return lstar_encode(v)
        return v


@dataclass(frozen=True, slots=True)
class RgbWorkingSpace:
    name:       str
    rgb_to_xyz: Matrix3x3
    xyz_to_rgb: Matrix3x3
    illuminant: Illuminant
    companding: Companding = Companding()


_LINEAR: Final[Companding] = Companding.linear()


class RgbSystem(Enum):
    """Built-in reference RGB systems, typically associated with an ICC profile."""

    # Adobe Systems
    ADOBE_1998 = RgbWorkingSpace(
        "Adobe1998",
        Matrix3x3(0.5767309, 0.1855540, 0.1881852,
                  0.2973769, 0.6273491, 0.0752741,
                  0.0270343, 0.0706872, 0.9911085),
        Matrix3x3(2.0413690, -0.5649464, -0.3446944,
                  -0.9692660, 1.8760108, 0.0415560,
                  0.0134474, -0.1183897, 1.0154096),
        D65, _LINEAR)
    # Apple
    APPLE = RgbWorkingSpace(
        "Apple",
        Matrix3x3(0.4497288, 0.3162486, 0.1844926,
                  0.2446525, 0.6720283, 0.0833192,
                  0.0251848, 0.1411824, 0.9224628),
        Matrix3x3(2.9515373, -1.2894116, -0.4738445,
                  -1.0851093, 1.9908566, 0.0372026,
                  0.0854934, -0.2694964, 1.0912975),
        D65, _LINEAR)
    # Like DonRGB but with a modified red coordinate
    BEST = RgbWorkingSpace(
        "Best",
        Matrix3x3(0.6326696, 0.2045558, 0.1269946,
                  0.2284569, 0.7373523, 0.0341908,
                  0.0000000, 0.0095142, 0.8156958),
        Matrix3x3(1.7552599, -0.4836786, -0.2530000,
                  -0.5441336, 1.5068789, 0.0215528,
                  0.0063467, -0.0175761, 1.2256959),
        D50, _LINEAR)
    # A compromise between ColorMatch and Adobe
    BRUCE = RgbWorkingSpace(
        "Bruce",
        Matrix3x3(0.4674162, 0.2944512, 0.1886026,
                  0.2410115, 0.6835475, 0.0754410,
                  0.0219101, 0.0736128, 0.9933071),
        Matrix3x3(2.7454669, -1.1358136, -0.4350269,
                  -0.9692660, 1.8760108, 0.0415560,
                  0.0112723, -0.1139754, 1.0132541),
        D65, _LINEAR)
    # Commission internationale de l'eclairage
    CIE = RgbWorkingSpace(
        "CIE",
        Matrix3x3(0.4887180, 0.3106803, 0.2006017,
                  0.1762044, 0.8129847, 0.0108109,
                  0.0000000, 0.0102048, 0.9897952),
        Matrix3x3(2.3706743, -0.9000405, -0.4706338,
                  -0.5138850, 1.4253036, 0.0885814,
                  0.0052982, -0.0146949, 1.0093968),
        E, _LINEAR)
    # Slightly larger gamut than sRGB with D50
    COLOR_MATCH = RgbWorkingSpace(
        "ColorMatch",
        Matrix3x3(0.5093439, 0.3209071, 0.1339691,
                  0.2748840, 0.6581315, 0.0669845,
                  0.0242545, 0.1087821, 0.6921735),
        Matrix3x3(2.6422874, -1.2234270, -0.3930143,
                  -1.1119763, 2.0590183, 0.0159614,
                  0.0821699, -0.2807254, 1.4559877),
        D50, _LINEAR)
    # Wide-gamut working space with a D50 white point
    DON = RgbWorkingSpace(
        "Don",
        Matrix3x3(0.6457711, 0.1933511, 0.1250978,
                  0.2783496, 0.6879702, 0.0336802,
                  0.0037113, 0.0179861, 0.8035125),
        Matrix3x3(1.7603902, -0.4881198, -0.2536126,
                  -0.7126288, 1.6527432, 0.0416715,
                  0.0078207, -0.0347411, 1.2447743),
        D50, _LINEAR)
    # European Color Initiative
    ECI = RgbWorkingSpace(
        "ECI",
        Matrix3x3(0.6502043, 0.1780774, 0.1359384,
                  0.3202499, 0.6020711, 0.0776791,
                  0.0000000, 0.0678390, 0.7573710),
        Matrix3x3(1.7827618, -0.4969847, -0.2690101,
                  -0.9593623, 1.9477962, -0.0275807,
                  0.0859317, -0.1744674, 1.3228273),
        D50, _LINEAR)
    # Ekta Space PS 5
    EKTA_SPACE = RgbWorkingSpace(
        "EktaSpace",
        Matrix3x3(0.5938914, 0.2729801, 0.0973485,
                  0.2606286, 0.7349465, 0.0044249,
                  0.0000000, 0.0419969, 0.7832131),
        Matrix3x3(2.0043819, -0.7304844, -0.2450052,
                  -0.7110285, 1.6202126, 0.0792227,
                  0.0381263, -0.0868780, 1.2725438),
        D50, _LINEAR)
    # National Television System Committee
    NTSC = RgbWorkingSpace(
        "NTSC",
        Matrix3x3(0.6068909, 0.1735011, 0.2003480,
                  0.2989164, 0.5865990, 0.1144845,
                  0.0000000, 0.0660957, 1.1162243),
        Matrix3x3(1.9099961, -0.5324542, -0.2882091,
                  -0.9846663, 1.9991710, -0.0283082,
                  0.0583056, -0.1183781, 0.8975535),
        C, _LINEAR)
    # Phase Alternating Line / Sequential colour with memory
    PAL_SECAM = RgbWorkingSpace(
        "PalSecam",
        Matrix3x3(0.4306190, 0.3415419, 0.1783091,
                  0.2220379, 0.7066384, 0.0713236,
                  0.0201853, 0.1295504, 0.9390944),
        Matrix3x3(3.0628971, -1.3931791, -0.4757517,
                  -0.9692660, 1.8760108, 0.0415560,
                  0.0678775, -0.2288548, 1.0693490),
        D65, _LINEAR)
    # Kodak ROMM RGB
    PRO_PHOTO = RgbWorkingSpace(
        "ProPhoto",
        Matrix3x3(0.7976749, 0.1351917, 0.0313534,
                  0.2880402, 0.7118741, 0.0000857,
                  0.0000000, 0.0000000, 0.8252100),
        Matrix3x3(1.3459433, -0.2556075, -0.0511118,
                  -0.5445989, 1.5081673, 0.0205351,
                  0.0000000, 0.0000000, 1.2118128),
        D50, _LINEAR)
    # Society of Motion Picture and Television Engineers
    SMPTE = RgbWorkingSpace(
        "SMPTE",
        Matrix3x3(0.3935891, 0.3652497, 0.1916313,
                  0.2124132, 0.7010437, 0.0865432,
                  0.0187423, 0.1119313, 0.9581563),
        Matrix3x3(3.5053960, -1.7394894, -0.5439640,
                  -1.0690722, 1.9778245, 0.0351722,
                  0.0563200, -0.1970226, 1.0502026),
        D65, _LINEAR)
    # IEC 61966-2-1
    SRGB = RgbWorkingSpace(
        "sRGB",
        Matrix3x3(0.4124564, 0.3575761, 0.1804375,
                  0.2126729, 0.7151522, 0.0721750,
                  0.0193339, 0.1191920, 0.9503041),
        Matrix3x3(3.2404542, -1.5371385, -0.4985314,
                  -0.9692660, 1.8760108, 0.0415560,
                  0.0556434, -0.2040259, 1.0572252),
        D65, Companding.srgb())
    # Like AdobeRGB but with a larger gamut
    WIDE_GAMUT = RgbWorkingSpace(
        "WideGamut",
        Matrix3x3(0.7161046, 0.1009296, 0.1471858,
                  0.2581874, 0.7249378, 0.0168748,
                  0.0000000, 0.0517813, 0.7734287),
        Matrix3x3(1.4628067, -0.1840623, -0.2743606,
                  -0.5217933, 1.4472381, 0.0677227,
                  0.0349342, -0.0968930, 1.2884099),
        D50, _LINEAR)

    @property
    def space(self) -> RgbWorkingSpace:
        return self.value

    @property
    def rgb_to_xyz(self) -> Matrix3x3:
        return self.value.rgb_to_xyz

    @property
    def xyz_to_rgb(self) -> Matrix3x3:
        return self.value.xyz_to_rgb

    @property
    def illuminant(self) -> Illuminant:
        return self.value.illuminant

    @property
    def companding(self) -> Companding:
        return self.value.companding

    @classmethod
    def from_name(cls, name: str) -> "RgbSystem":
        """Case-insensitive lookup by member or display name (``"srgb"``, ``"pro_photo"``)."""
        key = name.strip().lower().replace("-", "_")
        for member in cls:
            if key in (member.name.lower(), member.value.name.lower()):
                return member
        raise InvalidInputError(f"Unknown RGB system: '{name}'")

    def __str__(self) -> str:
        return self.value.name


DEFAULT_RGB_SYSTEM: Final[RgbSystem] = RgbSystem.SRGB
