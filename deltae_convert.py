# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Conversion Engine
=================
Pairwise conversions among Lab, Lch, XYZ and RGB.  Every function is pure
and takes its reference frame explicitly (illuminant for Lab, RGB system
for device values); the defaults are D50 and sRGB.

Pipeline conventions:
    - Lab is always relative to a reference illuminant.  ``xyz_to_lab``
      first adapts the XYZ value (Bradford) when its own illuminant is a
      different white point.
    - RGB -> XYZ yields XYZ relative to the RGB system's own illuminant
      (D65 for sRGB).  XYZ -> RGB adapts to that illuminant first.
    - Conversions into RGB gamut-clamp, they never fail.
"""

from __future__ import annotations

from typing import Union

from deltae_adaptation import chromatic_adapt
from deltae_illuminant import DEFAULT_ILLUMINANT, Illuminant
from deltae_kernels import (
    lab_to_lch_kernel,
    lab_to_xyz_kernel,
    lch_to_lab_kernel,
    xyz_to_lab_kernel,
)
from deltae_matrix import Matrix3x1
from deltae_rgb import DEFAULT_RGB_SYSTEM, RgbSystem
from deltae_values import (
    ColorValue,
    LabValue,
    LchValue,
    RgbNominalValue,
    RgbValue,
    XyzValue,
)

__all__ = [
    "lab_to_lch",
    "lch_to_lab",
    "xyz_to_lab",
    "lab_to_xyz",
    "rgb_to_xyz",
    "xyz_to_rgb",
    "rgb_to_lab",
    "lab_to_rgb",
    "lch_to_xyz",
    "xyz_to_lch",
    "to_lab",
]


# --- Lab <-> Lch ---

def lab_to_lch(lab: LabValue) -> LchValue:
    """Polar form: c = sqrt(a^2 + b^2), h = atan2(b, a) in [0, 360)."""
    return LchValue._from_conversion(*lab_to_lch_kernel(lab.l, lab.a, lab.b))


def lch_to_lab(lch: LchValue) -> LabValue:
    """a = c·cos(h), b = c·sin(h)."""
    return LabValue._from_conversion(*lch_to_lab_kernel(lch.l, lch.c, lch.h))


# --- Lab <-> XYZ ---

def xyz_to_lab(xyz: XyzValue, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabValue:
    """
    CIE XYZ -> L*a*b* relative to ``illuminant``.

    No range check is applied: colors outside the nominal Lab box
    (wide-gamut primaries, XYZ brighter than white) keep their computed
    coordinates.
    """
    src = chromatic_adapt(xyz, illuminant)
    xn, yn, zn = illuminant.white_point
    return LabValue._from_conversion(*xyz_to_lab_kernel(src.x, src.y, src.z, xn, yn, zn))


def lab_to_xyz(lab: LabValue, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> XyzValue:
    """L*a*b* -> CIE XYZ tagged with ``illuminant``."""
    xn, yn, zn = illuminant.white_point
    x, y, z = lab_to_xyz_kernel(lab.l, lab.a, lab.b, xn, yn, zn)
    return XyzValue(x, y, z, illuminant)


# --- RGB <-> XYZ ---

def rgb_to_xyz(rgb: RgbValue, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM) -> XyzValue:
    """
    Nominalize, decode the system's companding, then apply its RGB -> XYZ
    matrix.  The result is tagged with the system's illuminant.
    """
    curve = rgb_system.companding
    nom = rgb.nominalize()
    linear = Matrix3x1(curve.decode(nom.r), curve.decode(nom.g), curve.decode(nom.b))
    out = rgb_system.rgb_to_xyz * linear
    return XyzValue(out.x, out.y, out.z, rgb_system.illuminant)  # type: ignore[union-attr]


def xyz_to_rgb(xyz: XyzValue, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM) -> RgbValue:
    """
    Adapt to the system's illuminant, apply its XYZ -> RGB matrix, clamp to
    the gamut, encode the companding and denominalize.
    """
    src = chromatic_adapt(xyz, rgb_system.illuminant)
    out = rgb_system.xyz_to_rgb * Matrix3x1(src.x, src.y, src.z)
    linear = RgbNominalValue(out.x, out.y, out.z)  # type: ignore[union-attr]
    curve = rgb_system.companding
    encoded = RgbNominalValue(curve.encode(linear.r), curve.encode(linear.g), curve.encode(linear.b))
    return encoded.denominalize()


# --- Composites ---

def rgb_to_lab(rgb: RgbValue, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM,
               illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabValue:
    return xyz_to_lab(rgb_to_xyz(rgb, rgb_system), illuminant)


def lab_to_rgb(lab: LabValue, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM,
               illuminant: Illuminant = DEFAULT_ILLUMINANT) -> RgbValue:
    return xyz_to_rgb(lab_to_xyz(lab, illuminant), rgb_system)


def lch_to_xyz(lch: LchValue, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> XyzValue:
    return lab_to_xyz(lch_to_lab(lch), illuminant)


def xyz_to_lch(xyz: XyzValue, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LchValue:
    return lab_to_lch(xyz_to_lab(xyz, illuminant))


def to_lab(value: Union[ColorValue, RgbNominalValue],
           illuminant: Illuminant = DEFAULT_ILLUMINANT,
           rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM) -> LabValue:
    """Bring any supported color value into Lab (the Delta-E working space)."""
    if isinstance(value, LabValue):
        return value
    if isinstance(value, LchValue):
        return lch_to_lab(value)
    if isinstance(value, XyzValue):
        return xyz_to_lab(value, illuminant)
    if isinstance(value, RgbValue):
        return rgb_to_lab(value, rgb_system, illuminant)
    if isinstance(value, RgbNominalValue):
        return rgb_to_lab(value.denominalize(), rgb_system, illuminant)
    raise TypeError(f"Cannot convert {type(value).__name__} to LabValue")
