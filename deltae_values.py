# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Value Types
=================
Immutable, validated color values.  Construction IS validation: every
``__post_init__`` checks the domain range and raises ``OutOfBoundsError``.

Conversion results skip that check.  A valid high-chroma Lch or a
wide-gamut RGB primary lands outside the nominal Lab box, and such a
value must still reach the difference formulas; only rounding overshoot
at a bound is snapped.

    | Type             | Fields  | Range                               |
    |------------------|---------|-------------------------------------|
    | LabValue         | l, a, b | 0..100, -128..128, -128..128        |
    | LchValue         | l, c, h | 0..100, 0..sqrt(2)*128, 0..360 deg  |
    | XyzValue         | x, y, z | finite, relative to ``illuminant``  |
    | RgbValue         | r, g, b | integers 0..255                     |
    | RgbNominalValue  | r, g, b | 0..1, clamped (non-finite rejected) |

XYZ is unbounded: values are scaled so the reference white has Y = 1, and
an XYZ triplet only has meaning together with the illuminant it carries.

Display:
    ``str(lab)``             -> ``[L:89.73, a:1.88, b:-6.96]``
    ``format(lab, ".2")``    -> ``[L:89.73, a:1.88, b:-6.96]`` with 2 decimals
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final, List, Optional, Sequence, Tuple, Union

from deltae_errors import BadFormatError, OutOfBoundsError
from deltae_illuminant import DEFAULT_ILLUMINANT, Illuminant
from deltae_rgb import DEFAULT_RGB_SYSTEM, RgbSystem

if TYPE_CHECKING:
    from deltae_adaptation import AdaptationMethod
    from deltae_metrics import DeltaE, DEMethod
    from deltae_tolerance import ToleranceLike

__all__ = [
    "LAB_L_RANGE",
    "LAB_AB_RANGE",
    "LCH_MAX_CHROMA",
    "LabValue",
    "LchValue",
    "XyzValue",
    "RgbValue",
    "RgbNominalValue",
    "ColorValue",
    "format_number",
    "parse_precision",
    "parse_triplet",
]

LAB_L_RANGE: Final[Tuple[float, float]] = (0.0, 100.0)
LAB_AB_RANGE: Final[Tuple[float, float]] = (-128.0, 128.0)
LCH_MAX_CHROMA: Final[float] = math.hypot(128.0, 128.0)   # ~181.0193
# Tabulated matrices carry 7 significant digits; white maps to L = 100.000004.
CONVERSION_SLACK: Final[float] = 1e-4

_PRECISION_RE = re.compile(r"^\.(\d+)f?$")


# ---------------------------------------------------------------------------
# Formatting / parsing helpers
# ---------------------------------------------------------------------------
def parse_precision(format_spec: str) -> Optional[int]:
    """``""`` -> None, ``".4"`` / ``".4f"`` -> 4."""
    if not format_spec:
        return None
    m = _PRECISION_RE.match(format_spec)
    if m is None:
        raise ValueError(f"Invalid format specifier '{format_spec}'")
    return int(m.group(1))


def format_number(value: float, precision: Optional[int] = None) -> str:
    """
    Fixed-point with ``precision`` digits, or the shortest round-trip
    form with an integral ``.0`` suffix dropped (``1.0`` -> ``1``).
    """
    if precision is not None:
        return f"{value:.{precision}f}"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def parse_triplet(text: str, length: int = 3) -> List[float]:
    """
    Split ``"92.5, 33.5, -18.8"`` into floats.

    Extraneous whitespace around tokens is tolerated.  A wrong token count
    or a non-numeric token raises ``BadFormatError``; range checks are left
    to the value constructors.
    """
    if not isinstance(text, str):
        raise BadFormatError(text)
    tokens = [t.strip() for t in text.split(",") if t]
    if len(tokens) != length:
        raise BadFormatError(text)
    try:
        return [float(t) for t in tokens]
    except ValueError:
        raise BadFormatError(text) from None


def _coerce(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise BadFormatError(value) from None


def _snap(value: float, low: float, high: float, eps: float = CONVERSION_SLACK) -> float:
    """Pull rounding overshoot (<= eps) back onto a range bound."""
    if high < value <= high + eps:
        return high
    if low - eps <= value < low:
        return low
    return value


def _unchecked(cls: type, **fields: float) -> Any:
    """Build a value type without running its range check."""
    inst = object.__new__(cls)
    for name, value in fields.items():
        object.__setattr__(inst, name, float(value))
    return inst


def _sequence3(values: Sequence[Any]) -> Tuple[Any, Any, Any]:
    if len(values) != 3:
        raise BadFormatError(values)
    return values[0], values[1], values[2]


# ---------------------------------------------------------------------------
# Shared capability
# ---------------------------------------------------------------------------
class _DeltaCapable:
    """
    Mixin giving every color value ``delta`` and ``delta_eq``.

    ``delta_eq`` is defined purely through ``delta``; a new color type only
    needs to be convertible to Lab to gain both.
    """

    __slots__ = ()

    def delta(self, other: "ColorValue", method: Optional["DEMethod"] = None) -> "DeltaE":
        from deltae_metrics import delta
        return delta(self, other, method)  # type: ignore[arg-type]

    def delta_eq(self, other: "ColorValue", tolerance: Optional["ToleranceLike"] = None) -> bool:
        from deltae_tolerance import delta_eq
        return delta_eq(self, other, tolerance)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Lab
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LabValue(_DeltaCapable):
    """CIE L*a*b*: lightness, green <-> magenta, blue <-> yellow."""
    l: float
    a: float
    b: float

    def __post_init__(self) -> None:
        l, a, b = _coerce(self.l), _coerce(self.a), _coerce(self.b)
        object.__setattr__(self, "l", l)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)
        lo, hi = LAB_AB_RANGE
        if not (LAB_L_RANGE[0] <= l <= LAB_L_RANGE[1] and lo <= a <= hi and lo <= b <= hi):
            raise OutOfBoundsError(self)

    @classmethod
    def from_str(cls, text: str) -> "LabValue":
        return cls(*parse_triplet(text))

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "LabValue":
        return cls(*_sequence3(values))

    @classmethod
    def _from_conversion(cls, l: float, a: float, b: float) -> "LabValue":
        lo, hi = LAB_AB_RANGE
        return _unchecked(cls, l=_snap(l, *LAB_L_RANGE), a=_snap(a, lo, hi), b=_snap(b, lo, hi))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.l, self.a, self.b)

    def to_lch(self) -> "LchValue":
        from deltae_convert import lab_to_lch
        return lab_to_lch(self)

    def to_xyz(self, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> "XyzValue":
        from deltae_convert import lab_to_xyz
        return lab_to_xyz(self, illuminant)

    def to_rgb(self, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM,
               illuminant: Illuminant = DEFAULT_ILLUMINANT) -> "RgbValue":
        from deltae_convert import lab_to_rgb
        return lab_to_rgb(self, rgb_system, illuminant)

    def round_to(self, places: int) -> "LabValue":
        return LabValue._from_conversion(round(self.l, places), round(self.a, places),
                                         round(self.b, places))

    def __format__(self, format_spec: str) -> str:
        p = parse_precision(format_spec)
        return (f"[L:{format_number(self.l, p)}, a:{format_number(self.a, p)}, "
                f"b:{format_number(self.b, p)}]")

    def __str__(self) -> str:
        return self.__format__("")


# ---------------------------------------------------------------------------
# Lch
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LchValue(_DeltaCapable):
    """Polar form of Lab: lightness, chroma, hue angle in degrees."""
    l: float
    c: float
    h: float

    def __post_init__(self) -> None:
        l, c, h = _coerce(self.l), _coerce(self.c), _coerce(self.h)
        object.__setattr__(self, "l", l)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "h", h)
        if not (LAB_L_RANGE[0] <= l <= LAB_L_RANGE[1]
                and 0.0 <= c <= LCH_MAX_CHROMA
                and 0.0 <= h <= 360.0):
            raise OutOfBoundsError(self)

    @classmethod
    def from_str(cls, text: str) -> "LchValue":
        return cls(*parse_triplet(text))

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "LchValue":
        return cls(*_sequence3(values))

    @classmethod
    def _from_conversion(cls, l: float, c: float, h: float) -> "LchValue":
        return _unchecked(cls, l=_snap(l, *LAB_L_RANGE), c=_snap(c, 0.0, LCH_MAX_CHROMA), h=h)

    def hue_radians(self) -> float:
        return math.radians(self.h)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.l, self.c, self.h)

    def to_lab(self) -> LabValue:
        from deltae_convert import lch_to_lab
        return lch_to_lab(self)

    def round_to(self, places: int) -> "LchValue":
        return LchValue._from_conversion(round(self.l, places), round(self.c, places),
                                         round(self.h, places))

    def __format__(self, format_spec: str) -> str:
        p = parse_precision(format_spec)
        return (f"[L:{format_number(self.l, p)}, c:{format_number(self.c, p)}, "
                f"h:{format_number(self.h, p)}]")

    def __str__(self) -> str:
        return self.__format__("")


# ---------------------------------------------------------------------------
# XYZ
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class XyzValue(_DeltaCapable):
    """
    CIE XYZ tristimulus values, scaled so the reference white has Y = 1.

    The triplet is incomplete without its ``illuminant``; two XYZ values
    with equal numbers but different illuminants are different colors.
    """
    x: float
    y: float
    z: float
    illuminant: Illuminant = field(default=DEFAULT_ILLUMINANT)

    def __post_init__(self) -> None:
        x, y, z = _coerce(self.x), _coerce(self.y), _coerce(self.z)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "z", z)
        if not isinstance(self.illuminant, Illuminant):
            raise TypeError(f"illuminant must be an Illuminant, got {type(self.illuminant).__name__}")
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            raise OutOfBoundsError(self)

    @classmethod
    def from_str(cls, text: str, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> "XyzValue":
        return cls(*parse_triplet(text), illuminant=illuminant)

    @classmethod
    def from_sequence(cls, values: Sequence[float],
                      illuminant: Illuminant = DEFAULT_ILLUMINANT) -> "XyzValue":
        return cls(*_sequence3(values), illuminant=illuminant)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_lab(self, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabValue:
        from deltae_convert import xyz_to_lab
        return xyz_to_lab(self, illuminant)

    def to_rgb(self, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM) -> "RgbValue":
        from deltae_convert import xyz_to_rgb
        return xyz_to_rgb(self, rgb_system)

    def adapt(self, destination: Illuminant,
              method: Optional["AdaptationMethod"] = None) -> "XyzValue":
        from deltae_adaptation import chromatic_adapt
        return chromatic_adapt(self, destination, method)

    def round_to(self, places: int) -> "XyzValue":
        return XyzValue(round(self.x, places), round(self.y, places), round(self.z, places),
                        self.illuminant)

    def __format__(self, format_spec: str) -> str:
        p = parse_precision(format_spec)
        return (f"[X:{format_number(self.x, p)}, Y:{format_number(self.y, p)}, "
                f"Z:{format_number(self.z, p)}]")

    def __str__(self) -> str:
        return self.__format__("")


# ---------------------------------------------------------------------------
# RGB
# ---------------------------------------------------------------------------
def _channel(value: Any) -> int:
    if isinstance(value, bool):
        raise OutOfBoundsError(value)
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError):
        raise OutOfBoundsError(value) from None
    if as_int != value or not 0 <= as_int <= 255:
        raise OutOfBoundsError(value)
    return as_int


@dataclass(frozen=True, slots=True, order=True)
class RgbValue(_DeltaCapable):
    """Device RGB, integers 0..255.  Meaningful only within an ``RgbSystem``."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _channel(self.r))
        object.__setattr__(self, "g", _channel(self.g))
        object.__setattr__(self, "b", _channel(self.b))

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "RgbValue":
        return cls(*_sequence3(values))

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def invert(self) -> "RgbValue":
        return RgbValue(255 - self.r, 255 - self.g, 255 - self.b)

    def nominalize(self) -> "RgbNominalValue":
        return RgbNominalValue(self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def to_xyz(self, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM) -> XyzValue:
        from deltae_convert import rgb_to_xyz
        return rgb_to_xyz(self, rgb_system)

    def to_lab(self, rgb_system: RgbSystem = DEFAULT_RGB_SYSTEM,
               illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabValue:
        from deltae_convert import rgb_to_lab
        return rgb_to_lab(self, rgb_system, illuminant)

    def __format__(self, format_spec: str) -> str:
        return f"[R:{self.r}, G:{self.g}, B:{self.b}]"

    def __str__(self) -> str:
        return self.__format__("")


@dataclass(frozen=True, slots=True)
class RgbNominalValue:
    """
    RGB on a 0..1 scale.

    Matrix products and rounding can overshoot the unit interval; such
    values are clamped on construction instead of rejected.
    """
    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            v = _coerce(getattr(self, name))
            if not math.isfinite(v):
                raise OutOfBoundsError(v)
            object.__setattr__(self, name, min(max(v, 0.0), 1.0))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def denominalize(self) -> RgbValue:
        """Scale to 0..255, rounding to the nearest integer."""
        return RgbValue(*(int(round(v * 255.0)) for v in self.to_tuple()))

    def isclose(self, other: "RgbNominalValue", abs_tol: float = 1e-6) -> bool:
        return all(math.isclose(s, o, rel_tol=0.0, abs_tol=abs_tol)
                   for s, o in zip(self.to_tuple(), other.to_tuple()))


ColorValue = Union[LabValue, LchValue, XyzValue, RgbValue]
