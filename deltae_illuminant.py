# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Standard Illuminants
====================
Reference white points (CIE 1931 2° observer, normalised to Y = 1) for
XYZ <-> Lab conversions and chromatic adaptation.

An ``Illuminant`` is identified by its tristimulus vector, not its name:
two illuminants compare equal whenever their white points are equal, so a
custom ``Illuminant.other(0.96422, 1.0, 0.82521)`` is interchangeable with
``D50``.

Source: Bruce Lindbloom, http://www.brucelindbloom.com/Eqn_ChromAdapt.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, Tuple

from deltae_errors import InvalidInputError
from deltae_matrix import Matrix3x1, Matrix3x3

__all__ = [
    "Illuminant",
    "A", "B", "C", "D50", "D55", "D65", "D75", "E", "F2", "F7", "F11",
    "STANDARD_ILLUMINANTS",
    "DEFAULT_ILLUMINANT",
]

WhitePoint = Tuple[float, float, float]


@dataclass(frozen=True, slots=True, eq=False)
class Illuminant:
    """
    A named white point.  ``name`` is informational only; the catch-all
    for arbitrary white points is built with ``Illuminant.other``.
    """
    name:        str
    white_point: WhitePoint

    def __post_init__(self) -> None:
        if len(self.white_point) != 3:
            raise ValueError(f"White point needs 3 components, got {len(self.white_point)}")
        object.__setattr__(self, "white_point", tuple(float(v) for v in self.white_point))

    @classmethod
    def other(cls, x: float, y: float, z: float) -> "Illuminant":
        """Any arbitrary white point."""
        return cls("Other", (x, y, z))

    @classmethod
    def from_name(cls, name: str) -> "Illuminant":
        """Case-insensitive lookup of a standard illuminant (``"d65"``)."""
        try:
            return STANDARD_ILLUMINANTS[name.strip().upper()]
        except KeyError:
            raise InvalidInputError(f"Unknown illuminant: '{name}'") from None

    @property
    def xyz(self) -> Matrix3x1:
        """White point as a column vector."""
        return Matrix3x1(*self.white_point)

    @property
    def has_zero_component(self) -> bool:
        return any(v == 0.0 for v in self.white_point)

    def cone_response(self, method_matrix: Matrix3x3) -> Matrix3x1:
        """Cone response domain (rho, gamma, beta) of this white point."""
        return method_matrix * self.xyz  # type: ignore[return-value]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Illuminant):
            return NotImplemented
        return self.white_point == other.white_point

    def __hash__(self) -> int:
        return hash(self.white_point)

    def __str__(self) -> str:
        return self.name


# Tungsten-filament (incandescent)
A:   Final[Illuminant] = Illuminant("A",   (1.09850, 1.00000, 0.35585))
# Daylight simulation at noon (4874 K)
B:   Final[Illuminant] = Illuminant("B",   (0.99072, 1.00000, 0.85223))
# Daylight simulation average (6774 K)
C:   Final[Illuminant] = Illuminant("C",   (0.98074, 1.00000, 1.18232))
# Natural daylight at horizon (5003 K), standard for printing (ICC)
D50: Final[Illuminant] = Illuminant("D50", (0.96422, 1.00000, 0.82521))
# Natural daylight at mid-morning (5503 K)
D55: Final[Illuminant] = Illuminant("D55", (0.95682, 1.00000, 0.92149))
# Natural daylight at noon (6504 K)
D65: Final[Illuminant] = Illuminant("D65", (0.95047, 1.00000, 1.08883))
# Natural daylight in north sky (7504 K)
D75: Final[Illuminant] = Illuminant("D75", (0.94972, 1.00000, 1.22638))
# Equal energy radiator
E:   Final[Illuminant] = Illuminant("E",   (1.00000, 1.00000, 1.00000))
# Fluorescent (standard)
F2:  Final[Illuminant] = Illuminant("F2",  (0.99186, 1.00000, 0.67393))
# Fluorescent (broadband)
F7:  Final[Illuminant] = Illuminant("F7",  (0.95041, 1.00000, 1.08747))
# Fluorescent (narrowband)
F11: Final[Illuminant] = Illuminant("F11", (1.00962, 1.00000, 0.64350))

STANDARD_ILLUMINANTS: Final[Dict[str, Illuminant]] = {
    ill.name: ill for ill in (A, B, C, D50, D55, D65, D75, E, F2, F7, F11)
}

DEFAULT_ILLUMINANT: Final[Illuminant] = D50
