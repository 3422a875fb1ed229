# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tolerance / Equality
====================
A ``Tolerance`` is a ``DeltaE`` used as a threshold: two colors are
"equal" when their difference under the tolerance's method does not
exceed its value.  The default is DE2000 at 1.0, the usual just-noticeable
difference.

``delta_eq`` is written once against ``delta``; every color type that can
be brought into Lab gets it without further code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeAlias, Union

from deltae_metrics import (
    DEFAULT_METHOD,
    DeltaE,
    DEMethod,
    delta,
    warn_mixed_methods,
)
from deltae_values import ColorValue

__all__ = [
    "DEFAULT_TOLERANCE_VALUE",
    "Tolerance",
    "ToleranceLike",
    "delta_eq",
]

DEFAULT_TOLERANCE_VALUE = 1.0


@dataclass(frozen=True, slots=True, eq=False)
class Tolerance:
    """Threshold wrapper around a ``DeltaE``."""
    method: DEMethod = DEFAULT_METHOD
    value:  float = DEFAULT_TOLERANCE_VALUE

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def default(cls) -> "Tolerance":
        return cls(DEFAULT_METHOD, DEFAULT_TOLERANCE_VALUE)

    @classmethod
    def from_delta(cls, de: DeltaE) -> "Tolerance":
        return cls(de.method, de.value)

    @classmethod
    def coerce(cls, tolerance: Optional["ToleranceLike"]) -> "Tolerance":
        """Accept a ``Tolerance``, a ``DeltaE`` or a bare number (DE2000)."""
        if tolerance is None:
            return cls.default()
        if isinstance(tolerance, Tolerance):
            return tolerance
        if isinstance(tolerance, DeltaE):
            return cls.from_delta(tolerance)
        return cls(DEFAULT_METHOD, float(tolerance))

    def as_delta(self) -> DeltaE:
        return DeltaE(self.method, self.value)

    def accepts(self, de: DeltaE) -> bool:
        """True when ``de`` lies within this tolerance."""
        warn_mixed_methods(self.method, de.method, stacklevel=3)
        return de.value <= self.value

    # Magnitude comparisons ignore the method tag (beyond the warning).
    def _other_value(self, other: object) -> Optional[float]:
        if isinstance(other, (Tolerance, DeltaE)):
            warn_mixed_methods(self.method, other.method)
            return other.value
        if isinstance(other, (int, float)):
            return float(other)
        return None

    def __eq__(self, other: object) -> bool:
        v = self._other_value(other)
        return NotImplemented if v is None else self.value == v  # type: ignore[return-value]

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        v = self._other_value(other)
        return NotImplemented if v is None else self.value < v  # type: ignore[return-value]

    def __le__(self, other: object) -> bool:
        v = self._other_value(other)
        return NotImplemented if v is None else self.value <= v  # type: ignore[return-value]

    def __gt__(self, other: object) -> bool:
        v = self._other_value(other)
        return NotImplemented if v is None else self.value > v  # type: ignore[return-value]

    def __ge__(self, other: object) -> bool:
        v = self._other_value(other)
        return NotImplemented if v is None else self.value >= v  # type: ignore[return-value]

    def __format__(self, format_spec: str) -> str:
        return format(self.as_delta(), format_spec)

    def __str__(self) -> str:
        return self.__format__("")


ToleranceLike: TypeAlias = Union[Tolerance, DeltaE, float]


def delta_eq(a: ColorValue, b: ColorValue, tolerance: Optional[ToleranceLike] = None) -> bool:
    """
    Whether ``a`` and ``b`` are indistinguishable within ``tolerance``.

    Both values are converted to Lab, the difference is computed with the
    tolerance's method and compared with ``<=``.  ``None`` means DE2000 at
    1.0; a bare number is taken as a DE2000 threshold.
    """
    tol = Tolerance.coerce(tolerance)
    return delta(a, b, tol.method).value <= tol.value
