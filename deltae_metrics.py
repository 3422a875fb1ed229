# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Delta-E Engine
==============
Color difference metrics over Lab values:

    | Method            | Symmetric | Notes                                    |
    |-------------------|-----------|------------------------------------------|
    | DE1976            | yes       | Euclidean distance in Lab                |
    | DE1994(textile)   | yes       | graphic arts or textile weighting        |
    | DE2000            | yes       | CIEDE2000, the default                   |
    | DECMC(l, c)       | NO        | weights from the first (reference) color |

``DEMethod`` is a closed union of frozen dataclasses.  Dispatch is an
exhaustive ``isinstance`` chain in ``_kernel_args``; adding a method means
extending that chain, and anything else is rejected with ``TypeError``.

A ``DeltaE`` result orders by value only.  Comparing results of different
methods is allowed but meaningless (a DE2000 of 1.0 is not a DE1976 of
1.0), so it emits a ``UserWarning``.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Final, Optional, Tuple, TypeAlias, Union

import numpy as np
import numpy.typing as npt

from deltae_convert import to_lab
from deltae_errors import OutOfBoundsError
from deltae_kernels import (
    CODE_DE1976,
    CODE_DE1994,
    CODE_DE2000,
    CODE_DECMC,
    batch_delta_e,
    delta_e_1976,
    delta_e_1994,
    delta_e_2000,
    delta_e_cmc,
)
from deltae_values import (
    LAB_AB_RANGE,
    LAB_L_RANGE,
    ColorValue,
    format_number,
    parse_precision,
)

__all__ = [
    "DE1976",
    "DE1994",
    "DE2000",
    "DECMC",
    "DEMethod",
    "DE1994G",
    "DE1994T",
    "DECMC1",
    "DECMC2",
    "DEFAULT_METHOD",
    "DeltaE",
    "delta",
    "delta_e_array",
    "warn_mixed_methods",
]

ArrayFloat: TypeAlias = npt.NDArray[np.floating]


# ---------------------------------------------------------------------------
# 1.  Methods
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DE1976:
    """The original Delta E, a Euclidean distance in Lab."""

    def __format__(self, format_spec: str) -> str:
        return "DE1976"

    def __str__(self) -> str:
        return "DE1976"


@dataclass(frozen=True, slots=True)
class DE1994:
    """
    CIE 1994.  ``textile=False`` uses the graphic arts constants
    (k_L=1, K1=0.045, K2=0.015), ``textile=True`` the textile ones
    (k_L=2, K1=0.048, K2=0.014).
    """
    textile: bool = False

    @property
    def constants(self) -> Tuple[float, float, float]:
        """(k_L, K1, K2)"""
        if self.textile:
            return (2.0, 0.048, 0.014)
        return (1.0, 0.045, 0.015)

    def __format__(self, format_spec: str) -> str:
        return "DE1994T" if self.textile else "DE1994"

    def __str__(self) -> str:
        return self.__format__("")


@dataclass(frozen=True, slots=True)
class DE2000:
    """CIEDE2000, the default method."""

    def __format__(self, format_spec: str) -> str:
        return "DE2000"

    def __str__(self) -> str:
        return "DE2000"


@dataclass(frozen=True, slots=True)
class DECMC:
    """CMC l:c with caller-supplied lightness and chroma weights."""
    tolerance_l: float = 1.0
    tolerance_c: float = 1.0

    def __post_init__(self) -> None:
        tl, tc = float(self.tolerance_l), float(self.tolerance_c)
        if not (tl > 0.0 and tc > 0.0):
            raise OutOfBoundsError(f"DECMC({tl}:{tc})")
        object.__setattr__(self, "tolerance_l", tl)
        object.__setattr__(self, "tolerance_c", tc)

    def __format__(self, format_spec: str) -> str:
        p = parse_precision(format_spec)
        return f"DECMC({format_number(self.tolerance_l, p)}:{format_number(self.tolerance_c, p)})"

    def __str__(self) -> str:
        return self.__format__("")


DEMethod: TypeAlias = Union[DE1976, DE1994, DE2000, DECMC]

DE1994G: Final[DE1994] = DE1994(textile=False)
DE1994T: Final[DE1994] = DE1994(textile=True)
DECMC1: Final[DECMC] = DECMC(1.0, 1.0)
DECMC2: Final[DECMC] = DECMC(2.0, 1.0)
DEFAULT_METHOD: Final[DE2000] = DE2000()


def _kernel_args(method: DEMethod) -> Tuple[int, float, float, float]:
    """Map a method onto (batch code, p0, p1, p2)."""
    if isinstance(method, DE2000):
        return CODE_DE2000, 0.0, 0.0, 0.0
    if isinstance(method, DE1976):
        return CODE_DE1976, 0.0, 0.0, 0.0
    if isinstance(method, DE1994):
        return (CODE_DE1994, *method.constants)
    if isinstance(method, DECMC):
        return CODE_DECMC, method.tolerance_l, method.tolerance_c, 0.0
    raise TypeError(f"Unsupported Delta E method: {method!r}")


def _evaluate(method: DEMethod, L1: float, a1: float, b1: float,
              L2: float, a2: float, b2: float) -> float:
    code, p0, p1, p2 = _kernel_args(method)
    if code == CODE_DE2000:
        return delta_e_2000(L1, a1, b1, L2, a2, b2)
    if code == CODE_DE1976:
        return delta_e_1976(L1, a1, b1, L2, a2, b2)
    if code == CODE_DE1994:
        return delta_e_1994(L1, a1, b1, L2, a2, b2, p0, p1, p2)
    return delta_e_cmc(L1, a1, b1, L2, a2, b2, p0, p1)


# ---------------------------------------------------------------------------
# 2.  Result type
# ---------------------------------------------------------------------------
def warn_mixed_methods(lhs: DEMethod, rhs: DEMethod, stacklevel: int = 4) -> None:
    """Warn when two Delta E values of different methods meet in a comparison."""
    if lhs != rhs:
        warnings.warn(
            f"Comparing Delta E values of different methods ({lhs} vs {rhs}); "
            "the magnitudes are not commensurable.",
            stacklevel=stacklevel,
        )


@dataclass(frozen=True, slots=True, eq=False)
class DeltaE:
    """
    The measured difference between two colors.

    ``==`` against another ``DeltaE`` requires the same method and value;
    against a plain number only the value is compared.  Ordering always
    uses the value alone.
    """
    method: DEMethod
    value:  float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def new(cls, a: ColorValue, b: ColorValue, method: Optional[DEMethod] = None) -> "DeltaE":
        return delta(a, b, method)

    def round_to(self, places: int) -> "DeltaE":
        return DeltaE(self.method, round(self.value, places))

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DeltaE):
            return self.method == other.method and self.value == other.value
        if isinstance(other, (int, float, np.floating)):
            return self.value == float(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.method, self.value))

    def _other_value(self, other: object) -> Optional[float]:
        if isinstance(other, DeltaE):
            warn_mixed_methods(self.method, other.method)
            return other.value
        if isinstance(other, (int, float, np.floating)):
            return float(other)
        return None

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
        p = parse_precision(format_spec)
        return f"{format_number(self.value, p)} {format(self.method, format_spec)}"

    def __str__(self) -> str:
        return self.__format__("")


# ---------------------------------------------------------------------------
# 3.  Entry points
# ---------------------------------------------------------------------------
def delta(a: ColorValue, b: ColorValue, method: Optional[DEMethod] = None) -> DeltaE:
    """
    Difference between two colors of any supported type.

    Both sides are converted to Lab (D50, sRGB for device values) before
    the formula is applied.  For ``DECMC`` ``a`` is the reference.
    """
    if method is None:
        method = DEFAULT_METHOD
    lab_a = to_lab(a)
    lab_b = to_lab(b)
    value = _evaluate(method, lab_a.l, lab_a.a, lab_a.b, lab_b.l, lab_b.a, lab_b.b)
    return DeltaE(method, value)


def _prepare_inputs(lab1: Any, lab2: Any) -> Tuple[ArrayFloat, ArrayFloat]:
    """Broadcast two Lab arrays to matching contiguous (N, 3) float64."""
    l1 = np.ascontiguousarray(np.atleast_2d(np.asarray(lab1, dtype=np.float64)))
    l2 = np.ascontiguousarray(np.atleast_2d(np.asarray(lab2, dtype=np.float64)))

    if l1.ndim != 2 or l2.ndim != 2 or l1.shape[-1] != 3 or l2.shape[-1] != 3:
        raise ValueError(f"Inputs must have shape (N, 3), got {l1.shape} and {l2.shape}")

    if l1.shape[0] != l2.shape[0]:
        if l1.shape[0] == 1:
            l1 = np.ascontiguousarray(np.broadcast_to(l1, l2.shape))
        elif l2.shape[0] == 1:
            l2 = np.ascontiguousarray(np.broadcast_to(l2, l1.shape))
        else:
            raise ValueError(f"Shapes {l1.shape} and {l2.shape} are not broadcastable.")

    for arr in (l1, l2):
        ok_l = (arr[:, 0] >= LAB_L_RANGE[0]) & (arr[:, 0] <= LAB_L_RANGE[1])
        ok_ab = ((arr[:, 1:] >= LAB_AB_RANGE[0]) & (arr[:, 1:] <= LAB_AB_RANGE[1])).all(axis=1)
        bad = np.flatnonzero(~(ok_l & ok_ab))
        if bad.size:
            raise OutOfBoundsError(tuple(arr[bad[0]].tolist()))
    return l1, l2


def delta_e_array(lab1: Any, lab2: Any,
                  method: Optional[DEMethod] = None) -> Union[float, ArrayFloat]:
    """
    Row-wise Delta E between arrays of Lab triplets.

    Args:
        lab1: Reference colors, shape (N, 3) or (3,).
        lab2: Sample colors, shape (N, 3) or (3,).  Either side may be a
            single color broadcast against N.
        method: Difference formula, DE2000 by default.

    Returns:
        A float for two single colors, else a float64 array of shape (N,).
    """
    if method is None:
        method = DEFAULT_METHOD
    l1, l2 = _prepare_inputs(lab1, lab2)
    code, p0, p1, p2 = _kernel_args(method)
    res = batch_delta_e(l1, l2, code, p0, p1, p2)
    if np.ndim(lab1) == 1 and np.ndim(lab2) == 1:
        return float(res[0])
    return res
