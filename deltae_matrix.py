# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Fixed-Size Matrix Algebra

Layout Convention:
──────────────────
  Every 3x3 matrix in this project is ROW-MAJOR.  The nine constructor
  arguments are read row by row:

        Matrix3x3(m00, m01, m02,
                  m10, m11, m12,
                  m20, m21, m22)

  Linear indexing follows storage order, ``m[k] == m_{k // 3, k % 3}``.
  Pair indexing is (column, row), ``m[(c, r)] == m[r * 3 + c]``.

  Products are standard column-vector maps:

        [X]   [m00 m01 m02]   [R]
        [Y] = [m10 m11 m12] · [G]
        [Z]   [m20 m21 m22]   [B]

  so for an RGB -> XYZ working-space matrix the COLUMNS are the XYZ
  coordinates of the red, green and blue primaries.  All constant tables
  (RGB systems, cone-response matrices) are written in this layout.

Shape is structural: there is no resizing and an index outside 0..8 (or
0..2 for a pair component) is a defect, raised as ``IndexError``.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple, Union

import numpy as np
import scipy.linalg

__all__ = [
    "Matrix3x3",
    "Matrix3x1",
]

Index3x3 = Union[int, Tuple[int, int]]


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr = np.ascontiguousarray(arr, dtype=np.float64)
    arr.flags.writeable = False
    return arr


def _check_index(idx: int, size: int, label: str) -> int:
    # Negative indices are rejected; numpy would silently wrap them.
    if isinstance(idx, bool) or not isinstance(idx, (int, np.integer)):
        raise TypeError(f"{label} index must be an integer, got {type(idx).__name__}")
    if idx < 0 or idx >= size:
        raise IndexError(f"index out of bounds: the {label} is {size}, but the index is {idx}")
    return int(idx)


class Matrix3x1:
    """
    A 3-element column vector, used for white points, cone responses and
    tristimulus triplets in transit between transforms.
    """

    __slots__ = ("_inner",)

    def __init__(self, x: float, y: float, z: float) -> None:
        self._inner = _frozen(np.array([x, y, z], dtype=np.float64))

    @classmethod
    def from_array(cls, arr: Union[np.ndarray, Sequence[float]]) -> "Matrix3x1":
        a = np.asarray(arr, dtype=np.float64).ravel()
        if a.shape != (3,):
            raise ValueError(f"Expected 3 elements, got {a.size}")
        return cls(a[0], a[1], a[2])

    @property
    def inner(self) -> np.ndarray:
        """Read-only view of the backing array."""
        return self._inner

    @property
    def x(self) -> float:
        return float(self._inner[0])

    @property
    def y(self) -> float:
        return float(self._inner[1])

    @property
    def z(self) -> float:
        return float(self._inner[2])

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def pow(self, exponent: float) -> "Matrix3x1":
        """Element-wise power. Negative bases with fractional exponents give NaN."""
        with np.errstate(invalid="ignore"):
            return Matrix3x1.from_array(np.power(self._inner, exponent))

    def __getitem__(self, idx: int) -> float:
        return float(self._inner[_check_index(idx, 3, "height")])

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3x1):
            return NotImplemented
        return bool(np.array_equal(self._inner, other._inner))

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self) -> str:
        return f"Matrix3x1({self.x!r}, {self.y!r}, {self.z!r})"


class Matrix3x3:
    """A 3x3 row-major matrix of float64 (see module docstring for layout)."""

    __slots__ = ("_inner",)

    def __init__(self,
                 m00: float, m01: float, m02: float,
                 m10: float, m11: float, m12: float,
                 m20: float, m21: float, m22: float) -> None:
        self._inner = _frozen(np.array([
            [m00, m01, m02],
            [m10, m11, m12],
            [m20, m21, m22],
        ], dtype=np.float64))

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_array(cls, arr: Union[np.ndarray, Sequence[Sequence[float]]]) -> "Matrix3x3":
        """Build from a (3, 3) array-like or a flat sequence of 9 floats."""
        a = np.asarray(arr, dtype=np.float64)
        if a.shape not in ((3, 3), (9,)):
            raise ValueError(f"Expected shape (3, 3) or (9,), got {a.shape}")
        return cls(*a.ravel().tolist())

    @classmethod
    def from_xyz(cls, red: object, green: object, blue: object) -> "Matrix3x3":
        """
        Assemble an RGB -> XYZ matrix from the XYZ coordinates of the three
        primaries.  Any objects exposing ``x``, ``y`` and ``z`` are accepted;
        each primary becomes one COLUMN.
        """
        cols = [(p.x, p.y, p.z) for p in (red, green, blue)]  # type: ignore[attr-defined]
        return cls.from_array(np.array(cols, dtype=np.float64).T)

    @classmethod
    def identity(cls) -> "Matrix3x3":
        return cls.diagonal(1.0, 1.0, 1.0)

    @classmethod
    def diagonal(cls, d0: float, d1: float, d2: float) -> "Matrix3x3":
        return cls(d0, 0.0, 0.0,
                   0.0, d1, 0.0,
                   0.0, 0.0, d2)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def inner(self) -> np.ndarray:
        """Read-only (3, 3) view of the backing array."""
        return self._inner

    def column(self, col: int) -> Matrix3x1:
        return Matrix3x1.from_array(self._inner[:, _check_index(col, 3, "width")])

    def row(self, row: int) -> Matrix3x1:
        return Matrix3x1.from_array(self._inner[_check_index(row, 3, "height"), :])

    def xyz_red(self) -> Matrix3x1:
        """XYZ of the red primary (column 0 of an RGB -> XYZ matrix)."""
        return self.column(0)

    def xyz_green(self) -> Matrix3x1:
        return self.column(1)

    def xyz_blue(self) -> Matrix3x1:
        return self.column(2)

    def __getitem__(self, idx: Index3x3) -> float:
        if isinstance(idx, tuple):
            if len(idx) != 2:
                raise IndexError(f"pair index must be (column, row), got {idx!r}")
            col = _check_index(idx[0], 3, "width")
            row = _check_index(idx[1], 3, "height")
            return float(self._inner[row, col])
        k = _check_index(idx, 9, "length")
        return float(self._inner[k // 3, k % 3])

    def __iter__(self) -> Iterator[float]:
        return iter(self._inner.ravel().tolist())

    def __len__(self) -> int:
        return 9

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def __mul__(self, other: object) -> Union["Matrix3x3", Matrix3x1]:
        if isinstance(other, Matrix3x3):
            return Matrix3x3.from_array(self._inner @ other._inner)
        if isinstance(other, Matrix3x1):
            return Matrix3x1.from_array(self._inner @ other.inner)
        return NotImplemented

    __matmul__ = __mul__

    def pow(self, exponent: float) -> "Matrix3x3":
        """
        Element-wise power (NOT a matrix power).

        NaN propagates for negative entries raised to a non-integer exponent;
        numpy's 'invalid value' runtime warning is suppressed for that case.
        """
        with np.errstate(invalid="ignore"):
            return Matrix3x3.from_array(np.power(self._inner, exponent))

    def transpose(self) -> "Matrix3x3":
        return Matrix3x3.from_array(self._inner.T)

    def inverse(self) -> "Matrix3x3":
        """Matrix inverse; raises ``numpy.linalg.LinAlgError`` when singular."""
        return Matrix3x3.from_array(scipy.linalg.inv(self._inner))

    def allclose(self, other: "Matrix3x3", atol: float = 1e-7) -> bool:
        return bool(np.allclose(self._inner, other._inner, rtol=0.0, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return bool(np.array_equal(self._inner, other._inner))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(repr(float(v)) for v in r) + "]" for r in self._inner
        )
        return f"Matrix3x3([{rows}])"
