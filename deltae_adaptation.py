# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Chromatic Adaptation
====================
Maps an XYZ color from a source white point to a destination white point
with a von Kries-type transform:

    adapted = M^-1 · diag(rho_d/rho_s, gamma_d/gamma_s, beta_d/beta_s) · M · xyz

where (rho, gamma, beta) = M · white is the cone response of a white point
and ``M`` is the cone-response matrix of the chosen method.  The inverse
matrices are tabulated data, not derived at import.

Identical source and destination illuminants short-circuit and return the
input object untouched, so a no-op adaptation never costs precision.

Reference: http://www.brucelindbloom.com/Eqn_ChromAdapt.html
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Final, Optional, Tuple

from deltae_errors import InvalidInputError
from deltae_illuminant import Illuminant
from deltae_matrix import Matrix3x1, Matrix3x3
from deltae_values import XyzValue

__all__ = [
    "XYZ_SCALING",
    "BRADFORD",
    "BRADFORD_INV",
    "VON_KRIES",
    "VON_KRIES_INV",
    "AdaptationMethod",
    "DEFAULT_ADAPTATION",
    "adaptation_matrix",
    "chromatic_adapt",
]

# Cone response domain matrix for XYZ scaling (its own inverse)
XYZ_SCALING: Final[Matrix3x3] = Matrix3x3.identity()

# Bradford, "sharpened" cone responses
BRADFORD: Final[Matrix3x3] = Matrix3x3(
    0.8951000, 0.2664000, -0.1614000,
    -0.7502000, 1.7135000, 0.0367000,
    0.0389000, -0.0685000, 1.0296000,
)
BRADFORD_INV: Final[Matrix3x3] = Matrix3x3(
    0.9869929, -0.1470543, 0.1599627,
    0.4323053, 0.5183603, 0.0492912,
    -0.0085287, 0.0400428, 0.9684867,
)

# Von Kries (Hunt-Pointer-Estevez)
VON_KRIES: Final[Matrix3x3] = Matrix3x3(
    0.4002400, 0.7076000, -0.0808100,
    -0.2263000, 1.1653200, 0.0457000,
    0.0000000, 0.0000000, 0.9182200,
)
VON_KRIES_INV: Final[Matrix3x3] = Matrix3x3(
    1.8599364, -1.1293816, 0.2198974,
    0.3611914, 0.6388125, -0.0000064,
    0.0000000, 0.0000000, 1.0890636,
)


class AdaptationMethod(Enum):
    """Cone-response model used for the adaptation."""
    XYZ_SCALING = "xyz_scaling"
    BRADFORD = "bradford"
    VON_KRIES = "von_kries"

    @property
    def matrices(self) -> Tuple[Matrix3x3, Matrix3x3]:
        """(M, M^-1) for this method."""
        return _METHOD_MATRICES[self]

    @classmethod
    def from_name(cls, name: str) -> "AdaptationMethod":
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise InvalidInputError(f"Unknown adaptation method: '{name}'") from None


_METHOD_MATRICES: Final = {
    AdaptationMethod.XYZ_SCALING: (XYZ_SCALING, XYZ_SCALING),
    AdaptationMethod.BRADFORD: (BRADFORD, BRADFORD_INV),
    AdaptationMethod.VON_KRIES: (VON_KRIES, VON_KRIES_INV),
}

DEFAULT_ADAPTATION: Final[AdaptationMethod] = AdaptationMethod.BRADFORD


@functools.lru_cache(maxsize=64)
def adaptation_matrix(source: Illuminant, destination: Illuminant,
                      method: AdaptationMethod = DEFAULT_ADAPTATION) -> Matrix3x3:
    """
    Composite 3x3 transform ``M^-1 · gain · M`` for column vectors.

    Raises:
        InvalidInputError: a white point has a zero cone-response component
            in the source, which would turn the gain into inf/NaN.
    """
    m, m_inv = method.matrices
    src: Matrix3x1 = source.cone_response(m)
    dst: Matrix3x1 = destination.cone_response(m)

    if any(v == 0.0 for v in src):
        raise InvalidInputError(
            f"Illuminant {source} has a zero cone response {src.to_tuple()} "
            f"under {method.name}; adaptation is undefined."
        )
    gain = Matrix3x3.diagonal(dst.x / src.x, dst.y / src.y, dst.z / src.z)
    return m_inv * gain * m  # type: ignore[operator,return-value]


def chromatic_adapt(xyz: XyzValue, destination: Illuminant,
                    method: Optional[AdaptationMethod] = None) -> XyzValue:
    """
    Adapt ``xyz`` from its own illuminant to ``destination``.

    Args:
        xyz: Source color; its ``illuminant`` is the source white point.
        destination: Target white point.
        method: Cone-response model, Bradford by default.

    Returns:
        The input object itself when both white points are equal, otherwise
        a new ``XyzValue`` tagged with ``destination``.
    """
    if xyz.illuminant == destination:
        return xyz
    if method is None:
        method = DEFAULT_ADAPTATION
    if destination.has_zero_component or xyz.illuminant.has_zero_component:
        raise InvalidInputError(
            f"Illuminants with a zero tristimulus component are unsupported: "
            f"{xyz.illuminant.white_point} -> {destination.white_point}"
        )
    m = adaptation_matrix(xyz.illuminant, destination, method)
    out = m * Matrix3x1(xyz.x, xyz.y, xyz.z)
    return XyzValue(out.x, out.y, out.z, destination)  # type: ignore[union-attr]
