import numpy as np
import pytest

from deltae_adaptation import (
    AdaptationMethod,
    adaptation_matrix,
    chromatic_adapt,
)
from deltae_errors import InvalidInputError
from deltae_illuminant import D50, D65, Illuminant
from deltae_matrix import Matrix3x3
from deltae_values import XyzValue

# Lindbloom, Bradford D65 -> D50
BRADFORD_D65_TO_D50 = Matrix3x3(
    1.0478112, 0.0228866, -0.0501270,
    0.0295424, 0.9904844, -0.0170491,
    -0.0092345, 0.0150436, 0.7521316,
)


def test_same_illuminant_is_identity():
    xyz = XyzValue(0.3, 0.4, 0.5, D50)
    assert chromatic_adapt(xyz, D50) is xyz
    assert chromatic_adapt(xyz, Illuminant.other(0.96422, 1.0, 0.82521)) is xyz


@pytest.mark.parametrize("method", list(AdaptationMethod), ids=lambda m: m.value)
def test_white_maps_to_white(method):
    white = XyzValue(*D65.white_point, illuminant=D65)
    adapted = chromatic_adapt(white, D50, method)
    assert adapted.illuminant == D50
    np.testing.assert_allclose(adapted.to_tuple(), D50.white_point, atol=1e-5)


def test_bradford_matrix_matches_reference():
    m = adaptation_matrix(D65, D50, AdaptationMethod.BRADFORD)
    assert m.allclose(BRADFORD_D65_TO_D50, atol=1e-5)


def test_adaptation_matrix_is_cached():
    assert adaptation_matrix(D65, D50) is adaptation_matrix(D65, D50)


def test_round_trip_through_another_white():
    xyz = XyzValue(0.2, 0.3, 0.4, D50)
    back = xyz.adapt(D65).adapt(D50)
    np.testing.assert_allclose(back.to_tuple(), xyz.to_tuple(), atol=1e-6)


@pytest.mark.parametrize("source, destination", [
    (D50, Illuminant.other(0.9, 1.0, 0.0)),
    (Illuminant.other(1.0, 0.0, 1.0), D50),
])
def test_zero_component_illuminant_is_rejected(source, destination):
    with pytest.raises(InvalidInputError):
        chromatic_adapt(XyzValue(0.5, 0.5, 0.5, source), destination)


@pytest.mark.parametrize("name, expected", [
    ("bradford", AdaptationMethod.BRADFORD),
    ("Von Kries", AdaptationMethod.VON_KRIES),
    ("von-kries", AdaptationMethod.VON_KRIES),
    ("XYZ_Scaling", AdaptationMethod.XYZ_SCALING),
])
def test_method_from_name(name, expected):
    assert AdaptationMethod.from_name(name) is expected


def test_unknown_method_name():
    with pytest.raises(InvalidInputError):
        AdaptationMethod.from_name("cat02")
