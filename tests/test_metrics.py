import math
import warnings

import numpy as np
import pytest

from deltae_errors import OutOfBoundsError
from deltae_metrics import (
    DE1976,
    DE1994,
    DE1994G,
    DE1994T,
    DE2000,
    DECMC,
    DECMC1,
    DECMC2,
    DEFAULT_METHOD,
    DeltaE,
    delta,
    delta_e_array,
)
from deltae_rgb import RgbSystem
from deltae_values import LabValue, LchValue, RgbValue

ALL_METHODS = [DE1976(), DE1994G, DE1994T, DE2000(), DECMC1, DECMC2]
SYMMETRIC_METHODS = [DE1976(), DE1994G, DE1994T, DE2000()]

# Sharma, Wu & Dalal (2005), "The CIEDE2000 color-difference formula", Table 1
SHARMA_PAIRS = [
    ((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485), 2.0425),
    ((50.0, 3.1571, -77.2803), (50.0, 0.0, -82.7485), 2.8615),
    ((50.0, 2.8361, -74.0200), (50.0, 0.0, -82.7485), 3.4412),
    ((50.0, -1.3802, -84.2814), (50.0, 0.0, -82.7485), 1.0000),
    ((50.0, 0.0, 0.0), (50.0, -1.0, 2.0), 2.3669),
    ((50.0, 2.4900, -0.0010), (50.0, -2.4900, 0.0009), 7.1792),
    ((50.0, 2.4900, -0.0010), (50.0, -2.4900, 0.0011), 7.2195),
    ((50.0, -0.0010, 2.4900), (50.0, 0.0009, -2.4900), 4.8045),
    ((50.0, 2.5000, 0.0000), (73.0, 25.0, -18.0), 27.1492),
    ((50.0, 2.5000, 0.0000), (56.0, -27.0, -3.0), 31.9030),
    ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
    ((2.0776, 0.0795, -1.1350), (0.9033, -0.0636, -0.5514), 0.9082),
]

PAIRS = [
    (LabValue(89.73, 1.88, -6.96), LabValue(95.08, -0.17, -10.81)),
    (LabValue(50.0, 20.0, 30.0), LabValue(55.0, 25.0, 35.0)),
    (LabValue(50.0, 80.0, 0.0), LabValue(60.0, 0.0, 10.0)),
    (LabValue(0.0, 0.0, 0.0), LabValue(100.0, 0.0, 0.0)),
    (LabValue(30.0, -60.0, 40.0), LabValue(32.0, 40.0, -60.0)),
]


def test_default_method_is_de2000():
    assert DEFAULT_METHOD == DE2000()
    assert delta(*PAIRS[0]).method == DE2000()


def test_de2000_scenario():
    de = delta(LabValue(89.73, 1.88, -6.96), LabValue(95.08, -0.17, -10.81), DE2000())
    assert de.round_to(4).value == pytest.approx(5.3169, abs=1e-4)


@pytest.mark.parametrize("lab1, lab2, expected", SHARMA_PAIRS)
def test_de2000_reference_pairs(lab1, lab2, expected):
    de = delta(LabValue(*lab1), LabValue(*lab2), DE2000())
    assert de.value == pytest.approx(expected, abs=1e-4)


def test_de1976_is_euclidean():
    assert delta(LabValue(50.0, 0.0, 0.0), LabValue(53.0, 4.0, 0.0), DE1976()).value == 5.0


def test_de1994_neutral_pair_is_lightness_only():
    # With zero chroma only the lightness term remains
    lab1, lab2 = LabValue(40.0, 0.0, 0.0), LabValue(50.0, 0.0, 0.0)
    assert delta(lab1, lab2, DE1994G).value == pytest.approx(10.0)
    assert delta(lab1, lab2, DE1994T).value == pytest.approx(5.0)


# Pairs with exact chromas (3-4-5 triangles) so S_C and S_H follow in
# closed form from CIE 116-1995: hue-only, chroma-only and lightness+hue.
DE1994_REFERENCE = [
    ((50.0, 30.0, 40.0), (50.0, 40.0, 30.0), DE1994G, math.sqrt(200.0) / 1.75),
    ((50.0, 30.0, 40.0), (50.0, 40.0, 30.0), DE1994T, math.sqrt(200.0) / 1.7),
    ((50.0, 30.0, 40.0), (50.0, 60.0, 80.0), DE1994G, 50.0 / (1.0 + 0.045 * math.sqrt(5000.0))),
    ((50.0, 30.0, 40.0), (50.0, 60.0, 80.0), DE1994T, 50.0 / (1.0 + 0.048 * math.sqrt(5000.0))),
    ((40.0, 30.0, 40.0), (50.0, 40.0, 30.0), DE1994G, 22.5 / 1.75),
    ((40.0, 30.0, 40.0), (50.0, 40.0, 30.0), DE1994T, 16.5 / 1.7),
]

# python-colormath test_delta_e reference values
CMC_REFERENCE = [
    ((0.9, 16.3, -2.22), (0.7, 14.2, -1.80), DECMC2, 1.443),
    ((0.9, 16.3, -2.22), (0.7, 14.2, -1.80), DECMC1, 1.482),
    # reference hue ~221.8 deg, inside the 164..345 branch of T
    ((69.417, -12.612, -11.271), (83.386, 39.426, -17.525), DECMC2, 44.346),
]


@pytest.mark.parametrize("lab1, lab2, method, expected", DE1994_REFERENCE)
def test_de1994_chromatic_pairs(lab1, lab2, method, expected):
    assert delta(LabValue(*lab1), LabValue(*lab2), method).value == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize("lab1, lab2, method, expected", CMC_REFERENCE)
def test_cmc_reference_pairs(lab1, lab2, method, expected):
    assert delta(LabValue(*lab1), LabValue(*lab2), method).value == pytest.approx(expected, abs=5e-4)


def test_de1994_textile_weighting_differs():
    lab1, lab2 = PAIRS[1]
    assert delta(lab1, lab2, DE1994G).value != delta(lab1, lab2, DE1994T).value


@pytest.mark.parametrize("method", SYMMETRIC_METHODS, ids=str)
@pytest.mark.parametrize("lab1, lab2", PAIRS)
def test_symmetry(method, lab1, lab2):
    assert delta(lab1, lab2, method).value == pytest.approx(delta(lab2, lab1, method).value, abs=1e-12)


def test_cmc_is_asymmetric():
    lab1, lab2 = LabValue(50.0, 80.0, 0.0), LabValue(60.0, 0.0, 10.0)
    forward = delta(lab1, lab2, DECMC1).value
    backward = delta(lab2, lab1, DECMC1).value
    assert forward != pytest.approx(backward, rel=1e-3)


def test_cmc_lightness_weight():
    lab1, lab2 = LabValue(50.0, 0.0, 0.0), LabValue(52.0, 0.0, 0.0)
    assert delta(lab1, lab2, DECMC2).value == pytest.approx(delta(lab1, lab2, DECMC1).value / 2.0)


@pytest.mark.parametrize("method", ALL_METHODS, ids=str)
@pytest.mark.parametrize("lab", [LabValue(0.0, 0.0, 0.0), LabValue(50.0, 20.0, -30.0),
                                 LabValue(100.0, -128.0, 128.0)])
def test_identity_is_zero(method, lab):
    assert delta(lab, lab, method).value == 0.0


def test_delta_accepts_mixed_color_types():
    lab = LabValue(50.0, 20.0, -30.0)
    assert delta(lab, lab.to_lch()).value == pytest.approx(0.0, abs=1e-6)
    assert lab.delta(lab.to_xyz()).value == pytest.approx(0.0, abs=1e-6)
    assert DeltaE.new(RgbValue(255, 255, 255), RgbValue(0, 0, 0), DE1976()).value == pytest.approx(100.0, abs=1e-3)


def test_delta_high_chroma_lch_against_lab():
    lch, lab = LchValue(50.0, 150.0, 0.0), LabValue(50.0, 0.0, 0.0)
    assert delta(lch, lab, DE1976()).value == pytest.approx(150.0)
    de = delta(lch, lab, DE2000())
    assert math.isfinite(de.value) and de.value > 0.0
    assert lch.delta_eq(lch)
    assert not lch.delta_eq(lab)


def test_delta_wide_gamut_rgb():
    pro_photo_blue = RgbValue(0, 0, 255).to_lab(RgbSystem.PRO_PHOTO)
    de = delta(pro_photo_blue, RgbValue(0, 0, 255))
    assert math.isfinite(de.value) and de.value > 0.0


def test_invalid_cmc_weights():
    with pytest.raises(OutOfBoundsError):
        DECMC(0.0, 1.0)


def test_unknown_method_type():
    with pytest.raises(TypeError):
        delta(*PAIRS[0], "de2000")


class TestDisplay:
    def test_method_names(self):
        assert str(DE2000()) == "DE2000"
        assert str(DE1976()) == "DE1976"
        assert str(DE1994G) == "DE1994"
        assert str(DE1994T) == "DE1994T"
        assert str(DECMC(1.0, 2.0)) == "DECMC(1:2)"
        assert format(DECMC(3.0, 4.0), ".4") == "DECMC(3.0000:4.0000)"

    def test_delta_e(self):
        assert str(DeltaE(DE2000(), 1.0)) == "1 DE2000"
        assert format(DeltaE(DE2000(), 1.0), ".4") == "1.0000 DE2000"
        assert format(DeltaE(DECMC1, 1.0), ".4") == "1.0000 DECMC(1.0000:1.0000)"

    def test_bad_format_spec(self):
        with pytest.raises(ValueError):
            format(DeltaE(DE2000(), 1.0), "x")


class TestComparison:
    def test_equality(self):
        assert DeltaE(DE2000(), 1.0) == DeltaE(DE2000(), 1.0)
        assert DeltaE(DE2000(), 1.0) != DeltaE(DE1976(), 1.0)
        assert DeltaE(DE2000(), 1.0) == 1.0
        assert float(DeltaE(DE1994(textile=True), 2.5)) == 2.5

    def test_ordering_same_method(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert DeltaE(DE2000(), 1.0) < DeltaE(DE2000(), 2.0)
            assert DeltaE(DE2000(), 2.0) >= 2.0

    def test_ordering_mixed_methods_warns(self):
        with pytest.warns(UserWarning, match="different methods"):
            assert DeltaE(DE2000(), 1.0) < DeltaE(DE1976(), 2.0)

    def test_sortable(self):
        values = [DeltaE(DE2000(), v) for v in (3.0, 1.0, 2.0)]
        assert [d.value for d in sorted(values)] == [1.0, 2.0, 3.0]


class TestBatch:
    def test_matches_scalar(self):
        lab1 = np.array([p[0] for p in SHARMA_PAIRS])
        lab2 = np.array([p[1] for p in SHARMA_PAIRS])
        expected = np.array([p[2] for p in SHARMA_PAIRS])
        np.testing.assert_allclose(delta_e_array(lab1, lab2), expected, atol=1e-4)

    @pytest.mark.parametrize("method", ALL_METHODS, ids=str)
    def test_methods_match_scalar(self, method):
        lab1 = np.array([p[0].to_tuple() for p in PAIRS])
        lab2 = np.array([p[1].to_tuple() for p in PAIRS])
        scalar = [delta(a, b, method).value for a, b in PAIRS]
        np.testing.assert_allclose(delta_e_array(lab1, lab2, method), scalar, rtol=1e-10)

    def test_broadcast_single_reference(self):
        ref = [50.0, 0.0, 0.0]
        samples = np.array([[50.0, 0.0, 0.0], [53.0, 4.0, 0.0]])
        np.testing.assert_allclose(delta_e_array(ref, samples, DE1976()), [0.0, 5.0])

    def test_single_pair_returns_float(self):
        out = delta_e_array([50.0, 0.0, 0.0], [53.0, 4.0, 0.0], DE1976())
        assert isinstance(out, float)
        assert out == 5.0

    def test_rejects_out_of_range(self):
        with pytest.raises(OutOfBoundsError):
            delta_e_array([[50.0, 0.0, 0.0], [101.0, 0.0, 0.0]], [50.0, 0.0, 0.0])

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            delta_e_array(np.zeros((2, 3)), np.zeros((3, 3)))
        with pytest.raises(ValueError):
            delta_e_array(np.zeros((2, 4)), np.zeros((2, 4)))
