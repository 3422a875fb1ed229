import pytest

from deltae_convert import (
    lab_to_lch,
    lab_to_rgb,
    lab_to_xyz,
    lch_to_lab,
    rgb_to_lab,
    rgb_to_xyz,
    to_lab,
    xyz_to_lab,
    xyz_to_lch,
)
from deltae_illuminant import D50, D65, A
from deltae_rgb import RgbSystem
from deltae_values import LCH_MAX_CHROMA, LabValue, LchValue, RgbNominalValue, RgbValue, XyzValue

LAB_SAMPLES = [
    LabValue(0.0, 0.0, 0.0),
    LabValue(50.0, 0.0, 0.0),
    LabValue(100.0, 0.0, 0.0),
    LabValue(89.73, 1.88, -6.96),
    LabValue(50.0, 2.6772, -79.7751),
    LabValue(60.2574, -34.0099, 36.2677),
    LabValue(20.0, 60.0, -40.0),
    LabValue(75.0, -20.0, 90.0),
    LabValue(5.0, 3.0, -2.0),
]


def assert_lab_close(lhs, rhs, tol=1e-4):
    assert lhs.l == pytest.approx(rhs.l, abs=tol)
    assert lhs.a == pytest.approx(rhs.a, abs=tol)
    assert lhs.b == pytest.approx(rhs.b, abs=tol)


@pytest.mark.parametrize("lab", LAB_SAMPLES, ids=str)
def test_lab_lch_round_trip(lab):
    assert_lab_close(lch_to_lab(lab_to_lch(lab)), lab)


@pytest.mark.parametrize("lab", LAB_SAMPLES, ids=str)
@pytest.mark.parametrize("illuminant", [D50, D65, A], ids=str)
def test_lab_xyz_round_trip(lab, illuminant):
    xyz = lab_to_xyz(lab, illuminant)
    assert xyz.illuminant == illuminant
    assert_lab_close(xyz_to_lab(xyz, illuminant), lab)


def test_lch_hue_quadrants():
    assert lab_to_lch(LabValue(50.0, 0.0, -10.0)).h == pytest.approx(270.0)
    assert lab_to_lch(LabValue(50.0, -10.0, 0.0)).h == pytest.approx(180.0)
    neutral = lab_to_lch(LabValue(50.0, 0.0, 0.0))
    assert neutral.c == 0.0
    assert neutral.h == 0.0


def test_lch_hue_is_below_360():
    h = lab_to_lch(LabValue(50.0, 10.0, -1e-15)).h
    assert 0.0 <= h < 360.0


def test_reference_white_is_lab_white():
    lab = xyz_to_lab(XyzValue(0.96422, 1.0, 0.82521, D50))
    assert_lab_close(lab, LabValue(100.0, 0.0, 0.0), tol=1e-9)


def test_xyz_is_adapted_to_the_lab_illuminant():
    # D65 white seen under a D50 reference is still neutral
    lab = xyz_to_lab(XyzValue(0.95047, 1.0, 1.08883, D65), D50)
    assert_lab_close(lab, LabValue(100.0, 0.0, 0.0), tol=1e-2)


def test_srgb_white_and_black():
    white = rgb_to_lab(RgbValue(255, 255, 255))
    assert white.l == pytest.approx(100.0, abs=1e-3)
    assert white.a == pytest.approx(0.0, abs=1e-2)
    assert white.b == pytest.approx(0.0, abs=1e-2)
    assert_lab_close(rgb_to_lab(RgbValue(0, 0, 0)), LabValue(0.0, 0.0, 0.0), tol=1e-9)


def test_srgb_red_is_warm():
    red = RgbValue(255, 0, 0).to_lab()
    assert 53.0 < red.l < 56.0
    assert red.a > 75.0
    assert red.b > 60.0


def test_rgb_to_xyz_is_tagged_with_system_illuminant():
    xyz = rgb_to_xyz(RgbValue(255, 255, 255))
    assert xyz.illuminant == D65
    assert xyz.y == pytest.approx(1.0, abs=1e-6)
    assert rgb_to_xyz(RgbValue(255, 255, 255), RgbSystem.PRO_PHOTO).illuminant == D50


def test_pro_photo_white_is_d50_white():
    lab = RgbValue(255, 255, 255).to_lab(RgbSystem.PRO_PHOTO)
    assert_lab_close(lab, LabValue(100.0, 0.0, 0.0), tol=1e-5)


@pytest.mark.parametrize("rgb", [
    RgbValue(64, 128, 192),
    RgbValue(255, 255, 255),
    RgbValue(0, 0, 0),
    RgbValue(120, 160, 140),
])
@pytest.mark.parametrize("system", [RgbSystem.SRGB, RgbSystem.ADOBE_1998, RgbSystem.PRO_PHOTO], ids=str)
def test_rgb_lab_round_trip(rgb, system):
    assert lab_to_rgb(rgb_to_lab(rgb, system), system) == rgb


def test_out_of_gamut_lab_is_clamped():
    rgb = LabValue(50.0, -128.0, -128.0).to_rgb()
    assert all(0 <= ch <= 255 for ch in rgb.to_tuple())
    assert rgb.r == 0


def test_composites():
    lch = LchValue(50.0, 30.0, 120.0)
    xyz = lch.to_lab().to_xyz()
    back = xyz_to_lch(xyz)
    assert back.h == pytest.approx(120.0, abs=1e-4)
    assert back.c == pytest.approx(30.0, abs=1e-4)


def test_to_lab_dispatch():
    lab = LabValue(50.0, 10.0, 10.0)
    assert to_lab(lab) is lab
    assert_lab_close(to_lab(lab.to_lch()), lab)
    assert_lab_close(to_lab(lab.to_xyz()), lab)
    nom = RgbNominalValue(1.0, 1.0, 1.0)
    assert to_lab(nom) == to_lab(RgbValue(255, 255, 255))
    with pytest.raises(TypeError):
        to_lab("50, 10, 10")


def test_wide_gamut_primary_leaves_lab_box():
    lab = RgbValue(0, 0, 255).to_lab(RgbSystem.PRO_PHOTO)
    assert lab.to_tuple() == pytest.approx((0.077412, 90.290992, -172.280323), abs=1e-4)
    lch = lab.to_lch()
    assert lch.c > LCH_MAX_CHROMA
    assert_lab_close(lch.to_lab(), lab)


def test_high_chroma_lch_converts():
    lab = LchValue(50.0, 150.0, 0.0).to_lab()
    assert lab.to_tuple() == pytest.approx((50.0, 150.0, 0.0), abs=1e-9)
    assert lab.round_to(2).a == 150.0


def test_xyz_brighter_than_white():
    lab = XyzValue(1.5, 1.5, 1.5, D50).to_lab(D50)
    assert lab.l > 100.0
