# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Text parsing for methods and color values, the seam a command-line or
configuration front end calls into.

Method aliases (case-insensitive, surrounding whitespace ignored):

    | Alias                                        | Method        |
    |----------------------------------------------|---------------|
    | de2000  de00  2000  00                       | DE2000        |
    | de1976  de76  1976  76                       | DE1976        |
    | de1994  de94  1994  94  (and the ...g forms) | DE1994        |
    | de1994t de94t 1994t 94t                      | DE1994T       |
    | decmc   decmc1 cmc1 cmc                      | DECMC(1:1)    |
    | decmc2  cmc2                                 | DECMC(2:1)    |
"""

from __future__ import annotations

from typing import Dict, Final, Union

from deltae_errors import InvalidInputError
from deltae_illuminant import DEFAULT_ILLUMINANT, Illuminant
from deltae_metrics import DE1976, DE1994G, DE1994T, DE2000, DECMC1, DECMC2, DEMethod
from deltae_values import LabValue, LchValue, RgbValue, XyzValue, parse_triplet

__all__ = [
    "METHOD_ALIASES",
    "COLOR_TYPES",
    "parse_method",
    "parse_lab",
    "parse_lch",
    "parse_xyz",
    "parse_rgb",
    "parse_color",
]


def _aliases(method: DEMethod, *names: str) -> Dict[str, DEMethod]:
    return {name: method for name in names}


METHOD_ALIASES: Final[Dict[str, DEMethod]] = {
    **_aliases(DE2000(), "de2000", "de00", "2000", "00"),
    **_aliases(DE1976(), "de1976", "de76", "1976", "76"),
    **_aliases(DE1994G, "de1994", "de94", "1994", "94",
               "de1994g", "de94g", "1994g", "94g"),
    **_aliases(DE1994T, "de1994t", "de94t", "1994t", "94t"),
    **_aliases(DECMC1, "decmc", "decmc1", "cmc1", "cmc"),
    **_aliases(DECMC2, "decmc2", "cmc2"),
}

COLOR_TYPES: Final = ("lab", "lch", "xyz")


def parse_method(text: str) -> DEMethod:
    """
    Resolve a method alias.

    Raises:
        InvalidInputError: ``text`` is not a known alias.
    """
    try:
        return METHOD_ALIASES[text.strip().lower()]
    except (KeyError, AttributeError):
        raise InvalidInputError(f"Unknown Delta E method: '{text}'") from None


def parse_lab(text: str) -> LabValue:
    return LabValue.from_str(text)


def parse_lch(text: str) -> LchValue:
    return LchValue.from_str(text)


def parse_xyz(text: str, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> XyzValue:
    return XyzValue.from_str(text, illuminant)


def parse_rgb(text: str) -> RgbValue:
    """``"64, 128, 192"`` -> RgbValue; fractional channels are out of bounds."""
    return RgbValue(*parse_triplet(text))


def parse_color(text: str, color_type: str = "lab") -> Union[LabValue, LchValue, XyzValue]:
    """
    Parse ``text`` as the named color type (``"lab"``, ``"lch"`` or ``"xyz"``).

    Raises:
        InvalidInputError: unknown ``color_type``.
        BadFormatError: wrong token count or a non-numeric token.
        OutOfBoundsError: the parsed numbers are outside the type's range.
    """
    kind = color_type.strip().lower()
    if kind == "lab":
        return parse_lab(text)
    if kind == "lch":
        return parse_lch(text)
    if kind == "xyz":
        return parse_xyz(text)
    raise InvalidInputError(f"Unknown color type: '{color_type}' (expected one of {COLOR_TYPES})")
