# -*- coding: utf-8 -*-
"""
DeltaE: Perceptual color difference for colorimetric tolerancing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Error hierarchy for user-supplied data.

All errors derive from ``ValueError`` so callers that already guard numeric
input with ``except ValueError`` keep working.  Structural defects inside
the library (a matrix index outside its fixed shape) are not part of this
hierarchy and raise the builtin ``IndexError``.
"""

from typing import Any

__all__ = [
    "ColorValueError",
    "OutOfBoundsError",
    "BadFormatError",
    "InvalidInputError",
]


class ColorValueError(ValueError):
    """Base class for recoverable errors caused by caller-supplied values."""


class OutOfBoundsError(ColorValueError):
    """A constructed value lies outside the numeric range of its domain."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"value is out of range: '{value}'")


class BadFormatError(ColorValueError):
    """Textual input does not parse into the expected count/type of fields."""

    def __init__(self, text: Any) -> None:
        self.text = text
        super().__init__(f"value is malformed: '{text}'")


class InvalidInputError(ColorValueError):
    """An argument is of the right type but not an accepted choice."""
