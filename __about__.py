# -*- coding: utf-8 -*-
# DeltaE: Perceptual color difference for colorimetric tolerancing.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for DeltaE.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "DeltaE"
__description__: Final[str] = (
    "CIE color difference metrics (DE1976, DE1994, DE2000, CMC l:c) with "
    "the Lab/Lch/XYZ/RGB conversions and chromatic adaptation they rely on."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "author": __author__,
        "license": __license__,
        "description": __description__,
    }
