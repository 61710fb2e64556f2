# src/centraldeudores/transforms/colors.py
"""
Deterministic series colors.

Entities take colors from a fixed palette by position. Once the palette is
exhausted, the color is derived from a hash of the entity name, so the same
data always renders with the same colors across reloads.
"""

from __future__ import annotations

import colorsys
import hashlib

from centraldeudores.transforms import config


def _hex(r: float, g: float, b: float) -> str:
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def hashed_color(name: str) -> str:
    """Reproducible color for `name` (md5 of the UTF-8 name picks the hue)."""
    digest = hashlib.md5(name.encode("utf-8")).digest()
    hue = int.from_bytes(digest[:2], "big") / 65536.0
    r, g, b = colorsys.hls_to_rgb(hue, config.OVERFLOW_LIGHTNESS, config.OVERFLOW_SATURATION)
    return _hex(r, g, b)


def entity_color(name: str, index: int) -> str:
    """Color for the `index`-th entity series (0-based)."""
    palette = config.ENTITY_PALETTE
    if 0 <= index < len(palette):
        return palette[index]
    return hashed_color(name)
