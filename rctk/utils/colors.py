#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: Raster Classification ToolKit (RCTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Color Constants and Logic.

This module provides a centralized source for the palette presets and the
color math used when assigning colors to classification categories: opacity
to alpha conversion, palette lookup and linear per-channel interpolation.

Classes:
    Color: An immutable RGBA color with 8-bit channels.
    PaletteType: Enum of the named palette presets.
    PaletteStops: The resolved low/mid/high colors of a palette.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union

import numpy as np

from rctk.utils.exceptions import ArgumentError


def _byte_range(value: float) -> int:
    """Round a channel value and clamp it to [0, 255]."""
    return int(min(255, max(0, round(value))))


@dataclass(frozen=True)
class Color:
    """
    An immutable RGBA color with 8-bit channels.

    Example:
        >>> Color(10, 100, 10).to_hex()
        '#0a640a'
        >>> Color.from_hex('#0a640a80').alpha
        128
    """
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self):
        for name in ('red', 'green', 'blue', 'alpha'):
            value = getattr(self, name)
            if not isinstance(value, (int, np.integer)) or not 0 <= value <= 255:
                raise ArgumentError(f"Color channel '{name}' must be an integer in [0, 255], got {value!r}")
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_hex(cls, hex_color: str) -> 'Color':
        """Parse '#rrggbb' or '#rrggbbaa'."""
        digits = hex_color.lstrip('#')
        if len(digits) not in (6, 8):
            raise ArgumentError(f"Invalid hex color: '{hex_color}'")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            raise ArgumentError(f"Invalid hex color: '{hex_color}'")
        return cls(*channels)

    def to_hex(self, include_alpha: bool = False) -> str:
        text = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if include_alpha:
            text += f"{self.alpha:02x}"
        return text

    def with_alpha(self, alpha: int) -> 'Color':
        return Color(self.red, self.green, self.blue, alpha)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)

    @property
    def is_transparent(self) -> bool:
        return self.alpha == 0

    def to_canonical_form(self) -> Dict[str, int]:
        return {"red": self.red, "green": self.green, "blue": self.blue, "alpha": self.alpha}

    @classmethod
    def from_canonical_form(cls, data: Dict[str, Any]) -> 'Color':
        return cls(data["red"], data["green"], data["blue"], data.get("alpha", 255))


# Matches the conventional "transparent" named color (white with zero alpha).
TRANSPARENT = Color(255, 255, 255, 0)


class PaletteType(Enum):
    """Enumeration of the named palette presets."""
    SUMMER_MOUNTAINS = 'SummerMountains'
    FALL_LEAVES = 'FallLeaves'
    DESERT = 'Desert'
    GLACIERS = 'Glaciers'
    MEADOW = 'Meadow'
    VALLEY_FIRES = 'ValleyFires'
    DEAD_SEA = 'DeadSea'
    HIGHWAY = 'Highway'


# Low, mid and high RGB stops for each preset. Opacity is applied on resolve.
PALETTES: Dict[PaletteType, Tuple[Tuple[int, int, int], Tuple[int, int, int], Tuple[int, int, int]]] = {
    PaletteType.SUMMER_MOUNTAINS: ((10, 100, 10), (153, 125, 25), (255, 255, 255)),
    PaletteType.FALL_LEAVES: ((10, 100, 10), (199, 130, 61), (241, 220, 133)),
    PaletteType.DESERT: ((211, 206, 97), (139, 120, 112), (255, 255, 255)),
    PaletteType.GLACIERS: ((105, 171, 224), (162, 234, 240), (255, 255, 255)),
    PaletteType.MEADOW: ((68, 128, 71), (43, 91, 30), (167, 220, 168)),
    PaletteType.VALLEY_FIRES: ((164, 0, 0), (255, 128, 64), (255, 255, 191)),
    PaletteType.DEAD_SEA: ((51, 137, 208), (226, 227, 166), (151, 146, 117)),
    PaletteType.HIGHWAY: ((51, 137, 208), (214, 207, 124), (54, 152, 69)),
}


class PaletteStops(NamedTuple):
    """The three resolved colors of a palette."""
    low: Color
    mid: Color
    high: Color


def opacity_to_alpha(opacity: float) -> int:
    """Map an opacity in [0, 1] to an 8-bit alpha channel, rounding and clamping."""
    return _byte_range(float(opacity) * 255.0)


def find_palette(name: Union[str, PaletteType, None]) -> Optional[PaletteType]:
    """
    Look up a palette preset by enum member, value or member name.

    String lookups ignore case, so 'summermountains' and 'SUMMER_MOUNTAINS'
    both resolve to PaletteType.SUMMER_MOUNTAINS.

    Returns:
        The matching PaletteType, or None if the name is unknown
    """
    if name is None or isinstance(name, PaletteType):
        return name
    key = str(name).strip().lower()
    for palette in PaletteType:
        if key in (palette.value.lower(), palette.name.lower()):
            return palette
    return None


def resolve_palette(name: Union[str, PaletteType, None], opacity: float = 1.0) -> PaletteStops:
    """
    Resolve a named palette to its low, mid and high colors.

    Unknown or missing names resolve to a fully transparent triple rather
    than raising, so callers can request "no styling" for palettes built
    elsewhere.

    Args:
        name: Palette name or PaletteType member
        opacity: Opacity in [0, 1] applied to every stop's alpha channel

    Returns:
        PaletteStops with low, mid and high colors
    """
    palette = find_palette(name)
    if palette is None:
        return PaletteStops(TRANSPARENT, TRANSPARENT, TRANSPARENT)
    alpha = opacity_to_alpha(opacity)
    low, mid, high = (Color(*rgb, alpha) for rgb in PALETTES[palette])
    return PaletteStops(low, mid, high)


def interpolate_colors(low: Color, high: Color, fraction: float) -> Color:
    """
    Linearly interpolate each channel between two colors.

    The fraction is clamped to [0, 1]. Fraction 0 returns `low` and fraction 1
    returns `high` exactly.
    """
    fraction = min(1.0, max(0.0, float(fraction)))
    if fraction == 0.0:
        return low
    if fraction == 1.0:
        return high
    channels = (
        _byte_range(lo + (hi - lo) * fraction)
        for lo, hi in zip(low.as_tuple(), high.as_tuple())
    )
    return Color(*channels)


def ramp_color(stops: PaletteStops, minimum: float, maximum: float, value: float) -> Color:
    """
    Sample a three-stop ramp spanning [minimum, maximum] at `value`.

    The mid stop sits at the domain midpoint. Values below it interpolate
    between the low and mid stops, values above it between mid and high.
    """
    if maximum <= minimum:
        return stops.low
    middle = (minimum + maximum) / 2.0
    if value <= middle:
        return interpolate_colors(stops.low, stops.mid, (value - minimum) / (middle - minimum))
    return interpolate_colors(stops.mid, stops.high, (value - middle) / (maximum - middle))


def random_color(rng: Optional[np.random.Generator] = None, alpha: int = 255) -> Color:
    """Return a random color with the given alpha."""
    rng = rng if rng is not None else np.random.default_rng()
    red, green, blue = (int(channel) for channel in rng.integers(0, 256, size=3))
    return Color(red, green, blue, alpha)
