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
Value Ranges and Color Categories.

A category is one contiguous numeric interval of a classification together
with the pair of colors interpolated across it. Inclusivity of each bound is
toggled independently so that adjacent categories can share a boundary value
without both claiming it.

Classes:
    ValueRange: A numeric interval with independent bound inclusivity.
    CategoryKind: Enum tagging the closed set of category variants.
    ColorCategory: A value range plus its low/high boundary colors.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional

from rctk.utils.colors import Color, TRANSPARENT, interpolate_colors
from rctk.utils.data_models import EditorSettings
from rctk.utils.exceptions import ArgumentError


def _format_bound(value: Optional[float], decimal_places: int) -> str:
    if value is None:
        return '∞'
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.{decimal_places}f}"


class ValueRange:
    """
    A numeric interval with independently toggleable bound inclusivity.

    A bound of None leaves that side unbounded. When both bounds are equal the
    range is a single point and both flags are forced true; otherwise it would
    contain nothing.

    Example:
        >>> r = ValueRange(0, 5, max_inclusive=True)
        >>> r.contains(5), r.contains(0)
        (True, False)
        >>> ValueRange(7, 7).contains(7)
        True
    """

    def __init__(self, minimum: Optional[float] = None, maximum: Optional[float] = None,
                 min_inclusive: bool = False, max_inclusive: bool = False):
        for name, value in (('minimum', minimum), ('maximum', maximum)):
            if value is not None and math.isnan(value):
                raise ArgumentError(f"Range {name} cannot be NaN")
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ArgumentError(f"Range minimum {minimum} is greater than maximum {maximum}")
        self._minimum = minimum
        self._maximum = maximum
        self._min_inclusive = bool(min_inclusive)
        self._max_inclusive = bool(max_inclusive)
        self._enforce_degenerate()

    def _enforce_degenerate(self):
        if self.is_degenerate:
            self._min_inclusive = True
            self._max_inclusive = True

    @property
    def minimum(self) -> Optional[float]:
        return self._minimum

    @property
    def maximum(self) -> Optional[float]:
        return self._maximum

    @property
    def min_inclusive(self) -> bool:
        return self._min_inclusive

    @min_inclusive.setter
    def min_inclusive(self, value: bool):
        self._min_inclusive = bool(value)
        self._enforce_degenerate()

    @property
    def max_inclusive(self) -> bool:
        return self._max_inclusive

    @max_inclusive.setter
    def max_inclusive(self, value: bool):
        self._max_inclusive = bool(value)
        self._enforce_degenerate()

    @property
    def is_degenerate(self) -> bool:
        """True when the range is a single point."""
        return self._minimum is not None and self._minimum == self._maximum

    @property
    def is_bounded(self) -> bool:
        return self._minimum is not None and self._maximum is not None

    def contains(self, value: float) -> bool:
        """
        Check whether a value falls inside the range.

        A value equal to a bound belongs to the range only if that bound is
        inclusive. NaN is never contained.
        """
        if value is None or math.isnan(value):
            return False
        if self._minimum is not None:
            if value < self._minimum or (value == self._minimum and not self._min_inclusive):
                return False
        if self._maximum is not None:
            if value > self._maximum or (value == self._maximum and not self._max_inclusive):
                return False
        return True

    def to_text(self, decimal_places: int = 2) -> str:
        """Interval notation, e.g. '[0, 5]' or '(5, 10]'."""
        opening = '[' if self._min_inclusive and self._minimum is not None else '('
        closing = ']' if self._max_inclusive and self._maximum is not None else ')'
        low = _format_bound(self._minimum, decimal_places)
        if self._minimum is None:
            low = '-' + low
        return f"{opening}{low}, {_format_bound(self._maximum, decimal_places)}{closing}"

    def to_canonical_form(self) -> Dict[str, Any]:
        return {
            "minimum": self._minimum,
            "maximum": self._maximum,
            "min_inclusive": self._min_inclusive,
            "max_inclusive": self._max_inclusive,
        }

    @classmethod
    def from_canonical_form(cls, data: Dict[str, Any]) -> 'ValueRange':
        return cls(data.get("minimum"), data.get("maximum"),
                   data.get("min_inclusive", False), data.get("max_inclusive", False))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueRange):
            return NotImplemented
        return self.to_canonical_form() == other.to_canonical_form()

    def __repr__(self) -> str:
        return f"ValueRange({self.to_text(decimal_places=6)})"


class CategoryKind(Enum):
    """The closed set of category variants a color scheme can hold."""
    RANGE = 'range'
    NO_DATA = 'no_data'


class ColorCategory:
    """
    A value range with a low and a high boundary color.

    Colors are interpolated linearly from `low_color` at the range minimum to
    `high_color` at the range maximum. A NO_DATA category marks a raster
    without usable samples: it is transparent and contains only the no-data
    sentinel itself.

    Attributes:
        kind: Variant tag (CategoryKind.RANGE or CategoryKind.NO_DATA)
        range: The ValueRange covered by the category
        low_color: Color at the range minimum
        high_color: Color at the range maximum
        legend_text: Text shown for the category in a legend
        styling: Editor styling hints passed through to the renderer
        no_data_value: The sentinel a NO_DATA category represents
    """

    def __init__(self, minimum: Optional[float] = None, maximum: Optional[float] = None,
                 low_color: Color = TRANSPARENT, high_color: Optional[Color] = None):
        self.kind = CategoryKind.RANGE
        self.range = ValueRange(minimum, maximum)
        self.low_color = low_color
        self.high_color = high_color if high_color is not None else low_color
        self.legend_text = self.range.to_text()
        self.styling: Dict[str, Any] = {}
        self.no_data_value: Optional[float] = None

    @classmethod
    def no_data(cls, no_data_value: Optional[float] = None) -> 'ColorCategory':
        """Create the single category used when a raster has no usable samples."""
        category = cls()
        category.kind = CategoryKind.NO_DATA
        category.no_data_value = no_data_value
        category.legend_text = 'No Data'
        return category

    @property
    def minimum(self) -> Optional[float]:
        return self.range.minimum

    @property
    def maximum(self) -> Optional[float]:
        return self.range.maximum

    def contains(self, value: float) -> bool:
        if self.kind is CategoryKind.NO_DATA:
            if self.no_data_value is None or value is None:
                return False
            if math.isnan(self.no_data_value):
                return math.isnan(value)
            return value == self.no_data_value
        return self.range.contains(value)

    def apply_color_boundaries(self, low_color: Color, high_color: Color):
        self.low_color = low_color
        self.high_color = high_color

    def interpolate_color(self, fraction: float) -> Color:
        """
        Return the color at `fraction` of the way from low_color to high_color.

        The fraction is clamped to [0, 1]. Single-point, unbounded and NO_DATA
        categories always return low_color.
        """
        if self.kind is CategoryKind.NO_DATA or not self.range.is_bounded or self.range.is_degenerate:
            return self.low_color
        return interpolate_colors(self.low_color, self.high_color, fraction)

    def color_for_value(self, value: float) -> Color:
        """Interpolate the color for a value by its position within the range."""
        if self.kind is CategoryKind.NO_DATA or not self.range.is_bounded or self.range.is_degenerate:
            return self.low_color
        span = self.range.maximum - self.range.minimum
        return self.interpolate_color((value - self.range.minimum) / span)

    def apply_editor_settings(self, settings: EditorSettings):
        """
        Derive the non-color defaults configured in the editor settings.

        Sets the legend text from the range using the configured decimal
        places and copies the styling hints (hatch pattern, outline).
        """
        if self.kind is CategoryKind.RANGE:
            self.legend_text = self.range.to_text(settings.decimal_places)
        self.styling = settings.styling_hints()

    def to_canonical_form(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "range": self.range.to_canonical_form(),
            "low_color": self.low_color.to_canonical_form(),
            "high_color": self.high_color.to_canonical_form(),
            "legend_text": self.legend_text,
            "styling": dict(self.styling),
            "no_data_value": self.no_data_value,
        }

    @classmethod
    def from_canonical_form(cls, data: Dict[str, Any]) -> 'ColorCategory':
        try:
            kind = CategoryKind(data.get("kind", CategoryKind.RANGE.value))
        except ValueError:
            raise ArgumentError(f"Unknown category kind: {data.get('kind')!r}")
        if kind is CategoryKind.NO_DATA:
            category = cls.no_data(data.get("no_data_value"))
        else:
            category = cls()
            category.range = ValueRange.from_canonical_form(data.get("range", {}))
        category.low_color = Color.from_canonical_form(data["low_color"])
        category.high_color = Color.from_canonical_form(data["high_color"])
        category.legend_text = data.get("legend_text", category.legend_text)
        category.styling = dict(data.get("styling", {}))
        return category

    def __repr__(self) -> str:
        return (f"ColorCategory(kind={self.kind.value}, range={self.range!r}, "
                f"low={self.low_color.to_hex(True)}, high={self.high_color.to_hex(True)})")
