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
Unit tests for value ranges and color categories.
"""

import math

import pytest

from rctk.utils.categories import CategoryKind, ColorCategory, ValueRange
from rctk.utils.colors import TRANSPARENT, Color
from rctk.utils.data_models import EditorSettings
from rctk.utils.exceptions import ArgumentError


@pytest.mark.unit
class TestValueRange:
    """Test ValueRange bounds and inclusivity."""

    def test_exclusive_by_default(self):
        """Test that both bounds are exclusive unless toggled."""
        r = ValueRange(0, 5)

        assert not r.contains(0)
        assert r.contains(2.5)
        assert not r.contains(5)

    def test_inclusive_bounds(self):
        r = ValueRange(0, 5, min_inclusive=True, max_inclusive=True)
        assert r.contains(0) and r.contains(5)
        assert not r.contains(-0.001) and not r.contains(5.001)

    def test_degenerate_range_forces_inclusive(self):
        """Test that a single-point range contains its value even when flags are cleared."""
        r = ValueRange(7, 7)
        assert r.is_degenerate
        assert r.contains(7)

        r.min_inclusive = False
        r.max_inclusive = False
        assert r.min_inclusive and r.max_inclusive
        assert r.contains(7)

    def test_unbounded(self):
        r = ValueRange()
        assert not r.is_bounded
        assert r.contains(-1e300) and r.contains(1e300)

    def test_nan_never_contained(self):
        assert not ValueRange().contains(float('nan'))

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ArgumentError):
            ValueRange(5, 0)

    def test_nan_bound_rejected(self):
        with pytest.raises(ArgumentError):
            ValueRange(float('nan'), 1)

    @pytest.mark.parametrize("r, text", [
        (ValueRange(0, 5, True, True), '[0, 5]'),
        (ValueRange(5, 10, False, True), '(5, 10]'),
        (ValueRange(0.125, 2500.5, True, False), '[0.12, 2,500.50)'),
        (ValueRange(None, 3), '(-∞, 3)'),
    ])
    def test_to_text(self, r, text):
        assert r.to_text(2) == text

    def test_equality_and_canonical_form(self):
        r = ValueRange(1, 2, True, False)
        assert ValueRange.from_canonical_form(r.to_canonical_form()) == r
        assert r != ValueRange(1, 2, True, True)


@pytest.mark.unit
class TestColorCategory:
    """Test ColorCategory colors, containment and editor defaults."""

    def test_high_color_defaults_to_low(self):
        category = ColorCategory(0, 1, Color(1, 2, 3))
        assert category.high_color == Color(1, 2, 3)
        assert category.kind is CategoryKind.RANGE

    def test_default_color_is_transparent(self):
        assert ColorCategory().low_color == TRANSPARENT

    def test_apply_color_boundaries(self):
        category = ColorCategory(0, 1)
        category.apply_color_boundaries(Color(0, 0, 0), Color(255, 255, 255))
        assert category.low_color == Color(0, 0, 0)
        assert category.high_color == Color(255, 255, 255)

    def test_interpolate_color(self):
        category = ColorCategory(0, 10, Color(0, 0, 0), Color(200, 100, 50))

        assert category.interpolate_color(0.0) == Color(0, 0, 0)
        assert category.interpolate_color(1.0) == Color(200, 100, 50)
        assert category.color_for_value(5) == Color(100, 50, 25)

    def test_degenerate_category_returns_low_color(self):
        """Test that a single-point category never divides by its zero width."""
        category = ColorCategory(3, 3, Color(9, 9, 9), Color(200, 200, 200))
        assert category.color_for_value(3) == Color(9, 9, 9)
        assert category.interpolate_color(0.7) == Color(9, 9, 9)

    def test_unbounded_category_returns_low_color(self):
        category = ColorCategory(None, None, Color(1, 1, 1), Color(2, 2, 2))
        assert category.color_for_value(1000) == Color(1, 1, 1)

    def test_apply_editor_settings(self):
        """Test that legend text and styling hints come from the editor settings."""
        category = ColorCategory(0.5, 1.25)
        category.range.min_inclusive = True
        category.apply_editor_settings(EditorSettings(decimal_places=3, hatch_pattern='cross'))

        assert category.legend_text == '[0.500, 1.250)'
        assert category.styling == {'hatch_pattern': 'cross', 'outline_width': 0.0}

    def test_canonical_form_round_trip(self):
        category = ColorCategory(1, 2, Color(1, 2, 3, 4), Color(5, 6, 7, 8))
        category.range.max_inclusive = True
        restored = ColorCategory.from_canonical_form(category.to_canonical_form())

        assert restored.to_canonical_form() == category.to_canonical_form()

    def test_unknown_kind_rejected(self):
        data = ColorCategory(0, 1).to_canonical_form()
        data["kind"] = "gradient"
        with pytest.raises(ArgumentError):
            ColorCategory.from_canonical_form(data)


@pytest.mark.unit
class TestNoDataCategory:
    """Test the NO_DATA category variant."""

    def test_only_contains_sentinel(self):
        category = ColorCategory.no_data(-9999.0)

        assert category.kind is CategoryKind.NO_DATA
        assert category.contains(-9999.0)
        assert not category.contains(0.0)
        assert category.low_color.is_transparent
        assert category.legend_text == 'No Data'

    def test_nan_sentinel(self):
        category = ColorCategory.no_data(math.nan)
        assert category.contains(float('nan'))
        assert not category.contains(1.0)

    def test_without_sentinel_contains_nothing(self):
        assert not ColorCategory.no_data(None).contains(0.0)

    def test_legend_text_survives_editor_settings(self):
        category = ColorCategory.no_data(-1.0)
        category.apply_editor_settings(EditorSettings())
        assert category.legend_text == 'No Data'

    def test_canonical_form_round_trip(self):
        category = ColorCategory.no_data(-9999.0)
        restored = ColorCategory.from_canonical_form(category.to_canonical_form())

        assert restored.kind is CategoryKind.NO_DATA
        assert restored.no_data_value == -9999.0
