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
Unit tests for the statistics calculator.
"""

import math

import numpy as np
import pytest

from rctk.utils.statistics_calculator import calculate_statistics, format_number


@pytest.mark.unit
class TestCalculateStatistics:
    """Test calculate_statistics over sample sets."""

    def test_five_values(self):
        """Test the worked example 1..5: mean 3, population std sqrt(2)."""
        stats = calculate_statistics(np.array([1.0, 2.0, 3.0, 4.0, 5.0]))

        assert stats.count == 5
        assert stats.minimum == 1.0
        assert stats.maximum == 5.0
        assert stats.mean == 3.0
        assert stats.std_dev == pytest.approx(math.sqrt(2.0))
        assert stats.median == 3.0

    def test_empty_input(self):
        """Test that no values give the empty sentinel instead of NaN."""
        stats = calculate_statistics(np.array([]))
        assert stats.is_empty
        assert stats.mean is None

    def test_accepts_plain_iterables(self):
        stats = calculate_statistics([2, 4])
        assert stats.mean == 3.0
        assert stats.std_dev == 1.0

    def test_single_value(self):
        stats = calculate_statistics([7.5])
        assert stats.minimum == stats.maximum == stats.mean == 7.5
        assert stats.std_dev == 0.0

    def test_mean_within_range(self):
        """Test the mean never leaves [min, max] for constant data."""
        stats = calculate_statistics(np.full(1000, 0.1))
        assert stats.minimum <= stats.mean <= stats.maximum


@pytest.mark.unit
class TestFormatNumber:
    """Test number formatting used in reports."""

    @pytest.mark.parametrize("value, text", [
        (1234, '1,234'),
        (1234.0, '1,234'),
        (0.5, '0.5000'),
        (-1234.56789, '-1,234.5679'),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text
