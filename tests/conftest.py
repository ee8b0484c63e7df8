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
Pytest configuration and shared fixtures for the RCTK test suite.

All fixtures are function-scoped so tests never share mutable rasters or
schemes.
"""

import numpy as np
import pytest
from osgeo import gdal

from rctk.utils.data_models import EditorSettings
from tests.fixtures.mock_raster_factory import MockRaster

gdal.UseExceptions()


# =============================================================================
# Function-scope Fixtures
# =============================================================================

@pytest.fixture
def rng():
    """A seeded generator so random sampling is reproducible within a test."""
    return np.random.default_rng(12345)


@pytest.fixture
def editor_settings():
    """
    Editor settings independent of config.toml.

    Returns:
        EditorSettings: Defaults with an outline hint set
    """
    return EditorSettings(
        max_sample_count=1000,
        break_method='equal_interval',
        break_count=4,
        decimal_places=2,
        outline_color='#333333',
        outline_width=0.5,
    )


@pytest.fixture
def small_raster():
    """
    The five-value raster from the classification examples.

    Returns:
        MockRaster: 1x6 raster holding 1..5 and one -9999 NoData cell
    """
    return MockRaster(pixel_data=np.array([[1.0, 2.0, 3.0, 4.0, 5.0, -9999.0]]),
                      nodata_value=-9999.0)


@pytest.fixture
def mock_raster_with_nodata():
    """
    A 100x100 raster with exactly 42 NoData pixels.

    Returns:
        MockRaster: Float64 raster with values in [100, 500)
    """
    return MockRaster(width=100, height=100, nodata_value=-9999.0, nodata_pixel_count=42)


@pytest.fixture
def all_nodata_raster():
    """A raster whose every cell is NoData."""
    return MockRaster(pixel_data=np.full((8, 8), -9999.0), nodata_value=-9999.0)
