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
Test fixtures and mock data factories for RCTK tests.

This package contains:
- MockRaster: Factory for creating in-memory single-band test rasters
- FailingRasterSource: A raster source whose reads always fail
"""

from tests.fixtures.mock_raster_factory import FailingRasterSource, MockRaster

__all__ = ['MockRaster', 'FailingRasterSource']
