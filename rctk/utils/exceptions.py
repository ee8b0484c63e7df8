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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the Raster
Classification ToolKit.
"""

class ClassificationError(Exception):
    """Base exception for errors raised by the classification engine."""
    pass

class ArgumentError(ClassificationError, ValueError):
    """Invalid configuration, e.g. a non-positive sample count or min > max."""
    pass

class RasterReadError(ClassificationError, IOError):
    """Raised when the raster source cannot supply readable values."""
    pass
