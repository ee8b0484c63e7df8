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
Raster Classification ToolKit Test Suite.

This package contains tests for RCTK components including:
- Unit tests for individual functions and classes
- Integration tests for raster-to-scheme workflows
- End-to-end tests for CLI commands
"""
