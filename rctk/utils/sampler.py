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
Raster Value Sampler.

Draws a bounded random subset of values from a raster source for statistics
and break calculation, dropping the no-data sentinel and non-finite values.
"""

import logging
from typing import Optional

import numpy as np

from rctk.utils.exceptions import ArgumentError, RasterReadError
from rctk.utils.raster_sources import RasterSource, valid_mask

logger = logging.getLogger(__name__)


def sample_values(source: RasterSource, max_sample_count: int,
                  no_data_value: Optional[float] = None,
                  rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Sample up to `max_sample_count` usable values from a raster source.

    When the raster holds no more than `max_sample_count` cells every value
    is returned; otherwise the source picks a random subset. Values equal to
    the no-data sentinel, NaN and infinities are then removed, which can leave
    fewer than `max_sample_count` values.

    Args:
        source: The raster source to draw from
        max_sample_count: Maximum number of values to return, must be positive
        no_data_value: Sentinel to exclude; defaults to the source's own
        rng: Generator used to trim an oversized result (default: unseeded)

    Returns:
        1-D float64 array of sampled values, in no particular order

    Raises:
        ArgumentError: If max_sample_count is not a positive integer
        RasterReadError: If the source cannot supply readable values
    """
    if isinstance(max_sample_count, bool) or not isinstance(max_sample_count, (int, np.integer)) \
            or max_sample_count <= 0:
        raise ArgumentError(f"max_sample_count must be a positive integer, got {max_sample_count!r}")
    if no_data_value is None:
        no_data_value = source.no_data_value

    try:
        raw = source.get_random_values(int(max_sample_count))
    except OSError as e:
        if isinstance(e, RasterReadError):
            raise
        raise RasterReadError(f"Failed to read raster values: {e}") from e
    if raw is None:
        raise RasterReadError("Raster source exposed no readable values")

    values = np.asarray(raw, dtype=np.float64).ravel()
    if values.size > max_sample_count:
        rng = rng if rng is not None else np.random.default_rng()
        values = values[rng.choice(values.size, size=int(max_sample_count), replace=False)]

    kept = values[valid_mask(values, no_data_value)]
    logger.debug(f"Sampled {kept.size:,} usable values ({values.size - kept.size:,} no-data dropped)")
    return kept
