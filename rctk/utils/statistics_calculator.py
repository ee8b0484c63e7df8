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
Statistics Calculator.

Computes descriptive statistics over a sample set of raster values. An empty
sample set produces the `Statistics.empty()` sentinel rather than NaN values,
so nothing undefined can leak into category boundaries or color math.
"""

import logging
from typing import Iterable, Union

import numpy as np

from rctk.utils.data_models import Statistics

logger = logging.getLogger(__name__)


def format_number(num: float, decimals: int = 4) -> str:
    """Format a number with thousand separators and specified decimals."""
    if isinstance(num, int) or (isinstance(num, float) and num.is_integer()):
        return f"{int(num):,}"
    return f"{num:,.{decimals}f}"


def calculate_statistics(values: Union[np.ndarray, Iterable[float]]) -> Statistics:
    """
    Calculate count, minimum, maximum, mean, standard deviation and median.

    The standard deviation is the population form (denominator = count, as
    numpy's default ddof=0), which is what the legend displays. The mean is
    clamped into [minimum, maximum] so accumulated rounding can never place
    it outside the data range.

    Args:
        values: Sample values; the caller is expected to have removed no-data

    Returns:
        Statistics, or Statistics.empty() when no values were given
    """
    data = np.asarray(list(values) if not isinstance(values, np.ndarray) else values, dtype=np.float64).ravel()
    if data.size == 0:
        logger.debug("No values supplied; returning empty statistics")
        return Statistics.empty()

    minimum = float(np.min(data))
    maximum = float(np.max(data))
    mean = min(maximum, max(minimum, float(np.mean(data))))
    return Statistics(
        count=int(data.size),
        minimum=minimum,
        maximum=maximum,
        mean=mean,
        std_dev=float(np.std(data)),
        median=float(np.median(data)),
    )
