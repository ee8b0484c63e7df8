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
Break Strategies for Statistics-Driven Classification.

A break strategy turns a sample set and its statistics into an ascending list
of interval edges spanning [minimum, maximum]. The first edge is always the
domain minimum and the last the domain maximum; n edges describe n - 1
intervals. Strategies are looked up by name so new ones can be registered
without touching the engine.

Built-in strategies:
    equal_interval: N intervals of equal width (the default)
    quantile: N intervals holding roughly equal numbers of samples
    std_dev: Edges at the mean +/- 1 and 2 standard deviations
"""

import logging
from typing import Callable, Dict, List

import numpy as np

from rctk.utils.data_models import Statistics
from rctk.utils.exceptions import ArgumentError

logger = logging.getLogger(__name__)

# (values, statistics, domain_min, domain_max, count) -> edges
BreakStrategy = Callable[[np.ndarray, Statistics, float, float, int], List[float]]

DEFAULT_BREAK_METHOD = 'equal_interval'


def _finalize_edges(edges, minimum: float, maximum: float) -> List[float]:
    """Pin the end edges to the domain and drop duplicates and out-of-range edges."""
    inner = sorted({float(e) for e in edges if minimum < e < maximum})
    if minimum == maximum:
        return [float(minimum), float(maximum)]
    return [float(minimum)] + inner + [float(maximum)]


def equal_interval(values: np.ndarray, statistics: Statistics,
                   minimum: float, maximum: float, count: int) -> List[float]:
    """Split [minimum, maximum] into `count` intervals of equal width."""
    edges = np.linspace(minimum, maximum, count + 1)
    return _finalize_edges(edges[1:-1], minimum, maximum)


def quantile(values: np.ndarray, statistics: Statistics,
             minimum: float, maximum: float, count: int) -> List[float]:
    """
    Place edges at evenly spaced quantiles of the samples.

    Heavily repeated values can make neighbouring quantiles coincide; those
    edges collapse, so fewer than `count` intervals may come back.
    """
    if values.size == 0:
        return equal_interval(values, statistics, minimum, maximum, count)
    edges = np.quantile(values, np.linspace(0.0, 1.0, count + 1))
    return _finalize_edges(edges[1:-1], minimum, maximum)


def std_dev(values: np.ndarray, statistics: Statistics,
            minimum: float, maximum: float, count: int) -> List[float]:
    """
    Place edges at the mean +/- 1 and 2 standard deviations.

    `count` is ignored; the number of intervals depends on how many of the
    four edges fall inside the domain.
    """
    if statistics.is_empty:
        return _finalize_edges([], minimum, maximum)
    mean, std = statistics.mean, statistics.std_dev
    edges = [mean - 2 * std, mean - std, mean + std, mean + 2 * std]
    return _finalize_edges(edges, minimum, maximum)


_STRATEGIES: Dict[str, BreakStrategy] = {
    'equal_interval': equal_interval,
    'quantile': quantile,
    'std_dev': std_dev,
}


def register_break_strategy(name: str, strategy: BreakStrategy):
    """Register (or replace) a break strategy under `name`."""
    if not callable(strategy):
        raise ArgumentError(f"Break strategy '{name}' must be callable")
    _STRATEGIES[name] = strategy
    logger.debug(f"Registered break strategy '{name}'")


def get_break_strategy(name: str) -> BreakStrategy:
    try:
        return _STRATEGIES[name]
    except KeyError:
        raise ArgumentError(f"Unknown break method '{name}'. Available: {', '.join(available_break_methods())}")


def available_break_methods() -> List[str]:
    return sorted(_STRATEGIES)


def compute_breaks(method: str, values: np.ndarray, statistics: Statistics,
                   minimum: float, maximum: float, count: int) -> List[float]:
    """
    Run the named strategy and normalize its output.

    Edges returned by the strategy are clipped to the domain, sorted and
    deduplicated, so a registered strategy only has to get the inner edges
    right.

    Raises:
        ArgumentError: For an unknown method, a non-positive count, or an
            inverted domain
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
        raise ArgumentError(f"Break count must be a positive integer, got {count!r}")
    if minimum > maximum:
        raise ArgumentError(f"Domain minimum {minimum} is greater than maximum {maximum}")
    edges = get_break_strategy(method)(values, statistics, minimum, maximum, count)
    edges = _finalize_edges(edges, minimum, maximum)
    logger.debug(f"{method} produced {len(edges) - 1} interval(s): {edges}")
    return edges
