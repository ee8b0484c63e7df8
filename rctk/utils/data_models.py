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
Data Models for the Raster Classification ToolKit.

This module defines strongly-typed data classes shared between the sampler,
the statistics calculator and the classification engine. These classes provide
type safety, self-documentation, and clear contracts between modules.

Domain model classes:
    Statistics: Descriptive statistics over a sample set, with an explicit empty state
    EditorSettings: Sampling limits, break configuration and default styling hints

Notification classes:
    SchemeChange: Change descriptor handed to scheme observers
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from rctk.utils.config_loader import config
from rctk.utils.exceptions import ArgumentError


# ============================================================================
# Domain model classes
# ============================================================================

@dataclass(frozen=True)
class Statistics:
    """
    Represents descriptive statistics computed from a sample set.

    A count of zero is a distinct "no statistics" state: every other field is
    None and downstream code must check `is_empty` before doing boundary math.

    Attributes:
        count: Number of values the statistics were computed from
        minimum: Smallest value
        maximum: Largest value
        mean: Arithmetic mean
        std_dev: Population standard deviation (denominator = count)
        median: Median value

    Example:
        >>> stats = Statistics(count=5, minimum=1.0, maximum=5.0, mean=3.0,
        ...                    std_dev=1.414, median=3.0)
        >>> stats.range()
        4.0
        >>> Statistics.empty().is_empty
        True
    """
    count: int
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    mean: Optional[float] = None
    std_dev: Optional[float] = None
    median: Optional[float] = None

    @classmethod
    def empty(cls) -> 'Statistics':
        """Return the sentinel result for an empty sample set."""
        return cls(count=0)

    @property
    def is_empty(self) -> bool:
        """True when no values contributed to these statistics."""
        return self.count == 0

    @classmethod
    def get_display_fields(cls) -> List[Tuple[str, str]]:
        """
        Returns field metadata for table rendering.

        Returns:
            List of (display_name, field_name) tuples
        """
        return [
            ("Count", "count"),
            ("Minimum", "minimum"),
            ("Maximum", "maximum"),
            ("Mean", "mean"),
            ("Std Dev", "std_dev"),
            ("Median", "median"),
        ]

    def range(self) -> Optional[float]:
        """
        Calculate the range (max - min) of the sampled values.

        Returns:
            The range if statistics are available, None otherwise
        """
        if self.is_empty:
            return None
        return self.maximum - self.minimum

    def to_canonical_form(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "median": self.median,
        }


@dataclass
class EditorSettings:
    """
    Editor-configured defaults consumed by the classification engine.

    The engine reads the sampling limit and break configuration from here and
    copies the styling hints onto every category it creates. It never
    interprets the hints itself; they are passed through to whichever legend
    or renderer draws the categories.

    Attributes:
        max_sample_count: Maximum number of raster values sampled for statistics
        break_method: Name of the registered break strategy
        break_count: Number of intervals the break strategy should produce
        decimal_places: Decimal places used in category legend text
        hatch_pattern: Optional hatch pattern name for category fills
        outline_color: Optional outline color (hex string)
        outline_width: Outline width in display units

    Example:
        >>> settings = EditorSettings(max_sample_count=500, break_count=3)
        >>> settings.styling_hints()
        {'outline_width': 0.0}
    """
    max_sample_count: int = 10000
    break_method: str = 'equal_interval'
    break_count: int = 5
    decimal_places: int = 2
    hatch_pattern: Optional[str] = None
    outline_color: Optional[str] = None
    outline_width: float = 0.0

    def __post_init__(self):
        if isinstance(self.max_sample_count, bool) or not isinstance(self.max_sample_count, int) \
                or self.max_sample_count <= 0:
            raise ArgumentError(f"max_sample_count must be a positive integer, got {self.max_sample_count!r}")
        if isinstance(self.break_count, bool) or not isinstance(self.break_count, int) \
                or self.break_count <= 0:
            raise ArgumentError(f"break_count must be a positive integer, got {self.break_count!r}")
        if self.decimal_places < 0:
            raise ArgumentError(f"decimal_places cannot be negative, got {self.decimal_places}")

    @classmethod
    def from_config(cls) -> 'EditorSettings':
        """Build settings from the [sampling], [classification] and [styling] config sections."""
        styling = config.get_section("styling")
        return cls(
            max_sample_count=int(config.get("sampling.max_sample_count", 10000)),
            break_method=config.get("classification.break_method", "equal_interval"),
            break_count=int(config.get("classification.break_count", 5)),
            decimal_places=int(config.get("classification.decimal_places", 2)),
            hatch_pattern=styling.get("hatch_pattern"),
            outline_color=styling.get("outline_color"),
            outline_width=float(styling.get("outline_width", 0.0)),
        )

    def styling_hints(self) -> Dict[str, Any]:
        """Return the styling hints that are set, keyed by hint name."""
        hints = {
            "hatch_pattern": self.hatch_pattern,
            "outline_color": self.outline_color,
            "outline_width": self.outline_width,
        }
        return {key: value for key, value in hints.items() if value is not None}


# ============================================================================
# Notification classes
# ============================================================================

@dataclass(frozen=True)
class SchemeChange:
    """
    Describes a completed change to a color scheme.

    Attributes:
        scheme: The scheme whose categories changed
        reason: Short machine-readable reason (e.g., 'apply_scheme', 'add_category')
        category_count: Number of categories after the change
    """
    scheme: Any = field(repr=False)
    reason: str
    category_count: int
