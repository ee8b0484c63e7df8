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
Color Scheme and Classification Engine.

A `ColorScheme` owns an ordered collection of color categories plus a global
opacity. It classifies a value domain in one of two ways:

- `apply_scheme`: a fixed midpoint split of [min, max] into two categories
  (or one category when min == max), colored low->mid and mid->high.
- `create_categories`: samples a raster, computes statistics, and builds one
  category per interval produced by a pluggable break strategy, colored along
  the palette ramp.

Every classification builds its categories first and replaces the collection
in a single step, so a failing call leaves the scheme untouched. Observers
registered with `subscribe` receive one `SchemeChange` per completed change;
`batch_update` defers notifications so bulk edits produce only one.

A scheme is not locked internally: callers must not run two classifications
on the same scheme concurrently.

Classes:
    ColorScheme: Ordered color categories with classification entry points.
"""

import logging
import math
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from rctk.utils.break_strategies import compute_breaks
from rctk.utils.categories import ColorCategory
from rctk.utils.colors import Color, PaletteStops, PaletteType, random_color, ramp_color, resolve_palette
from rctk.utils.config_loader import config
from rctk.utils.data_models import EditorSettings, SchemeChange, Statistics
from rctk.utils.exceptions import ArgumentError
from rctk.utils.raster_sources import RasterSource
from rctk.utils.sampler import sample_values
from rctk.utils.statistics_calculator import calculate_statistics

logger = logging.getLogger(__name__)

SchemeListener = Callable[[SchemeChange], None]
PaletteName = Union[str, PaletteType, None]


def _validate_opacity(opacity: float) -> float:
    try:
        value = float(opacity)
    except (TypeError, ValueError):
        raise ArgumentError(f"Opacity must be a number, got {opacity!r}")
    if not 0.0 <= value <= 1.0:
        raise ArgumentError(f"Opacity must be between 0.0 and 1.0, got {opacity}")
    return value


def _validate_domain(minimum: float, maximum: float) -> Tuple[float, float]:
    for name, value in (('minimum', minimum), ('maximum', maximum)):
        if value is None or not math.isfinite(value):
            raise ArgumentError(f"Classification {name} must be a finite number, got {value!r}")
    if minimum > maximum:
        raise ArgumentError(f"Classification minimum {minimum} is greater than maximum {maximum}")
    return float(minimum), float(maximum)


class ColorScheme:
    """
    An ordered collection of color categories with a global opacity.

    Attributes:
        palette: Palette used when a classification call does not name one
        editor_settings: Sampling, break and styling defaults
        values: The last sample set drawn from a raster
        statistics: Statistics of the last sample set

    Example:
        >>> scheme = ColorScheme(opacity=1.0)
        >>> change = scheme.apply_scheme('SummerMountains', 0, 10)
        >>> [c.legend_text for c in scheme.categories]
        ['[0, 5]', '(5, 10]']
    """

    def __init__(self, palette: PaletteName = None, opacity: Optional[float] = None,
                 editor_settings: Optional[EditorSettings] = None):
        self.palette = palette if palette is not None else config.get("classification.default_palette")
        self._opacity = _validate_opacity(opacity if opacity is not None
                                          else config.get("classification.opacity", 1.0))
        self.editor_settings = editor_settings if editor_settings is not None else EditorSettings.from_config()
        self._categories: List[ColorCategory] = []
        self._listeners: List[SchemeListener] = []
        self._batch_depth = 0
        self._pending_reason: Optional[str] = None
        self.values: np.ndarray = np.empty(0, dtype=np.float64)
        self.statistics: Statistics = Statistics.empty()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def categories(self) -> Tuple[ColorCategory, ...]:
        """The categories in legend order (read-only view)."""
        return tuple(self._categories)

    @property
    def opacity(self) -> float:
        return self._opacity

    @opacity.setter
    def opacity(self, value: float):
        self._opacity = _validate_opacity(value)

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[ColorCategory]:
        return iter(tuple(self._categories))

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: SchemeListener):
        """Register a callable to receive a SchemeChange after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SchemeListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    @contextmanager
    def batch_update(self):
        """
        Defer change notifications until the outermost batch exits.

        Example:
            >>> with scheme.batch_update():
            ...     scheme.add_category(a)
            ...     scheme.add_category(b)   # one notification, fired here
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending_reason is not None:
                reason, self._pending_reason = self._pending_reason, None
                self._notify(reason)

    def _changed(self, reason: str) -> SchemeChange:
        if self._batch_depth > 0:
            self._pending_reason = reason
            return SchemeChange(self, reason, len(self._categories))
        return self._notify(reason)

    def _notify(self, reason: str) -> SchemeChange:
        change = SchemeChange(self, reason, len(self._categories))
        for listener in list(self._listeners):
            listener(change)
        return change

    def _replace_categories(self, categories: Sequence[ColorCategory], reason: str) -> SchemeChange:
        self._categories = list(categories)
        return self._changed(reason)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def _finish(self, category: ColorCategory) -> ColorCategory:
        category.apply_editor_settings(self.editor_settings)
        return category

    def _no_data_categories(self, no_data_value: Optional[float]) -> List[ColorCategory]:
        return [self._finish(ColorCategory.no_data(no_data_value))]

    def _two_bucket_categories(self, stops: PaletteStops, minimum: float, maximum: float) -> List[ColorCategory]:
        if minimum == maximum:
            single = ColorCategory(minimum, maximum, stops.low, stops.low)
            return [self._finish(single)]

        middle = (minimum + maximum) / 2.0
        if math.isinf(middle):
            middle = minimum / 2.0 + maximum / 2.0
        if not minimum < middle < maximum:
            # Adjacent doubles: the midpoint rounds onto a bound.
            middle = minimum
        low = ColorCategory(minimum, middle, stops.low, stops.mid)
        low.range.min_inclusive = True
        low.range.max_inclusive = True
        high = ColorCategory(middle, maximum, stops.mid, stops.high)
        high.range.max_inclusive = True
        return [self._finish(low), self._finish(high)]

    def apply_scheme(self, palette: PaletteName, minimum: float, maximum: float,
                     opacity: Optional[float] = None) -> SchemeChange:
        """
        Classify [minimum, maximum] into two categories split at the midpoint.

        The lower category [min, mid] owns the midpoint and runs low->mid; the
        upper category (mid, max] runs mid->high. When minimum == maximum a
        single fully inclusive category colored with the palette's low color
        is produced instead.

        Args:
            palette: Palette name; unknown names yield transparent colors
            minimum: Lower bound of the domain
            maximum: Upper bound of the domain
            opacity: Optional new scheme opacity in [0, 1]

        Returns:
            The SchemeChange describing the new category collection

        Raises:
            ArgumentError: For min > max, non-finite bounds or bad opacity
        """
        minimum, maximum = _validate_domain(minimum, maximum)
        new_opacity = _validate_opacity(opacity) if opacity is not None else self._opacity
        stops = resolve_palette(palette, new_opacity)
        categories = self._two_bucket_categories(stops, minimum, maximum)

        self._opacity = new_opacity
        self.palette = palette
        logger.debug(f"Applied {palette} to [{minimum}, {maximum}] as {len(categories)} categor(ies)")
        return self._replace_categories(categories, 'apply_scheme')

    def _sample(self, raster: RasterSource, max_sample_count: Optional[int],
                no_data_value: Optional[float]) -> Tuple[np.ndarray, Statistics, Optional[float]]:
        if max_sample_count is None:
            max_sample_count = self.editor_settings.max_sample_count
        if no_data_value is None:
            no_data_value = raster.no_data_value
        values = sample_values(raster, max_sample_count, no_data_value)
        return values, calculate_statistics(values), no_data_value

    def get_values(self, raster: RasterSource, max_sample_count: Optional[int] = None,
                   no_data_value: Optional[float] = None) -> np.ndarray:
        """
        Sample the raster and store the sample set and its statistics.

        If the raster has no more than `max_sample_count` cells every value is
        used, otherwise a random subset. No-data values are excluded.
        """
        values, statistics, _ = self._sample(raster, max_sample_count, no_data_value)
        self.values, self.statistics = values, statistics
        return values

    def apply_scheme_from_raster(self, palette: PaletteName, raster: RasterSource,
                                 max_sample_count: Optional[int] = None,
                                 no_data_value: Optional[float] = None) -> SchemeChange:
        """
        Two-bucket classification with the domain taken from a raster.

        A raster held in memory supplies its exact extrema directly; otherwise
        (or when a no-data override is given, which the raster's extrema do
        not honor) the extrema of a random sample are used. A raster without
        usable values yields the single no-data category.
        """
        if raster.is_in_ram and no_data_value is None:
            minimum, maximum = raster.minimum, raster.maximum
            if minimum is None or maximum is None:
                logger.warning("Raster has no valid values; using the no-data category")
                return self._replace_categories(self._no_data_categories(raster.no_data_value), 'apply_scheme')
            return self.apply_scheme(palette, minimum, maximum)

        values, statistics, no_data_value = self._sample(raster, max_sample_count, no_data_value)
        if statistics.is_empty:
            logger.warning("Sample set is empty after no-data exclusion; using the no-data category")
            categories = self._no_data_categories(no_data_value)
            self.values, self.statistics = values, statistics
            return self._replace_categories(categories, 'apply_scheme')
        change = self.apply_scheme(palette, statistics.minimum, statistics.maximum)
        self.values, self.statistics = values, statistics
        return change

    def create_categories(self, raster: RasterSource, max_sample_count: Optional[int] = None,
                          no_data_value: Optional[float] = None, break_method: Optional[str] = None,
                          break_count: Optional[int] = None, palette: PaletteName = None) -> SchemeChange:
        """
        Build categories from statistics of values sampled from a raster.

        Intervals come from the break strategy (editor default:
        equal_interval). Each interval is min-inclusive and max-exclusive
        except the last, which is max-inclusive, so every value of the domain
        belongs to exactly one category. Colors follow the palette ramp with
        its mid stop at the domain midpoint.

        When the raster is held in memory (and no no-data override is given)
        its exact extrema define the domain, so the random sample cannot shift
        equal-interval boundaries.

        Args:
            raster: The raster source to sample
            max_sample_count: Sample size limit (editor default if None)
            no_data_value: Sentinel to exclude (raster's own if None)
            break_method: Registered break strategy name
            break_count: Requested number of intervals
            palette: Palette name (scheme palette if None)

        Returns:
            The SchemeChange describing the new category collection

        Raises:
            ArgumentError: For invalid sample counts or break configuration
            RasterReadError: If the raster cannot be read
        """
        method = break_method or self.editor_settings.break_method
        count = break_count if break_count is not None else self.editor_settings.break_count
        palette = palette if palette is not None else self.palette

        use_raster_extrema = raster.is_in_ram and no_data_value is None
        values, statistics, no_data_value = self._sample(raster, max_sample_count, no_data_value)
        if statistics.is_empty:
            logger.warning("Sample set is empty after no-data exclusion; using the no-data category")
            categories = self._no_data_categories(no_data_value)
        else:
            minimum, maximum = statistics.minimum, statistics.maximum
            if use_raster_extrema and raster.minimum is not None and raster.maximum is not None:
                minimum, maximum = raster.minimum, raster.maximum
            edges = compute_breaks(method, values, statistics, minimum, maximum, count)
            stops = resolve_palette(palette, self._opacity)
            categories = self._interval_categories(stops, edges)
            logger.debug(f"{method} classification of {statistics.count:,} samples "
                         f"into {len(categories)} categor(ies)")

        self.values, self.statistics = values, statistics
        self.palette = palette
        return self._replace_categories(categories, 'create_categories')

    def _interval_categories(self, stops: PaletteStops, edges: List[float]) -> List[ColorCategory]:
        minimum, maximum = edges[0], edges[-1]
        last = len(edges) - 2
        categories = []
        for i, (lower, upper) in enumerate(zip(edges[:-1], edges[1:])):
            category = ColorCategory(lower, upper,
                                     ramp_color(stops, minimum, maximum, lower),
                                     ramp_color(stops, minimum, maximum, upper))
            category.range.min_inclusive = True
            category.range.max_inclusive = i == last
            categories.append(self._finish(category))
        return categories

    # ------------------------------------------------------------------
    # Category management
    # ------------------------------------------------------------------

    @staticmethod
    def _check_category(category: Any) -> ColorCategory:
        if not isinstance(category, ColorCategory):
            raise ArgumentError(f"A color scheme only holds ColorCategory items, got {type(category).__name__}")
        return category

    def add_category(self, category: ColorCategory) -> SchemeChange:
        self._categories.append(self._check_category(category))
        return self._changed('add_category')

    def insert_category(self, index: int, category: ColorCategory) -> SchemeChange:
        self._categories.insert(index, self._check_category(category))
        return self._changed('insert_category')

    def remove_category(self, category: ColorCategory) -> SchemeChange:
        """Remove an owned category; raises ArgumentError if it is not owned."""
        for i, owned in enumerate(self._categories):
            if owned is category:
                del self._categories[i]
                return self._changed('remove_category')
        raise ArgumentError("Category does not belong to this scheme")

    def clear_categories(self) -> SchemeChange:
        self._categories.clear()
        return self._changed('clear_categories')

    def _index_of(self, category: ColorCategory) -> int:
        for i, owned in enumerate(self._categories):
            if owned is category:
                return i
        return -1

    def _move(self, category: ColorCategory, offset: int) -> bool:
        index = self._index_of(category)
        target = index + offset
        if index < 0 or not 0 <= target < len(self._categories):
            return False
        self._categories[index], self._categories[target] = self._categories[target], self._categories[index]
        self._changed('reorder_categories')
        return True

    def increase_category_index(self, category: ColorCategory) -> bool:
        """Move a category one position later; False if it is last or not owned."""
        return self._move(category, 1)

    def decrease_category_index(self, category: ColorCategory) -> bool:
        """Move a category one position earlier; False if it is first or not owned."""
        return self._move(category, -1)

    def create_new_category(self, fill_color: Color) -> ColorCategory:
        """Create an unbounded category filled with a single color. It is not added."""
        return ColorCategory(None, None, fill_color, fill_color)

    def create_random_category(self, rng: Optional[np.random.Generator] = None) -> ColorCategory:
        """Create an unbounded category with a random opaque color. It is not added."""
        return self.create_new_category(random_color(rng))

    def category_for_value(self, value: float) -> Optional[ColorCategory]:
        """Return the first category containing `value`, or None."""
        for category in self._categories:
            if category.contains(value):
                return category
        return None

    # ------------------------------------------------------------------
    # Canonical form
    # ------------------------------------------------------------------

    def to_canonical_form(self) -> Dict[str, Any]:
        palette = self.palette.value if isinstance(self.palette, PaletteType) else self.palette
        return {
            "palette": palette,
            "opacity": self._opacity,
            "categories": [category.to_canonical_form() for category in self._categories],
        }

    @classmethod
    def from_canonical_form(cls, data: Dict[str, Any],
                            editor_settings: Optional[EditorSettings] = None) -> 'ColorScheme':
        scheme = cls(palette=data.get("palette"), opacity=data.get("opacity", 1.0),
                     editor_settings=editor_settings)
        scheme._categories = [ColorCategory.from_canonical_form(item) for item in data.get("categories", [])]
        return scheme

    def __repr__(self) -> str:
        return f"ColorScheme(palette={self.palette!r}, opacity={self._opacity}, categories={len(self._categories)})"


