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
Raster Value Sources.

The classification engine never reads raster files itself. It talks to a
`RasterSource`, which knows how many cells the raster has, its no-data
sentinel, its extrema when they are cheap to know, and how to hand out a
random subset of its values.

Classes:
    RasterSource: Abstract interface the sampler and engine depend on.
    ArrayRasterSource: A numpy array held fully in memory.
    GdalRasterSource: A single GDAL raster band, loaded into memory when small.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from osgeo import gdal

from rctk.utils.config_loader import config
from rctk.utils.exceptions import ArgumentError, RasterReadError

logger = logging.getLogger(__name__)


def valid_mask(data: np.ndarray, no_data_value: Optional[float]) -> np.ndarray:
    """
    Boolean mask of usable cells.

    NaN and infinite cells are always excluded, in addition to the no-data
    sentinel when one is defined.
    """
    mask = np.isfinite(data)
    if no_data_value is not None and not np.isnan(no_data_value):
        mask &= data != no_data_value
    return mask


class RasterSource(ABC):
    """Interface for anything the sampler can draw raster values from."""

    @property
    @abstractmethod
    def total_value_count(self) -> int:
        """Total number of cells, including no-data cells."""

    @property
    @abstractmethod
    def no_data_value(self) -> Optional[float]:
        """The no-data sentinel, or None if the raster has none."""

    @property
    @abstractmethod
    def is_in_ram(self) -> bool:
        """True when all values are loaded and the extrema below are exact."""

    @property
    @abstractmethod
    def minimum(self) -> Optional[float]:
        """Smallest valid value, or None if the raster has no valid values."""

    @property
    @abstractmethod
    def maximum(self) -> Optional[float]:
        """Largest valid value, or None if the raster has no valid values."""

    @abstractmethod
    def get_random_values(self, max_count: int) -> np.ndarray:
        """
        Return up to `max_count` values chosen at random.

        All values are returned when the raster holds no more than
        `max_count` cells. No-data cells are not filtered here.
        """


class ArrayRasterSource(RasterSource):
    """
    A raster held as a numpy array.

    Example:
        >>> source = ArrayRasterSource(np.array([[1, 2], [3, -9999]]), no_data_value=-9999)
        >>> source.minimum, source.maximum
        (1.0, 3.0)
    """

    def __init__(self, data, no_data_value: Optional[float] = None,
                 rng: Optional[np.random.Generator] = None):
        self._data = np.asarray(data, dtype=np.float64).ravel()
        self._no_data_value = no_data_value
        self._rng = rng if rng is not None else np.random.default_rng()
        self._extrema: Optional[Tuple[Optional[float], Optional[float]]] = None

    @property
    def total_value_count(self) -> int:
        return int(self._data.size)

    @property
    def no_data_value(self) -> Optional[float]:
        return self._no_data_value

    @property
    def is_in_ram(self) -> bool:
        return True

    def _compute_extrema(self) -> Tuple[Optional[float], Optional[float]]:
        if self._extrema is None:
            valid = self._data[valid_mask(self._data, self._no_data_value)]
            if valid.size == 0:
                self._extrema = (None, None)
            else:
                self._extrema = (float(valid.min()), float(valid.max()))
        return self._extrema

    @property
    def minimum(self) -> Optional[float]:
        return self._compute_extrema()[0]

    @property
    def maximum(self) -> Optional[float]:
        return self._compute_extrema()[1]

    def get_random_values(self, max_count: int) -> np.ndarray:
        if self._data.size <= max_count:
            return self._data.copy()
        indices = self._rng.choice(self._data.size, size=max_count, replace=False)
        return self._data[indices]


class GdalRasterSource(RasterSource):
    """
    A single band of a GDAL dataset.

    Bands with at most `in_ram_cell_limit` cells (config
    `sampling.in_ram_cell_limit`) are read fully into memory on first use and
    report exact extrema. Larger bands are sampled by reading only the rows
    that hold the randomly chosen cells.

    The dataset is kept referenced for as long as the source lives, since a
    GDAL band becomes invalid once its dataset is released.
    """

    def __init__(self, band: gdal.Band, dataset: Optional[gdal.Dataset] = None,
                 in_ram_cell_limit: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        if band is None:
            raise RasterReadError("No raster band supplied")
        self._band = band
        self._dataset = dataset
        self._rng = rng if rng is not None else np.random.default_rng()
        if in_ram_cell_limit is None:
            in_ram_cell_limit = int(config.get("sampling.in_ram_cell_limit", 4_000_000))
        self._in_ram_cell_limit = in_ram_cell_limit
        self._data: Optional[np.ndarray] = None
        self._extrema: Optional[Tuple[Optional[float], Optional[float]]] = None

    @classmethod
    def open(cls, path: Union[str, Path], band_index: int = 1, **kwargs) -> 'GdalRasterSource':
        """
        Open a raster file and wrap one of its bands.

        Raises:
            RasterReadError: If the file cannot be opened
            ArgumentError: If the band index is out of range
        """
        try:
            dataset = gdal.Open(str(path), gdal.GA_ReadOnly)
        except RuntimeError as e:
            raise RasterReadError(f"Could not open raster '{path}': {e}") from e
        if dataset is None:
            raise RasterReadError(f"Could not open raster '{path}'")
        if not 1 <= band_index <= dataset.RasterCount:
            raise ArgumentError(f"Band {band_index} out of range; '{path}' has {dataset.RasterCount} band(s)")
        logger.debug(f"Opened {path} band {band_index} ({dataset.RasterXSize}x{dataset.RasterYSize})")
        return cls(dataset.GetRasterBand(band_index), dataset=dataset, **kwargs)

    @property
    def total_value_count(self) -> int:
        return int(self._band.XSize) * int(self._band.YSize)

    @property
    def no_data_value(self) -> Optional[float]:
        return self._band.GetNoDataValue()

    @property
    def is_in_ram(self) -> bool:
        return self.total_value_count <= self._in_ram_cell_limit

    def _read(self, *window) -> np.ndarray:
        try:
            data = self._band.ReadAsArray(*window)
        except RuntimeError as e:
            raise RasterReadError(f"Failed to read raster values: {e}") from e
        if data is None:
            raise RasterReadError("Raster band returned no readable values")
        return data.astype(np.float64)

    def _load(self) -> np.ndarray:
        if self._data is None:
            logger.debug(f"Loading {self.total_value_count:,} cells into memory")
            self._data = self._read().ravel()
        return self._data

    def _compute_extrema(self) -> Tuple[Optional[float], Optional[float]]:
        if self._extrema is not None:
            return self._extrema
        if self.is_in_ram:
            data = self._load()
            valid = data[valid_mask(data, self.no_data_value)]
            self._extrema = (None, None) if valid.size == 0 else (float(valid.min()), float(valid.max()))
        else:
            try:
                low, high = self._band.ComputeRasterMinMax(False)
            except RuntimeError as e:
                raise RasterReadError(f"Failed to compute raster extrema: {e}") from e
            self._extrema = (float(low), float(high))
        return self._extrema

    @property
    def minimum(self) -> Optional[float]:
        return self._compute_extrema()[0]

    @property
    def maximum(self) -> Optional[float]:
        return self._compute_extrema()[1]

    def get_random_values(self, max_count: int) -> np.ndarray:
        total = self.total_value_count
        if self.is_in_ram:
            data = self._load()
            if total <= max_count:
                return data.copy()
            return data[self._rng.choice(total, size=max_count, replace=False)]
        if total <= max_count:
            return self._read().ravel()

        # Read only the rows holding the chosen cells.
        width = int(self._band.XSize)
        indices = np.sort(self._rng.choice(total, size=max_count, replace=False))
        rows = indices // width
        unique_rows, starts = np.unique(rows, return_index=True)
        ends = np.append(starts[1:], indices.size)
        values = np.empty(indices.size, dtype=np.float64)
        for row, start, end in zip(unique_rows, starts, ends):
            line = self._read(0, int(row), width, 1)[0]
            values[start:end] = line[indices[start:end] % width]
        return values
