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
Dataclass-based Argument Models for RCTK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments of the `classify` tool. It uses `__post_init__` for
validation and resolving config-driven default values, ensuring that the core
logic receives clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    ClassifyArguments: Arguments for the classify_raster tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rctk.utils.break_strategies import available_break_methods
from rctk.utils.config_loader import config

logger = logging.getLogger(__name__)

TWO_BUCKET_METHOD = 'two_bucket'


@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)


@dataclass
class ClassifyArguments(BaseArguments):
    """Arguments for the classify_raster tool."""
    band: int = 1
    palette: Optional[str] = None
    opacity: Optional[float] = None
    method: Optional[str] = None
    break_count: Optional[int] = None
    max_samples: Optional[int] = None
    nodata: Optional[float] = None

    def __post_init__(self):
        """Validation and default resolution for classify arguments."""
        super().__post_init__()
        try:
            self._validate_classify()
            self._resolve_defaults()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_classify(self):
        """Perform validation checks for classify arguments."""
        if self.input_path is None:
            raise ValueError("The 'input_path' argument is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        if self.band < 1:
            raise ValueError(f"Band index must be 1 or greater, got {self.band}")
        if self.opacity is not None and not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"Opacity must be between 0.0 and 1.0, got {self.opacity}")
        if self.break_count is not None and self.break_count < 1:
            raise ValueError(f"Break count must be positive, got {self.break_count}")
        if self.max_samples is not None and self.max_samples < 1:
            raise ValueError(f"Max samples must be positive, got {self.max_samples}")
        if self.method is not None and self.method != TWO_BUCKET_METHOD \
                and self.method not in available_break_methods():
            raise ValueError(f"Unknown classification method: '{self.method}'")

    def _resolve_defaults(self):
        """Fill unset options from config.toml."""
        if self.palette is None:
            self.palette = config.get("classification.default_palette")
        if self.opacity is None:
            self.opacity = float(config.get("classification.opacity", 1.0))
        if self.method is None:
            self.method = config.get("classification.break_method", "equal_interval")
        if self.break_count is None:
            self.break_count = int(config.get("classification.break_count", 5))
        if self.max_samples is None:
            self.max_samples = int(config.get("sampling.max_sample_count", 10000))

    @property
    def is_two_bucket(self) -> bool:
        return self.method == TWO_BUCKET_METHOD
