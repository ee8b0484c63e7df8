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
Configuration Management for the Raster Classification ToolKit.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from a central `config.toml` file.
Sampling limits, default palette, break method and styling hints all come
from here unless a caller overrides them explicitly.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict


if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "sampling": {
        "max_sample_count": 10000,
        "in_ram_cell_limit": 4_000_000,
    },
    "classification": {
        "default_palette": "SummerMountains",
        "opacity": 1.0,
        "break_method": "equal_interval",
        "break_count": 5,
        "decimal_places": 2,
    },
    "styling": {
        "hatch_pattern": None,
        "outline_color": None,
        "outline_width": 0.0,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration from config.toml, layered over the defaults."""
        self._config = self._default_config()
        config_path = Path(__file__).parent.parent / "config.toml"
        if not config_path.exists():
            return
        try:
            with open(config_path, "rb") as f:
                loaded = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load {config_path}: {e}")
            return
        for section, values in loaded.items():
            if isinstance(values, dict):
                self._config.setdefault(section, {}).update(values)
            else:
                self._config[section] = values

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "sampling.max_sample_count")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("classification.break_method")
            'equal_interval'
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section

        Args:
            section: Section name (e.g., "sampling", "styling")

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation

        Note:
            This only modifies the in-memory configuration.
            Changes are not persisted to config.toml.
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def reload(self):
        """Reload configuration from config.toml"""
        self._load_config()

# Singleton instance
config = Config()
