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
Unit tests for command-line argument models and configuration helpers.
"""

import logging
from pathlib import Path

import pytest

from rctk.utils.config_loader import DEFAULT_CONFIG, config
from rctk.utils.log_helpers import resolve_level, setup_logger, shutdown_logger
from rctk.utils.script_arguments import ClassifyArguments


@pytest.fixture
def raster_path(tmp_path, small_raster):
    path = tmp_path / "small.tif"
    small_raster.save_to_file(path)
    return path


@pytest.mark.unit
class TestClassifyArguments:
    """Test validation and default resolution of classify arguments."""

    def test_defaults_from_config(self, raster_path):
        args = ClassifyArguments(input_path=str(raster_path))

        assert isinstance(args.input_path, Path)
        assert args.palette == config.get("classification.default_palette")
        assert args.method == config.get("classification.break_method")
        assert args.break_count == config.get("classification.break_count")
        assert args.max_samples == config.get("sampling.max_sample_count")
        assert not args.is_two_bucket

    def test_two_bucket(self, raster_path):
        assert ClassifyArguments(input_path=raster_path, method='two_bucket').is_two_bucket

    @pytest.mark.parametrize("kwargs", [
        {"band": 0},
        {"opacity": 1.5},
        {"break_count": 0},
        {"max_samples": -1},
        {"method": "jenks"},
    ])
    def test_invalid_arguments(self, raster_path, kwargs):
        with pytest.raises(ValueError):
            ClassifyArguments(input_path=raster_path, **kwargs)

    def test_missing_input(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            ClassifyArguments(input_path=tmp_path / "missing.tif")

    def test_input_required(self):
        with pytest.raises(ValueError):
            ClassifyArguments()


@pytest.mark.unit
class TestConfig:
    """Test the configuration singleton."""

    def test_dotted_lookup(self):
        assert config.get("classification.no_such_key", "fallback") == "fallback"
        assert config.get("no_section.key") is None

    def test_every_default_section_present(self):
        for section in DEFAULT_CONFIG:
            assert isinstance(config.get_section(section), dict)

    def test_set_and_reload(self):
        original = config.get("sampling.max_sample_count")
        config.set("sampling.max_sample_count", 7)
        try:
            assert config.get("sampling.max_sample_count") == 7
        finally:
            config.reload()
        assert config.get("sampling.max_sample_count") == original


@pytest.mark.unit
class TestLogHelpers:
    """Test logger setup helpers."""

    @pytest.mark.parametrize("level, expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        (None, logging.INFO),
        ("bogus", logging.INFO),
    ])
    def test_resolve_level(self, level, expected):
        assert resolve_level(level) == expected

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "rctk.log"
        logger = setup_logger(log_file=str(log_file), level="INFO")
        try:
            logging.getLogger("rctk.test").info("classification started")
        finally:
            shutdown_logger(logger)
        assert "classification started" in log_file.read_text()
