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
Command-line interface for the Raster Classification ToolKit (RCTK).

This script provides the main entry point for the `rctk` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
import numpy as np
from pathlib import Path
from rctk.utils.break_strategies import available_break_methods
from rctk.utils.config_loader import config
from rctk.utils.log_helpers import setup_logger
from rctk.utils.script_arguments import ClassifyArguments, TWO_BUCKET_METHOD

def float_nodata(nodata_str: str) -> float:
    """Convert NoData string to float or np.nan."""
    if nodata_str.lower() == 'nan':
        return np.nan
    try:
        return float(nodata_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid NoData value: '{nodata_str}'")

def valid_opacity(value: str) -> float:
    """Validate that the opacity is a number between 0.0 and 1.0."""
    try:
        fvalue = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Opacity must be a number between 0.0 and 1.0, got '{value}'")
    if not 0.0 <= fvalue <= 1.0:
        raise argparse.ArgumentTypeError(f"Opacity must be between 0.0 and 1.0, got '{fvalue}'")
    return fvalue

def positive_int(value: str) -> int:
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got '{value}'")
    if ivalue < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got '{ivalue}'")
    return ivalue

def main(argv=None):
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = argparse.ArgumentParser(
        description='RCTK',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Classify Tool ---
    classify_parser = subparsers.add_parser(
        'classify',
        help='Classify a raster band into color-ramp categories and report the legend.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    classify_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Input raster file path.')
    classify_parser.add_argument('-o', '--output', type=Path, dest='output_path', help='Path for the Markdown legend report. Defaults to stdout.')
    classify_parser.add_argument('-b', '--band', type=positive_int, default=1, dest='band', help='Band index to classify.')
    classify_parser.add_argument('-p', '--palette', type=str, default=None, dest='palette', help='Palette preset name (see `rctk palettes`).')
    classify_parser.add_argument('--opacity', type=valid_opacity, default=None, dest='opacity', help='Opacity applied to every category color (0.0-1.0).')
    classify_parser.add_argument('-m', '--method', type=str.lower, default=None, choices=available_break_methods() + [TWO_BUCKET_METHOD], dest='method', help='Classification method.')
    classify_parser.add_argument('-k', '--classes', type=positive_int, default=None, dest='break_count', help='Number of classes for break-based methods.')
    classify_parser.add_argument('--max-samples', type=positive_int, default=None, dest='max_samples', help='Maximum number of raster values sampled.')
    classify_parser.add_argument('-n', '--nodata', type=float_nodata, default=None, dest='nodata', help="NoData value override ('nan' allowed).")
    classify_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    classify_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    # --- Palettes Tool ---
    palettes_parser = subparsers.add_parser(
        'palettes',
        help='List the palette presets.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    palettes_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    args = parser.parse_args(argv)
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)
    log_file = args_dict.pop('log_file', None) or config.get("logging.file")

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else config.get("logging.level", "INFO")
    logger = setup_logger(log_file=str(log_file) if log_file else None, level=log_level)

    try:
        if tool == 'classify':
            from rctk.tools.classify_raster import classify_raster
            script_args = ClassifyArguments(**args_dict)
            classify_raster(script_args)
        elif tool == 'palettes':
            from rctk.tools.classify_raster import list_palettes
            sys.stdout.write(list_palettes())
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
