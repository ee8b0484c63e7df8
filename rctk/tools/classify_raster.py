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
Raster Classification Tool for RCTK.

This module powers the 'classify' and 'palettes' commands. 'classify' opens a
raster band with GDAL, builds a color scheme from it, and writes a Markdown
legend report listing each category's range and boundary colors. 'palettes'
lists the palette presets.
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Tuple

from osgeo import gdal

from rctk.utils.color_scheme import ColorScheme
from rctk.utils.colors import PALETTES, resolve_palette
from rctk.utils.data_models import EditorSettings
from rctk.utils.raster_sources import GdalRasterSource
from rctk.utils.report_formatters import MarkdownReportFormatter
from rctk.utils.script_arguments import ClassifyArguments

# --- Configuration & Setup ---
gdal.UseExceptions()
logger = logging.getLogger('classify_raster')


def _summary(args: ClassifyArguments, source: GdalRasterSource) -> List[Tuple[str, str]]:
    nodata = args.nodata if args.nodata is not None else source.no_data_value
    rows = [
        ("Band", str(args.band)),
        ("Palette", str(args.palette)),
        ("Opacity", f"{args.opacity:g}"),
        ("Method", args.method),
        ("Cells", f"{source.total_value_count:,}"),
        ("NoData", str(nodata) if nodata is not None else "None"),
    ]
    if not args.is_two_bucket:
        rows.insert(4, ("Requested Classes", str(args.break_count)))
    return rows


def classify_raster(args: ClassifyArguments) -> ColorScheme:
    """
    Classify a raster band and write its legend report.

    Args:
        args: Validated ClassifyArguments

    Returns:
        The classified ColorScheme
    """
    logger.info(f"Classifying {args.input_path} (band {args.band}) with {args.method}")
    source = GdalRasterSource.open(args.input_path, band_index=args.band)

    settings = EditorSettings.from_config()
    settings = replace(settings, max_sample_count=args.max_samples, break_count=args.break_count)
    if not args.is_two_bucket:
        settings.break_method = args.method
    scheme = ColorScheme(palette=args.palette, opacity=args.opacity, editor_settings=settings)

    if args.is_two_bucket:
        scheme.apply_scheme_from_raster(args.palette, source, no_data_value=args.nodata)
        if scheme.statistics.is_empty:
            # In-memory rasters skip sampling; sample anyway for the report.
            scheme.get_values(source, no_data_value=args.nodata)
    else:
        scheme.create_categories(source, no_data_value=args.nodata)

    formatter = MarkdownReportFormatter(Path(args.input_path).name)
    formatter.add_scheme(scheme, summary=_summary(args, source))
    report = formatter.format()

    if args.output_path:
        args.output_path.parent.mkdir(parents=True, exist_ok=True)
        args.output_path.write_text(report, encoding='utf-8')
        logger.info(f"Report written to {args.output_path}")
    else:
        sys.stdout.write(report)

    logger.info(f"Created {len(scheme)} categor{'y' if len(scheme) == 1 else 'ies'}")
    return scheme


def list_palettes() -> str:
    """Return a Markdown table of the palette presets and their colors."""
    lines = ["| Palette | Low | Mid | High |", "|---|---|---|---|"]
    for palette in PALETTES:
        stops = resolve_palette(palette)
        lines.append(f"| {palette.value} | {stops.low.to_hex()} | {stops.mid.to_hex()} | {stops.high.to_hex()} |")
    return "\n".join(lines) + "\n"
