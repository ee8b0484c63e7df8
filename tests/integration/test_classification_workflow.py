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
Integration tests for the classification workflow.

These tests verify that the raster source, sampler, statistics calculator,
break strategies, color scheme and report formatter work together on real
GeoTIFF files.
"""

import numpy as np
import pytest

from rctk.tools.classify_raster import classify_raster, list_palettes
from rctk.utils.categories import CategoryKind
from rctk.utils.color_scheme import ColorScheme
from rctk.utils.data_models import EditorSettings
from rctk.utils.raster_sources import GdalRasterSource
from rctk.utils.report_formatters import MarkdownReportFormatter
from rctk.utils.script_arguments import ClassifyArguments
from tests.fixtures.mock_raster_factory import MockRaster


@pytest.mark.integration
class TestClassificationWorkflow:
    """Test complete classification workflows."""

    def test_geotiff_to_report(self, tmp_path, mock_raster_with_nodata):
        """Test classifying a GeoTIFF with NoData and rendering its report."""
        test_file = tmp_path / "dem.tif"
        mock_raster_with_nodata.save_to_file(test_file)

        source = GdalRasterSource.open(test_file)
        scheme = ColorScheme(palette='Glaciers', opacity=0.8,
                             editor_settings=EditorSettings(max_sample_count=5000, break_count=3))
        scheme.create_categories(source)

        expected = mock_raster_with_nodata.valid_values()
        assert len(scheme) == 3
        assert scheme.categories[0].minimum == expected.min()
        assert scheme.categories[-1].maximum == expected.max()
        assert scheme.statistics.count <= 5000
        assert all(c.low_color.alpha == 204 for c in scheme)

        formatter = MarkdownReportFormatter(test_file.name)
        formatter.add_scheme(scheme)
        report = formatter.format()
        assert "# Classification Report: dem.tif" in report
        assert report.count("| 3 |") == 1

    def test_streamed_raster_uses_sample_extrema(self, tmp_path):
        """Test that a band too large for memory is classified from its sample."""
        test_file = tmp_path / "large.tif"
        MockRaster(width=120, height=80, seed=3).save_to_file(test_file)

        source = GdalRasterSource.open(test_file, in_ram_cell_limit=100)
        scheme = ColorScheme(palette='Desert', opacity=1.0,
                             editor_settings=EditorSettings(max_sample_count=400))
        scheme.apply_scheme_from_raster('Desert', source)

        assert not source.is_in_ram
        assert scheme.statistics.count == 400
        assert scheme.categories[0].minimum == scheme.statistics.minimum
        assert scheme.categories[-1].maximum == scheme.statistics.maximum

    def test_classify_tool_writes_report(self, tmp_path, small_raster):
        test_file = tmp_path / "small.tif"
        output = tmp_path / "reports" / "small.md"
        small_raster.save_to_file(test_file)

        args = ClassifyArguments(input_path=test_file, output_path=output, palette='SummerMountains',
                                 method='equal_interval', break_count=4)
        scheme = classify_raster(args)

        assert len(scheme) == 4
        content = output.read_text(encoding='utf-8')
        assert "| Requested Classes | 4 |" in content
        assert "| NoData | -9999.0 |" in content
        assert "[4, 5]" in content

    def test_classify_tool_two_bucket_reports_statistics(self, tmp_path, small_raster):
        """Test the two-bucket path still samples for the statistics section."""
        test_file = tmp_path / "small.tif"
        output = tmp_path / "small.md"
        small_raster.save_to_file(test_file)

        scheme = classify_raster(ClassifyArguments(input_path=test_file, output_path=output,
                                                   method='two_bucket'))

        assert len(scheme) == 2
        assert scheme.statistics.count == 5
        assert "| Mean | 3 |" in output.read_text(encoding='utf-8')

    def test_all_nodata_file(self, tmp_path, all_nodata_raster):
        test_file = tmp_path / "empty.tif"
        all_nodata_raster.save_to_file(test_file)

        scheme = classify_raster(ClassifyArguments(input_path=test_file, output_path=tmp_path / "empty.md"))

        assert [c.kind for c in scheme] == [CategoryKind.NO_DATA]
        assert "No valid samples were found." in (tmp_path / "empty.md").read_text(encoding='utf-8')

    def test_nodata_override(self, tmp_path):
        """Test that a NoData override excludes a value the file does not flag."""
        test_file = tmp_path / "zeros.tif"
        MockRaster(pixel_data=np.array([[0.0, 0.0, 10.0, 20.0]])).save_to_file(test_file)

        scheme = classify_raster(ClassifyArguments(input_path=test_file, output_path=tmp_path / "zeros.md",
                                                   nodata=0.0, break_count=2))

        assert scheme.statistics.count == 2
        assert [(c.minimum, c.maximum) for c in scheme] == [(10.0, 15.0), (15.0, 20.0)]

    def test_list_palettes(self):
        table = list_palettes()
        assert "| SummerMountains | #0a640a | #997d19 | #ffffff |" in table
        assert table.count("\n") == 10
