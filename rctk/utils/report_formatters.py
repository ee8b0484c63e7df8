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
Report Formatters for Classification Results.

Turns a classified `ColorScheme` and its sample statistics into a Markdown
legend report. The report is what the `classify` command hands to users; the
category collection itself is what a legend or renderer consumes.

Classes:
    ReportFormatter: Abstract base class for report formatters
    MarkdownReportFormatter: Markdown legend report with a table of contents
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from rctk.utils.categories import CategoryKind, ColorCategory
from rctk.utils.color_scheme import ColorScheme
from rctk.utils.data_models import Statistics
from rctk.utils.statistics_calculator import format_number


class ReportFormatter(ABC):
    """
    Base class for generating classification reports.

    Subclasses render the header, each section, and the footer; `format`
    joins them in order.
    """

    def __init__(self, filename: str = "Unknown"):
        self.filename = filename
        self.sections: List[Tuple[str, str]] = []

    def add_section(self, title: str, body: str) -> None:
        """Append a titled section; empty bodies are skipped."""
        if body:
            self.sections.append((title, body))

    def format(self) -> str:
        parts = [self._render_header()]
        parts.extend(self._render_section(title, body) for title, body in self.sections)
        parts.append(self._render_footer())
        return "\n\n".join(part for part in parts if part) + "\n"

    @abstractmethod
    def _render_header(self) -> str:
        ...

    @abstractmethod
    def _render_section(self, title: str, body: str) -> str:
        ...

    def _render_footer(self) -> str:
        return ""


def render_statistics_table(statistics: Statistics) -> str:
    """Render sample statistics as a two-column Markdown table."""
    if statistics.is_empty:
        return "No valid samples were found."
    lines = ["| Statistic | Value |", "|---|---|"]
    for display_name, field_name in Statistics.get_display_fields():
        value = getattr(statistics, field_name)
        lines.append(f"| {display_name} | {format_number(value) if value is not None else 'N/A'} |")
    return "\n".join(lines)


def _color_cell(category: ColorCategory, which: str) -> str:
    color = category.low_color if which == 'low' else category.high_color
    return color.to_hex(include_alpha=True)


def render_category_table(scheme: ColorScheme) -> str:
    """Render the scheme's categories in legend order as a Markdown table."""
    if not len(scheme):
        return "The scheme has no categories."
    lines = ["| # | Range | Low Color | High Color | Legend |", "|---|---|---|---|---|"]
    for i, category in enumerate(scheme.categories, 1):
        if category.kind is CategoryKind.NO_DATA:
            range_text = f"NoData ({category.no_data_value})"
        else:
            range_text = category.range.to_text(scheme.editor_settings.decimal_places)
        lines.append(f"| {i} | {range_text} | {_color_cell(category, 'low')} | "
                     f"{_color_cell(category, 'high')} | {category.legend_text} |")
    return "\n".join(lines)


class MarkdownReportFormatter(ReportFormatter):
    """
    Generate a Markdown classification report with table of contents.

    Example:
        >>> formatter = MarkdownReportFormatter('dem.tif')
        >>> formatter.add_scheme(scheme)
        >>> markdown = formatter.format()
    """

    report_title = "Classification Report"

    def add_scheme(self, scheme: ColorScheme, summary: Optional[List[Tuple[str, str]]] = None) -> None:
        """Add the summary, statistics and category sections for a scheme."""
        if summary:
            rows = ["| Setting | Value |", "|---|---|"]
            rows.extend(f"| {name} | {value} |" for name, value in summary)
            self.add_section("Summary", "\n".join(rows))
        self.add_section("Sample Statistics", render_statistics_table(scheme.statistics))
        self.add_section("Categories", render_category_table(scheme))

    def _render_header(self) -> str:
        lines = [f"# {self.report_title}: {self.filename}\n"]
        if self.sections:
            lines.append("## Table of Contents\n")
            for title, _ in self.sections:
                anchor = re.sub(r'[^a-z0-9\-_]', '', title.lower().replace(' ', '-')).strip('-')
                lines.append(f"- [{title}](#{anchor})")
        return "\n".join(lines)

    def _render_section(self, title: str, body: str) -> str:
        return f"## {title}\n\n{body}"
