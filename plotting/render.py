"""Render loggers as mean curves with min/max bands.

`plot_logger` builds a new chart; `update_plot` pushes fresh data into the
artists of an existing chart, which is what a live or animated display
wants. Neither touches the loggers.

Usage:
    chart = plot_logger([losses, rewards], max_points=200)
    ...
    update_plot(chart, [losses, rewards])
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import PolyCollection
from matplotlib.colors import ListedColormap, is_color_like
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from constants import (
    BAND_ALPHA,
    DEFAULT_MAX_POINTS,
    GRID_ALPHA,
    LINE_WIDTH,
    SUBPLOT_FIGSIZE,
)
from timeseries.downsample import SeriesData, check_max_points, downsample
from timeseries.errors import ConfigError, LayoutMismatchError, ShapeMismatch
from timeseries.logger import TimeSeriesLogger


@dataclass
class SeriesHandle:
    """Artists drawn for one variable."""

    line: Line2D
    band: PolyCollection


@dataclass
class Chart:
    figure: Figure
    axes: List[Axes]
    layout: Tuple[int, int]
    handles: List[List[SeriesHandle]]
    data: List[SeriesData]
    max_points: int


def _as_logger_list(loggers) -> List[TimeSeriesLogger]:
    if isinstance(loggers, TimeSeriesLogger):
        return [loggers]
    if isinstance(loggers, Sequence) and all(isinstance(lg, TimeSeriesLogger) for lg in loggers):
        if not loggers:
            raise LayoutMismatchError("at least one logger is required")
        return list(loggers)
    raise TypeError(f"expected a TimeSeriesLogger or a sequence of them, got {type(loggers).__name__}")


def _resolve_layout(layout, count: int) -> Tuple[int, int]:
    if layout is None:
        return 1, count
    try:
        rows, cols = (int(v) for v in layout)
    except (TypeError, ValueError):
        raise LayoutMismatchError(f"layout must be a (rows, cols) pair, got {layout!r}") from None
    if rows < 1 or cols < 1 or rows * cols != count:
        raise LayoutMismatchError(
            f"layout {rows}x{cols} has {rows * cols} slot(s) for {count} logger(s)"
        )
    return rows, cols


def resolve_colors(colors, count: int) -> List:
    """One color per variable from a colormap name, a color, or a color list."""
    if isinstance(colors, str):
        if colors in matplotlib.colormaps:
            cmap = matplotlib.colormaps[colors]
            # qualitative maps are indexed, continuous ones are spread over [0, 1]
            if isinstance(cmap, ListedColormap) and cmap.N <= 20:
                return [cmap(i % cmap.N) for i in range(count)]
            return [cmap(i / max(1, count - 1)) for i in range(count)]
        if is_color_like(colors):
            return [colors] * count
        raise ConfigError(f"Unknown colormap or color {colors!r}")
    # an RGB(A) tuple is one color, not a palette of floats
    if is_color_like(colors):
        return [colors] * count
    palette = list(colors)
    if not palette or not all(is_color_like(c) for c in palette):
        raise ConfigError(f"colors must be a colormap name or a list of colors, got {colors!r}")
    return [palette[i % len(palette)] for i in range(count)]


def _draw_band(ax, data: SeriesData, index: int, color):
    return ax.fill_between(
        data.x,
        data.lower[:, index],
        data.upper[:, index],
        color=color,
        alpha=BAND_ALPHA,
        linewidth=0,
    )


def _style_axes(ax, logger: TimeSeriesLogger):
    ax.set_xlabel(logger.xlabel)
    ax.set_ylabel(logger.ylabel)
    if logger.title:
        ax.set_title(logger.title)
    ax.set_yscale("log" if logger.yscale == "log10" else "linear")
    if any(logger.legend):
        ax.legend()
    ax.grid(alpha=GRID_ALPHA)


def plot_logger(
    loggers,
    *,
    max_points: int = DEFAULT_MAX_POINTS,
    colors=None,
    layout: Optional[Tuple[int, int]] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> Chart:
    """Draw one subplot per logger and return the new chart.

    Args:
        loggers: A logger or a sequence of loggers.
        max_points: Display budget; larger loggers are bucketed.
        colors: Colormap name, single color or color list. Defaults to each
            logger's own colormap.
        layout: (rows, cols) grid; defaults to a single row.
        figsize: Figure size; defaults to SUBPLOT_FIGSIZE per subplot.
    """
    loggers = _as_logger_list(loggers)
    rows, cols = _resolve_layout(layout, len(loggers))
    max_points = check_max_points(max_points)
    data = [downsample(lg, max_points) for lg in loggers]
    palettes = [
        resolve_colors(lg.colormap if colors is None else colors, lg.variable_count)
        for lg in loggers
    ]

    if figsize is None:
        figsize = (SUBPLOT_FIGSIZE[0] * cols, SUBPLOT_FIGSIZE[1] * rows)
    fig, grid = plt.subplots(rows, cols, figsize=figsize, squeeze=False)
    axes = list(grid.flat)

    handles: List[List[SeriesHandle]] = []
    for ax, logger, series, palette in zip(axes, loggers, data, palettes):
        row = []
        for j in range(logger.variable_count):
            line, = ax.plot(
                series.x,
                series.mean[:, j],
                color=palette[j],
                linewidth=LINE_WIDTH,
                label=logger.legend[j] or None,
            )
            row.append(SeriesHandle(line=line, band=_draw_band(ax, series, j, palette[j])))
        handles.append(row)
        _style_axes(ax, logger)

    fig.tight_layout()
    return Chart(
        figure=fig,
        axes=axes,
        layout=(rows, cols),
        handles=handles,
        data=data,
        max_points=max_points,
    )


def update_plot(
    chart: Chart,
    loggers,
    *,
    max_points: Optional[int] = None,
    colors=None,
) -> Chart:
    """Replace the series data of `chart` in place.

    All loggers are downsampled and checked against the chart before any
    artist is touched, so a failing call leaves the chart as it was.
    """
    loggers = _as_logger_list(loggers)
    if len(loggers) != len(chart.handles):
        raise LayoutMismatchError(
            f"chart has {len(chart.handles)} subplot(s), got {len(loggers)} logger(s)"
        )
    for i, (logger, row) in enumerate(zip(loggers, chart.handles)):
        if logger.variable_count != len(row):
            raise ShapeMismatch(
                f"subplot {i} shows {len(row)} variable(s), logger tracks {logger.variable_count}"
            )
    max_points = chart.max_points if max_points is None else check_max_points(max_points)
    data = [downsample(lg, max_points) for lg in loggers]
    palettes = None
    if colors is not None:
        palettes = [resolve_colors(colors, lg.variable_count) for lg in loggers]

    for i, (ax, row, series) in enumerate(zip(chart.axes, chart.handles, data)):
        for j, handle in enumerate(row):
            handle.band.remove()
            handle.line.set_data(series.x, series.mean[:, j])
            if palettes is not None:
                handle.line.set_color(palettes[i][j])
        # relim only sees lines, so bands are redrawn afterwards to extend the limits
        ax.relim()
        for j, handle in enumerate(row):
            handle.band = _draw_band(ax, series, j, handle.line.get_color())
        ax.autoscale_view()

    chart.data = data
    chart.max_points = max_points
    chart.figure.canvas.draw_idle()
    return chart


__all__ = ["Chart", "SeriesHandle", "plot_logger", "resolve_colors", "update_plot"]
