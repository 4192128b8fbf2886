"""Rendering of time-series loggers (charts, live plots, GIF export).

Public API:
    from plotting import plot_logger, update_plot, LivePlotter
"""

from .render import Chart, SeriesHandle, plot_logger, update_plot, resolve_colors  # noqa: F401
from .animation import GifRecorder  # noqa: F401
from .live_plot import RenderThrottle, LivePlotter  # noqa: F401

__all__ = [
    "Chart",
    "SeriesHandle",
    "plot_logger",
    "update_plot",
    "resolve_colors",
    "GifRecorder",
    "RenderThrottle",
    "LivePlotter",
]
