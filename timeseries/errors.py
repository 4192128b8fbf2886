"""Exceptions raised by loggers and renderers."""

from __future__ import annotations


class TimeSeriesError(Exception):
    """Base class for every error raised by this project."""


class ShapeMismatch(TimeSeriesError, ValueError):
    """A value vector does not have one entry per tracked variable."""


class ConfigError(TimeSeriesError, ValueError):
    """Malformed construction or rendering options."""


class EmptyLoggerError(TimeSeriesError, ValueError):
    """A logger with no samples was handed to the renderer."""


class LayoutMismatchError(TimeSeriesError, ValueError):
    """The number of loggers does not fit the requested subplot layout."""


__all__ = [
    "TimeSeriesError",
    "ShapeMismatch",
    "ConfigError",
    "EmptyLoggerError",
    "LayoutMismatchError",
]
