"""Time-series storage and downsampling.

Public API:
    from timeseries import TimeSeriesLogger, downsample
"""

from .errors import (  # noqa: F401
    TimeSeriesError,
    ShapeMismatch,
    ConfigError,
    EmptyLoggerError,
    LayoutMismatchError,
)
from .logger import Sample, LoggerConfig, TimeSeriesLogger  # noqa: F401
from .downsample import Bucket, SeriesData, bucket_bounds, buckets, downsample  # noqa: F401

__all__ = [
    "TimeSeriesError",
    "ShapeMismatch",
    "ConfigError",
    "EmptyLoggerError",
    "LayoutMismatchError",
    "Sample",
    "LoggerConfig",
    "TimeSeriesLogger",
    "Bucket",
    "SeriesData",
    "bucket_bounds",
    "buckets",
    "downsample",
]
