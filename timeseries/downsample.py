"""Bucketed aggregation used to keep plots at a bounded number of points.

When a logger holds more samples than the display budget `max_points`, the
sample sequence is split along its index (not along timestamp values) into
exactly `max_points` contiguous buckets. Bucket `i` covers
`[floor(i*n/M), floor((i+1)*n/M))`, so bucket sizes differ by at most one
and add up to `n`. Each bucket becomes one plotted point:

  - x: the timestamp of the bucket's first sample
  - mean, minimum and maximum of every variable over the bucket

Runs appended one after another into the same logger are bucketed the same
way; the min/max band then shows the spread of whatever lands in each index
range.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from constants import DEFAULT_MAX_POINTS
from .errors import ConfigError, EmptyLoggerError
from .logger import TimeSeriesLogger


@dataclass(frozen=True)
class Bucket:
    start: int
    stop: int
    timestamp: Any
    mean: np.ndarray
    minimum: np.ndarray
    maximum: np.ndarray

    @property
    def size(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class SeriesData:
    """Plot-ready snapshot of one logger.

    `mean`, `lower` and `upper` have shape (points, variable_count). Without
    aggregation all three hold the raw values.
    """

    x: np.ndarray
    mean: np.ndarray
    lower: np.ndarray
    upper: np.ndarray
    sizes: np.ndarray
    aggregated: bool

    def __len__(self) -> int:
        return len(self.x)

    @property
    def variable_count(self) -> int:
        return self.mean.shape[1]


def check_max_points(max_points) -> int:
    if (
        isinstance(max_points, bool)
        or not isinstance(max_points, (int, np.integer))
        or max_points < 1
    ):
        raise ConfigError(f"max_points must be a positive integer, got {max_points!r}")
    return int(max_points)


def bucket_bounds(count: int, max_points: int) -> List[Tuple[int, int]]:
    """Index ranges `[start, stop)` of the buckets for `count` samples."""
    max_points = check_max_points(max_points)
    if count <= max_points:
        return [(i, i + 1) for i in range(count)]
    starts = (np.arange(max_points + 1) * count) // max_points
    return [(int(a), int(b)) for a, b in zip(starts[:-1], starts[1:])]


def _bucket_starts(count: int, max_points: int) -> np.ndarray:
    return (np.arange(max_points) * count) // max_points


def downsample(logger: TimeSeriesLogger, max_points: int = DEFAULT_MAX_POINTS) -> SeriesData:
    """Reduce a logger to at most `max_points` points with a min/max band."""
    max_points = check_max_points(max_points)
    n = len(logger)
    if n == 0:
        raise EmptyLoggerError(f"nothing to plot: {logger!r} has no samples")

    values = logger.values()
    timestamps = logger.timestamps

    if n <= max_points:
        return SeriesData(
            x=np.asarray(timestamps),
            mean=values,
            lower=values.copy(),
            upper=values.copy(),
            sizes=np.ones(n, dtype=int),
            aggregated=False,
        )

    starts = _bucket_starts(n, max_points)
    sizes = np.diff(np.append(starts, n))
    lower = np.minimum.reduceat(values, starts, axis=0)
    upper = np.maximum.reduceat(values, starts, axis=0)
    mean = np.add.reduceat(values, starts, axis=0) / sizes[:, None]
    # rounding can push the mean of equal values just past the extremes
    mean = np.clip(mean, lower, upper)

    return SeriesData(
        x=np.asarray([timestamps[s] for s in starts]),
        mean=mean,
        lower=lower,
        upper=upper,
        sizes=sizes,
        aggregated=True,
    )


def buckets(logger: TimeSeriesLogger, max_points: int = DEFAULT_MAX_POINTS) -> List[Bucket]:
    """Same aggregation as `downsample`, one `Bucket` per plotted point."""
    data = downsample(logger, max_points)
    bounds = bucket_bounds(len(logger), max_points)
    return [
        Bucket(
            start=start,
            stop=stop,
            timestamp=data.x[i],
            mean=data.mean[i],
            minimum=data.lower[i],
            maximum=data.upper[i],
        )
        for i, (start, stop) in enumerate(bounds)
    ]


__all__ = ["Bucket", "SeriesData", "bucket_bounds", "buckets", "check_max_points", "downsample"]
