"""Append-only time-series storage.

A `TimeSeriesLogger` keeps every `(timestamp, values)` sample it is given,
in append order, for a fixed number of variables. It also carries the
display metadata the renderer needs (legend, axis labels, y scale,
colormap, title) so a training loop only has to hand loggers around.

Usage:
    from timeseries import TimeSeriesLogger
    losses = TimeSeriesLogger(2, legend=["train", "valid"], yaxis="log10")
    losses.append(step, [train_loss, valid_loss])

Timestamps do not have to be sorted or unique: several runs may be appended
to the same logger one after another, each restarting its step counter.
"""

from __future__ import annotations

from collections import namedtuple
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

import matplotlib
import numpy as np
import torch
from matplotlib.colors import is_color_like

from constants import DEFAULT_COLORMAP, DEFAULT_YAXIS
from .errors import ConfigError, ShapeMismatch

T = TypeVar("T")
V = TypeVar("V")

Sample = namedtuple("Sample", ("timestamp", "values"))

YSCALES = ("linear", "log10")
_YSCALE_ALIASES = {"linear": "linear", "log10": "log10", "log": "log10"}


@dataclass
class LoggerConfig:
    """Display metadata attached to a logger."""

    legend: Optional[Tuple[str, ...]] = None
    yaxis: str = DEFAULT_YAXIS
    xlabel: str = ""
    ylabel: str = ""
    colormap: str = DEFAULT_COLORMAP
    title: str = ""

    @classmethod
    def option_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_opt(cls, opt=None, **overrides) -> "LoggerConfig":
        """Create config from a mapping or namespace object with defaults.

        Mappings and keyword overrides are checked strictly: an unknown key
        raises `ConfigError`. Attribute objects are read with `getattr`, so
        they may carry unrelated settings.
        """
        names = cls.option_names()
        values = {}
        if isinstance(opt, Mapping):
            _reject_unknown(opt, names)
            values.update(opt)
        elif opt is not None:
            for name in names:
                if hasattr(opt, name):
                    values[name] = getattr(opt, name)
        _reject_unknown(overrides, names)
        values.update(overrides)
        return cls(**values)

    def validated(self, variable_count: int) -> "LoggerConfig":
        legend = self.legend
        if legend is None:
            legend = ("",) * variable_count
        elif isinstance(legend, str):
            legend = (legend,)
        legend = tuple(str(label) for label in legend)
        if len(legend) != variable_count:
            raise ConfigError(
                f"legend has {len(legend)} entries but the logger tracks "
                f"{variable_count} variable(s)"
            )

        yaxis = str(self.yaxis).lstrip(":")
        if yaxis not in _YSCALE_ALIASES:
            raise ConfigError(f"Unknown yaxis={self.yaxis!r}. Expected 'linear' or 'log10'.")

        colormap = str(self.colormap)
        if colormap not in matplotlib.colormaps and not is_color_like(colormap):
            raise ConfigError(f"Unknown colormap={self.colormap!r}")

        return LoggerConfig(
            legend=legend,
            yaxis=_YSCALE_ALIASES[yaxis],
            xlabel=str(self.xlabel),
            ylabel=str(self.ylabel),
            colormap=colormap,
            title=str(self.title),
        )


def _reject_unknown(options: Mapping, names: Tuple[str, ...]):
    unknown = sorted(set(options) - set(names))
    if unknown:
        raise ConfigError(
            f"Unrecognized logger option(s) {unknown}. Expected any of {list(names)}."
        )


class TimeSeriesLogger(Generic[T, V]):
    """Append-only store of samples for `variable_count` named variables."""

    def __init__(
        self,
        variable_count: int = 1,
        config: Any = None,
        *,
        timestamp_type: Optional[type] = None,
        value_type: Callable[[Any], V] = float,
        **options,
    ):
        if (
            isinstance(variable_count, bool)
            or not isinstance(variable_count, (int, np.integer))
            or variable_count < 1
        ):
            raise ConfigError(
                f"variable_count must be a positive integer, got {variable_count!r}"
            )
        self.variable_count = int(variable_count)
        self.timestamp_type = timestamp_type
        self.value_type = value_type
        self.config = LoggerConfig.from_opt(config, **options).validated(self.variable_count)

        self._timestamps: List[T] = []
        self._values: List[Tuple[V, ...]] = []

    # --- metadata ---
    @property
    def legend(self) -> Tuple[str, ...]:
        return self.config.legend

    @property
    def xlabel(self) -> str:
        return self.config.xlabel

    @property
    def ylabel(self) -> str:
        return self.config.ylabel

    @property
    def yscale(self) -> str:
        return self.config.yaxis

    @property
    def colormap(self) -> str:
        return self.config.colormap

    @property
    def title(self) -> str:
        return self.config.title

    # --- mutation ---
    def append(self, timestamp: T, values) -> None:
        """Append one sample.

        `values` is a 1-D vector with one entry per variable (list, tuple,
        numpy array or torch tensor). A bare scalar is accepted when the
        logger tracks a single variable. The logger is left untouched when
        the call fails.
        """
        if self.timestamp_type is not None and not isinstance(timestamp, self.timestamp_type):
            raise TypeError(
                f"timestamp must be {self.timestamp_type.__name__}, "
                f"got {type(timestamp).__name__}"
            )
        row = self._as_row(values)
        self._timestamps.append(timestamp)
        self._values.append(row)

    def append_scalar(self, timestamp: T, value) -> None:
        """Scalar convenience wrapper around `append` for single-variable loggers."""
        if self.variable_count != 1:
            raise ShapeMismatch(
                f"append_scalar needs a single-variable logger, this one tracks "
                f"{self.variable_count}"
            )
        if np.ndim(_to_numpy(value)) != 0:
            raise ShapeMismatch(f"append_scalar expects a scalar, got {value!r}")
        self.append(timestamp, value)

    def _as_row(self, values) -> Tuple[V, ...]:
        try:
            arr = np.asarray(_to_numpy(values))
        except ValueError as e:
            # ragged nesting such as [1.0, [2.0, 3.0]]
            raise ShapeMismatch(
                f"expected {self.variable_count} scalar value(s), got {values!r}"
            ) from e
        if arr.ndim == 0:
            if self.variable_count != 1:
                raise ShapeMismatch(
                    f"got a scalar but the logger tracks {self.variable_count} variables"
                )
            items = [arr.item()]
        elif arr.ndim == 1 and arr.shape[0] == self.variable_count:
            items = arr.tolist()
        else:
            raise ShapeMismatch(
                f"expected {self.variable_count} value(s), got shape {arr.shape}"
            )
        if any(np.ndim(v) != 0 for v in items):
            raise ShapeMismatch(f"expected {self.variable_count} scalar value(s), got {values!r}")
        return tuple(self.value_type(v) for v in items)

    # --- read access ---
    def __len__(self) -> int:
        return len(self._timestamps)

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return tuple(Sample(t, v) for t, v in zip(self._timestamps, self._values))

    @property
    def timestamps(self) -> List[T]:
        return list(self._timestamps)

    def values(self) -> np.ndarray:
        """Copy of all values as a float array of shape (n, variable_count)."""
        if not self._values:
            return np.empty((0, self.variable_count), dtype=float)
        return np.array(self._values, dtype=float)

    def variable(self, index: int) -> np.ndarray:
        if not 0 <= index < self.variable_count:
            raise IndexError(f"variable index {index} out of range for {self.variable_count}")
        return self.values()[:, index]

    def __repr__(self) -> str:
        return (
            f"TimeSeriesLogger(variable_count={self.variable_count}, "
            f"samples={len(self)}, legend={list(self.legend)})"
        )


def _to_numpy(values):
    if isinstance(values, torch.Tensor):
        return values.detach().cpu().numpy()
    return values


__all__ = ["Sample", "LoggerConfig", "TimeSeriesLogger", "YSCALES"]
