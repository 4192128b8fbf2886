"""Real-time plot utilities for loggers filled by a running loop.

`LivePlotter` re-renders one PNG file (overwriting it so disk does not
fill) from a set of loggers while they keep growing. The first render
builds the chart with `plot_logger`; later renders push new data into the
same figure with `update_plot`, and can also append a frame to a GIF.

Design goals:
  - Throttled: redraws are gated by a wall-clock `RenderThrottle` owned by
    the plotter, not by module state.
  - Headless-friendly: uses Agg backend.
  - Non-intrusive: a failed PNG write prints a warning instead of stopping
    the caller's loop.

Usage:
    plotter = LivePlotter([losses], out_path="Result/loss.png", render_interval=2.0)
    for step in range(nsteps):
        losses.append(step, loss)
        plotter.update()
    plotter.close()
"""

from __future__ import annotations

import os
import time
from typing import Callable, Optional, Tuple

import matplotlib

matplotlib.use("Agg")  # Force non-interactive backend
import matplotlib.pyplot as plt

from constants import (
    DEFAULT_GIF_FPS,
    DEFAULT_MAX_POINTS,
    DEFAULT_PLOT_DPI,
    DEFAULT_PLOT_FILENAME,
    DEFAULT_RENDER_INTERVAL,
    DEFAULT_RESULT_ROOT,
)
from .animation import GifRecorder
from .render import Chart, _as_logger_list, plot_logger, update_plot


class RenderThrottle:
    """Wall-clock gate: `ready()` is true at most once per `interval` seconds."""

    def __init__(
        self,
        interval: float = DEFAULT_RENDER_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = max(0.0, float(interval))
        self._clock = clock
        self._last: Optional[float] = None

    def ready(self) -> bool:
        now = self._clock()
        if self._last is None or now - self._last >= self.interval:
            self._last = now
            return True
        return False

    def reset(self):
        self._last = None


class LivePlotter:
    """Periodically renders loggers to a PNG (and optionally a GIF)."""

    def __init__(
        self,
        loggers,
        enabled: bool = True,
        out_path: str = os.path.join(DEFAULT_RESULT_ROOT, DEFAULT_PLOT_FILENAME),
        render_interval: float = DEFAULT_RENDER_INTERVAL,
        max_points: int = DEFAULT_MAX_POINTS,
        layout: Optional[Tuple[int, int]] = None,
        colors=None,
        gif_path: Optional[str] = None,
        gif_fps: int = DEFAULT_GIF_FPS,
        dpi: int = DEFAULT_PLOT_DPI,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loggers = _as_logger_list(loggers)
        self.enabled = enabled
        self.out_path = out_path
        self.max_points = max_points
        self.layout = layout
        self.colors = colors
        self.gif_path = gif_path
        self.gif_fps = gif_fps
        self.dpi = dpi
        self.throttle = RenderThrottle(render_interval, clock=clock)
        self.chart: Optional[Chart] = None
        self.render_count = 0
        self._recorder: Optional[GifRecorder] = None

        if self.enabled:
            out_dir = os.path.dirname(self.out_path)
            if out_dir:
                os.makedirs(out_dir, exist_ok=True)

    def _has_data(self) -> bool:
        return all(len(lg) > 0 for lg in self.loggers)

    def update(self, force: bool = False) -> bool:
        """Render if the throttle allows it. Returns True when a frame was drawn."""
        if not self.enabled or not self._has_data():
            return False
        if not (self.throttle.ready() or force):
            return False
        self._render()
        return True

    def _render(self):
        if self.chart is None:
            self.chart = plot_logger(
                self.loggers,
                max_points=self.max_points,
                colors=self.colors,
                layout=self.layout,
            )
            if self.gif_path:
                self._recorder = GifRecorder(
                    self.chart.figure, self.gif_path, fps=self.gif_fps, dpi=self.dpi
                )
        else:
            update_plot(self.chart, self.loggers)

        if self._recorder is not None:
            self._recorder.capture()
        self._safe_save(self.chart.figure)
        self.render_count += 1

    def _safe_save(self, fig):
        """Save figure to file, reporting write failures."""
        try:
            fig.savefig(self.out_path, dpi=self.dpi)
        except OSError as e:
            print(f"Warning: Failed to save plot to {self.out_path}: {e}")

    def finalize(self):
        """Force a final render."""
        if self.enabled and self._has_data():
            self._render()

    def close(self):
        """Final render, write the GIF and release the figure."""
        self.finalize()
        if self._recorder is not None:
            self._recorder.close()
            self._recorder = None
        if self.chart is not None:
            plt.close(self.chart.figure)
            self.chart = None


__all__ = ["RenderThrottle", "LivePlotter"]
