"""Animated GIF export of a chart that is updated in place."""

from __future__ import annotations

import os

from matplotlib.animation import PillowWriter

from constants import DEFAULT_GIF_FPS, DEFAULT_PLOT_DPI


class GifRecorder:
    """Capture successive states of one figure into an animated GIF.

    Usage:
        with GifRecorder(chart.figure, "Result/loss.gif") as gif:
            for ...:
                update_plot(chart, logger)
                gif.capture()
    """

    def __init__(self, figure, out_path: str, fps: int = DEFAULT_GIF_FPS, dpi: int = DEFAULT_PLOT_DPI):
        self.figure = figure
        self.out_path = out_path
        self.frames = 0
        out_dir = os.path.dirname(self.out_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        self._writer = PillowWriter(fps=max(1, int(fps)))
        self._writer.setup(figure, out_path, dpi=dpi)
        self._closed = False

    def capture(self):
        if self._closed:
            raise RuntimeError(f"GifRecorder for {self.out_path} is already closed")
        self._writer.grab_frame()
        self.frames += 1

    def close(self):
        """Write the GIF. Nothing is written when no frame was captured."""
        if self._closed:
            return
        self._closed = True
        if self.frames:
            self._writer.finish()

    def __enter__(self) -> "GifRecorder":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


__all__ = ["GifRecorder"]
