"""Where an experiment's rendered charts are written."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from constants import DEFAULT_RESULT_ROOT
from plotting.live_plot import LivePlotter


class ChartDirectory:
    """Output folder `<root>/<prefix>_<stamp>` holding PNG and GIF charts.

    `stamp` defaults to the current time; pass "" to reuse `<root>/<prefix>`
    across invocations, in which case charts of the same name are replaced.
    """

    def __init__(
        self, root: str = DEFAULT_RESULT_ROOT, prefix: str = "run", stamp: Optional[str] = None
    ):
        if stamp is None:
            stamp = time.strftime("%Y%m%d-%H%M%S")
        self.path = Path(root) / (f"{prefix}_{stamp}" if stamp else prefix)
        self.path.mkdir(parents=True, exist_ok=True)

    def png_path(self, name: str) -> Path:
        return self.path / f"{name}.png"

    def gif_path(self, name: str) -> Path:
        return self.path / f"{name}.gif"

    def live_plotter(self, loggers, name: str, gif: bool = False, **kwargs) -> LivePlotter:
        """A `LivePlotter` writing `<name>.png`, plus `<name>.gif` when `gif` is set."""
        return LivePlotter(
            loggers,
            out_path=str(self.png_path(name)),
            gif_path=str(self.gif_path(name)) if gif else None,
            **kwargs,
        )


__all__ = ["ChartDirectory"]
