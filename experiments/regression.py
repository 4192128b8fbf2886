"""Toy regression experiment that feeds loggers while it trains.

Fits `y = w*x + b` with a one-layer torch model, several independent runs
in a row. Every optimization step appends the minibatch loss and the
current parameters to two loggers, using the in-run step as timestamp, so
successive runs overlap on the x axis and the min/max band shows how much
the runs disagree.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import List, Optional, Tuple

import torch
import torch.nn as nn
from torch import optim
from torch.nn import functional as F

from constants import DEFAULT_MAX_POINTS, DEFAULT_RENDER_INTERVAL
from plotting.live_plot import LivePlotter
from timeseries.logger import TimeSeriesLogger
from .run_dir import ChartDirectory


@dataclass
class RegressionConfig:
    """Typed configuration with defaults for the regression demo."""
    nruns: int = 3
    nsteps: int = 500
    nsamples: int = 256
    batch_size: int = 32
    learning_rate: float = 0.05
    noise: float = 0.1
    true_weight: float = 3.0
    true_bias: float = -1.0
    seed: int = 0
    max_points: int = DEFAULT_MAX_POINTS
    render_interval: float = DEFAULT_RENDER_INTERVAL
    enable_plot: bool = True
    gif: bool = False

    @classmethod
    def from_opt(cls, opt) -> "RegressionConfig":
        """Create config from a namespace object or mapping with defaults."""
        if isinstance(opt, Mapping):
            opt = SimpleNamespace(**opt)
        return cls(
            nruns=int(getattr(opt, "nruns", 3)),
            nsteps=int(getattr(opt, "nsteps", 500)),
            nsamples=int(getattr(opt, "nsamples", 256)),
            batch_size=int(getattr(opt, "batch_size", 32)),
            learning_rate=float(getattr(opt, "learning_rate", 0.05)),
            noise=float(getattr(opt, "noise", 0.1)),
            true_weight=float(getattr(opt, "true_weight", 3.0)),
            true_bias=float(getattr(opt, "true_bias", -1.0)),
            seed=int(getattr(opt, "seed", 0)),
            max_points=int(getattr(opt, "max_points", DEFAULT_MAX_POINTS)),
            render_interval=float(getattr(opt, "render_interval", DEFAULT_RENDER_INTERVAL)),
            enable_plot=bool(getattr(opt, "enable_plot", True)),
            gif=bool(getattr(opt, "gif", False)),
        )


class LinearRegressor(nn.Module):
    """Single linear unit: one input feature, one output."""

    def __init__(self):
        super().__init__()
        self.linear = nn.Linear(1, 1)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.linear(x)

    def parameter_vector(self) -> torch.Tensor:
        return torch.cat([self.linear.weight.view(-1), self.linear.bias.view(-1)])


@dataclass
class ExperimentResult:
    loss_logger: TimeSeriesLogger
    param_logger: TimeSeriesLogger
    final_losses: List[float] = field(default_factory=list)


def make_dataset(
    config: RegressionConfig, generator: torch.Generator
) -> Tuple[torch.Tensor, torch.Tensor]:
    x = torch.rand(config.nsamples, 1, generator=generator) * 2.0 - 1.0
    noise = torch.randn(config.nsamples, 1, generator=generator) * config.noise
    y = config.true_weight * x + config.true_bias + noise
    return x, y


def create_loggers() -> Tuple[TimeSeriesLogger, TimeSeriesLogger]:
    loss_logger = TimeSeriesLogger(
        1,
        legend=["train loss"],
        xlabel="Step",
        ylabel="MSE",
        yaxis="log10",
        title="Training Loss",
    )
    param_logger = TimeSeriesLogger(
        2,
        legend=["weight", "bias"],
        xlabel="Step",
        ylabel="Value",
        title="Parameters",
    )
    return loss_logger, param_logger


def train_run(
    model: LinearRegressor,
    x: torch.Tensor,
    y: torch.Tensor,
    config: RegressionConfig,
    loss_logger: TimeSeriesLogger,
    param_logger: TimeSeriesLogger,
    generator: torch.Generator,
    plotter: Optional[LivePlotter] = None,
) -> float:
    """Train one run, logging every step. Returns the last minibatch loss."""
    optimizer = optim.Adam(model.parameters(), lr=config.learning_rate)
    loss = torch.tensor(float("nan"))
    for step in range(config.nsteps):
        idx = torch.randint(0, len(x), (config.batch_size,), generator=generator)
        loss = F.mse_loss(model(x[idx]), y[idx])

        optimizer.zero_grad()
        loss.backward()
        optimizer.step()

        loss_logger.append(step, loss)
        param_logger.append(step, model.parameter_vector())
        if plotter is not None:
            plotter.update()
    return float(loss.item())


def run_experiment(
    config: RegressionConfig, run_dir: Optional[ChartDirectory] = None
) -> ExperimentResult:
    """Run `config.nruns` independent runs into a shared pair of loggers."""
    loss_logger, param_logger = create_loggers()
    result = ExperimentResult(loss_logger=loss_logger, param_logger=param_logger)

    plotter = None
    if config.enable_plot and run_dir is not None:
        plotter = run_dir.live_plotter(
            [loss_logger, param_logger],
            "training_progress",
            gif=config.gif,
            render_interval=config.render_interval,
            max_points=config.max_points,
        )

    for run in range(config.nruns):
        torch.manual_seed(config.seed + run)
        generator = torch.Generator().manual_seed(config.seed + run)
        x, y = make_dataset(config, generator)
        model = LinearRegressor()

        final_loss = train_run(
            model, x, y, config, loss_logger, param_logger, generator, plotter=plotter
        )
        result.final_losses.append(final_loss)
        w, b = model.parameter_vector().tolist()
        print(
            f"[regression] run {run + 1}/{config.nruns} | Loss: {final_loss:.5f} | "
            f"w: {w:.3f} | b: {b:.3f}"
        )

    if plotter is not None:
        plotter.close()
    return result


__all__ = [
    "RegressionConfig",
    "LinearRegressor",
    "ExperimentResult",
    "make_dataset",
    "create_loggers",
    "train_run",
    "run_experiment",
]
