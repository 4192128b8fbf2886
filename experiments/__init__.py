"""Demo experiments that log into time-series loggers.

Public API shortcuts:
    from experiments import RegressionConfig, run_experiment
"""

from .run_dir import ChartDirectory  # noqa: F401
from .regression import (  # noqa: F401
    RegressionConfig,
    LinearRegressor,
    ExperimentResult,
    create_loggers,
    run_experiment,
)

__all__ = [
    "ChartDirectory",
    "RegressionConfig",
    "LinearRegressor",
    "ExperimentResult",
    "create_loggers",
    "run_experiment",
]
