"""Entry point for the regression demo with live loss plots."""

import argparse
import json
from types import SimpleNamespace

import torch

from experiments import RegressionConfig, ChartDirectory, run_experiment


def load_config(path):
    """Read a JSON config file into an attribute namespace."""
    with open(path, "r") as f:
        return SimpleNamespace(**json.load(f))


def build_parser():
    parser = argparse.ArgumentParser(
        description="Train a toy regression over several runs and plot its loss curves"
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to a JSON config (keys of RegressionConfig)",
    )
    parser.add_argument(
        "-n", "--nruns",
        type=int,
        default=None,
        help="Number of independent runs (overrides the config)",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Disable the live PNG plot",
    )
    parser.add_argument(
        "--gif",
        action="store_true",
        help="Also export the live plot frames as an animated GIF",
    )
    parser.add_argument(
        "-o", "--out",
        type=str,
        default="Result",
        help="Root directory for rendered charts (default: Result)",
    )
    return parser


def main(argv=None):
    """Parse arguments and run the experiment."""
    args = build_parser().parse_args(argv)

    opt = SimpleNamespace()
    if args.config is not None:
        try:
            opt = load_config(args.config)
            print(f"Loaded config: {args.config}")
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}")
            return 1
        except (json.JSONDecodeError, TypeError) as e:
            print(f"Error parsing config JSON: {e}")
            return 1

    config = RegressionConfig.from_opt(opt)
    if args.nruns is not None:
        config.nruns = args.nruns
    if args.no_plot:
        config.enable_plot = False
    if args.gif:
        config.gif = True

    print(f"Torch: {torch.__version__}")
    print(f"\n--- Configuration Summary ---")
    print(f"Runs: {config.nruns}")
    print(f"Steps per run: {config.nsteps}")
    print(f"Learning rate: {config.learning_rate}")
    print(f"Max plotted points: {config.max_points}")
    print(f"Plot: {'on' if config.enable_plot else 'off'}{' (+gif)' if config.gif else ''}")
    print(f"-----------------------------\n")

    run_dir = ChartDirectory(root=args.out, prefix="regression") if config.enable_plot else None
    result = run_experiment(config, run_dir)

    print(f"\n{'='*60}")
    print(f"All {config.nruns} run(s) completed, {len(result.loss_logger)} samples logged.")
    if run_dir is not None:
        print(f"Charts written to {run_dir.path}")
    print(f"{'='*60}")
    return 0


if __name__ == "__main__":
    exit(main())
