"""Search a feasible route, dry-run it, and export plots plus KPIs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from routesim.analysis import compute_kpis, export_kpi_json, export_standard_plots
from routesim.simulation import build_search_config, find_feasible_route, simulate_route
from routesim.train import default_train
from routesim.utils import configure_logging


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the demo.

    Returns:
        Parsed CLI namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--segments", type=int, default=10, help="Segments per route.")
    parser.add_argument("--seed", type=int, default=0, help="First seed to search from.")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=500,
        help="Attempt ceiling for the search.",
    )
    return parser.parse_args()


def main() -> None:
    """Find one feasible route for the default train and export its trace."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("feasible_route_demo")

    train = default_train()
    config = build_search_config(max_attempts=args.max_attempts)
    found = find_feasible_route(
        train,
        args.segments,
        starting_seed=args.seed,
        config=config,
        progress_prefix="route search",
    )
    trace = simulate_route(train, found.route, config.validation)
    kpis = compute_kpis(trace)

    output_dir = Path(__file__).resolve().parent / "output" / f"route_seed_{found.seed}"
    export_standard_plots(trace, output_dir)
    export_kpi_json(kpis, output_dir / "kpis.json")

    logger.info("Seed: %d (%d attempts)", found.seed, found.attempts)
    logger.info("Route length: %.0f m over %d segments", found.route.length, len(found.route.segments))
    logger.info("Completion time: %.1f s", found.completion_time)
    logger.info("Max speed: %.1f m/s (%.0f km/h)", kpis.max_speed, kpis.max_speed_kph)
    logger.info("Next search starts at seed %d", found.seed + 1)


if __name__ == "__main__":
    main()
