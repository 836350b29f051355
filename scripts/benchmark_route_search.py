"""Benchmark repeated feasible-route searches for one train configuration."""

from __future__ import annotations

import argparse
import json
import logging
import statistics
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from routesim.simulation import build_search_config
from routesim.simulation.search import find_feasible_route
from routesim.train import Train
from routesim.utils import configure_logging

DEFAULT_SEARCH_COUNT = 100
DEFAULT_SEGMENT_COUNT = 10
DEFAULT_MASS = 600_000.0
DEFAULT_MAX_FORCE = 1_000_000.0
DEFAULT_OUTPUT_PATH = (
    Path(__file__).resolve().parents[1]
    / "examples"
    / "output"
    / "route_search"
    / "route_search_benchmark.json"
)


@dataclass(frozen=True)
class RouteSearchCaseResult:
    """Timing summary for one feasible-route search."""

    seed: int
    attempts: int
    completion_time_s: float
    search_ms: float


def run_route_search_benchmark(
    *,
    train: Train,
    search_count: int,
    segment_count: int,
    starting_seed: int,
    max_attempts: int | None,
    progress: bool,
) -> list[RouteSearchCaseResult]:
    """Run consecutive searches, each continuing after the previous seed.

    Args:
        train: Train configuration used for every dry run.
        search_count: Number of feasible routes to find.
        segment_count: Number of segments per candidate route.
        starting_seed: Seed of the first search.
        max_attempts: Optional attempt ceiling per search.
        progress: Whether to render progress lines to stderr.

    Returns:
        Timing summaries in search order.
    """
    config = build_search_config(max_attempts=max_attempts)
    results: list[RouteSearchCaseResult] = []
    seed = starting_seed
    for index in range(search_count):
        t0 = time.perf_counter()
        found = find_feasible_route(
            train,
            segment_count,
            starting_seed=seed,
            config=config,
            progress_prefix=f"search {index + 1}/{search_count}" if progress else None,
        )
        results.append(
            RouteSearchCaseResult(
                seed=found.seed,
                attempts=found.attempts,
                completion_time_s=found.completion_time,
                search_ms=(time.perf_counter() - t0) * 1_000.0,
            )
        )
        seed = found.seed + 1
    return results


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--searches", type=int, default=DEFAULT_SEARCH_COUNT)
    parser.add_argument("--segments", type=int, default=DEFAULT_SEGMENT_COUNT)
    parser.add_argument("--mass", type=float, default=DEFAULT_MASS, help="Train mass [kg].")
    parser.add_argument(
        "--max-force",
        type=float,
        default=DEFAULT_MAX_FORCE,
        help="Largest force the train withstands [N].",
    )
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first search.")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Optional attempt ceiling per search.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Output JSON path for benchmark results.",
    )
    parser.add_argument("--progress", action="store_true", help="Render search progress.")
    return parser.parse_args()


def main() -> None:
    """Run the route-search benchmark and export a JSON summary."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("benchmark_route_search")

    train = Train(max_force=float(args.max_force), mass=float(args.mass))
    t0 = time.perf_counter()
    results = run_route_search_benchmark(
        train=train,
        search_count=int(args.searches),
        segment_count=int(args.segments),
        starting_seed=int(args.seed),
        max_attempts=args.max_attempts,
        progress=bool(args.progress),
    )
    total_s = time.perf_counter() - t0

    search_ms = [item.search_ms for item in results]
    payload = {
        "metadata": {
            "generated_at_utc": datetime.now(UTC).isoformat(),
            "searches": int(args.searches),
            "segments": int(args.segments),
            "mass": float(args.mass),
            "max_force": float(args.max_force),
            "starting_seed": int(args.seed),
            "total_s": total_s,
            "search_median_ms": float(statistics.median(search_ms)) if search_ms else 0.0,
        },
        "cases": [asdict(item) for item in results],
    }
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(payload, indent=2))
    logger.info("Saved route search benchmark to: %s", args.output)
    logger.info("Searches: %d in %.2f s", len(results), total_s)


if __name__ == "__main__":
    main()
