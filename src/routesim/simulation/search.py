"""Generate-and-validate search for routes a train can complete."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass

from routesim.route.generator import RouteGenerationBands, synthesize_route
from routesim.route.models import Route
from routesim.simulation._progress import emit_search_progress
from routesim.simulation.config import SearchConfig
from routesim.simulation.runner import validate_route
from routesim.train.models import Train
from routesim.utils.exceptions import ConfigurationError, SearchExhaustedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeasibleRoute:
    """Route found by :func:`find_feasible_route`.

    Args:
        route: Route the train completes within the rules.
        seed: Seed that synthesized ``route``. Continue later searches from
            ``seed + 1`` to avoid repeats.
        completion_time: Simulated time the train needs for the route [s].
        attempts: Candidates synthesized, the accepted one included.
    """

    route: Route
    seed: int
    completion_time: float
    attempts: int


def _check_ceilings(
    config: SearchConfig,
    *,
    attempts: int,
    started: float,
    seed: int,
) -> None:
    """Raise once the search has used up its attempt or wall-time budget.

    Args:
        config: Search settings with optional ceilings.
        attempts: Candidates rejected so far.
        started: ``time.perf_counter`` value at search start.
        seed: Next seed that would be tried.

    Raises:
        routesim.utils.exceptions.SearchExhaustedError: If a ceiling is hit.
    """
    if config.max_attempts is not None and attempts >= config.max_attempts:
        msg = f"No feasible route within {config.max_attempts} attempts"
        raise SearchExhaustedError(msg, next_seed=seed, attempts=attempts)
    if config.max_wall_time is not None and time.perf_counter() - started >= config.max_wall_time:
        msg = f"No feasible route within {config.max_wall_time:.3f} s of search time"
        raise SearchExhaustedError(msg, next_seed=seed, attempts=attempts)


def find_feasible_route(
    train_template: Train,
    segment_count: int,
    starting_seed: int = 0,
    config: SearchConfig | None = None,
    bands: RouteGenerationBands | None = None,
    progress_prefix: str | None = None,
) -> FeasibleRoute:
    """Synthesize routes from consecutive seeds until one can be completed.

    Every candidate is dry-run against a fresh copy of ``train_template``
    standing at the route start. Any rule violation or timeout rejects the
    candidate and the search moves on to the next seed. Without ceilings in
    ``config`` the search only ends on success.

    Args:
        train_template: Train configuration used for every dry run.
        segment_count: Number of segments per candidate route.
        starting_seed: First seed to try.
        config: Search settings. Defaults to :class:`SearchConfig`.
        bands: Sampling bands forwarded to route synthesis.
        progress_prefix: Optional stderr progress prefix; ``None`` disables
            progress output.

    Returns:
        First feasible route, its seed, and the completion time.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If the train, search
            settings, seed, or segment count are invalid.
        routesim.utils.exceptions.SearchExhaustedError: If an attempt or
            wall-time ceiling is reached first.
    """
    config = config or SearchConfig()
    config.validate()
    train_template.validate()
    if starting_seed < 0:
        msg = f"starting_seed must be non-negative, got {starting_seed}"
        raise ConfigurationError(msg)

    train = train_template.reset()
    started = time.perf_counter()
    seed = starting_seed
    attempts = 0
    while True:
        _check_ceilings(config, attempts=attempts, started=started, seed=seed)
        route = synthesize_route(seed, segment_count, bands)
        result = validate_route(train, route, config.validation)
        attempts += 1
        emit_search_progress(
            progress_prefix=progress_prefix,
            attempts=attempts,
            max_attempts=config.max_attempts,
            seed=seed,
            final=result.succeeded,
        )
        completion_time = result.completion_time
        if completion_time is not None:
            logger.info(
                "Feasible route at seed %d after %d attempts (%.1f s run)",
                seed,
                attempts,
                completion_time,
            )
            return FeasibleRoute(
                route=route,
                seed=seed,
                completion_time=completion_time,
                attempts=attempts,
            )
        logger.debug("Rejected seed %d: %s after %.1f s", seed, result.reason, result.elapsed_time)
        seed += 1


def iter_feasible_routes(
    train_template: Train,
    segment_count: int,
    count: int,
    starting_seed: int = 0,
    config: SearchConfig | None = None,
    bands: RouteGenerationBands | None = None,
) -> Iterator[FeasibleRoute]:
    """Yield consecutive feasible routes without repeating seeds.

    Args:
        train_template: Train configuration used for every dry run.
        segment_count: Number of segments per candidate route.
        count: Number of feasible routes to yield.
        starting_seed: First seed of the first search.
        config: Search settings applied to each individual search.
        bands: Sampling bands forwarded to route synthesis.

    Yields:
        Feasible routes with strictly increasing seeds.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If ``count`` is negative
            or any search setting is invalid.
    """
    if count < 0:
        msg = "count must be non-negative"
        raise ConfigurationError(msg)
    seed = starting_seed
    for _ in range(count):
        found = find_feasible_route(
            train_template,
            segment_count,
            starting_seed=seed,
            config=config,
            bands=bands,
        )
        yield found
        seed = found.seed + 1
