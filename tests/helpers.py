"""Shared test helpers."""

from __future__ import annotations

from routesim.route import CommonSegment, ForceSegment, Route, StationSegment
from routesim.train import Train


def sample_train(max_force: float = 20_000.0) -> Train:
    """Create a light test train standing at the route start.

    Args:
        max_force: Largest force the train withstands [N].

    Returns:
        Train with a mass of 1 t.
    """
    return Train(max_force=max_force, mass=1_000.0)


def force_then_common_route() -> Route:
    """Create the reference accelerate-then-coast route.

    Returns:
        Route with a 1 km, 10 kN force segment followed by 500 m of common rail.
    """
    return Route(
        segments=(
            ForceSegment(length=1_000.0, applied_force=10_000.0),
            CommonSegment(length=500.0),
        ),
        route_end_speed_limit=100.0,
    )


def station_after_force_route(max_arriving_speed: float = 5.0) -> Route:
    """Create a route that ends in a station after a long accelerating span.

    Args:
        max_arriving_speed: Arrival limit of the trailing station [m/s].

    Returns:
        Route with a 2 km, 10 kN force segment and a trailing station.
    """
    return Route(
        segments=(
            ForceSegment(length=2_000.0, applied_force=10_000.0),
            StationSegment(max_arriving_speed=max_arriving_speed),
        ),
        route_end_speed_limit=100.0,
    )
