"""KPI calculation from route dry-run traces."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from routesim.simulation.runner import RunTrace
from routesim.utils.constants import SECONDS_PER_HOUR

MPS_TO_KPH = SECONDS_PER_HOUR / 1_000.0


@dataclass(frozen=True)
class RunKpis:
    """Summary metrics for one dry run.

    Args:
        outcome: Outcome label, ``"finished"``, ``"timeout"``, or a failure.
        succeeded: Whether the train completed the route.
        elapsed_time: Simulated time when the run stopped [s].
        route_length: Total route length [m].
        distance: Distance covered before the run stopped [m].
        max_speed: Peak sampled speed [m/s].
        mean_speed: Mean sampled speed [m/s].
        final_speed: Last sampled speed [m/s].
        max_speed_kph: Peak sampled speed [km/h].
        step_count: Number of transition steps.
    """

    outcome: str
    succeeded: bool
    elapsed_time: float
    route_length: float
    distance: float
    max_speed: float
    mean_speed: float
    final_speed: float
    max_speed_kph: float
    step_count: int


def compute_kpis(trace: RunTrace) -> RunKpis:
    """Compute summary metrics from a dry-run trace.

    Args:
        trace: Sampled dry-run history with its final outcome.

    Returns:
        Aggregated run metrics.
    """
    speed = trace.speed
    max_speed = float(np.max(speed))
    return RunKpis(
        outcome=trace.result.reason,
        succeeded=trace.result.succeeded,
        elapsed_time=float(trace.result.elapsed_time),
        route_length=float(trace.route.length),
        distance=float(trace.position[-1] - trace.position[0]),
        max_speed=max_speed,
        mean_speed=float(np.mean(speed)),
        final_speed=float(speed[-1]),
        max_speed_kph=max_speed * MPS_TO_KPH,
        step_count=int(trace.result.step_count),
    )
