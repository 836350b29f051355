"""Headless route dry runs used as the search oracle and for analysis."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from routesim.route.models import Route, locate
from routesim.simulation.config import ValidationConfig
from routesim.train.kinematics import RouteFailure, StepStatus, step
from routesim.train.models import Train
from routesim.utils.exceptions import RouteSimError

TIMEOUT_REASON = "timeout"
SUCCESS_REASON = "finished"

StepRecorder = Callable[[float, Train], None]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one dry run of a train over a route.

    Args:
        failure: Violated rule, or ``None`` for success and timeouts.
        timed_out: Whether the simulated time budget ran out first.
        elapsed_time: Simulated time when the run stopped [s].
        step_count: Number of :func:`routesim.train.kinematics.step` calls.
    """

    failure: RouteFailure | None
    timed_out: bool
    elapsed_time: float
    step_count: int

    @property
    def succeeded(self) -> bool:
        """Whether the train finished the route within the rules.

        Returns:
            ``True`` when the run neither failed nor timed out.
        """
        return self.failure is None and not self.timed_out

    @property
    def completion_time(self) -> float | None:
        """Time the train needed to finish the route.

        Returns:
            Elapsed time [s] for successful runs, otherwise ``None``.
        """
        return self.elapsed_time if self.succeeded else None

    @property
    def reason(self) -> str:
        """Short machine-friendly label of the run outcome.

        Returns:
            ``"finished"``, ``"timeout"``, or the failure value.
        """
        if self.timed_out:
            return TIMEOUT_REASON
        if self.failure is not None:
            return self.failure.value
        return SUCCESS_REASON


@dataclass(frozen=True)
class RunTrace:
    """Sampled train state history of one dry run.

    Args:
        route: Route that was traversed.
        time: Simulated time at each sample [s].
        position: Train position at each sample [m].
        speed: Train speed at each sample [m/s].
        segment_index: Occupied segment index at each sample, ``-1`` once the
            train is past the route end.
        result: Final outcome of the run.
    """

    route: Route
    time: np.ndarray
    position: np.ndarray
    speed: np.ndarray
    segment_index: np.ndarray
    result: ValidationResult


def _drive(
    train: Train,
    route: Route,
    config: ValidationConfig,
    recorder: StepRecorder | None = None,
) -> ValidationResult:
    """Step ``train`` until a terminal outcome or the time budget runs out.

    Args:
        train: Train at the start of the run.
        route: Route to traverse.
        config: Validated dry-run settings.
        recorder: Optional callback receiving ``(elapsed, train)`` after each
            non-terminal step.

    Returns:
        Outcome of the run.

    Raises:
        routesim.utils.exceptions.RouteSimError: If a continuing step outcome
            carries no train state.
    """
    elapsed = 0.0
    step_count = 0
    while True:
        elapsed += config.delta_t
        if elapsed > config.max_time:
            return ValidationResult(
                failure=None,
                timed_out=True,
                elapsed_time=elapsed,
                step_count=step_count,
            )
        outcome = step(train, route, config.delta_t)
        step_count += 1
        if outcome.status is StepStatus.FINISHED:
            return ValidationResult(
                failure=None,
                timed_out=False,
                elapsed_time=elapsed,
                step_count=step_count,
            )
        if outcome.status is StepStatus.FAILED:
            return ValidationResult(
                failure=outcome.failure,
                timed_out=False,
                elapsed_time=elapsed,
                step_count=step_count,
            )
        if outcome.train is None:
            msg = "continuing step outcome carries no train state"
            raise RouteSimError(msg)
        train = outcome.train
        if recorder is not None:
            recorder(elapsed, train)


def validate_route(
    train: Train,
    route: Route,
    config: ValidationConfig | None = None,
) -> ValidationResult:
    """Dry-run ``train`` over ``route`` and report how the run ended.

    Args:
        train: Train at the start of the run, usually standing at position 0.
        route: Route to traverse.
        config: Dry-run settings. Defaults to :class:`ValidationConfig`.

    Returns:
        Success with completion time, the violated rule, or a timeout.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If the train or dry-run
            settings are invalid.
        routesim.utils.exceptions.RouteDataError: If the route is invalid.
    """
    config = config or ValidationConfig()
    config.validate()
    train.validate()
    route.validate()
    return _drive(train, route, config)


def simulate_route(
    train: Train,
    route: Route,
    config: ValidationConfig | None = None,
) -> RunTrace:
    """Dry-run ``train`` over ``route`` and keep the full state history.

    Args:
        train: Train at the start of the run.
        route: Route to traverse.
        config: Dry-run settings. Defaults to :class:`ValidationConfig`.

    Returns:
        Sampled trace including the initial state and the final outcome.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If the train or dry-run
            settings are invalid.
        routesim.utils.exceptions.RouteDataError: If the route is invalid.
    """
    config = config or ValidationConfig()
    config.validate()
    train.validate()
    route.validate()

    times = [0.0]
    positions = [train.position]
    speeds = [train.speed]
    indices = [_segment_index(train, route)]

    def record(elapsed: float, state: Train) -> None:
        """Append one sample to the trace buffers.

        Args:
            elapsed: Simulated time after the step [s].
            state: Train state after the step.
        """
        times.append(elapsed)
        positions.append(state.position)
        speeds.append(state.speed)
        indices.append(_segment_index(state, route))

    result = _drive(train, route, config, recorder=record)
    return RunTrace(
        route=route,
        time=np.asarray(times, dtype=float),
        position=np.asarray(positions, dtype=float),
        speed=np.asarray(speeds, dtype=float),
        segment_index=np.asarray(indices, dtype=int),
        result=result,
    )


def _segment_index(train: Train, route: Route) -> int:
    """Return the occupied segment index.

    Args:
        train: Train to locate.
        route: Route being traversed.

    Returns:
        Segment index, or ``-1`` past the route end.
    """
    location = locate(train, route)
    return -1 if location is None else location.index
