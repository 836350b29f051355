"""Fixed-step train transition function and its outcome taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from routesim.route.models import (
    CommonSegment,
    ForceSegment,
    Route,
    StationSegment,
    locate,
    segment_length,
)
from routesim.train.models import Train
from routesim.utils.exceptions import ConfigurationError, RouteDataError


class RouteFailure(Enum):
    """Rule violations that terminate a run."""

    EXCESSIVE_SPEED_AT_STATION = "excessive_speed_at_station"
    EXCESSIVE_SPEED_AT_ROUTE_END = "excessive_speed_at_route_end"
    SPEED_IS_NEGATIVE = "speed_is_negative"
    TRAIN_BROKEN_FROM_TOO_MUCH_FORCE = "train_broken_from_too_much_force"
    ZERO_SPEED_ON_COMMON_RAILS = "zero_speed_on_common_rails"

    @property
    def message(self) -> str:
        """Human-readable description for logs and UI messages.

        Returns:
            Sentence-case failure description.
        """
        return self.value.replace("_", " ").capitalize()


class StepStatus(Enum):
    """Status reported by one call to :func:`step`."""

    CONTINUING = "continuing"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    """Result of advancing a train by one time step.

    Args:
        status: Whether the run continues, finished, or failed.
        train: Updated train, set only when ``status`` is ``CONTINUING``.
        failure: Violated rule, set only when ``status`` is ``FAILED``.
    """

    status: StepStatus
    train: Train | None = None
    failure: RouteFailure | None = None

    @classmethod
    def continuing(cls, train: Train) -> StepOutcome:
        """Build a non-terminal outcome.

        Args:
            train: Train state after the step.

        Returns:
            Outcome with ``CONTINUING`` status.
        """
        return cls(status=StepStatus.CONTINUING, train=train)

    @classmethod
    def finished(cls) -> StepOutcome:
        """Build the terminal success outcome.

        Returns:
            Outcome with ``FINISHED`` status.
        """
        return cls(status=StepStatus.FINISHED)

    @classmethod
    def failed(cls, failure: RouteFailure) -> StepOutcome:
        """Build a terminal failure outcome.

        Args:
            failure: Violated rule.

        Returns:
            Outcome with ``FAILED`` status.
        """
        return cls(status=StepStatus.FAILED, failure=failure)

    @property
    def is_terminal(self) -> bool:
        """Whether the run ends with this outcome.

        Returns:
            ``True`` for finished and failed outcomes.
        """
        return self.status is not StepStatus.CONTINUING


def _finish(speed: float, route: Route) -> StepOutcome:
    """Apply the route-end speed check.

    Args:
        speed: Speed with which the train leaves the route [m/s].
        route: Route being finished.

    Returns:
        Finished outcome, or a failure when ``speed`` exceeds the end limit.
    """
    if speed > route.route_end_speed_limit:
        return StepOutcome.failed(RouteFailure.EXCESSIVE_SPEED_AT_ROUTE_END)
    return StepOutcome.finished()


def step(train: Train, route: Route, delta_t: float) -> StepOutcome:
    """Advance ``train`` along ``route`` by one fixed time step.

    The function is pure: it never mutates its inputs and identical arguments
    always give identical outcomes. Force segments use a symmetric update that
    averages the speed before and after the velocity change when integrating
    position.

    Args:
        train: Train state at the start of the step.
        route: Route being traversed.
        delta_t: Time step [s].

    Returns:
        Outcome holding the new train state, terminal success, or the violated
        rule.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If ``delta_t`` is not
            positive.
        routesim.utils.exceptions.RouteDataError: If the route holds an
            unknown segment type.
    """
    if delta_t <= 0.0:
        msg = "delta_t must be positive"
        raise ConfigurationError(msg)

    location = locate(train, route)
    if location is None:
        return _finish(train.speed, route)

    segment = location.segment
    if isinstance(segment, CommonSegment) and train.speed <= 0.0:
        return StepOutcome.failed(RouteFailure.ZERO_SPEED_ON_COMMON_RAILS)

    speed = train.speed
    if isinstance(segment, CommonSegment):
        delta_position = delta_t * speed
    elif isinstance(segment, ForceSegment):
        if abs(segment.applied_force) > train.max_force:
            return StepOutcome.failed(RouteFailure.TRAIN_BROKEN_FROM_TOO_MUCH_FORCE)
        acceleration = segment.applied_force / train.mass
        delta_position = delta_t * speed / 2.0
        speed += acceleration * delta_t
        delta_position += delta_t * speed / 2.0
    elif isinstance(segment, StationSegment):
        delta_position = 0.0
    else:
        msg = f"Unknown segment type: {type(segment).__name__}"
        raise RouteDataError(msg)

    position = train.position + delta_position

    if speed < 0.0:
        return StepOutcome.failed(RouteFailure.SPEED_IS_NEGATIVE)

    if delta_position + location.position > segment_length(segment):
        next_index = location.index + 1
        if next_index == len(route.segments):
            return _finish(speed, route)
        next_segment = route.segments[next_index]
        # Arrival is judged on the speed the train entered this step with.
        if (
            isinstance(next_segment, StationSegment)
            and train.speed > next_segment.max_arriving_speed
        ):
            return StepOutcome.failed(RouteFailure.EXCESSIVE_SPEED_AT_STATION)

    return StepOutcome.continuing(replace(train, position=position, speed=speed))
