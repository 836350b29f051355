"""Simulation and search configuration dataclasses."""

from __future__ import annotations

import math
from dataclasses import dataclass

from routesim.utils.constants import DEFAULT_MAX_RUN_TIME, DEFAULT_TICK
from routesim.utils.exceptions import ConfigurationError

DEFAULT_MAX_ATTEMPTS: int | None = None
DEFAULT_MAX_WALL_TIME: float | None = None


@dataclass(frozen=True)
class ValidationConfig:
    """Controls for one headless dry run of a route.

    Args:
        max_time: Simulated time budget before the run times out [s].
        delta_t: Fixed integration step [s].
    """

    max_time: float = DEFAULT_MAX_RUN_TIME
    delta_t: float = DEFAULT_TICK

    def validate(self) -> None:
        """Validate time budget and step size.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If ``delta_t`` or
                ``max_time`` is not finite and positive, or the step exceeds
                the budget.
        """
        if not math.isfinite(self.delta_t) or self.delta_t <= 0.0:
            msg = "delta_t must be finite and positive"
            raise ConfigurationError(msg)
        if not math.isfinite(self.max_time) or self.max_time <= 0.0:
            msg = "max_time must be finite and positive"
            raise ConfigurationError(msg)
        if self.delta_t > self.max_time:
            msg = "delta_t must not exceed max_time"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class SearchConfig:
    """Controls for the generate-and-validate route search.

    Args:
        validation: Dry-run settings applied to every candidate route.
        max_attempts: Optional ceiling on synthesized candidates. ``None``
            searches without limit.
        max_wall_time: Optional wall-clock ceiling for one search [s].
            ``None`` searches without limit.
    """

    validation: ValidationConfig = ValidationConfig()
    max_attempts: int | None = DEFAULT_MAX_ATTEMPTS
    max_wall_time: float | None = DEFAULT_MAX_WALL_TIME

    def validate(self) -> None:
        """Validate search ceilings and nested validation settings.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If a ceiling is not
                positive or the validation settings are invalid.
        """
        self.validation.validate()
        if self.max_attempts is not None and self.max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ConfigurationError(msg)
        if self.max_wall_time is not None and not self.max_wall_time > 0.0:
            msg = "max_wall_time must be positive"
            raise ConfigurationError(msg)


def build_search_config(
    max_time: float = DEFAULT_MAX_RUN_TIME,
    delta_t: float = DEFAULT_TICK,
    max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
    max_wall_time: float | None = DEFAULT_MAX_WALL_TIME,
) -> SearchConfig:
    """Build a validated search config.

    Args:
        max_time: Simulated time budget per candidate route [s].
        delta_t: Fixed integration step [s].
        max_attempts: Optional ceiling on synthesized candidates.
        max_wall_time: Optional wall-clock ceiling for one search [s].

    Returns:
        Fully validated search configuration.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If any value violates
            its bound.
    """
    config = SearchConfig(
        validation=ValidationConfig(max_time=max_time, delta_t=delta_t),
        max_attempts=max_attempts,
        max_wall_time=max_wall_time,
    )
    config.validate()
    return config
