"""Train state and configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from routesim.utils.constants import DEFAULT_TRAIN_MASS, DEFAULT_TRAIN_MAX_FORCE
from routesim.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class Train:
    """Kinematic state plus fixed configuration of one train.

    ``position`` and ``speed`` change only through
    :func:`routesim.train.kinematics.step`; ``max_force`` and ``mass`` are
    fixed for the lifetime of the train.

    Args:
        max_force: Largest absolute force the train withstands [N].
        mass: Train mass [kg].
        position: Offset along the route [m].
        speed: Forward speed [m/s].
    """

    max_force: float
    mass: float
    position: float = 0.0
    speed: float = 0.0

    def validate(self) -> None:
        """Validate the fixed train configuration.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If ``mass`` or
                ``max_force`` is not finite and positive.
        """
        if not math.isfinite(self.mass) or self.mass <= 0.0:
            msg = "mass must be finite and positive"
            raise ConfigurationError(msg)
        if not math.isfinite(self.max_force) or self.max_force <= 0.0:
            msg = "max_force must be finite and positive"
            raise ConfigurationError(msg)

    def reset(self) -> Train:
        """Return the same train standing at the route start.

        Returns:
            Train with identical configuration, zero position and zero speed.
        """
        return replace(self, position=0.0, speed=0.0)


def default_train() -> Train:
    """Build the reference freight train used by sessions and examples.

    Returns:
        Train with a mass of 200 t and a maximum force of 1 MN at rest.
    """
    return Train(max_force=DEFAULT_TRAIN_MAX_FORCE, mass=DEFAULT_TRAIN_MASS)
