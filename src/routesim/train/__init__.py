"""Train model and per-step kinematics."""

from routesim.train.kinematics import RouteFailure, StepOutcome, StepStatus, step
from routesim.train.models import Train, default_train

__all__ = [
    "RouteFailure",
    "StepOutcome",
    "StepStatus",
    "Train",
    "default_train",
    "step",
]
