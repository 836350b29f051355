"""Single-train route simulation with generate-and-validate route search."""

from routesim.route import (
    CommonSegment,
    ForceSegment,
    Route,
    SegmentKind,
    StationSegment,
    locate,
    synthesize_route,
)
from routesim.simulation.config import SearchConfig, ValidationConfig
from routesim.simulation.runner import ValidationResult, simulate_route, validate_route
from routesim.simulation.search import FeasibleRoute, find_feasible_route
from routesim.train import RouteFailure, StepOutcome, StepStatus, Train, default_train, step

__all__ = [
    "CommonSegment",
    "FeasibleRoute",
    "ForceSegment",
    "Route",
    "RouteFailure",
    "SearchConfig",
    "SegmentKind",
    "StationSegment",
    "StepOutcome",
    "StepStatus",
    "Train",
    "ValidationConfig",
    "ValidationResult",
    "default_train",
    "find_feasible_route",
    "locate",
    "simulate_route",
    "step",
    "synthesize_route",
    "validate_route",
]
