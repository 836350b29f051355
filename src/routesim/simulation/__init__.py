"""Route dry runs, feasible-route search, and live sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from routesim.simulation.config import (
    SearchConfig,
    ValidationConfig,
    build_search_config,
)

if TYPE_CHECKING:
    from routesim.simulation.runner import RunTrace, ValidationResult
    from routesim.simulation.search import FeasibleRoute
    from routesim.simulation.session import RouteSession, SessionEvent

__all__ = [
    "FeasibleRoute",
    "RouteSession",
    "RunTrace",
    "SearchConfig",
    "SessionEvent",
    "ValidationConfig",
    "ValidationResult",
    "build_search_config",
    "find_feasible_route",
    "iter_feasible_routes",
    "simulate_route",
    "validate_route",
]

_LAZY_EXPORTS = {
    "RunTrace": "routesim.simulation.runner",
    "ValidationResult": "routesim.simulation.runner",
    "simulate_route": "routesim.simulation.runner",
    "validate_route": "routesim.simulation.runner",
    "FeasibleRoute": "routesim.simulation.search",
    "find_feasible_route": "routesim.simulation.search",
    "iter_feasible_routes": "routesim.simulation.search",
    "RouteSession": "routesim.simulation.session",
    "SessionEvent": "routesim.simulation.session",
}


def __getattr__(name: str) -> Any:
    """Resolve lazily imported symbols for public package exports.

    Args:
        name: Attribute name requested from the package namespace.

    Returns:
        Exported class or function matching ``name``.

    Raises:
        AttributeError: If ``name`` is not part of the public export surface.
    """
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    from importlib import import_module

    return getattr(import_module(module_name), name)
