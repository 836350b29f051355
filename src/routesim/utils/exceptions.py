"""Custom exceptions for route simulation."""

from __future__ import annotations


class RouteSimError(Exception):
    """Base exception for route simulation errors."""


class ConfigurationError(RouteSimError):
    """Raised when train, generator, or solver configuration is invalid."""


class RouteDataError(RouteSimError):
    """Raised when route data or a route query argument is invalid."""


class SearchExhaustedError(RouteSimError):
    """Raised when a feasible-route search hits its configured ceiling.

    Args:
        message: Human-readable description of the exhausted ceiling.
        next_seed: First seed that was not tried yet.
        attempts: Number of routes that were synthesized and rejected.
    """

    def __init__(self, message: str, *, next_seed: int, attempts: int) -> None:
        """Store search progress next to the error message.

        Args:
            message: Human-readable description of the exhausted ceiling.
            next_seed: First seed that was not tried yet.
            attempts: Number of routes that were synthesized and rejected.
        """
        super().__init__(message)
        self.next_seed = next_seed
        self.attempts = attempts
