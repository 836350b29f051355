"""Utility helpers."""

from routesim.utils.constants import DEFAULT_MAX_RUN_TIME, DEFAULT_TICK
from routesim.utils.logging import configure_logging

__all__ = ["DEFAULT_MAX_RUN_TIME", "DEFAULT_TICK", "configure_logging"]
