"""Seeded pseudo-random route synthesis."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from routesim.route.models import (
    CommonSegment,
    ForceSegment,
    Route,
    Segment,
    SegmentKind,
    StationSegment,
)
from routesim.utils.exceptions import ConfigurationError

SEGMENT_KINDS = (SegmentKind.COMMON, SegmentKind.FORCE, SegmentKind.STATION)


@dataclass(frozen=True)
class UniformBand:
    """Closed-open interval ``[low, low + span)`` sampled uniformly.

    Args:
        low: Lower bound of the band.
        span: Width of the band. Must be non-negative.
    """

    low: float
    span: float

    def sample(self, rng: np.random.Generator) -> float:
        """Draw one value from the band.

        Args:
            rng: Random source owned by the caller.

        Returns:
            ``low + span * u`` with ``u`` uniform in ``[0, 1)``.
        """
        return self.low + self.span * float(rng.random())


@dataclass(frozen=True)
class RouteGenerationBands:
    """Uniform bands for every numeric field drawn during synthesis.

    Args:
        route_end_speed_limit: Band for the route end speed limit [m/s].
        first_force_length: Band for the length of the leading force segment [m].
        force_length: Band for lengths of later force segments [m].
        applied_force: Band for force-segment forces [N].
        common_length: Band for common-segment lengths [m].
        max_arriving_speed: Band for station arrival limits [m/s].
    """

    route_end_speed_limit: UniformBand = UniformBand(30.0, 10.0)
    first_force_length: UniformBand = UniformBand(1_000.0, 4_000.0)
    force_length: UniformBand = UniformBand(100.0, 1_000.0)
    applied_force: UniformBand = UniformBand(-300_000.0, 800_000.0)
    common_length: UniformBand = UniformBand(1_000.0, 4_000.0)
    max_arriving_speed: UniformBand = UniformBand(10.0, 30.0)

    def validate(self) -> None:
        """Validate that every band produces physically valid values.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If a band has a
                negative span or can produce invalid lengths or speed limits.
        """
        bands = {
            "route_end_speed_limit": self.route_end_speed_limit,
            "first_force_length": self.first_force_length,
            "force_length": self.force_length,
            "applied_force": self.applied_force,
            "common_length": self.common_length,
            "max_arriving_speed": self.max_arriving_speed,
        }
        for name, band in bands.items():
            if not np.isfinite(band.low) or not np.isfinite(band.span) or band.span < 0.0:
                msg = f"{name} band must be finite with a non-negative span"
                raise ConfigurationError(msg)
        for name in ("first_force_length", "force_length", "common_length"):
            if bands[name].low <= 0.0:
                msg = f"{name} band must start above zero"
                raise ConfigurationError(msg)
        for name in ("route_end_speed_limit", "max_arriving_speed"):
            if bands[name].low < 0.0:
                msg = f"{name} band must not start below zero"
                raise ConfigurationError(msg)


DEFAULT_GENERATION_BANDS = RouteGenerationBands()


def _draw_kind(rng: np.random.Generator) -> SegmentKind:
    """Draw one segment kind uniformly.

    Args:
        rng: Random source owned by the caller.

    Returns:
        Drawn segment kind.
    """
    return SEGMENT_KINDS[int(rng.integers(len(SEGMENT_KINDS)))]


def _build_segment(
    kind: SegmentKind,
    rng: np.random.Generator,
    bands: RouteGenerationBands,
) -> Segment:
    """Draw numeric fields for a segment of the given kind.

    Args:
        kind: Segment kind to build.
        rng: Random source owned by the caller.
        bands: Sampling bands for numeric fields.

    Returns:
        Newly drawn segment.
    """
    if kind is SegmentKind.COMMON:
        return CommonSegment(length=bands.common_length.sample(rng))
    if kind is SegmentKind.STATION:
        return StationSegment(max_arriving_speed=bands.max_arriving_speed.sample(rng))
    return ForceSegment(
        length=bands.force_length.sample(rng),
        applied_force=bands.applied_force.sample(rng),
    )


def generate_random_route(
    rng: np.random.Generator,
    segment_count: int,
    bands: RouteGenerationBands | None = None,
) -> Route:
    """Synthesize a structurally valid route from a caller-owned random source.

    The first segment is always a force segment so the train never starts
    stalled. Stations are redrawn when they would follow another station or
    close the route.

    Args:
        rng: Random source owned by the caller. Advanced in place.
        segment_count: Number of segments to emit.
        bands: Sampling bands. Defaults to :data:`DEFAULT_GENERATION_BANDS`.

    Returns:
        Route with ``segment_count`` segments.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If ``segment_count`` is
            below one or ``bands`` is invalid.
    """
    if segment_count < 1:
        msg = "segment_count must be at least 1"
        raise ConfigurationError(msg)
    bands = bands or DEFAULT_GENERATION_BANDS
    bands.validate()

    route_end_speed_limit = bands.route_end_speed_limit.sample(rng)
    segments: list[Segment] = [
        ForceSegment(
            length=bands.first_force_length.sample(rng),
            applied_force=bands.applied_force.sample(rng),
        )
    ]
    previous = SegmentKind.FORCE
    for index in range(1, segment_count):
        is_last = index + 1 == segment_count
        kind = _draw_kind(rng)
        while kind is SegmentKind.STATION and (previous is SegmentKind.STATION or is_last):
            kind = _draw_kind(rng)
        segments.append(_build_segment(kind, rng, bands))
        previous = kind

    return Route(segments=tuple(segments), route_end_speed_limit=route_end_speed_limit)


def synthesize_route(
    seed: int,
    segment_count: int,
    bands: RouteGenerationBands | None = None,
) -> Route:
    """Synthesize the route fully determined by ``seed`` and ``segment_count``.

    Args:
        seed: Non-negative integer seed, 64-bit values included.
        segment_count: Number of segments to emit.
        bands: Sampling bands. Defaults to :data:`DEFAULT_GENERATION_BANDS`.

    Returns:
        Route that is identical for identical arguments.

    Raises:
        routesim.utils.exceptions.ConfigurationError: If ``seed`` is negative,
            ``segment_count`` is below one, or ``bands`` is invalid.
    """
    if seed < 0:
        msg = f"seed must be non-negative, got {seed}"
        raise ConfigurationError(msg)
    return generate_random_route(np.random.default_rng(seed), segment_count, bands)
