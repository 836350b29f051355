"""Route and segment data models with geometric queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

from routesim.utils.exceptions import RouteDataError

if TYPE_CHECKING:
    from routesim.train.models import Train

DEFAULT_SEGMENT_LENGTH = 1_000.0
DEFAULT_APPLIED_FORCE = 100_000.0
DEFAULT_MAX_ARRIVING_SPEED = 20.0


class SegmentKind(Enum):
    """Closed set of segment variants."""

    COMMON = "common"
    FORCE = "force"
    STATION = "station"


@dataclass(frozen=True)
class CommonSegment:
    """Plain rail that neither accelerates nor brakes the train.

    Args:
        length: Traversable length [m].
    """

    kind: ClassVar[SegmentKind] = SegmentKind.COMMON

    length: float = DEFAULT_SEGMENT_LENGTH


@dataclass(frozen=True)
class ForceSegment:
    """Powered or braking rail applying a constant longitudinal force.

    Args:
        length: Traversable length [m].
        applied_force: Signed force on the train [N]. Positive values
            accelerate, negative values brake.
    """

    kind: ClassVar[SegmentKind] = SegmentKind.FORCE

    length: float = DEFAULT_SEGMENT_LENGTH
    applied_force: float = DEFAULT_APPLIED_FORCE


@dataclass(frozen=True)
class StationSegment:
    """Zero-length checkpoint with an arrival speed limit.

    Args:
        max_arriving_speed: Highest speed allowed when reaching the station [m/s].
    """

    kind: ClassVar[SegmentKind] = SegmentKind.STATION

    max_arriving_speed: float = DEFAULT_MAX_ARRIVING_SPEED


Segment = Union[CommonSegment, ForceSegment, StationSegment]


def segment_length(segment: Segment) -> float:
    """Return the distance a train covers while on ``segment``.

    Args:
        segment: Segment of any kind.

    Returns:
        Traversable length [m]. Stations always return ``0``.

    Raises:
        routesim.utils.exceptions.RouteDataError: If ``segment`` is not one of
            the known segment kinds.
    """
    if isinstance(segment, (CommonSegment, ForceSegment)):
        return segment.length
    if isinstance(segment, StationSegment):
        return 0.0
    msg = f"Unknown segment type: {type(segment).__name__}"
    raise RouteDataError(msg)


def _validate_segment(index: int, segment: Segment) -> None:
    """Validate numeric fields of one segment.

    Args:
        index: Position of the segment inside its route.
        segment: Segment to validate.

    Raises:
        routesim.utils.exceptions.RouteDataError: If a field is non-finite or
            outside its valid range.
    """
    if isinstance(segment, StationSegment):
        if not math.isfinite(segment.max_arriving_speed) or segment.max_arriving_speed < 0.0:
            msg = f"segment {index}: max_arriving_speed must be finite and non-negative"
            raise RouteDataError(msg)
        return
    if not math.isfinite(segment_length(segment)) or segment.length <= 0.0:
        msg = f"segment {index}: length must be finite and positive"
        raise RouteDataError(msg)
    if isinstance(segment, ForceSegment) and not math.isfinite(segment.applied_force):
        msg = f"segment {index}: applied_force must be finite"
        raise RouteDataError(msg)


@dataclass(frozen=True)
class SegmentLocation:
    """Segment currently occupied by a train.

    Args:
        segment: Occupied segment.
        index: Index of ``segment`` inside the route.
        position: Train position relative to the segment start [m].
    """

    segment: Segment
    index: int
    position: float


@dataclass(frozen=True)
class Route:
    """Ordered, immutable sequence of segments with an end speed limit.

    Args:
        segments: Non-empty ordered segment sequence.
        route_end_speed_limit: Highest speed allowed when leaving the last
            segment [m/s].
    """

    segments: tuple[Segment, ...]
    route_end_speed_limit: float

    def __post_init__(self) -> None:
        """Freeze segment sequences passed as lists."""
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def length(self) -> float:
        """Total traversable route length.

        Returns:
            Sum of all segment lengths [m].
        """
        return sum(segment_length(segment) for segment in self.segments)

    def validate(self) -> None:
        """Validate route structure and segment values.

        Raises:
            routesim.utils.exceptions.RouteDataError: If the route is empty,
                the end speed limit is invalid, or a segment is invalid.
        """
        if not self.segments:
            msg = "Route must contain at least one segment"
            raise RouteDataError(msg)
        if not math.isfinite(self.route_end_speed_limit) or self.route_end_speed_limit < 0.0:
            msg = "route_end_speed_limit must be finite and non-negative"
            raise RouteDataError(msg)
        for index, segment in enumerate(self.segments):
            _validate_segment(index, segment)


def locate(train: Train, route: Route) -> SegmentLocation | None:
    """Find the segment that contains the train position.

    Each segment covers the half-open interval ``[offset, offset + length)``,
    so zero-length stations are never returned.

    Args:
        train: Train whose ``position`` is looked up.
        route: Route to scan.

    Returns:
        Location of the occupied segment, or ``None`` once the train is at or
        beyond the end of the route.
    """
    offset = 0.0
    for index, segment in enumerate(route.segments):
        next_offset = offset + segment_length(segment)
        if train.position < next_offset:
            return SegmentLocation(segment=segment, index=index, position=train.position - offset)
        offset = next_offset
    return None


def segment_index_at_fraction(
    route: Route,
    fraction: float,
    station_padding: float = 0.0,
) -> int | None:
    """Map a fraction of the drawn route onto a segment index.

    Rail spans are shrunk by ``station_padding`` on both sides and stations are
    widened by the same amount, so a station drawn as a point remains
    selectable.

    Args:
        route: Route being displayed.
        fraction: Position along the drawn route in ``[0, 1]``.
        station_padding: Padding as a fraction of the full route.

    Returns:
        Index of the segment under ``fraction``, or ``None`` for gaps between
        segments.

    Raises:
        routesim.utils.exceptions.RouteDataError: If ``fraction`` is outside
            ``[0, 1]`` or the route has zero length.
    """
    if not 0.0 <= fraction <= 1.0:
        msg = f"fraction must be within [0, 1], got {fraction}"
        raise RouteDataError(msg)
    total_length = route.length
    if total_length <= 0.0:
        msg = "Cannot hit-test a route with zero length"
        raise RouteDataError(msg)

    offset = 0.0
    for index, segment in enumerate(route.segments):
        next_offset = offset + segment_length(segment) / total_length
        padding = -station_padding if segment.kind is SegmentKind.STATION else station_padding
        if offset + padding <= fraction < next_offset - padding:
            return index
        offset = next_offset
    return None


def convert_segment(segment: Segment, kind: SegmentKind) -> Segment:
    """Change the variant of a segment, keeping its length where possible.

    Args:
        segment: Segment to convert.
        kind: Target segment kind.

    Returns:
        ``segment`` itself for a same-kind conversion, a segment with the same
        length for Common/Force conversions, otherwise a default segment of the
        target kind.
    """
    if segment.kind is kind:
        return segment
    if kind is SegmentKind.COMMON:
        if isinstance(segment, ForceSegment):
            return CommonSegment(length=segment.length)
        return CommonSegment()
    if kind is SegmentKind.FORCE:
        if isinstance(segment, CommonSegment):
            return ForceSegment(length=segment.length)
        return ForceSegment()
    return StationSegment()


def replace_segment(route: Route, index: int, segment: Segment) -> Route:
    """Return a copy of ``route`` with one segment swapped.

    Args:
        route: Source route, left untouched.
        index: Index of the segment to replace.
        segment: New segment.

    Returns:
        New route sharing all other segments and the end speed limit.

    Raises:
        routesim.utils.exceptions.RouteDataError: If ``index`` is out of range.
    """
    if not 0 <= index < len(route.segments):
        msg = f"Segment index {index} out of range for route with {len(route.segments)} segments"
        raise RouteDataError(msg)
    segments = list(route.segments)
    segments[index] = segment
    return replace(route, segments=tuple(segments))
