"""Route data model, geometric queries, and route synthesis."""

from routesim.route.generator import (
    DEFAULT_GENERATION_BANDS,
    RouteGenerationBands,
    UniformBand,
    generate_random_route,
    synthesize_route,
)
from routesim.route.models import (
    CommonSegment,
    ForceSegment,
    Route,
    Segment,
    SegmentKind,
    SegmentLocation,
    StationSegment,
    convert_segment,
    locate,
    replace_segment,
    segment_index_at_fraction,
    segment_length,
)

__all__ = [
    "DEFAULT_GENERATION_BANDS",
    "CommonSegment",
    "ForceSegment",
    "Route",
    "RouteGenerationBands",
    "Segment",
    "SegmentKind",
    "SegmentLocation",
    "StationSegment",
    "UniformBand",
    "convert_segment",
    "generate_random_route",
    "locate",
    "replace_segment",
    "segment_index_at_fraction",
    "segment_length",
    "synthesize_route",
]
