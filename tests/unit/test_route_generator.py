"""Unit tests for seeded route synthesis."""

from __future__ import annotations

import unittest

import numpy as np

from routesim.route import (
    DEFAULT_GENERATION_BANDS,
    CommonSegment,
    ForceSegment,
    RouteGenerationBands,
    SegmentKind,
    StationSegment,
    UniformBand,
    generate_random_route,
    synthesize_route,
)
from routesim.utils.exceptions import ConfigurationError

STRUCTURE_SEED_COUNT = 200


def _in_band(value: float, band: UniformBand) -> bool:
    """Check whether a sampled value lies inside its band.

    Args:
        value: Sampled value.
        band: Band the value was drawn from.

    Returns:
        ``True`` if ``low <= value <= low + span``.
    """
    return band.low <= value <= band.low + band.span


class RouteSynthesisTests(unittest.TestCase):
    """Validate determinism and structural constraints of synthesized routes."""

    def test_same_seed_yields_identical_route(self) -> None:
        """Reproduce a route exactly from its seed and segment count."""
        first = synthesize_route(1234, 12)
        second = synthesize_route(1234, 12)

        self.assertEqual(first, second)

    def test_different_seeds_yield_different_routes(self) -> None:
        """Draw different numeric values for neighbouring seeds."""
        self.assertNotEqual(synthesize_route(0, 10), synthesize_route(1, 10))

    def test_routes_respect_structural_constraints(self) -> None:
        """Start with force, never repeat stations, never end on a station."""
        for seed in range(STRUCTURE_SEED_COUNT):
            route = synthesize_route(seed, 10)
            kinds = [segment.kind for segment in route.segments]
            with self.subTest(seed=seed):
                self.assertEqual(len(kinds), 10)
                self.assertIs(kinds[0], SegmentKind.FORCE)
                self.assertIsNot(kinds[-1], SegmentKind.STATION)
                for previous, current in zip(kinds, kinds[1:]):
                    self.assertFalse(
                        previous is SegmentKind.STATION and current is SegmentKind.STATION
                    )
                route.validate()

    def test_every_kind_appears_across_seeds(self) -> None:
        """Draw all three segment kinds after the leading force segment."""
        kinds = {
            segment.kind
            for seed in range(50)
            for segment in synthesize_route(seed, 10).segments[1:]
        }

        self.assertEqual(kinds, set(SegmentKind))

    def test_numeric_fields_stay_inside_default_bands(self) -> None:
        """Keep every drawn value inside its configured band."""
        bands = DEFAULT_GENERATION_BANDS
        for seed in range(50):
            route = synthesize_route(seed, 10)
            self.assertTrue(_in_band(route.route_end_speed_limit, bands.route_end_speed_limit))
            first = route.segments[0]
            assert isinstance(first, ForceSegment)
            self.assertTrue(_in_band(first.length, bands.first_force_length))
            for segment in route.segments[1:]:
                if isinstance(segment, CommonSegment):
                    self.assertTrue(_in_band(segment.length, bands.common_length))
                elif isinstance(segment, ForceSegment):
                    self.assertTrue(_in_band(segment.length, bands.force_length))
                    self.assertTrue(_in_band(segment.applied_force, bands.applied_force))
                else:
                    assert isinstance(segment, StationSegment)
                    self.assertTrue(
                        _in_band(segment.max_arriving_speed, bands.max_arriving_speed)
                    )

    def test_single_segment_route_is_one_force_segment(self) -> None:
        """Emit only the leading force segment for a one-segment route."""
        route = synthesize_route(7, 1)

        self.assertEqual(len(route.segments), 1)
        self.assertIsInstance(route.segments[0], ForceSegment)

    def test_two_segment_route_never_ends_on_station(self) -> None:
        """Redraw a trailing station even for very short routes."""
        for seed in range(100):
            route = synthesize_route(seed, 2)
            self.assertIsNot(route.segments[-1].kind, SegmentKind.STATION)

    def test_large_64_bit_seed_is_supported(self) -> None:
        """Accept seeds close to the unsigned 64-bit limit."""
        seed = 2**64 - 1

        self.assertEqual(synthesize_route(seed, 5), synthesize_route(seed, 5))

    def test_invalid_arguments_are_rejected(self) -> None:
        """Reject empty routes and negative seeds."""
        with self.assertRaises(ConfigurationError):
            synthesize_route(0, 0)
        with self.assertRaises(ConfigurationError):
            synthesize_route(-1, 5)


class ExplicitRandomSourceTests(unittest.TestCase):
    """Validate synthesis driven by a caller-owned random generator."""

    def test_equal_generators_produce_equal_routes(self) -> None:
        """Depend only on the generator state, not on global state."""
        np.random.seed(99)
        first = generate_random_route(np.random.default_rng(5), 8)
        np.random.seed(1)
        second = generate_random_route(np.random.default_rng(5), 8)

        self.assertEqual(first, second)

    def test_generator_is_advanced_in_place(self) -> None:
        """Produce a new route on each call with the same generator."""
        rng = np.random.default_rng(5)

        self.assertNotEqual(generate_random_route(rng, 8), generate_random_route(rng, 8))

    def test_synthesize_matches_seeded_generator(self) -> None:
        """Seed ``numpy.random.default_rng`` with the given seed."""
        self.assertEqual(
            synthesize_route(42, 6),
            generate_random_route(np.random.default_rng(42), 6),
        )

    def test_custom_bands_are_applied(self) -> None:
        """Draw from fixed zero-span bands when configured."""
        bands = RouteGenerationBands(
            route_end_speed_limit=UniformBand(12.0, 0.0),
            first_force_length=UniformBand(50.0, 0.0),
            applied_force=UniformBand(250.0, 0.0),
        )
        route = synthesize_route(3, 1, bands)

        self.assertEqual(route.route_end_speed_limit, 12.0)
        self.assertEqual(route.segments[0], ForceSegment(length=50.0, applied_force=250.0))

    def test_invalid_bands_are_rejected(self) -> None:
        """Reject bands that could produce non-positive lengths."""
        invalid_bands = [
            RouteGenerationBands(common_length=UniformBand(0.0, 10.0)),
            RouteGenerationBands(force_length=UniformBand(10.0, -1.0)),
            RouteGenerationBands(max_arriving_speed=UniformBand(-5.0, 10.0)),
            RouteGenerationBands(applied_force=UniformBand(float("nan"), 1.0)),
        ]
        for bands in invalid_bands:
            with self.subTest(bands=bands), self.assertRaises(ConfigurationError):
                synthesize_route(0, 3, bands)


if __name__ == "__main__":
    unittest.main()
