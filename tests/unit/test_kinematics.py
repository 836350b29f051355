"""Unit tests for the fixed-step train transition function."""

from __future__ import annotations

import unittest

from routesim.route import CommonSegment, ForceSegment, Route, StationSegment
from routesim.train import RouteFailure, StepOutcome, StepStatus, Train, step
from routesim.utils.exceptions import ConfigurationError
from tests.helpers import force_then_common_route, sample_train, station_after_force_route


class StepPhysicsTests(unittest.TestCase):
    """Validate position and speed updates per segment kind."""

    def test_force_segment_uses_symmetric_update(self) -> None:
        """Average pre- and post-step speed when integrating position."""
        outcome = step(sample_train(), force_then_common_route(), 1.0)

        self.assertIs(outcome.status, StepStatus.CONTINUING)
        assert outcome.train is not None
        self.assertAlmostEqual(outcome.train.speed, 10.0, delta=1e-12)
        self.assertAlmostEqual(outcome.train.position, 5.0, delta=1e-12)

    def test_common_segment_keeps_speed(self) -> None:
        """Advance at constant speed over common rail."""
        train = Train(max_force=1.0, mass=1.0, position=1_100.0, speed=10.0)
        outcome = step(train, force_then_common_route(), 0.5)

        assert outcome.train is not None
        self.assertEqual(outcome.train.speed, 10.0)
        self.assertAlmostEqual(outcome.train.position, 1_105.0, delta=1e-9)

    def test_braking_segment_decelerates(self) -> None:
        """Reduce speed on a negative-force segment."""
        route = Route(
            segments=(ForceSegment(length=1_000.0, applied_force=-1_000.0),),
            route_end_speed_limit=50.0,
        )
        outcome = step(Train(max_force=5_000.0, mass=1_000.0, speed=20.0), route, 1.0)

        assert outcome.train is not None
        self.assertAlmostEqual(outcome.train.speed, 19.0, delta=1e-12)
        self.assertAlmostEqual(outcome.train.position, 19.5, delta=1e-12)

    def test_step_does_not_mutate_inputs(self) -> None:
        """Return a new train and leave the input untouched."""
        train = sample_train()
        step(train, force_then_common_route(), 0.1)

        self.assertEqual(train.position, 0.0)
        self.assertEqual(train.speed, 0.0)

    def test_step_is_pure(self) -> None:
        """Return identical outcomes for identical arguments."""
        train = Train(max_force=20_000.0, mass=1_000.0, position=420.0, speed=33.0)
        route = force_then_common_route()

        self.assertEqual(step(train, route, 1.0 / 60.0), step(train, route, 1.0 / 60.0))

    def test_non_positive_time_step_is_rejected(self) -> None:
        """Raise for zero or negative time steps."""
        with self.assertRaises(ConfigurationError):
            step(sample_train(), force_then_common_route(), 0.0)
        with self.assertRaises(ConfigurationError):
            step(sample_train(), force_then_common_route(), -0.1)


class StepFailureTests(unittest.TestCase):
    """Validate each rule violation of the failure taxonomy."""

    def test_overload_breaks_train_for_any_time_step(self) -> None:
        """Break the train on the first step over an overloading segment."""
        route = force_then_common_route()
        for delta_t in (1e-3, 1.0 / 60.0, 1.0, 10.0):
            with self.subTest(delta_t=delta_t):
                outcome = step(sample_train(max_force=5_000.0), route, delta_t)
                self.assertIs(outcome.status, StepStatus.FAILED)
                self.assertIs(outcome.failure, RouteFailure.TRAIN_BROKEN_FROM_TOO_MUCH_FORCE)

    def test_braking_overload_also_breaks_train(self) -> None:
        """Compare the force magnitude against the train capacity."""
        route = Route(
            segments=(ForceSegment(length=100.0, applied_force=-50_000.0),),
            route_end_speed_limit=50.0,
        )
        outcome = step(Train(max_force=20_000.0, mass=1_000.0, speed=40.0), route, 0.1)

        self.assertIs(outcome.failure, RouteFailure.TRAIN_BROKEN_FROM_TOO_MUCH_FORCE)

    def test_force_at_capacity_is_allowed(self) -> None:
        """Accept a force equal to the train capacity."""
        route = Route(
            segments=(ForceSegment(length=100.0, applied_force=20_000.0),),
            route_end_speed_limit=50.0,
        )
        outcome = step(sample_train(max_force=20_000.0), route, 0.1)

        self.assertIs(outcome.status, StepStatus.CONTINUING)

    def test_standing_train_on_common_rail_is_deadlocked(self) -> None:
        """Fail immediately when a stopped train sits on common rail."""
        route = Route(segments=(CommonSegment(length=100.0),), route_end_speed_limit=10.0)
        outcome = step(Train(max_force=1.0, mass=1.0), route, 1.0 / 60.0)

        self.assertIs(outcome.failure, RouteFailure.ZERO_SPEED_ON_COMMON_RAILS)

    def test_braking_past_zero_fails(self) -> None:
        """Reject a step that would reverse the train."""
        route = Route(
            segments=(ForceSegment(length=1_000.0, applied_force=-10_000.0),),
            route_end_speed_limit=10.0,
        )
        outcome = step(Train(max_force=20_000.0, mass=1_000.0, speed=1.0), route, 1.0)

        self.assertIs(outcome.failure, RouteFailure.SPEED_IS_NEGATIVE)

    def test_station_overspeed_fails_at_boundary(self) -> None:
        """Fail when crossing into a station faster than its arrival limit."""
        train = Train(max_force=20_000.0, mass=1_000.0, position=1_999.9, speed=190.0)
        outcome = step(train, station_after_force_route(5.0), 1.0 / 60.0)

        self.assertIs(outcome.failure, RouteFailure.EXCESSIVE_SPEED_AT_STATION)

    def test_station_check_uses_pre_step_speed(self) -> None:
        """Judge arrival on the speed held before the step accelerates it."""
        route = Route(
            segments=(
                ForceSegment(length=1_000.0, applied_force=10_000.0),
                StationSegment(max_arriving_speed=5.0),
            ),
            route_end_speed_limit=100.0,
        )
        at_limit = Train(max_force=20_000.0, mass=1_000.0, position=999.99, speed=5.0)
        above_limit = Train(max_force=20_000.0, mass=1_000.0, position=999.99, speed=5.01)

        crossed = step(at_limit, route, 0.01)
        self.assertIs(crossed.status, StepStatus.CONTINUING)
        assert crossed.train is not None
        self.assertGreater(crossed.train.speed, 5.0)
        self.assertIs(
            step(above_limit, route, 0.01).failure,
            RouteFailure.EXCESSIVE_SPEED_AT_STATION,
        )

    def test_last_segment_crossing_uses_post_step_speed(self) -> None:
        """Judge the route end on the speed after the step's update."""
        route = Route(
            segments=(ForceSegment(length=1_000.0, applied_force=10_000.0),),
            route_end_speed_limit=100.0,
        )
        train = Train(max_force=20_000.0, mass=1_000.0, position=999.99, speed=99.95)
        outcome = step(train, route, 0.01)

        self.assertIs(outcome.failure, RouteFailure.EXCESSIVE_SPEED_AT_ROUTE_END)

    def test_last_segment_crossing_within_limit_finishes(self) -> None:
        """Finish the route when crossing the end slowly enough."""
        route = Route(segments=(CommonSegment(length=100.0),), route_end_speed_limit=20.0)
        train = Train(max_force=1.0, mass=1.0, position=99.0, speed=10.0)

        self.assertEqual(step(train, route, 1.0), StepOutcome.finished())


class RouteEndTests(unittest.TestCase):
    """Validate outcomes for trains already past the last segment."""

    def test_train_past_route_end_finishes_within_limit(self) -> None:
        """Report success when leaving the route at or below the limit."""
        train = Train(max_force=1.0, mass=1.0, position=1_500.0, speed=100.0)
        outcome = step(train, force_then_common_route(), 1.0)

        self.assertIs(outcome.status, StepStatus.FINISHED)
        self.assertTrue(outcome.is_terminal)
        self.assertIsNone(outcome.train)

    def test_train_past_route_end_too_fast_fails(self) -> None:
        """Report route-end overspeed for a train leaving too fast."""
        train = Train(max_force=1.0, mass=1.0, position=1_600.0, speed=100.5)
        outcome = step(train, force_then_common_route(), 1.0)

        self.assertIs(outcome.failure, RouteFailure.EXCESSIVE_SPEED_AT_ROUTE_END)

    def test_trailing_station_is_passed_after_crossing(self) -> None:
        """Finish once the train is beyond a trailing zero-length station."""
        train = Train(max_force=20_000.0, mass=1_000.0, position=2_000.05, speed=4.0)
        outcome = step(train, station_after_force_route(5.0), 1.0 / 60.0)

        self.assertIs(outcome.status, StepStatus.FINISHED)

    def test_failure_messages_are_readable(self) -> None:
        """Expose sentence-case failure descriptions."""
        self.assertEqual(
            RouteFailure.ZERO_SPEED_ON_COMMON_RAILS.message,
            "Zero speed on common rails",
        )


if __name__ == "__main__":
    unittest.main()
