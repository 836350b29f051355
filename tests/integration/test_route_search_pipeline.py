"""Integration tests for search, dry run, and live replay of feasible routes."""

from __future__ import annotations

import unittest

from routesim.analysis import compute_kpis
from routesim.simulation import (
    build_search_config,
    find_feasible_route,
    simulate_route,
    validate_route,
)
from routesim.train import StepStatus, default_train, step

SEARCH_CONFIG = build_search_config(max_attempts=2_000)


class RouteSearchPipelineTests(unittest.TestCase):
    """Exercise the default generator bands with the reference train."""

    @classmethod
    def setUpClass(cls) -> None:
        """Search one feasible five-segment route for the default train."""
        cls.train = default_train()
        cls.found = find_feasible_route(cls.train, 5, starting_seed=0, config=SEARCH_CONFIG)

    def test_found_route_is_structurally_valid(self) -> None:
        """Return a validated route with the requested segment count."""
        self.found.route.validate()
        self.assertEqual(len(self.found.route.segments), 5)
        self.assertGreater(self.found.completion_time, 0.0)

    def test_found_route_revalidates_identically(self) -> None:
        """Reproduce the completion time in a fresh dry run."""
        result = validate_route(self.train, self.found.route, SEARCH_CONFIG.validation)

        self.assertTrue(result.succeeded)
        self.assertEqual(result.completion_time, self.found.completion_time)

    def test_manual_stepping_matches_dry_run(self) -> None:
        """Reach the same terminal step count when stepping by hand."""
        delta_t = SEARCH_CONFIG.validation.delta_t
        train = self.train
        steps = 0
        while True:
            outcome = step(train, self.found.route, delta_t)
            steps += 1
            if outcome.is_terminal:
                break
            assert outcome.train is not None
            train = outcome.train

        self.assertIs(outcome.status, StepStatus.FINISHED)
        trace = simulate_route(self.train, self.found.route, SEARCH_CONFIG.validation)
        self.assertEqual(steps, trace.result.step_count)
        self.assertTrue(compute_kpis(trace).succeeded)

    def test_next_search_continues_after_found_seed(self) -> None:
        """Find a different route when continuing from the next seed."""
        following = find_feasible_route(
            self.train,
            5,
            starting_seed=self.found.seed + 1,
            config=SEARCH_CONFIG,
        )

        self.assertGreater(following.seed, self.found.seed)
        self.assertNotEqual(following.route, self.found.route)


if __name__ == "__main__":
    unittest.main()
