"""Headless live-play driver holding the train and route a UI draws."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass

from routesim.route.generator import RouteGenerationBands
from routesim.route.models import Route, Segment, replace_segment
from routesim.simulation.config import SearchConfig, build_search_config
from routesim.simulation.search import FeasibleRoute, find_feasible_route
from routesim.train.kinematics import StepStatus, step
from routesim.train.models import Train
from routesim.utils.constants import DEFAULT_TICK
from routesim.utils.exceptions import ConfigurationError, RouteSimError, SearchExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_SESSION_SEGMENT_COUNT = 10
DEFAULT_TIME_SCALE = 3.0
MIN_TIME_SCALE = -2.0
MAX_TIME_SCALE = 8.0
MAX_SESSION_EVENTS = 50
DEFAULT_SESSION_MAX_ATTEMPTS = 10_000
DEFAULT_SESSION_MAX_WALL_TIME = 10.0
RELOAD_LABEL = "Reloaded"
PAUSED_LABEL = "Paused"
UNPAUSED_LABEL = "Unpaused"
FINISHED_LABEL = "Finished route successfully"
SEARCH_EXHAUSTED_LABEL = "No feasible route found, paused"


@dataclass(frozen=True)
class SessionEvent:
    """Message raised by a session for display.

    Args:
        label: Human-readable event text.
        succeeded: ``True`` for successful runs, ``False`` for failures, and
            ``None`` for informational events.
        seed: Seed of the route that was active when the event happened.
    """

    label: str
    succeeded: bool | None
    seed: int


class RouteSession:
    """Drive one train over validated routes with fixed simulation ticks.

    Frame times are scaled by ``exp(time_scale)`` and consumed in whole ticks.
    Any terminal outcome restarts the train on a freshly searched route and
    the rest of the frame is spent on that route. Searches are bounded; when a
    restart search runs out of budget the session pauses on its current route
    and the next search resumes from the first untried seed.

    Args:
        train_template: Train configuration restored on every restart.
        segment_count: Number of segments per searched route.
        tick: Fixed simulation step [s].
        time_scale: Natural-log speed-up applied to frame times, clamped to
            ``[MIN_TIME_SCALE, MAX_TIME_SCALE]``.
        search_config: Settings for route searches on restart. Defaults to
            ``DEFAULT_SESSION_MAX_ATTEMPTS`` attempts and
            ``DEFAULT_SESSION_MAX_WALL_TIME`` seconds per search.
        bands: Sampling bands for route synthesis.
        starting_seed: Seed of the first route search.
    """

    def __init__(
        self,
        train_template: Train,
        segment_count: int = DEFAULT_SESSION_SEGMENT_COUNT,
        tick: float = DEFAULT_TICK,
        time_scale: float = DEFAULT_TIME_SCALE,
        search_config: SearchConfig | None = None,
        bands: RouteGenerationBands | None = None,
        starting_seed: int = 0,
    ) -> None:
        """Search the first route and place the train at its start.

        Args:
            train_template: Train configuration restored on every restart.
            segment_count: Number of segments per searched route.
            tick: Fixed simulation step [s].
            time_scale: Natural-log speed-up applied to frame times.
            search_config: Settings for route searches on restart.
            bands: Sampling bands for route synthesis.
            starting_seed: Seed of the first route search.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If ``tick`` is not
                positive or the search settings are invalid.
            routesim.utils.exceptions.SearchExhaustedError: If no feasible
                first route is found within the search budget.
        """
        if not math.isfinite(tick) or tick <= 0.0:
            msg = "tick must be finite and positive"
            raise ConfigurationError(msg)
        self._template = train_template.reset()
        self._segment_count = segment_count
        self._search_config = search_config or build_search_config(
            max_attempts=DEFAULT_SESSION_MAX_ATTEMPTS,
            max_wall_time=DEFAULT_SESSION_MAX_WALL_TIME,
        )
        self._bands = bands
        self.tick = tick
        self.time_scale = time_scale
        self.paused = False
        self.events: deque[SessionEvent] = deque(maxlen=MAX_SESSION_EVENTS)
        self._pending_time = 0.0
        self._next_seed = starting_seed
        self.seed = starting_seed
        self.completion_time = 0.0
        self.route: Route
        self.train: Train
        self._load(self._search())

    @property
    def time_scale(self) -> float:
        """Natural-log speed-up applied to frame times.

        Returns:
            Current clamped time scale.
        """
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        """Clamp and store the time scale.

        Args:
            value: Requested time scale.
        """
        self._time_scale = min(max(float(value), MIN_TIME_SCALE), MAX_TIME_SCALE)

    @property
    def next_seed(self) -> int:
        """Seed the next route search starts from.

        Returns:
            One past the seed of the active route.
        """
        return self._next_seed

    @property
    def search_config(self) -> SearchConfig:
        """Settings used for every route search of this session.

        Returns:
            Bounded search configuration.
        """
        return self._search_config

    def _search(self) -> FeasibleRoute:
        """Search a new route from ``next_seed`` without touching the session.

        Returns:
            Accepted route with its seed and completion time.

        Raises:
            routesim.utils.exceptions.SearchExhaustedError: If the search
                budget runs out.
        """
        return find_feasible_route(
            self._template,
            self._segment_count,
            starting_seed=self._next_seed,
            config=self._search_config,
            bands=self._bands,
        )

    def _load(self, found: FeasibleRoute) -> None:
        """Make ``found`` the active route and reset the train onto it.

        Args:
            found: Accepted route from :meth:`_search`.
        """
        self.route = found.route
        self.seed = found.seed
        self.completion_time = found.completion_time
        self._next_seed = found.seed + 1
        self.train = self._template.reset()

    def _suspend(self, error: SearchExhaustedError) -> SessionEvent:
        """Pause on the current route after an exhausted restart search.

        Args:
            error: Exhaustion raised by the restart search.

        Returns:
            Failure event describing the pause.
        """
        logger.warning("Session paused on seed %d: %s", self.seed, error)
        self._next_seed = error.next_seed
        self.train = self._template.reset()
        self._pending_time = 0.0
        self.paused = True
        return self._emit(SEARCH_EXHAUSTED_LABEL, False)

    def _emit(self, label: str, succeeded: bool | None) -> SessionEvent:
        """Record one event for display.

        Args:
            label: Event text.
            succeeded: Outcome flag, ``None`` for informational events.

        Returns:
            Recorded event.
        """
        event = SessionEvent(label=label, succeeded=succeeded, seed=self.seed)
        self.events.append(event)
        return event

    def advance(self, frame_time: float) -> list[SessionEvent]:
        """Consume one frame of wall time in fixed simulation ticks.

        Args:
            frame_time: Wall time since the previous frame [s].

        Returns:
            Events raised by terminal outcomes during this frame, including
            the pause event when a restart search runs out of budget.

        Raises:
            routesim.utils.exceptions.ConfigurationError: If ``frame_time`` is
                negative.
            routesim.utils.exceptions.RouteSimError: If a step outcome is
                missing its train state or failure.
        """
        if frame_time < 0.0:
            msg = "frame_time must be non-negative"
            raise ConfigurationError(msg)
        if self.paused:
            return []

        raised: list[SessionEvent] = []
        self._pending_time += frame_time * math.exp(self.time_scale)
        while self._pending_time > self.tick:
            self._pending_time -= self.tick
            outcome = step(self.train, self.route, self.tick)
            if outcome.status is StepStatus.CONTINUING:
                if outcome.train is None:
                    msg = "continuing step outcome carries no train state"
                    raise RouteSimError(msg)
                self.train = outcome.train
                continue
            if outcome.status is StepStatus.FINISHED:
                raised.append(self._emit(FINISHED_LABEL, True))
            elif outcome.failure is None:
                msg = "failed step outcome carries no failure"
                raise RouteSimError(msg)
            else:
                logger.warning("Run on seed %d failed: %s", self.seed, outcome.failure.message)
                raised.append(self._emit(outcome.failure.message, False))
            try:
                found = self._search()
            except SearchExhaustedError as error:
                raised.append(self._suspend(error))
                break
            self._load(found)
        return raised

    def toggle_pause(self) -> SessionEvent:
        """Pause or resume the simulation clock.

        Returns:
            Informational event describing the new state.
        """
        self.paused = not self.paused
        return self._emit(PAUSED_LABEL if self.paused else UNPAUSED_LABEL, None)

    def reload(self) -> SessionEvent:
        """Drop the active route and search the next one.

        Returns:
            Informational reload event.

        Raises:
            routesim.utils.exceptions.SearchExhaustedError: If the search
                budget runs out. The active route and train are kept.
        """
        self._load(self._search())
        return self._emit(RELOAD_LABEL, None)

    def edit_segment(self, index: int, segment: Segment) -> None:
        """Swap one segment of the active route between ticks.

        The edited route is not revalidated, so the next ticks may end in a
        failure that triggers a restart.

        Args:
            index: Index of the segment to replace.
            segment: New segment.

        Raises:
            routesim.utils.exceptions.RouteDataError: If ``index`` is out of
                range.
        """
        self.route = replace_segment(self.route, index, segment)
