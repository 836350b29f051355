"""Physical and numerical constants used across the library."""

DEFAULT_TICK: float = 1.0 / 60.0
DEFAULT_MAX_RUN_TIME: float = 10.0 * 60.0 * 60.0
DEFAULT_TRAIN_MASS: float = 200_000.0
DEFAULT_TRAIN_MAX_FORCE: float = 1_000_000.0
SECONDS_PER_HOUR: float = 3_600.0
