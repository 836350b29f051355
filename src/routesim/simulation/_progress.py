"""Progress-line helpers for long-running route searches."""

from __future__ import annotations

import sys

import numpy as np

DEFAULT_PROGRESS_BAR_WIDTH = 30


def render_progress_line(
    *,
    prefix: str,
    fraction: float,
    suffix: str,
    final: bool = False,
    bar_width: int = DEFAULT_PROGRESS_BAR_WIDTH,
) -> None:
    """Render one in-place text progress line to stderr.

    Args:
        prefix: Prefix shown before the progress bar.
        fraction: Progress fraction in ``[0, 1]``.
        suffix: Additional text shown after the percentage.
        final: If ``True``, end the line with a newline.
        bar_width: Number of characters used by the progress bar.
    """
    clamped = float(np.clip(fraction, 0.0, 1.0))
    filled = int(clamped * bar_width)
    bar = "#" * filled + "-" * (bar_width - filled)
    end = "\n" if final else ""
    print(
        f"\r{prefix} [{bar}] {100.0 * clamped:5.1f}% {suffix}",
        end=end,
        file=sys.stderr,
        flush=True,
    )


def emit_search_progress(
    *,
    progress_prefix: str | None,
    attempts: int,
    max_attempts: int | None,
    seed: int,
    final: bool = False,
    bar_width: int = DEFAULT_PROGRESS_BAR_WIDTH,
) -> None:
    """Emit one progress update for a route search.

    Searches without an attempt ceiling have no meaningful fraction, so the bar
    stays empty until the final update fills it.

    Args:
        progress_prefix: Prefix for progress output; ``None`` disables output.
        attempts: Candidates tried so far.
        max_attempts: Optional attempt ceiling of the search.
        seed: Seed of the most recent candidate.
        final: Whether this is the closing update of the search.
        bar_width: Number of characters used by the progress bar.
    """
    if progress_prefix is None:
        return
    if final:
        fraction = 1.0
    elif max_attempts is None:
        fraction = 0.0
    else:
        fraction = attempts / max_attempts
    limit = "inf" if max_attempts is None else str(max_attempts)
    render_progress_line(
        prefix=progress_prefix,
        fraction=fraction,
        suffix=f"attempt {attempts}/{limit} seed {seed}",
        final=final,
        bar_width=bar_width,
    )
