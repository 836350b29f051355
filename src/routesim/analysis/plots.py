"""Plot generation for dry-run analysis."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from routesim.route.models import SegmentKind, segment_length
from routesim.simulation.runner import RunTrace

matplotlib.use("Agg")

SEGMENT_COLORS = {
    SegmentKind.COMMON: "0.6",
    SegmentKind.FORCE: "tab:red",
    SegmentKind.STATION: "tab:blue",
}


def _save_dual_format(fig: Figure, out_base: Path) -> None:
    """Write a figure to PNG and PDF with a shared base path.

    Args:
        fig: Figure object to persist.
        out_base: Output path without suffix.
    """
    out_base.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_base.with_suffix(".png"), dpi=180, bbox_inches="tight")
    fig.savefig(out_base.with_suffix(".pdf"), bbox_inches="tight")


def _shade_segments(ax: Axes, trace: RunTrace) -> None:
    """Mark segment boundaries and stations along the position axis.

    Args:
        ax: Axis with route position on the x-axis.
        trace: Trace whose route is drawn.
    """
    offset = 0.0
    for segment in trace.route.segments:
        length = segment_length(segment)
        color = SEGMENT_COLORS[segment.kind]
        if segment.kind is SegmentKind.STATION:
            ax.axvline(offset, color=color, lw=1.5, ls="--")
        else:
            ax.axvspan(offset, offset + length, color=color, alpha=0.08)
        offset += length


def plot_speed_trace(trace: RunTrace, out_base: Path) -> None:
    """Plot speed over route position with segment shading.

    Args:
        trace: Dry-run trace containing ``position`` and ``speed``.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    _shade_segments(ax, trace)
    ax.plot(trace.position, trace.speed, lw=2.0)
    ax.axhline(trace.route.route_end_speed_limit, color="k", lw=1.0, ls=":")
    ax.set_xlabel("Position [m]")
    ax.set_ylabel("Speed [m/s]")
    ax.set_title(f"Speed Trace ({trace.result.reason})")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_position_trace(trace: RunTrace, out_base: Path) -> None:
    """Plot route position over simulated time.

    Args:
        trace: Dry-run trace containing ``time`` and ``position``.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.position, lw=2.0)
    ax.axhline(trace.route.length, color="k", lw=1.0, ls=":")
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Position [m]")
    ax.set_title("Position Trace")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def export_standard_plots(trace: RunTrace, out_dir: str | Path) -> None:
    """Export the standard plot set for one dry run.

    Args:
        trace: Dry-run trace to visualize.
        out_dir: Output directory for PNG and PDF files.
    """
    out = Path(out_dir)
    plot_speed_trace(trace, out / "speed_trace")
    plot_position_trace(trace, out / "position_trace")
