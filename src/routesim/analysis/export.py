"""Export helpers for dry-run analysis outputs."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from routesim.analysis.kpi import RunKpis


def export_kpi_json(kpis: RunKpis, path: str | Path) -> None:
    """Persist a KPI summary as JSON.

    Args:
        kpis: KPI dataclass returned by :func:`routesim.analysis.kpi.compute_kpis`.
        path: Output file path for the JSON document.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(asdict(kpis), indent=2), encoding="utf-8")
