"""Analysis helpers for dry-run traces."""

from routesim.analysis.export import export_kpi_json
from routesim.analysis.kpi import RunKpis, compute_kpis
from routesim.analysis.plots import export_standard_plots

__all__ = ["RunKpis", "compute_kpis", "export_kpi_json", "export_standard_plots"]
