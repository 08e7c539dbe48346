"""
Renderers for analytics results: charts, text report and file exports.
"""

from .plots import (
    create_dashboard_plots,
    plot_balance_vs_steps,
    plot_cluster_scatter,
    plot_consistency_distribution,
    plot_team_engagement,
)
from .report import export_workbook, generate_text_report, save_report

__all__ = [
    "create_dashboard_plots",
    "plot_balance_vs_steps",
    "plot_cluster_scatter",
    "plot_consistency_distribution",
    "plot_team_engagement",
    "export_workbook",
    "generate_text_report",
    "save_report",
]
