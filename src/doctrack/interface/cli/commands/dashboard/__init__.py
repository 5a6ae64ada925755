"""
Dashboard Command CLI - organization-wide views.
"""

import typer

from .notices_command import DashboardNoticesCommand, dashboard_notices
from .stats_command import DashboardStatsCommand, dashboard_stats

dashboard_app = typer.Typer(
    name="dashboard",
    help="📊 Compliance overview and notices",
    rich_markup_mode="rich",
    no_args_is_help=True
)

dashboard_app.command("stats")(dashboard_stats)
dashboard_app.command("notices")(dashboard_notices)

__all__ = ["dashboard_app", "DashboardStatsCommand", "DashboardNoticesCommand"]
