"""
Dashboard stats command - company-level compliance overview.
"""

import logging
from typing import Optional

import typer

from doctrack.application.container import Container
from doctrack.domain.models import ComplianceStats
from doctrack.interface.cli.formatters.result_formatters import ComplianceStatsFormatter
from ..common import echo_json, fail, get_container

logger = logging.getLogger(__name__)


class DashboardStatsCommand:
    """Completion rate, fine exposure, per-company breakdown and critical alerts."""

    def __init__(self, container: Container):
        self.container = container
        self.formatter = ComplianceStatsFormatter()

    def execute(self, company_id: Optional[str] = None, as_json: bool = False) -> ComplianceStats:
        stats = self.container.compliance_service.compliance_stats(company_id)
        if as_json:
            echo_json(stats.to_dict())
        else:
            self.formatter.display(stats, self.container.config.currency)
        return stats


def dashboard_stats(
    ctx: typer.Context,
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Limit to one company id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables."),
):
    """
    Show the compliance overview across all active employees.
    """
    command = DashboardStatsCommand(get_container(ctx))
    try:
        command.execute(company_id=company, as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Compliance stats", e)
