"""
Employee alerts command - dependency alerts for one employee.
"""

import logging
from typing import List

import typer

from doctrack.application.container import Container
from doctrack.domain.models import DependencyAlert
from doctrack.interface.cli.formatters.result_formatters import DependencyAlertFormatter
from ..common import echo_json, fail, get_container

logger = logging.getLogger(__name__)


class EmployeeAlertsCommand:
    """Evaluates the configured dependency rules for one employee."""

    def __init__(self, container: Container):
        self.container = container
        self.formatter = DependencyAlertFormatter()

    def execute(self, employee_id: str, as_json: bool = False) -> List[DependencyAlert]:
        alerts = self.container.compliance_service.dependency_alerts(employee_id)
        if as_json:
            echo_json([alert.to_dict() for alert in alerts])
        else:
            self.formatter.display(alerts)
        return alerts


def employee_alerts(
    ctx: typer.Context,
    employee_id: str = typer.Argument(..., help="Employee id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
):
    """
    Show dependency alerts (e.g. an expiring passport blocking the visa).
    """
    command = EmployeeAlertsCommand(get_container(ctx))
    try:
        command.execute(employee_id, as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Dependency alerts", e)
