"""
Employee status command - full compliance picture for one employee.
"""

import logging

import typer

from doctrack.application.compliance_service import EmployeeReport
from doctrack.application.container import Container
from doctrack.interface.cli.formatters.result_formatters import EmployeeReportFormatter
from ..common import echo_json, fail, get_container

logger = logging.getLogger(__name__)


class EmployeeStatusCommand:
    """
    Shows every current document of an employee with its status, time
    metrics and estimated fine, plus the rollup and dependency alerts.
    """

    def __init__(self, container: Container):
        self.container = container
        self.formatter = EmployeeReportFormatter()

    def execute(self, employee_id: str, as_json: bool = False) -> EmployeeReport:
        report = self.container.compliance_service.employee_report(employee_id)
        if as_json:
            echo_json(report.to_dict())
        else:
            self.formatter.display(report)
        return report


def employee_status(
    ctx: typer.Context,
    employee_id: str = typer.Argument(..., help="Employee id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables."),
):
    """
    Show document statuses, fines and dependency alerts for an employee.
    """
    command = EmployeeStatusCommand(get_container(ctx))
    try:
        command.execute(employee_id, as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Employee status", e)
