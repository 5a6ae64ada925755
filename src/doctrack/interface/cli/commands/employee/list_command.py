"""
Employee list command - rollup per active employee.
"""

import logging
from typing import List, Optional

import typer

from doctrack.application.compliance_service import EmployeeListItem
from doctrack.application.container import Container
from doctrack.interface.cli.formatters.result_formatters import EmployeeListFormatter
from ..common import echo_json, fail, get_container

logger = logging.getLogger(__name__)


class EmployeeListCommand:
    """Lists active employees with their rolled-up compliance status."""

    def __init__(self, container: Container):
        self.container = container
        self.formatter = EmployeeListFormatter()

    def execute(
        self,
        status: Optional[str] = None,
        company_id: Optional[str] = None,
        as_json: bool = False,
    ) -> List[EmployeeListItem]:
        items = self.container.compliance_service.list_rollups(status=status, company_id=company_id)
        if as_json:
            echo_json([item.to_dict() for item in items])
        else:
            self.formatter.display(items, self.container.catalog)
        return items


def employee_list(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(
        None,
        "--status",
        "-s",
        help="Filter by status (valid, incomplete, expiring_soon, in_grace, penalty_active; "
             "aliases: expiring, expired, active).",
    ),
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Filter by company id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
):
    """
    List active employees with their compliance rollup.
    """
    command = EmployeeListCommand(get_container(ctx))
    try:
        command.execute(status=status, company_id=company, as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Employee list", e)
