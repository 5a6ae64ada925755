"""
Employee Command CLI - per-employee compliance views.
"""

import typer

from .alerts_command import EmployeeAlertsCommand, employee_alerts
from .list_command import EmployeeListCommand, employee_list
from .status_command import EmployeeStatusCommand, employee_status

employee_app = typer.Typer(
    name="employee",
    help="👤 Employee document status and alerts",
    rich_markup_mode="rich",
    no_args_is_help=True
)

employee_app.command("status")(employee_status)
employee_app.command("list")(employee_list)
employee_app.command("alerts")(employee_alerts)

__all__ = [
    "employee_app",
    "EmployeeStatusCommand",
    "EmployeeListCommand",
    "EmployeeAlertsCommand",
]
