"""
Report Command CLI - report generation.
"""

import typer

from .export_command import ReportExportCommand, report_export

report_app = typer.Typer(
    name="report",
    help="📑 Compliance report export",
    rich_markup_mode="rich",
    no_args_is_help=True
)

report_app.command("export")(report_export)

__all__ = ["report_app", "ReportExportCommand", "report_export"]
