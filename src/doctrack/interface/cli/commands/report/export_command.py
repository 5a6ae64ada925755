"""
Report export command - Excel compliance workbook.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from doctrack.application.container import Container
from doctrack.domain.clock import to_day
from ..common import console, fail, get_container

logger = logging.getLogger(__name__)


class ReportExportCommand:
    """Writes the Summary / Employees / Documents workbook."""

    def __init__(self, container: Container):
        self.container = container

    def default_output(self) -> Path:
        day = to_day(self.container.clock.now()).isoformat()
        return self.container.config_dir.parent / "output" / f"compliance_report_{day}.xlsx"

    def execute(self, output: Optional[Path] = None) -> Path:
        output = output or self.default_output()
        path = self.container.compliance_service.export_report(
            output, organization=self.container.config.organization
        )
        console.print(f"[green]✅ Report written to[/green] {path}")
        return path


def report_export(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Workbook path (default: output/compliance_report_<date>.xlsx).",
    ),
):
    """
    Export the compliance report as an Excel workbook.
    """
    command = ReportExportCommand(get_container(ctx))
    try:
        command.execute(output)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Report export", e)
