"""
CLI Orchestrator - Main Entry Point

Wires the command groups into one typer application and applies the
global options (config directory, database, logging, fixed clock).
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from doctrack.application.container import Container
from doctrack.domain.clock import FixedClock
from doctrack.infrastructure.logging_config import setup_logging
from doctrack.interface.cli.commands import (
    config_app,
    dashboard_app,
    db_app,
    employee_app,
    report_app,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="doctrack",
    help="📋 DocTrack - UAE labor document compliance",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")
app.add_typer(employee_app, name="employee")
app.add_typer(dashboard_app, name="dashboard")
app.add_typer(config_app, name="config")
app.add_typer(report_app, name="report")


def _configured_log_file(container: Container) -> Optional[str]:
    """Log file from the config, if the config loads."""
    try:
        return container.config.log_file
    except ValueError as e:
        # Reported properly by the command (or `config validate`)
        logger.debug("Config not loadable while setting up logging: %s", e)
        return None


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Directory holding doctrack.json (default: ./config).",
    ),
    database: Optional[Path] = typer.Option(
        None,
        "--database",
        "--db",
        help="SQLite database path (overrides the config).",
    ),
    as_of: Optional[datetime] = typer.Option(
        None,
        "--as-of",
        formats=["%Y-%m-%d"],
        help="Evaluate as of this date (YYYY-MM-DD) instead of today.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file."),
):
    """
    📋 DocTrack - document compliance for UAE employers

    Tracks passports, visas, Emirates IDs, work permits and insurance
    documents per employee, derives their compliance status and estimated
    fines, and flags documents whose expiry threatens other documents.

    🎯 **Available Commands:**
    - `doctrack db` - Schema setup and JSON import
    - `doctrack employee` - Per-employee status, list and dependency alerts
    - `doctrack dashboard` - Company overview and daily notices
    - `doctrack config` - Configuration validation and summary
    - `doctrack report` - Excel export

    🔧 **Quick Start:**
    1. Write the default config: `doctrack config init`
    2. Create the database: `doctrack db init`
    3. Load data: `doctrack db import employees.json`
    4. Review: `doctrack dashboard stats`
    """
    clock = FixedClock(as_of.date()) if as_of else None
    container = Container(config_dir=config_dir, clock=clock, database_path=database)
    ctx.obj = container
    ctx.call_on_close(container.close)

    setup_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        log_file=log_file or _configured_log_file(container),
    )
    if as_of:
        logger.debug("Using fixed clock: %s", clock)
