"""
DB init command - create the schema and seed it from configuration.
"""

import logging
from typing import Dict

import typer

from doctrack.application.container import Container
from ..common import console, fail, get_container

logger = logging.getLogger(__name__)


class DbInitCommand:
    """
    Creates the SQLite schema and seeds catalog tables.

    Document types and dependency rules are only seeded into empty tables,
    so re-running the command is safe.
    """

    def __init__(self, container: Container):
        self.container = container

    def execute(self, write_config: bool = False) -> Dict[str, int]:
        if write_config and not self.container.config_manager.repository.config_exists():
            path = self.container.config_manager.write_default_config()
            console.print(f"[blue]📝 Wrote default configuration to {path}[/blue]")

        store = self.container.store
        seeded = store.seed_from_config(self.container.config)

        console.print(f"[green]✅ Database ready:[/green] {self.container.database_path}")
        console.print(
            f"   Seeded {seeded['document_types']} document types, "
            f"{seeded['dependencies']} dependencies, "
            f"{seeded['compliance_rules']} compliance rules"
        )
        return seeded


def db_init(
    ctx: typer.Context,
    write_config: bool = typer.Option(
        False,
        "--write-config",
        help="Also write the default configuration file if none exists.",
    ),
):
    """
    Create the database schema and seed it from the configuration.
    """
    command = DbInitCommand(get_container(ctx))
    try:
        command.execute(write_config=write_config)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Database initialization", e)
