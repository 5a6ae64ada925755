"""
Config init command - write the built-in defaults to disk.
"""

import logging
from pathlib import Path

import typer

from doctrack.application.container import Container
from ..common import console, fail, get_container

logger = logging.getLogger(__name__)


class ConfigInitCommand:
    """Writes the default configuration so it can be edited."""

    def __init__(self, container: Container):
        self.container = container

    def execute(self, force: bool = False) -> Path:
        path = self.container.config_manager.write_default_config(overwrite=force)
        console.print(f"[green]✅ Default configuration written to[/green] {path}")
        return path


def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file."),
):
    """
    Write the default configuration (document types, rules, dependencies).
    """
    command = ConfigInitCommand(get_container(ctx))
    try:
        command.execute(force=force)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Config init", e)
