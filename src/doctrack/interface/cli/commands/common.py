"""
Helpers shared by the command modules.
"""

import json
import logging
from typing import Any, NoReturn

import typer
from rich.console import Console

from doctrack.application.container import Container

logger = logging.getLogger(__name__)
console = Console()


def get_container(ctx: typer.Context) -> Container:
    """Container built by the root callback (global options applied)."""
    container = ctx.find_object(Container)
    if container is None:
        container = Container()
        ctx.obj = container
        ctx.call_on_close(container.close)
    return container


def echo_json(data: Any) -> None:
    """Plain JSON on stdout (no rich markup or wrapping)."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def fail(action: str, error: Exception) -> NoReturn:
    """Report a command failure and exit with code 1."""
    logger.error("%s failed: %s", action, error)
    console.print(f"[red]❌ Error:[/red] {error}")
    raise typer.Exit(1)
