"""
Config summary command.
"""

import logging
from typing import Any, Dict

import typer

from doctrack.application.container import Container
from doctrack.interface.cli.formatters.result_formatters import ConfigSummaryFormatter
from ..common import echo_json, fail, get_container

logger = logging.getLogger(__name__)


class ConfigSummaryCommand:
    """Shows the effective configuration at a glance."""

    def __init__(self, container: Container):
        self.container = container
        self.formatter = ConfigSummaryFormatter()

    def execute(self, as_json: bool = False) -> Dict[str, Any]:
        summary = self.container.config_manager.get_config_summary()
        if as_json:
            echo_json(summary)
        else:
            self.formatter.display_config_summary(summary)
        return summary


def config_summary(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
):
    """
    Display a summary of the current configuration.
    """
    command = ConfigSummaryCommand(get_container(ctx))
    try:
        command.execute(as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Config summary", e)
