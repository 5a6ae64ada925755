"""
Config validate command - configuration validation logic.
"""

import logging
from typing import List

import typer

from doctrack.application.container import Container
from doctrack.interface.cli.formatters.result_formatters import ValidationResultFormatter
from ..common import console, fail, get_container

logger = logging.getLogger(__name__)


class ConfigValidateCommand:
    """
    Config validation command.

    Handles configuration validation with strict mode.
    """

    def __init__(self, container: Container):
        """
        Initialize the config validate command.

        Args:
            container: Application dependency container
        """
        self.container = container
        self.formatter = ValidationResultFormatter()

    def execute(self, strict: bool = False) -> List[str]:
        """
        Execute config validation.

        Args:
            strict: Enable strict validation mode

        Raises:
            typer.Exit: With code 1 when validation errors were found
        """
        console.print("[blue]🔍 Validating configuration files...[/blue]")

        errors = self.container.config_manager.validate_all_configs(strict=strict)
        self.formatter.display_validation_results(errors, strict)

        if errors:
            raise typer.Exit(1)
        return errors


def config_validate(
    ctx: typer.Context,
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Also fail when no configuration file exists."
    )
):
    """
    Validate the compliance configuration.

    Performs checks on:
    - JSON syntax and model validation (types, fines, grace periods)
    - Duplicate document types and rule scopes
    - Dependency and rule references to unknown document types
    - Presence of at least one mandatory document type
    """
    command = ConfigValidateCommand(get_container(ctx))
    try:
        command.execute(strict=strict)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Config validation", e)
