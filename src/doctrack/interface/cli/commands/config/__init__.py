"""
Config Command CLI - Configuration Management

Wires together all configuration-related commands.
"""

import typer

from .init_command import ConfigInitCommand, config_init
from .summary_command import ConfigSummaryCommand, config_summary
from .validate_command import ConfigValidateCommand, config_validate

config_app = typer.Typer(
    name="config",
    help="⚙️ Configuration validation and management",
    rich_markup_mode="rich",
    no_args_is_help=True
)

config_app.command("validate")(config_validate)
config_app.command("summary")(config_summary)
config_app.command("init")(config_init)

__all__ = [
    "config_app",
    "ConfigValidateCommand",
    "ConfigSummaryCommand",
    "ConfigInitCommand",
    "config_validate",
    "config_summary",
    "config_init",
]
