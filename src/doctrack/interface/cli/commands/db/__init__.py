"""
DB Command CLI - database setup and data import.
"""

import typer

from .import_command import DbImportCommand, db_import
from .init_command import DbInitCommand, db_init

db_app = typer.Typer(
    name="db",
    help="🗄️ Database setup and data import",
    rich_markup_mode="rich",
    no_args_is_help=True
)

db_app.command("init")(db_init)
db_app.command("import")(db_import)

__all__ = ["db_app", "DbInitCommand", "DbImportCommand", "db_init", "db_import"]
