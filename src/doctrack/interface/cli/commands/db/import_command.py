"""
DB import command - load companies, employees and documents from JSON.
"""

import json
import logging
from pathlib import Path
from typing import Dict

import typer

from doctrack.application.container import Container
from ..common import console, fail, get_container

logger = logging.getLogger(__name__)


class DbImportCommand:
    """Imports a JSON payload into the compliance store."""

    def __init__(self, container: Container):
        self.container = container

    def execute(self, file: Path) -> Dict[str, int]:
        """
        Import records from a JSON file.

        Args:
            file: Path to a JSON document with a top-level "companies" array

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid JSON or has the wrong shape
        """
        if not file.exists():
            raise FileNotFoundError(f"Import file not found: {file}")

        try:
            with open(file, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file}: {e}") from e
        if not isinstance(payload, dict):
            raise ValueError("Import payload must be a JSON object")

        store = self.container.store
        store.seed_from_config(self.container.config)
        counts = store.import_records(payload, self.container.catalog)

        console.print(
            f"[green]✅ Imported[/green] {counts['companies']} companies, "
            f"{counts['employees']} employees, {counts['documents']} documents"
        )
        return counts


def db_import(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON file with a top-level 'companies' array."),
):
    """
    Import companies, employees and documents from a JSON file.
    """
    command = DbImportCommand(get_container(ctx))
    try:
        command.execute(file)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Import", e)
