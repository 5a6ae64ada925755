"""
Configuration repository for loading and saving config files.

This module provides the infrastructure layer for configuration persistence.
It handles file I/O operations and basic validation.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict

from doctrack.domain.config import ComplianceConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "doctrack"

# Strings first so "//" inside a value (URLs) is kept
_JSONC_TOKENS = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


def _strip_comments(jsonc_content: str) -> str:
    """Strip // and /* */ comments from JSONC content."""
    return _JSONC_TOKENS.sub(lambda m: m.group(1) or "", jsonc_content)


class ConfigRepository:
    """
    Repository for configuration file operations.

    Handles loading and saving of configuration files with support for
    JSON and JSONC formats.
    """

    def __init__(self, config_dir: Path):
        """
        Initialize the config repository.

        Args:
            config_dir: Base directory for configuration files
        """
        self.config_dir = Path(config_dir)

    def _ensure_config_dir(self) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def config_exists(self, filename: str = CONFIG_FILENAME) -> bool:
        """Check whether a .json or .jsonc file exists for filename."""
        return any(
            (self.config_dir / f"{filename}{ext}").exists() for ext in (".json", ".jsonc")
        )

    def load_json_file(self, filename: str, allow_jsonc: bool = True) -> Dict[str, Any]:
        """
        Load a JSON or JSONC file.

        Args:
            filename: Name of the file to load (without extension)
            allow_jsonc: Whether to try JSONC if JSON fails

        Returns:
            Parsed JSON data as dictionary

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file cannot be parsed
        """
        json_path = self.config_dir / f"{filename}.json"
        jsonc_path = self.config_dir / f"{filename}.jsonc"

        if json_path.exists():
            try:
                with open(json_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                logger.warning("Failed to parse JSON file %s: %s", json_path, e)
                if not (allow_jsonc and jsonc_path.exists()):
                    raise ValueError(f"Invalid JSON in {json_path}: {e}") from e

        if allow_jsonc and jsonc_path.exists():
            try:
                with open(jsonc_path, 'r', encoding='utf-8') as f:
                    return json.loads(_strip_comments(f.read()))
            except json.JSONDecodeError as e:
                logger.error("Failed to parse JSONC file %s: %s", jsonc_path, e)
                raise ValueError(f"Invalid JSONC in {jsonc_path}: {e}") from e

        raise FileNotFoundError(
            f"Config file '{filename}.json' or '{filename}.jsonc' not found in {self.config_dir}"
        )

    def save_json_file(self, filename: str, data: Dict[str, Any]) -> Path:
        """
        Save data to a JSON file.

        Args:
            filename: Name of the file to save (without extension)
            data: Data to save

        Returns:
            Path of the written file
        """
        self._ensure_config_dir()
        filepath = self.config_dir / f"{filename}.json"
        content = json.dumps(data, indent=2, ensure_ascii=False)

        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.info("Saved config file: %s", filepath)
        return filepath

    def load_compliance_config(self) -> ComplianceConfig:
        """
        Load compliance configuration.

        Returns:
            Parsed ComplianceConfig domain model

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If config cannot be parsed or validated
        """
        data = self.load_json_file(CONFIG_FILENAME)
        try:
            return ComplianceConfig(**data)
        except ValueError as e:
            logger.error("Failed to validate compliance config: %s", e)
            raise ValueError(f"Invalid compliance configuration: {e}") from e

    def save_compliance_config(self, config: ComplianceConfig) -> Path:
        """Write a config back to disk as plain JSON."""
        return self.save_json_file(CONFIG_FILENAME, config.model_dump(mode="json"))
