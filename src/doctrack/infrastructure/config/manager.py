"""
Configuration manager for the application layer.

This module provides the application layer interface for configuration operations.
It orchestrates domain models and infrastructure components.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from doctrack.domain.config import ComplianceConfig
from doctrack.domain.doc_types import DocTypeCatalog
from doctrack.domain.models import DependencyRule
from doctrack.infrastructure.config.repository import CONFIG_FILENAME, ConfigRepository

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Application layer manager for configuration operations.

    Loads the compliance configuration once and caches it. When no config
    file exists the built-in UAE defaults are used.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the config manager.

        Args:
            config_dir: Base directory for configuration files.
                       Defaults to 'config' subdirectory of current working directory.
        """
        if config_dir is None:
            config_dir = Path.cwd() / "config"

        self.config_dir = Path(config_dir)
        self.repository = ConfigRepository(self.config_dir)
        self._config: Optional[ComplianceConfig] = None
        self._catalog: Optional[DocTypeCatalog] = None
        self._using_defaults = False

    def load_config(self, force_reload: bool = False) -> ComplianceConfig:
        """
        Load compliance configuration.

        Args:
            force_reload: Whether to force reload from disk

        Returns:
            ComplianceConfig domain model

        Raises:
            ValueError: If the config file exists but is invalid
        """
        if self._config is None or force_reload:
            self._catalog = None
            if self.repository.config_exists():
                logger.info("Loading compliance configuration from %s", self.config_dir)
                self._config = self.repository.load_compliance_config()
                self._using_defaults = False
            else:
                logger.warning(
                    "No %s.json in %s - using built-in defaults",
                    CONFIG_FILENAME, self.config_dir,
                )
                self._config = ComplianceConfig()
                self._using_defaults = True
            logger.info("Loaded config for organization: %s", self._config.organization)

        return self._config

    @property
    def using_defaults(self) -> bool:
        self.load_config()
        return self._using_defaults

    def get_catalog(self) -> DocTypeCatalog:
        """Read-only document type catalog built from the config."""
        if self._catalog is None:
            self._catalog = self.load_config().build_catalog()
        return self._catalog

    def get_dependency_rules(self) -> List[DependencyRule]:
        return self.load_config().dependency_rules()

    def write_default_config(self, overwrite: bool = False) -> Path:
        """
        Write the built-in defaults to disk so they can be edited.

        Raises:
            FileExistsError: If a config exists and overwrite is False
        """
        if self.repository.config_exists() and not overwrite:
            raise FileExistsError(f"Config already exists in {self.config_dir}")
        path = self.repository.save_compliance_config(ComplianceConfig())
        self.clear_cache()
        return path

    def validate_all_configs(self, strict: bool = False) -> List[str]:
        """
        Validate all configuration files.

        Args:
            strict: Also report a missing config file as an error

        Returns:
            List of validation error messages (empty if all valid)
        """
        errors = []

        if strict and not self.repository.config_exists():
            errors.append(f"Config file '{CONFIG_FILENAME}.json' not found in {self.config_dir}")
            return errors

        try:
            config = self.load_config(force_reload=True)
        except (ValueError, OSError) as e:
            errors.append(f"Compliance config validation failed: {e}")
            return errors

        known = {d.doc_type for d in config.document_types}
        for rule in config.dependencies:
            for doc_type in (rule.blocking_doc_type, rule.blocked_doc_type):
                if doc_type not in known:
                    errors.append(
                        f"Dependency {rule.blocking_doc_type} -> {rule.blocked_doc_type} "
                        f"references unknown document type '{doc_type}'"
                    )
        for rule in config.compliance_rules:
            if rule.doc_type not in known:
                errors.append(f"Compliance rule references unknown document type '{rule.doc_type}'")

        if not any(d.is_mandatory for d in config.active_document_types):
            errors.append("No active mandatory document types configured")

        return errors

    def clear_cache(self) -> None:
        """Clear all cached configuration data."""
        self._config = None
        self._catalog = None
        logger.info("Configuration cache cleared")

    def get_config_summary(self) -> Dict[str, Any]:
        """
        Get a summary of current configuration state.

        Returns:
            Dictionary with configuration summary
        """
        config = self.load_config()
        active = config.active_document_types
        return {
            "config_directory": str(self.config_dir),
            "using_defaults": self._using_defaults,
            "organization": config.organization,
            "currency": config.currency,
            "database_path": config.database_path,
            "document_types": len(active),
            "mandatory_types": sum(1 for d in active if d.is_mandatory),
            "compliance_rules": len(config.compliance_rules),
            "dependencies": len(config.dependencies),
        }
