"""
Dependency injection container for the application.

This module provides a centralized way to create and manage application dependencies.
It follows the dependency injection pattern for clean architecture.
"""

import logging
from pathlib import Path
from typing import Optional

from doctrack.domain.clock import Clock, SystemClock
from doctrack.domain.config import ComplianceConfig
from doctrack.domain.doc_types import DocTypeCatalog
from doctrack.infrastructure.config.manager import ConfigManager
from doctrack.infrastructure.sqlite.store import ComplianceStore
from doctrack.application.compliance_service import ComplianceService

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation and lifecycle of application services and infrastructure components.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        clock: Optional[Clock] = None,
        database_path: Optional[Path] = None,
    ):
        """
        Initialize the container.

        Args:
            config_dir: Base directory for configuration files
            clock: Source of "now" (e.g. a FixedClock for --as-of)
            database_path: Overrides the database path from the config
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"
        self.clock = clock or SystemClock()
        self._database_path = database_path

        self._config_manager: Optional[ConfigManager] = None
        self._store: Optional[ComplianceStore] = None
        self._compliance_service: Optional[ComplianceService] = None

    @property
    def config_manager(self) -> ConfigManager:
        """Get the configuration manager."""
        if self._config_manager is None:
            self._config_manager = ConfigManager(self.config_dir)
        return self._config_manager

    @property
    def config(self) -> ComplianceConfig:
        return self.config_manager.load_config()

    @property
    def catalog(self) -> DocTypeCatalog:
        return self.config_manager.get_catalog()

    @property
    def database_path(self) -> Path:
        """Resolved database path (relative paths are under the config dir's parent)."""
        if self._database_path is not None:
            return Path(self._database_path)
        path = Path(self.config.database_path)
        if not path.is_absolute():
            path = self.config_dir.parent / path
        return path

    @property
    def store(self) -> ComplianceStore:
        """Get the compliance store, creating the schema on first use."""
        if self._store is None:
            self._store = ComplianceStore(self.database_path)
            self._store.initialize_schema()
            logger.debug("Compliance store ready: %s", self.database_path)
        return self._store

    @property
    def compliance_service(self) -> ComplianceService:
        """Get the compliance service."""
        if self._compliance_service is None:
            self._compliance_service = ComplianceService(
                documents=self.store,
                dependencies=self.store,
                catalog=self.catalog,
                clock=self.clock,
                notice_log=self.store,
                alert_limit=self.config.alert_limit,
            )
        return self._compliance_service

    def close(self) -> None:
        """Release the database connection."""
        if self._store is not None:
            self._store.close()
            self._store = None
        self._compliance_service = None
