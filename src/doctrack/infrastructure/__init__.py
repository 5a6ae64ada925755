"""
Infrastructure layer package.

Contains all I/O and external system integrations:
- Configuration file loading (config/)
- Logging setup
- SQLite compliance store (sqlite/)
- Excel report generation
"""

from doctrack.infrastructure.config import ConfigManager, ConfigRepository
from doctrack.infrastructure.excel_report import write_compliance_report
from doctrack.infrastructure.logging_config import setup_logging
from doctrack.infrastructure.sqlite import ComplianceStore

__all__ = [
    # Config
    "ConfigManager",
    "ConfigRepository",
    # Storage
    "ComplianceStore",
    # Reports
    "write_compliance_report",
    # Logging
    "setup_logging",
]
