"""
CLI command groups.

Each group lives in its own package with one module per command.
"""

from .config import config_app
from .dashboard import dashboard_app
from .db import db_app
from .employee import employee_app
from .report import report_app

__all__ = ["config_app", "dashboard_app", "db_app", "employee_app", "report_app"]
