"""
SQLite infrastructure package.

Provides SQLite storage for companies, employees and their documents.
"""

from doctrack.infrastructure.sqlite.schema import SCHEMA_VERSION, initialize_schema
from doctrack.infrastructure.sqlite.store import ComplianceStore

__all__ = [
    "ComplianceStore",
    "SCHEMA_VERSION",
    "initialize_schema",
]
