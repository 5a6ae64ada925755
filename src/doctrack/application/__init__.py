"""
Application layer package.

Contains service classes that orchestrate business workflows.
Services coordinate between domain models and infrastructure.
"""

from doctrack.application.compliance_service import (
    ComplianceService,
    EmployeeListItem,
    EmployeeNotFoundError,
    EmployeeReport,
)
from doctrack.application.container import Container

__all__ = [
    "ComplianceService",
    "Container",
    "EmployeeListItem",
    "EmployeeNotFoundError",
    "EmployeeReport",
]
