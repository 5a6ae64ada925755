"""
Configuration domain package.

This package contains the domain layer for configuration management.
"""

from .models import (
    ComplianceConfig,
    ComplianceRuleConfig,
    DependencyRuleConfig,
    DocumentTypeConfig,
)

__all__ = [
    "ComplianceConfig",
    "ComplianceRuleConfig",
    "DependencyRuleConfig",
    "DocumentTypeConfig",
]
