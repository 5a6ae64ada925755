"""
Configuration domain models package.

This package contains all domain models for the configuration system.
"""

from .compliance_config import (
    ComplianceConfig,
    default_compliance_rules,
    default_dependencies,
    default_document_types,
)
from .compliance_rule import ComplianceRuleConfig
from .dependency_rule import DependencyRuleConfig
from .document_type import DocumentTypeConfig

__all__ = [
    "ComplianceConfig",
    "ComplianceRuleConfig",
    "DependencyRuleConfig",
    "DocumentTypeConfig",
    "default_compliance_rules",
    "default_dependencies",
    "default_document_types",
]
