"""
Compliance configuration domain model.

This module defines the ComplianceConfig root entity: organization
settings, the document type table, fine overrides and dependency rules.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from doctrack.domain.config.models.compliance_rule import ComplianceRuleConfig
from doctrack.domain.config.models.dependency_rule import DependencyRuleConfig
from doctrack.domain.config.models.document_type import DocumentTypeConfig
from doctrack.domain.doc_types import DocTypeCatalog
from doctrack.domain.models import DependencyRule, FineType


# ============================================================================
# Default seeds (UAE labour documents)
# ============================================================================

# (doc_type, display_name, mandatory, sort, grace, fine, fine_type, cap)
_DEFAULT_TYPES = (
    ("passport", "Passport", True, 10, 0, "0", FineType.DAILY, "0"),
    ("visa", "Residence Visa", True, 20, 0, "50", FineType.DAILY, "0"),
    ("emirates_id", "Emirates ID", True, 30, 30, "20", FineType.DAILY, "1000"),
    ("work_permit", "Work Permit / Labour Card", True, 40, 50, "500", FineType.ONE_TIME, "500"),
    ("health_insurance", "Health Insurance", True, 50, 0, "500", FineType.MONTHLY, "150000"),
    ("iloe_insurance", "ILOE Insurance", True, 60, 0, "400", FineType.ONE_TIME, "400"),
    ("medical_fitness", "Medical Fitness Certificate", True, 70, 0, "0", FineType.DAILY, "0"),
    ("trade_license", "Trade License", False, 80, 0, "0", FineType.DAILY, "0"),
    ("other", "Other", False, 999, 0, "0", FineType.DAILY, "0"),
)

_DEFAULT_DEPENDENCIES = (
    ("passport", "visa", "Passport must have 6+ months validity to renew Residence Visa"),
    ("health_insurance", "work_permit", "Valid health insurance required to issue/renew Work Permit"),
    ("visa", "emirates_id", "Valid residence visa required to renew Emirates ID"),
    ("medical_fitness", "visa", "Medical fitness certificate required for visa issuance/renewal"),
)


def default_document_types() -> List[DocumentTypeConfig]:
    """Seed document types."""
    return [
        DocumentTypeConfig(
            doc_type=doc_type,
            display_name=name,
            is_mandatory=mandatory,
            sort_order=sort_order,
            grace_period_days=grace,
            fine_per_day=Decimal(fine),
            fine_type=fine_type,
            fine_cap=Decimal(cap),
        )
        for doc_type, name, mandatory, sort_order, grace, fine, fine_type, cap in _DEFAULT_TYPES
    ]


def default_compliance_rules() -> List[ComplianceRuleConfig]:
    """Seed global rules, one per mandatory type."""
    return [
        ComplianceRuleConfig(
            doc_type=doc_type,
            grace_period_days=grace,
            fine_per_day=Decimal(fine),
            fine_type=fine_type,
            fine_cap=Decimal(cap),
        )
        for doc_type, _, mandatory, _, grace, fine, fine_type, cap in _DEFAULT_TYPES
        if mandatory
    ]


def default_dependencies() -> List[DependencyRuleConfig]:
    """Seed dependency rules."""
    return [
        DependencyRuleConfig(
            blocking_doc_type=blocking, blocked_doc_type=blocked, description=description
        )
        for blocking, blocked, description in _DEFAULT_DEPENDENCIES
    ]


# ============================================================================
# Root configuration
# ============================================================================


class ComplianceConfig(BaseModel):
    """
    Domain model for compliance configuration.

    Loaded once at startup; the engine only ever sees the read-only
    catalog built from it.
    """

    model_config = ConfigDict(extra="allow")

    organization: str = Field("DocTrack", description="Organization name for reports")
    currency: str = Field("AED", description="Currency code for fines")
    database_path: str = Field("output/doctrack.db", description="SQLite database path")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    alert_limit: int = Field(10, ge=1, description="Critical alerts kept on the dashboard")
    document_types: List[DocumentTypeConfig] = Field(
        default_factory=default_document_types,
        description="Document type table"
    )
    compliance_rules: List[ComplianceRuleConfig] = Field(
        default_factory=default_compliance_rules,
        description="Grace/fine overrides (company or global)"
    )
    dependencies: List[DependencyRuleConfig] = Field(
        default_factory=default_dependencies,
        description="Document dependency rules"
    )

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if len(v) != 3:
            raise ValueError("Currency must be a 3-letter code")
        return v

    @model_validator(mode="after")
    def validate_unique_doc_types(self) -> "ComplianceConfig":
        """Reject duplicate type keys and duplicate rule scopes."""
        seen = set()
        for doc in self.document_types:
            if doc.doc_type in seen:
                raise ValueError(f"Duplicate document type: {doc.doc_type}")
            seen.add(doc.doc_type)

        scopes = set()
        for rule in self.compliance_rules:
            scope = (rule.company_id, rule.doc_type)
            if scope in scopes:
                raise ValueError(
                    f"Duplicate compliance rule for {rule.doc_type} "
                    f"(company: {rule.company_id or 'global'})"
                )
            scopes.add(scope)
        return self

    @property
    def active_document_types(self) -> List[DocumentTypeConfig]:
        return [d for d in self.document_types if d.is_active]

    def build_catalog(self) -> DocTypeCatalog:
        """Build the read-only catalog handed to the engine."""
        return DocTypeCatalog(d.to_entry() for d in self.active_document_types)

    def dependency_rules(self) -> List[DependencyRule]:
        return [d.to_rule() for d in self.dependencies]
