"""
Document type domain model.

This module defines the DocumentTypeConfig entity describing one kind of
employee document and its default fine schedule.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from doctrack.domain.doc_types import DocTypeEntry
from doctrack.domain.models import FineType


class DocumentTypeConfig(BaseModel):
    """
    Domain model for a configured document type.

    Values here are the defaults copied into new mandatory slots; the
    storage layer may still override them per company through rules.
    """

    model_config = ConfigDict(extra="ignore")

    doc_type: str = Field(..., description="Type key (slug), e.g. 'emirates_id'")
    display_name: str = Field(..., description="Human-readable label")
    is_mandatory: bool = Field(False, description="Whether every employee must hold it")
    is_active: bool = Field(True, description="Inactive types are ignored")
    grace_period_days: int = Field(0, ge=0, description="Days after expiry before fines start")
    fine_per_day: Decimal = Field(Decimal("0"), ge=0, description="Fine rate")
    fine_type: FineType = Field(FineType.DAILY, description="daily | monthly | one_time")
    fine_cap: Decimal = Field(Decimal("0"), ge=0, description="Maximum fine (0 = uncapped)")
    sort_order: int = Field(0, description="Display ordering")

    @field_validator("doc_type")
    @classmethod
    def normalize_doc_type(cls, v: str) -> str:
        """Validate and normalize the type key."""
        v = (v or "").strip().lower()
        if len(v) < 2:
            raise ValueError("Document type is required (min 2 characters)")
        return v

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Display name cannot be empty")
        return v.strip()

    def to_entry(self) -> DocTypeEntry:
        """Convert to the engine's read-only catalog entry."""
        return DocTypeEntry(
            doc_type=self.doc_type,
            display_name=self.display_name,
            is_mandatory=self.is_mandatory,
            grace_period_days=self.grace_period_days,
            fine_per_day=self.fine_per_day,
            fine_type=self.fine_type,
            fine_cap=self.fine_cap,
            sort_order=self.sort_order,
        )
