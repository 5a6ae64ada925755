"""
Compliance rule domain model.

A compliance rule overrides the grace/fine schedule for one document type,
either for a single company or globally (company_id = None).
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from doctrack.domain.models import FineType


class ComplianceRuleConfig(BaseModel):
    """
    Domain model for a grace/fine override.

    Unset fields fall through to the next level: company rule,
    then global rule, then the document's own value.
    """

    model_config = ConfigDict(extra="ignore")

    doc_type: str = Field(..., description="Document type the rule applies to")
    company_id: Optional[str] = Field(None, description="Company id (None = global rule)")
    grace_period_days: Optional[int] = Field(None, ge=0)
    fine_per_day: Optional[Decimal] = Field(None, ge=0)
    fine_type: Optional[FineType] = None
    fine_cap: Optional[Decimal] = Field(None, ge=0)

    @field_validator("doc_type")
    @classmethod
    def normalize_doc_type(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("Document type cannot be empty")
        return v

    @property
    def is_global(self) -> bool:
        return self.company_id is None
