"""
Dependency rule domain model.

This module defines the configuration form of a document dependency:
one document type that must be valid for another to be renewed.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from doctrack.domain.models import DependencyRule


class DependencyRuleConfig(BaseModel):
    """
    Domain model for a dependency rule.

    A type can never block itself.
    """

    model_config = ConfigDict(extra="ignore")

    blocking_doc_type: str = Field(..., description="Document whose expiry blocks renewal")
    blocked_doc_type: str = Field(..., description="Document whose renewal is at risk")
    description: str = Field("", description="Why the dependency exists")

    @field_validator("blocking_doc_type", "blocked_doc_type")
    @classmethod
    def normalize_doc_type(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("Document type cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_not_self_referencing(self) -> "DependencyRuleConfig":
        if self.blocking_doc_type == self.blocked_doc_type:
            raise ValueError("A document type cannot depend on itself")
        return self

    def to_rule(self) -> DependencyRule:
        """Convert to the engine's immutable rule."""
        return DependencyRule(
            blocking_doc_type=self.blocking_doc_type,
            blocked_doc_type=self.blocked_doc_type,
            description=self.description,
        )
