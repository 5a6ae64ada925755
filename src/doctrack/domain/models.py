"""
Domain models for DocTrack.

This module contains the core business entities that represent:
- Stored document facts (the snapshot the engine reads)
- Derived compliance values (status, metrics, fines)
- Employee and company rollups
- Dependency rules and the alerts they produce

These models are pure data structures with no I/O dependencies.
They can be serialized to/from SQLite via the infrastructure layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


# ============================================================================
# Enumerations
# ============================================================================


class ComplianceStatus(str, Enum):
    """
    Compliance status of a single document.

    Never persisted - recomputed on every read from a DocumentFact and "now".
    """

    INCOMPLETE = "incomplete"  # Missing expiry date or document number
    VALID = "valid"  # Expiry more than 30 days away
    EXPIRING_SOON = "expiring_soon"  # Expiry within 30 days
    IN_GRACE = "in_grace"  # Expired, still inside the grace period
    PENALTY_ACTIVE = "penalty_active"  # Past grace - fines accumulating

    @property
    def severity(self) -> int:
        """Rank used for worst-of aggregation. Higher = worse."""
        ranks = {
            ComplianceStatus.VALID: 0,
            ComplianceStatus.INCOMPLETE: 1,
            ComplianceStatus.EXPIRING_SOON: 2,
            ComplianceStatus.IN_GRACE: 3,
            ComplianceStatus.PENALTY_ACTIVE: 4,
        }
        return ranks[self]

    def is_urgent(self) -> bool:
        """Check if this status needs action before (or because of) expiry."""
        return self in (
            ComplianceStatus.EXPIRING_SOON,
            ComplianceStatus.IN_GRACE,
            ComplianceStatus.PENALTY_ACTIVE,
        )

    @classmethod
    def from_string(cls, value: str | None) -> ComplianceStatus | None:
        """Parse status from string, accepting the legacy filter aliases."""
        if value is None:
            return None
        key = str(value).strip().lower()
        aliases = {
            "expiring": cls.EXPIRING_SOON,
            "expired": cls.PENALTY_ACTIVE,
            "active": cls.VALID,
        }
        if key in aliases:
            return aliases[key]
        for member in cls:
            if member.value == key:
                return member
        return None


class RollupStatus(str, Enum):
    """
    Employee- or company-level compliance status.

    Mirrors ComplianceStatus plus NONE, used only when there is
    nothing to aggregate (no mandatory documents at all).
    """

    NONE = "none"
    VALID = "valid"
    INCOMPLETE = "incomplete"
    EXPIRING_SOON = "expiring_soon"
    IN_GRACE = "in_grace"
    PENALTY_ACTIVE = "penalty_active"

    @classmethod
    def from_document_status(cls, status: ComplianceStatus) -> RollupStatus:
        """Lift a document status into the rollup space."""
        return cls(status.value)

    @property
    def severity(self) -> int:
        """Rank used for worst-of aggregation. NONE ranks below everything."""
        if self is RollupStatus.NONE:
            return -1
        return ComplianceStatus(self.value).severity


class FineType(str, Enum):
    """How a fine accrues once the penalty period has started."""

    DAILY = "daily"
    MONTHLY = "monthly"
    ONE_TIME = "one_time"

    @classmethod
    def from_string(cls, value: FineType | str | None) -> FineType | None:
        """Parse fine type; returns None for unknown values."""
        if isinstance(value, FineType):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return None


class AlertSeverity(str, Enum):
    """Severity of a dependency alert."""

    CRITICAL = "critical"
    WARNING = "warning"


class NoticeKind(str, Enum):
    """Type of compliance notice sent to company owners."""

    PENALTY = "document_penalty"
    GRACE = "document_grace"
    EXPIRING = "document_expiring"


# ============================================================================
# Core Domain Models
# ============================================================================


@dataclass(frozen=True)
class DocumentFact:
    """
    Snapshot of a stored document, as read by the engine.

    Grace and fine fields hold the *effective* values already resolved by
    the storage layer (company rule, then global rule, then document value).

    Attributes:
        document_type: Type key (e.g., "passport", "emirates_id")
        document_number: Identification number (None/empty = missing)
        issue_date: When the document was issued
        expiry_date: When it expires (None = not yet submitted)
        grace_period_days: Days after expiry before fines start
        fine_per_day: Fine rate (daily amount, monthly amount or flat fee)
        fine_type: "daily" | "monthly" | "one_time"
        fine_cap: Maximum fine (0 = uncapped)
        is_mandatory: Whether the employee is required to hold it
        document_id: Storage identifier, if any
    """

    document_type: str
    document_number: str | None = None
    issue_date: date | None = None
    expiry_date: date | None = None
    grace_period_days: int = 0
    fine_per_day: Decimal = Decimal("0")
    fine_type: FineType | str = FineType.DAILY
    fine_cap: Decimal = Decimal("0")
    is_mandatory: bool = False
    document_id: str | None = None

    @property
    def has_number(self) -> bool:
        """Check if the document number was filled in."""
        return bool(self.document_number and self.document_number.strip())

    @property
    def is_complete(self) -> bool:
        """Both an expiry date and a document number are present."""
        return self.expiry_date is not None and self.has_number


@dataclass(frozen=True)
class ComplianceMetrics:
    """
    Derived time and money figures for one document.

    All optional integers are None when not meaningful for the
    document's current state.
    """

    days_remaining: int | None = None
    grace_days_remaining: int | None = None
    days_in_penalty: int | None = None
    estimated_fine: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class DocumentCompliance:
    """A document fact together with everything derived from it."""

    fact: DocumentFact
    status: ComplianceStatus
    metrics: ComplianceMetrics
    display_name: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the response-assembly layer."""
        fact = self.fact
        return {
            "id": fact.document_id,
            "documentType": fact.document_type,
            "displayName": self.display_name,
            "documentNumber": fact.document_number,
            "issueDate": fact.issue_date.isoformat() if fact.issue_date else None,
            "expiryDate": fact.expiry_date.isoformat() if fact.expiry_date else None,
            "gracePeriodDays": fact.grace_period_days,
            "finePerDay": str(fact.fine_per_day),
            "fineType": getattr(fact.fine_type, "value", fact.fine_type),
            "fineCap": str(fact.fine_cap),
            "isMandatory": fact.is_mandatory,
            "status": self.status.value,
            "daysRemaining": self.metrics.days_remaining,
            "graceDaysRemaining": self.metrics.grace_days_remaining,
            "daysInPenalty": self.metrics.days_in_penalty,
            "estimatedFine": str(self.metrics.estimated_fine),
        }


@dataclass(frozen=True)
class EmployeeRollup:
    """
    Worst-case aggregation of one employee's mandatory documents.

    Attributes:
        employee_id: Employee the rollup belongs to (None when ad hoc)
        compliance_status: Worst status present (NONE if no documents)
        docs_complete: Documents with both expiry date and number
        docs_total: Number of mandatory documents
        expired_count: Documents at or past the penalty threshold
        expiring_count: Documents expiring within 30 days
        nearest_expiry_days: Smallest days-remaining (may be negative)
        urgent_doc_type: Type achieving nearest_expiry_days
    """

    employee_id: str | None = None
    compliance_status: RollupStatus = RollupStatus.NONE
    docs_complete: int = 0
    docs_total: int = 0
    expired_count: int = 0
    expiring_count: int = 0
    nearest_expiry_days: int | None = None
    urgent_doc_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "complianceStatus": self.compliance_status.value,
            "docsComplete": self.docs_complete,
            "docsTotal": self.docs_total,
            "expiredCount": self.expired_count,
            "expiringCount": self.expiring_count,
            "nearestExpiryDays": self.nearest_expiry_days,
            "urgentDocType": self.urgent_doc_type,
        }


@dataclass(frozen=True)
class DependencyRule:
    """A blocking document type whose expiry threatens a blocked type."""

    blocking_doc_type: str
    blocked_doc_type: str
    description: str = ""


@dataclass(frozen=True)
class DependencyAlert:
    """Ephemeral warning produced by evaluating one DependencyRule."""

    severity: AlertSeverity
    blocking_doc: str
    blocked_doc: str
    message: str
    blocking_expiry: str = ""
    blocked_expiry: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "blockingDoc": self.blocking_doc,
            "blockedDoc": self.blocked_doc,
            "message": self.message,
            "blockingExpiry": self.blocking_expiry,
            "blockedExpiry": self.blocked_expiry,
        }


# ============================================================================
# Aggregation Inputs / Outputs
# ============================================================================


@dataclass(frozen=True)
class EmployeeDocuments:
    """One employee's mandatory documents plus company context."""

    employee_id: str
    employee_name: str = ""
    company_id: str | None = None
    company_name: str = ""
    currency: str = "AED"
    documents: tuple[DocumentFact, ...] = ()


@dataclass(frozen=True)
class ExpiryAlert:
    """A document nearing or past expiry, for dashboards."""

    employee_id: str
    employee_name: str
    company_name: str
    document_type: str
    expiry_date: str
    days_left: int
    status: ComplianceStatus
    estimated_fine: Decimal
    fine_per_day: Decimal
    document_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "documentId": self.document_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "companyName": self.company_name,
            "documentType": self.document_type,
            "expiryDate": self.expiry_date,
            "daysLeft": self.days_left,
            "status": self.status.value,
            "estimatedFine": str(self.estimated_fine),
            "finePerDay": str(self.fine_per_day),
        }


@dataclass
class CompanyCompliance:
    """Per-company compliance figures."""

    company_id: str | None
    company_name: str
    employee_count: int = 0
    penalty_count: int = 0
    incomplete_count: int = 0
    daily_exposure: Decimal = Decimal("0.00")
    accumulated_fines: Decimal = Decimal("0.00")
    compliance_status: RollupStatus = RollupStatus.NONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "companyId": self.company_id,
            "companyName": self.company_name,
            "employeeCount": self.employee_count,
            "penaltyCount": self.penalty_count,
            "incompleteCount": self.incomplete_count,
            "dailyExposure": str(self.daily_exposure),
            "accumulatedFines": str(self.accumulated_fines),
            "complianceStatus": self.compliance_status.value,
        }


@dataclass
class ComplianceStats:
    """Full compliance overview across all employees."""

    total_employees: int = 0
    total_documents: int = 0
    documents_by_status: dict[str, int] = field(default_factory=dict)
    completion_rate: float = 0.0
    total_daily_exposure: Decimal = Decimal("0.00")
    total_accumulated: Decimal = Decimal("0.00")
    company_breakdown: list[CompanyCompliance] = field(default_factory=list)
    critical_alerts: list[ExpiryAlert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalEmployees": self.total_employees,
            "totalDocuments": self.total_documents,
            "documentsByStatus": dict(self.documents_by_status),
            "completionRate": self.completion_rate,
            "totalDailyFine": str(self.total_daily_exposure),
            "totalAccumulated": str(self.total_accumulated),
            "companyBreakdown": [c.to_dict() for c in self.company_breakdown],
            "criticalAlerts": [a.to_dict() for a in self.critical_alerts],
        }


@dataclass(frozen=True)
class ComplianceNotice:
    """
    Notification for a document that needs attention.

    dedupe_key identifies the notice for "already sent today" checks.
    """

    kind: NoticeKind
    title: str
    message: str
    employee_id: str
    document_type: str
    document_id: str | None
    dedupe_key: tuple[str, str, str, str]
