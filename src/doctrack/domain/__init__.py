"""
Domain layer package.

Contains the pure compliance engine and its data models, with no I/O
dependencies. Models can be serialized to/from SQLite via the
infrastructure layer.
"""

from doctrack.domain.models import (
    # Enums
    ComplianceStatus,
    RollupStatus,
    FineType,
    AlertSeverity,
    NoticeKind,
    # Core Models
    DocumentFact,
    ComplianceMetrics,
    DocumentCompliance,
    EmployeeRollup,
    DependencyRule,
    DependencyAlert,
    # Aggregation
    EmployeeDocuments,
    ExpiryAlert,
    CompanyCompliance,
    ComplianceStats,
    ComplianceNotice,
)

from doctrack.domain.clock import Clock, SystemClock, FixedClock, to_day

from doctrack.domain.doc_types import (
    DocTypeEntry,
    DocTypeCatalog,
    DEFAULT_CATALOG,
    MANDATORY_DOCS,
    display_name,
    is_mandatory_type,
)

from doctrack.domain.compliance import (
    compute_status,
    compute_fine,
    compute_metrics,
    days_remaining,
    grace_days_remaining,
    days_in_penalty,
    evaluate_document,
)

from doctrack.domain.rollup import (
    worst_status,
    rollup_employee,
    rollup_many,
    summarize_compliance,
)

from doctrack.domain.dependencies import (
    DocumentSnapshot,
    snapshot_documents,
    evaluate_dependencies,
)

from doctrack.domain.notifications import build_notices, filter_unsent

__all__ = [
    # Enums
    "ComplianceStatus",
    "RollupStatus",
    "FineType",
    "AlertSeverity",
    "NoticeKind",
    # Core Models
    "DocumentFact",
    "ComplianceMetrics",
    "DocumentCompliance",
    "EmployeeRollup",
    "DependencyRule",
    "DependencyAlert",
    "EmployeeDocuments",
    "ExpiryAlert",
    "CompanyCompliance",
    "ComplianceStats",
    "ComplianceNotice",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    "to_day",
    # Display Namer
    "DocTypeEntry",
    "DocTypeCatalog",
    "DEFAULT_CATALOG",
    "MANDATORY_DOCS",
    "display_name",
    "is_mandatory_type",
    # Engine Functions
    "compute_status",
    "compute_fine",
    "compute_metrics",
    "days_remaining",
    "grace_days_remaining",
    "days_in_penalty",
    "evaluate_document",
    "worst_status",
    "rollup_employee",
    "rollup_many",
    "summarize_compliance",
    "DocumentSnapshot",
    "snapshot_documents",
    "evaluate_dependencies",
    "build_notices",
    "filter_unsent",
]
