"""
Compliance Service - use cases over the compliance engine.

Every consumer (CLI tables, Excel export, notices) goes through this
service, which fetches DocumentFact snapshots from a provider, reads the
clock exactly once per call and hands both to the pure domain functions.

Architecture Note:
    - Depends on domain types, provider protocols and the Excel writer
    - No direct CLI coupling
    - Computes results fresh each time (no caching)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Protocol

from doctrack.domain.clock import Clock, SystemClock, to_day
from doctrack.domain.compliance import evaluate_document
from doctrack.domain.dependencies import evaluate_dependencies, snapshot_documents
from doctrack.domain.doc_types import DEFAULT_CATALOG, DocTypeCatalog
from doctrack.domain.models import (
    ComplianceNotice,
    ComplianceStats,
    ComplianceStatus,
    DependencyAlert,
    DependencyRule,
    DocumentCompliance,
    EmployeeDocuments,
    EmployeeRollup,
)
from doctrack.domain.notifications import build_notices, filter_unsent
from doctrack.domain.rollup import rollup_employee, summarize_compliance
from doctrack.infrastructure.excel_report import write_compliance_report

logger = logging.getLogger(__name__)


class EmployeeNotFoundError(LookupError):
    """Raised when an employee id is unknown (or the employee has exited)."""

    def __init__(self, employee_id: str):
        super().__init__(f"Employee not found: {employee_id}")
        self.employee_id = employee_id


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class DocumentProvider(Protocol):
    """Protocol for providing materialized document snapshots."""

    def get_employee_documents(self, employee_id: str) -> EmployeeDocuments | None:
        """Current documents of one active employee."""
        ...

    def list_employee_documents(self, company_id: str | None = None) -> list[EmployeeDocuments]:
        """Current documents of every active employee."""
        ...


class DependencyProvider(Protocol):
    """Protocol for providing dependency rules."""

    def list_dependencies(self) -> list[DependencyRule]:
        ...


class NoticeLog(Protocol):
    """Protocol for remembering which notices were already sent."""

    def sent_notice_keys(self, sent_on: date) -> set[tuple[str, str, str, str]]:
        ...

    def record_sent_notices(self, notices: Iterable[ComplianceNotice]) -> int:
        ...


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class EmployeeReport:
    """Everything known about one employee at one instant."""

    employee: EmployeeDocuments
    as_of: date
    documents: list[DocumentCompliance] = field(default_factory=list)
    rollup: EmployeeRollup = field(default_factory=EmployeeRollup)
    alerts: list[DependencyAlert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "employeeId": self.employee.employee_id,
            "employeeName": self.employee.employee_name,
            "companyName": self.employee.company_name,
            "asOf": self.as_of.isoformat(),
            "documents": [d.to_dict() for d in self.documents],
            "rollup": self.rollup.to_dict(),
            "dependencyAlerts": [a.to_dict() for a in self.alerts],
        }


@dataclass(frozen=True)
class EmployeeListItem:
    """One row of the employee list."""

    employee: EmployeeDocuments
    rollup: EmployeeRollup

    def to_dict(self) -> dict[str, Any]:
        data = self.rollup.to_dict()
        data.update({
            "employeeName": self.employee.employee_name,
            "companyName": self.employee.company_name,
        })
        return data


def mandatory_only(employee: EmployeeDocuments) -> EmployeeDocuments:
    """Copy of the bundle holding only its mandatory documents."""
    return replace(employee, documents=tuple(f for f in employee.documents if f.is_mandatory))


# =============================================================================
# Compliance Service
# =============================================================================


class ComplianceService:
    """
    Compliance use cases.

    Usage:
        service = ComplianceService(store, store, catalog=config.build_catalog())
        report = service.employee_report("e-123")
        stats = service.compliance_stats()

        # Reproducible output
        service = ComplianceService(store, store, clock=FixedClock(date(2025, 1, 31)))
    """

    def __init__(
        self,
        documents: DocumentProvider,
        dependencies: DependencyProvider | None = None,
        catalog: DocTypeCatalog | None = None,
        clock: Clock | None = None,
        notice_log: NoticeLog | None = None,
        alert_limit: int = 10,
    ):
        """
        Initialize compliance service.

        Args:
            documents: Source of DocumentFact snapshots
            dependencies: Source of dependency rules (None = no rules)
            catalog: Read-only document type catalog
            clock: Source of "now" (defaults to the system clock)
            notice_log: Sent-notice bookkeeping (None = every notice is new)
            alert_limit: Critical alerts kept in compliance_stats()
        """
        self.documents = documents
        self.dependencies = dependencies
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.clock = clock or SystemClock()
        self.notice_log = notice_log
        self.alert_limit = alert_limit

    def _now(self) -> datetime:
        return self.clock.now()

    def _load(self, employee_id: str) -> EmployeeDocuments:
        employee = self.documents.get_employee_documents(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def _rules(self) -> list[DependencyRule]:
        if self.dependencies is None:
            return []
        return list(self.dependencies.list_dependencies())

    # -------------------------------------------------------------------------
    # Single employee
    # -------------------------------------------------------------------------

    def employee_report(self, employee_id: str) -> EmployeeReport:
        """
        Evaluate every current document of an employee.

        Raises:
            EmployeeNotFoundError: Unknown or exited employee
        """
        employee = self._load(employee_id)
        now = self._now()

        documents = [evaluate_document(f, now, self.catalog) for f in employee.documents]
        # Mandatory first, then by type
        documents.sort(key=lambda d: (not d.fact.is_mandatory, d.fact.document_type))

        report = EmployeeReport(
            employee=employee,
            as_of=to_day(now),
            documents=documents,
            rollup=rollup_employee(mandatory_only(employee).documents, now, employee_id),
            alerts=evaluate_dependencies(
                self._rules(),
                snapshot_documents(mandatory_only(employee).documents),
                now,
                self.catalog,
            ),
        )
        logger.info(
            "Employee %s evaluated: %s (%d documents, %d alerts)",
            employee_id, report.rollup.compliance_status.value,
            len(documents), len(report.alerts),
        )
        return report

    def employee_rollup(self, employee_id: str) -> EmployeeRollup:
        employee = self._load(employee_id)
        return rollup_employee(mandatory_only(employee).documents, self._now(), employee_id)

    def dependency_alerts(self, employee_id: str) -> list[DependencyAlert]:
        """Dependency alerts for one employee, in rule order."""
        employee = self._load(employee_id)
        return evaluate_dependencies(
            self._rules(),
            snapshot_documents(mandatory_only(employee).documents),
            self._now(),
            self.catalog,
        )

    # -------------------------------------------------------------------------
    # Bulk
    # -------------------------------------------------------------------------

    def list_rollups(
        self, status: str | None = None, company_id: str | None = None
    ) -> list[EmployeeListItem]:
        """
        Roll up every active employee.

        Args:
            status: Optional status filter; accepts the status values and
                    the aliases expiring / expired / active
            company_id: Optional company filter

        Raises:
            ValueError: Unknown status filter
        """
        wanted = None
        if status:
            wanted = ComplianceStatus.from_string(status)
            if wanted is None:
                raise ValueError(f"Unknown status filter: {status}")

        now = self._now()
        items = []
        for employee in self.documents.list_employee_documents(company_id):
            rollup = rollup_employee(mandatory_only(employee).documents, now, employee.employee_id)
            if wanted is not None and rollup.compliance_status.value != wanted.value:
                continue
            items.append(EmployeeListItem(employee, rollup))

        logger.debug("Listed %d employees (filter: %s)", len(items), status or "none")
        return items

    def compliance_stats(self, company_id: str | None = None) -> ComplianceStats:
        """Company-level overview over mandatory documents."""
        employees = [mandatory_only(e) for e in self.documents.list_employee_documents(company_id)]
        stats = summarize_compliance(
            employees, self._now(), self.catalog, alert_limit=self.alert_limit
        )
        logger.info(
            "Compliance stats: %d employees, %d documents, %.2f%% complete",
            stats.total_employees, stats.total_documents, stats.completion_rate,
        )
        return stats

    # -------------------------------------------------------------------------
    # Notices
    # -------------------------------------------------------------------------

    def notices(self, only_unsent: bool = True) -> list[ComplianceNotice]:
        """Today's notices for every current document needing attention."""
        now = self._now()
        employees = self.documents.list_employee_documents()
        notices = build_notices(employees, now, self.catalog)

        if only_unsent and self.notice_log is not None:
            sent = self.notice_log.sent_notice_keys(to_day(now))
            notices = filter_unsent(notices, sent)
        return notices

    def mark_notices_sent(self, notices: Iterable[ComplianceNotice]) -> int:
        if self.notice_log is None:
            return 0
        written = self.notice_log.record_sent_notices(notices)
        logger.info("Recorded %d sent notices", written)
        return written

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_report(self, output_path: Path, organization: str = "") -> Path:
        """Write the Excel workbook for all active employees."""
        now = self._now()
        employees = [mandatory_only(e) for e in self.documents.list_employee_documents()]
        stats = summarize_compliance(employees, now, self.catalog, alert_limit=self.alert_limit)
        return write_compliance_report(
            employees, stats, now, output_path, self.catalog, organization
        )
