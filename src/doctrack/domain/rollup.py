"""
Rollup aggregation.

Combines per-document results into one employee-level posture, and
employee bundles into company-level statistics.

Architecture Note:
    - Every row goes through compliance.compute_status / compute_fine;
      there is no second copy of the severity ladder here
    - Pure domain logic - no I/O
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from doctrack.domain.compliance import (
    compute_status,
    days_remaining,
    evaluate_document,
    is_expiring,
    is_penalty_threshold,
    round_money,
    to_decimal,
)
from doctrack.domain.doc_types import DocTypeCatalog
from doctrack.domain.models import (
    CompanyCompliance,
    ComplianceStats,
    ComplianceStatus,
    DocumentFact,
    EmployeeDocuments,
    EmployeeRollup,
    ExpiryAlert,
    FineType,
    RollupStatus,
)

# Worst first
SEVERITY_ORDER: tuple[ComplianceStatus, ...] = (
    ComplianceStatus.PENALTY_ACTIVE,
    ComplianceStatus.IN_GRACE,
    ComplianceStatus.EXPIRING_SOON,
    ComplianceStatus.INCOMPLETE,
    ComplianceStatus.VALID,
)


def worst_status(statuses: Iterable[ComplianceStatus | RollupStatus]) -> RollupStatus:
    """
    Return the worst status present.

    NONE when the input is empty (or only contains NONE).
    """
    worst = RollupStatus.NONE
    for status in statuses:
        candidate = (
            status
            if isinstance(status, RollupStatus)
            else RollupStatus.from_document_status(status)
        )
        if candidate.severity > worst.severity:
            worst = candidate
    return worst


def rollup_employee(
    documents: Iterable[DocumentFact],
    now: datetime | date,
    employee_id: str | None = None,
) -> EmployeeRollup:
    """
    Aggregate one employee's mandatory documents.

    Args:
        documents: The employee's mandatory DocumentFacts
        now: Current instant
        employee_id: Optional id carried into the result

    Returns:
        EmployeeRollup; an empty document set yields status NONE
        and zero counts
    """
    docs = list(documents)
    if not docs:
        return EmployeeRollup(employee_id=employee_id)

    statuses = []
    complete = 0
    expired = 0
    expiring = 0
    nearest: tuple[int, str] | None = None

    for fact in docs:
        statuses.append(
            compute_status(
                fact.expiry_date, fact.grace_period_days, fact.document_number, now
            )
        )
        if fact.is_complete:
            complete += 1
        if is_penalty_threshold(fact.expiry_date, fact.grace_period_days, now):
            expired += 1
        if is_expiring(fact.expiry_date, now):
            expiring += 1

        remaining = days_remaining(fact.expiry_date, now)
        if remaining is not None:
            # Ties resolve to the lowest type key
            candidate = (remaining, fact.document_type)
            if nearest is None or candidate < nearest:
                nearest = candidate

    return EmployeeRollup(
        employee_id=employee_id,
        compliance_status=worst_status(statuses),
        docs_complete=complete,
        docs_total=len(docs),
        expired_count=expired,
        expiring_count=expiring,
        nearest_expiry_days=nearest[0] if nearest else None,
        urgent_doc_type=nearest[1] if nearest else None,
    )


def rollup_many(
    employees: Iterable[EmployeeDocuments],
    now: datetime | date,
) -> list[EmployeeRollup]:
    """Bulk path: one rollup per employee, same rules as rollup_employee."""
    return [rollup_employee(emp.documents, now, emp.employee_id) for emp in employees]


def summarize_compliance(
    employees: Iterable[EmployeeDocuments],
    now: datetime | date,
    catalog: DocTypeCatalog | None = None,
    *,
    alert_limit: int = 10,
) -> ComplianceStats:
    """
    Build the company-level compliance overview.

    Args:
        employees: Employee bundles with their mandatory documents
        now: Current instant
        catalog: Optional catalog (display names only)
        alert_limit: Maximum number of critical alerts to keep

    Returns:
        ComplianceStats. Amounts in different currencies are summed as-is.
    """
    stats = ComplianceStats()
    by_status: Counter[str] = Counter()
    companies: dict[str | None, CompanyCompliance] = {}
    company_rollups: dict[str | None, list[RollupStatus]] = {}
    alerts: list[ExpiryAlert] = []
    not_incomplete = 0
    daily_exposure = Decimal("0")
    accumulated = Decimal("0")

    for emp in employees:
        stats.total_employees += 1
        company = companies.get(emp.company_id)
        if company is None:
            company = CompanyCompliance(
                company_id=emp.company_id, company_name=emp.company_name
            )
            companies[emp.company_id] = company
            company_rollups[emp.company_id] = []
        company.employee_count += 1

        rollup = rollup_employee(emp.documents, now, emp.employee_id)
        company_rollups[emp.company_id].append(rollup.compliance_status)

        for fact in emp.documents:
            result = evaluate_document(fact, now, catalog)
            stats.total_documents += 1
            by_status[result.status.value] += 1

            if result.status is not ComplianceStatus.INCOMPLETE:
                not_incomplete += 1
            if not fact.is_complete:
                company.incomplete_count += 1

            if result.status is ComplianceStatus.PENALTY_ACTIVE:
                company.penalty_count += 1
                fine = result.metrics.estimated_fine
                accumulated += fine
                company.accumulated_fines += fine
                # Only daily-type fines grow every day
                if FineType.from_string(fact.fine_type) is FineType.DAILY:
                    rate = to_decimal(fact.fine_per_day)
                    daily_exposure += rate
                    company.daily_exposure += rate

            if result.status.is_urgent() and fact.expiry_date is not None:
                alerts.append(
                    ExpiryAlert(
                        employee_id=emp.employee_id,
                        employee_name=emp.employee_name,
                        company_name=emp.company_name,
                        document_type=fact.document_type,
                        expiry_date=fact.expiry_date.isoformat(),
                        days_left=result.metrics.days_remaining or 0,
                        status=result.status,
                        estimated_fine=result.metrics.estimated_fine,
                        fine_per_day=to_decimal(fact.fine_per_day),
                        document_id=fact.document_id,
                    )
                )

    for company_id, company in companies.items():
        company.compliance_status = worst_status(company_rollups[company_id])
        company.daily_exposure = round_money(company.daily_exposure)
        company.accumulated_fines = round_money(company.accumulated_fines)

    stats.documents_by_status = dict(by_status)
    if stats.total_documents > 0:
        stats.completion_rate = round(not_incomplete / stats.total_documents * 100, 2)
    stats.total_daily_exposure = round_money(daily_exposure)
    stats.total_accumulated = round_money(accumulated)
    stats.company_breakdown = sorted(
        companies.values(), key=lambda c: (-c.penalty_count, c.company_name)
    )
    alerts.sort(key=lambda a: (a.days_left, a.employee_name, a.document_type))
    stats.critical_alerts = alerts[:alert_limit]
    return stats
