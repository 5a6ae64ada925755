"""
Compliance notices.

Builds the daily "needs attention" notices for documents that are
expiring, in grace, or accruing fines. Delivery and scheduling belong to
the caller; this module only decides what to say.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Iterable

from doctrack.domain.clock import to_day
from doctrack.domain.compliance import evaluate_document
from doctrack.domain.doc_types import DocTypeCatalog
from doctrack.domain.models import (
    ComplianceNotice,
    ComplianceStatus,
    EmployeeDocuments,
    NoticeKind,
)


def build_notices(
    employees: Iterable[EmployeeDocuments],
    now: datetime | date,
    catalog: DocTypeCatalog | None = None,
) -> list[ComplianceNotice]:
    """
    Build one notice per document needing attention.

    Valid and incomplete documents produce no notice.
    """
    today = to_day(now).isoformat()
    notices = []

    for emp in employees:
        who = f"{emp.employee_name} ({emp.company_name})"
        for fact in emp.documents:
            result = evaluate_document(fact, now, catalog)
            name = result.display_name
            metrics = result.metrics

            if result.status is ComplianceStatus.PENALTY_ACTIVE:
                kind = NoticeKind.PENALTY
                title = f"{name} - PENALTY ACTIVE"
                message = (
                    f"{who}: {name} expired {-(metrics.days_remaining or 0)} days ago. "
                    f"Estimated fine: {metrics.estimated_fine:.0f} {emp.currency}."
                )
            elif result.status is ComplianceStatus.IN_GRACE:
                kind = NoticeKind.GRACE
                title = f"{name} - In Grace Period"
                message = (
                    f"{who}: {name} grace period active. "
                    f"Renew within {metrics.grace_days_remaining or 0} days to avoid fines."
                )
            elif result.status is ComplianceStatus.EXPIRING_SOON:
                kind = NoticeKind.EXPIRING
                title = f"{name} - Expiring Soon"
                message = (
                    f"{who}: {name} expires in {metrics.days_remaining} days. "
                    "Please renew promptly."
                )
            else:
                continue

            notices.append(
                ComplianceNotice(
                    kind=kind,
                    title=title,
                    message=message,
                    employee_id=emp.employee_id,
                    document_type=fact.document_type,
                    document_id=fact.document_id,
                    dedupe_key=(
                        emp.employee_id,
                        fact.document_type,
                        fact.document_id or "",
                        today,
                    ),
                )
            )
    return notices


def filter_unsent(
    notices: Iterable[ComplianceNotice],
    sent_keys: Collection[tuple[str, str, str, str]],
) -> list[ComplianceNotice]:
    """Drop notices whose dedupe key was already sent."""
    return [n for n in notices if n.dedupe_key not in sent_keys]
