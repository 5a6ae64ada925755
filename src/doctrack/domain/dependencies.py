"""
Dependency evaluation.

A dependency rule says that one document type (the blocking document)
must be valid for another (the blocked document) to be issued or renewed.
An alert is raised purely from the urgency of the blocking document; the
blocked document's own status is not inspected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping

from doctrack.domain.compliance import EXPIRING_WINDOW_DAYS, days_until
from doctrack.domain.doc_types import DocTypeCatalog, display_name
from doctrack.domain.models import (
    AlertSeverity,
    DependencyAlert,
    DependencyRule,
    DocumentFact,
)


@dataclass(frozen=True)
class DocumentSnapshot:
    """What the evaluator needs to know about one document type."""

    expiry_date: date | None = None
    has_number: bool = False


def snapshot_documents(documents: Iterable[DocumentFact]) -> dict[str, DocumentSnapshot]:
    """
    Map document type -> snapshot.

    If an employee holds several documents of one type, the last one wins.
    """
    return {
        fact.document_type: DocumentSnapshot(fact.expiry_date, fact.has_number)
        for fact in documents
    }


def _iso(snapshot: DocumentSnapshot | None) -> str:
    if snapshot is None or snapshot.expiry_date is None:
        return ""
    return snapshot.expiry_date.isoformat()


def evaluate_rule(
    rule: DependencyRule,
    documents: Mapping[str, DocumentSnapshot],
    now: datetime | date,
    catalog: DocTypeCatalog | None = None,
) -> DependencyAlert | None:
    """
    Evaluate a single dependency rule.

    Returns:
        CRITICAL alert if the blocking document has expired,
        WARNING if it expires within 30 days, otherwise None.
        Rules whose blocking document has no expiry are skipped.
    """
    blocking = documents.get(rule.blocking_doc_type)
    if blocking is None or blocking.expiry_date is None:
        return None

    days = days_until(blocking.expiry_date, now)
    name = display_name(rule.blocking_doc_type, catalog)
    blocked = documents.get(rule.blocked_doc_type)

    if days < 0:
        severity = AlertSeverity.CRITICAL
        message = f"{name} has EXPIRED - {rule.description}"
    elif days <= EXPIRING_WINDOW_DAYS:
        severity = AlertSeverity.WARNING
        message = f"{name} expires in {days} days - {rule.description}"
    else:
        return None

    return DependencyAlert(
        severity=severity,
        blocking_doc=rule.blocking_doc_type,
        blocked_doc=rule.blocked_doc_type,
        message=message,
        blocking_expiry=_iso(blocking),
        blocked_expiry=_iso(blocked),
    )


def evaluate_dependencies(
    rules: Iterable[DependencyRule],
    documents: Mapping[str, DocumentSnapshot],
    now: datetime | date,
    catalog: DocTypeCatalog | None = None,
) -> list[DependencyAlert]:
    """
    Evaluate every rule for one employee.

    Args:
        rules: Configured dependency rules
        documents: Document type -> snapshot for the employee
        now: Current instant
        catalog: Optional catalog for display names in messages

    Returns:
        Alerts in rule order (stable for identical input)
    """
    alerts = []
    for rule in rules:
        alert = evaluate_rule(rule, documents, now, catalog)
        if alert is not None:
            alerts.append(alert)
    return alerts
