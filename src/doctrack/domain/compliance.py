"""
Compliance engine for UAE employee documents.

This module provides THE authoritative logic for deriving a document's
compliance status, its time metrics and its accumulated fine. Every
consumer (single-document views, employee lists, dashboards, notices)
MUST go through these functions rather than re-deriving the rules.

Architecture Note:
    - Pure domain logic - no I/O, no database calls, no clock reads
    - "now" is always passed in by the caller
    - Total over its input domain: edge cases fall back, never raise
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from doctrack.domain.clock import to_day
from doctrack.domain.doc_types import DocTypeCatalog, display_name
from doctrack.domain.models import (
    ComplianceMetrics,
    ComplianceStatus,
    DocumentCompliance,
    DocumentFact,
    FineType,
)

logger = logging.getLogger(__name__)

EXPIRING_WINDOW_DAYS = 30
MONTH_LENGTH_DAYS = 30

_CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce a money value to Decimal (None -> 0)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def days_until(expiry_date: date, now: datetime | date) -> int:
    """Signed whole days from today to expiry (negative = overdue)."""
    return (to_day(expiry_date) - to_day(now)).days


# =============================================================================
# Status Resolver
# =============================================================================


def is_penalty_threshold(
    expiry_date: date | None,
    grace_days: int,
    now: datetime | date,
) -> bool:
    """
    Check whether a document is expired with no grace left.

    True when expired and either there is no grace period or it has
    elapsed. The last grace day itself is still grace.
    """
    if expiry_date is None:
        return False
    days = days_until(expiry_date, now)
    return days <= 0 and (grace_days == 0 or -days > grace_days)


def is_expiring(expiry_date: date | None, now: datetime | date) -> bool:
    """Check whether expiry falls within the next 30 days (exclusive of today)."""
    if expiry_date is None:
        return False
    return 0 < days_until(expiry_date, now) <= EXPIRING_WINDOW_DAYS


def compute_status(
    expiry_date: date | None,
    grace_days: int,
    document_number: str | None,
    now: datetime | date,
) -> ComplianceStatus:
    """
    Derive the compliance status of a document.

    Args:
        expiry_date: Document expiry (None -> incomplete)
        grace_days: Grace period in days after expiry before fines start
        document_number: Identification number (empty -> incomplete)
        now: Current instant (only its calendar day is used)

    Returns:
        Exactly one ComplianceStatus

    Rules (severity-first, order matters):
        1. No expiry date -> INCOMPLETE
        2. Expired, no grace or grace elapsed -> PENALTY_ACTIVE
        3. Expired, within grace (boundary day included) -> IN_GRACE
        4. Expires within 30 days -> EXPIRING_SOON
        5. Missing document number -> INCOMPLETE
        6. Otherwise -> VALID
    """
    if expiry_date is None:
        return ComplianceStatus.INCOMPLETE

    days = days_until(expiry_date, now)

    # Severity checks come before the document-number check so an
    # urgent document is never masked as merely incomplete.
    if days <= 0 and (grace_days == 0 or -days > grace_days):
        return ComplianceStatus.PENALTY_ACTIVE
    if days <= 0 and grace_days > 0 and -days <= grace_days:
        return ComplianceStatus.IN_GRACE
    if 0 < days <= EXPIRING_WINDOW_DAYS:
        return ComplianceStatus.EXPIRING_SOON

    if not document_number or not document_number.strip():
        return ComplianceStatus.INCOMPLETE
    return ComplianceStatus.VALID


# =============================================================================
# Time Metrics
# =============================================================================


def days_remaining(expiry_date: date | None, now: datetime | date) -> int | None:
    """Days until expiry. Positive = left, negative = overdue, None = no expiry."""
    if expiry_date is None:
        return None
    return days_until(expiry_date, now)


def grace_days_remaining(
    expiry_date: date | None,
    grace_days: int,
    now: datetime | date,
) -> int | None:
    """
    Remaining grace days.

    None unless today lies within [expiry, expiry + grace_days].
    """
    if expiry_date is None or grace_days <= 0:
        return None

    today = to_day(now)
    expiry = to_day(expiry_date)
    grace_end = expiry + timedelta(days=grace_days)

    if today < expiry or today > grace_end:
        return None
    return (grace_end - today).days


def days_in_penalty(
    expiry_date: date | None,
    grace_days: int,
    now: datetime | date,
) -> int | None:
    """
    Days elapsed since the penalty started.

    None if there is no expiry or today is on/before expiry + grace_days.
    """
    if expiry_date is None:
        return None

    today = to_day(now)
    penalty_start = to_day(expiry_date) + timedelta(days=grace_days)

    if today <= penalty_start:
        return None
    return (today - penalty_start).days


# =============================================================================
# Fine Calculator
# =============================================================================


def compute_fine(
    expiry_date: date | None,
    grace_days: int,
    fine_per_day: Decimal | float | int | str | None,
    fine_type: FineType | str | None,
    fine_cap: Decimal | float | int | str | None,
    now: datetime | date,
) -> Decimal:
    """
    Calculate the estimated accumulated fine for a document.

    Args:
        expiry_date: When the document expired
        grace_days: Grace period (fine starts AFTER grace ends)
        fine_per_day: Rate (daily amount, monthly amount, or one-time flat)
        fine_type: "daily" | "monthly" | "one_time" (unknown -> daily)
        fine_cap: Maximum fine (0 = uncapped)
        now: Current instant

    Returns:
        Non-negative Decimal rounded to 2 places
    """
    rate = to_decimal(fine_per_day)
    if expiry_date is None or rate <= 0:
        return ZERO

    today = to_day(now)
    penalty_start = to_day(expiry_date) + timedelta(days=grace_days)
    if today <= penalty_start:
        return ZERO

    penalty_days = (today - penalty_start).days
    if penalty_days <= 0:
        return ZERO

    kind = FineType.from_string(fine_type)
    if kind is FineType.MONTHLY:
        months = math.ceil(penalty_days / MONTH_LENGTH_DAYS)
        fine = rate * months
    elif kind is FineType.ONE_TIME:
        fine = rate
    else:
        if kind is None:
            logger.debug("Unknown fine type %r - using daily formula", fine_type)
        fine = rate * penalty_days

    cap = to_decimal(fine_cap)
    if cap > 0 and fine > cap:
        fine = cap

    return round_money(fine)


# =============================================================================
# Per-document evaluation
# =============================================================================


def compute_metrics(
    fact: DocumentFact,
    status: ComplianceStatus,
    now: datetime | date,
) -> ComplianceMetrics:
    """Derive all metrics for one document from a single "now"."""
    expiry = fact.expiry_date
    grace = fact.grace_period_days

    fine = ZERO
    if expiry is not None and status is ComplianceStatus.PENALTY_ACTIVE:
        fine = compute_fine(
            expiry, grace, fact.fine_per_day, fact.fine_type, fact.fine_cap, now
        )

    return ComplianceMetrics(
        days_remaining=days_remaining(expiry, now),
        grace_days_remaining=grace_days_remaining(expiry, grace, now),
        days_in_penalty=days_in_penalty(expiry, grace, now),
        estimated_fine=fine,
    )


def evaluate_document(
    fact: DocumentFact,
    now: datetime | date,
    catalog: DocTypeCatalog | None = None,
) -> DocumentCompliance:
    """
    Evaluate one document: status, metrics and display name.

    Args:
        fact: Document snapshot with effective grace/fine values
        now: Current instant, read once by the caller
        catalog: Optional catalog for display names

    Returns:
        DocumentCompliance with mutually consistent fields
    """
    status = compute_status(
        fact.expiry_date, fact.grace_period_days, fact.document_number, now
    )
    return DocumentCompliance(
        fact=fact,
        status=status,
        metrics=compute_metrics(fact, status, now),
        display_name=display_name(fact.document_type, catalog),
    )
