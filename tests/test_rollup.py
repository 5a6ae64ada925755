"""
Tests for employee rollups and company-level statistics.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import TODAY, make_fact
from doctrack.domain.compliance import compute_status
from doctrack.domain.models import (
    ComplianceStatus,
    DocumentFact,
    EmployeeDocuments,
    FineType,
    RollupStatus,
)
from doctrack.domain.rollup import (
    SEVERITY_ORDER,
    rollup_employee,
    rollup_many,
    summarize_compliance,
    worst_status,
)


def days(n: int):
    return TODAY + timedelta(days=n)


class TestWorstStatus:
    """Test cases for worst-of aggregation."""

    def test_empty_is_none(self):
        assert worst_status([]) is RollupStatus.NONE

    def test_severity_order_is_respected(self):
        for i, worse in enumerate(SEVERITY_ORDER):
            for better in SEVERITY_ORDER[i + 1:]:
                assert worst_status([better, worse]).value == worse.value
                assert worst_status([worse, better]).value == worse.value

    def test_accepts_rollup_statuses(self):
        statuses = [RollupStatus.NONE, RollupStatus.VALID, RollupStatus.IN_GRACE]
        assert worst_status(statuses) is RollupStatus.IN_GRACE


class TestRollupEmployee:
    """Test cases for rollup_employee."""

    def test_no_documents(self):
        rollup = rollup_employee([], TODAY, "e1")
        assert rollup.employee_id == "e1"
        assert rollup.compliance_status is RollupStatus.NONE
        assert rollup.docs_total == 0
        assert rollup.docs_complete == 0
        assert rollup.nearest_expiry_days is None
        assert rollup.urgent_doc_type is None

    def test_one_penalty_among_valid(self):
        docs = [make_fact("passport", days(400)), make_fact("visa", days(300))]
        docs.append(make_fact("emirates_id", days(-5)))
        rollup = rollup_employee(docs, TODAY)
        assert rollup.compliance_status is RollupStatus.PENALTY_ACTIVE
        assert rollup.expired_count == 1

    def test_counts(self):
        docs = [
            make_fact("passport", days(400)),
            make_fact("visa", days(20)),
            make_fact("emirates_id", days(-10), grace_period_days=30),
            make_fact("work_permit", None),
            make_fact("iloe_insurance", days(90), document_number=""),
        ]
        rollup = rollup_employee(docs, TODAY, "e1")
        assert rollup.compliance_status is RollupStatus.IN_GRACE
        assert rollup.docs_total == 5
        assert rollup.docs_complete == 3
        assert rollup.expired_count == 0
        assert rollup.expiring_count == 1
        assert rollup.nearest_expiry_days == -10
        assert rollup.urgent_doc_type == "emirates_id"

    def test_missing_expiry_never_urgent(self):
        rollup = rollup_employee([make_fact("passport", None)], TODAY)
        assert rollup.compliance_status is RollupStatus.INCOMPLETE
        assert rollup.nearest_expiry_days is None
        assert rollup.urgent_doc_type is None
        assert rollup.docs_total == 1

    def test_tie_resolves_to_lowest_type_key(self):
        docs = [make_fact("visa", days(12)), make_fact("passport", days(12))]
        first = rollup_employee(docs, TODAY)
        second = rollup_employee(list(reversed(docs)), TODAY)
        assert first.urgent_doc_type == "passport"
        assert second.urgent_doc_type == "passport"
        assert first == second

    def test_incomplete_counts_missing_number(self):
        rollup = rollup_employee([make_fact("passport", days(200), document_number=None)], TODAY)
        assert rollup.docs_complete == 0
        assert rollup.compliance_status is RollupStatus.INCOMPLETE

    def test_blank_number_counts_as_missing(self):
        rollup = rollup_employee([make_fact("passport", days(200), document_number="   ")], TODAY)
        assert rollup.docs_complete == 0
        assert rollup.compliance_status is RollupStatus.INCOMPLETE


class TestBulkAgreement:
    """The bulk path must agree with the single-employee path."""

    def test_rollup_many_matches_single(self):
        employees = [
            EmployeeDocuments("e1", "A", documents=(make_fact("passport", days(-3)),)),
            EmployeeDocuments("e2", "B", documents=(make_fact("visa", days(10)),)),
            EmployeeDocuments("e3", "C"),
        ]
        bulk = rollup_many(employees, TODAY)
        single = [rollup_employee(e.documents, TODAY, e.employee_id) for e in employees]
        assert bulk == single

    def test_stats_status_counts_match_status_resolver(self):
        facts = [make_fact("passport", days(n), grace_period_days=g) for n in (-40, -5, 0, 5, 45) for g in (0, 10)]
        employees = [EmployeeDocuments("e1", "A", "c1", "Co", documents=tuple(facts))]
        stats = summarize_compliance(employees, TODAY)

        expected = {}
        for f in facts:
            status = compute_status(f.expiry_date, f.grace_period_days, f.document_number, TODAY).value
            expected[status] = expected.get(status, 0) + 1
        assert stats.documents_by_status == expected


class TestSummarizeCompliance:
    """Test cases for company-level statistics."""

    @pytest.fixture
    def employees(self):
        return [
            EmployeeDocuments(
                "e1", "Ahmed", "c1", "Alpha Trading", documents=(
                    make_fact("visa", days(-10), fine_per_day=50),
                    make_fact("emirates_id", days(-40), grace_period_days=30,
                              fine_per_day=20, fine_cap=1000),
                    make_fact("passport", days(400)),
                ),
            ),
            EmployeeDocuments(
                "e2", "Bina", "c2", "Beta Services", documents=(
                    make_fact("passport", None),
                    make_fact("work_permit", days(5), fine_per_day=500,
                              fine_type=FineType.ONE_TIME, fine_cap=500),
                ),
            ),
            EmployeeDocuments(
                "e3", "Carlos", "c2", "Beta Services", documents=(
                    make_fact("passport", days(365)),
                ),
            ),
        ]

    def test_totals(self, employees):
        stats = summarize_compliance(employees, TODAY)
        assert stats.total_employees == 3
        assert stats.total_documents == 6
        assert stats.documents_by_status == {
            "penalty_active": 2,
            "valid": 2,
            "incomplete": 1,
            "expiring_soon": 1,
        }
        assert stats.completion_rate == pytest.approx(83.33)

    def test_fines(self, employees):
        stats = summarize_compliance(employees, TODAY)
        # visa: 10 days x 50, emirates id: 10 penalty days x 20
        assert stats.total_accumulated == Decimal("700.00")
        assert stats.total_daily_exposure == Decimal("70.00")

    def test_company_breakdown(self, employees):
        stats = summarize_compliance(employees, TODAY)
        alpha, beta = stats.company_breakdown
        assert alpha.company_name == "Alpha Trading"
        assert alpha.penalty_count == 2
        assert alpha.employee_count == 1
        assert alpha.compliance_status is RollupStatus.PENALTY_ACTIVE
        assert alpha.accumulated_fines == Decimal("700.00")
        assert beta.employee_count == 2
        assert beta.incomplete_count == 1
        assert beta.penalty_count == 0
        assert beta.compliance_status is RollupStatus.EXPIRING_SOON

    def test_critical_alerts_sorted_and_limited(self, employees):
        stats = summarize_compliance(employees, TODAY)
        assert [a.days_left for a in stats.critical_alerts] == [-40, -10, 5]
        assert stats.critical_alerts[0].status is ComplianceStatus.PENALTY_ACTIVE

        limited = summarize_compliance(employees, TODAY, alert_limit=1)
        assert len(limited.critical_alerts) == 1
        assert limited.critical_alerts[0].document_type == "emirates_id"

    def test_empty(self):
        stats = summarize_compliance([], TODAY)
        assert stats.total_documents == 0
        assert stats.completion_rate == 0.0
        assert stats.company_breakdown == []

    def test_to_dict(self, employees):
        data = summarize_compliance(employees, TODAY).to_dict()
        assert data["totalAccumulated"] == "700.00"
        assert data["companyBreakdown"][0]["companyName"] == "Alpha Trading"

    def test_float_rate_is_accepted(self):
        visa = DocumentFact(
            "visa", "V-1", expiry_date=days(-5), fine_per_day=50.0, is_mandatory=True
        )
        stats = summarize_compliance(
            [EmployeeDocuments("e1", "Ravi Kumar", "c1", "Alpha Trading", "AED", (visa,))],
            TODAY,
        )
        assert stats.total_accumulated == Decimal("250.00")
        assert stats.total_daily_exposure == Decimal("50")
        assert stats.company_breakdown[0].daily_exposure == Decimal("50")
        assert stats.critical_alerts[0].fine_per_day == Decimal("50")
        assert isinstance(stats.critical_alerts[0].fine_per_day, Decimal)
