"""
Tests for compliance notices.
"""

from datetime import timedelta

from conftest import TODAY, make_fact
from doctrack.domain.models import EmployeeDocuments, FineType, NoticeKind
from doctrack.domain.notifications import build_notices, filter_unsent


def days(n: int):
    return TODAY + timedelta(days=n)


def employee(*facts):
    return EmployeeDocuments("e1", "Ahmed", "c1", "Alpha Trading", "AED", tuple(facts))


class TestBuildNotices:
    """Test cases for build_notices."""

    def test_kinds(self):
        notices = build_notices([employee(
            make_fact("visa", days(-10), fine_per_day=50, document_id="d1"),
            make_fact("emirates_id", days(-5), grace_period_days=30, document_id="d2"),
            make_fact("passport", days(20), document_id="d3"),
            make_fact("work_permit", days(200), document_id="d4"),
            make_fact("iloe_insurance", None, document_id="d5"),
        )], TODAY)

        assert [n.kind for n in notices] == [NoticeKind.PENALTY, NoticeKind.GRACE, NoticeKind.EXPIRING]

    def test_penalty_message(self):
        (notice,) = build_notices([employee(make_fact("visa", days(-10), fine_per_day=50))], TODAY)
        assert notice.title == "Residence Visa - PENALTY ACTIVE"
        assert "expired 10 days ago" in notice.message
        assert "Estimated fine: 500 AED" in notice.message
        assert "Ahmed (Alpha Trading)" in notice.message

    def test_grace_message(self):
        (notice,) = build_notices([employee(
            make_fact("emirates_id", days(-5), grace_period_days=30)
        )], TODAY)
        assert "Renew within 25 days" in notice.message

    def test_expiring_message(self):
        (notice,) = build_notices([employee(
            make_fact("work_permit", days(7), fine_type=FineType.ONE_TIME)
        )], TODAY)
        assert "expires in 7 days" in notice.message

    def test_dedupe_key(self):
        (notice,) = build_notices([employee(make_fact("passport", days(3), document_id="d9"))], TODAY)
        assert notice.dedupe_key == ("e1", "passport", "d9", TODAY.isoformat())


class TestFilterUnsent:
    """Test cases for filter_unsent."""

    def test_drops_sent(self):
        notices = build_notices([employee(
            make_fact("passport", days(3), document_id="d1"),
            make_fact("visa", days(4), document_id="d2"),
        )], TODAY)
        sent = {("e1", "passport", "d1", TODAY.isoformat())}
        remaining = filter_unsent(notices, sent)
        assert [n.document_type for n in remaining] == ["visa"]

    def test_other_day_not_filtered(self):
        notices = build_notices([employee(make_fact("passport", days(3), document_id="d1"))], TODAY)
        sent = {("e1", "passport", "d1", days(-1).isoformat())}
        assert filter_unsent(notices, sent) == notices
