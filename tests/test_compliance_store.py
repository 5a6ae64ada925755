"""
Tests for the SQLite compliance store.

Uses an in-memory database; covers slot creation, effective schedule
resolution, renewals, dependencies, notices and JSON import.
"""

import sqlite3
from datetime import date, timedelta
from decimal import Decimal

import pytest

from conftest import TODAY
from doctrack.domain.config import ComplianceConfig
from doctrack.domain.doc_types import DEFAULT_CATALOG, DocTypeCatalog
from doctrack.domain.models import DependencyRule, FineType, NoticeKind, ComplianceNotice
from doctrack.infrastructure.sqlite import SCHEMA_VERSION, ComplianceStore


def days(n: int) -> date:
    return TODAY + timedelta(days=n)


@pytest.fixture
def store():
    store = ComplianceStore(":memory:")
    store.initialize_schema()
    yield store
    store.close()


@pytest.fixture
def seeded_store(store):
    store.seed_from_config(ComplianceConfig())
    return store


@pytest.fixture
def company_id(store):
    return store.add_company("Alpha Trading LLC", company_id="c1")


def facts_by_type(store, employee_id):
    bundle = store.get_employee_documents(employee_id)
    return {f.document_type: f for f in bundle.documents}


class TestSchema:
    """Test cases for schema initialization."""

    def test_initialize_is_idempotent(self, store):
        store.initialize_schema()
        row = store._get_connection().execute(
            "SELECT value FROM schema_meta WHERE key = 'version'"
        ).fetchone()
        assert row["value"] == str(SCHEMA_VERSION)

    def test_file_database(self, tmp_path):
        path = tmp_path / "nested" / "doctrack.db"
        file_store = ComplianceStore(path)
        file_store.initialize_schema()
        file_store.add_company("Alpha")
        file_store.close()
        assert path.exists()

        reopened = ComplianceStore(path)
        assert len(reopened.list_companies()) == 1
        reopened.close()


class TestCompaniesAndEmployees:
    """Test cases for company and employee operations."""

    def test_add_company(self, store):
        company_id = store.add_company("Beta Services", currency="aed")
        company = store.get_company(company_id)
        assert company["name"] == "Beta Services"
        assert company["currency"] == "AED"
        assert store.find_company_by_name(" Beta Services ")["id"] == company_id

    def test_company_name_required(self, store):
        with pytest.raises(ValueError):
            store.add_company("  ")

    def test_employee_gets_mandatory_slots_from_catalog(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar", DEFAULT_CATALOG)
        facts = facts_by_type(store, employee_id)

        assert set(facts) == set(DEFAULT_CATALOG.mandatory_types)
        eid = facts["emirates_id"]
        assert eid.expiry_date is None
        assert eid.is_mandatory
        assert eid.grace_period_days == 30
        assert eid.fine_per_day == Decimal("20")

    def test_empty_catalog_creates_no_slots(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar", DocTypeCatalog(()))
        assert store.get_employee_documents(employee_id).documents == ()

    def test_employee_gets_slots_from_seeded_types(self, seeded_store):
        company_id = seeded_store.add_company("Alpha")
        employee_id = seeded_store.add_employee(company_id, "Ravi Kumar")
        facts = facts_by_type(seeded_store, employee_id)
        assert len(facts) == 7
        assert "health_insurance" in facts
        assert "medical_fitness" in facts

    def test_employee_validation(self, store, company_id):
        with pytest.raises(ValueError):
            store.add_employee(company_id, "")
        with pytest.raises(ValueError, match="Unknown company"):
            store.add_employee("missing", "Ravi")

    def test_exited_employee_is_excluded(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        store.exit_employee(employee_id, "resigned", days(-1))

        assert store.get_employee_documents(employee_id) is None
        assert store.list_employee_documents() == []
        assert store.get_employee(employee_id)["exit_type"] == "resigned"

    def test_exit_unknown_employee(self, store):
        with pytest.raises(ValueError):
            store.exit_employee("nobody", "terminated")


class TestDocuments:
    """Test cases for document operations."""

    def test_add_and_update_document(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        doc_id = store.add_document(
            employee_id, "Trade_License", document_number="TL-1", expiry_date=days(100)
        )

        store.update_document(doc_id, expiry_date="2030-01-31")
        row = store.get_document(doc_id)
        assert row["document_type"] == "trade_license"
        assert row["expiry_date"] == "2030-01-31"
        assert row["document_number"] == "TL-1"

    def test_update_rejects_unknown(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        doc_id = store.add_document(employee_id, "other")
        with pytest.raises(ValueError, match="Unknown document field"):
            store.update_document(doc_id, colour="red")
        with pytest.raises(ValueError, match="Unknown document"):
            store.update_document("missing", document_number="1")

    def test_add_document_unknown_employee(self, store):
        with pytest.raises(ValueError):
            store.add_document("missing", "passport")

    def test_invalid_amount(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        with pytest.raises(ValueError, match="Invalid money amount"):
            store.add_document(employee_id, "other", fine_per_day="lots")

    def test_renew_document(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        passport = facts_by_type(store, employee_id)["passport"]
        store.update_document(passport.document_id, document_number="P1", expiry_date=days(-5))

        new_id = store.renew_document(passport.document_id, days(3650), document_number="P2")

        current = facts_by_type(store, employee_id)["passport"]
        assert current.document_id == new_id
        assert current.document_number == "P2"
        assert current.expiry_date == days(3650)
        old = store.get_document(passport.document_id)
        assert old["is_primary"] == 0
        assert old["replaced_by"] == new_id

    def test_renew_requires_expiry(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        passport = facts_by_type(store, employee_id)["passport"]
        with pytest.raises(ValueError):
            store.renew_document(passport.document_id, "")

    def test_malformed_date_is_incomplete(self, store, company_id, caplog):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        visa = facts_by_type(store, employee_id)["visa"]
        store.update_document(visa.document_id, document_number="V1", expiry_date="31/12/2025")

        fact = facts_by_type(store, employee_id)["visa"]
        assert fact.expiry_date is None
        assert "Malformed date" in caplog.text


class TestScheduleResolution:
    """Company rule, then global rule, then the document's own value."""

    def test_document_value_without_rules(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        store.add_document(employee_id, "other", fine_per_day=5, grace_period_days=3)
        fact = facts_by_type(store, employee_id)["other"]
        assert fact.fine_per_day == Decimal("5")
        assert fact.grace_period_days == 3

    def test_global_rule_overrides_document(self, store, company_id):
        employee_id = store.add_employee(company_id, "Ravi Kumar")
        store.set_compliance_rule("visa", fine_per_day=75)

        fact = facts_by_type(store, employee_id)["visa"]
        assert fact.fine_per_day == Decimal("75")
        # Unset rule fields fall through
        assert fact.grace_period_days == 0

    def test_company_rule_overrides_global(self, store, company_id):
        other = store.add_company("Beta")
        ravi = store.add_employee(company_id, "Ravi Kumar")
        sara = store.add_employee(other, "Sara")
        store.set_compliance_rule("emirates_id", grace_period_days=10, fine_type="monthly")
        store.set_compliance_rule("emirates_id", company_id, grace_period_days=45)

        ravi_eid = facts_by_type(store, ravi)["emirates_id"]
        sara_eid = facts_by_type(store, sara)["emirates_id"]
        assert ravi_eid.grace_period_days == 45
        assert ravi_eid.fine_type is FineType.MONTHLY
        assert sara_eid.grace_period_days == 10

    def test_set_rule_replaces(self, store):
        store.set_compliance_rule("visa", fine_per_day=50)
        store.set_compliance_rule("visa", fine_per_day=60)
        count = store._get_connection().execute(
            "SELECT COUNT(*) FROM compliance_rules WHERE doc_type = 'visa'"
        ).fetchone()[0]
        assert count == 1

    def test_negative_grace_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_compliance_rule("visa", grace_period_days=-1)

    def test_mandatory_flag_from_document_types(self, seeded_store):
        company_id = seeded_store.add_company("Alpha")
        employee_id = seeded_store.add_employee(company_id, "Ravi Kumar")
        seeded_store.add_document(employee_id, "trade_license", is_mandatory=True)
        seeded_store.add_document(employee_id, "labour_contract", is_mandatory=True)

        facts = facts_by_type(seeded_store, employee_id)
        # Catalog says optional; unknown types keep their own flag
        assert facts["trade_license"].is_mandatory is False
        assert facts["labour_contract"].is_mandatory is True


class TestDependencies:
    """Test cases for dependency rules."""

    def test_add_and_list(self, store):
        store.add_dependency("Passport", "visa", "needed")
        store.add_dependency("passport", "visa", "updated")
        assert store.list_dependencies() == [DependencyRule("passport", "visa", "updated")]

    def test_self_dependency_rejected(self, store):
        with pytest.raises(ValueError, match="cannot depend on itself"):
            store.add_dependency("visa", "VISA")

    def test_check_constraint(self, store):
        with pytest.raises(sqlite3.IntegrityError):
            store._get_connection().execute(
                "INSERT INTO document_dependencies (blocking_doc_type, blocked_doc_type, created_at) "
                "VALUES ('visa', 'visa', 'now')"
            )


class TestSeeding:
    """Test cases for seed_from_config."""

    def test_seed_counts(self, store):
        seeded = store.seed_from_config(ComplianceConfig())
        assert seeded == {"document_types": 9, "dependencies": 4, "compliance_rules": 7}
        assert len(store.list_document_types()) == 9
        assert len(store.list_dependencies()) == 4

    def test_reseed_keeps_catalog(self, store):
        store.seed_from_config(ComplianceConfig())
        again = store.seed_from_config(ComplianceConfig())
        assert again["document_types"] == 0
        assert again["dependencies"] == 0
        assert again["compliance_rules"] == 7

    def test_company_rule_for_unknown_company_skipped(self, store):
        config = ComplianceConfig(compliance_rules=[
            {"doc_type": "visa", "company_id": "ghost", "fine_per_day": 1},
        ])
        assert store.seed_from_config(config)["compliance_rules"] == 0


class TestSentNotices:
    """Test cases for sent notice bookkeeping."""

    def notice(self, document_id="d1"):
        return ComplianceNotice(
            kind=NoticeKind.EXPIRING,
            title="t",
            message="m",
            employee_id="e1",
            document_type="passport",
            document_id=document_id,
            dedupe_key=("e1", "passport", document_id, TODAY.isoformat()),
        )

    def test_record_and_read(self, store):
        assert store.record_sent_notices([self.notice(), self.notice("d2")]) == 2
        assert store.record_sent_notices([self.notice()]) == 0
        keys = store.sent_notice_keys(TODAY)
        assert ("e1", "passport", "d1", TODAY.isoformat()) in keys
        assert store.sent_notice_keys(days(1)) == set()


class TestImportRecords:
    """Test cases for JSON import."""

    PAYLOAD = {
        "companies": [{
            "id": "c1",
            "name": "Alpha Trading LLC",
            "employees": [
                {
                    "id": "e1",
                    "name": "Ravi Kumar",
                    "documents": [
                        {"document_type": "passport", "document_number": "P1", "expiry_date": "2030-01-01"},
                        {"document_type": "trade_license", "expiry_date": "2026-01-01"},
                    ],
                },
                {"id": "e2", "name": "Old Hand", "exit_type": "resigned"},
            ],
        }],
    }

    def test_import(self, store):
        counts = store.import_records(self.PAYLOAD)
        assert counts == {"companies": 1, "employees": 2, "documents": 2}

        facts = facts_by_type(store, "e1")
        assert facts["passport"].document_number == "P1"
        assert facts["passport"].expiry_date == date(2030, 1, 1)
        assert "trade_license" in facts
        # Filled the existing slot rather than adding a second passport
        assert len([f for f in store.get_employee_documents("e1").documents if f.document_type == "passport"]) == 1
        assert store.get_employee_documents("e2") is None

    def test_reimport_skips_existing(self, store):
        store.import_records(self.PAYLOAD)
        counts = store.import_records(self.PAYLOAD)
        assert counts == {"companies": 0, "employees": 0, "documents": 0}

    def test_bad_payload(self, store):
        with pytest.raises(ValueError, match="companies"):
            store.import_records({"employees": []})
        with pytest.raises(ValueError, match="no name"):
            store.import_records({"companies": [{"id": "x"}]})
