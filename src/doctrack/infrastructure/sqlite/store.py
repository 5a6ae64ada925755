"""
SQLite-backed compliance store.

Provides CRUD operations for:
- Companies and employees (with automatic mandatory document slots)
- Documents (add, partial update, renew)
- Compliance rules and document dependencies
- Sent-notice bookkeeping

and materializes DocumentFact snapshots for the compliance engine, with
grace/fine values already resolved (company rule, then global rule, then
the document's own value).

Uses stdlib sqlite3 with no ORM.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from collections import defaultdict
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from doctrack.domain.clock import to_day
from doctrack.domain.doc_types import DEFAULT_CATALOG, DocTypeCatalog, DocTypeEntry
from doctrack.domain.models import (
    ComplianceNotice,
    DependencyRule,
    DocumentFact,
    EmployeeDocuments,
    FineType,
)
from doctrack.infrastructure.sqlite.schema import initialize_schema

if TYPE_CHECKING:
    from doctrack.domain.config import ComplianceConfig, DocumentTypeConfig

logger = logging.getLogger(__name__)

# Columns callers may set on a document
DOCUMENT_FIELDS = (
    "document_number",
    "issue_date",
    "expiry_date",
    "grace_period_days",
    "fine_per_day",
    "fine_type",
    "fine_cap",
    "is_mandatory",
)

_EMPLOYEES_SQL = """
    SELECT e.id, e.name, e.company_id, c.name AS company_name, c.currency
    FROM employees e
    JOIN companies c ON c.id = e.company_id
    WHERE e.exit_type IS NULL {filter}
    ORDER BY e.name, e.id
"""

# One row per current document with effective schedule values
_DOCUMENTS_SQL = """
    SELECT
        d.id, d.employee_id, d.document_type, d.document_number,
        d.issue_date, d.expiry_date,
        COALESCE(cr.grace_period_days, gr.grace_period_days, d.grace_period_days) AS eff_grace,
        COALESCE(cr.fine_per_day, gr.fine_per_day, d.fine_per_day) AS eff_fine,
        COALESCE(cr.fine_type, gr.fine_type, d.fine_type) AS eff_fine_type,
        COALESCE(cr.fine_cap, gr.fine_cap, d.fine_cap) AS eff_cap,
        COALESCE(dt.is_mandatory, d.is_mandatory) AS eff_mandatory
    FROM documents d
    JOIN employees e ON e.id = d.employee_id
    LEFT JOIN compliance_rules cr
        ON cr.doc_type = d.document_type AND cr.company_id = e.company_id
    LEFT JOIN compliance_rules gr
        ON gr.doc_type = d.document_type AND gr.company_id IS NULL
    LEFT JOIN document_types dt
        ON dt.doc_type = d.document_type AND dt.is_active = 1
    WHERE d.is_primary = 1 AND e.exit_type IS NULL {filter}
    ORDER BY d.document_type, d.created_at, d.id
"""


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


def _date_text(value: date | str | None) -> str | None:
    """Dates are stored as ISO text; strings are stored as given."""
    if value is None:
        return None
    if isinstance(value, date):
        return to_day(value).isoformat()
    text = str(value).strip()
    return text or None


def _money_text(value: Decimal | float | int | str | None) -> str:
    if value is None:
        return "0"
    try:
        return str(Decimal(str(value)))
    except InvalidOperation as e:
        raise ValueError(f"Invalid money amount: {value!r}") from e


def _normalize_field(name: str, value: Any) -> Any:
    """Convert a document field to its stored representation."""
    if name in ("issue_date", "expiry_date"):
        return _date_text(value)
    if name in ("fine_per_day", "fine_cap"):
        return _money_text(value)
    if name == "fine_type":
        if value is None:
            return FineType.DAILY.value
        return str(getattr(value, "value", value)).strip().lower()
    if name == "grace_period_days":
        days = int(value or 0)
        if days < 0:
            raise ValueError("Grace period cannot be negative")
        return days
    if name == "is_mandatory":
        return 1 if value else 0
    if name == "document_number":
        text = "" if value is None else str(value).strip()
        return text or None
    raise ValueError(f"Unknown document field: {name}")


def parse_stored_date(value: Any, context: str) -> date | None:
    """
    Parse an ISO date read from storage.

    Malformed values are logged and treated as missing, which routes the
    document to the incomplete status instead of failing the read.
    """
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning("Malformed date %r on %s - treating as missing", value, context)
        return None


def parse_stored_money(value: Any, context: str) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.warning("Malformed amount %r on %s - treating as 0", value, context)
        return Decimal("0")


class ComplianceStore:
    """
    SQLite-backed storage for employees and documents.

    Usage:
        store = ComplianceStore(Path("output/doctrack.db"))
        store.initialize_schema()
        store.seed_from_config(config)

        company_id = store.add_company("Acme Contracting")
        employee_id = store.add_employee(company_id, "Ravi Kumar", catalog)
        bundle = store.get_employee_documents(employee_id)
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Initialize compliance store.

        Args:
            db_path: Path to SQLite database file (created if not exists),
                     or ":memory:"
        """
        self.db_path = Path(db_path) if str(db_path) != ":memory:" else None
        self._connection: sqlite3.Connection | None = None
        logger.debug("ComplianceStore initialized: %s", self.db_path or ":memory:")

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            if self.db_path is None:
                self._connection = sqlite3.connect(":memory:")
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._connection = sqlite3.connect(self.db_path)
            self._connection.execute("PRAGMA foreign_keys = ON")
            self._connection.row_factory = sqlite3.Row
            logger.debug("Database connection established")
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.debug("Database connection closed")

    def initialize_schema(self) -> None:
        """Create tables if they don't exist. Safe to call multiple times."""
        initialize_schema(self._get_connection())

    def _table_is_empty(self, table: str) -> bool:
        row = self._get_connection().execute(f"SELECT 1 FROM {table} LIMIT 1").fetchone()
        return row is None

    # ========================================================================
    # Company Operations
    # ========================================================================

    def add_company(
        self, name: str, currency: str = "AED", company_id: str | None = None
    ) -> str:
        """
        Create a company.

        Returns:
            The company id
        """
        if not name or not name.strip():
            raise ValueError("Company name is required")
        conn = self._get_connection()
        company_id = company_id or _new_id()
        conn.execute(
            "INSERT INTO companies (id, name, currency, created_at) VALUES (?, ?, ?, ?)",
            (company_id, name.strip(), currency.upper(), _utc_now()),
        )
        conn.commit()
        logger.info("Created company: %s (id=%s)", name, company_id)
        return company_id

    def get_company(self, company_id: str) -> dict[str, Any] | None:
        row = self._get_connection().execute(
            "SELECT id, name, currency FROM companies WHERE id = ?", (company_id,)
        ).fetchone()
        return dict(row) if row else None

    def find_company_by_name(self, name: str) -> dict[str, Any] | None:
        row = self._get_connection().execute(
            "SELECT id, name, currency FROM companies WHERE name = ?", (name.strip(),)
        ).fetchone()
        return dict(row) if row else None

    def list_companies(self) -> list[dict[str, Any]]:
        rows = self._get_connection().execute(
            "SELECT id, name, currency FROM companies ORDER BY name"
        ).fetchall()
        return [dict(r) for r in rows]

    # ========================================================================
    # Employee Operations
    # ========================================================================

    def _mandatory_entries(self, catalog: DocTypeCatalog) -> list[DocTypeEntry]:
        """Mandatory types from the document_types table, else the catalog."""
        rows = self._get_connection().execute(
            """
            SELECT doc_type, display_name FROM document_types
            WHERE is_active = 1 AND is_mandatory = 1
            ORDER BY sort_order, doc_type
        """
        ).fetchall()
        if not rows:
            return [e for e in catalog.entries if e.is_mandatory]
        return [
            catalog.get(row["doc_type"]) or DocTypeEntry(row["doc_type"], row["display_name"])
            for row in rows
        ]

    def add_employee(
        self,
        company_id: str,
        name: str,
        catalog: DocTypeCatalog | None = None,
        *,
        employee_id: str | None = None,
        trade: str | None = None,
        mobile: str | None = None,
        joining_date: date | str | None = None,
    ) -> str:
        """
        Create an employee with an empty slot for every mandatory document.

        Each slot starts with the type's default grace/fine schedule.

        Returns:
            The employee id

        Raises:
            ValueError: If the company does not exist or the name is empty
        """
        if not name or not name.strip():
            raise ValueError("Employee name is required")
        if self.get_company(company_id) is None:
            raise ValueError(f"Unknown company: {company_id}")

        conn = self._get_connection()
        employee_id = employee_id or _new_id()
        now = _utc_now()

        conn.execute(
            """
            INSERT INTO employees (id, company_id, name, trade, mobile, joining_date, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
            (employee_id, company_id, name.strip(), trade, mobile, _date_text(joining_date), now),
        )

        slots = self._mandatory_entries(catalog if catalog is not None else DEFAULT_CATALOG)
        for entry in slots:
            self._insert_document(
                conn,
                employee_id=employee_id,
                document_type=entry.doc_type,
                grace_period_days=entry.grace_period_days,
                fine_per_day=entry.fine_per_day,
                fine_type=entry.fine_type,
                fine_cap=entry.fine_cap,
                is_mandatory=True,
            )
        conn.commit()

        logger.info(
            "Created employee %s (id=%s) with %d mandatory document slots",
            name, employee_id, len(slots),
        )
        return employee_id

    def get_employee(self, employee_id: str) -> dict[str, Any] | None:
        """Get an employee (including exited ones) with company details."""
        row = self._get_connection().execute(
            """
            SELECT e.id, e.name, e.company_id, e.trade, e.mobile, e.joining_date,
                   e.exit_type, e.exit_date, c.name AS company_name, c.currency
            FROM employees e JOIN companies c ON c.id = e.company_id
            WHERE e.id = ?
        """,
            (employee_id,),
        ).fetchone()
        return dict(row) if row else None

    def exit_employee(
        self, employee_id: str, exit_type: str, exit_date: date | str | None = None
    ) -> None:
        """Mark an employee as exited; they drop out of every compliance read."""
        conn = self._get_connection()
        cursor = conn.execute(
            "UPDATE employees SET exit_type = ?, exit_date = ? WHERE id = ?",
            (exit_type, _date_text(exit_date), employee_id),
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Unknown employee: {employee_id}")
        conn.commit()
        logger.info("Employee %s exited (%s)", employee_id, exit_type)

    # ========================================================================
    # Document Operations
    # ========================================================================

    def _insert_document(
        self,
        conn: sqlite3.Connection,
        employee_id: str,
        document_type: str,
        document_id: str | None = None,
        is_primary: bool = True,
        **fields: Any,
    ) -> str:
        values = {name: _normalize_field(name, fields.get(name)) for name in DOCUMENT_FIELDS}
        document_id = document_id or _new_id()
        conn.execute(
            """
            INSERT INTO documents (
                id, employee_id, document_type, document_number, issue_date, expiry_date,
                grace_period_days, fine_per_day, fine_type, fine_cap,
                is_mandatory, is_primary, created_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                document_id, employee_id, document_type.strip().lower(),
                values["document_number"], values["issue_date"], values["expiry_date"],
                values["grace_period_days"], values["fine_per_day"], values["fine_type"],
                values["fine_cap"], values["is_mandatory"], 1 if is_primary else 0,
                _utc_now(),
            ),
        )
        return document_id

    def add_document(
        self,
        employee_id: str,
        document_type: str,
        *,
        document_id: str | None = None,
        **fields: Any,
    ) -> str:
        """
        Add a document to an employee.

        Args:
            employee_id: Owner
            document_type: Type key
            document_id: Optional explicit id
            **fields: Any of DOCUMENT_FIELDS

        Returns:
            The document id

        Raises:
            ValueError: Unknown employee, unknown field or invalid value
        """
        unknown = set(fields) - set(DOCUMENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown document field(s): {', '.join(sorted(unknown))}")
        if not document_type or not document_type.strip():
            raise ValueError("Document type is required")
        if self.get_employee(employee_id) is None:
            raise ValueError(f"Unknown employee: {employee_id}")

        conn = self._get_connection()
        document_id = self._insert_document(
            conn, employee_id, document_type, document_id=document_id, **fields
        )
        conn.commit()
        logger.info("Added %s document %s for employee %s", document_type, document_id, employee_id)
        return document_id

    def get_document(self, document_id: str) -> dict[str, Any] | None:
        """Raw stored row (no rule resolution)."""
        row = self._get_connection().execute(
            "SELECT * FROM documents WHERE id = ?", (document_id,)
        ).fetchone()
        return dict(row) if row else None

    def update_document(self, document_id: str, **changes: Any) -> None:
        """
        Partially update a document.

        Only the given fields change; passing None clears optional fields.

        Raises:
            ValueError: Unknown document or field
        """
        unknown = set(changes) - set(DOCUMENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown document field(s): {', '.join(sorted(unknown))}")
        if not changes:
            return

        assignments = ", ".join(f"{name} = ?" for name in changes)
        params = [_normalize_field(name, value) for name, value in changes.items()]
        params.extend([_utc_now(), document_id])

        conn = self._get_connection()
        cursor = conn.execute(
            f"UPDATE documents SET {assignments}, updated_at = ? WHERE id = ?", params
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Unknown document: {document_id}")
        conn.commit()
        logger.debug("Updated document %s: %s", document_id, ", ".join(changes))

    def renew_document(
        self,
        document_id: str,
        expiry_date: date | str,
        *,
        document_number: str | None = None,
        issue_date: date | str | None = None,
    ) -> str:
        """
        Renew a document.

        Inserts a new current version carrying over the schedule (and the
        number / issue date unless new ones are given) and archives the old
        row.

        Returns:
            The new document id

        Raises:
            ValueError: Unknown document or missing expiry date
        """
        if _date_text(expiry_date) is None:
            raise ValueError("New expiry date is required")

        old = self.get_document(document_id)
        if old is None:
            raise ValueError(f"Unknown document: {document_id}")

        conn = self._get_connection()
        new_id = self._insert_document(
            conn,
            employee_id=old["employee_id"],
            document_type=old["document_type"],
            is_primary=bool(old["is_primary"]),
            document_number=document_number if document_number is not None else old["document_number"],
            issue_date=issue_date if issue_date is not None else old["issue_date"],
            expiry_date=expiry_date,
            grace_period_days=old["grace_period_days"],
            fine_per_day=old["fine_per_day"],
            fine_type=old["fine_type"],
            fine_cap=old["fine_cap"],
            is_mandatory=bool(old["is_mandatory"]),
        )
        conn.execute(
            "UPDATE documents SET is_primary = 0, replaced_by = ?, updated_at = ? WHERE id = ?",
            (new_id, _utc_now(), document_id),
        )
        conn.commit()

        logger.info(
            "Renewed %s document %s -> %s (expires %s)",
            old["document_type"], document_id, new_id, _date_text(expiry_date),
        )
        return new_id

    # ========================================================================
    # Catalog, Rules and Dependencies
    # ========================================================================

    def upsert_document_type(self, doc_type: DocumentTypeConfig) -> None:
        conn = self._get_connection()
        conn.execute(
            """
            INSERT INTO document_types (doc_type, display_name, is_mandatory, is_active, sort_order)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(doc_type) DO UPDATE SET
                display_name = excluded.display_name,
                is_mandatory = excluded.is_mandatory,
                is_active = excluded.is_active,
                sort_order = excluded.sort_order
        """,
            (
                doc_type.doc_type, doc_type.display_name,
                1 if doc_type.is_mandatory else 0, 1 if doc_type.is_active else 0,
                doc_type.sort_order,
            ),
        )
        conn.commit()

    def list_document_types(self, active_only: bool = True) -> list[dict[str, Any]]:
        query = "SELECT * FROM document_types"
        if active_only:
            query += " WHERE is_active = 1"
        rows = self._get_connection().execute(query + " ORDER BY sort_order, doc_type").fetchall()
        return [dict(r) for r in rows]

    def set_compliance_rule(
        self,
        doc_type: str,
        company_id: str | None = None,
        *,
        grace_period_days: int | None = None,
        fine_per_day: Decimal | float | int | str | None = None,
        fine_type: FineType | str | None = None,
        fine_cap: Decimal | float | int | str | None = None,
    ) -> None:
        """
        Insert or replace the rule for (company_id, doc_type).

        None fields are stored as NULL and fall through to the next level.
        """
        if grace_period_days is not None and grace_period_days < 0:
            raise ValueError("Grace period cannot be negative")

        values = (
            grace_period_days,
            None if fine_per_day is None else _money_text(fine_per_day),
            None if fine_type is None else _normalize_field("fine_type", fine_type),
            None if fine_cap is None else _money_text(fine_cap),
            _utc_now(),
        )
        conn = self._get_connection()
        row = conn.execute(
            "SELECT id FROM compliance_rules WHERE doc_type = ? AND company_id IS ?",
            (doc_type, company_id),
        ).fetchone()

        if row:
            conn.execute(
                """
                UPDATE compliance_rules
                SET grace_period_days = ?, fine_per_day = ?, fine_type = ?,
                    fine_cap = ?, updated_at = ?
                WHERE id = ?
            """,
                (*values, row["id"]),
            )
        else:
            conn.execute(
                """
                INSERT INTO compliance_rules (
                    doc_type, company_id, grace_period_days, fine_per_day,
                    fine_type, fine_cap, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (doc_type, company_id, *values),
            )
        conn.commit()
        logger.debug("Compliance rule set: %s (company: %s)", doc_type, company_id or "global")

    def add_dependency(
        self, blocking_doc_type: str, blocked_doc_type: str, description: str = ""
    ) -> None:
        """
        Add (or re-describe) a dependency rule.

        Raises:
            ValueError: If either type is empty or a type would block itself
        """
        blocking = (blocking_doc_type or "").strip().lower()
        blocked = (blocked_doc_type or "").strip().lower()
        if not blocking or not blocked:
            raise ValueError("Both document types are required")
        if blocking == blocked:
            raise ValueError("A document type cannot depend on itself")

        conn = self._get_connection()
        conn.execute(
            """
            INSERT INTO document_dependencies (blocking_doc_type, blocked_doc_type, description, created_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(blocking_doc_type, blocked_doc_type)
            DO UPDATE SET description = excluded.description
        """,
            (blocking, blocked, description, _utc_now()),
        )
        conn.commit()
        logger.debug("Dependency added: %s -> %s", blocking, blocked)

    def list_dependencies(self) -> list[DependencyRule]:
        rows = self._get_connection().execute(
            """
            SELECT blocking_doc_type, blocked_doc_type, description
            FROM document_dependencies ORDER BY id
        """
        ).fetchall()
        return [
            DependencyRule(r["blocking_doc_type"], r["blocked_doc_type"], r["description"])
            for r in rows
        ]

    def seed_from_config(self, config: ComplianceConfig) -> dict[str, int]:
        """
        Seed catalog tables from configuration.

        Document types and dependencies are inserted only when their table
        is empty; compliance rules are upserted every time.

        Returns:
            Number of rows written per table
        """
        seeded = {"document_types": 0, "dependencies": 0, "compliance_rules": 0}

        if self._table_is_empty("document_types"):
            for doc_type in config.document_types:
                self.upsert_document_type(doc_type)
                seeded["document_types"] += 1

        if self._table_is_empty("document_dependencies"):
            for rule in config.dependencies:
                self.add_dependency(rule.blocking_doc_type, rule.blocked_doc_type, rule.description)
                seeded["dependencies"] += 1

        for rule in config.compliance_rules:
            if rule.company_id is not None and self.get_company(rule.company_id) is None:
                logger.warning(
                    "Skipping compliance rule for %s: unknown company %s",
                    rule.doc_type, rule.company_id,
                )
                continue
            self.set_compliance_rule(
                rule.doc_type,
                rule.company_id,
                grace_period_days=rule.grace_period_days,
                fine_per_day=rule.fine_per_day,
                fine_type=rule.fine_type,
                fine_cap=rule.fine_cap,
            )
            seeded["compliance_rules"] += 1

        logger.info(
            "Seeded %d document types, %d dependencies, %d compliance rules",
            seeded["document_types"], seeded["dependencies"], seeded["compliance_rules"],
        )
        return seeded

    # ========================================================================
    # Engine Input (DocumentFact snapshots)
    # ========================================================================

    @staticmethod
    def _row_to_fact(row: sqlite3.Row) -> DocumentFact:
        context = f"document {row['id']} ({row['document_type']})"
        raw_type = row["eff_fine_type"]
        return DocumentFact(
            document_type=row["document_type"],
            document_number=row["document_number"],
            issue_date=parse_stored_date(row["issue_date"], context),
            expiry_date=parse_stored_date(row["expiry_date"], context),
            grace_period_days=int(row["eff_grace"] or 0),
            fine_per_day=parse_stored_money(row["eff_fine"], context),
            # Unknown strings are passed through; the engine treats them as daily
            fine_type=FineType.from_string(raw_type) or (raw_type or FineType.DAILY),
            fine_cap=parse_stored_money(row["eff_cap"], context),
            is_mandatory=bool(row["eff_mandatory"]),
            document_id=row["id"],
        )

    def _load_bundles(self, condition: str = "", params: tuple = ()) -> list[EmployeeDocuments]:
        conn = self._get_connection()
        employees = conn.execute(_EMPLOYEES_SQL.format(filter=condition), params).fetchall()
        if not employees:
            return []

        facts: dict[str, list[DocumentFact]] = defaultdict(list)
        for row in conn.execute(_DOCUMENTS_SQL.format(filter=condition), params):
            facts[row["employee_id"]].append(self._row_to_fact(row))

        return [
            EmployeeDocuments(
                employee_id=emp["id"],
                employee_name=emp["name"],
                company_id=emp["company_id"],
                company_name=emp["company_name"],
                currency=emp["currency"],
                documents=tuple(facts.get(emp["id"], ())),
            )
            for emp in employees
        ]

    def get_employee_documents(self, employee_id: str) -> EmployeeDocuments | None:
        """Current documents for one active employee, or None."""
        bundles = self._load_bundles("AND e.id = ?", (employee_id,))
        return bundles[0] if bundles else None

    def list_employee_documents(self, company_id: str | None = None) -> list[EmployeeDocuments]:
        """Current documents for every active employee (optionally one company)."""
        if company_id is None:
            return self._load_bundles()
        return self._load_bundles("AND e.company_id = ?", (company_id,))

    # ========================================================================
    # Sent Notices
    # ========================================================================

    def sent_notice_keys(self, sent_on: date) -> set[tuple[str, str, str, str]]:
        rows = self._get_connection().execute(
            """
            SELECT employee_id, document_type, document_id, sent_on
            FROM sent_notices WHERE sent_on = ?
        """,
            (to_day(sent_on).isoformat(),),
        ).fetchall()
        return {tuple(r) for r in rows}

    def record_sent_notices(self, notices: Iterable[ComplianceNotice]) -> int:
        """Remember notices as sent. Returns the number of new rows."""
        conn = self._get_connection()
        written = 0
        for notice in notices:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO sent_notices
                    (employee_id, document_type, document_id, sent_on, kind)
                VALUES (?, ?, ?, ?, ?)
            """,
                (*notice.dedupe_key, notice.kind.value),
            )
            written += cursor.rowcount
        conn.commit()
        return written

    # ========================================================================
    # Bulk Import
    # ========================================================================

    def _find_empty_slot(self, employee_id: str, document_type: str) -> str | None:
        row = self._get_connection().execute(
            """
            SELECT id FROM documents
            WHERE employee_id = ? AND document_type = ? AND is_primary = 1
              AND document_number IS NULL AND expiry_date IS NULL
            ORDER BY created_at LIMIT 1
        """,
            (employee_id, document_type),
        ).fetchone()
        return row["id"] if row else None

    def import_records(
        self, payload: Mapping[str, Any], catalog: DocTypeCatalog | None = None
    ) -> dict[str, int]:
        """
        Load companies, employees and documents from a mapping.

        Expected shape::

            {"companies": [{"id": "...", "name": "...", "currency": "AED",
              "employees": [{"id": "...", "name": "...",
                "documents": [{"document_type": "passport", "expiry_date": "2026-01-31", ...}]}]}]}

        Documents fill the employee's empty mandatory slot of the same type
        when there is one. Employees whose id already exists are skipped.

        Returns:
            Counts of created companies, employees and documents
        """
        companies = payload.get("companies")
        if not isinstance(companies, list):
            raise ValueError("Import payload must contain a 'companies' array")

        counts = {"companies": 0, "employees": 0, "documents": 0}
        for index, company in enumerate(companies):
            name = company.get("name")
            if not name:
                raise ValueError(f"Company at index {index} has no name")

            existing = (
                self.get_company(company["id"]) if company.get("id") else None
            ) or self.find_company_by_name(name)
            if existing:
                company_id = existing["id"]
            else:
                company_id = self.add_company(
                    name, company.get("currency", "AED"), company.get("id")
                )
                counts["companies"] += 1

            for emp in company.get("employees", []):
                if emp.get("id") and self.get_employee(emp["id"]) is not None:
                    logger.warning("Employee %s already exists - skipped", emp["id"])
                    continue
                employee_id = self.add_employee(
                    company_id,
                    emp.get("name", ""),
                    catalog,
                    employee_id=emp.get("id"),
                    trade=emp.get("trade"),
                    mobile=emp.get("mobile"),
                    joining_date=emp.get("joining_date"),
                )
                counts["employees"] += 1

                for doc in emp.get("documents", []):
                    doc_type = (doc.get("document_type") or "").strip().lower()
                    fields = {k: v for k, v in doc.items() if k in DOCUMENT_FIELDS}
                    slot = self._find_empty_slot(employee_id, doc_type)
                    if slot:
                        self.update_document(slot, **fields)
                    else:
                        self.add_document(employee_id, doc_type, document_id=doc.get("id"), **fields)
                    counts["documents"] += 1

                if emp.get("exit_type"):
                    self.exit_employee(employee_id, emp["exit_type"], emp.get("exit_date"))

        logger.info(
            "Imported %d companies, %d employees, %d documents",
            counts["companies"], counts["employees"], counts["documents"],
        )
        return counts
