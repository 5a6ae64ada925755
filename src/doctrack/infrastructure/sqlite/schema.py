"""
SQLite schema for DocTrack.

Tables:
- Companies and employees (exited employees are kept but ignored)
- Document types (admin-configurable catalog)
- Documents (one row per document version; renewals archive the old row)
- Compliance rules (company or global grace/fine overrides)
- Document dependencies
- Sent notices (daily de-duplication)

Dates are ISO text. Money is text so Decimal values round-trip exactly.

Schema Version: 1
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_TABLES = """
-- ============================================================================
-- Companies and Employees
-- ============================================================================

CREATE TABLE IF NOT EXISTS companies (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    currency TEXT NOT NULL DEFAULT 'AED',
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS employees (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    trade TEXT,
    mobile TEXT,
    joining_date TEXT,
    exit_type TEXT,          -- NULL = active; 'resigned', 'terminated', ...
    exit_date TEXT,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_employees_company ON employees(company_id);
CREATE INDEX IF NOT EXISTS idx_employees_exit ON employees(exit_type);

-- ============================================================================
-- Document Catalog
-- ============================================================================

CREATE TABLE IF NOT EXISTS document_types (
    doc_type TEXT PRIMARY KEY,
    display_name TEXT NOT NULL,
    is_mandatory INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    sort_order INTEGER NOT NULL DEFAULT 100
);

-- ============================================================================
-- Documents
-- ============================================================================

CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    employee_id TEXT NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
    document_type TEXT NOT NULL,
    document_number TEXT,
    issue_date TEXT,
    expiry_date TEXT,
    grace_period_days INTEGER NOT NULL DEFAULT 0,
    fine_per_day TEXT NOT NULL DEFAULT '0',
    fine_type TEXT NOT NULL DEFAULT 'daily',
    fine_cap TEXT NOT NULL DEFAULT '0',
    is_mandatory INTEGER NOT NULL DEFAULT 0,
    is_primary INTEGER NOT NULL DEFAULT 1,   -- 0 = archived by a renewal
    replaced_by TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_documents_employee ON documents(employee_id);
CREATE INDEX IF NOT EXISTS idx_documents_expiry ON documents(expiry_date);

-- ============================================================================
-- Compliance Rules (company_id NULL = global)
-- ============================================================================

CREATE TABLE IF NOT EXISTS compliance_rules (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    company_id TEXT REFERENCES companies(id) ON DELETE CASCADE,
    doc_type TEXT NOT NULL,
    grace_period_days INTEGER,
    fine_per_day TEXT,
    fine_type TEXT,
    fine_cap TEXT,
    updated_at TEXT NOT NULL,
    UNIQUE(company_id, doc_type)
);

-- UNIQUE above does not cover NULL company ids
CREATE UNIQUE INDEX IF NOT EXISTS idx_compliance_rules_global
    ON compliance_rules(doc_type) WHERE company_id IS NULL;

-- ============================================================================
-- Document Dependencies
-- ============================================================================

CREATE TABLE IF NOT EXISTS document_dependencies (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    blocking_doc_type TEXT NOT NULL,
    blocked_doc_type TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    UNIQUE(blocking_doc_type, blocked_doc_type),
    CHECK (blocking_doc_type <> blocked_doc_type)
);

-- ============================================================================
-- Sent Notices
-- ============================================================================

CREATE TABLE IF NOT EXISTS sent_notices (
    employee_id TEXT NOT NULL,
    document_type TEXT NOT NULL,
    document_id TEXT NOT NULL DEFAULT '',
    sent_on TEXT NOT NULL,
    kind TEXT NOT NULL,
    PRIMARY KEY (employee_id, document_type, document_id, sent_on)
);

-- ============================================================================
-- Schema Metadata
-- ============================================================================

CREATE TABLE IF NOT EXISTS schema_meta (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


def initialize_schema(connection) -> None:
    """
    Create all tables if they don't exist.

    Safe to call multiple times.

    Args:
        connection: SQLite connection from ComplianceStore._get_connection()
    """
    connection.executescript(SCHEMA_TABLES)
    connection.execute(
        """
        INSERT OR REPLACE INTO schema_meta (key, value)
        VALUES ('version', ?)
    """,
        (str(SCHEMA_VERSION),),
    )
    connection.commit()
    logger.info("Database schema initialized (version %d)", SCHEMA_VERSION)
