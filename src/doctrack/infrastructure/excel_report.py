"""
Excel compliance report generation using openpyxl.

Sheets:
- Summary: headline figures and the per-company breakdown
- Employees: one row per employee rollup
- Documents: one row per mandatory document with status, days and fine
- ReportInfo: generation metadata
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from doctrack.domain.clock import to_day
from doctrack.domain.compliance import evaluate_document
from doctrack.domain.doc_types import DocTypeCatalog, display_name
from doctrack.domain.models import ComplianceStats, EmployeeDocuments, EmployeeRollup
from doctrack.domain.rollup import rollup_employee

logger = logging.getLogger(__name__)

# Styling constants
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="203764", end_color="203764", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin")
)

# (background, text) per status value
STATUS_COLORS = {
    "penalty_active": ("FFC7CE", "9C0006"),
    "in_grace": ("FFEB9C", "9C5700"),
    "expiring_soon": ("FFEB9C", "9C5700"),
    "incomplete": ("D9D9D9", "404040"),
    "valid": ("C6EFCE", "006100"),
    "none": ("F2F2F2", "404040"),
}

MONEY_FORMAT = "#,##0.00"


def _write_header(ws: Worksheet, columns: Sequence[tuple[str, int]], row: int = 1) -> None:
    for col_idx, (col_name, width) in enumerate(columns, start=1):
        cell = ws.cell(row=row, column=col_idx, value=col_name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _write_row(ws: Worksheet, row_idx: int, values: Iterable[Any]) -> None:
    for col_idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row_idx, column=col_idx, value=value)
        cell.border = THIN_BORDER
        cell.alignment = Alignment(vertical="center")


def _style_status(ws: Worksheet, row_idx: int, col_idx: int) -> None:
    cell = ws.cell(row=row_idx, column=col_idx)
    colors = STATUS_COLORS.get(str(cell.value))
    if colors:
        bg, fg = colors
        cell.fill = PatternFill(start_color=bg, end_color=bg, fill_type="solid")
        cell.font = Font(bold=True, color=fg)


def write_compliance_report(
    employees: Sequence[EmployeeDocuments],
    stats: ComplianceStats,
    now: datetime | date,
    output_path: Path,
    catalog: DocTypeCatalog | None = None,
    organization: str = "",
) -> Path:
    """
    Write the compliance workbook.

    Args:
        employees: Employee bundles with their mandatory documents
        stats: Company-level summary computed for the same "now"
        now: Instant the figures were derived for
        output_path: Path to write the .xlsx file
        catalog: Optional catalog for display names
        organization: Shown on the Summary sheet

    Returns:
        Path to the created Excel file
    """
    logger.info("Generating compliance report: %s", output_path)

    wb = Workbook()
    if "Sheet" in wb.sheetnames:
        del wb["Sheet"]

    _add_summary_sheet(wb, stats, organization, now)
    rollups = [rollup_employee(emp.documents, now, emp.employee_id) for emp in employees]
    _add_employees_sheet(wb, employees, rollups, catalog)
    doc_count = _add_documents_sheet(wb, employees, now, catalog)
    _add_metadata_sheet(wb, now, len(employees), doc_count)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    logger.info(
        "Compliance report saved: %s (%d employees, %d documents)",
        output_path, len(employees), doc_count,
    )
    return output_path


def _add_summary_sheet(
    wb: Workbook, stats: ComplianceStats, organization: str, now: datetime | date
) -> None:
    ws = wb.create_sheet("Summary")

    headline = [
        ("Organization", organization or "(not specified)"),
        ("As Of", to_day(now).isoformat()),
        ("Employees", stats.total_employees),
        ("Mandatory Documents", stats.total_documents),
        ("Completion Rate (%)", stats.completion_rate),
        ("Daily Fine Exposure", float(stats.total_daily_exposure)),
        ("Accumulated Fines", float(stats.total_accumulated)),
    ]
    for status, count in sorted(stats.documents_by_status.items()):
        headline.append((f"Documents: {status}", count))

    for row_idx, (label, value) in enumerate(headline, start=1):
        ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
        cell = ws.cell(row=row_idx, column=2, value=value)
        if label in ("Daily Fine Exposure", "Accumulated Fines"):
            cell.number_format = MONEY_FORMAT

    start = len(headline) + 2
    columns = [
        ("Company", 30),
        ("Employees", 12),
        ("Penalties", 12),
        ("Incomplete", 12),
        ("Daily Exposure", 16),
        ("Accumulated", 16),
        ("Status", 16),
    ]
    _write_header(ws, columns, row=start)
    for offset, company in enumerate(stats.company_breakdown, start=1):
        row_idx = start + offset
        _write_row(ws, row_idx, [
            company.company_name,
            company.employee_count,
            company.penalty_count,
            company.incomplete_count,
            float(company.daily_exposure),
            float(company.accumulated_fines),
            company.compliance_status.value,
        ])
        ws.cell(row=row_idx, column=5).number_format = MONEY_FORMAT
        ws.cell(row=row_idx, column=6).number_format = MONEY_FORMAT
        _style_status(ws, row_idx, 7)


def _add_employees_sheet(
    wb: Workbook,
    employees: Sequence[EmployeeDocuments],
    rollups: Sequence[EmployeeRollup],
    catalog: DocTypeCatalog | None,
) -> None:
    ws = wb.create_sheet("Employees")
    columns = [
        ("Employee ID", 16),
        ("Name", 28),
        ("Company", 28),
        ("Status", 16),
        ("Complete", 10),
        ("Total", 8),
        ("Expired", 10),
        ("Expiring", 10),
        ("Nearest Expiry (days)", 14),
        ("Most Urgent", 26),
    ]
    _write_header(ws, columns)
    ws.freeze_panes = "A2"

    for row_idx, (emp, rollup) in enumerate(zip(employees, rollups), start=2):
        _write_row(ws, row_idx, [
            emp.employee_id,
            emp.employee_name,
            emp.company_name,
            rollup.compliance_status.value,
            rollup.docs_complete,
            rollup.docs_total,
            rollup.expired_count,
            rollup.expiring_count,
            rollup.nearest_expiry_days,
            display_name(rollup.urgent_doc_type, catalog) if rollup.urgent_doc_type else "",
        ])
        _style_status(ws, row_idx, 4)


def _add_documents_sheet(
    wb: Workbook,
    employees: Sequence[EmployeeDocuments],
    now: datetime | date,
    catalog: DocTypeCatalog | None,
) -> int:
    ws = wb.create_sheet("Documents")
    columns = [
        ("Employee", 28),
        ("Company", 28),
        ("Document", 26),
        ("Number", 20),
        ("Expiry", 12),
        ("Status", 16),
        ("Days Remaining", 10),
        ("Grace Left", 10),
        ("Days in Penalty", 10),
        ("Estimated Fine", 14),
        ("Currency", 9),
    ]
    _write_header(ws, columns)
    ws.freeze_panes = "A2"

    row_idx = 1
    for emp in employees:
        for fact in emp.documents:
            result = evaluate_document(fact, now, catalog)
            row_idx += 1
            _write_row(ws, row_idx, [
                emp.employee_name,
                emp.company_name,
                result.display_name,
                fact.document_number or "",
                fact.expiry_date.isoformat() if fact.expiry_date else "",
                result.status.value,
                result.metrics.days_remaining,
                result.metrics.grace_days_remaining,
                result.metrics.days_in_penalty,
                float(result.metrics.estimated_fine),
                emp.currency,
            ])
            ws.cell(row=row_idx, column=10).number_format = MONEY_FORMAT
            _style_status(ws, row_idx, 6)

    if row_idx > 1:
        ws.auto_filter.ref = f"A1:{get_column_letter(len(columns))}{row_idx}"
    return row_idx - 1


def _add_metadata_sheet(
    wb: Workbook, now: datetime | date, employee_count: int, document_count: int
) -> None:
    """Add a metadata sheet with report information."""
    ws = wb.create_sheet("ReportInfo")

    if isinstance(now, datetime):
        generated = now.isoformat(timespec="seconds")
    else:
        generated = now.isoformat()

    metadata = [
        ("Figures As Of", to_day(now).isoformat()),
        ("Employees", employee_count),
        ("Documents", document_count),
        ("Report Generated", generated),
    ]
    for row_idx, (label, value) in enumerate(metadata, start=1):
        ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
        ws.cell(row=row_idx, column=2, value=value)

    ws.column_dimensions["A"].width = 20
    ws.column_dimensions["B"].width = 40
