"""
Tests for the Excel compliance report.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from openpyxl import load_workbook

from conftest import TODAY, make_fact
from doctrack.domain.models import EmployeeDocuments
from doctrack.domain.rollup import summarize_compliance
from doctrack.infrastructure.excel_report import write_compliance_report


def days(n: int):
    return TODAY + timedelta(days=n)


def employees():
    return [
        EmployeeDocuments("e1", "Ravi Kumar", "c1", "Alpha Trading", "AED", (
            make_fact("visa", days(-10), fine_per_day=50, document_number="V-1"),
            make_fact("passport", days(400), document_number="P-1"),
        )),
        EmployeeDocuments("e2", "Sara Ali", "c2", "Beta Services", "AED", (
            make_fact("passport", None, document_number=None),
        )),
    ]


class TestWriteComplianceReport:
    """Test cases for write_compliance_report."""

    def write(self, tmp_path):
        emps = employees()
        stats = summarize_compliance(emps, TODAY)
        return write_compliance_report(
            emps, stats, TODAY, tmp_path / "reports" / "compliance.xlsx", organization="Acme"
        )

    def test_sheets(self, tmp_path):
        path = self.write(tmp_path)
        assert path.exists()
        wb = load_workbook(path)
        assert wb.sheetnames == ["Summary", "Employees", "Documents", "ReportInfo"]

    def test_summary_sheet(self, tmp_path):
        ws = load_workbook(self.write(tmp_path))["Summary"]
        values = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(1, 8)}
        assert values["Organization"] == "Acme"
        assert values["As Of"] == TODAY.isoformat()
        assert values["Employees"] == 2
        assert values["Mandatory Documents"] == 3
        assert values["Accumulated Fines"] == 500.0

    def test_employees_sheet(self, tmp_path):
        ws = load_workbook(self.write(tmp_path))["Employees"]
        assert ws.freeze_panes == "A2"
        assert ws.cell(row=1, column=1).value == "Employee ID"
        assert ws.cell(row=2, column=2).value == "Ravi Kumar"
        assert ws.cell(row=2, column=4).value == "penalty_active"
        assert ws.cell(row=2, column=10).value == "Residence Visa"
        assert ws.cell(row=3, column=4).value == "incomplete"

    def test_documents_sheet(self, tmp_path):
        ws = load_workbook(self.write(tmp_path))["Documents"]
        rows = list(ws.iter_rows(min_row=2, values_only=True))
        assert len(rows) == 3
        visa = rows[0]
        assert visa[2] == "Residence Visa"
        assert visa[5] == "penalty_active"
        assert visa[6] == -10
        assert Decimal(str(visa[9])) == Decimal("500")
        assert ws.auto_filter.ref == "A1:K4"

    def test_report_info(self, tmp_path):
        ws = load_workbook(self.write(tmp_path))["ReportInfo"]
        assert ws["A1"].value == "Figures As Of"
        assert ws["B1"].value == TODAY.isoformat()
        assert ws["B3"].value == 3
        assert ws["B4"].value == TODAY.isoformat()

    def test_report_info_uses_given_instant(self, tmp_path):
        emps = employees()
        as_of = datetime(TODAY.year, TODAY.month, TODAY.day, 9, 30)
        path = write_compliance_report(
            emps, summarize_compliance(emps, as_of), as_of, tmp_path / "compliance.xlsx"
        )
        ws = load_workbook(path)["ReportInfo"]
        assert ws["B1"].value == TODAY.isoformat()
        assert ws["B4"].value == "2025-06-15T09:30:00"
