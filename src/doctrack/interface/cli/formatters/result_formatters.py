"""
CLI result formatters for compliance results.

Separates display logic (rich tables and panels) from command logic.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from doctrack.application.compliance_service import EmployeeListItem, EmployeeReport
from doctrack.domain.doc_types import DocTypeCatalog, display_name
from doctrack.domain.models import (
    AlertSeverity,
    ComplianceNotice,
    ComplianceStats,
    DependencyAlert,
)

logger = logging.getLogger(__name__)
console = Console()

STATUS_STYLES = {
    "penalty_active": "bold red",
    "in_grace": "yellow",
    "expiring_soon": "yellow",
    "incomplete": "dim",
    "valid": "green",
    "none": "dim",
}


def format_status(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def format_money(amount: Decimal, currency: str = "") -> str:
    text = f"{amount:,.2f}"
    return f"{text} {currency}".strip()


def _opt(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


class EmployeeReportFormatter:
    """Formatter for a single employee's documents, rollup and alerts."""

    def display(self, report: EmployeeReport) -> None:
        emp = report.employee
        rollup = report.rollup

        console.print(Panel.fit(
            f"[bold]{emp.employee_name}[/bold]  ({emp.company_name})\n"
            f"Status: {format_status(rollup.compliance_status.value)}\n"
            f"Mandatory documents complete: {rollup.docs_complete}/{rollup.docs_total}\n"
            f"Expired: {rollup.expired_count}  Expiring: {rollup.expiring_count}\n"
            f"As of: {report.as_of.isoformat()}",
            title=f"👤 Employee {emp.employee_id}",
            border_style="cyan",
        ))

        table = Table(title="📄 Documents")
        table.add_column("Document", style="cyan")
        table.add_column("Number")
        table.add_column("Expiry")
        table.add_column("Status")
        table.add_column("Days", justify="right")
        table.add_column("Grace Left", justify="right")
        table.add_column("Penalty Days", justify="right")
        table.add_column("Est. Fine", justify="right")

        for doc in report.documents:
            fact = doc.fact
            name = doc.display_name if fact.is_mandatory else f"{doc.display_name} (optional)"
            table.add_row(
                name,
                fact.document_number or "-",
                fact.expiry_date.isoformat() if fact.expiry_date else "-",
                format_status(doc.status.value),
                _opt(doc.metrics.days_remaining),
                _opt(doc.metrics.grace_days_remaining),
                _opt(doc.metrics.days_in_penalty),
                format_money(doc.metrics.estimated_fine, emp.currency),
            )
        console.print(table)

        if report.alerts:
            DependencyAlertFormatter().display(report.alerts)


class DependencyAlertFormatter:
    """Formatter for dependency alerts."""

    def display(self, alerts: List[DependencyAlert]) -> None:
        if not alerts:
            console.print("[green]✅ No dependency alerts[/green]")
            return

        console.print(f"\n[bold]⚠️  Dependency alerts ({len(alerts)}):[/bold]")
        for alert in alerts:
            color = "red" if alert.severity is AlertSeverity.CRITICAL else "yellow"
            console.print(f"  [{color}]{alert.severity.value.upper():8}[/{color}] {alert.message}")


class EmployeeListFormatter:
    """Formatter for the employee rollup list."""

    def display(self, items: List[EmployeeListItem], catalog: Optional[DocTypeCatalog] = None) -> None:
        table = Table(title=f"👥 Employees ({len(items)})")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Name", style="cyan")
        table.add_column("Company")
        table.add_column("Status")
        table.add_column("Docs", justify="right")
        table.add_column("Expired", justify="right")
        table.add_column("Expiring", justify="right")
        table.add_column("Most Urgent")

        for item in items:
            rollup = item.rollup
            urgent = "-"
            if rollup.urgent_doc_type:
                urgent = f"{display_name(rollup.urgent_doc_type, catalog)} ({rollup.nearest_expiry_days}d)"
            table.add_row(
                item.employee.employee_id,
                item.employee.employee_name,
                item.employee.company_name,
                format_status(rollup.compliance_status.value),
                f"{rollup.docs_complete}/{rollup.docs_total}",
                str(rollup.expired_count),
                str(rollup.expiring_count),
                urgent,
            )
        console.print(table)


class ComplianceStatsFormatter:
    """Formatter for the company-level dashboard."""

    def display(self, stats: ComplianceStats, currency: str = "") -> None:
        by_status = ", ".join(
            f"{status}: {count}" for status, count in sorted(stats.documents_by_status.items())
        ) or "-"
        console.print(Panel.fit(
            f"Employees: [bold]{stats.total_employees}[/bold]   "
            f"Mandatory documents: [bold]{stats.total_documents}[/bold]\n"
            f"Completion rate: [bold]{stats.completion_rate:.2f}%[/bold]\n"
            f"Documents by status: {by_status}\n"
            f"Daily fine exposure: [bold]{format_money(stats.total_daily_exposure, currency)}[/bold]\n"
            f"Accumulated fines: [bold red]{format_money(stats.total_accumulated, currency)}[/bold red]",
            title="📊 Compliance Overview",
            border_style="blue",
        ))

        if stats.company_breakdown:
            table = Table(title="🏢 Companies")
            table.add_column("Company", style="cyan")
            table.add_column("Employees", justify="right")
            table.add_column("Penalties", justify="right")
            table.add_column("Incomplete", justify="right")
            table.add_column("Daily Exposure", justify="right")
            table.add_column("Accumulated", justify="right")
            table.add_column("Status")
            for company in stats.company_breakdown:
                table.add_row(
                    company.company_name,
                    str(company.employee_count),
                    str(company.penalty_count),
                    str(company.incomplete_count),
                    format_money(company.daily_exposure),
                    format_money(company.accumulated_fines),
                    format_status(company.compliance_status.value),
                )
            console.print(table)

        if stats.critical_alerts:
            table = Table(title="🚨 Critical Alerts")
            table.add_column("Employee", style="cyan")
            table.add_column("Company")
            table.add_column("Document")
            table.add_column("Expiry")
            table.add_column("Days Left", justify="right")
            table.add_column("Status")
            table.add_column("Est. Fine", justify="right")
            for alert in stats.critical_alerts:
                table.add_row(
                    alert.employee_name,
                    alert.company_name,
                    display_name(alert.document_type),
                    alert.expiry_date,
                    str(alert.days_left),
                    format_status(alert.status.value),
                    format_money(alert.estimated_fine),
                )
            console.print(table)


class NoticeFormatter:
    """Formatter for compliance notices."""

    def display(self, notices: List[ComplianceNotice]) -> None:
        if not notices:
            console.print("[green]✅ No notices to send today[/green]")
            return

        console.print(f"[bold]🔔 {len(notices)} notice(s):[/bold]")
        for notice in notices:
            console.print(f"  [bold]{notice.title}[/bold]")
            console.print(f"    {notice.message}")


class ValidationResultFormatter:
    """
    Formatter for configuration validation results.
    """

    def display_validation_results(self, errors: List[str], strict: bool) -> None:
        """
        Display validation results to the user.

        Args:
            errors: List of validation error messages
            strict: Whether strict validation was performed
        """
        if not errors:
            mode = "strict " if strict else ""
            console.print(f"[green]✅ All {mode}configuration validation checks passed![/green]")
            return

        console.print(f"[red]❌ Configuration validation failed with {len(errors)} error(s):[/red]")
        for i, error in enumerate(errors, 1):
            console.print(f"  {i}. {error}")


class ConfigSummaryFormatter:
    """
    Formatter for configuration summary results.
    """

    LABELS = {
        "config_directory": "Config directory",
        "using_defaults": "Using built-in defaults",
        "organization": "Organization",
        "currency": "Currency",
        "database_path": "Database",
        "document_types": "Active document types",
        "mandatory_types": "Mandatory types",
        "compliance_rules": "Compliance rules",
        "dependencies": "Dependency rules",
    }

    def display_config_summary(self, summary_data: Dict[str, Any]) -> None:
        table = Table(title="⚙️ Configuration Summary", show_header=False)
        table.add_column("Setting", style="bold")
        table.add_column("Value")
        for key, value in summary_data.items():
            table.add_row(self.LABELS.get(key, key), str(value))
        console.print(table)
