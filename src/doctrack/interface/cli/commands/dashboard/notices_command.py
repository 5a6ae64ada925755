"""
Dashboard notices command - today's penalty, grace and expiry notices.
"""

import logging
from typing import Any, Dict, List

import typer

from doctrack.application.container import Container
from doctrack.domain.models import ComplianceNotice
from doctrack.interface.cli.formatters.result_formatters import NoticeFormatter
from ..common import console, echo_json, fail, get_container

logger = logging.getLogger(__name__)


def notice_to_dict(notice: ComplianceNotice) -> Dict[str, Any]:
    return {
        "type": notice.kind.value,
        "title": notice.title,
        "message": notice.message,
        "employeeId": notice.employee_id,
        "documentType": notice.document_type,
        "documentId": notice.document_id,
    }


class DashboardNoticesCommand:
    """
    Builds today's notices.

    By default notices already recorded as sent today are left out;
    --mark-sent records the listed notices so the next run skips them.
    """

    def __init__(self, container: Container):
        self.container = container
        self.formatter = NoticeFormatter()

    def execute(
        self, include_sent: bool = False, mark_sent: bool = False, as_json: bool = False
    ) -> List[ComplianceNotice]:
        service = self.container.compliance_service
        notices = service.notices(only_unsent=not include_sent)

        if as_json:
            echo_json([notice_to_dict(n) for n in notices])
        else:
            self.formatter.display(notices)

        if mark_sent and notices:
            written = service.mark_notices_sent(notices)
            if not as_json:
                console.print(f"[blue]📬 Marked {written} notice(s) as sent[/blue]")
        return notices


def dashboard_notices(
    ctx: typer.Context,
    include_sent: bool = typer.Option(
        False, "--all", help="Include notices already marked as sent today."
    ),
    mark_sent: bool = typer.Option(
        False, "--mark-sent", help="Record the listed notices as sent today."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
):
    """
    List today's compliance notices for documents needing attention.
    """
    command = DashboardNoticesCommand(get_container(ctx))
    try:
        command.execute(include_sent=include_sent, mark_sent=mark_sent, as_json=as_json)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Notices", e)
