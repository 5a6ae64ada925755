"""
DocTrack - UAE labour document compliance tracker.

Derives compliance status, remaining days and accrued fines for employee
documents (passport, visa, Emirates ID, work permit, insurance, ...) and
rolls them up per employee and per company.

Usage:
    # CLI (recommended)
    doctrack employee list --status expiring

    # Programmatic
    from doctrack.application.container import Container

    container = Container()
    stats = container.compliance_service.compliance_stats()
"""

__version__ = "0.1.0"
__author__ = "DocTrack Team"

__all__ = ["__version__"]
