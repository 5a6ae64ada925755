"""
Shared pytest fixtures for the DocTrack test suite.
"""

import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parents[1] / "src"))

import pytest

from doctrack.domain.models import DocumentFact, FineType

# Reference "today" used throughout the suite
TODAY = date(2025, 6, 15)


def make_fact(
    document_type: str = "emirates_id",
    expiry_date: date | None = None,
    document_number: str | None = "784-1990-1234567-1",
    grace_period_days: int = 0,
    fine_per_day: str | int = 0,
    fine_type: FineType | str = FineType.DAILY,
    fine_cap: str | int = 0,
    is_mandatory: bool = True,
    document_id: str | None = None,
) -> DocumentFact:
    """Build a DocumentFact with sensible defaults."""
    return DocumentFact(
        document_type=document_type,
        document_number=document_number,
        expiry_date=expiry_date,
        grace_period_days=grace_period_days,
        fine_per_day=Decimal(str(fine_per_day)),
        fine_type=fine_type,
        fine_cap=Decimal(str(fine_cap)),
        is_mandatory=is_mandatory,
        document_id=document_id,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def fact_factory():
    return make_fact


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() calls made by CLI tests (their streams are closed afterwards)."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
