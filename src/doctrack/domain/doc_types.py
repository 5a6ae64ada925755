"""
Document type catalog and display names.

Holds the fixed table of mandatory UAE employee documents with their
default fine schedules, plus an immutable catalog that lets configuration
override names and mandatory flags without any process-wide mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping

from doctrack.domain.models import FineType


@dataclass(frozen=True)
class DocTypeEntry:
    """
    Catalog entry for one document type.

    Attributes:
        doc_type: Type key (slug)
        display_name: Human-readable label
        is_mandatory: Whether every employee must hold it
        grace_period_days: Default grace period
        fine_per_day: Default fine rate
        fine_type: Default fine type
        fine_cap: Default cap (0 = uncapped)
        sort_order: Display ordering
    """

    doc_type: str
    display_name: str
    is_mandatory: bool = True
    grace_period_days: int = 0
    fine_per_day: Decimal = Decimal("0")
    fine_type: FineType = FineType.DAILY
    fine_cap: Decimal = Decimal("0")
    sort_order: int = 0


# Grace periods: only Emirates ID (30d) and Work Permit/Labour Card (50d).
MANDATORY_DOCS: tuple[DocTypeEntry, ...] = (
    DocTypeEntry("passport", "Passport", sort_order=10),
    DocTypeEntry(
        "visa", "Residence Visa",
        fine_per_day=Decimal("50"), sort_order=20,
    ),
    DocTypeEntry(
        "emirates_id", "Emirates ID",
        grace_period_days=30, fine_per_day=Decimal("20"),
        fine_cap=Decimal("1000"), sort_order=30,
    ),
    DocTypeEntry(
        "work_permit", "Work Permit / Labour Card",
        grace_period_days=50, fine_per_day=Decimal("500"),
        fine_type=FineType.ONE_TIME, fine_cap=Decimal("500"), sort_order=40,
    ),
    DocTypeEntry(
        "iloe_insurance", "ILOE Insurance",
        fine_per_day=Decimal("400"), fine_type=FineType.ONE_TIME,
        fine_cap=Decimal("400"), sort_order=60,
    ),
)

# Names for known non-mandatory types
EXTRA_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType({
    "health_insurance": "Health Insurance",
    "medical_fitness": "Medical Fitness Certificate",
    "trade_license": "Trade License",
})


def humanize_doc_type(doc_type: str) -> str:
    """Turn a slug like "labour_card" into "Labour Card"."""
    if not doc_type:
        return "Document"
    words = doc_type.replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


class DocTypeCatalog:
    """
    Read-only lookup of document types.

    Entries given to the catalog take precedence over the fixed tables;
    names fall back to EXTRA_DISPLAY_NAMES and finally to a humanized slug.

    Usage:
        catalog = DocTypeCatalog(config_entries)
        catalog.display_name("emirates_id")   # "Emirates ID"
        catalog.is_mandatory("trade_license")  # False
    """

    def __init__(
        self,
        entries: Iterable[DocTypeEntry] = MANDATORY_DOCS,
        display_names: Mapping[str, str] | None = None,
    ):
        ordered = sorted(entries, key=lambda e: (e.sort_order, e.doc_type))
        self._entries: Mapping[str, DocTypeEntry] = MappingProxyType(
            {entry.doc_type: entry for entry in ordered}
        )
        self._names: Mapping[str, str] = MappingProxyType(dict(display_names or {}))

    def __contains__(self, doc_type: object) -> bool:
        return doc_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[DocTypeEntry, ...]:
        return tuple(self._entries.values())

    @property
    def mandatory_types(self) -> tuple[str, ...]:
        """Mandatory type keys in display order."""
        return tuple(e.doc_type for e in self._entries.values() if e.is_mandatory)

    def get(self, doc_type: str) -> DocTypeEntry | None:
        return self._entries.get(doc_type)

    def display_name(self, doc_type: str) -> str:
        """Return the human-readable name for a document type."""
        if doc_type in self._names:
            return self._names[doc_type]
        entry = self._entries.get(doc_type)
        if entry is not None:
            return entry.display_name
        for md in MANDATORY_DOCS:
            if md.doc_type == doc_type:
                return md.display_name
        if doc_type in EXTRA_DISPLAY_NAMES:
            return EXTRA_DISPLAY_NAMES[doc_type]
        return humanize_doc_type(doc_type)

    def is_mandatory(self, doc_type: str, fallback: bool = False) -> bool:
        """
        Check whether a type is mandatory.

        Args:
            doc_type: Type key
            fallback: Answer for types the catalog does not know
                      (typically the document's own stored flag)
        """
        entry = self._entries.get(doc_type)
        if entry is None:
            return fallback
        return entry.is_mandatory


DEFAULT_CATALOG = DocTypeCatalog()


def display_name(doc_type: str, catalog: DocTypeCatalog | None = None) -> str:
    """Human-readable name for a document type."""
    if catalog is None:
        catalog = DEFAULT_CATALOG
    return catalog.display_name(doc_type)


def is_mandatory_type(doc_type: str) -> bool:
    """Check if a document type is in the fixed mandatory list."""
    return any(md.doc_type == doc_type for md in MANDATORY_DOCS)
