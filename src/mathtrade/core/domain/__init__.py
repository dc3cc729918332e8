"""
Domain - Entities, value objects, enums and the marker lexicon.
"""

from .enums import DiagnosticKind, LineKind, Severity
from .value_objects import GroupName, ItemReference, ListingId, Reference, format_reference
from .entities import Offer, OfferCatalog, UserSubmission, WantsStatement
from .diagnostics import Diagnostic, DiagnosticLog
from .markers import STALE_MARKERS, detect_staleness, extract_item_references
from .events import (
    CatalogExtracted,
    DomainEvent,
    EventBus,
    ItemNameResolved,
    ListingLoaded,
    SubmissionValidated,
    ValidationCompleted,
    ValidationStarted,
)

__all__ = [
    "DiagnosticKind",
    "LineKind",
    "Severity",
    "GroupName",
    "ItemReference",
    "ListingId",
    "Reference",
    "format_reference",
    "Offer",
    "OfferCatalog",
    "UserSubmission",
    "WantsStatement",
    "Diagnostic",
    "DiagnosticLog",
    "STALE_MARKERS",
    "detect_staleness",
    "extract_item_references",
    "CatalogExtracted",
    "DomainEvent",
    "EventBus",
    "ItemNameResolved",
    "ListingLoaded",
    "SubmissionValidated",
    "ValidationCompleted",
    "ValidationStarted",
]
