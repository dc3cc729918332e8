"""
Application Layer - Use cases and orchestration.

This layer contains:
- listing/: Cache-first access to raw geek lists
- extraction/: Offer catalog extraction and group suggestions
- validation/: Wants list validation and the run orchestrator
"""

from .listing import ListingRepository
from .extraction import (
    CatalogExtractor,
    ExtractionResult,
    GroupSuggestion,
    ItemNameCache,
    suggest_groups,
)
from .validation import (
    ConsistencyChecker,
    SubmissionSummary,
    TradeValidationOrchestrator,
    UserValidator,
    ValidationResult,
)

__all__ = [
    "ListingRepository",
    "CatalogExtractor",
    "ExtractionResult",
    "GroupSuggestion",
    "ItemNameCache",
    "suggest_groups",
    "ConsistencyChecker",
    "SubmissionSummary",
    "TradeValidationOrchestrator",
    "UserValidator",
    "ValidationResult",
]
