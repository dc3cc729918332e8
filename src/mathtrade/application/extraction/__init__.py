"""
Extraction Module - Build the offer catalog from a raw listing.
"""

from .extractor import CatalogExtractor, ExtractionResult
from .groups import GroupSuggestion, suggest_groups, transform_name
from .name_cache import ItemNameCache

__all__ = [
    "CatalogExtractor",
    "ExtractionResult",
    "GroupSuggestion",
    "ItemNameCache",
    "suggest_groups",
    "transform_name",
]
