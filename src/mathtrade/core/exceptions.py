"""
Exceptions - Centralized exception hierarchy.

Everything raised here is fatal for a run: the pipeline aborts and no merged
output is written. Recoverable problems are reported as diagnostics instead
(see ``core.domain.diagnostics``).
"""

from typing import Optional

__all__ = [
    "MathTradeError",
    "ListingIdError",
    "ListingFormatError",
    "ItemNameConflictError",
    "NameResolutionError",
    "CatalogIntegrityError",
    "ConfigError",
]


class MathTradeError(Exception):
    """Base class for all fatal mathtrade errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ListingIdError(MathTradeError, ValueError):
    """A geek list identifier is not a positive integer."""


class ListingFormatError(MathTradeError):
    """The raw listing document is missing required structure."""


class ItemNameConflictError(MathTradeError):
    """Two different display names were seen for the same item id."""

    def __init__(self, item_id: str, known_name: str, new_name: str):
        super().__init__(
            f"Item {item_id} is already known as {known_name!r}, got {new_name!r}"
        )
        self.item_id = item_id
        self.known_name = known_name
        self.new_name = new_name


class NameResolutionError(MathTradeError):
    """The name resolver could not produce a display name for an item."""

    def __init__(self, item_id: str, message: str, cause: Optional[Exception] = None):
        super().__init__(f"Cannot resolve name of item {item_id}: {message}", cause=cause)
        self.item_id = item_id


class CatalogIntegrityError(MathTradeError):
    """An offer catalog was built from inconsistent offers."""


class ConfigError(MathTradeError):
    """Configuration is missing or invalid."""
