"""
Name Resolver Port - Look up the canonical display name of an item.

Used only for item ids that never appear as a geek list entry (games bundled
through comment links). Calls may be slow and throttled.
"""

from abc import ABC, abstractmethod


class NameResolverPort(ABC):
    """Resolves item ids to display names, one id at a time."""

    @abstractmethod
    def resolve(self, item_id: str) -> str:
        """
        Get the display name of an item.

        Raises:
            NameResolutionError: If the name cannot be determined
        """
        ...
