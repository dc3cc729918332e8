"""
Listing Source Port - Abstract interface for obtaining the raw geek list.

The raw listing is the hierarchical document the catalog extractor consumes:
entries in list order, each with its owner, game and the comments posted under
it. How it is obtained (BGG API, a cached file, a test fixture) is up to the
adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..domain.value_objects import ListingId
from ..exceptions import MathTradeError


class ListingSourceError(MathTradeError):
    """The listing could not be retrieved."""


class ListingNotFoundError(ListingSourceError):
    """No listing (or no cached copy) exists for the identifier."""


@dataclass(frozen=True)
class RawComment:
    """A comment posted under a geek list entry."""

    author: str
    text: str


@dataclass(frozen=True)
class RawEntry:
    """One geek list entry as published."""

    entry_id: str
    owner: str
    item_id: str
    item_name: str
    body: str = ""
    comments: tuple[RawComment, ...] = ()


@dataclass(frozen=True)
class RawListing:
    """The whole geek list, entries in publication order."""

    listing_id: str
    entries: tuple[RawEntry, ...] = ()
    title: Optional[str] = None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class CachedListing:
    """A raw listing together with item names resolved while extracting it."""

    raw: RawListing
    names: dict[str, str] = field(default_factory=dict)


class ListingSourcePort(ABC):
    """Retrieves raw listings from their origin."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the source name (e.g., 'BoardGameGeek')."""
        ...

    @abstractmethod
    def fetch(self, listing_id: ListingId) -> RawListing:
        """
        Retrieve the listing.

        Raises:
            ListingNotFoundError: If no listing has this identifier
            ListingSourceError: On transport problems
            ListingFormatError: If the returned document is malformed
        """
        ...


class ListingCachePort(ABC):
    """Persists raw listings between runs."""

    @abstractmethod
    def load(self, listing_id: ListingId) -> CachedListing:
        """
        Load a previously saved listing.

        Raises:
            ListingNotFoundError: If there is no usable cached copy
        """
        ...

    @abstractmethod
    def save(self, listing_id: ListingId, cached: CachedListing) -> None:
        """Save a listing, replacing any previous copy."""
        ...

    @abstractmethod
    def delete(self, listing_id: ListingId) -> bool:
        """Remove a cached copy. Returns True if something was removed."""
        ...
