"""
Listing Repository - Cache-first access to raw geek lists.

A listing is downloaded once and reused from the cache afterwards, together
with the item names that had to be looked up while extracting it. Refreshing
drops the cached copy first, so a failed download never leaves a stale one
behind.
"""

import logging
from typing import Optional

from ...core.domain.events import EventBus, ListingLoaded
from ...core.domain.value_objects import ListingId
from ...core.ports.listing_source import (
    CachedListing,
    ListingCachePort,
    ListingNotFoundError,
    ListingSourcePort,
)
from ...core.ports.name_resolver import NameResolverPort
from ..extraction import CatalogExtractor, ExtractionResult, ItemNameCache


class ListingRepository:
    """Combines a listing source with a listing cache."""

    def __init__(
        self,
        source: ListingSourcePort,
        cache: ListingCachePort,
        event_bus: Optional[EventBus] = None,
    ):
        self.source = source
        self.cache = cache
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("ListingRepository")

    def get(self, listing_id: ListingId, refresh: bool = False) -> CachedListing:
        """
        Get a listing, from the cache if possible.

        Args:
            listing_id: Geek list identifier
            refresh: Drop any cached copy and download again

        Returns:
            The cached listing (raw document plus known item names)
        """
        if refresh:
            self.delete(listing_id)
        else:
            try:
                cached = self.cache.load(listing_id)
            except ListingNotFoundError:
                self.logger.debug(f"Listing {listing_id} is not cached")
            else:
                self.logger.info(f"Using cached listing {listing_id} ({len(cached.raw)} entries)")
                self._publish(listing_id, cached, from_cache=True)
                return cached

        self.logger.info(f"Downloading listing {listing_id} from {self.source.name}")
        cached = CachedListing(raw=self.source.fetch(listing_id))
        self.cache.save(listing_id, cached)
        self._publish(listing_id, cached, from_cache=False)
        return cached

    def delete(self, listing_id: ListingId) -> bool:
        removed = self.cache.delete(listing_id)
        if removed:
            self.logger.info(f"Removed cached listing {listing_id}")
        return removed

    def extract(
        self,
        listing_id: ListingId,
        resolver: Optional[NameResolverPort] = None,
        refresh: bool = False,
    ) -> ExtractionResult:
        """
        Get a listing and build its offer catalog.

        Names looked up during extraction are written back to the cache so the
        next run does not query them again.
        """
        cached = self.get(listing_id, refresh=refresh)
        names = ItemNameCache(resolver=resolver, known=cached.names, event_bus=self.event_bus)
        result = CatalogExtractor(name_cache=names, event_bus=self.event_bus).extract(cached.raw)

        if result.names != cached.names:
            self.cache.save(listing_id, CachedListing(raw=cached.raw, names=result.names))
        return result

    def _publish(self, listing_id: ListingId, cached: CachedListing, from_cache: bool) -> None:
        self.event_bus.publish(ListingLoaded(
            listing_id=str(listing_id),
            entries=len(cached.raw),
            from_cache=from_cache,
        ))
