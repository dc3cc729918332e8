"""
Item Name Cache - Per-run memo of item id to display name.

Owned by one extraction run (or seeded from a cached listing) so separate runs
never share state. Repeated references reuse the first name; a different name
for a known id is fatal because grouping offers by item relies on stable names.
"""

import logging
import threading
from typing import Mapping, Optional

from ...core.domain.events import EventBus, ItemNameResolved
from ...core.exceptions import ItemNameConflictError, NameResolutionError
from ...core.ports.name_resolver import NameResolverPort


class ItemNameCache:
    """Memoizes item names, consulting the resolver at most once per id."""

    def __init__(
        self,
        resolver: Optional[NameResolverPort] = None,
        known: Optional[Mapping[str, str]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._resolver = resolver
        self._names: dict[str, str] = dict(known or {})
        self._event_bus = event_bus
        self._lock = threading.RLock()
        self._lookups = 0
        self.logger = logging.getLogger("ItemNameCache")

    def remember(self, item_id: str, name: str) -> None:
        """
        Record the name of an item.

        Raises:
            ItemNameConflictError: If the item is already known by another name
        """
        with self._lock:
            known = self._names.get(item_id)
            if known is None:
                self._names[item_id] = name
            elif known != name:
                raise ItemNameConflictError(item_id, known, name)

    def resolve(self, item_id: str) -> str:
        """
        Get the name of an item, asking the resolver if it is not known yet.

        Raises:
            NameResolutionError: If there is no resolver or it fails
        """
        with self._lock:
            if item_id in self._names:
                return self._names[item_id]

            if self._resolver is None:
                raise NameResolutionError(item_id, "no name resolver configured")

            self.logger.debug(f"Resolving name of item {item_id}")
            name = self._resolver.resolve(item_id)
            if not name:
                raise NameResolutionError(item_id, "resolver returned an empty name")

            self._names[item_id] = name
            self._lookups += 1

        if self._event_bus:
            self._event_bus.publish(ItemNameResolved(item_id=item_id, item_name=name))
        return name

    @property
    def lookups(self) -> int:
        """Number of resolver calls made."""
        return self._lookups

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._names)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._names

    def __len__(self) -> int:
        return len(self._names)
