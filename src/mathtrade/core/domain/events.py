"""
Domain Events - Things that happened during a run.

Events are immutable records of something that occurred.
They let the CLI report progress without the pipeline knowing about it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class ListingLoaded(DomainEvent):
    """Event: A raw listing was obtained."""

    listing_id: str = ""
    entries: int = 0
    from_cache: bool = False


@dataclass(frozen=True)
class ItemNameResolved(DomainEvent):
    """Event: An unknown item id was looked up through the name resolver."""

    item_id: str = ""
    item_name: str = ""


@dataclass(frozen=True)
class CatalogExtracted(DomainEvent):
    """Event: The offer catalog was built."""

    listing_id: Optional[str] = None
    offers: int = 0
    indices: int = 0
    anomalies: int = 0


@dataclass(frozen=True)
class ValidationStarted(DomainEvent):
    """Event: Wants list validation started."""

    participants: int = 0
    candidates: int = 0


@dataclass(frozen=True)
class SubmissionValidated(DomainEvent):
    """Event: One participant's wants list was processed."""

    username: str = ""
    submitted: bool = True
    statements: int = 0
    errors: int = 0


@dataclass(frozen=True)
class ValidationCompleted(DomainEvent):
    """Event: All wants lists were processed."""

    submissions_received: int = 0
    participants: int = 0
    addressed_offers: int = 0
    addressable_offers: int = 0
    diagnostics: int = 0


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    This enables loose coupling between components.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        # Call specific handlers
        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Call catch-all handlers
        if type(event) is not DomainEvent:
            for handler in self._handlers.get(DomainEvent, []):
                handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
