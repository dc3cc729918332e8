"""
Catalog Extractor - Turn a raw geek list into an offer catalog.

Each entry becomes the primary offer of its index. Comments written by the
entry's owner may bundle further games through item links; each link becomes
a secondary offer under the same index. Comments by anybody else are reported
and ignored.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...core.domain.diagnostics import Diagnostic, DiagnosticLog
from ...core.domain.entities import Offer, OfferCatalog
from ...core.domain.enums import DiagnosticKind
from ...core.domain.events import CatalogExtracted, EventBus
from ...core.domain.markers import STALE_MARKERS, detect_staleness, extract_item_references
from ...core.exceptions import ListingFormatError
from ...core.ports.listing_source import RawComment, RawEntry, RawListing
from .name_cache import ItemNameCache


@dataclass
class ExtractionResult:
    """Catalog plus everything noticed while building it."""

    catalog: OfferCatalog
    diagnostics: list[Diagnostic] = field(default_factory=list)
    names: dict[str, str] = field(default_factory=dict)
    lookups: int = 0

    @property
    def has_anomalies(self) -> bool:
        return len(self.diagnostics) > 0


class CatalogExtractor:
    """
    Builds an OfferCatalog from a RawListing.

    Every primary entry name is registered with the name cache before any
    comment is looked at, so the resolver is only consulted for games that
    appear exclusively in comment links.
    """

    def __init__(
        self,
        name_cache: Optional[ItemNameCache] = None,
        stale_markers: Iterable[str] = STALE_MARKERS,
        event_bus: Optional[EventBus] = None,
    ):
        self.names = name_cache if name_cache is not None else ItemNameCache()
        self.stale_markers = tuple(stale_markers)
        self.event_bus = event_bus
        self.logger = logging.getLogger("CatalogExtractor")

    def extract(self, raw: RawListing) -> ExtractionResult:
        """
        Extract offers from the listing.

        Raises:
            ListingFormatError: If an entry lacks owner or item id
            ItemNameConflictError: If one item id carries two names
            NameResolutionError: If a comment-only item cannot be named
        """
        log = DiagnosticLog()

        for position, entry in enumerate(raw.entries, start=1):
            self._check_entry(position, entry)
            self.names.remember(entry.item_id, entry.item_name)

        offers: list[Offer] = []
        for index, entry in enumerate(raw.entries, start=1):
            offers.append(Offer(
                index=index,
                owner=entry.owner,
                item_id=entry.item_id,
                item_name=entry.item_name,
                is_stale=detect_staleness(entry.body, self.stale_markers),
                is_primary=True,
            ))
            for comment in entry.comments:
                offers.extend(self._comment_offers(index, entry, comment, log))

        catalog = OfferCatalog(offers, listing_id=raw.listing_id)
        self.logger.info(
            f"Extracted {len(offers)} offers under {len(catalog)} indices "
            f"({len(log)} anomalies, {self.names.lookups} name lookups)"
        )

        if self.event_bus:
            self.event_bus.publish(CatalogExtracted(
                listing_id=raw.listing_id,
                offers=len(offers),
                indices=len(catalog),
                anomalies=len(log),
            ))

        return ExtractionResult(
            catalog=catalog,
            diagnostics=log.items(),
            names=self.names.snapshot(),
            lookups=self.names.lookups,
        )

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _check_entry(self, position: int, entry: RawEntry) -> None:
        if not entry.owner:
            raise ListingFormatError(f"Entry {position} ({entry.entry_id}) has no owner")
        if not entry.item_id:
            raise ListingFormatError(f"Entry {position} ({entry.entry_id}) has no item id")

    def _comment_offers(
        self,
        index: int,
        entry: RawEntry,
        comment: RawComment,
        log: DiagnosticLog,
    ) -> list[Offer]:
        where = f'offer {index} ("{entry.item_name}" from {entry.owner})'

        if comment.author != entry.owner:
            log.report(
                DiagnosticKind.FOREIGN_COMMENT,
                entry.owner,
                f"Comment from {comment.author} on {where}",
                offer_index=index,
            )
            return []

        if detect_staleness(comment.text, self.stale_markers):
            return [Offer(
                index=index,
                owner=entry.owner,
                item_id=None,
                item_name=None,
                is_stale=True,
                is_primary=False,
            )]

        references = list(extract_item_references(comment.text))
        if not references:
            log.report(
                DiagnosticKind.NO_ITEM_REFERENCE,
                entry.owner,
                f"No game link in comment on {where}",
                offer_index=index,
            )
            return []

        if len(references) > 1:
            log.report(
                DiagnosticKind.MULTIPLE_ITEM_REFERENCES,
                entry.owner,
                f"{len(references)} game links in one comment on {where}",
                offer_index=index,
            )

        return [
            Offer(
                index=index,
                owner=entry.owner,
                item_id=reference.item_id,
                item_name=self.names.resolve(reference.item_id),
                is_stale=False,
                is_primary=False,
                label=reference.label,
            )
            for reference in references
        ]
