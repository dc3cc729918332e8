"""Tests for catalog extraction, the item name cache and group suggestions."""

from unittest.mock import Mock

import pytest

from mathtrade.application.extraction import (
    CatalogExtractor,
    ItemNameCache,
    suggest_groups,
    transform_name,
)
from mathtrade.core.domain import (
    CatalogExtracted,
    DiagnosticKind,
    EventBus,
    ItemNameResolved,
    Offer,
    OfferCatalog,
)
from mathtrade.core.exceptions import (
    ItemNameConflictError,
    ListingFormatError,
    NameResolutionError,
)
from mathtrade.core.ports import NameResolverPort, RawComment, RawEntry, RawListing


def entry(entry_id, owner, item_id, name, body="", comments=()):
    return RawEntry(entry_id, owner, item_id, name, body, tuple(RawComment(*c) for c in comments))


@pytest.fixture
def resolver():
    resolver = Mock(spec=NameResolverPort)
    resolver.resolve.side_effect = lambda item_id: {"900": "Dixit", "901": "Hive"}[item_id]
    return resolver


class TestCatalogExtractor:
    """Tests for CatalogExtractor."""

    @pytest.fixture
    def extractor(self, resolver):
        return CatalogExtractor(ItemNameCache(resolver))

    def test_primary_offers(self, extractor):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess"),
            entry("b", "bob", "20", "Go", body="Nieaktualne, sorry"),
        ))

        result = extractor.extract(raw)
        catalog = result.catalog

        assert catalog.listing_id == "1"
        assert [o.item_name for o in catalog] == ["Chess", "Go"]
        assert catalog.owner_of(2) == "bob"
        assert catalog.is_stale(2)
        assert not result.has_anomalies

    def test_bundled_items_from_owner_comments(self, extractor, resolver):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[
                ("alice", "also [thing=900]Dixit[/thing]"),
            ]),
        ))

        catalog = extractor.extract(raw).catalog

        bundle = catalog.offers_at(1)[1]
        assert bundle == Offer(1, "alice", "900", "Dixit", is_primary=False, label="Dixit")
        resolver.resolve.assert_called_once_with("900")

    def test_known_names_are_not_looked_up(self, extractor, resolver):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[("alice", "[thing=20]my Go[/thing]")]),
            entry("b", "bob", "20", "Go"),
        ))

        result = extractor.extract(raw)

        assert result.catalog.offers_at(1)[1].item_name == "Go"
        assert result.lookups == 0
        resolver.resolve.assert_not_called()

    def test_repeated_unknown_item_is_looked_up_once(self, extractor, resolver):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[("alice", "[thing=900]x[/thing]")]),
            entry("b", "bob", "20", "Go", comments=[("bob", "[thing=900]y[/thing]")]),
        ))

        result = extractor.extract(raw)

        assert result.lookups == 1
        assert result.names["900"] == "Dixit"

    def test_foreign_comment_is_reported_and_ignored(self, extractor):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[("bob", "Want [thing=900]Dixit[/thing]?")]),
        ))

        result = extractor.extract(raw)

        assert len(result.catalog.offers_at(1)) == 1
        [diagnostic] = result.diagnostics
        assert diagnostic.kind is DiagnosticKind.FOREIGN_COMMENT
        assert diagnostic.username == "alice"
        assert diagnostic.offer_index == 1
        assert "bob" in diagnostic.detail

    def test_stale_comment_becomes_placeholder(self, extractor, resolver):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[
                ("alice", "[thing=900]Dixit[/thing] NIEAKTUALNE"),
            ]),
        ))

        catalog = extractor.extract(raw).catalog

        placeholder = catalog.offers_at(1)[1]
        assert placeholder.is_placeholder
        assert placeholder.is_stale
        assert not catalog.is_stale(1)
        resolver.resolve.assert_not_called()

    def test_comment_without_link(self, extractor):
        raw = RawListing("1", (entry("a", "alice", "10", "Chess", comments=[("alice", "Mint condition")]),))

        result = extractor.extract(raw)

        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.NO_ITEM_REFERENCE]
        assert len(result.catalog.offers_at(1)) == 1

    def test_comment_with_several_links(self, extractor):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[
                ("alice", "[thing=900]Dixit[/thing] and [thing=901]Hive[/thing]"),
            ]),
        ))

        result = extractor.extract(raw)

        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.MULTIPLE_ITEM_REFERENCES]
        assert [o.item_name for o in result.catalog.offers_at(1)] == ["Chess", "Dixit", "Hive"]

    def test_conflicting_names_are_fatal(self, extractor):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess"),
            entry("b", "bob", "10", "Szachy"),
        ))

        with pytest.raises(ItemNameConflictError):
            extractor.extract(raw)

    def test_resolver_failure_is_fatal(self, resolver):
        resolver.resolve.side_effect = NameResolutionError("900", "timeout")
        extractor = CatalogExtractor(ItemNameCache(resolver))
        raw = RawListing("1", (entry("a", "alice", "10", "Chess", comments=[("alice", "[thing=900]x[/thing]")]),))

        with pytest.raises(NameResolutionError):
            extractor.extract(raw)

    def test_entry_without_owner(self, extractor):
        with pytest.raises(ListingFormatError):
            extractor.extract(RawListing("1", (entry("a", "", "10", "Chess"),)))

    def test_empty_listing(self, extractor):
        result = extractor.extract(RawListing("1"))

        assert len(result.catalog) == 0

    def test_publishes_event(self, resolver):
        bus = EventBus()
        extractor = CatalogExtractor(ItemNameCache(resolver, event_bus=bus), event_bus=bus)
        raw = RawListing("1", (entry("a", "alice", "10", "Chess", comments=[("alice", "[thing=900]x[/thing]")]),))

        extractor.extract(raw)

        types = [type(event) for event in bus.get_history()]
        assert types == [ItemNameResolved, CatalogExtracted]
        assert bus.get_history()[-1].offers == 2

    def test_extraction_is_deterministic(self, resolver):
        raw = RawListing("1", (
            entry("a", "alice", "10", "Chess", comments=[("alice", "[thing=900]x[/thing]"), ("bob", "hi")]),
            entry("b", "bob", "20", "Go", body="NIEAKTUALNA"),
        ))

        first = CatalogExtractor(ItemNameCache(resolver)).extract(raw)
        second = CatalogExtractor(ItemNameCache(resolver)).extract(raw)

        assert first.catalog.offers == second.catalog.offers
        assert first.diagnostics == second.diagnostics


class TestItemNameCache:
    """Tests for ItemNameCache."""

    def test_remember_same_name_twice(self):
        cache = ItemNameCache()
        cache.remember("1", "Chess")
        cache.remember("1", "Chess")

        assert cache.snapshot() == {"1": "Chess"}

    def test_remember_conflict(self):
        cache = ItemNameCache(known={"1": "Chess"})

        with pytest.raises(ItemNameConflictError) as exc_info:
            cache.remember("1", "Szachy")

        assert exc_info.value.known_name == "Chess"

    def test_resolve_without_resolver(self):
        with pytest.raises(NameResolutionError):
            ItemNameCache().resolve("1")

    def test_resolve_seeded_name(self, resolver):
        cache = ItemNameCache(resolver, known={"900": "Dixit (cached)"})

        assert cache.resolve("900") == "Dixit (cached)"
        assert cache.lookups == 0

    def test_empty_name_from_resolver(self):
        resolver = Mock(spec=NameResolverPort)
        resolver.resolve.return_value = ""

        with pytest.raises(NameResolutionError):
            ItemNameCache(resolver).resolve("1")

    def test_separate_caches_do_not_share_state(self, resolver):
        first = ItemNameCache(resolver)
        first.resolve("900")

        second = ItemNameCache(resolver)

        assert "900" in first
        assert "900" not in second
        assert len(second) == 0


class TestGroupSuggestions:
    """Tests for suggest_groups."""

    @pytest.mark.parametrize("name,expected", [
        ("Chess", "CHESS"),
        ("Ticket to Ride: Europe", "TICKET_TO_RIDE__EUROPE"),
        ("Wsiąść do pociągu", "WSIĄŚĆ_DO_POCIĄGU"),
        ("7 Wonders", "7_WONDERS"),
    ])
    def test_transform_name(self, name, expected):
        assert transform_name(name) == expected

    def test_same_names_get_suffix(self):
        catalog = OfferCatalog([
            Offer(1, "a", "1", "Go!"),
            Offer(2, "b", "2", "Go?"),
            Offer(3, "c", "3", "Go."),
        ])

        names = [str(s.name) for s in suggest_groups(catalog)]

        assert names == ["%GO_", "%GO__1", "%GO__1_1"]

    def test_empty_name_falls_back_to_id(self):
        catalog = OfferCatalog([Offer(1, "a", "77", "")])

        assert str(suggest_groups(catalog)[0].name) == "%ITEM_77"

    def test_stale_offers_are_left_out(self, catalog):
        suggestions = {s.item_id: s.indices for s in suggest_groups(catalog)}

        assert "40" not in suggestions
        assert suggestions["20"] == (2, 6)

    def test_to_line(self, catalog):
        suggestion = suggest_groups(catalog)[0]

        assert suggestion.to_line("alice") == "(alice) %CHESS : 1 5"
