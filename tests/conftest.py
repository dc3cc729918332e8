"""Shared fixtures."""

import pytest

from mathtrade.core.domain import Offer, OfferCatalog


def primary(index, owner, item_id, name, stale=False):
    return Offer(index=index, owner=owner, item_id=item_id, item_name=name, is_stale=stale)


def bundled(index, owner, item_id, name, stale=False):
    return Offer(
        index=index,
        owner=owner,
        item_id=item_id,
        item_name=name,
        is_stale=stale,
        is_primary=False,
    )


@pytest.fixture
def catalog():
    """
    1 userA Chess       2 userA Go
    3 userB Risk        4 userB Catan (out of date)
    5 userC Chess       6 userC Azul + Go
    """
    return OfferCatalog([
        primary(1, "userA", "10", "Chess"),
        primary(2, "userA", "20", "Go"),
        primary(3, "userB", "30", "Risk"),
        primary(4, "userB", "40", "Catan", stale=True),
        primary(5, "userC", "10", "Chess"),
        primary(6, "userC", "50", "Azul"),
        bundled(6, "userC", "20", "Go"),
    ], listing_id="1234")
