"""
BGG Adapter - Implements ListingSourcePort and NameResolverPort for BoardGameGeek.

Geek list documents look like::

    <geeklist id="12345">
        <title>...</title>
        <comment username="...">list level comment</comment>
        <item id="1" objectid="13" objectname="Catan" username="alice">
            <body>...</body>
            <comment username="alice">[thing=822]Carcassonne[/thing]</comment>
        </item>
    </geeklist>

Only comments posted under an item are kept; comments on the list itself are
not offers.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from ...core.domain.value_objects import ListingId
from ...core.exceptions import ListingFormatError, NameResolutionError
from ...core.ports.config_provider import BggConfig
from ...core.ports.listing_source import (
    ListingNotFoundError,
    ListingSourceError,
    ListingSourcePort,
    RawComment,
    RawEntry,
    RawListing,
)
from ...core.ports.name_resolver import NameResolverPort
from .client import BggApiClient


def create_client(config: BggConfig) -> BggApiClient:
    return BggApiClient(
        api_url=config.api_url,
        request_delay=config.request_delay,
        timeout=config.timeout,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
        api_token=config.api_token,
    )


def _api_error(soup: BeautifulSoup) -> Optional[str]:
    """Get the message of an API level error document, if this is one."""
    error = soup.find("error")
    if error is None:
        return None
    message = error.get("message")
    if message:
        return message
    text = error.get_text(" ", strip=True)
    return text or "unknown error"


class BggListingSource(ListingSourcePort):
    """
    BoardGameGeek implementation of the ListingSourcePort.

    Translates geek list XML into RawListing trees.
    """

    def __init__(self, config: Optional[BggConfig] = None, client: Optional[BggApiClient] = None):
        self.config = config or BggConfig()
        self._client = client or create_client(self.config)
        self.logger = logging.getLogger("BggListingSource")

    @property
    def name(self) -> str:
        return "BoardGameGeek"

    def fetch(self, listing_id: ListingId) -> RawListing:
        xml = self._client.get_geeklist(str(listing_id))
        listing = self.parse(str(listing_id), xml)
        self.logger.info(f"Fetched geek list {listing_id}: {len(listing)} entries")
        return listing

    def parse(self, listing_id: str, xml: str) -> RawListing:
        """
        Parse a geek list document.

        Raises:
            ListingNotFoundError: If the document is an API error
            ListingFormatError: If required elements or attributes are missing
        """
        soup = BeautifulSoup(xml, "html.parser")

        error = _api_error(soup)
        if error is not None:
            raise ListingNotFoundError(f"Geek list {listing_id}: {error}")

        root = soup.find("geeklist")
        if root is None:
            raise ListingFormatError(f"Geek list {listing_id}: no <geeklist> element")

        title = root.find("title", recursive=False)
        entries = tuple(
            self._parse_entry(position, item)
            for position, item in enumerate(root.find_all("item", recursive=False), start=1)
        )

        return RawListing(
            listing_id=listing_id,
            entries=entries,
            title=title.get_text(strip=True) if title else None,
        )

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _parse_entry(self, position: int, item: Tag) -> RawEntry:
        attributes = {}
        for attribute in ("id", "objectid", "objectname", "username"):
            value = item.get(attribute)
            if value is None:
                raise ListingFormatError(f"Geek list item {position} has no {attribute!r} attribute")
            attributes[attribute] = value

        body = item.find("body", recursive=False)
        comments = tuple(
            RawComment(author=comment.get("username", ""), text=comment.get_text())
            for comment in item.find_all("comment", recursive=False)
        )

        return RawEntry(
            entry_id=attributes["id"],
            owner=attributes["username"],
            item_id=attributes["objectid"],
            item_name=attributes["objectname"],
            body=body.get_text() if body else "",
            comments=comments,
        )


class BggNameResolver(NameResolverPort):
    """Looks up primary game names through the thing API."""

    def __init__(self, config: Optional[BggConfig] = None, client: Optional[BggApiClient] = None):
        self.config = config or BggConfig()
        self._client = client or create_client(self.config)
        self.logger = logging.getLogger("BggNameResolver")

    def resolve(self, item_id: str) -> str:
        try:
            xml = self._client.get_thing(item_id)
        except ListingSourceError as e:
            raise NameResolutionError(item_id, e.message, cause=e)

        name = self.parse(item_id, xml)
        self.logger.debug(f"Item {item_id} is {name!r}")
        return name

    def parse(self, item_id: str, xml: str) -> str:
        """
        Get the primary name from a thing document.

        Raises:
            NameResolutionError: If the document has no primary name
        """
        soup = BeautifulSoup(xml, "html.parser")

        error = _api_error(soup)
        if error is not None:
            raise NameResolutionError(item_id, error)

        item = soup.find("item")
        if item is None:
            raise NameResolutionError(item_id, "no such thing")

        for name in item.find_all("name", recursive=False):
            if name.get("type") == "primary" and name.get("value"):
                return name["value"]

        raise NameResolutionError(item_id, "thing has no primary name")
