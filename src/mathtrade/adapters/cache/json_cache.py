"""
JSON Listing Cache - Store raw listings as JSON files.

One file per geek list, ``listing-<id>.json``, holding the raw entry tree and
the item names resolved while extracting it. Staleness and item links are not
stored; they are derived from the raw text again on every run.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Union

from ...core.domain.value_objects import ListingId
from ...core.ports.listing_source import (
    CachedListing,
    ListingCachePort,
    ListingNotFoundError,
    RawComment,
    RawEntry,
    RawListing,
)

FORMAT_VERSION = 1


def _atomic_write_json(path: Path, payload: dict[str, Any]) -> None:
    """Write to a temp file, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    tmp_path.replace(path)


def listing_to_dict(cached: CachedListing) -> dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "listing": asdict(cached.raw),
        "names": dict(cached.names),
    }


def listing_from_dict(payload: dict[str, Any]) -> CachedListing:
    """
    Rebuild a cached listing.

    Raises:
        KeyError, TypeError, ValueError: If the payload has the wrong shape
    """
    if payload.get("version") != FORMAT_VERSION:
        raise ValueError(f"Unsupported cache format {payload.get('version')!r}")

    listing = payload["listing"]
    entries = tuple(
        RawEntry(
            entry_id=entry["entry_id"],
            owner=entry["owner"],
            item_id=entry["item_id"],
            item_name=entry["item_name"],
            body=entry.get("body", ""),
            comments=tuple(
                RawComment(author=comment["author"], text=comment["text"])
                for comment in entry.get("comments", [])
            ),
        )
        for entry in listing["entries"]
    )

    return CachedListing(
        raw=RawListing(
            listing_id=listing["listing_id"],
            entries=entries,
            title=listing.get("title"),
        ),
        names={str(key): str(value) for key, value in payload.get("names", {}).items()},
    )


class JsonListingCache(ListingCachePort):
    """Listing cache backed by a directory of JSON files."""

    def __init__(self, directory: Union[str, Path] = "."):
        self.directory = Path(directory)
        self.logger = logging.getLogger("JsonListingCache")

    def path_for(self, listing_id: ListingId) -> Path:
        return self.directory / f"listing-{listing_id}.json"

    def load(self, listing_id: ListingId) -> CachedListing:
        path = self.path_for(listing_id)
        if not path.exists():
            raise ListingNotFoundError(f"No cached copy of listing {listing_id}")

        try:
            with path.open("r", encoding="utf-8") as f:
                cached = listing_from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable cache file {path}: {e}")
            raise ListingNotFoundError(f"Cached copy of listing {listing_id} is unreadable", cause=e)

        self.logger.debug(f"Loaded {path}")
        return cached

    def save(self, listing_id: ListingId, cached: CachedListing) -> None:
        path = self.path_for(listing_id)
        _atomic_write_json(path, listing_to_dict(cached))
        self.logger.debug(f"Saved {path}")

    def delete(self, listing_id: ListingId) -> bool:
        path = self.path_for(listing_id)
        if not path.exists():
            return False
        path.unlink()
        return True
