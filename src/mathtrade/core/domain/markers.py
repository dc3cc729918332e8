"""
Marker Lexicon - Textual conventions embedded in free-text listing posts.

Two conventions are recognized:

- Staleness markers: participants edit an entry or comment to contain
  ``NIEAKTUALNE`` / ``NIEAKTUALNA`` ("out of date") when the offer is gone.
- Item links: BGG markup ``[thing=ID]label[/thing]`` used inside comments to
  bundle additional games into an offer.

Both functions are pure so they can be tested against plain tables of input
and expected output.
"""

import re
from typing import Iterable, Iterator

from .value_objects import ItemReference


STALE_MARKERS: tuple[str, ...] = ("NIEAKTUALNE", "NIEAKTUALNA")

ITEM_REFERENCE_PATTERN = re.compile(
    r"\[thing=(?P<id>[^\]]+)\](?P<label>[^\]]*)\[/thing\]",
    re.IGNORECASE,
)


def detect_staleness(text: str, markers: Iterable[str] = STALE_MARKERS) -> bool:
    """
    Check whether text carries a staleness marker.

    Plain case-insensitive substring test; there is no word boundary logic so
    any text containing a marker (even inside a longer word) counts.
    """
    folded = text.casefold()
    return any(marker.casefold() in folded for marker in markers)


def extract_item_references(text: str) -> Iterator[ItemReference]:
    """
    Yield item links found in text, left to right, without overlaps.

    Every call returns a fresh iterator. No match at all is a valid outcome.
    """
    for match in ITEM_REFERENCE_PATTERN.finditer(text):
        yield ItemReference(
            item_id=match.group("id"),
            label=match.group("label"),
            raw=match.group(0),
        )
