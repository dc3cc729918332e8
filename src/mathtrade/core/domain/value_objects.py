"""
Value Objects - Immutable objects defined by their values.
"""

import re
from dataclasses import dataclass
from typing import Union

from ..exceptions import ListingIdError


@dataclass(frozen=True)
class ListingId:
    """
    Geek list identifier.

    Only the general shape is checked (a positive integer string); whether a
    list with this id exists is up to the listing source.
    """

    value: str

    def __post_init__(self):
        if not re.fullmatch(r"[0-9]+", self.value or "") or int(self.value) == 0:
            raise ListingIdError(f"{self.value!r} is not a valid geek list identifier")

    @classmethod
    def parse(cls, text: Union[str, int, "ListingId"]) -> "ListingId":
        if isinstance(text, ListingId):
            return text
        return cls(str(text).strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ItemReference:
    """An inline ``[thing=ID]label[/thing]`` token found in free text."""

    item_id: str
    label: str
    raw: str


@dataclass(frozen=True)
class GroupName:
    """A user-defined named group, always carrying its ``%`` sigil."""

    value: str

    SIGIL = "%"

    def __post_init__(self):
        if not self.value.startswith(self.SIGIL) or len(self.value) < 2:
            raise ValueError(f"Group name must start with {self.SIGIL!r}: {self.value!r}")

    def __str__(self) -> str:
        return self.value


# A subject or wanted entry on a wants line: an offer index or a named group.
Reference = Union[int, GroupName]


def format_reference(ref: Reference) -> str:
    return str(ref)
