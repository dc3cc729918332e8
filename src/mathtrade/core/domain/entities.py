"""
Domain Entities - Offers, the offer catalog and parsed wants lists.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..exceptions import CatalogIntegrityError
from .value_objects import GroupName, Reference, format_reference


@dataclass(frozen=True)
class Offer:
    """
    One tradeable item instance.

    The primary offer of an index is the game of the geek list entry itself;
    secondary offers come from item links in the owner's comments and share
    the entry's index. A stale comment without items is kept as a placeholder
    secondary offer with no item.
    """

    index: int
    owner: str
    item_id: Optional[str]
    item_name: Optional[str]
    is_stale: bool = False
    is_primary: bool = True
    label: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.item_id is None


class OfferCatalog:
    """
    Ordered, indexed, read-only collection of offers.

    Invariants (checked on construction):
    - every index has exactly one primary offer,
    - primary indices are contiguous starting at 1,
    - secondary offers share index and owner with their primary offer.
    """

    def __init__(self, offers: Iterable[Offer], listing_id: Optional[str] = None):
        self.listing_id = listing_id
        self._offers = tuple(offers)

        primaries: dict[int, Offer] = {}
        grouped: dict[int, list[Offer]] = {}
        for offer in self._offers:
            grouped.setdefault(offer.index, []).append(offer)
            if offer.is_primary:
                if offer.index in primaries:
                    raise CatalogIntegrityError(f"Duplicate primary offer for index {offer.index}")
                primaries[offer.index] = offer

        if sorted(primaries) != list(range(1, len(primaries) + 1)):
            raise CatalogIntegrityError("Offer indices must be contiguous and start at 1")

        owned: dict[str, set[int]] = {}
        for index, group in grouped.items():
            primary = primaries.get(index)
            if primary is None:
                raise CatalogIntegrityError(f"Index {index} has no primary offer")
            if any(offer.owner != primary.owner for offer in group):
                raise CatalogIntegrityError(f"Offers at index {index} have different owners")
            owned.setdefault(primary.owner, set()).add(index)

        self._primaries: Mapping[int, Offer] = MappingProxyType(dict(sorted(primaries.items())))
        self._by_index: Mapping[int, tuple[Offer, ...]] = MappingProxyType(
            {index: tuple(group) for index, group in sorted(grouped.items())}
        )
        self._owned: Mapping[str, frozenset[int]] = MappingProxyType(
            {owner: frozenset(indices) for owner, indices in owned.items()}
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @property
    def offers(self) -> tuple[Offer, ...]:
        return self._offers

    def indices(self) -> tuple[int, ...]:
        return tuple(self._primaries)

    def primary(self, index: int) -> Offer:
        return self._primaries[index]

    def get(self, index: int) -> Optional[Offer]:
        return self._primaries.get(index)

    def offers_at(self, index: int) -> tuple[Offer, ...]:
        return self._by_index.get(index, ())

    def owner_of(self, index: int) -> str:
        return self._primaries[index].owner

    def is_stale(self, index: int) -> bool:
        return self._primaries[index].is_stale

    def main_item_id(self, index: int) -> Optional[str]:
        return self._primaries[index].item_id

    def indices_owned_by(self, user: str) -> frozenset[int]:
        return self._owned.get(user, frozenset())

    def participants(self) -> list[str]:
        """Distinct owners, case-insensitively sorted."""
        return sorted(self._owned, key=lambda name: (name.casefold(), name))

    def addressable_indices(self) -> tuple[int, ...]:
        """Indices of offers that are still in the trading pool."""
        return tuple(index for index, offer in self._primaries.items() if not offer.is_stale)

    # -------------------------------------------------------------------------
    # Item groups
    # -------------------------------------------------------------------------

    def item_groups(self) -> dict[str, tuple[int, ...]]:
        """
        Map item ids to the indices of live offers containing that item.

        Stale entries are skipped entirely, as are stale or placeholder
        comment offers. The same item appearing twice under one index is
        listed once. Items are ordered by first appearance.
        """
        groups: dict[str, list[int]] = {}
        for index, primary in self._primaries.items():
            if primary.is_stale:
                continue
            for offer in self._by_index[index]:
                if offer.is_stale or offer.is_placeholder:
                    continue
                indices = groups.setdefault(offer.item_id, [])
                if index not in indices:
                    indices.append(index)
        return {item_id: tuple(indices) for item_id, indices in groups.items()}

    def item_names(self) -> dict[str, str]:
        names: dict[str, str] = {}
        for offer in self._offers:
            if not offer.is_placeholder:
                names.setdefault(offer.item_id, offer.item_name)
        return names

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __contains__(self, index: object) -> bool:
        return index in self._primaries

    def __len__(self) -> int:
        return len(self._primaries)

    def __iter__(self) -> Iterator[Offer]:
        return iter(self._primaries.values())

    def __repr__(self) -> str:
        return f"OfferCatalog(listing_id={self.listing_id!r}, offers={len(self)})"


@dataclass(frozen=True)
class WantsStatement:
    """
    One statement line of a wants list.

    ``wanted`` keeps references in the order they were written, including
    repetitions; the validator decides what a repetition means.
    """

    declared_user: str
    subject: Reference
    wanted: tuple[Reference, ...] = ()

    @property
    def subject_is_group(self) -> bool:
        return isinstance(self.subject, GroupName)

    @property
    def wanted_indices(self) -> frozenset[int]:
        return frozenset(ref for ref in self.wanted if isinstance(ref, int))

    @property
    def wanted_names(self) -> frozenset[GroupName]:
        return frozenset(ref for ref in self.wanted if isinstance(ref, GroupName))

    def to_line(self) -> str:
        """Render the canonical ``(user) subject : wanted ...`` form."""
        head = f"({self.declared_user}) {format_reference(self.subject)} :"
        if not self.wanted:
            return head
        return head + " " + " ".join(format_reference(ref) for ref in self.wanted)


@dataclass
class UserSubmission:
    """
    Validation state of one participant's wants list.

    Lives only for the duration of that user's validation pass.
    """

    username: str
    owned_indices: frozenset[int] = frozenset()
    submitted: bool = True

    statements: list[WantsStatement] = field(default_factory=list)
    synthesized: list[WantsStatement] = field(default_factory=list)

    # Group name -> line number of its first definition / use
    defined_names: dict[GroupName, int] = field(default_factory=dict)
    referenced_names: dict[GroupName, int] = field(default_factory=dict)

    addressed_indices: set[int] = field(default_factory=set)

    def address(self, index: int) -> None:
        if index not in self.owned_indices:
            raise ValueError(f"Offer {index} does not belong to {self.username}")
        self.addressed_indices.add(index)

    @property
    def pending_indices(self) -> list[int]:
        return sorted(self.owned_indices - self.addressed_indices)

    @property
    def merged_statements(self) -> list[WantsStatement]:
        return self.statements + self.synthesized
