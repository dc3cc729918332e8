"""
Group Suggestions - Named group templates for every live item.

Participants copy these lines into their wants lists instead of typing named
groups by hand, which is where most wants list mistakes come from.
"""

from dataclasses import dataclass

from ...core.domain.entities import OfferCatalog
from ...core.domain.value_objects import GroupName


@dataclass(frozen=True)
class GroupSuggestion:
    """A ready-made named group covering all live offers of one item."""

    item_id: str
    item_name: str
    name: GroupName
    indices: tuple[int, ...]

    def to_line(self, username: str = "nick") -> str:
        return f"({username}) {self.name} : " + " ".join(str(index) for index in self.indices)


def transform_name(name: str) -> str:
    """Upper-case a display name and replace anything but letters and digits with '_'."""
    return "".join(char.upper() if char.isalnum() else "_" for char in name)


def suggest_groups(catalog: OfferCatalog) -> list[GroupSuggestion]:
    """
    Build one group per item id, in order of the item's first appearance.

    Different items whose names transform to the same text get ``_1``
    appended until the name is unique.
    """
    names = catalog.item_names()
    used: set[str] = set()
    suggestions: list[GroupSuggestion] = []

    for item_id, indices in catalog.item_groups().items():
        text = transform_name(names[item_id]) or f"ITEM_{transform_name(item_id)}"
        while text in used:
            text += "_1"
        used.add(text)

        suggestions.append(GroupSuggestion(
            item_id=item_id,
            item_name=names[item_id],
            name=GroupName(GroupName.SIGIL + text),
            indices=indices,
        ))

    return suggestions
