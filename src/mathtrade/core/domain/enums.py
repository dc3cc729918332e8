"""
Domain Enums - Diagnostic taxonomy and parsed line kinds.
"""

from enum import Enum


class Severity(Enum):
    """Severity level for diagnostics."""

    ERROR = "error"  # The submission or listing must be fixed
    WARNING = "warning"  # Processing continued, data may be incomplete
    INFO = "info"  # Status information, nothing to fix


class DiagnosticKind(Enum):
    """Every anomaly the extraction and validation stages can report."""

    # Catalog extraction
    FOREIGN_COMMENT = "foreign_comment"
    NO_ITEM_REFERENCE = "no_item_reference"
    MULTIPLE_ITEM_REFERENCES = "multiple_item_references"

    # Wants-list grammar
    SYNTAX_ERROR = "syntax_error"
    INSTRUCTION_LINE = "instruction_line"

    # Per-user semantics
    WRONG_USER = "wrong_user"
    UNKNOWN_OR_FOREIGN_OFFER_INDEX = "unknown_or_foreign_offer_index"
    NON_EMPTY_LIST_FOR_STALE_OFFER = "non_empty_list_for_stale_offer"
    UNKNOWN_WANTED_OFFER = "unknown_wanted_offer"
    WANTING_OWN_OFFER = "wanting_own_offer"
    WANTING_STALE_OFFER = "wanting_stale_offer"
    REPEATED_WANTED_ITEM = "repeated_wanted_item"
    GROUP_REFERENCES_MIXED_ITEMS = "group_references_mixed_items"
    UNDEFINED_GROUP_REFERENCE = "undefined_group_reference"
    UNUSED_GROUP_DEFINITION = "unused_group_definition"
    OFFER_NOT_ADDRESSED = "offer_not_addressed"

    # Cross-user status
    UNKNOWN_SUBMITTER = "unknown_submitter"
    NOT_SUBMITTED = "not_submitted"

    @property
    def severity(self) -> Severity:
        if self in _WARNING_KINDS:
            return Severity.WARNING
        if self in _INFO_KINDS:
            return Severity.INFO
        return Severity.ERROR

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Wanting own offer``."""
        return self.value.replace("_", " ").capitalize()


_WARNING_KINDS = frozenset({
    DiagnosticKind.FOREIGN_COMMENT,
    DiagnosticKind.NO_ITEM_REFERENCE,
    DiagnosticKind.MULTIPLE_ITEM_REFERENCES,
    DiagnosticKind.UNKNOWN_SUBMITTER,
})

_INFO_KINDS = frozenset({
    DiagnosticKind.INSTRUCTION_LINE,
    DiagnosticKind.NOT_SUBMITTED,
})


class LineKind(Enum):
    """Classification of a single wants-list line."""

    BLANK = "blank"
    COMMENT = "comment"
    INSTRUCTION = "instruction"
    STATEMENT = "statement"
    SYNTAX_ERROR = "syntax_error"
