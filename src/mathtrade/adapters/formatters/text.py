"""
Text Formatter - Plain text and BGG markup renditions of run results.

Produces the files organizers publish or feed to the trade solver:
- merged wants list
- diagnostics report (one aligned line per diagnostic)
- offer short list and named group suggestions
- participant list and submission status (BGG forum markup)
"""

from typing import Iterable, Optional
from urllib.parse import quote

from ...core.domain.diagnostics import Diagnostic
from ...core.domain.entities import OfferCatalog, WantsStatement
from ...application.extraction.groups import GroupSuggestion
from ...application.validation.consistency import SubmissionSummary


class TextFormatter:
    """Renders domain results as text documents."""

    STALE_TEXT = "OUT OF DATE"
    LINE_FIELD_WIDTH = len("at line ") + 3

    @property
    def name(self) -> str:
        return "Text"

    # -------------------------------------------------------------------------
    # Validation Output
    # -------------------------------------------------------------------------

    def format_merged_wants(self, statements: Iterable[WantsStatement]) -> str:
        return "".join(statement.to_line() + "\n" for statement in statements)

    def format_diagnostic(self, diagnostic: Diagnostic, user_width: int = 0) -> str:
        """
        Format one diagnostic as ``user; at line N  ; text``.

        The user and line columns are padded so a report lines up.
        """
        if diagnostic.line is not None:
            line_field = f"at line {diagnostic.line:<3}"
        else:
            line_field = " " * self.LINE_FIELD_WIDTH

        text = diagnostic.kind.label
        if diagnostic.detail:
            text += f": {diagnostic.detail}"

        return f"{diagnostic.username:<{user_width}}; {line_field}; {text}"

    def format_diagnostics(self, diagnostics: Iterable[Diagnostic]) -> str:
        items = list(diagnostics)
        width = max((len(d.username) for d in items), default=0)
        return "".join(self.format_diagnostic(d, width) + "\n" for d in items)

    def format_status(self, summary: SubmissionSummary) -> str:
        """
        Submission status for posting on BGG.

        Users who sent a list are struck through, missing ones are bold.
        """
        lines = [
            f"Received wants lists: {summary.submissions_received}/{summary.participants} participants, "
            f"{summary.covered_offers}/{summary.total_offers} offers",
            "",
            "[i][-]Struck through[/-] names sent a wants list and it was processed. "
            "[b]Bold[/b] names have not sent one yet.[/i]",
            "",
        ]
        for status in summary.statuses:
            link = f"[geekurl=/user/{quote(status.username)}]{status.username}[/geekurl]"
            lines.append(f"[-]{link}[/-]" if status.submitted else f"[b]{link}[/b]")
        return "\n".join(lines) + "\n"

    # -------------------------------------------------------------------------
    # Catalog Output
    # -------------------------------------------------------------------------

    def format_users(self, participants: Iterable[str], separator: str = ",") -> str:
        return separator.join(participants)

    def format_short_list(self, catalog: OfferCatalog) -> str:
        """One line per offer index listing every item in it."""
        lines = []
        for primary in catalog:
            parts = []
            for offer in catalog.offers_at(primary.index):
                if offer.is_stale:
                    parts.append(self.STALE_TEXT)
                    if offer.is_primary:
                        break
                else:
                    parts.append(offer.item_name or "?")
            lines.append(f"{primary.index}. {' + '.join(parts)} (from {primary.owner})")
        return "".join(line + "\n" for line in lines)

    def format_groups(
        self,
        suggestions: Iterable[GroupSuggestion],
        by_name: bool = False,
        username: Optional[str] = None,
    ) -> str:
        """Named group lines, ready to paste into a wants list."""
        items = list(suggestions)
        if by_name:
            items.sort(key=lambda suggestion: str(suggestion.name).casefold())
        return "".join(suggestion.to_line(username or "nick") + "\n" for suggestion in items)
