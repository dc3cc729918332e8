"""
User Validator - Check one participant's wants list against the catalog.

Checks per statement line, in order; the first failing check of the user and
subject stage drops the line, later lines are still processed:

1. declared user must be the file's owner
2. an offer subject must be one of the user's pending offers; a stale offer
   must have an empty wanted list
3. a group subject is recorded as defined
4. each wanted entry must not repeat on the line; wanted offers must exist,
   belong to someone else and not be stale
5. a group made only of offers must cover exactly one game

After the last line, groups must be both defined and used and every live
offer of the user must have been addressed.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...adapters.parsers.wants import WantsLineParser
from ...core.domain.diagnostics import Diagnostic
from ...core.domain.entities import OfferCatalog, UserSubmission, WantsStatement
from ...core.domain.enums import DiagnosticKind, LineKind
from ...core.domain.value_objects import GroupName, Reference


@dataclass
class UserValidationResult:
    """Outcome of validating one user's file."""

    submission: UserSubmission
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def username(self) -> str:
        return self.submission.username

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_error)


class UserValidator:
    """
    Validates wants lists of single users.

    Holds no per-user state between calls, so one instance can validate many
    users, also from several threads.
    """

    def __init__(self, catalog: OfferCatalog, parser: Optional[WantsLineParser] = None):
        self.catalog = catalog
        self.parser = parser or WantsLineParser()
        self.logger = logging.getLogger("UserValidator")

    def validate(self, username: str, lines: Iterable[str]) -> UserValidationResult:
        """
        Validate a user's wants list.

        Args:
            username: Owner of the file
            lines: File contents, one entry per line

        Returns:
            UserValidationResult with accepted statements and diagnostics
        """
        submission = UserSubmission(
            username=username,
            owned_indices=self.catalog.indices_owned_by(username),
        )
        result = UserValidationResult(submission=submission)

        for parsed in self.parser.parse_lines(lines):
            if parsed.kind is LineKind.INSTRUCTION:
                self._report(result, DiagnosticKind.INSTRUCTION_LINE, parsed.text.strip(), parsed.line_number)
            elif parsed.kind is LineKind.SYNTAX_ERROR:
                self._report(result, DiagnosticKind.SYNTAX_ERROR, parsed.error or "", parsed.line_number)
            elif parsed.kind is LineKind.STATEMENT:
                accepted = self._check_statement(result, parsed.statement, parsed.line_number)
                if accepted is not None:
                    submission.statements.append(accepted)

        self._check_groups(result)
        self._check_pending(result)

        self.logger.debug(
            f"{username}: {len(submission.statements)} statements accepted, "
            f"{result.error_count} errors"
        )
        return result

    # -------------------------------------------------------------------------
    # Statement Checks
    # -------------------------------------------------------------------------

    def _check_statement(
        self,
        result: UserValidationResult,
        statement: WantsStatement,
        line: int,
    ) -> Optional[WantsStatement]:
        submission = result.submission

        if statement.declared_user != submission.username:
            self._report(
                result,
                DiagnosticKind.WRONG_USER,
                f"Line declares user {statement.declared_user!r}",
                line,
            )
            return None

        subject = statement.subject
        if isinstance(subject, GroupName):
            submission.defined_names.setdefault(subject, line)
        else:
            if subject not in submission.owned_indices or subject in submission.addressed_indices:
                self._report(
                    result,
                    DiagnosticKind.UNKNOWN_OR_FOREIGN_OFFER_INDEX,
                    self._describe_bad_subject(submission, subject),
                    line,
                    offer_index=subject,
                )
                return None

            submission.address(subject)

            if self.catalog.is_stale(subject) and statement.wanted:
                self._report(
                    result,
                    DiagnosticKind.NON_EMPTY_LIST_FOR_STALE_OFFER,
                    f"Offer {subject} is out of date",
                    line,
                    offer_index=subject,
                )
                return WantsStatement(statement.declared_user, subject, ())

        # Scoped to this line only
        wanted_things: set[Reference] = set()
        accepted: list[Reference] = []

        for ref in statement.wanted:
            if ref in wanted_things:
                self._report(result, DiagnosticKind.REPEATED_WANTED_ITEM, f'Repeated "{ref}"', line)
                continue
            wanted_things.add(ref)

            if isinstance(ref, GroupName):
                submission.referenced_names.setdefault(ref, line)
                accepted.append(ref)
            elif self._check_wanted_index(result, ref, line):
                accepted.append(ref)

        if isinstance(subject, GroupName) and not statement.wanted_names:
            self._check_group_items(result, subject, statement, line)

        return WantsStatement(statement.declared_user, subject, tuple(accepted))

    def _check_wanted_index(self, result: UserValidationResult, index: int, line: int) -> bool:
        if index not in self.catalog:
            kind, detail = DiagnosticKind.UNKNOWN_WANTED_OFFER, f"Wanting unknown offer {index}"
        elif self.catalog.owner_of(index) == result.username:
            kind, detail = DiagnosticKind.WANTING_OWN_OFFER, f"Wanting own offer {index}"
        elif self.catalog.is_stale(index):
            kind, detail = DiagnosticKind.WANTING_STALE_OFFER, f"Wanting out of date offer {index}"
        else:
            return True

        self._report(result, kind, detail, line, offer_index=index)
        return False

    def _check_group_items(
        self,
        result: UserValidationResult,
        subject: GroupName,
        statement: WantsStatement,
        line: int,
    ) -> None:
        item_ids = {
            self.catalog.main_item_id(index)
            for index in statement.wanted_indices
            if index in self.catalog
        }
        if len(item_ids) == 1:
            return

        if item_ids:
            detail = f'Group "{subject}" has {len(item_ids)} different games'
        else:
            detail = f'Group "{subject}" has no games'
        self._report(result, DiagnosticKind.GROUP_REFERENCES_MIXED_ITEMS, detail, line)

    def _describe_bad_subject(self, submission: UserSubmission, index: int) -> str:
        if index not in self.catalog:
            return f"Offer {index} does not exist"
        if index in submission.addressed_indices:
            return f"Offer {index} is already listed"
        return f"Offer {index} belongs to {self.catalog.owner_of(index)}"

    # -------------------------------------------------------------------------
    # File Checks
    # -------------------------------------------------------------------------

    def _check_groups(self, result: UserValidationResult) -> None:
        submission = result.submission

        for name, line in submission.referenced_names.items():
            if name not in submission.defined_names:
                self._report(result, DiagnosticKind.UNDEFINED_GROUP_REFERENCE, f'Use of undefined name "{name}"', line)

        for name, line in submission.defined_names.items():
            if name not in submission.referenced_names:
                self._report(result, DiagnosticKind.UNUSED_GROUP_DEFINITION, f'Defined unused name "{name}"', line)

    def _check_pending(self, result: UserValidationResult) -> None:
        submission = result.submission

        for index in submission.pending_indices:
            if not self.catalog.is_stale(index):
                self._report(
                    result,
                    DiagnosticKind.OFFER_NOT_ADDRESSED,
                    f"Skipped offer {index}",
                    offer_index=index,
                )
            # Empty entry keeps the trade solver from rejecting the merged file
            submission.synthesized.append(WantsStatement(submission.username, index, ()))

    def _report(
        self,
        result: UserValidationResult,
        kind: DiagnosticKind,
        detail: str,
        line: Optional[int] = None,
        offer_index: Optional[int] = None,
    ) -> None:
        result.diagnostics.append(Diagnostic(kind, result.username, detail, line, offer_index))
