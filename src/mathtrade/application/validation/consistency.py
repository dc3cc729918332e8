"""
Consistency Checker - Cross-user checks over the whole set of submissions.

Compares the files present with the catalog's participants and produces the
status summary of a validation run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ...core.domain.diagnostics import Diagnostic
from ...core.domain.entities import OfferCatalog, UserSubmission
from ...core.domain.enums import DiagnosticKind


@dataclass
class UserStatus:
    """Submission status of one participant."""

    username: str
    submitted: bool
    offers: int = 0
    addressed: int = 0
    errors: int = 0
    path: Optional[Path] = None


@dataclass
class SubmissionSummary:
    """Totals of a validation run."""

    participants: int = 0
    submissions_received: int = 0
    total_offers: int = 0
    addressable_offers: int = 0
    addressed_offers: int = 0
    # Offers of users who sent a file, whether listed or filled in empty
    covered_offers: int = 0
    statuses: list[UserStatus] = field(default_factory=list)
    unknown_submitters: list[str] = field(default_factory=list)

    @property
    def missing_users(self) -> list[str]:
        return [status.username for status in self.statuses if not status.submitted]

    @property
    def complete(self) -> bool:
        return self.submissions_received == self.participants

    def __str__(self) -> str:
        return (
            f"Received {self.submissions_received}/{self.participants} lists, "
            f"{self.covered_offers}/{self.total_offers} offers covered, "
            f"{self.addressed_offers}/{self.addressable_offers} live offers addressed"
        )


class ConsistencyChecker:
    """Checks that the right people sent wants lists."""

    def __init__(self, catalog: OfferCatalog):
        self.catalog = catalog
        self.logger = logging.getLogger("ConsistencyChecker")

    def find_unknown_submitters(self, candidates: Iterable[tuple[str, Path]]) -> list[Diagnostic]:
        """
        Report submission files that belong to nobody in the catalog.

        Such files are never parsed.
        """
        participants = set(self.catalog.participants())
        diagnostics = []
        for username, path in candidates:
            if username not in participants:
                self.logger.warning(f"Ignoring wants list of non-participant {username}: {path}")
                diagnostics.append(Diagnostic(
                    DiagnosticKind.UNKNOWN_SUBMITTER,
                    username,
                    f"File {path.name} belongs to a user without offers",
                ))
        return diagnostics

    def check_missing(self, submission: UserSubmission) -> list[Diagnostic]:
        """Diagnostics for a participant who sent no wants list."""
        if submission.submitted:
            return []

        diagnostics = [Diagnostic(DiagnosticKind.NOT_SUBMITTED, submission.username, "No wants list received")]
        for index in sorted(submission.owned_indices):
            if not self.catalog.is_stale(index):
                diagnostics.append(Diagnostic(
                    DiagnosticKind.OFFER_NOT_ADDRESSED,
                    submission.username,
                    f"Skipped offer {index}",
                    offer_index=index,
                ))
        return diagnostics

    def summarize(
        self,
        submissions: Iterable[UserSubmission],
        diagnostics: Iterable[Diagnostic] = (),
        unknown_submitters: Iterable[str] = (),
        paths: Optional[dict[str, Path]] = None,
    ) -> SubmissionSummary:
        """Build the run summary from per-user outcomes."""
        errors: dict[str, int] = {}
        for diagnostic in diagnostics:
            if diagnostic.is_error:
                errors[diagnostic.username] = errors.get(diagnostic.username, 0) + 1

        addressable = set(self.catalog.addressable_indices())
        summary = SubmissionSummary(
            total_offers=len(self.catalog),
            addressable_offers=len(addressable),
            unknown_submitters=list(unknown_submitters),
        )

        for submission in submissions:
            summary.participants += 1
            if submission.submitted:
                summary.submissions_received += 1
                summary.covered_offers += len(submission.owned_indices)

            addressed = len(submission.addressed_indices & addressable)
            summary.addressed_offers += addressed
            summary.statuses.append(UserStatus(
                username=submission.username,
                submitted=submission.submitted,
                offers=len(submission.owned_indices),
                addressed=addressed,
                errors=errors.get(submission.username, 0),
                path=(paths or {}).get(submission.username),
            ))

        return summary
