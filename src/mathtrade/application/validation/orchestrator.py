"""
Validation Orchestrator - Coordinates validation of all wants lists.

This is the main entry point for validating a math trade round.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional

from ...adapters.parsers.wants import WantsLineParser
from ...core.domain.diagnostics import Diagnostic, DiagnosticLog
from ...core.domain.entities import OfferCatalog, UserSubmission, WantsStatement
from ...core.domain.enums import Severity
from ...core.domain.events import (
    EventBus,
    SubmissionValidated,
    ValidationCompleted,
    ValidationStarted,
)
from ...core.ports.submission_source import SubmissionNotFoundError, SubmissionSourcePort
from .consistency import ConsistencyChecker, SubmissionSummary
from .validator import UserValidationResult, UserValidator


@dataclass
class ValidationResult:
    """Result of validating every participant's wants list."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    merged: list[WantsStatement] = field(default_factory=list)
    summary: SubmissionSummary = field(default_factory=SubmissionSummary)
    submissions: list[UserSubmission] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def success(self) -> bool:
        return not self.errors


class TradeValidationOrchestrator:
    """
    Orchestrates validation of a whole trade round.

    Phases:
    1. Report submission files from non-participants
    2. Validate each participant's wants list (or note its absence)
    3. Merge accepted statements and summarize

    Users are independent, so step 2 may run in a thread pool. Results are
    always merged in participant order.
    """

    def __init__(
        self,
        catalog: OfferCatalog,
        submissions: SubmissionSourcePort,
        parser: Optional[WantsLineParser] = None,
        event_bus: Optional[EventBus] = None,
        max_workers: int = 1,
    ):
        """
        Initialize the orchestrator.

        Args:
            catalog: Offer catalog of the round
            submissions: Where wants lists are read from
            parser: Wants line parser (default parser if omitted)
            event_bus: Optional event bus
            max_workers: Number of users validated concurrently
        """
        self.catalog = catalog
        self.submissions = submissions
        self.validator = UserValidator(catalog, parser)
        self.checker = ConsistencyChecker(catalog)
        self.event_bus = event_bus or EventBus()
        self.max_workers = max(1, max_workers)
        self.logger = logging.getLogger("TradeValidationOrchestrator")

    def run(
        self,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> ValidationResult:
        """
        Validate all wants lists.

        Args:
            progress_callback: Optional callback(username, done, total)

        Returns:
            ValidationResult with diagnostics, merged statements and summary
        """
        log = DiagnosticLog()
        participants = self.catalog.participants()
        candidates = list(self.submissions.candidates())

        unknown = self.checker.find_unknown_submitters(candidates)
        log.extend(unknown)

        self.logger.info(f"Validating wants lists of {len(participants)} participants")
        self.event_bus.publish(ValidationStarted(
            participants=len(participants),
            candidates=len(candidates),
        ))

        outcomes = self._validate_all(participants, progress_callback)

        result = ValidationResult()
        for outcome in outcomes:
            log.extend(outcome.diagnostics)
            log.extend(self.checker.check_missing(outcome.submission))
            result.submissions.append(outcome.submission)
            result.merged.extend(outcome.submission.merged_statements)

        result.diagnostics = log.items()
        result.summary = self.checker.summarize(
            result.submissions,
            result.diagnostics,
            unknown_submitters=[d.username for d in unknown],
            paths={username: path for username, path in candidates},
        )

        self.logger.info(str(result.summary))
        self.event_bus.publish(ValidationCompleted(
            submissions_received=result.summary.submissions_received,
            participants=result.summary.participants,
            addressed_offers=result.summary.addressed_offers,
            addressable_offers=result.summary.addressable_offers,
            diagnostics=len(result.diagnostics),
        ))
        return result

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _validate_all(
        self,
        participants: list[str],
        progress_callback: Optional[Callable[[str, int, int], None]],
    ) -> list[UserValidationResult]:
        total = len(participants)

        if self.max_workers == 1:
            outcomes = []
            for done, username in enumerate(participants, start=1):
                outcomes.append(self._validate_user(username))
                if progress_callback:
                    progress_callback(username, done, total)
            return outcomes

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            outcomes = list(executor.map(self._validate_user, participants))
        if progress_callback:
            for done, username in enumerate(participants, start=1):
                progress_callback(username, done, total)
        return outcomes

    def _validate_user(self, username: str) -> UserValidationResult:
        path = self.submissions.path_for(username)
        try:
            lines = self.submissions.open_for_reading(path)
        except SubmissionNotFoundError:
            self.logger.warning(f"No wants list from {username}")
            outcome = UserValidationResult(submission=UserSubmission(
                username=username,
                owned_indices=self.catalog.indices_owned_by(username),
                submitted=False,
            ))
        else:
            outcome = self.validator.validate(username, lines)

        self.event_bus.publish(SubmissionValidated(
            username=username,
            submitted=outcome.submission.submitted,
            statements=len(outcome.submission.statements),
            errors=outcome.error_count,
        ))
        return outcome
