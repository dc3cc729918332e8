"""Tests for the validation orchestrator and the consistency checker."""

from pathlib import Path

import pytest

from mathtrade.adapters.submissions import DirectorySubmissionSource
from mathtrade.application.validation import ConsistencyChecker, TradeValidationOrchestrator
from mathtrade.core.domain import (
    DiagnosticKind,
    EventBus,
    SubmissionValidated,
    UserSubmission,
    ValidationCompleted,
    ValidationStarted,
)


@pytest.fixture
def wants_dir(tmp_path):
    (tmp_path / "userA.txt").write_text("(userA) 1 : 3 5\n(userA) 2 : 6\n", encoding="utf-8")
    (tmp_path / "userB.txt").write_text("# mine\n(userB) 3 : 1\n", encoding="utf-8")
    (tmp_path / "stranger.txt").write_text("(stranger) 1 : 2\n", encoding="utf-8")
    return tmp_path


class TestTradeValidationOrchestrator:
    """Tests for TradeValidationOrchestrator."""

    @pytest.fixture
    def orchestrator(self, catalog, wants_dir):
        return TradeValidationOrchestrator(catalog, DirectorySubmissionSource(wants_dir))

    def test_diagnostics(self, orchestrator):
        result = orchestrator.run()

        assert [(d.kind, d.username, d.offer_index) for d in result.diagnostics] == [
            (DiagnosticKind.UNKNOWN_SUBMITTER, "stranger", None),
            (DiagnosticKind.NOT_SUBMITTED, "userC", None),
            (DiagnosticKind.OFFER_NOT_ADDRESSED, "userC", 5),
            (DiagnosticKind.OFFER_NOT_ADDRESSED, "userC", 6),
        ]
        assert not result.success
        assert [d.kind for d in result.warnings] == [DiagnosticKind.UNKNOWN_SUBMITTER]

    def test_merged_statements(self, orchestrator):
        result = orchestrator.run()

        assert [s.to_line() for s in result.merged] == [
            "(userA) 1 : 3 5",
            "(userA) 2 : 6",
            "(userB) 3 : 1",
            "(userB) 4 :",
        ]

    def test_summary(self, orchestrator, wants_dir):
        summary = orchestrator.run().summary

        assert summary.participants == 3
        assert summary.submissions_received == 2
        assert summary.total_offers == 6
        assert summary.addressable_offers == 5
        assert summary.addressed_offers == 3
        assert summary.covered_offers == 4
        assert summary.unknown_submitters == ["stranger"]
        assert summary.missing_users == ["userC"]
        assert not summary.complete

        status = {s.username: s for s in summary.statuses}
        assert status["userA"].path == wants_dir / "userA.txt"
        assert status["userC"].path is None
        assert status["userC"].errors == 2

    def test_all_lists_received(self, catalog, wants_dir):
        (wants_dir / "userC.txt").write_text("(userC) 5 : 1\n(userC) 6 : 3\n", encoding="utf-8")

        result = TradeValidationOrchestrator(catalog, DirectorySubmissionSource(wants_dir)).run()

        assert result.errors == []
        assert result.success
        assert result.summary.complete
        assert result.summary.addressed_offers == result.summary.addressable_offers

    def test_errors_in_one_list_do_not_stop_others(self, catalog, wants_dir):
        (wants_dir / "userA.txt").write_text("(userA) 1 : 1\nnonsense\n(userA) 2 : 6\n", encoding="utf-8")

        result = TradeValidationOrchestrator(catalog, DirectorySubmissionSource(wants_dir)).run()

        kinds = [d.kind for d in result.diagnostics if d.username == "userA"]
        assert kinds == [DiagnosticKind.WANTING_OWN_OFFER, DiagnosticKind.SYNTAX_ERROR]
        assert "(userB) 3 : 1" in [s.to_line() for s in result.merged]

    def test_list_in_legacy_encoding_does_not_stop_the_run(self, catalog, wants_dir):
        (wants_dir / "userA.txt").write_bytes("# łódź\n(userA) 1 : 3 5\n(userA) 2 : 6\n".encode("cp1250"))

        result = TradeValidationOrchestrator(catalog, DirectorySubmissionSource(wants_dir)).run()

        assert [d.username for d in result.errors] == ["userC", "userC"]
        assert [s.to_line() for s in result.merged][:2] == ["(userA) 1 : 3 5", "(userA) 2 : 6"]

    def test_parallel_run_matches_sequential(self, catalog, wants_dir):
        source = DirectorySubmissionSource(wants_dir)

        sequential = TradeValidationOrchestrator(catalog, source).run()
        parallel = TradeValidationOrchestrator(catalog, source, max_workers=4).run()

        assert parallel.diagnostics == sequential.diagnostics
        assert parallel.merged == sequential.merged

    def test_progress_callback(self, orchestrator):
        calls = []

        orchestrator.run(progress_callback=lambda *args: calls.append(args))

        assert calls == [("userA", 1, 3), ("userB", 2, 3), ("userC", 3, 3)]

    def test_events(self, catalog, wants_dir):
        bus = EventBus()

        TradeValidationOrchestrator(catalog, DirectorySubmissionSource(wants_dir), event_bus=bus).run()

        events = bus.get_history()
        assert isinstance(events[0], ValidationStarted)
        assert events[0].candidates == 3
        validated = [e for e in events if isinstance(e, SubmissionValidated)]
        assert [(e.username, e.submitted) for e in validated] == [
            ("userA", True),
            ("userB", True),
            ("userC", False),
        ]
        assert isinstance(events[-1], ValidationCompleted)
        assert events[-1].submissions_received == 2


class TestConsistencyChecker:
    """Tests for ConsistencyChecker."""

    def test_unknown_submitters(self, catalog):
        checker = ConsistencyChecker(catalog)

        diagnostics = checker.find_unknown_submitters([
            ("userA", Path("userA.txt")),
            ("usera", Path("usera.txt")),
        ])

        assert [d.username for d in diagnostics] == ["usera"]
        assert diagnostics[0].detail == "File usera.txt belongs to a user without offers"

    def test_submitted_user_is_not_missing(self, catalog):
        submission = UserSubmission("userA", catalog.indices_owned_by("userA"))

        assert ConsistencyChecker(catalog).check_missing(submission) == []

    def test_missing_user_with_only_stale_offers_left(self, catalog):
        submission = UserSubmission("userB", catalog.indices_owned_by("userB"), submitted=False)

        diagnostics = ConsistencyChecker(catalog).check_missing(submission)

        assert [(d.kind, d.offer_index) for d in diagnostics] == [
            (DiagnosticKind.NOT_SUBMITTED, None),
            (DiagnosticKind.OFFER_NOT_ADDRESSED, 3),
        ]

    def test_summary_text(self, catalog):
        submissions = [
            UserSubmission(user, catalog.indices_owned_by(user), submitted=(user != "userC"))
            for user in catalog.participants()
        ]

        summary = ConsistencyChecker(catalog).summarize(submissions)

        assert str(summary) == "Received 2/3 lists, 4/6 offers covered, 0/5 live offers addressed"
