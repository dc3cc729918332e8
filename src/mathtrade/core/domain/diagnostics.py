"""
Diagnostics - Typed, non-fatal anomalies reported by extraction and validation.

Diagnostics are append-only. Nothing already recorded is ever rolled back,
and recording one never stops processing.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .enums import DiagnosticKind, Severity


@dataclass(frozen=True)
class Diagnostic:
    """
    A single reported anomaly.

    Attributes:
        kind: What went wrong
        username: User the diagnostic is about (list owner or comment author)
        detail: Free-text description
        line: 1-indexed line of the wants list file, if any
        offer_index: Geek list index the diagnostic refers to, if any
    """

    kind: DiagnosticKind
    username: str
    detail: str = ""
    line: Optional[int] = None
    offer_index: Optional[int] = None

    @property
    def severity(self) -> Severity:
        return self.kind.severity

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        where = f" at line {self.line}" if self.line is not None else ""
        text = f"[{self.severity.value.upper()}] {self.username}{where}: {self.kind.label}"
        if self.detail:
            text += f" - {self.detail}"
        return text


class DiagnosticLog:
    """
    Append-only diagnostics sink.

    Safe for concurrent appends; a batch added with ``extend`` stays
    contiguous so one user's diagnostics keep their line order.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()):
        self._lock = threading.Lock()
        self._items: list[Diagnostic] = list(diagnostics)

    def add(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._items.append(diagnostic)

    def report(
        self,
        kind: DiagnosticKind,
        username: str,
        detail: str = "",
        line: Optional[int] = None,
        offer_index: Optional[int] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind, username, detail, line, offer_index)
        self.add(diagnostic)
        return diagnostic

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        batch = list(diagnostics)
        with self._lock:
            self._items.extend(batch)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def items(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._items)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items())

    def __bool__(self) -> bool:
        return len(self) > 0
