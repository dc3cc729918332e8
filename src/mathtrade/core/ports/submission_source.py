"""
Submission Source Port - Locate and read per-user wants list files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from ..exceptions import MathTradeError


class SubmissionNotFoundError(MathTradeError):
    """The wants list file does not exist."""


class SubmissionSourcePort(ABC):
    """Enumerates and opens wants list files."""

    @abstractmethod
    def candidates(self) -> Iterator[tuple[str, Path]]:
        """Yield ``(username, path)`` for every submission file present."""
        ...

    @abstractmethod
    def path_for(self, username: str) -> Path:
        """Get the path where a user's wants list is expected."""
        ...

    @abstractmethod
    def open_for_reading(self, path: Path) -> list[str]:
        """
        Read a wants list file as lines (without line terminators).

        Raises:
            SubmissionNotFoundError: If the file does not exist
        """
        ...
