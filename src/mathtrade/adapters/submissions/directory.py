"""
Directory Submission Source - Wants lists as ``<username>.txt`` files in one directory.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from ...core.ports.submission_source import SubmissionNotFoundError, SubmissionSourcePort


class DirectorySubmissionSource(SubmissionSourcePort):
    """
    Reads UTF-8 wants lists named after their owners.

    Files listed in ``exclude`` (this tool's own reports when they are written
    to the same directory) are never offered as candidates.
    """

    def __init__(
        self,
        directory: Union[str, Path] = ".",
        extension: str = ".txt",
        exclude: Iterable[Union[str, Path]] = (),
    ):
        self.directory = Path(directory)
        self.extension = extension if extension.startswith(".") else f".{extension}"
        self.exclude = {Path(path).resolve() for path in exclude}
        self.logger = logging.getLogger("DirectorySubmissionSource")

    def candidates(self) -> Iterator[tuple[str, Path]]:
        if not self.directory.is_dir():
            self.logger.warning(f"Wants directory {self.directory} does not exist")
            return
        for path in sorted(self.directory.glob(f"*{self.extension}")):
            if path.is_file() and path.resolve() not in self.exclude:
                yield path.name[: -len(self.extension)], path

    def path_for(self, username: str) -> Path:
        return self.directory / f"{username}{self.extension}"

    def open_for_reading(self, path: Path) -> list[str]:
        try:
            # Universal newlines; a BOM left by some editors is dropped and
            # bytes that are not UTF-8 (cp1250 files) become U+FFFD
            with path.open("r", encoding="utf-8-sig", errors="replace", newline=None) as f:
                return [line.rstrip("\n") for line in f]
        except FileNotFoundError as e:
            raise SubmissionNotFoundError(f"No wants list at {path}", cause=e)
