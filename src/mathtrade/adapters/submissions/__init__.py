"""
Submission Adapters - Where wants lists are read from.
"""

from .directory import DirectorySubmissionSource

__all__ = ["DirectorySubmissionSource"]
