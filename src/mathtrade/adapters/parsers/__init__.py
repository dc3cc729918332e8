"""
Document Parsers - Convert wants list text into domain statements.
"""

from .wants import ParsedLine, WantsLineParser

__all__ = ["ParsedLine", "WantsLineParser"]
