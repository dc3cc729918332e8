"""
Formatters - Render results as text documents.
"""

from .text import TextFormatter

__all__ = ["TextFormatter"]
