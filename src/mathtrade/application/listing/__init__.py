"""
Listing Module - Obtain raw geek lists.
"""

from .repository import ListingRepository

__all__ = ["ListingRepository"]
