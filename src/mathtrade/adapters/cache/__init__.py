"""
Cache Adapters - Local storage for downloaded listings.
"""

from .json_cache import JsonListingCache

__all__ = ["JsonListingCache"]
