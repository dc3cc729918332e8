"""
BGG Adapter - BoardGameGeek implementations of the listing source and name resolver.
"""

from .adapter import BggListingSource, BggNameResolver, create_client
from .client import BggApiClient

__all__ = [
    "BggApiClient",
    "BggListingSource",
    "BggNameResolver",
    "create_client",
]
