"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Listing sources: BoardGameGeek XML API 2
- Listing caches: JSON files
- Submission sources: wants list directory
- Parsers: wants list lines
- Config: Environment variables
- Formatters: text reports (import ``adapters.formatters`` directly)
"""

from .bgg import BggApiClient, BggListingSource, BggNameResolver
from .cache import JsonListingCache
from .submissions import DirectorySubmissionSource
from .parsers import WantsLineParser
from .config import EnvironmentConfigProvider

__all__ = [
    "BggApiClient",
    "BggListingSource",
    "BggNameResolver",
    "JsonListingCache",
    "DirectorySubmissionSource",
    "WantsLineParser",
    "EnvironmentConfigProvider",
]
