"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .listing_source import (
    CachedListing,
    ListingCachePort,
    ListingNotFoundError,
    ListingSourceError,
    ListingSourcePort,
    RawComment,
    RawEntry,
    RawListing,
)
from .name_resolver import NameResolverPort
from .submission_source import SubmissionNotFoundError, SubmissionSourcePort
from .config_provider import AppConfig, BggConfig, ConfigProviderPort, PathsConfig

__all__ = [
    "CachedListing",
    "ListingCachePort",
    "ListingNotFoundError",
    "ListingSourceError",
    "ListingSourcePort",
    "RawComment",
    "RawEntry",
    "RawListing",
    "NameResolverPort",
    "SubmissionNotFoundError",
    "SubmissionSourcePort",
    "AppConfig",
    "BggConfig",
    "ConfigProviderPort",
    "PathsConfig",
]
