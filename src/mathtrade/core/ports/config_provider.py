"""
Config Provider Port - Abstract interface for configuration sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass
class BggConfig:
    """BoardGameGeek XML API settings."""

    api_url: str = "https://boardgamegeek.com/xmlapi2"
    # Pause before each request; BGG throttles aggressive clients
    request_delay: float = 0.5
    timeout: float = 30.0
    # HTTP 202 means the list is queued for generation; retry after a pause
    max_retries: int = 5
    retry_delay: float = 2.0
    api_token: Optional[str] = None


@dataclass
class PathsConfig:
    """Where files are read from and written to."""

    wants_dir: Path = field(default_factory=lambda: Path("."))
    cache_dir: Path = field(default_factory=lambda: Path("."))
    output_dir: Path = field(default_factory=lambda: Path("."))
    wants_extension: str = ".txt"


@dataclass
class AppConfig:
    """Complete application configuration."""

    bgg: BggConfig = field(default_factory=BggConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    listing_id: Optional[str] = None
    verbose: bool = False
    workers: int = 1


class ConfigProviderPort(ABC):
    """Loads configuration from some source."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set a single configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """Validate configuration. Returns a list of problems (empty if valid)."""
        ...
