"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (MATHTRADE_LISTING_ID, MATHTRADE_WANTS_DIR, BGG_API_URL, ...)
- .env files
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Callable, Optional

from ...core.exceptions import ConfigError
from ...core.ports.config_provider import (
    AppConfig,
    BggConfig,
    ConfigProviderPort,
    PathsConfig,
)


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("true", "1", "yes", "on")


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Later sources win: .env file, then the environment, then CLI overrides.
    """

    ENV_MAPPING = {
        "MATHTRADE_LISTING_ID": "listing_id",
        "MATHTRADE_WANTS_DIR": "wants_dir",
        "MATHTRADE_CACHE_DIR": "cache_dir",
        "MATHTRADE_OUTPUT_DIR": "output_dir",
        "MATHTRADE_WORKERS": "workers",
        "MATHTRADE_VERBOSE": "verbose",
        "BGG_API_URL": "api_url",
        "BGG_API_TOKEN": "api_token",
        "BGG_REQUEST_DELAY": "request_delay",
        "BGG_TIMEOUT": "timeout",
        "BGG_MAX_RETRIES": "max_retries",
    }

    CLI_MAPPING = {
        "listing": "listing_id",
        "wants_dir": "wants_dir",
        "cache_dir": "cache_dir",
        "output_dir": "output_dir",
        "workers": "workers",
        "api_url": "api_url",
        "verbose": "verbose",
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}

        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """
        Load complete configuration.

        Raises:
            ConfigError: If a numeric setting is not a number
        """
        defaults = BggConfig()
        bgg = BggConfig(
            api_url=self.get("api_url", defaults.api_url),
            request_delay=self._number("request_delay", float, defaults.request_delay),
            timeout=self._number("timeout", float, defaults.timeout),
            max_retries=self._number("max_retries", int, defaults.max_retries),
            retry_delay=defaults.retry_delay,
            api_token=self.get("api_token"),
        )

        paths = PathsConfig(
            wants_dir=Path(self.get("wants_dir", ".")),
            cache_dir=Path(self.get("cache_dir", ".")),
            output_dir=Path(self.get("output_dir", ".")),
        )

        listing_id = self.get("listing_id")
        return AppConfig(
            bgg=bgg,
            paths=paths,
            listing_id=str(listing_id) if listing_id is not None else None,
            verbose=_to_bool(self.get("verbose", False)),
            workers=self._number("workers", int, 1),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("listing_id"):
            errors.append("Missing geek list id - pass it as argument or set MATHTRADE_LISTING_ID")

        for key, cast in (("request_delay", float), ("timeout", float), ("max_retries", int), ("workers", int)):
            try:
                value = self._number(key, cast, 0)
            except ConfigError as e:
                errors.append(e.message)
                continue
            if value < 0:
                errors.append(f"{key} must not be negative")

        wants_dir = self.get("wants_dir")
        if wants_dir and not Path(wants_dir).is_dir():
            errors.append(f"Wants directory not found: {wants_dir}")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _number(self, key: str, cast: Callable[[Any], Any], default: Any) -> Any:
        raw = self.get(key)
        if raw is None or raw == "":
            return default
        try:
            return cast(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {key}: {raw!r}", cause=e)

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"').strip("'")

            if key in self.ENV_MAPPING:
                self._values[self.ENV_MAPPING[key]] = value

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = os.environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        for cli_key, config_key in self.CLI_MAPPING.items():
            if self._cli_overrides.get(cli_key) is not None:
                self._values[config_key] = self._cli_overrides[cli_key]
