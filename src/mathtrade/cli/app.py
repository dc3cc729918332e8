"""
mathtrade - Math trade tools for BoardGameGeek geek lists.

Usage:
    # Download a geek list (again) and cache it
    mathtrade fetch 123456

    # Short list of offers and ready-made named groups
    mathtrade catalog 123456

    # Comma separated list of participants
    mathtrade users 123456

    # Validate all wants lists in a directory and merge them
    mathtrade validate 123456 --wants-dir lists/

Environment Variables:
    MATHTRADE_LISTING_ID: Default geek list id
    MATHTRADE_WANTS_DIR: Directory with <username>.txt wants lists
    MATHTRADE_CACHE_DIR: Directory for downloaded geek lists
    MATHTRADE_OUTPUT_DIR: Directory for generated files
    BGG_API_URL, BGG_API_TOKEN, BGG_REQUEST_DELAY, BGG_TIMEOUT: BoardGameGeek access
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ..adapters.bgg import BggListingSource, BggNameResolver, create_client
from ..adapters.cache import JsonListingCache
from ..adapters.config import EnvironmentConfigProvider
from ..adapters.formatters import TextFormatter
from ..adapters.submissions import DirectorySubmissionSource
from ..application.extraction import ExtractionResult, suggest_groups
from ..application.listing import ListingRepository
from ..application.validation import TradeValidationOrchestrator
from ..core.domain.events import EventBus, ItemNameResolved, SubmissionValidated
from ..core.domain.value_objects import ListingId
from ..core.exceptions import ConfigError, ListingIdError, MathTradeError, NameResolutionError
from ..core.ports.config_provider import AppConfig
from ..core.ports.listing_source import ListingSourceError, ListingSourcePort
from ..core.ports.name_resolver import NameResolverPort
from .exit_codes import ExitCode
from .output import Console


# Generated files, relative to the output directory
CATALOG_FILE = "mathtrade-catalog.txt"
GROUPS_BY_NUMBER_FILE = "mathtrade-groups-by-number.txt"
GROUPS_BY_NAME_FILE = "mathtrade-groups-by-name.txt"
CATALOG_WARNINGS_FILE = "mathtrade-catalog-warnings.txt"
USERS_FILE = "mathtrade-users.txt"
WANTS_FILE = "mathtrade-wants.txt"
STATUS_FILE = "mathtrade-status.txt"
WARNINGS_FILE = "mathtrade-warnings.txt"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathtrade",
        description="Offer catalog and wants list validation for BoardGameGeek math trades",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "listing",
        nargs="?",
        help="Geek list id (or set MATHTRADE_LISTING_ID)",
    )
    common.add_argument("--cache-dir", type=Path, help="Directory for downloaded geek lists")
    common.add_argument("--output-dir", type=Path, help="Directory for generated files")
    common.add_argument("--api-url", type=str, help="BoardGameGeek XML API 2 root")
    common.add_argument("--env-file", type=Path, help="Path to .env file")
    common.add_argument("--no-color", action="store_true", help="Disable colored output")
    common.add_argument("--verbose", "-v", action="store_true", default=None, help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "fetch",
        parents=[common],
        help="Download the geek list again, replacing the cached copy",
    )

    catalog = subparsers.add_parser(
        "catalog",
        parents=[common],
        help="Write the offer short list and named group suggestions",
    )
    catalog.add_argument("--refresh", action="store_true", help="Ignore the cached copy")

    users = subparsers.add_parser(
        "users",
        parents=[common],
        help="Write the comma separated participant list",
    )
    users.add_argument("--refresh", action="store_true", help="Ignore the cached copy")

    validate = subparsers.add_parser(
        "validate",
        parents=[common],
        help="Validate all wants lists and merge them",
    )
    validate.add_argument("--wants-dir", type=Path, help="Directory with <username>.txt wants lists")
    validate.add_argument("--workers", type=int, help="Number of wants lists validated in parallel")
    validate.add_argument("--refresh", action="store_true", help="Ignore the cached copy")

    return parser


class OutputFiles:
    """
    Generated files, kept in memory until a command succeeds.

    Previous versions are removed up front so a failed run never leaves
    misleading files behind.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        self._contents: dict[str, str] = {}

    def path(self, name: str) -> Path:
        return self.directory / name

    def clear(self, *names: str) -> None:
        for name in names:
            self.path(name).unlink(missing_ok=True)

    def add(self, name: str, text: str) -> None:
        self._contents[name] = text

    def write(self, console: Console) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        for name, text in self._contents.items():
            path = self.path(name)
            path.write_text(text, encoding="utf-8")
            console.file_written(str(path))


class Application:
    """Runs one mathtrade command."""

    def __init__(
        self,
        config: AppConfig,
        console: Console,
        listing_source: Optional[ListingSourcePort] = None,
        name_resolver: Optional[NameResolverPort] = None,
    ):
        self.config = config
        self.console = console
        self.event_bus = EventBus()
        self.logger = logging.getLogger("Application")

        if listing_source is None or name_resolver is None:
            client = create_client(config.bgg)
            listing_source = listing_source or BggListingSource(config.bgg, client)
            name_resolver = name_resolver or BggNameResolver(config.bgg, client)

        self.name_resolver = name_resolver
        self.repository = ListingRepository(
            listing_source,
            JsonListingCache(config.paths.cache_dir),
            self.event_bus,
        )
        self.outputs = OutputFiles(config.paths.output_dir)

        self.event_bus.subscribe(
            ItemNameResolved,
            lambda event: console.debug(f"Item {event.item_id} is {event.item_name!r}"),
        )
        self.event_bus.subscribe(
            SubmissionValidated,
            lambda event: console.debug(
                f"{event.username}: {event.statements} statements, {event.errors} errors"
                if event.submitted else f"{event.username}: no wants list"
            ),
        )

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def fetch(self, listing_id: ListingId) -> ExitCode:
        result = self.repository.extract(listing_id, self.name_resolver, refresh=True)
        self.console.success(f"Geek list {listing_id} cached ({len(result.catalog)} offers)")
        self.console.extraction_result(result)
        return ExitCode.SUCCESS

    def catalog(self, listing_id: ListingId, refresh: bool = False) -> ExitCode:
        files = (CATALOG_FILE, GROUPS_BY_NUMBER_FILE, GROUPS_BY_NAME_FILE, CATALOG_WARNINGS_FILE)
        self.outputs.clear(*files)

        result = self._extract(listing_id, refresh)
        formatter = TextFormatter()
        suggestions = suggest_groups(result.catalog)

        self.outputs.add(CATALOG_FILE, formatter.format_short_list(result.catalog))
        self.outputs.add(GROUPS_BY_NUMBER_FILE, formatter.format_groups(suggestions))
        self.outputs.add(GROUPS_BY_NAME_FILE, formatter.format_groups(suggestions, by_name=True))
        if result.diagnostics:
            self.outputs.add(CATALOG_WARNINGS_FILE, formatter.format_diagnostics(result.diagnostics))

        self.console.extraction_result(result)
        self.console.section("Files")
        self.outputs.write(self.console)
        return ExitCode.SUCCESS

    def users(self, listing_id: ListingId, refresh: bool = False) -> ExitCode:
        self.outputs.clear(USERS_FILE)

        result = self._extract(listing_id, refresh)
        text = TextFormatter().format_users(result.catalog.participants())
        self.outputs.add(USERS_FILE, text)

        self.console.print(text)
        self.outputs.write(self.console)
        return ExitCode.SUCCESS

    def validate(self, listing_id: ListingId, refresh: bool = False) -> ExitCode:
        files = (WANTS_FILE, STATUS_FILE, WARNINGS_FILE)
        self.outputs.clear(*files)

        extraction = self._extract(listing_id, refresh)
        submissions = DirectorySubmissionSource(
            self.config.paths.wants_dir,
            self.config.paths.wants_extension,
            exclude=[self.outputs.path(name) for name in files],
        )
        orchestrator = TradeValidationOrchestrator(
            extraction.catalog,
            submissions,
            event_bus=self.event_bus,
            max_workers=self.config.workers,
        )
        result = orchestrator.run()

        formatter = TextFormatter()
        self.outputs.add(WANTS_FILE, formatter.format_merged_wants(result.merged))
        self.outputs.add(STATUS_FILE, formatter.format_status(result.summary))
        if result.diagnostics:
            self.outputs.add(WARNINGS_FILE, formatter.format_diagnostics(result.diagnostics))

        self.console.validation_result(result)
        self.console.section("Files")
        self.outputs.write(self.console)
        return ExitCode.SUCCESS if result.success else ExitCode.VALIDATION_FAILED

    def _extract(self, listing_id: ListingId, refresh: bool) -> ExtractionResult:
        return self.repository.extract(listing_id, self.name_resolver, refresh=refresh)


def run(
    args: argparse.Namespace,
    listing_source: Optional[ListingSourcePort] = None,
    name_resolver: Optional[NameResolverPort] = None,
) -> int:
    """
    Run a parsed command line.

    Args:
        args: Parsed arguments
        listing_source: Listing source to use instead of BoardGameGeek
        name_resolver: Name resolver to use instead of BoardGameGeek

    Returns:
        Exit code
    """
    logger = logging.getLogger("main")

    try:
        provider = EnvironmentConfigProvider(
            env_file=args.env_file,
            cli_overrides=vars(args),
        )
        config = provider.load()
    except ConfigError as e:
        logger.error(e.message)
        return ExitCode.CONFIG_ERROR

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    console = Console(color=not args.no_color, verbose=config.verbose)

    problems = provider.validate()
    if problems:
        for problem in problems:
            logger.error(problem)
        return ExitCode.CONFIG_ERROR

    try:
        listing_id = ListingId.parse(config.listing_id)
    except ListingIdError as e:
        logger.error(e.message)
        return ExitCode.CONFIG_ERROR

    console.header(f"mathtrade {args.command} - geek list {listing_id}")
    app = Application(config, console, listing_source, name_resolver)

    try:
        if args.command == "fetch":
            return app.fetch(listing_id)
        if args.command == "catalog":
            return app.catalog(listing_id, args.refresh)
        if args.command == "users":
            return app.users(listing_id, args.refresh)
        return app.validate(listing_id, args.refresh)
    except (ListingSourceError, NameResolutionError) as e:
        logger.error(e.message)
        console.error("Could not get data from BoardGameGeek; no files were written")
        return ExitCode.NETWORK_ERROR
    except MathTradeError as e:
        logger.error(e.message)
        console.error("Run aborted; no files were written")
        return ExitCode.ERROR


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(bool(args.verbose))
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
