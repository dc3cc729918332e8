"""
Exit Codes - Process exit status of the mathtrade command.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by ``mathtrade``."""

    SUCCESS = 0
    ERROR = 1  # Malformed listing, name conflict, unexpected failure
    CONFIG_ERROR = 2  # Bad listing id, settings or arguments
    VALIDATION_FAILED = 3  # Run finished but wants lists have errors
    NETWORK_ERROR = 4  # BoardGameGeek unreachable or refused the request
