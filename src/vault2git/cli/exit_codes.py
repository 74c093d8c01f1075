"""
Exit Codes - Process exit statuses for the CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    AUTH_ERROR = 3
    PARTIAL_FAILURE = 4  # pass ran, some files failed
    BUSY = 5
    INTERRUPTED = 130
