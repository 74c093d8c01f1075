"""
Domain Enums - Outcome and error classification.
"""

from enum import Enum


class OutcomeStatus(Enum):
    """What happened to a single file during a pass."""

    COMMITTED = "committed"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(Enum):
    """Why a file was not written."""

    UNCHANGED = "unchanged"


class ErrorKind(Enum):
    """Whether a failure was worth retrying."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"


class FailureReason(Enum):
    """Finer classification of a failed file."""

    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    LOCAL_READ = "local_read"
    UNKNOWN = "unknown"
