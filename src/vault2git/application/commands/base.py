"""
Command Base - Write operations with a uniform result type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CommandResult:
    """Result of executing a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    skipped: bool = False
    attempts: int = 0

    @classmethod
    def ok(cls, data: Any = None, attempts: int = 1) -> "CommandResult":
        return cls(success=True, data=data, attempts=attempts)

    @classmethod
    def fail(
        cls,
        error: str,
        exception: Optional[Exception] = None,
        attempts: int = 1,
    ) -> "CommandResult":
        return cls(success=False, error=error, exception=exception, attempts=attempts)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, data=reason, attempts=0)


class Command(ABC):
    """
    A single write operation.

    Subclasses implement validate() and _execute(); execute() runs
    validation first and never raises for expected failures.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable command name."""
        ...

    @abstractmethod
    def validate(self) -> Optional[str]:
        """Return an error message if the command cannot run."""
        ...

    @abstractmethod
    def _execute(self) -> CommandResult:
        ...

    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error, attempts=0)
        return self._execute()
