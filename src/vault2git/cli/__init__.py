"""
CLI Module - Command Line Interface for vault2git.
"""

from .app import main, run
from .exit_codes import ExitCode

__all__ = ["main", "run", "ExitCode"]
