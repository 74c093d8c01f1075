"""
Config Provider Port - Abstract interface for loading configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


DEFAULT_DEVICE_NAME = "Unknown Device"
DEFAULT_SYNC_INTERVAL = 5


@dataclass(frozen=True)
class RemoteConfig:
    """Connection settings for the Git forge."""

    provider: str = "github"
    token: str = ""
    api_url: Optional[str] = None


@dataclass(frozen=True)
class SyncConfig:
    """
    Settings for a sync pass.

    Frozen so a pass always sees one consistent configuration.
    """

    provider: str = "github"
    owner: str = ""
    repository: str = ""
    branch: str = ""
    device_name: str = DEFAULT_DEVICE_NAME
    sync_interval: float = DEFAULT_SYNC_INTERVAL  # minutes
    auto_sync: bool = False

    # Engine tuning
    max_workers: int = 4
    max_attempts: int = 3
    retry_delay: float = 2.0  # seconds

    def repository_slug(self, principal: Optional[str] = None) -> str:
        """
        Full repository identifier ('owner/name').

        A repository that already contains a slash is used as-is; otherwise
        the configured owner, or the authenticated principal, is prefixed.
        """
        if "/" in self.repository:
            return self.repository
        owner = self.owner or principal
        if not owner:
            return self.repository
        return f"{owner}/{self.repository}"


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    vault_path: Optional[Path] = None
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
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
        """Set a configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        ...
