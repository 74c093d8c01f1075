"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (VAULT2GIT_TOKEN, VAULT2GIT_REPO, ...)
- .env files
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    DEFAULT_DEVICE_NAME,
    DEFAULT_SYNC_INTERVAL,
    AppConfig,
    ConfigProviderPort,
    RemoteConfig,
    SyncConfig,
)


SUPPORTED_PROVIDERS = ("github", "gitlab")


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Precedence (highest first): CLI overrides, environment, .env file.
    """

    ENV_PREFIX = "VAULT2GIT_"

    ENV_MAPPING = {
        "VAULT2GIT_PROVIDER": "provider",
        "VAULT2GIT_TOKEN": "token",
        "VAULT2GIT_API_URL": "api_url",
        "VAULT2GIT_USERNAME": "owner",
        "VAULT2GIT_REPO": "repository",
        "VAULT2GIT_BRANCH": "branch",
        "VAULT2GIT_DEVICE_NAME": "device_name",
        "VAULT2GIT_AUTO_SYNC": "auto_sync",
        "VAULT2GIT_SYNC_INTERVAL": "sync_interval",
        "VAULT2GIT_VAULT": "vault_path",
        "VAULT2GIT_MAX_WORKERS": "max_workers",
        "VAULT2GIT_MAX_ATTEMPTS": "max_attempts",
        "VAULT2GIT_RETRY_DELAY": "retry_delay",
        "VAULT2GIT_VERBOSE": "verbose",
    }

    CLI_MAPPING = {
        "provider": "provider",
        "repo": "repository",
        "owner": "owner",
        "branch": "branch",
        "device": "device_name",
        "interval": "sync_interval",
        "vault": "vault_path",
        "api_url": "api_url",
        "workers": "max_workers",
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
        """Load complete configuration."""
        provider = str(self.get("provider", "github")).lower()

        remote = RemoteConfig(
            provider=provider,
            token=self.get("token", ""),
            api_url=self.get("api_url"),
        )

        sync = SyncConfig(
            provider=provider,
            owner=self.get("owner", ""),
            repository=self.get("repository", ""),
            branch=self.get("branch", ""),
            device_name=self.get("device_name") or DEFAULT_DEVICE_NAME,
            sync_interval=self._number("sync_interval", DEFAULT_SYNC_INTERVAL),
            auto_sync=self._flag("auto_sync"),
            max_workers=int(self._number("max_workers", 4)),
            max_attempts=int(self._number("max_attempts", 3)),
            retry_delay=self._number("retry_delay", 2.0),
        )

        vault_path = self.get("vault_path")

        return AppConfig(
            remote=remote,
            sync=sync,
            vault_path=Path(vault_path).expanduser() if vault_path else None,
            verbose=self._flag("verbose"),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(
        self,
        require_repository: bool = True,
        require_branch: bool = True,
    ) -> list[str]:
        """
        Validate configuration.

        Args:
            require_repository: Whether a repository must be selected
                (False for authentication and listing repositories)
            require_branch: Whether a branch must be selected
        """
        errors = []

        provider = str(self.get("provider", "github")).lower()
        if provider not in SUPPORTED_PROVIDERS:
            errors.append(
                f"Unknown provider '{provider}' - expected one of: {', '.join(SUPPORTED_PROVIDERS)}"
            )

        if not self.get("token"):
            errors.append("Please authenticate with your Personal Access Token. (set VAULT2GIT_TOKEN)")

        if require_repository and not self.get("repository"):
            errors.append("Please select a repository. (set VAULT2GIT_REPO or --repo)")
        if require_repository and require_branch and not self.get("branch"):
            errors.append("Please select a branch. (set VAULT2GIT_BRANCH or --branch)")

        interval = self.get("sync_interval")
        if interval is not None:
            try:
                if float(interval) <= 0:
                    errors.append("Sync interval must be a positive number of minutes")
            except (TypeError, ValueError):
                errors.append(f"Sync interval is not a number: {interval!r}")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _flag(self, key: str) -> bool:
        value = self.get(key, False)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def _number(self, key: str, default: float) -> float:
        value = self.get(key)
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")

            config_key = self.ENV_MAPPING.get(key.upper())
            if config_key:
                self._values[config_key] = value

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
            if cli_key in self._cli_overrides and self._cli_overrides[cli_key] is not None:
                self._values[config_key] = self._cli_overrides[cli_key]
