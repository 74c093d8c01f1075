"""
Adapter Factory - Build the remote adapter for a configured provider.
"""

from ..core.exceptions import ConfigurationError
from ..core.ports.config_provider import RemoteConfig
from ..core.ports.remote_repository import RemoteRepositoryPort
from .github import GitHubAdapter
from .gitlab import GitLabAdapter


PROVIDERS = {
    "github": GitHubAdapter,
    "gitlab": GitLabAdapter,
}


def create_remote(config: RemoteConfig) -> RemoteRepositoryPort:
    """
    Create the RemoteRepositoryPort for config.provider.

    Raises:
        ConfigurationError: If the provider is not supported
    """
    adapter_cls = PROVIDERS.get(config.provider.lower())
    if adapter_cls is None:
        raise ConfigurationError(
            f"Unknown provider '{config.provider}' - expected one of: {', '.join(PROVIDERS)}"
        )
    return adapter_cls(config)
