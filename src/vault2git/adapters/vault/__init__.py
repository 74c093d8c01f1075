"""
Vault Adapters - Local file stores.
"""

from .filesystem import FileSystemVaultStore

__all__ = ["FileSystemVaultStore"]
