"""
vault2git - Sync a local vault of files to a GitHub or GitLab repository.

Each pass compares every local file against the remote copy and commits
only the files whose bytes differ, with a "<device>: Updated <file>" message.
"""

__version__ = "0.1.0"
