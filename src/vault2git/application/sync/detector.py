"""
Change Detector - Decides whether a local file needs to be committed.
"""

from ...core.domain.entities import FileSnapshot, RemoteFileState


def has_changed(remote: RemoteFileState, local: FileSnapshot) -> bool:
    """
    Compare a local file against the remote copy read just before.

    A file missing remotely has always changed. Otherwise the contents are
    compared byte for byte with no normalization of whitespace, line
    endings or encoding.
    """
    if remote.content is None:
        return True
    return remote.content != local.content
