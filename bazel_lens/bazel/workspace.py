"""Bazel workspace root discovery."""

from __future__ import annotations

import os
from pathlib import Path

# Files whose presence marks the root of a Bazel workspace.
WORKSPACE_MARKERS = (
    "MODULE.bazel",
    "REPO.bazel",
    "WORKSPACE.bazel",
    "WORKSPACE",
)


def is_workspace_root(directory: Path) -> bool:
    """Return True if *directory* contains a workspace marker file."""
    return any((directory / marker).is_file() for marker in WORKSPACE_MARKERS)


def find_workspace_root(path: str | os.PathLike[str]) -> Path | None:
    """Find the Bazel workspace containing *path*.

    Walks up from *path* (or from its parent directory when *path* is a
    file) until a directory holding one of ``WORKSPACE_MARKERS`` is found.

    Args:
        path: A file or directory inside the workspace.

    Returns:
        The absolute workspace root, or *None* if *path* is not inside a
        Bazel workspace.
    """
    current = Path(path).absolute()
    if not current.is_dir():
        current = current.parent

    for directory in (current, *current.parents):
        if is_workspace_root(directory):
            return directory
    return None
