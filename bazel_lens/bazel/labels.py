"""Package label resolution for BUILD files.

Maps a BUILD file inside a Bazel workspace to the label of the package
that contains it (``//path/to/dir``) and builds the query expression used
to enumerate the rules declared in that package.
"""

from __future__ import annotations

import ntpath
import os
import posixpath


def _to_posix(path: str | os.PathLike[str]) -> str:
    """Return *path* as a string using forward slashes only."""
    return os.fspath(path).replace("\\", "/")


def _is_windows_path(path: str) -> bool:
    """Return True for paths with a drive letter or backslash separators."""
    return "\\" in path or (len(path) >= 2 and path[1] == ":" and path[0].isalpha())


def _relative_path(workspace_root: str, build_file: str) -> str:
    """Path of *build_file* relative to *workspace_root*, with forward slashes.

    Windows-style paths go through ``ntpath`` so that drive letters and
    path components compare case-insensitively (``c:\\ws`` contains
    ``C:\\ws\\a\\BUILD``).
    """
    if _is_windows_path(workspace_root) or _is_windows_path(build_file):
        try:
            return _to_posix(ntpath.relpath(build_file, workspace_root))
        except ValueError:
            # Different drives: no relative path exists, fall back to the
            # lexical computation below.
            pass
    return posixpath.relpath(_to_posix(build_file), _to_posix(workspace_root))


def resolve_package_label(
    workspace_root: str | os.PathLike[str],
    build_file: str | os.PathLike[str],
) -> str:
    """Compute the package label for a BUILD file.

    Windows-style and POSIX-style spellings of the same path produce the
    same label, and drive letters are compared case-insensitively.

    A BUILD file at the workspace root maps to ``//``.  A BUILD file
    outside the workspace is not rejected: the label then contains ``..``
    segments.

    Args:
        workspace_root: Path to the Bazel workspace root.
        build_file: Path to the BUILD file.

    Returns:
        Package label such as ``//a/b``.
    """
    rel_path = _relative_path(os.fspath(workspace_root), os.fspath(build_file))
    # dirname("BUILD") is "", so a root BUILD file maps to "//".
    rel_dir = posixpath.dirname(rel_path)
    return f"//{rel_dir}"


def package_query_expression(package_label: str) -> str:
    """Return the query selecting every rule declared directly in a package.

    The expression is wrapped in single quotes, as expected on a bazel
    command line: ``'kind(rule, //a/b:all)'``.
    """
    return f"'kind(rule, {package_label}:all)'"
