"""Code lens provider for targets declared in Bazel BUILD files.

Resolves the package of a BUILD file, queries Bazel for the rules it
declares and turns them into build/test actions.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

from bazel_lens.bazel.labels import package_query_expression, resolve_package_label
from bazel_lens.bazel.query import QueryClient, QueryResult
from bazel_lens.bazel.workspace import find_workspace_root
from bazel_lens.codelens.actions import TargetAction, actions_from_query_result

NOT_IN_WORKSPACE_WARNING = (
    "Bazel BUILD CodeLens unavailable as currently opened file is not in "
    "a Bazel workspace"
)


def print_warning(message: str) -> None:
    """Default warning sink: print to stderr."""
    print(f"code lens: {message}", file=sys.stderr)


async def get_targets_for_build_file(
    workspace_root: str | os.PathLike[str],
    build_file: str | os.PathLike[str],
    query_client: QueryClient,
) -> QueryResult:
    """Query the rules declared directly in the package of *build_file*.

    Errors raised by *query_client* propagate unchanged.
    """
    package_label = resolve_package_label(workspace_root, build_file)
    return await query_client.query(
        workspace_root,
        package_query_expression(package_label),
        [],
    )


async def list_actions_for_build_file(
    workspace_root: str | os.PathLike[str],
    build_file: str | os.PathLike[str],
    query_client: QueryClient,
) -> list[TargetAction]:
    """Return one build or test action per rule in *build_file*'s package."""
    query_result = await get_targets_for_build_file(
        workspace_root, build_file, query_client,
    )
    return actions_from_query_result(workspace_root, query_result)


class BuildCodeLensProvider:
    """Provides actions for targets in Bazel BUILD files.

    Args:
        query_client: Runs the package query.
        find_workspace: Maps a file to its workspace root, or *None*.
        warn: Receives user-facing warnings.
        enabled: When False, no actions are produced at all.
    """

    def __init__(
        self,
        query_client: QueryClient,
        find_workspace: Callable[[Path], Path | None] = find_workspace_root,
        warn: Callable[[str], None] = print_warning,
        enabled: bool = True,
    ) -> None:
        self.query_client = query_client
        self.find_workspace = find_workspace
        self.warn = warn
        self.enabled = enabled

    async def provide_actions(
        self, build_file: str | os.PathLike[str],
    ) -> list[TargetAction]:
        """Provide the actions for a BUILD file.

        Returns an empty list (after a single warning) when the file is not
        inside a Bazel workspace.  Query failures are not caught.
        """
        if not self.enabled:
            return []

        build_path = Path(build_file)
        workspace_root = self.find_workspace(build_path)
        if workspace_root is None:
            self.warn(NOT_IN_WORKSPACE_WARNING)
            return []

        return await list_actions_for_build_file(
            workspace_root, build_path, self.query_client,
        )
