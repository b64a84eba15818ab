"""Build/test code lenses for BUILD file targets."""

from bazel_lens.codelens.actions import (
    ActionKind,
    CommandAdapter,
    TargetAction,
    actions_from_query_result,
)
from bazel_lens.codelens.provider import (
    BuildCodeLensProvider,
    get_targets_for_build_file,
    list_actions_for_build_file,
)

__all__ = [
    "ActionKind",
    "BuildCodeLensProvider",
    "CommandAdapter",
    "TargetAction",
    "actions_from_query_result",
    "get_targets_for_build_file",
    "list_actions_for_build_file",
]
