"""Action descriptors handed to the editor host.

Each rule in a BUILD file becomes one ``TargetAction``: a clickable lens
placed at the rule's location that runs either the build or the test
command for that target.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any

from bazel_lens.bazel.query import QueryResult, Rule, TextRange

TEST_RULE_SUFFIX = "_test"


class ActionKind(enum.Enum):
    """Which host command a lens runs."""

    BUILD = "bazel.buildTarget"
    TEST = "bazel.testTarget"

    @property
    def command(self) -> str:
        return self.value

    @classmethod
    def for_rule_class(cls, rule_class: str) -> ActionKind:
        """Classify a rule by naming convention.

        Only rule classes ending in ``_test`` are testable; everything else
        is build-only, even rules that Bazel could also test.
        """
        if rule_class.endswith(TEST_RULE_SUFFIX):
            return cls.TEST
        return cls.BUILD


@dataclass(frozen=True)
class CommandAdapter:
    """Arguments passed to the build/test command."""

    workspace_root: str
    targets: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace_root": self.workspace_root,
            "targets": list(self.targets),
        }


@dataclass(frozen=True)
class TargetAction:
    """A build or test lens for one target."""

    kind: ActionKind
    target: str
    title: str
    tooltip: str
    range: TextRange
    adapter: CommandAdapter

    @property
    def command(self) -> str:
        """Host command id for this action."""
        return self.kind.command

    @property
    def arguments(self) -> list[CommandAdapter]:
        return [self.adapter]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON/YAML output."""
        return {
            "kind": self.kind.name.lower(),
            "command": self.command,
            "target": self.target,
            "title": self.title,
            "tooltip": self.tooltip,
            "range": {
                "start": {
                    "line": self.range.start_line,
                    "column": self.range.start_column,
                },
                "end": {
                    "line": self.range.end_line,
                    "column": self.range.end_column,
                },
            },
            "arguments": [adapter.to_dict() for adapter in self.arguments],
        }


def action_for_rule(
    workspace_root: str | os.PathLike[str],
    rule: Rule,
) -> TargetAction:
    """Build the lens for a single rule.

    Test lenses are titled ``Test <target>`` but keep the tooltip
    ``Build <target>``.
    """
    target = rule.name
    kind = ActionKind.for_rule_class(rule.rule_class)
    if kind is ActionKind.TEST:
        title = f"Test {target}"
    else:
        title = f"Build {target}"
    return TargetAction(
        kind=kind,
        target=target,
        title=title,
        tooltip=f"Build {target}",
        range=rule.location.range,
        adapter=CommandAdapter(os.fspath(workspace_root), (target,)),
    )


def actions_from_query_result(
    workspace_root: str | os.PathLike[str],
    query_result: QueryResult,
) -> list[TargetAction]:
    """Turn every rule of *query_result* into a lens, preserving order."""
    return [action_for_rule(workspace_root, rule) for rule in query_result.rules]
