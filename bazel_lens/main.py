"""Entry point for bazel-lens.

Prints the build/test actions for the targets declared in a BUILD file,
as JSON or YAML, for editor plugins that shell out.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from bazel_lens.bazel.query import BazelQuery, BazelQueryError
from bazel_lens.bazel.workspace import find_workspace_root
from bazel_lens.codelens.actions import TargetAction
from bazel_lens.codelens.provider import BuildCodeLensProvider
from bazel_lens.config import LensConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="List Bazel build/test actions for the targets in a BUILD file"
    )
    parser.add_argument(
        "build_file",
        type=Path,
        help="Path to the BUILD file",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Bazel workspace root (default: discovered from the BUILD file)",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the .bazel_lens_config JSON file "
             "(default: <workspace>/.bazel_lens_config)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write actions to this file instead of stdout",
    )
    return parser.parse_args(argv)


def format_actions(actions: list[TargetAction], fmt: str) -> str:
    """Render actions as a JSON or YAML document."""
    payload: list[dict[str, Any]] = [action.to_dict() for action in actions]
    if fmt == "yaml":
        return yaml.dump(
            payload,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return json.dumps(payload, indent=2) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Run bazel-lens and return the process exit code."""
    args = parse_args(argv)
    build_file = args.build_file.absolute()

    if args.workspace is not None:
        workspace_root: Path | None = args.workspace.absolute()
    else:
        workspace_root = find_workspace_root(build_file)

    if args.config_file is not None:
        config = LensConfig(args.config_file)
    else:
        config = LensConfig.for_workspace(workspace_root)

    provider = BuildCodeLensProvider(
        BazelQuery(
            executable=config.bazel_executable,
            timeout=config.query_timeout,
        ),
        find_workspace=lambda _path: workspace_root,
        enabled=config.enable_code_lens,
    )

    try:
        actions = asyncio.run(provider.provide_actions(build_file))
    except BazelQueryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    text = format_actions(actions, args.format)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
