"""Bazel query client.

Runs ``bazel query --output=xml`` in a workspace and parses the result
into ``QueryResult`` / ``Rule`` / ``QueryLocation`` records.  The
subprocess runs in a thread executor so callers can ``await`` a query
without blocking the event loop.
"""

from __future__ import annotations

import asyncio
import os
import shlex
import subprocess
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence


class BazelQueryError(RuntimeError):
    """Raised when a bazel query cannot be run or its output cannot be parsed."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


@dataclass(frozen=True)
class TextRange:
    """Zero-based editor range."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class QueryLocation:
    """Source position of a rule as reported by Bazel.

    ``line`` and ``column`` are 1-based, as printed by Bazel.
    """

    path: str
    line: int = 1
    column: int = 1

    @property
    def range(self) -> TextRange:
        """Zero-width editor range at the start of the rule."""
        line = max(self.line - 1, 0)
        column = max(self.column - 1, 0)
        return TextRange(line, column, line, column)


@dataclass(frozen=True)
class Rule:
    """A rule returned by ``bazel query``."""

    name: str
    rule_class: str
    location: QueryLocation


@dataclass(frozen=True)
class QueryResult:
    """Rules in the order Bazel reported them."""

    rules: tuple[Rule, ...] = field(default_factory=tuple)


class QueryClient(Protocol):
    """Anything that can run a bazel query expression in a workspace."""

    async def query(
        self,
        workspace_root: str | os.PathLike[str],
        expression: str,
        extra_args: Sequence[str],
    ) -> QueryResult: ...


def parse_location(location: str) -> QueryLocation:
    """Parse a Bazel ``path:line:column`` location string.

    The string is split from the right so that Windows drive letters
    (``C:/ws/BUILD:3:1``) stay part of the path.  Missing or non-numeric
    line/column parts default to 1.
    """
    parts = location.rsplit(":", 2)
    numbers: list[int] = []
    while len(parts) > 1 and parts[-1].isdigit():
        numbers.insert(0, int(parts.pop()))
    path = ":".join(parts)
    line = numbers[0] if numbers else 1
    column = numbers[1] if len(numbers) > 1 else 1
    return QueryLocation(path=path, line=line, column=column)


def parse_query_xml(xml_content: str) -> QueryResult:
    """Parse ``bazel query --output=xml`` output.

    Every ``<rule>`` element is returned in document order; other target
    kinds (source files, package groups) are ignored.

    Raises:
        BazelQueryError: If the XML is malformed.
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as exc:
        raise BazelQueryError(f"bazel query: malformed XML output: {exc}") from exc

    rules: list[Rule] = []
    for rule in root.findall("rule"):
        rules.append(Rule(
            name=rule.get("name", ""),
            rule_class=rule.get("class", ""),
            location=parse_location(rule.get("location", "")),
        ))
    return QueryResult(rules=tuple(rules))


class BazelQuery:
    """Query client backed by the bazel binary.

    Args:
        executable: The bazel (or bazelisk) binary to run.
        timeout: Timeout in seconds for a single query, or *None* to wait
            indefinitely.
    """

    def __init__(
        self,
        executable: str = "bazel",
        timeout: float | None = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    def build_command(self, expression: str, extra_args: Sequence[str]) -> list[str]:
        """Build the bazel command line for *expression*.

        *expression* uses shell quoting (``'kind(rule, //a:all)'``), so it
        is tokenised with ``shlex`` rather than passed through verbatim.
        """
        return [
            self.executable,
            "query",
            *shlex.split(expression),
            "--output=xml",
            *extra_args,
        ]

    async def query(
        self,
        workspace_root: str | os.PathLike[str],
        expression: str,
        extra_args: Sequence[str] = (),
    ) -> QueryResult:
        """Run *expression* in *workspace_root* and parse the result.

        Raises:
            BazelQueryError: If the workspace directory is missing, bazel
                cannot be started, times out, exits non-zero or prints
                unparseable output.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self.query_sync, workspace_root, expression, list(extra_args),
        )

    def query_sync(
        self,
        workspace_root: str | os.PathLike[str],
        expression: str,
        extra_args: Sequence[str] = (),
    ) -> QueryResult:
        """Blocking variant of ``query`` (called from the thread pool)."""
        cwd = Path(workspace_root)
        if not cwd.is_dir():
            raise BazelQueryError(
                f"bazel query: workspace {cwd} is not an existing directory"
            )

        command = self.build_command(expression, extra_args)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=cwd,
            )
        except FileNotFoundError as exc:
            raise BazelQueryError(
                f"bazel query: {self.executable} not found in PATH"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise BazelQueryError(
                f"bazel query: timed out after {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise BazelQueryError(
                f"bazel query: could not run {self.executable} in {cwd}: {exc}"
            ) from exc

        if result.returncode != 0:
            raise BazelQueryError(
                f"bazel query failed (exit {result.returncode}): "
                f"{result.stderr.strip()}",
                exit_code=result.returncode,
                stderr=result.stderr,
            )

        if not result.stdout.strip():
            return QueryResult()

        return parse_query_xml(result.stdout)
