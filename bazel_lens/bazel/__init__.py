"""Bazel workspace, package label and query helpers."""

from bazel_lens.bazel.labels import package_query_expression, resolve_package_label
from bazel_lens.bazel.query import (
    BazelQuery,
    BazelQueryError,
    QueryClient,
    QueryLocation,
    QueryResult,
    Rule,
    TextRange,
    parse_location,
    parse_query_xml,
)
from bazel_lens.bazel.workspace import find_workspace_root

__all__ = [
    "BazelQuery",
    "BazelQueryError",
    "QueryClient",
    "QueryLocation",
    "QueryResult",
    "Rule",
    "TextRange",
    "find_workspace_root",
    "package_query_expression",
    "parse_location",
    "parse_query_xml",
    "resolve_package_label",
]
