"""Configuration file management.

Reads and writes the .bazel_lens_config JSON file that selects the bazel
binary, the query timeout and whether lenses are shown at all.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

CONFIG_FILE_NAME = ".bazel_lens_config"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "bazel_executable": "bazel",
    "query_timeout": None,
    "enable_code_lens": True,
}


class LensConfig:
    """Settings for bazel-lens, backed by an optional JSON file.

    Unknown keys are ignored with a warning.  A file that cannot be read
    or is not a JSON object leaves every setting at its default.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.is_file():
            self._data.update(self._read_settings(path))

    @classmethod
    def for_workspace(cls, workspace_root: Path | None) -> LensConfig:
        """Load the config file at the root of a workspace, if any."""
        if workspace_root is None:
            return cls(None)
        return cls(workspace_root / CONFIG_FILE_NAME)

    @staticmethod
    def _read_settings(path: Path) -> dict[str, Any]:
        """Return the known settings stored in *path*."""
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            print(f"config: ignoring unreadable {path}: {exc}", file=sys.stderr)
            return {}
        if not isinstance(data, dict):
            print(f"config: ignoring {path}: expected a JSON object", file=sys.stderr)
            return {}

        settings: dict[str, Any] = {}
        for key, value in data.items():
            if key in DEFAULT_CONFIG:
                settings[key] = value
            else:
                print(f"config: unknown setting {key!r} in {path}", file=sys.stderr)
        return settings

    def save(self) -> None:
        """Write the current settings back to the config file."""
        if self.path is None:
            raise ValueError("No config file path specified")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2) + "\n")

    @property
    def config(self) -> dict[str, Any]:
        """A copy of every setting, defaults included."""
        return dict(self._data)

    @property
    def bazel_executable(self) -> str:
        """Get the bazel binary used for queries."""
        return str(
            self._data.get("bazel_executable", DEFAULT_CONFIG["bazel_executable"])
        )

    @property
    def query_timeout(self) -> float | None:
        """Get the query timeout in seconds (None = no timeout)."""
        val = self._data.get("query_timeout", DEFAULT_CONFIG["query_timeout"])
        return float(val) if val is not None else None

    @property
    def enable_code_lens(self) -> bool:
        """Whether build/test lenses are produced."""
        return bool(
            self._data.get("enable_code_lens", DEFAULT_CONFIG["enable_code_lens"])
        )

    def set_config(
        self,
        bazel_executable: str | None = None,
        query_timeout: float | None = None,
        enable_code_lens: bool | None = None,
    ) -> None:
        """Update configuration values."""
        if bazel_executable is not None:
            self._data["bazel_executable"] = bazel_executable
        if query_timeout is not None:
            self._data["query_timeout"] = query_timeout
        if enable_code_lens is not None:
            self._data["enable_code_lens"] = enable_code_lens
