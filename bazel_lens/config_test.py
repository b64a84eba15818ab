"""Unit tests for the config module."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from bazel_lens.config import CONFIG_FILE_NAME, DEFAULT_CONFIG, LensConfig


class TestLensConfigCreate:
    """Tests for creating LensConfig instances."""

    def test_no_path_uses_defaults(self):
        """No path gives default config values."""
        cfg = LensConfig(None)
        assert cfg.bazel_executable == DEFAULT_CONFIG["bazel_executable"]
        assert cfg.query_timeout is None
        assert cfg.enable_code_lens is True

    def test_nonexistent_path_uses_defaults(self):
        """Nonexistent file path gives default config values."""
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = LensConfig(Path(tmpdir) / "missing.json")
            assert cfg.bazel_executable == "bazel"

    def test_load_from_file(self):
        """Config is loaded from a JSON file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text(json.dumps({
                "bazel_executable": "bazelisk",
                "query_timeout": 45,
                "enable_code_lens": False,
            }))
            cfg = LensConfig(path)
            assert cfg.bazel_executable == "bazelisk"
            assert cfg.query_timeout == 45.0
            assert cfg.enable_code_lens is False

    def test_partial_file_fills_defaults(self):
        """Missing keys in config file are filled from defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text(json.dumps({"query_timeout": 10}))
            cfg = LensConfig(path)
            assert cfg.query_timeout == 10.0
            assert cfg.bazel_executable == "bazel"  # default

    def test_corrupted_file_uses_defaults(self):
        """Corrupted JSON file falls back to defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text("{ invalid json }")
            cfg = LensConfig(path)
            assert cfg.config == DEFAULT_CONFIG

    def test_corrupted_file_warns(self, tmp_path: Path, capsys):
        """An unreadable config file is reported on stderr."""
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("{ invalid json }")
        LensConfig(path)
        err = capsys.readouterr().err
        assert "config: ignoring unreadable" in err
        assert str(path) in err

    def test_unknown_keys_ignored(self, tmp_path: Path, capsys):
        """Keys that are not settings are dropped with a warning."""
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text(json.dumps({"bazel_executable": "bazelisk", "colour": "red"}))
        cfg = LensConfig(path)
        assert cfg.bazel_executable == "bazelisk"
        assert "colour" not in cfg.config
        assert "unknown setting 'colour'" in capsys.readouterr().err

    def test_non_dict_json_uses_defaults(self):
        """A JSON list is ignored."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / CONFIG_FILE_NAME
            path.write_text("[1, 2]")
            assert LensConfig(path).config == DEFAULT_CONFIG


class TestLensConfigForWorkspace:
    """Tests for LensConfig.for_workspace."""

    def test_none_workspace(self):
        assert LensConfig.for_workspace(None).path is None

    def test_reads_workspace_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE_NAME).write_text(
            json.dumps({"bazel_executable": "/opt/bazel"})
        )
        cfg = LensConfig.for_workspace(tmp_path)
        assert cfg.path == tmp_path / CONFIG_FILE_NAME
        assert cfg.bazel_executable == "/opt/bazel"


class TestLensConfigSave:
    """Tests for saving and updating config."""

    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / "sub" / CONFIG_FILE_NAME
        cfg = LensConfig(path)
        cfg.set_config(bazel_executable="bazelisk", enable_code_lens=False)
        cfg.save()

        reloaded = LensConfig(path)
        assert reloaded.bazel_executable == "bazelisk"
        assert reloaded.enable_code_lens is False
        assert path.read_text().endswith("\n")

    def test_set_config_ignores_none(self):
        cfg = LensConfig(None)
        cfg.set_config(query_timeout=None)
        assert cfg.query_timeout is None

    def test_save_without_path_raises(self):
        with pytest.raises(ValueError, match="No config file path"):
            LensConfig(None).save()
