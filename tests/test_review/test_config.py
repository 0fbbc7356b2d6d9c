"""Unit tests for review.config."""

import logging
import textwrap
from pathlib import Path

import pytest

from review.config import ReviewConfig, get_config_path, load_config
from review.external import DEFAULT_VIEWER_COMMAND


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("NOTEREVIEW_CONFIG", raising=False)
    monkeypatch.delenv("NOTEREVIEW_NOTES_DIR", raising=False)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestConfigPath:
    def test_xdg_config_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "notereview" / "config.yaml"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("NOTEREVIEW_CONFIG", str(tmp_path / "other.yaml"))
        assert get_config_path() == tmp_path / "other.yaml"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == ReviewConfig()
        assert config.extensions == [".txt", ".md"]
        assert config.viewer_command == DEFAULT_VIEWER_COMMAND

    def test_values_from_yaml(self, tmp_path: Path):
        path = _write(tmp_path, f"""\
            notes_dir: {tmp_path / "Projects"}
            extensions: [.txt]
            viewer_command: [xdg-open, "notes://{{title}}"]
            post_review_command: [ruby, clean.rb]
            mention_tags: ["@sam", "@admin"]
            log_level: debug
        """)
        config = load_config(path)
        assert config.notes_dir == tmp_path / "Projects"
        assert config.summaries_dir == tmp_path / "Projects" / "Summaries"
        assert config.extensions == [".txt"]
        assert config.viewer_command == ["xdg-open", "notes://{title}"]
        assert config.post_review_command == ["ruby", "clean.rb"]
        assert config.mention_tags == ["@sam", "@admin"]
        assert config.log_level == "DEBUG"

    def test_single_string_becomes_list(self, tmp_path: Path):
        path = _write(tmp_path, "extensions: .md\n")
        assert load_config(path).extensions == [".md"]

    def test_explicit_summaries_dir(self, tmp_path: Path):
        path = _write(tmp_path, f"summaries_dir: {tmp_path / 'out'}\n")
        assert load_config(path).summaries_dir == tmp_path / "out"

    def test_invalid_yaml_falls_back(self, tmp_path: Path, caplog):
        path = _write(tmp_path, "notes_dir: [unclosed\n")
        with caplog.at_level(logging.WARNING, logger="review.config"):
            config = load_config(path)
        assert config == ReviewConfig()
        assert "config.yaml" in caplog.text

    def test_non_mapping_falls_back(self, tmp_path: Path):
        path = _write(tmp_path, "- just\n- a list\n")
        assert load_config(path) == ReviewConfig()

    def test_notes_dir_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("NOTEREVIEW_NOTES_DIR", str(tmp_path / "env-notes"))
        config = load_config(tmp_path / "absent.yaml")
        assert config.notes_dir == tmp_path / "env-notes"

    def test_unknown_log_level_falls_back(self, tmp_path: Path, caplog):
        path = _write(tmp_path, "log_level: chatty\n")
        with caplog.at_level(logging.WARNING, logger="review.config"):
            config = load_config(path)
        assert config.log_level == "INFO"
        assert "chatty" in caplog.text
