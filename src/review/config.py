"""Configuration for the review tool.

Settings live in a YAML file, by default
``$XDG_CONFIG_HOME/notereview/config.yaml`` (``NOTEREVIEW_CONFIG`` overrides
the location).  Every key is optional::

    notes_dir: ~/Notes/Projects
    summaries_dir: ~/Notes/Summaries
    extensions: [.txt, .md]
    viewer_command: [open, "noteplan://x-callback-url/openNote?noteTitle={title}"]
    post_review_command: [ruby, ~/bin/clean.rb]
    mention_tags: ["@admin", "@sam"]
    log_level: INFO

``NOTEREVIEW_NOTES_DIR`` overrides ``notes_dir``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from review.external import DEFAULT_VIEWER_COMMAND

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_NOTES_DIR = Path.home() / "Notes"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReviewConfig:
    notes_dir: Path = DEFAULT_NOTES_DIR
    summaries_dir: Path = DEFAULT_NOTES_DIR / "Summaries"
    extensions: list[str] = field(default_factory=lambda: [".txt", ".md"])
    viewer_command: list[str] = field(default_factory=lambda: list(DEFAULT_VIEWER_COMMAND))
    post_review_command: list[str] = field(default_factory=list)
    mention_tags: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReviewConfig":
        config = cls()
        if "notes_dir" in data:
            config.notes_dir = Path(data["notes_dir"]).expanduser()
            config.summaries_dir = config.notes_dir / "Summaries"
        if "summaries_dir" in data:
            config.summaries_dir = Path(data["summaries_dir"]).expanduser()
        for key in ("extensions", "viewer_command", "post_review_command", "mention_tags"):
            value = data.get(key)
            if isinstance(value, str):
                value = [value]
            if value is not None:
                setattr(config, key, [os.path.expanduser(str(v)) for v in value])
        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level in LOG_LEVELS:
                config.log_level = level
            else:
                logger.warning("Unknown log_level %r; using %s", data["log_level"], config.log_level)
        return config


def get_config_path() -> Path:
    """Path to config.yaml (``NOTEREVIEW_CONFIG`` or XDG_CONFIG_HOME/notereview)."""
    if env_path := os.environ.get("NOTEREVIEW_CONFIG"):
        return Path(env_path)
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "notereview" / "config.yaml"


def load_config(path: Path | None = None) -> ReviewConfig:
    """Load configuration, falling back to defaults for anything missing."""
    path = path or get_config_path()
    data: dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            logger.warning("Ignoring invalid config file %s: %s", path, exc)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a mapping", path)
            data = {}

    config = ReviewConfig.from_dict(data)
    if env_notes := os.environ.get("NOTEREVIEW_NOTES_DIR"):
        config.notes_dir = Path(env_notes).expanduser()
    return config
