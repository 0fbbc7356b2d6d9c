"""Write an updated ``@reviewed(...)`` tag back into a note file."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

_REVIEWED_TAG_RE = re.compile(r"@reviewed\([0-9\-./]*\)\s*")
_SPACE_RUN_RE = re.compile(r" {2,}")


def stamp_reviewed(metadata_line: str, today: date) -> str:
    """Return *metadata_line* with exactly one ``@reviewed(<today>)`` tag."""
    stripped = _REVIEWED_TAG_RE.sub("", metadata_line).rstrip()
    tag = f"@reviewed({today.isoformat()})"
    line = f"{stripped} {tag}" if stripped else tag
    return _SPACE_RUN_RE.sub(" ", line)


def rewrite_reviewed_date(path: Path, today: date) -> bool:
    """Re-read *path* and rewrite only its metadata line with today's review date.

    Returns ``False`` (after logging) when the file cannot be read or written,
    or is too short to have a metadata line.  The write is not atomic.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            lines = fh.read().splitlines(keepends=True)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read %s: %s", path, exc)
        return False

    if len(lines) < 2:
        logger.warning("%s has no metadata line; review date not saved", path.name)
        return False

    metadata = lines[1]
    ending = metadata[len(metadata.rstrip("\r\n")) :]
    lines[1] = stamp_reviewed(metadata.rstrip("\r\n"), today) + ending

    try:
        path.write_text("".join(lines), encoding="utf-8", newline="")
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        return False
    return True
