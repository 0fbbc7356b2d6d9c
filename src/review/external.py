"""Default collaborators: the note viewer and companion command-line tools.

Both are fire-and-forget from the core's point of view.  Failures are logged
and never stop a scan or a review session.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from urllib.parse import quote

logger = logging.getLogger(__name__)

#: NotePlan's x-callback scheme; ``{title}`` is URL-quoted before substitution.
DEFAULT_VIEWER_COMMAND = ["open", "noteplan://x-callback-url/openNote?noteTitle={title}"]


def open_in_viewer(title: str, command: Sequence[str] = DEFAULT_VIEWER_COMMAND) -> None:
    """Launch the external viewer on the note called *title* without waiting."""
    args = [part.replace("{title}", quote(title)) for part in command]
    try:
        subprocess.Popen(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as exc:
        logger.warning("Could not open '%s' in viewer (%s): %s", title, args[0], exc)


def run_external_tool(path: str, args: Sequence[str] = ()) -> int | None:
    """Run a companion tool to completion and return its exit status.

    Returns ``None`` when the tool could not be started at all.
    """
    try:
        completed = subprocess.run([path, *args], check=False)
    except OSError as exc:
        logger.warning("Could not run %s: %s", path, exc)
        return None
    if completed.returncode != 0:
        logger.warning("%s exited with status %d", path, completed.returncode)
    return completed.returncode
