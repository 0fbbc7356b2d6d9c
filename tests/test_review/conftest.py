"""Shared fixtures: a small notes directory scanned on a fixed date."""

from __future__ import annotations

import textwrap
from datetime import date
from pathlib import Path

import pytest

from review.index import ReviewIndex

TODAY = date(2021, 9, 20)


def write_note(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture()
def notes_dir(tmp_path: Path) -> Path:
    write_note(tmp_path, "alpha.txt", """\
        # Alpha
        #active @review(1w) @reviewed(2021-09-01)
        * draft outline
    """)
    write_note(tmp_path, "beta.txt", """\
        # Beta
        #project @review(1m) @reviewed(2021-09-10) @due(2021-12-01)
    """)
    write_note(tmp_path, "gamma.md", """\
        # Gamma
        #goal #active @due(2021-10-01)
        * [x] pick a theme
        * chase copy #waiting
        * call @sam about budget
    """)
    write_note(tmp_path, "delta.txt", """\
        # Delta
        @completed(2021-08-01) @review(1w)
    """)
    write_note(tmp_path, "epsilon.txt", """\
        # Epsilon
        #cancelled @review(2w)
    """)
    write_note(tmp_path, "zeta.txt", """\
        # Zeta
        @review(2w)
    """)
    write_note(tmp_path, "short.txt", "just a title\n")
    write_note(tmp_path, "ignored.pdf", "# Not a note\n#active\n")
    return tmp_path


@pytest.fixture()
def index(notes_dir: Path) -> ReviewIndex:
    idx = ReviewIndex(notes_dir, today=TODAY)
    idx.build()
    return idx
