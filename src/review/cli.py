"""
CLI for the project/goal review queue.

Usage:
    notereview                 # interactive review loop
    notereview list            # print every note once and exit
    notereview export [PATH]   # write the CSV summary and exit
    notereview --help          # show help
"""

from __future__ import annotations

import functools
import logging
import sys
from datetime import date
from pathlib import Path

import duckdb

from review import __version__
from review.config import ReviewConfig, load_config
from review.db import NoteDB
from review.external import open_in_viewer, run_external_tool
from review.index import ReviewIndex
from review.note import Note
from review.session import ReviewSession

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d.%m.%y"
HEADER = "     Title                                   Typ Opn Wat Don Due      Completed Int NxtReview"

PROMPT = (
    "\nview (a)ll, (c)lean up, (e)dit note, people (l)ist, (p)roject list, (r)eview next,\n"
    "(s)ave summary, (v)iew those to review, (q)uit, list (w)aiting tasks  > "
)


def print_help() -> None:
    """Print help message."""
    print("""notereview - review queue for project and goal notes

Usage:
    notereview                    Start the interactive review loop
    notereview list               Print every note and exit
    notereview export [PATH]      Write the CSV summary and exit

Options:
    notereview --help, -h         Show this help
    notereview --version, -v      Show version

Configuration is read from $XDG_CONFIG_HOME/notereview/config.yaml
(override with NOTEREVIEW_CONFIG; NOTEREVIEW_NOTES_DIR overrides notes_dir).""")


def _fmt(d: date | None) -> str:
    return d.strftime(DATE_FORMAT) if d else ""


def format_note(note: Note) -> str:
    """One summary line for *note*."""
    mark = "[ ]" if note.is_active else "[x]"
    if note.is_cancelled:
        mark = "[-]"
    interval = str(note.review_interval) if note.review_interval else ""
    return (
        f"{mark}  {note.title[:38]:<38} {note.code:>3} {note.open_count:>3} "
        f"{note.waiting_count:>3} {note.done_count:>3}  {_fmt(note.due_date):>8} "
        f"{_fmt(note.completed_date):>9} {interval:<3} {_fmt(note.display_next_review):>9}"
    )


def _print_ids(index: ReviewIndex, ids: list[int]) -> None:
    for note_id in ids:
        print(format_note(index.get(note_id)))


def show_due(index: ReviewIndex) -> None:
    print(HEADER)
    print("------------------------------ Ready to review ------------------------------")
    _print_ids(index, index.due)


def show_all(index: ReviewIndex) -> None:
    show_due(index)
    print("------------------------------- Other active --------------------------------")
    _print_ids(index, index.active)
    print("-------------------------------- Not active ---------------------------------")
    _print_ids(index, index.inactive)
    totals = index.totals()
    print("---------------------------- Active note totals -----------------------------")
    print(
        f"    {totals.active_notes} active notes with {totals.open} open, "
        f"{totals.waiting} waiting, {totals.done} done tasks."
    )
    print(f"    + {totals.inactive_notes} archived notes")


def show_projects(index: ReviewIndex) -> None:
    print("\n-------------------------------- Projects ----------------------------------")
    for note in index.projects():
        print(format_note(note))
    print("\n--------------------------------- Goals ------------------------------------")
    for note in index.goals():
        print(format_note(note))


def _print_grouped(groups: list[tuple[Note, list[str]]], indent: str = "  ") -> None:
    for note, lines in groups:
        print(f"{indent}# {note.title}")
        for line in lines:
            print(f"{indent}  {line.strip()}")


def show_waiting(index: ReviewIndex) -> None:
    print("\n------------------------------ #waiting tasks ------------------------------")
    _print_grouped(index.waiting_tasks())


def show_mentions(index: ReviewIndex, tags: list[str]) -> None:
    print("\n----------------------------- People mentioned -----------------------------")
    for tag in tags:
        print(f"\n{tag} mentions ---------------------------------")
        _print_grouped(index.mentions(tag), indent="    ")


def export_summary(index: ReviewIndex, path: Path) -> Path | None:
    """Write the CSV summary; on failure report it and return ``None``."""
    try:
        with NoteDB(index) as db:
            written = db.export_summary(path)
    except (OSError, duckdb.IOException) as exc:
        logger.error("Could not write summary %s: %s", path, exc)
        print(f"   Error: couldn't write summary to {path}", file=sys.stderr)
        return None
    print(f"    Written summary to {written}")
    return written


def default_summary_path(config: ReviewConfig, today: date) -> Path:
    return config.summaries_dir / f"{today:%Y%m%d} Notes summary.csv"


def _post_review_tool(config: ReviewConfig):
    if not config.post_review_command:
        return None
    path, *args = config.post_review_command
    return functools.partial(run_external_tool, path, args)


def review_next(session: ReviewSession) -> None:
    note = session.begin()
    if note is None:
        print("       Sorry; no more notes to review.")
        return
    input(f"       Press Enter when finished reviewing '{note.title}' ...")
    outcome = session.acknowledge()
    if outcome.persisted:
        print(f"       ... Updated '{note.title}' note.")
    else:
        print(f"       ... Review of '{note.title}' recorded, but the file was not updated.")


def edit_matching(session: ReviewSession, query: str) -> None:
    note = session.begin_matching(query)
    if note is None:
        print(f"   Warning: Couldn't find a note matching '{query}'")
        return
    print(f"   Opening closest match note '{note.title}'")
    answer = input("       Mark it as reviewed when done? [y/N] ").strip().lower()
    if answer == "y":
        outcome = session.acknowledge()
        if not outcome.persisted:
            print(f"       ... Review of '{note.title}' recorded, but the file was not updated.")
    else:
        session.abandon()


def interactive(config: ReviewConfig) -> int:
    """Run the operator loop until ``q``."""
    index = ReviewIndex(config.notes_dir, extensions=config.extensions)
    viewer = functools.partial(open_in_viewer, command=config.viewer_command)
    post_review = _post_review_tool(config)

    def rescan() -> ReviewSession:
        index.build(date.today())
        return ReviewSession(index, viewer=viewer, post_review=post_review)

    session = rescan()
    show_due(index)
    while True:
        try:
            entry = input(PROMPT).strip()
        except EOFError:
            break
        verb, rest = (entry[:1].lower(), entry[1:].strip()) if entry else ("", "")
        if verb == "q":
            break
        if verb == "v":
            session = rescan()
            show_due(index)
        elif verb == "a":
            session = rescan()
            show_all(index)
        elif verb == "p":
            show_projects(index)
        elif verb == "e":
            edit_matching(session, rest)
        elif verb == "r":
            review_next(session)
        elif verb == "s":
            export_summary(index, default_summary_path(config, index.today))
        elif verb == "w":
            show_waiting(index)
        elif verb == "l":
            show_mentions(index, config.mention_tags)
        elif verb == "c":
            if post_review is None:
                print("   No post_review_command configured.")
            else:
                post_review()
        else:
            print("   ** Invalid action! Please try again.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    if args and args[0] in ("--help", "-h"):
        print_help()
        return 0
    if args and args[0] in ("--version", "-v"):
        print(f"notereview {__version__}")
        return 0

    config = load_config()
    logging.basicConfig(level=config.log_level, format="[%(levelname)s] %(message)s")

    if not args:
        return interactive(config)

    command = args[0]
    if command == "list":
        index = ReviewIndex(config.notes_dir, extensions=config.extensions)
        index.build()
        show_all(index)
        return 0
    if command == "export":
        index = ReviewIndex(config.notes_dir, extensions=config.extensions)
        index.build()
        target = Path(args[1]) if len(args) > 1 else default_summary_path(config, index.today)
        return 0 if export_summary(index, target) is not None else 1

    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
