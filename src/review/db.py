"""NoteDB: DuckDB-backed summary view over a built :class:`ReviewIndex`.

Uses DuckDB (in-memory) as a query engine over every note's dates, counts
and lifecycle flags, and returns :mod:`polars` DataFrames.

Usage::

    db = NoteDB(index)

    # Free-form SQL
    df = db.query("SELECT title FROM notes WHERE is_project ORDER BY due_date")

    # Pre-built views
    table   = db.table_view(status="active", order_by="title")
    summary = db.summary_frame()
    db.export_summary(Path("20210920 Notes summary.csv"))
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import duckdb
import polars as pl

if TYPE_CHECKING:
    from review.index import ReviewIndex

#: Columns of the exported summary, in order
SUMMARY_COLUMNS = [
    "title",
    "filename",
    "open",
    "waiting",
    "done",
    "start_date",
    "due_date",
    "completed_date",
    "reviewed_date",
    "review_interval",
]

_STATUS_SQL = """
    CASE
        WHEN to_review THEN 'due'
        WHEN is_active THEN 'active'
        WHEN is_completed THEN 'completed'
        WHEN is_cancelled THEN 'cancelled'
        ELSE 'inactive'
    END
"""


class NoteDB:
    """In-memory DuckDB database over note metadata."""

    def __init__(self, index: "ReviewIndex") -> None:
        self.conn: duckdb.DuckDBPyConnection = duckdb.connect(":memory:")
        self.refresh(index)

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def refresh(self, index: "ReviewIndex") -> None:
        """(Re-)populate the database from *index* (call after a rescan or review)."""
        self._index = index
        self._create_schema()
        self._load_notes()

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE OR REPLACE TABLE notes (
                id               INTEGER PRIMARY KEY,
                title            VARCHAR,
                filename         VARCHAR,
                open             INTEGER,
                waiting          INTEGER,
                done             INTEGER,
                start_date       DATE,
                due_date         DATE,
                completed_date   DATE,
                reviewed_date    DATE,
                review_interval  VARCHAR,
                next_review_date DATE,
                is_active        BOOLEAN,
                is_completed     BOOLEAN,
                is_cancelled     BOOLEAN,
                is_project       BOOLEAN,
                is_goal          BOOLEAN,
                to_review        BOOLEAN
            )
        """)

    def _load_notes(self) -> None:
        # Note.to_dict() keys are in table column order
        rows = [tuple(note.to_dict().values()) for note in self._index.notes.values()]
        if rows:
            placeholders = ",".join("?" * len(rows[0]))
            self.conn.executemany(f"INSERT OR REPLACE INTO notes VALUES ({placeholders})", rows)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, sql: str) -> pl.DataFrame:
        """Run a raw SQL query and return a Polars DataFrame."""
        return self.conn.execute(sql).pl()

    # ------------------------------------------------------------------
    # Pre-built views
    # ------------------------------------------------------------------

    def table_view(
        self,
        *,
        status: str | None = None,
        columns: list[str] | None = None,
        order_by: str = "title",
    ) -> pl.DataFrame:
        """Return notes as a Polars DataFrame, optionally filtered by status.

        Parameters
        ----------
        status:
            One of ``due``, ``active``, ``completed``, ``cancelled`` or
            ``inactive``.
        columns:
            Which columns to include.  Defaults to the summary columns.
        order_by:
            Column name to sort by.
        """
        cols = ", ".join(columns or SUMMARY_COLUMNS)
        where = ""
        if status:
            safe = status.replace("'", "''")
            where = f"WHERE ({_STATUS_SQL}) = '{safe}'"
        safe_order = order_by.replace(";", "").replace("'", "")
        return self.conn.execute(f"SELECT {cols} FROM notes {where} ORDER BY {safe_order}, id").pl()

    def summary_frame(self) -> pl.DataFrame:
        """One row per note, ordered by title, with the exported columns."""
        return self.table_view()

    def export_summary(self, path: Path) -> Path:
        """Write the summary as CSV with title and filename always quoted."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        safe_path = str(path).replace("'", "''")
        cols = ", ".join(SUMMARY_COLUMNS)
        self.conn.execute(
            f"""
            COPY (SELECT {cols} FROM notes ORDER BY title, id)
            TO '{safe_path}' (HEADER, DELIMITER ',', FORCE_QUOTE (title, filename))
            """
        )
        return path

    def status_counts(self) -> dict[str, int]:
        """Number of notes in each lifecycle bucket."""
        rows = self.conn.execute(
            f"SELECT {_STATUS_SQL} AS status, COUNT(*) FROM notes GROUP BY status ORDER BY status"
        ).fetchall()
        return {status: count for status, count in rows}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "NoteDB":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
