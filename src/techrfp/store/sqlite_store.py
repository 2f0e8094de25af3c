"""SQLite-backed opportunity store with ingest run history."""

import json
import sqlite3
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from techrfp.models.opportunity import Opportunity
from techrfp.store.base import BaseOpportunityStore

_UPSERT_SQL = """
    INSERT INTO opportunities (id, source, technology_category, is_active, data, first_seen_at, last_seen_at)
    VALUES (?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        source = excluded.source,
        technology_category = excluded.technology_category,
        is_active = excluded.is_active,
        data = excluded.data,
        last_seen_at = excluded.last_seen_at
"""


class RunRecord:
    """Record of an ingest run."""

    def __init__(
        self,
        id: int,
        source: str,
        started_at: datetime,
        finished_at: Optional[datetime],
        status: str,
        items_fetched: int,
        items_new: int,
        items_updated: int,
        error: Optional[str] = None,
    ):
        self.id = id
        self.source = source
        self.started_at = started_at
        self.finished_at = finished_at
        self.status = status
        self.items_fetched = items_fetched
        self.items_new = items_new
        self.items_updated = items_updated
        self.error = error


class SqliteOpportunityStore(BaseOpportunityStore):
    """
    SQLite store for opportunities. Same contract as the in-memory store;
    each row holds the full record as JSON, keyed by opportunity id.
    """

    def __init__(self, db_path: str | Path = "techrfp.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def _serialize_opp(self, opp: Opportunity) -> str:
        """Serialize opportunity to JSON for storage."""
        return json.dumps(opp.model_dump(mode="json"))

    def _deserialize_opp(self, row: sqlite3.Row) -> Opportunity:
        """Deserialize stored row to Opportunity."""
        return Opportunity.model_validate(json.loads(row["data"]))

    def _row_params(self, opp: Opportunity, now: str) -> tuple:
        return (
            opp.id,
            opp.source,
            opp.technology_category,
            int(opp.is_active),
            self._serialize_opp(opp),
            now,
            now,
        )

    def get(self, opp_id: str) -> Optional[Opportunity]:
        with self._connection() as conn:
            row = conn.execute("SELECT data FROM opportunities WHERE id = ?", (opp_id,)).fetchone()
        return self._deserialize_opp(row) if row else None

    def upsert(self, opp: Opportunity) -> Opportunity:
        stored = self._with_defaults(opp)
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(_UPSERT_SQL, self._row_params(stored, now))
            conn.commit()
        return stored

    def all(self) -> list[Opportunity]:
        with self._connection() as conn:
            rows = conn.execute("SELECT data FROM opportunities").fetchall()
        return [self._deserialize_opp(r) for r in rows]

    def replace_all(self, opportunities: Iterable[Opportunity]) -> int:
        now = datetime.now(timezone.utc).isoformat()
        params = [self._row_params(self._with_defaults(o), now) for o in opportunities]
        with self._connection() as conn:
            conn.execute("DELETE FROM opportunities")
            conn.executemany(_UPSERT_SQL, params)
            conn.commit()
        return len(self)

    def __len__(self) -> int:
        with self._connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM opportunities").fetchone()[0]

    def start_run(self, source: str) -> RunRecord:
        """Record start of an ingest run. Returns RunRecord with id."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO runs (source, started_at, status) VALUES (?, ?, 'running')",
                (source, now),
            )
            conn.commit()
            run_id = cursor.lastrowid
        return RunRecord(
            id=run_id or 0,
            source=source,
            started_at=datetime.fromisoformat(now),
            finished_at=None,
            status="running",
            items_fetched=0,
            items_new=0,
            items_updated=0,
        )

    def finish_run(
        self,
        run_id: int,
        items_fetched: int,
        items_new: int,
        items_updated: int,
        status: str = "completed",
        error: Optional[str] = None,
    ) -> None:
        """Record completion (or failure) of an ingest run."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE runs SET finished_at = ?, status = ?, items_fetched = ?, items_new = ?,
                    items_updated = ?, error = ?
                WHERE id = ?
                """,
                (now, status, items_fetched, items_new, items_updated, error, run_id),
            )
            conn.commit()

    def latest_run(self, source: Optional[str] = None) -> Optional[RunRecord]:
        """Most recent ingest run, optionally for one source."""
        query = "SELECT * FROM runs"
        params: tuple = ()
        if source:
            query += " WHERE source = ?"
            params = (source,)
        query += " ORDER BY id DESC LIMIT 1"
        with self._connection() as conn:
            row = conn.execute(query, params).fetchone()
        if row is None:
            return None
        return RunRecord(
            id=row["id"],
            source=row["source"],
            started_at=datetime.fromisoformat(row["started_at"]),
            finished_at=datetime.fromisoformat(row["finished_at"]) if row["finished_at"] else None,
            status=row["status"],
            items_fetched=row["items_fetched"],
            items_new=row["items_new"],
            items_updated=row["items_updated"],
            error=row["error"],
        )
