"""SQLite-backed analysis record store."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from melon_reports.schemas import AnalysisRecord


class AnalysisStoreError(Exception):
    """Raised when the analysis store cannot serve a query."""


def to_canonical_instant(value: datetime) -> str:
    """Render a datetime as a fixed-width UTC ISO-8601 string.

    Naive values are taken to be UTC. Every stored ``created_at`` goes through
    this function, so string comparison in SQL is chronological comparison.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class AnalysisStore:
    """Query analysis rows by creation range, location and watermelon type."""

    _COLUMNS = (
        "id",
        "created_at",
        "location",
        "watermelon_type",
        "maturity_status",
        "confidence",
        "sweetness_level",
        "skin_quality",
    )

    def __init__(self, db_path: str, table_name: str = "analyses") -> None:
        if not table_name.isidentifier():
            raise ValueError(f"Invalid table name: {table_name!r}")
        self._db_path = Path(db_path)
        self._table = table_name
        self._schema_ready = False

    def _connect(self) -> sqlite3.Connection:
        """Open a connection, creating the file and schema on first use.

        Raises ``sqlite3.Error`` or ``OSError``; public methods translate both
        into ``AnalysisStoreError``.
        """
        if not self._schema_ready and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        if not self._schema_ready:
            try:
                self._ensure_schema(conn)
            except sqlite3.Error:
                conn.close()
                raise
            self._schema_ready = True
        return conn

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        with conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    location TEXT,
                    watermelon_type TEXT,
                    maturity_status TEXT,
                    confidence REAL,
                    sweetness_level REAL,
                    skin_quality TEXT
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{self._table}_created_at "
                f"ON {self._table} (created_at)"
            )

    def _row_values(self, record: AnalysisRecord) -> tuple[Any, ...]:
        values = record.model_dump()
        values["created_at"] = to_canonical_instant(record.created_at)
        return tuple(values[column] for column in self._COLUMNS)

    def insert_analysis(self, record: AnalysisRecord) -> None:
        """Insert a record. Records are immutable, so an existing id is an error."""
        self.insert_analyses([record])

    def insert_analyses(self, records: Iterable[AnalysisRecord]) -> int:
        """Insert ``records`` in one transaction; nothing is written if any row fails."""
        rows = [self._row_values(record) for record in records]
        placeholders = ", ".join("?" for _ in self._COLUMNS)
        try:
            with self._connect() as conn:
                conn.executemany(
                    f"INSERT INTO {self._table} ({', '.join(self._COLUMNS)}) "
                    f"VALUES ({placeholders})",
                    rows,
                )
        except (sqlite3.Error, OSError) as exc:
            raise AnalysisStoreError(str(exc)) from exc
        return len(rows)

    def query_analyses(
        self,
        *,
        start: datetime,
        end: datetime,
        location: Optional[str] = None,
        type_prefix: Optional[str] = None,
        variety_suffix: Optional[str] = None,
    ) -> list[AnalysisRecord]:
        """Return matching records, newest first.

        ``type_prefix`` keeps rows whose watermelon type starts with
        ``"<type_prefix>:"``; ``variety_suffix`` keeps rows ending with
        ``":<variety_suffix>"``. Both are literal, case-sensitive matches.
        """
        where, params = self._build_filters(
            start=start,
            end=end,
            location=location,
            type_prefix=type_prefix,
            variety_suffix=variety_suffix,
        )
        sql = (
            f"SELECT {', '.join(self._COLUMNS)} FROM {self._table} "
            f"WHERE {where} ORDER BY created_at DESC, id DESC"
        )
        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
            return [self._row_to_record(row) for row in rows]
        except (sqlite3.Error, OSError, ValueError) as exc:
            raise AnalysisStoreError(str(exc)) from exc

    def count_analyses(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        location: Optional[str] = None,
        type_prefix: Optional[str] = None,
        variety_suffix: Optional[str] = None,
    ) -> int:
        """Count records under the same predicates as ``query_analyses``."""
        where, params = self._build_filters(
            start=start,
            end=end,
            location=location,
            type_prefix=type_prefix,
            variety_suffix=variety_suffix,
        )
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT COUNT(*) AS total FROM {self._table} WHERE {where}", params
                ).fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise AnalysisStoreError(str(exc)) from exc
        return int(row["total"])

    @staticmethod
    def _build_filters(
        *,
        start: Optional[datetime],
        end: Optional[datetime],
        location: Optional[str],
        type_prefix: Optional[str],
        variety_suffix: Optional[str],
    ) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        if start is not None:
            clauses.append("created_at >= ?")
            params.append(to_canonical_instant(start))
        if end is not None:
            clauses.append("created_at <= ?")
            params.append(to_canonical_instant(end))
        if location:
            clauses.append("location = ?")
            params.append(location)
        if type_prefix:
            needle = f"{type_prefix}:"
            clauses.append("substr(watermelon_type, 1, ?) = ?")
            params.extend([len(needle), needle])
        if variety_suffix:
            needle = f":{variety_suffix}"
            clauses.append("length(watermelon_type) >= ? AND substr(watermelon_type, -?) = ?")
            params.extend([len(needle), len(needle), needle])
        return (" AND ".join(clauses) or "1 = 1"), params

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> AnalysisRecord:
        data: Dict[str, Any] = dict(row)
        data["created_at"] = datetime.fromisoformat(data["created_at"])
        return AnalysisRecord(**data)


__all__ = ["AnalysisStore", "AnalysisStoreError", "to_canonical_instant"]
