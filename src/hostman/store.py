"""Persisted table for the hostman service.

The whole table lives in a single SQLite row keyed ``"table"``. Every
request takes one exclusive lock for its full read-modify-write, so two
concurrent reports can never lose each other's update.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from .exceptions import ErrorHandler, PersistenceError
from .table import Table

logger = logging.getLogger("hostman.store")

__all__ = ["TableStore"]

TABLE_KEY = "table"

CREATE_SQL = """
create table if not exists records (
  key varchar(63) primary key,
  value text not null
);
"""


class TableStore:
    """Owns the persisted table and serializes all access to it.

    Parameters
    ----------
    location:
        Path of the SQLite database file, or ``":memory:"``.
    """

    def __init__(self, location: Union[str, Path] = ":memory:") -> None:
        self.location = str(location)
        self.error_handler = ErrorHandler(logger)
        self._lock = threading.Lock()

        if self.location != ":memory:":
            Path(self.location).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = sqlite3.connect(self.location, check_same_thread=False)
            with self._conn:
                self._conn.execute(CREATE_SQL)
        except sqlite3.Error as e:
            self.error_handler.log_and_raise(
                PersistenceError, f"Cannot open table store at {self.location}", e
            )
        logger.info(f"🗄️ Table store opened at {self.location}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self) -> Table:
        row = self._conn.execute(
            "select value from records where key = ?", (TABLE_KEY,)
        ).fetchone()
        if row is None:
            return Table()
        try:
            return Table.from_json(row[0])
        except ValueError as e:
            raise PersistenceError(
                "Stored table is corrupt", {"original_error": str(e)}
            ) from e

    def _save(self, table: Table) -> None:
        # The service table never carries a self-report.
        stored = Table(host_mapping=dict(table.host_mapping))
        self._conn.execute(
            "insert or replace into records (key, value) values (?, ?)",
            (TABLE_KEY, stored.to_json()),
        )

    def _transact(self, mutate: Optional[Callable[[Table], None]]) -> Table:
        with self._lock:
            try:
                with self._conn:
                    table = self._load()
                    if mutate is not None:
                        mutate(table)
                        self._save(table)
                    return table
            except sqlite3.Error as e:
                self.error_handler.log_and_raise(
                    PersistenceError, "Table store read/write failed", e
                )
                raise  # pragma: no cover - log_and_raise always raises

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def report(self, hostname: str, ip: str) -> Table:
        """Upsert ``hostname -> ip`` and return the merged table."""
        logger.info(f"📥 Report {hostname} -> {ip}")
        return self._transact(lambda table: table.upsert(hostname, ip))

    def fetch(self) -> Table:
        """Return the stored table without changing it."""
        return self._transact(None)

    def close(self) -> None:
        with self._lock:
            self._conn.close()
