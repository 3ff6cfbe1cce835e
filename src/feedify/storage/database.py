"""sqlite connection for the feed cache.

Several feedify processes may share one cache file, so connections wait on
locks instead of failing and the journal runs in WAL mode.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from .sql import SCHEMA_SQL

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_BUSY_TIMEOUT_SECONDS = 5.0
MEMORY = ":memory:"


class Database:
    def __init__(self, path: Path | str, *, busy_timeout_seconds: float = DEFAULT_BUSY_TIMEOUT_SECONDS) -> None:
        self._path = path
        self._busy_timeout_seconds = busy_timeout_seconds
        self._connection: sqlite3.Connection | None = None

    def __enter__(self) -> Database:
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def path(self) -> Path | str:
        return self._path

    def connect(self) -> sqlite3.Connection:
        if self._connection is not None:
            return self._connection

        if self._path != MEMORY:
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        connection = sqlite3.connect(self._path, timeout=self._busy_timeout_seconds)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA journal_mode=WAL")
        self._connection = connection
        return connection

    def initialize(self) -> None:
        self.connect().executescript(SCHEMA_SQL)

    def execute(self, query: str, params: Sequence[object] = ()) -> sqlite3.Cursor:
        connection = self.connect()
        # commits on success, rolls back if the statement fails
        with connection:
            return connection.execute(query, params)

    def close(self) -> None:
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
