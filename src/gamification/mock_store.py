"""
In-memory record store

Dict-backed stand-in for RecordStore, used for local development and tests.
Rows are kept per collection; collections that were never created behave
like unprovisioned tables.
"""

import copy
import logging
from typing import Any, Optional

from src.exceptions import MissingCollectionError, QueryError

logger = logging.getLogger(__name__)


class InMemoryStore:
    """In-memory store with the same async interface as RecordStore"""

    def __init__(self, collections: Optional[dict[str, list[dict]]] = None):
        self._collections: dict[str, list[dict]] = {}
        self._failing: dict[str, Exception] = {}
        for name, rows in (collections or {}).items():
            self.create_collection(name, rows)

    def create_collection(self, name: str, rows: Optional[list[dict]] = None) -> None:
        """Provision a collection, optionally seeding rows"""
        self._collections[name] = [dict(row) for row in rows or []]

    def drop_collection(self, name: str) -> None:
        self._collections.pop(name, None)

    def insert(self, name: str, row: dict) -> dict:
        """Append a row to a provisioned collection"""
        self._require(name, "insert")
        stored = dict(row)
        self._collections[name].append(stored)
        return copy.deepcopy(stored)

    def fail_on(self, name: str, error: Optional[Exception] = None) -> None:
        """Make every access to `name` raise `error` (defaults to QueryError)"""
        self._failing[name] = error or QueryError(
            message=f"Simulated failure reading {name}",
            context={"collection": name},
        )

    def _require(self, name: str, operation: str) -> list[dict]:
        if name in self._failing:
            raise self._failing[name]
        if name not in self._collections:
            raise MissingCollectionError(
                message=f"Collection {name} does not exist",
                collection=name,
                operation=operation,
            )
        return self._collections[name]

    async def query_collection(
        self,
        name: str,
        columns: Optional[list[str]] = None,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> list[dict]:
        rows = self._require(name, "query_collection")

        matched = [
            row for row in rows
            if all(row.get(column) == value for column, value in (filters or {}).items())
        ]

        if order_by:
            column = order_by.lstrip("-")
            matched.sort(
                key=lambda row: (row.get(column) is None, row.get(column)),
                reverse=order_by.startswith("-"),
            )

        if columns:
            return [{column: row.get(column) for column in columns} for row in matched]
        return copy.deepcopy(matched)

    async def read_singleton(self, name: str) -> Optional[dict]:
        rows = self._require(name, "read_singleton")
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(f"Collection {name} has more than one row; using the first")
        return copy.deepcopy(rows[0])

    async def read_record(self, name: str, record_id: str) -> Optional[dict]:
        rows = self._require(name, "read_record")
        for row in rows:
            if row.get("id") == record_id:
                return copy.deepcopy(row)
        return None

    async def update_record(self, name: str, record_id: str, fields: dict[str, Any]) -> Optional[dict]:
        rows = self._require(name, "update_record")
        for row in rows:
            if row.get("id") == record_id:
                row.update(fields)
                logger.debug(f"Updated {name} {record_id} in memory")
                return copy.deepcopy(row)
        return None
