"""Content collection queries (skills, projects, profiles, ...)"""
import logging
import re
from typing import Any, Optional

import psycopg
from psycopg import sql

from src.config import PROFILE_TABLE
from src.db.connection import Database, db
from src.exceptions import ValidationError, wrap_external_exception

logger = logging.getLogger(__name__)

# Collections this service is allowed to touch
XP_COLLECTIONS = frozenset({
    "skills",
    "projects",
    "certifications",
    "experiences",
    "achievements",
    "courses",
    "habits",
})
ALLOWED_COLLECTIONS = XP_COLLECTIONS | {PROFILE_TABLE}

_IDENTIFIER_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _check_collection(name: str) -> str:
    if name not in ALLOWED_COLLECTIONS:
        raise ValidationError(
            message=f"Collection '{name}' is not allowed",
            field="collection",
            value=name,
        )
    return name


def _check_column(name: str) -> str:
    if not _IDENTIFIER_RE.match(name):
        raise ValidationError(
            message=f"Column '{name}' is not a valid identifier",
            field="column",
            value=name,
        )
    return name


def build_select(
    collection: str,
    columns: Optional[list[str]] = None,
    filters: Optional[dict[str, Any]] = None,
    order_by: Optional[str] = None,
    limit: Optional[int] = None,
) -> tuple[sql.Composed, list[Any]]:
    """
    Compose a SELECT over one collection

    Args:
        collection: Table name (must be whitelisted)
        columns: Columns to return, all when omitted
        filters: column -> value equality; None matches IS NULL
        order_by: Column to order by, prefix with '-' for descending
        limit: Optional row limit

    Returns:
        (query, params)
    """
    _check_collection(collection)

    if columns:
        fields = sql.SQL(", ").join(sql.Identifier(_check_column(c)) for c in columns)
    else:
        fields = sql.SQL("*")

    query = sql.SQL("SELECT {fields} FROM {table}").format(
        fields=fields,
        table=sql.Identifier(collection),
    )
    params: list[Any] = []

    if filters:
        clauses = []
        for column, value in filters.items():
            ident = sql.Identifier(_check_column(column))
            if value is None:
                clauses.append(sql.SQL("{} IS NULL").format(ident))
            else:
                clauses.append(sql.SQL("{} = %s").format(ident))
                params.append(value)
        query += sql.SQL(" WHERE ") + sql.SQL(" AND ").join(clauses)

    if order_by:
        descending = order_by.startswith("-")
        column = _check_column(order_by.lstrip("-"))
        query += sql.SQL(" ORDER BY {} {}").format(
            sql.Identifier(column),
            sql.SQL("DESC" if descending else "ASC"),
        )

    if limit is not None:
        query += sql.SQL(" LIMIT %s")
        params.append(limit)

    return query, params


class RecordStore:
    """
    PostgreSQL-backed record store

    Reads and updates rows by collection name. Driver errors are wrapped
    into the project's exception hierarchy; an unprovisioned table raises
    MissingCollectionError.
    """

    def __init__(self, database: Database = db):
        self.db = database

    async def query_collection(
        self,
        name: str,
        columns: Optional[list[str]] = None,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> list[dict]:
        """Return all rows of a collection matching the equality filters"""
        query, params = build_select(name, columns, filters, order_by)
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, params)
                    rows = await cur.fetchall()
                    return [dict(row) for row in rows]
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="query_collection",
                context={"collection": name},
            )

    async def read_singleton(self, name: str) -> Optional[dict]:
        """Return the single row of a collection, or None when empty"""
        query, params = build_select(name, limit=2)
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, params)
                    rows = await cur.fetchall()
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="read_singleton",
                context={"collection": name},
            )

        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(f"Collection {name} has more than one row; using the first")
        return dict(rows[0])

    async def read_record(self, name: str, record_id: str) -> Optional[dict]:
        """Return one row by id, or None"""
        query, params = build_select(name, filters={"id": record_id}, limit=1)
        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, params)
                    row = await cur.fetchone()
                    return dict(row) if row else None
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="read_record",
                context={"collection": name, "record_id": record_id},
            )

    async def update_record(self, name: str, record_id: str, fields: dict[str, Any]) -> Optional[dict]:
        """
        Update columns of one row by id

        Returns:
            The updated row, or None when no row has that id
        """
        _check_collection(name)
        if not fields:
            raise ValidationError(message="No fields to update", field="fields", value=fields)

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(_check_column(column)))
            for column in fields
        )
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s RETURNING *").format(
            table=sql.Identifier(name),
            assignments=assignments,
        )
        params = [*fields.values(), record_id]

        try:
            async with self.db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, params)
                    row = await cur.fetchone()
                    await conn.commit()
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="update_record",
                context={"collection": name, "record_id": record_id},
            )

        if row:
            logger.debug(f"Updated {name} {record_id}: {sorted(fields)}")
        return dict(row) if row else None
