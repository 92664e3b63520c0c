"""
Base Repository - Champ Funnel
champ_funnel/repositories/base.py

Table-scoped Snowflake access: one short-lived connection per call, dict
cursors, parameterized INSERT/SELECT builders and connector error mapping.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, List, Literal, Optional, Sequence, Tuple

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, OperationalError, ProgrammingError

from champ_funnel.config import Settings
from champ_funnel.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    RepositoryException,
)
from champ_funnel.services.snowflake import get_snowflake_connection

logger = logging.getLogger(__name__)

Fetch = Optional[Literal["one", "all"]]


class BaseRepository:
    """Snowflake repository bound to a single table."""

    def __init__(self, settings: Settings, table: str):
        self.settings = settings
        self.table = table

    @contextmanager
    def connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        try:
            conn = get_snowflake_connection(self.settings)
        except (InterfaceError, OperationalError) as e:
            logger.error(f"Snowflake connection failed for {self.table}: {e}")
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}") from e
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self) -> Generator[Any, None, None]:
        with self.connection() as conn:
            cur = conn.cursor(DictCursor)
            try:
                yield cur
            finally:
                cur.close()

    def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        fetch: Fetch = None,
        commit: bool = False,
    ) -> Any:
        """
        Run one statement.

        Args:
            sql: Statement with %s placeholders
            params: Bound values
            fetch: "one", "all" or None for the affected row count
            commit: Commit after execution (DDL and inserts)

        Raises:
            DuplicateEntityException: unique/primary key violation
            RepositoryException: any other query failure
        """
        with self.cursor() as cur:
            try:
                cur.execute(sql, tuple(params))
                if commit:
                    cur.connection.commit()
                if fetch == "one":
                    return cur.fetchone()
                if fetch == "all":
                    return cur.fetchall()
                return cur.rowcount
            except ProgrammingError as e:
                message = str(e).upper()
                if "UNIQUE" in message or "DUPLICATE" in message:
                    raise DuplicateEntityException(str(e)) from e
                raise RepositoryException(f"Query error: {e}") from e
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}") from e

    def insert(self, columns: Sequence[str], values: Sequence[Any]) -> None:
        placeholders = ", ".join(["%s"] * len(columns))
        sql = f"INSERT INTO {self.table} ({', '.join(c.upper() for c in columns)}) VALUES ({placeholders})"
        self.execute(sql, values, commit=True)

    def select(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        fetch_one: bool = False,
    ) -> Any:
        """SELECT * with equality filters; None-valued filters are skipped."""
        where, params = self.where_clause(filters or {})
        sql = f"SELECT * FROM {self.table}{where}"
        if order_by:
            sql += f" ORDER BY {order_by.upper()} {'DESC' if descending else 'ASC'}"
        if fetch_one:
            return self.execute(sql, params, fetch="one")
        return self.execute(sql, params, fetch="all") or []

    @staticmethod
    def where_clause(filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
        clauses = [f"{column.upper()} = %s" for column, value in filters.items() if value is not None]
        params = [value for value in filters.values() if value is not None]
        if not clauses:
            return "", []
        return f" WHERE {' AND '.join(clauses)}", params

    @staticmethod
    def normalize_timestamp(dt: Optional[datetime]) -> Optional[datetime]:
        """TIMESTAMP_TZ comes back aware; naive values are taken as UTC."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def lowercase_keys(row: Dict[str, Any]) -> Dict[str, Any]:
        return {k.lower(): v for k, v in row.items()}
