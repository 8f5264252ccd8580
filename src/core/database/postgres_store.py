#!/usr/bin/env python3
"""
PostgreSQL store using psycopg and INSERT ... ON CONFLICT upserts.
"""

import logging
from typing import Dict, Any, Optional, Sequence

import psycopg
from psycopg.types.json import Jsonb

from ..exceptions import DatabaseOperationError
from ..models.article import ArticleRecord
from ..models.comparison import Comparison
from .connection_manager import ConnectionManager
from .store import (
    NewsStore, ARTICLES_TABLE, COMPARISONS_TABLE, ARTICLE_COLUMNS, ARTICLE_UPDATE_COLUMNS,
    COMPARISON_COLUMNS, COMPARISON_UPDATE_COLUMNS, JSON_COLUMNS, article_row, comparison_row
)

logger = logging.getLogger(__name__)


def _upsert_sql(table: str, columns: Sequence[str], conflict: str, updates: Sequence[str]) -> str:
    placeholders = ', '.join(f"%({column})s" for column in columns)
    assignments = ', '.join(f"{column} = EXCLUDED.{column}" for column in updates)
    return (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT ({conflict}) DO UPDATE SET {assignments}"
    )


ARTICLE_UPSERT_SQL = _upsert_sql(ARTICLES_TABLE, ARTICLE_COLUMNS, 'url', ARTICLE_UPDATE_COLUMNS)
COMPARISON_UPSERT_SQL = _upsert_sql(COMPARISONS_TABLE, COMPARISON_COLUMNS, 'topic', COMPARISON_UPDATE_COLUMNS)


def _adapt(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: Jsonb(value) if key in JSON_COLUMNS else value for key, value in row.items()}


class PostgresStore(NewsStore):
    """Writes straight to Postgres over the Supabase pooler."""

    name = "postgres"

    def __init__(self, connection_manager: ConnectionManager):
        self.connection_manager = connection_manager

    def upsert_article(self, record: ArticleRecord) -> None:
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(ARTICLE_UPSERT_SQL, _adapt(article_row(record)))
        except psycopg.Error as e:
            raise DatabaseOperationError("upsert", ARTICLES_TABLE, e)
        logger.debug(f"Upserted article {record.article.url}")

    def upsert_comparison(self, comparison: Comparison) -> None:
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(COMPARISON_UPSERT_SQL, _adapt(comparison_row(comparison)))
        except psycopg.Error as e:
            raise DatabaseOperationError("upsert", COMPARISONS_TABLE, e)
        logger.debug(f"Upserted comparison '{comparison.topic}'")

    def get_article(self, url: str) -> Optional[Dict[str, Any]]:
        return self._select_one(ARTICLES_TABLE, 'url', url)

    def get_comparison(self, topic: str) -> Optional[Dict[str, Any]]:
        return self._select_one(COMPARISONS_TABLE, 'topic', topic)

    def _select_one(self, table: str, key: str, value: str) -> Optional[Dict[str, Any]]:
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"SELECT * FROM {table} WHERE {key} = %s", (value,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise DatabaseOperationError("select", table, e)
        return dict(row) if row else None

    def health_check(self) -> Dict[str, Any]:
        status = self.connection_manager.health_check()
        status['backend'] = self.name
        return status

    def close(self) -> None:
        self.connection_manager.close()
