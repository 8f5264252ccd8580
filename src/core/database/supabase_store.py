#!/usr/bin/env python3
"""
Supabase REST API store.

Alternative to the direct PostgreSQL connection for networks that block the
pooler port. Upserts are done as select-then-update/insert over HTTPS.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional

from supabase import create_client, Client

from ..exceptions import DatabaseConnectionError, DatabaseOperationError
from ..models.article import ArticleRecord
from ..models.comparison import Comparison
from .store import (
    NewsStore, ARTICLES_TABLE, COMPARISONS_TABLE, ARTICLE_UPDATE_COLUMNS,
    COMPARISON_UPDATE_COLUMNS, article_row, comparison_row
)

logger = logging.getLogger(__name__)


def _serializable(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in row.items()}


class SupabaseStore(NewsStore):
    """Database store using the Supabase REST API."""

    name = "supabase"

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_config(cls, storage_config) -> 'SupabaseStore':
        """
        Create the client from a core.config.StorageConfig.

        Raises:
            DatabaseConnectionError: If the client cannot be created
        """
        try:
            client = create_client(storage_config.supabase_url, storage_config.supabase_key)
        except Exception as e:
            raise DatabaseConnectionError("supabase", e)
        logger.info("Supabase API store initialized")
        return cls(client)

    def upsert_article(self, record: ArticleRecord) -> None:
        row = _serializable(article_row(record))
        self._upsert(ARTICLES_TABLE, 'url', row, ARTICLE_UPDATE_COLUMNS)
        logger.debug(f"Upserted article {record.article.url} via API")

    def upsert_comparison(self, comparison: Comparison) -> None:
        row = _serializable(comparison_row(comparison))
        self._upsert(COMPARISONS_TABLE, 'topic', row, COMPARISON_UPDATE_COLUMNS)
        logger.debug(f"Upserted comparison '{comparison.topic}' via API")

    def _upsert(self, table: str, key: str, row: Dict[str, Any], update_columns) -> None:
        try:
            existing = (self.client.table(table)
                        .select('id')
                        .eq(key, row[key])
                        .execute())

            if existing.data:
                (self.client.table(table)
                 .update({column: row[column] for column in update_columns})
                 .eq(key, row[key])
                 .execute())
            else:
                (self.client.table(table)
                 .insert(row)
                 .execute())
        except Exception as e:
            raise DatabaseOperationError("upsert", table, e)

    def get_article(self, url: str) -> Optional[Dict[str, Any]]:
        return self._select_one(ARTICLES_TABLE, 'url', url)

    def get_comparison(self, topic: str) -> Optional[Dict[str, Any]]:
        return self._select_one(COMPARISONS_TABLE, 'topic', topic)

    def _select_one(self, table: str, key: str, value: str) -> Optional[Dict[str, Any]]:
        try:
            result = (self.client.table(table)
                      .select('*')
                      .eq(key, value)
                      .limit(1)
                      .execute())
        except Exception as e:
            raise DatabaseOperationError("select", table, e)
        return result.data[0] if result.data else None

    def health_check(self) -> Dict[str, Any]:
        try:
            (self.client.table(ARTICLES_TABLE)
             .select('id')
             .limit(1)
             .execute())
            return {'status': 'healthy', 'backend': self.name}
        except Exception as e:
            return {'status': 'unhealthy', 'backend': self.name, 'error': str(e)}
