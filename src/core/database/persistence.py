#!/usr/bin/env python3
"""
Persistence adapter.

The only path from the pipeline to storage. Each write is one unit: a
failure is logged at error severity and reported, never raised.
"""

import logging

from ..exceptions import PersistenceError
from ..models.article import ArticleRecord
from ..models.comparison import Comparison
from ..models.results import UnitResult
from .store import NewsStore, MemoryStore

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """Idempotent article and comparison upserts over a NewsStore."""

    def __init__(self, store: NewsStore):
        self.store = store

    def upsert_article(self, record: ArticleRecord) -> UnitResult[ArticleRecord]:
        url = record.article.url
        try:
            self.store.upsert_article(record)
        except PersistenceError as e:
            logger.error(f"Failed to store article {url}: {e.message} {e.context}")
            return UnitResult.failed(url, e.message)
        return UnitResult.success(url, record)

    def upsert_comparison(self, comparison: Comparison) -> UnitResult[Comparison]:
        try:
            self.store.upsert_comparison(comparison)
        except PersistenceError as e:
            logger.error(f"Failed to store comparison '{comparison.topic}': {e.message} {e.context}")
            return UnitResult.failed(comparison.topic, e.message)
        return UnitResult.success(comparison.topic, comparison)

    def health_check(self):
        return self.store.health_check()

    def close(self) -> None:
        self.store.close()


def create_store(config) -> NewsStore:
    """
    Build the store selected by STORAGE_BACKEND.

    Args:
        config: core.config.Config
    """
    backend = config.storage.backend
    if backend == 'memory':
        logger.info("Using in-memory store; nothing will be saved")
        return MemoryStore()

    if backend == 'supabase':
        from .supabase_store import SupabaseStore
        return SupabaseStore.from_config(config.storage)

    from .connection_manager import ConnectionManager
    from .postgres_store import PostgresStore
    logger.info("Using PostgreSQL store")
    return PostgresStore(ConnectionManager.from_config(config.storage))
