#!/usr/bin/env python3
"""
Database Connection Manager

Handles the PostgreSQL connection lifecycle for the postgres store.
The connection is opened lazily on first use and re-opened when it drops.
"""

import logging
import psycopg
from psycopg.rows import dict_row
from typing import Optional, Dict, Any
from contextlib import contextmanager

from ..exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages a single autocommit connection with reconnect on failure."""

    def __init__(self, dsn: str, connect_timeout: int = 30):
        """
        Args:
            dsn: PostgreSQL connection string
            connect_timeout: Seconds to wait for the server
        """
        self.dsn = dsn
        self.connect_timeout = connect_timeout
        self.connection: Optional[psycopg.Connection] = None

    @classmethod
    def from_config(cls, storage_config) -> 'ConnectionManager':
        """Build from a core.config.StorageConfig."""
        return cls(storage_config.postgres_dsn(), storage_config.connection_timeout)

    def _connect(self) -> None:
        try:
            self.connection = psycopg.connect(
                self.dsn,
                row_factory=dict_row,
                autocommit=True,
                connect_timeout=self.connect_timeout
            )
            logger.debug("Database connection established")
        except psycopg.Error as e:
            raise DatabaseConnectionError("postgres", e)

    def ensure_connection(self) -> None:
        """Ensure database connection is active, reconnect if needed."""
        if not self.connection or self.connection.closed:
            self._connect()
            return
        try:
            with self.connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except psycopg.Error:
            logger.warning("Connection test failed, reconnecting...")
            self._connect()

    @contextmanager
    def get_cursor(self):
        """
        Get database cursor as context manager.

        Raises:
            DatabaseConnectionError: If no connection can be established
        """
        self.ensure_connection()
        with self.connection.cursor() as cursor:
            yield cursor

    def close(self) -> None:
        """Close database connection."""
        if self.connection and not self.connection.closed:
            self.connection.close()
            logger.debug("Database connection closed")

    def health_check(self) -> Dict[str, Any]:
        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT version() AS version")
                row = cursor.fetchone()
            return {'status': 'healthy', 'version': row['version'] if row else None}
        except (DatabaseConnectionError, psycopg.Error) as e:
            return {'status': 'unhealthy', 'error': str(e)}
