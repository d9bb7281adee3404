"""
MySQL access for the ESEP Registration Portal.
Connection settings come from the environment; the pool opens on the first query.
"""

import os
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from mysql.connector import pooling, Error

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


@dataclass
class DatabaseConfig:
    host: str = 'localhost'
    port: int = 3306
    database: str = 'esep_portal'
    user: str = 'root'
    password: str = field(default='', repr=False)
    pool_size: int = 5

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        return cls(
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', 3306)),
            database=os.getenv('DB_NAME', 'esep_portal'),
            user=os.getenv('DB_USER', 'root'),
            password=os.getenv('DB_PASSWORD', ''),
            pool_size=int(os.getenv('DB_POOL_SIZE', 5)),
        )

    def pool_options(self) -> dict:
        return {
            'pool_name': 'esep_pool',
            'pool_size': self.pool_size,
            'pool_reset_session': True,
            'host': self.host,
            'port': self.port,
            'database': self.database,
            'user': self.user,
            'password': self.password,
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
        }


def split_sql_statements(script: str) -> List[str]:
    """Statements of a schema script; `--` comment lines are dropped."""
    body = "\n".join(line for line in script.splitlines() if not line.strip().startswith('--'))
    return [statement.strip() for statement in body.split(';') if statement.strip()]


class DatabaseManager:
    """Pooled connections plus the single execute_query entry point the repositories use"""

    def __init__(self, config: DatabaseConfig = None):
        self.config = config
        self._pool = None

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            self.config = self.config or DatabaseConfig.from_env()
            try:
                self._pool = pooling.MySQLConnectionPool(**self.config.pool_options())
            except Error as e:
                logger.error(f"Could not open connection pool to {self.config.host}:{self.config.port}: {e}")
                raise
            logger.info(f"Connection pool ready for database {self.config.database}")
        return self._pool

    @contextmanager
    def get_connection(self):
        """Borrow a pooled connection; uncommitted work is rolled back on error"""
        connection = self._get_pool().get_connection()
        try:
            yield connection
        except Error as e:
            connection.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            if connection.is_connected():
                connection.close()

    def execute_query(self, query: str, params: tuple = None, fetch_one: bool = False, fetch_all: bool = False):
        """Run one statement.

        Reads return a dict row (fetch_one) or a list of dict rows (fetch_all);
        writes are committed and return the cursor's lastrowid.
        """
        with self.get_connection() as connection:
            cursor = connection.cursor(dictionary=True)
            try:
                cursor.execute(query, params or ())
                if fetch_one:
                    return cursor.fetchone()
                if fetch_all:
                    return cursor.fetchall()
                connection.commit()
                return cursor.lastrowid
            finally:
                cursor.close()

    def initialize_schema(self, script: str = None) -> int:
        """Create missing tables and seed rows; returns the number of statements run"""
        statements = split_sql_statements(script or SCHEMA_PATH.read_text(encoding='utf-8'))
        for statement in statements:
            self.execute_query(statement)
        logger.info(f"Schema checked ({len(statements)} statements)")
        return len(statements)


# Shared by every repository
db_manager = DatabaseManager()
