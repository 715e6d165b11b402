from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


class DatabaseConnection:
    """Explicitly constructed MySQL client with a connect()/close() lifecycle.

    ``connect()`` opens a connection pool; ``acquire()`` hands out pooled
    connections for a single unit of work (closing them returns them to the pool).
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "studyhall"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    def connect(self) -> "DatabaseConnection":
        if self._pool is None:
            logger.debug(
                "opening pool %s for %s@%s:%s/%s",
                self._pool_name,
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
            )
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._pool_name,
                pool_size=int(self._config.pool_size),
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        return self

    def acquire(self):
        if self._pool is None:
            self.connect()
        return self._pool.get_connection()

    def close(self) -> None:
        # Pooled connections are closed as they are returned; dropping the pool
        # prevents further checkouts.
        self._pool = None
