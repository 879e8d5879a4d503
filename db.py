import logging
import threading

import mysql.connector
from mysql.connector import pooling

from errors import StoreError

logger = logging.getLogger(__name__)


class Store:
    """Owns the MySQL connection pool for the lifetime of the process.

    The pool is created on the first call to ``ensure_connected()``; later
    calls reuse it. Request handlers borrow connections with
    ``get_connection()`` and must close them to hand them back to the pool.
    """

    def __init__(self, **pool_args):
        self._pool_args = pool_args
        self._pool = None
        self._lock = threading.Lock()

    @property
    def connected(self):
        return self._pool is not None

    def ensure_connected(self):
        if self._pool is not None:
            return self._pool
        with self._lock:
            if self._pool is None:
                try:
                    self._pool = pooling.MySQLConnectionPool(**self._pool_args)
                except mysql.connector.Error as err:
                    logger.exception("MySQL connection error")
                    raise StoreError("Database unavailable", status_code=500) from err
                logger.info(
                    "MySQL connected: %s/%s",
                    self._pool_args.get('host'),
                    self._pool_args.get('database'),
                )
        return self._pool

    def get_connection(self):
        pool = self.ensure_connected()
        try:
            return pool.get_connection()
        except mysql.connector.Error as err:
            logger.exception("Could not get a pooled connection")
            raise StoreError("Database unavailable", status_code=500) from err
