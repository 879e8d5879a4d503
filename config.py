import os
from dotenv import load_dotenv

from db import Store

load_dotenv()

class Config:
    MYSQL_HOST = os.getenv('MYSQL_HOST', 'localhost')
    MYSQL_PORT = int(os.getenv('MYSQL_PORT', '3306'))
    MYSQL_USER = os.getenv('MYSQL_USER')
    MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD')
    MYSQL_DATABASE = os.getenv('MYSQL_DATABASE', 'finease_db')
    MYSQL_POOL_SIZE = int(os.getenv('MYSQL_POOL_SIZE', '5'))
    MYSQL_CONNECT_TIMEOUT = int(os.getenv('MYSQL_CONNECT_TIMEOUT', '10'))
    CLIENT_URL = os.getenv('CLIENT_URL', 'http://localhost:5173')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', '8'))

    @staticmethod
    def init_db(app):
        # The pool itself is built lazily on the first request.
        app.store = Store(
            pool_name="finease_pool",
            pool_size=Config.MYSQL_POOL_SIZE,
            host=Config.MYSQL_HOST,
            port=Config.MYSQL_PORT,
            user=Config.MYSQL_USER,
            password=Config.MYSQL_PASSWORD,
            database=Config.MYSQL_DATABASE,
            connection_timeout=Config.MYSQL_CONNECT_TIMEOUT,
        )
