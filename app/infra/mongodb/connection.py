"""
MongoDB Connection Management

Centralized, lazily-opened connection shared by all repositories.
The analytics engine only reads through it.
"""
import logging
import threading
from typing import Optional
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
import certifi

from app.config import settings

logger = logging.getLogger(__name__)

# Global connection instance
_client: Optional[MongoClient] = None
_database: Optional[Database] = None
_lock = threading.Lock()


def connect(
    connection_string: str = None,
    db_name: str = None
) -> Database:
    """
    Establish MongoDB connection.

    TLS (with the certifi CA bundle) is enabled when MONGODB_TLS is set,
    which is required for hosted clusters.

    Args:
        connection_string: MongoDB URI (defaults to settings)
        db_name: Database name (defaults to settings)

    Returns:
        MongoDB Database instance

    Raises:
        ConnectionFailure: If connection fails
    """
    if _database is not None:
        return _database

    with _lock:
        if _database is not None:
            return _database
        return _open(connection_string, db_name)


def _open(connection_string: Optional[str], db_name: Optional[str]) -> Database:
    global _client, _database

    conn_str = connection_string or settings.MONGODB_URI
    database_name = db_name or settings.MONGODB_DB_NAME

    client_options = {
        "serverSelectionTimeoutMS": 10000,
        "connectTimeoutMS": 15000,
        "socketTimeoutMS": 15000,
        "maxPoolSize": 50,
    }
    if settings.MONGODB_TLS:
        client_options["tls"] = True
        client_options["tlsCAFile"] = certifi.where()

    try:
        _client = MongoClient(conn_str, **client_options)

        # Test connection
        _client.admin.command('ping')
        _database = _client[database_name]

        logger.info(f"Connected to MongoDB: {database_name}")
        return _database

    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"Failed to connect to MongoDB: {str(e)}")
        _client = None
        raise


def get_database() -> Database:
    """Get the database instance, connecting if necessary."""
    if _database is None:
        return connect()
    return _database


def close_database():
    """Close the database connection."""
    global _client, _database
    with _lock:
        if _client:
            _client.close()
            _client = None
            _database = None
            logger.info("Disconnected from MongoDB")


def get_collection(collection_name: str):
    """
    Get a collection from the database.

    Args:
        collection_name: Name of the collection

    Returns:
        MongoDB Collection
    """
    db = get_database()
    return db[collection_name]
