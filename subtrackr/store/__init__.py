"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from subtrackr.store.codec import CorruptStoreError
from subtrackr.store.queries import (
    add_subscription,
    clear_subscriptions,
    delete_subscription,
    load_subscriptions,
    save_subscriptions,
    update_subscription,
)
from subtrackr.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Codec
    "CorruptStoreError",
    # Queries
    "add_subscription",
    "clear_subscriptions",
    "delete_subscription",
    "load_subscriptions",
    "save_subscriptions",
    "update_subscription",
]
