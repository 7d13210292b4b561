"""Database query functions.

The subscription list is stored as a single JSON document and every change is
a whole-list read and rewrite.
"""

import sqlite3
from pathlib import Path

from subtrackr.domain.models import SubscriptionId
from subtrackr.domain.subscriptions import Subscription
from subtrackr.store.codec import dump_subscriptions, load_subscriptions_json
from subtrackr.store.schema import STORAGE_TIMEOUT, get_db_path

SUBSCRIPTIONS_KEY = "subtrackr_subscriptions"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path, timeout=STORAGE_TIMEOUT)
    conn.row_factory = sqlite3.Row
    return conn


def get_value(key: str, db_path: Path | None = None) -> str | None:
    """Read a raw value from the key-value store.

    Args:
        key: Storage key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored value, or None if the key is not set.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM key_value_store WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row["value"] if row else None


def set_value(key: str, value: str, db_path: Path | None = None) -> None:
    """Write a raw value to the key-value store, replacing any previous value.

    Args:
        key: Storage key.
        value: Value to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO key_value_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_value(key: str, db_path: Path | None = None) -> None:
    """Remove a key from the key-value store.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def load_subscriptions(db_path: Path | None = None) -> list[Subscription]:
    """Load the full subscription list.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored subscriptions in their saved order (empty if none saved yet).

    Raises:
        sqlite3.Error: If database operation fails.
        CorruptStoreError: If the stored document cannot be decoded.
    """
    document = get_value(SUBSCRIPTIONS_KEY, db_path)
    if document is None:
        return []
    return load_subscriptions_json(document)


def save_subscriptions(subscriptions: list[Subscription], db_path: Path | None = None) -> None:
    """Replace the stored subscription list.

    Args:
        subscriptions: Complete list to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_value(SUBSCRIPTIONS_KEY, dump_subscriptions(subscriptions), db_path)


def add_subscription(subscription: Subscription, db_path: Path | None = None) -> None:
    """Append a subscription to the stored list.

    Raises:
        ValueError: If a subscription with the same id already exists.
        sqlite3.Error: If database operation fails.
    """
    subscriptions = load_subscriptions(db_path)
    if any(sub.id == subscription.id for sub in subscriptions):
        raise ValueError(f"Subscription {subscription.id} already exists")
    subscriptions.append(subscription)
    save_subscriptions(subscriptions, db_path)


def update_subscription(subscription: Subscription, db_path: Path | None = None) -> bool:
    """Replace the stored subscription that has the same id.

    Returns:
        True if a subscription was replaced, False if the id was not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    subscriptions = load_subscriptions(db_path)
    for i, existing in enumerate(subscriptions):
        if existing.id == subscription.id:
            subscriptions[i] = subscription
            save_subscriptions(subscriptions, db_path)
            return True
    return False


def delete_subscription(subscription_id: SubscriptionId, db_path: Path | None = None) -> bool:
    """Remove a subscription by id.

    Returns:
        True if a subscription was removed, False if the id was not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    subscriptions = load_subscriptions(db_path)
    remaining = [sub for sub in subscriptions if sub.id != subscription_id]
    if len(remaining) == len(subscriptions):
        return False
    save_subscriptions(remaining, db_path)
    return True


def clear_subscriptions(db_path: Path | None = None) -> None:
    """Permanently delete all stored subscriptions.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    delete_value(SUBSCRIPTIONS_KEY, db_path)
