from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback(conn) -> None:
    # the error that triggered the rollback is the one raised
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.warning("Rollback impossible: %s", e)


def _close(conn) -> None:
    try:
        conn.close()
    except mysql.connector.Error as e:
        logger.warning("Fermeture de connexion impossible: %s", e)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cur)`` inside one transaction.

    Commits when the block exits normally, rolls back otherwise. Connector
    errors surface as ``StoreError`` so callers never see driver types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StoreError(f"Base de données indisponible: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        _rollback(conn)
        raise StoreError(f"Erreur base de données: {e}") from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        _close(conn)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def like_pattern(term: str) -> str:
    """Build a LIKE pattern matching ``term`` literally anywhere in a column."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def to_db_datetime(value: datetime) -> datetime:
    """DATETIME columns hold naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_datetime(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)
