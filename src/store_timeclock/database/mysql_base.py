from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One connection per unit of work: commit on success, roll back on any error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        logger.debug("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def as_wall_clock(value: Any) -> Optional[time]:
    """Coerce a TIME column to ``datetime.time``.

    The C extension hands TIME back as ``timedelta``, the pure-Python driver
    sometimes as ``'HH:MM[:SS]'`` text.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + value % timedelta(days=1)).time()
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported TIME value: {value!r}")
