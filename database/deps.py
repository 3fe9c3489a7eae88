"""FastAPI dependencies exposing request-scoped DB sessions.

`get_db_write` is used by the submission endpoint; `get_db_read` by the
read-back endpoints so they can be routed to a replica.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()
