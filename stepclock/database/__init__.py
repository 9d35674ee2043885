"""Database package."""

from .db import get_session, init_db, read_value, write_value
from .models import KeyValue

__all__ = ["get_session", "init_db", "read_value", "write_value", "KeyValue"]
