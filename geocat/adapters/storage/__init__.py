"""
Storage adapters for GeoCat hexagonal architecture.

This module contains the SQLite-backed resource stores.
"""

from .sqlite_users import SQLiteUserStore
from .sqlite_cats import SQLiteCatStore

__all__ = ["SQLiteUserStore", "SQLiteCatStore"]
