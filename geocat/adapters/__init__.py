"""
Adapters for GeoCat hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .storage import SQLiteCatStore, SQLiteUserStore
from .security import BcryptPasswordHasher, SignedTokenCodec

__all__ = ["SQLiteCatStore", "SQLiteUserStore", "BcryptPasswordHasher", "SignedTokenCodec"]
