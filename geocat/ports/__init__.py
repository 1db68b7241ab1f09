"""
Port interfaces for GeoCat hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .store import CatStorePort, UserStorePort
from .security import PasswordHasherPort, TokenCodecPort

__all__ = ["CatStorePort", "UserStorePort", "PasswordHasherPort", "TokenCodecPort"]
