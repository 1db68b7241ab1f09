"""
Security adapters for GeoCat.

Password hashing with bcrypt and signed bearer tokens with itsdangerous.
"""

from .passwords import BcryptPasswordHasher
from .tokens import SignedTokenCodec

__all__ = ["BcryptPasswordHasher", "SignedTokenCodec"]
