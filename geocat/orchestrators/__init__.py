"""
Orchestrators for GeoCat.

This module contains the orchestrators that coordinate
the flow between the authorization policy, the query engine and the stores.
"""
from .cats import CatOrchestrator
from .users import UserOrchestrator
from .query_engine import ResourceQueryEngine

__all__ = ["CatOrchestrator", "UserOrchestrator", "ResourceQueryEngine"]
