"""
Core domain models and pure functions for GeoCat.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    Action, CatOutput, CatRecord, Coordinate, Decision, Denial, Polygon,
    Principal, ResourceKind, ResourceRef, Role, UserOutput, UserRecord,
)
from .geo import build_bounding_polygon, parse_coordinate
from .policy import decide
from .query import clamp_page, project_user

__all__ = [
    "Action", "CatOutput", "CatRecord", "Coordinate", "Decision", "Denial", "Polygon",
    "Principal", "ResourceKind", "ResourceRef", "Role", "UserOutput", "UserRecord",
    "build_bounding_polygon", "parse_coordinate", "decide", "clamp_page", "project_user",
]
