"""
FastAPI dependencies for GeoCat.

Resolves the orchestrators stored on the application state and the
optional authenticated principal from the bearer token.
"""

from typing import Optional
from fastapi import Depends, Header, Query, Request
from geocat.core.geo import parse_coordinate
from geocat.core.models import Coordinate, Principal
from geocat.orchestrators import CatOrchestrator, UserOrchestrator

def get_cats(request: Request) -> CatOrchestrator:
    return request.app.state.cats

def get_users(request: Request) -> UserOrchestrator:
    return request.app.state.users

def bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Authorization 헤더에서 Bearer 토큰을 꺼냅니다."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()

async def get_principal(
    token: Optional[str] = Depends(bearer_token),
    users: UserOrchestrator = Depends(get_users),
) -> Optional[Principal]:
    """토큰이 유효하면 주체, 아니면 None. 거부 판단은 정책이 합니다."""
    return await users.resolve_principal(token)

def resolved_coords(coords: Optional[str] = Query(None)) -> Optional[Coordinate]:
    """요청자의 위치 ("lat,lng"). 없으면 None."""
    if coords is None:
        return None
    return parse_coordinate(coords)
