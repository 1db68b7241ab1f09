"""
User and authentication routes for the GeoCat HTTP API.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends
from geocat.core.models import LoginRequest, Principal, UserCreate, UserOutput, UserUpdate
from geocat.orchestrators import UserOrchestrator
from .deps import get_principal, get_users

router = APIRouter(prefix="/users", tags=["users"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("", response_model=List[UserOutput])
async def user_list(users: UserOrchestrator = Depends(get_users)):
    return await users.list()

@router.post("")
async def user_post(body: UserCreate, users: UserOrchestrator = Depends(get_users)):
    user = await users.create(body)
    return {"message": "User created", "data": user}

@router.put("")
async def user_put_current(body: UserUpdate,
                           principal: Optional[Principal] = Depends(get_principal),
                           users: UserOrchestrator = Depends(get_users)):
    user = await users.update(principal, principal.id if principal else None, body)
    return {"message": "User updated", "data": user}

@router.delete("")
async def user_delete_current(principal: Optional[Principal] = Depends(get_principal),
                              users: UserOrchestrator = Depends(get_users)):
    user = await users.delete(principal, principal.id if principal else None)
    return {"message": "User deleted", "data": user}

@router.get("/token", response_model=UserOutput)
async def check_token(principal: Optional[Principal] = Depends(get_principal),
                      users: UserOrchestrator = Depends(get_users)):
    """현재 토큰이 유효한지 확인합니다."""
    return await users.check_token(principal)

@router.get("/{user_id}", response_model=UserOutput)
async def user_get(user_id: str, users: UserOrchestrator = Depends(get_users)):
    return await users.get(user_id)

@auth_router.post("/login")
async def login(body: LoginRequest, users: UserOrchestrator = Depends(get_users)):
    token, user = await users.login(body.username, body.password)
    return {"message": "Login successful", "token": token, "user": user}
