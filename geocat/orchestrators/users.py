"""
User orchestrator for GeoCat.

Registration, login, token checks and self-service account changes.
Every user leaving this module is projected without password and role.
"""

import uuid
from typing import List, Optional, Tuple
from geocat.core.errors import NotAuthenticated, NotFound
from geocat.core.models import (
    Action, Principal, ResourceKind, ResourceRef, Role,
    UserCreate, UserOutput, UserRecord, UserUpdate,
)
from geocat.core.query import project_user
from geocat.observability.logging_setup import get_logger
from geocat.ports.security import PasswordHasherPort, TokenCodecPort
from geocat.ports.store import UserStorePort
from .guard import authorize

log = get_logger("geocat.users")

class UserOrchestrator:
    """사용자 요청 오케스트레이터"""

    def __init__(self,
                 users: UserStorePort,
                 hasher: PasswordHasherPort,
                 tokens: TokenCodecPort,
                 *,
                 allow_role_on_register: bool = False):
        """
        초기화합니다.

        Args:
            users: 사용자 저장소 포트
            hasher: 비밀번호 해시 포트
            tokens: 토큰 코덱 포트
            allow_role_on_register: 가입 본문의 role 필드 허용 여부
        """
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.allow_role_on_register = allow_role_on_register

    async def get(self, user_id: str) -> UserOutput:
        authorize(Action.READ, None, ResourceRef(kind=ResourceKind.USER))
        user = await self.users.get(user_id)
        if not user:
            raise NotFound("User not found")
        return project_user(user)

    async def list(self) -> List[UserOutput]:
        authorize(Action.READ, None, ResourceRef(kind=ResourceKind.USER))
        return [project_user(u) for u in await self.users.list()]

    async def create(self, body: UserCreate) -> UserOutput:
        """
        사용자를 생성합니다. 비밀번호는 해시하여 저장합니다.

        Raises:
            Conflict: 이메일이 이미 등록된 경우
        """
        authorize(Action.CREATE, None, ResourceRef(kind=ResourceKind.USER))
        role = body.role if self.allow_role_on_register else Role.USER
        user = UserRecord(
            id=uuid.uuid4().hex,
            user_name=body.user_name,
            email=str(body.email),
            password=self.hasher.hash(body.password),
            role=role,
        )
        return project_user(await self.users.create(user))

    async def update(self, principal: Optional[Principal], user_id: Optional[str], body: UserUpdate) -> UserOutput:
        """
        사용자를 수정합니다. 본인만 가능하며 관리자 우회는 없습니다.

        Raises:
            NotAuthenticated, AccessDenied, NotFound, Conflict
        """
        authorize(Action.UPDATE, principal, ResourceRef(kind=ResourceKind.USER, owner_id=user_id))

        fields = body.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in fields:
            fields["email"] = str(fields["email"])
        if "password" in fields:
            fields["password"] = self.hasher.hash(fields["password"])

        user = await self.users.update(user_id, fields)
        if not user:
            raise NotFound("User not found")
        return project_user(user)

    async def delete(self, principal: Optional[Principal], user_id: Optional[str]) -> UserOutput:
        """사용자를 삭제합니다. 본인만 가능하며 관리자 우회는 없습니다."""
        authorize(Action.DELETE, principal, ResourceRef(kind=ResourceKind.USER, owner_id=user_id))

        user = await self.users.delete(user_id)
        if not user:
            raise NotFound("User not found")
        return project_user(user)

    async def check_token(self, principal: Optional[Principal]) -> UserOutput:
        """이미 확인된 주체의 공개 투영을 반환합니다."""
        if principal is None:
            raise NotAuthenticated("token not valid")
        user = await self.users.get(principal.id)
        if not user:
            raise NotAuthenticated("token not valid")
        return project_user(user)

    async def login(self, username: str, password: str) -> Tuple[str, UserOutput]:
        """
        이메일과 비밀번호로 로그인합니다.

        Returns:
            (토큰, 사용자 투영)

        Raises:
            NotAuthenticated: 이메일 또는 비밀번호가 틀린 경우
        """
        user = await self.users.get_by_email(username)
        if not user or not self.hasher.verify(password, user.password):
            log.info("로그인 실패")
            raise NotAuthenticated("Incorrect username/password")
        return self.tokens.issue(user.id), project_user(user)

    async def resolve_principal(self, token: Optional[str]) -> Optional[Principal]:
        """
        베어러 토큰을 주체로 변환합니다. 요청마다 저장소에서 다시 읽습니다.

        Returns:
            주체 또는 None (토큰 없음/무효/삭제된 사용자)
        """
        if not token:
            return None
        user_id = self.tokens.verify(token)
        if user_id is None:
            return None
        user = await self.users.get(user_id)
        if user is None:
            return None
        return Principal(id=user.id, role=user.role)

    async def bootstrap_admin(self, email: str, password: str, user_name: str = "admin") -> Optional[UserOutput]:
        """관리자 계정이 없으면 생성합니다."""
        if await self.users.get_by_email(email):
            return None
        user = UserRecord(
            id=uuid.uuid4().hex,
            user_name=user_name,
            email=email,
            password=self.hasher.hash(password),
            role=Role.ADMIN,
        )
        await self.users.create(user)
        log.info(f"관리자 계정 생성: {user.id}")
        return project_user(user)
