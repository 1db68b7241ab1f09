"""
Cat orchestrator for GeoCat.

Wires an authenticated principal, parsed request bodies and resolved
coordinates through the authorization policy to the cat store.
"""

import uuid
from typing import List, Optional
from geocat.core.errors import NotFound, ValidationError
from geocat.core.models import (
    Action, CatAdminUpdate, CatCreate, CatOutput, CatRecord, CatUpdate,
    Coordinate, Principal, ResourceKind,
)
from geocat.core.policy import resource_ref
from geocat.core.query import project_cat
from geocat.observability.logging_setup import get_logger
from geocat.ports.store import CatStorePort, UserStorePort
from .guard import authorize, require_principal
from .query_engine import ResourceQueryEngine

log = get_logger("geocat.cats")

class CatOrchestrator:
    """고양이 요청 오케스트레이터"""

    def __init__(self, cats: CatStorePort, users: UserStorePort):
        """
        초기화합니다.

        Args:
            cats: 고양이 저장소 포트
            users: 사용자 저장소 포트 (소유자 확장용)
        """
        self.cats = cats
        self.users = users
        self.query = ResourceQueryEngine(cats)

    async def _expand(self, cat: CatRecord) -> CatOutput:
        owner = await self.users.get(cat.owner)
        return project_cat(cat, owner)

    async def _require_user(self, user_id: str) -> None:
        if await self.users.get(user_id) is None:
            raise ValidationError(f"Owner {user_id} does not exist")

    # ---- 조회 ----

    async def get(self, cat_id: str) -> CatOutput:
        authorize(Action.READ, None, resource_ref(ResourceKind.CAT))
        cat = await self.cats.get(cat_id)
        if not cat:
            raise NotFound("Cat not found")
        return await self._expand(cat)

    async def list_paged(self, limit=None, offset=None) -> List[CatOutput]:
        authorize(Action.READ, None, resource_ref(ResourceKind.CAT))
        return [project_cat(c) for c in await self.query.list_paged(limit, offset)]

    async def list_by_owner(self, principal: Optional[Principal]) -> List[CatOutput]:
        """현재 주체가 소유한 고양이를 소유자 확장과 함께 반환합니다."""
        require_principal(principal, Action.READ, resource_ref(ResourceKind.CAT))
        owner = await self.users.get(principal.id)
        return [project_cat(c, owner) for c in await self.cats.list_by_owner(principal.id)]

    async def list_in_bounding_box(self, top_right: Optional[str],
                                   bottom_left: Optional[str]) -> List[CatOutput]:
        authorize(Action.READ, None, resource_ref(ResourceKind.CAT))
        cats = await self.query.list_in_bounding_box(top_right, bottom_left)
        return [project_cat(c) for c in cats]

    # ---- 변경 ----

    async def create(self, principal: Optional[Principal], body: CatCreate,
                     coords: Optional[Coordinate] = None) -> CatOutput:
        """
        고양이를 생성합니다.

        소유자는 주체로 고정되며, 관리자만 다른 사용자를 소유자로 지정할 수 있습니다.

        Args:
            principal: 인증된 주체
            body: 생성 본문
            coords: 요청자의 위치 (본문에 위치가 없을 때 사용)
        """
        authorize(Action.CREATE, principal, resource_ref(ResourceKind.CAT))

        owner = principal.id
        if body.owner and body.owner != principal.id and principal.is_admin:
            await self._require_user(body.owner)
            owner = body.owner

        location = body.location or coords
        if location is None:
            raise ValidationError("Cat location is required")

        cat = CatRecord(
            id=uuid.uuid4().hex,
            owner=owner,
            location=location,
            **body.model_dump(exclude={"owner", "location"}),
        )
        return project_cat(await self.cats.create(cat))

    async def update(self, principal: Optional[Principal], cat_id: str, body: CatUpdate,
                     coords: Optional[Coordinate] = None) -> CatOutput:
        """소유자 경로 수정. 소유자가 아니면 AccessDenied."""
        require_principal(principal, Action.UPDATE, resource_ref(ResourceKind.CAT))

        cat = await self.cats.get(cat_id)
        if not cat:
            raise NotFound("Cat not found")
        authorize(Action.UPDATE, principal, resource_ref(ResourceKind.CAT, cat))

        fields = body.model_dump(exclude_unset=True, exclude={"owner"})
        return await self._apply(cat_id, fields, body.location or coords)

    async def update_admin(self, principal: Optional[Principal], cat_id: str, body: CatAdminUpdate,
                           coords: Optional[Coordinate] = None) -> CatOutput:
        """관리자 경로 수정 (소유자 재지정 포함). 역할 확인이 존재 확인보다 먼저입니다."""
        authorize(Action.UPDATE_OWNER, principal, resource_ref(ResourceKind.CAT))

        fields = body.model_dump(exclude_unset=True)
        if fields.get("owner") is None:
            fields.pop("owner", None)
        else:
            await self._require_user(fields["owner"])
        return await self._apply(cat_id, fields, body.location or coords)

    async def _apply(self, cat_id: str, fields: dict, location: Optional[Coordinate]) -> CatOutput:
        fields.pop("location", None)
        if location is not None:
            fields["location"] = location
        cat = await self.cats.update(cat_id, fields)
        if not cat:
            raise NotFound("Cat not found")
        return project_cat(cat)

    async def delete(self, principal: Optional[Principal], cat_id: str) -> CatOutput:
        """
        소유자 경로 삭제.

        소유자 조건이 저장소 조회 조건에 포함되므로 다른 사용자의 고양이는
        존재하지 않는 고양이와 구별되지 않습니다 (NotFound).
        """
        require_principal(principal, Action.DELETE, resource_ref(ResourceKind.CAT))

        cat = await self.cats.delete(cat_id, owner_id=principal.id)
        if not cat:
            raise NotFound("Cat not found")
        return project_cat(cat)

    async def delete_admin(self, principal: Optional[Principal], cat_id: str) -> CatOutput:
        """관리자 경로 삭제. 권한 없음(AccessDenied)과 없음(NotFound)을 구별합니다."""
        authorize(Action.DELETE_ADMIN, principal, resource_ref(ResourceKind.CAT))

        cat = await self.cats.delete(cat_id)
        if not cat:
            raise NotFound("Cat not found")
        log.info(f"관리자 삭제: {cat_id} by {principal.id}")
        return project_cat(cat)
