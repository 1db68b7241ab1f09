"""
Resource store port interfaces.

This module defines the protocols the orchestrators use to persist
users and cats. Every single-record mutation is atomic.
"""

from typing import Any, Dict, List, Optional, Protocol
from geocat.core.models import CatRecord, UserRecord

class UserStorePort(Protocol):
    """사용자 저장소 포트 인터페이스"""

    async def create(self, user: UserRecord) -> UserRecord:
        """
        사용자를 저장합니다.

        Raises:
            Conflict: 이메일이 이미 등록된 경우
        """
        ...

    async def get(self, user_id: str) -> Optional[UserRecord]:
        ...

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    async def list(self) -> List[UserRecord]:
        ...

    async def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[UserRecord]:
        """
        사용자 필드를 갱신하고 갱신된 레코드를 반환합니다.

        Returns:
            갱신된 레코드 또는 None (없는 경우)
        """
        ...

    async def delete(self, user_id: str) -> Optional[UserRecord]:
        ...

class CatStorePort(Protocol):
    """고양이 저장소 포트 인터페이스"""

    async def create(self, cat: CatRecord) -> CatRecord:
        ...

    async def get(self, cat_id: str) -> Optional[CatRecord]:
        ...

    async def list(self, limit: Optional[int] = None, offset: int = 0) -> List[CatRecord]:
        """
        삽입 순서대로 고양이를 조회합니다.

        Args:
            limit: 최대 개수 (None이면 제한 없음)
            offset: 건너뛸 개수
        """
        ...

    async def list_by_owner(self, owner_id: str) -> List[CatRecord]:
        ...

    async def list_in_extent(self, min_lat: float, max_lat: float,
                             min_lng: float, max_lng: float) -> List[CatRecord]:
        """위치가 주어진 경계 범위 안에 있는 고양이를 조회합니다 (경계 포함)."""
        ...

    async def update(self, cat_id: str, fields: Dict[str, Any]) -> Optional[CatRecord]:
        ...

    async def delete(self, cat_id: str, owner_id: Optional[str] = None) -> Optional[CatRecord]:
        """
        고양이를 삭제합니다.

        Args:
            cat_id: 삭제할 고양이 ID
            owner_id: 지정되면 소유자까지 일치해야 삭제

        Returns:
            삭제된 레코드 또는 None (조건에 맞는 레코드가 없는 경우)
        """
        ...
