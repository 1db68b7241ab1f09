"""
Query construction helpers for GeoCat.

Pure functions used by the resource query engine: pagination
parameter clamping, spatial containment filtering and the field
projection applied to every user that leaves the service.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union
from .geo import contains
from .models import CatOutput, CatRecord, Polygon, UserOutput, UserRecord

@dataclass(frozen=True)
class Page:
    """정규화된 페이지 파라미터 (limit None = 제한 없음)"""
    limit: Optional[int] = None
    offset: int = 0

# SQLite INTEGER 최대값
SQLITE_MAX_INT = 2 ** 63 - 1

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")

def _to_int(raw: Union[str, int, None]) -> Optional[int]:
    """선행 정수 부분만 읽습니다 ("1.5" -> 1, "10abc" -> 10, "abc" -> None)."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    if not m:
        return None
    sign, digits = m.groups()
    digits = digits.lstrip("0") or "0"
    # 긴 숫자열은 int() 자릿수 제한 전에 범위 초과로 처리
    value = int(digits) if len(digits) <= 20 else SQLITE_MAX_INT + 1
    return -value if sign == "-" else value

def clamp_page(limit: Union[str, int, None] = None, offset: Union[str, int, None] = None) -> Page:
    """
    limit/offset 원시값을 정규화합니다. 오류를 발생시키지 않습니다.

    Args:
        limit: 최대 개수 (없거나 숫자가 아니거나 SQLite 범위를 넘으면 제한 없음)
        offset: 건너뛸 개수 (없거나 숫자가 아니면 0, SQLite 범위를 넘으면 최대값)

    Returns:
        정규화된 Page
    """
    lim = _to_int(limit)
    off = _to_int(offset)

    if lim is not None:
        # 0 이하와 범위 초과는 제한 없음으로 취급
        if lim <= 0 or lim > SQLITE_MAX_INT:
            lim = None

    return Page(limit=lim, offset=min(max(off or 0, 0), SQLITE_MAX_INT))

def within_polygon(cats: Iterable[CatRecord], polygon: Polygon) -> List[CatRecord]:
    """폴리곤 내부 또는 경계 위에 위치한 고양이만 남깁니다."""
    return [cat for cat in cats if cat.location is not None and contains(polygon, cat.location)]

def project_user(user: UserRecord) -> UserOutput:
    """비밀 필드(password, role)를 제거한 사용자 투영"""
    return UserOutput(id=user.id, user_name=user.user_name, email=user.email)

def project_cat(cat: CatRecord, owner: Optional[UserRecord] = None) -> CatOutput:
    """
    고양이 응답을 만듭니다.

    Args:
        cat: 고양이 레코드
        owner: 확장할 소유자 (None이면 소유자 id 유지)
    """
    data = cat.model_dump(exclude={"owner"})
    return CatOutput(owner=project_user(owner) if owner else cat.owner, **data)
