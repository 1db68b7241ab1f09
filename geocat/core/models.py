"""
Core domain models for GeoCat.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from datetime import date
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

class Role(str, Enum):
    """주체 역할 (닫힌 열거형)"""
    USER = "user"
    ADMIN = "admin"

class Action(str, Enum):
    """정책 평가 대상 동작"""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    UPDATE_OWNER = "update_owner"
    DELETE = "delete"
    DELETE_ADMIN = "delete_admin"

class ResourceKind(str, Enum):
    """리소스 종류"""
    CAT = "cat"
    USER = "user"

class Denial(str, Enum):
    """거부 사유"""
    NOT_AUTHENTICATED = "not_authenticated"
    ACCESS_DENIED = "access_denied"

class Principal(BaseModel):
    """인증된 주체"""
    model_config = ConfigDict(frozen=True)

    id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

class Coordinate(BaseModel):
    """위도/경도 좌표"""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)

class Polygon(BaseModel):
    """
    닫힌 폴리곤 링 (반시계 방향)

    납작한 상자(두 꼭짓점의 위도가 같은 경우)의 링은 꼭짓점이 겹치므로
    서로 다른 꼭짓점이 2개 이상이면 허용합니다.
    """
    model_config = ConfigDict(frozen=True)

    ring: List[Coordinate]

    @field_validator("ring")
    @classmethod
    def _closed(cls, ring: List[Coordinate]) -> List[Coordinate]:
        if len(ring) < 4:
            raise ValueError("polygon ring needs at least 4 points")
        if ring[0] != ring[-1]:
            raise ValueError("polygon ring must be closed")
        if len(set(ring)) < 2:
            raise ValueError("polygon ring needs at least 2 distinct points")
        return ring

    def extent(self) -> tuple:
        """(min_lat, max_lat, min_lng, max_lng) 경계 범위"""
        lats = [c.lat for c in self.ring]
        lngs = [c.lng for c in self.ring]
        return (min(lats), max(lats), min(lngs), max(lngs))

    def to_geojson(self) -> dict:
        """GeoJSON Polygon 표현 ([lng, lat] 순서)"""
        return {
            "type": "Polygon",
            "coordinates": [[[c.lng, c.lat] for c in self.ring]],
        }

class ResourceRef(BaseModel):
    """정책 평가에 필요한 리소스 소유 정보"""
    kind: ResourceKind
    owner_id: Optional[str] = None

class Decision(BaseModel):
    """정책 평가 결과 모델"""
    allow: bool
    reason: str
    denial: Optional[Denial] = None

# ---- User ----

# bcrypt 는 72 바이트까지만 해시함
PASSWORD_MAX_BYTES = 72

def _password_fits(password: Optional[str]) -> Optional[str]:
    if password is not None and len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password

class UserRecord(BaseModel):
    """저장소에 보관되는 사용자 (비밀 필드 포함)"""
    id: str
    user_name: str
    email: str
    password: str
    role: Role = Role.USER

class UserOutput(BaseModel):
    """외부에 노출되는 사용자 투영"""
    id: str
    user_name: str
    email: str

class UserCreate(BaseModel):
    user_name: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=5)
    role: Role = Role.USER

    _password = field_validator("password")(_password_fits)

class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_name: Optional[str] = Field(default=None, min_length=3)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=5)

    _password = field_validator("password")(_password_fits)

class LoginRequest(BaseModel):
    username: str
    password: str

# ---- Cat ----

class CatRecord(BaseModel):
    """저장소에 보관되는 고양이"""
    id: str
    owner: str
    name: str
    species: str
    weight: Optional[float] = None
    birthdate: Optional[date] = None
    filename: Optional[str] = None
    location: Optional[Coordinate] = None

class CatOutput(BaseModel):
    """소유자가 확장되었을 수 있는 고양이 응답"""
    id: str
    owner: Union[UserOutput, str]
    name: str
    species: str
    weight: Optional[float] = None
    birthdate: Optional[date] = None
    filename: Optional[str] = None
    location: Optional[Coordinate] = None

class CatCreate(BaseModel):
    name: str = Field(min_length=1)
    species: str = Field(min_length=1)
    weight: Optional[float] = Field(default=None, gt=0)
    birthdate: Optional[date] = None
    filename: Optional[str] = None
    location: Optional[Coordinate] = None
    owner: Optional[str] = None

class CatUpdate(BaseModel):
    """소유자 경로 수정 본문 (owner 필드 없음)"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, min_length=1)
    species: Optional[str] = Field(default=None, min_length=1)
    weight: Optional[float] = Field(default=None, gt=0)
    birthdate: Optional[date] = None
    filename: Optional[str] = None
    location: Optional[Coordinate] = None

class CatAdminUpdate(CatUpdate):
    """관리자 경로 수정 본문 (소유자 재지정 허용)"""
    owner: Optional[str] = None
