# geocat/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class Storage(BaseModel):
    db_path: str = "/data/geocat.db"

class Auth(BaseModel):
    secret_key: str | None = None             # 없으면 기동 시 임시 키 생성
    token_max_age_sec: int = 60 * 60 * 24 * 7  # 7일
    bcrypt_rounds: int = 10
    allow_role_on_register: bool = False
    bootstrap_admin_email: str | None = None
    bootstrap_admin_password: str | None = None
    bootstrap_admin_name: str = "admin"

class Api(BaseModel):
    prefix: str = "/api/v1"

class Observability(BaseModel):
    host: str = "0.0.0.0"
    http_port: int = 8000
    metrics_enabled: bool = True
    service_name: str = "GeoCat"
    build_version: str = "0.1.0"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    storage: Storage = Field(default_factory=Storage)
    auth: Auth = Field(default_factory=Auth)
    api: Api = Field(default_factory=Api)
    observability: Observability = Field(default_factory=Observability)
