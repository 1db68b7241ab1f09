"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import os
import tempfile
import pytest
from geocat.adapters.security import BcryptPasswordHasher, SignedTokenCodec
from geocat.adapters.storage import SQLiteCatStore, SQLiteUserStore
from geocat.core.models import Coordinate, Principal, Role, UserCreate
from geocat.orchestrators import CatOrchestrator, UserOrchestrator
from geocat.settings import Settings


@pytest.fixture
def temp_db_path():
    """임시 데이터베이스 파일 경로"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    # 테스트 후 파일 정리
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sample_settings(temp_db_path):
    """테스트용 설정"""
    settings = Settings()
    settings.storage.db_path = temp_db_path
    settings.auth.secret_key = "test-secret"
    settings.auth.bcrypt_rounds = 4
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    return settings


@pytest.fixture
def hasher():
    """테스트용 비밀번호 해시 (최소 비용)"""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    """테스트용 토큰 코덱"""
    return SignedTokenCodec("test-secret", max_age_sec=3600)


@pytest.fixture
async def user_store(temp_db_path):
    store = SQLiteUserStore(temp_db_path)
    await store.init()
    return store


@pytest.fixture
async def cat_store(temp_db_path):
    store = SQLiteCatStore(temp_db_path)
    await store.init()
    return store


@pytest.fixture
def users(user_store, hasher, tokens):
    """사용자 오케스트레이터"""
    return UserOrchestrator(user_store, hasher, tokens)


@pytest.fixture
def cats(cat_store, user_store):
    """고양이 오케스트레이터"""
    return CatOrchestrator(cat_store, user_store)


@pytest.fixture
async def alice(users):
    """일반 사용자 alice"""
    out = await users.create(UserCreate(user_name="alice", email="alice@example.com", password="secret1"))
    return Principal(id=out.id, role=Role.USER)


@pytest.fixture
async def bob(users):
    """일반 사용자 bob"""
    out = await users.create(UserCreate(user_name="bob", email="bob@example.com", password="secret2"))
    return Principal(id=out.id, role=Role.USER)


@pytest.fixture
async def admin(users):
    """관리자"""
    out = await users.bootstrap_admin("admin@example.com", "adminpw", "root")
    return Principal(id=out.id, role=Role.ADMIN)


@pytest.fixture
def tampere():
    """테스트용 좌표"""
    return Coordinate(lat=61.5, lng=23.7)


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )
