"""
SQLite connection helper for GeoCat storage adapters.

Both stores share one database file; foreign keys are enabled on
every connection so that cat ownership stays referentially intact.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import aiosqlite
from geocat.observability.logging_setup import get_logger

log = get_logger("geocat.storage")

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    user_name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('user', 'admin'))
);
CREATE TABLE IF NOT EXISTS cats (
    id TEXT PRIMARY KEY,
    owner TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    species TEXT NOT NULL,
    weight REAL,
    birthdate TEXT,
    filename TEXT,
    lat REAL,
    lng REAL,
    CHECK ((lat IS NULL) = (lng IS NULL))
);
CREATE INDEX IF NOT EXISTS idx_cats_owner ON cats(owner);
CREATE INDEX IF NOT EXISTS idx_cats_location ON cats(lat, lng);
"""

@asynccontextmanager
async def connect(path: str) -> AsyncIterator[aiosqlite.Connection]:
    """외래 키가 활성화된 연결을 엽니다."""
    async with aiosqlite.connect(path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db

async def init_schema(path: str) -> None:
    """데이터베이스 스키마를 초기화합니다."""
    async with connect(path) as db:
        await db.executescript(SCHEMA)
        await db.commit()

async def ping(path: str) -> bool:
    """데이터베이스 접근 가능 여부를 확인합니다."""
    try:
        async with connect(path) as db:
            cursor = await db.execute("SELECT 1")
            return (await cursor.fetchone()) is not None
    except Exception as e:
        log.error(f"데이터베이스 ping 실패: {e}")
        return False
