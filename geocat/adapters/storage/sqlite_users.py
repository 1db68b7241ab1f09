"""
SQLite-based user store for GeoCat.

This module implements the user store port on top of aiosqlite.
"""

import aiosqlite
from typing import Any, Dict, List, Optional
from geocat.core.errors import Conflict
from geocat.core.models import Role, UserRecord
from geocat.observability.logging_setup import get_logger
from geocat.observability.metrics import store_query_seconds
from .database import connect, init_schema

log = get_logger("geocat.users")

COLUMNS = "id, user_name, email, password, role"
UPDATABLE = ("user_name", "email", "password", "role")

def _row_to_user(row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        user_name=row["user_name"],
        email=row["email"],
        password=row["password"],
        role=Role(row["role"]),
    )

def _conflict(e: aiosqlite.IntegrityError) -> Exception:
    if "users.email" in str(e):
        return Conflict("Email already registered")
    return e

class SQLiteUserStore:
    """SQLite 기반 사용자 저장소"""

    def __init__(self, path: str):
        """
        초기화합니다.

        Args:
            path: SQLite 데이터베이스 파일 경로
        """
        self.path = path

    async def init(self) -> None:
        """데이터베이스를 초기화합니다."""
        await init_schema(self.path)
        log.info(f"SQLiteUserStore 스키마 초기화 완료: {self.path}")

    async def create(self, user: UserRecord) -> UserRecord:
        with store_query_seconds.labels("user_create").time():
            try:
                async with connect(self.path) as db:
                    await db.execute(
                        f"INSERT INTO users ({COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                        (user.id, user.user_name, user.email, user.password, user.role.value)
                    )
                    await db.commit()
            except aiosqlite.IntegrityError as e:
                raise _conflict(e) from e
        log.info(f"사용자 생성: {user.id}")
        return user

    async def get(self, user_id: str) -> Optional[UserRecord]:
        async with connect(self.path) as db:
            cursor = await db.execute(f"SELECT {COLUMNS} FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
        return _row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        async with connect(self.path) as db:
            cursor = await db.execute(f"SELECT {COLUMNS} FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
        return _row_to_user(row) if row else None

    async def list(self) -> List[UserRecord]:
        with store_query_seconds.labels("user_list").time():
            async with connect(self.path) as db:
                cursor = await db.execute(f"SELECT {COLUMNS} FROM users ORDER BY rowid")
                rows = await cursor.fetchall()
        return [_row_to_user(r) for r in rows]

    async def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[UserRecord]:
        """
        사용자 필드를 갱신합니다.

        Args:
            user_id: 대상 사용자 ID
            fields: 갱신할 필드 (허용되지 않은 키는 무시)

        Returns:
            갱신된 레코드 또는 None

        Raises:
            Conflict: 이메일이 다른 사용자와 중복되는 경우
        """
        values = {k: (v.value if isinstance(v, Role) else v) for k, v in fields.items() if k in UPDATABLE}

        with store_query_seconds.labels("user_update").time():
            try:
                async with connect(self.path) as db:
                    if values:
                        assignments = ", ".join(f"{k} = ?" for k in values)
                        await db.execute(
                            f"UPDATE users SET {assignments} WHERE id = ?",
                            (*values.values(), user_id)
                        )
                    cursor = await db.execute(f"SELECT {COLUMNS} FROM users WHERE id = ?", (user_id,))
                    row = await cursor.fetchone()
                    await db.commit()
            except aiosqlite.IntegrityError as e:
                raise _conflict(e) from e

        if row:
            log.info(f"사용자 갱신: {user_id} fields={sorted(values)}")
        return _row_to_user(row) if row else None

    async def delete(self, user_id: str) -> Optional[UserRecord]:
        """사용자를 삭제합니다. 소유한 고양이도 함께 삭제됩니다."""
        with store_query_seconds.labels("user_delete").time():
            async with connect(self.path) as db:
                await db.execute("BEGIN IMMEDIATE")
                cursor = await db.execute(f"SELECT {COLUMNS} FROM users WHERE id = ?", (user_id,))
                row = await cursor.fetchone()
                if row:
                    await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
                await db.commit()

        if row:
            log.info(f"사용자 삭제: {user_id}")
        return _row_to_user(row) if row else None
