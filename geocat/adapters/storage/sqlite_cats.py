"""
SQLite-based cat store for GeoCat.

This module implements the cat store port on top of aiosqlite.
Locations are kept as two REAL columns so that area queries can be
prefiltered by the bounding extent inside SQLite.
"""

import aiosqlite
from datetime import date
from typing import Any, Dict, List, Optional
from geocat.core.errors import ValidationError
from geocat.core.models import CatRecord, Coordinate
from geocat.observability.logging_setup import get_logger
from geocat.observability.metrics import store_query_seconds
from .database import connect, init_schema

log = get_logger("geocat.cats")

COLUMNS = "id, owner, name, species, weight, birthdate, filename, lat, lng"
UPDATABLE = ("owner", "name", "species", "weight", "birthdate", "filename", "location")

def _row_to_cat(row) -> CatRecord:
    location = None
    if row["lat"] is not None and row["lng"] is not None:
        location = Coordinate(lat=row["lat"], lng=row["lng"])
    return CatRecord(
        id=row["id"],
        owner=row["owner"],
        name=row["name"],
        species=row["species"],
        weight=row["weight"],
        birthdate=date.fromisoformat(row["birthdate"]) if row["birthdate"] else None,
        filename=row["filename"],
        location=location,
    )

def _to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    """도메인 필드를 테이블 컬럼으로 변환합니다."""
    columns = {}
    for key, value in fields.items():
        if key not in UPDATABLE:
            continue
        if key == "location":
            if isinstance(value, dict):
                value = Coordinate(**value)
            columns["lat"] = value.lat if value else None
            columns["lng"] = value.lng if value else None
        elif key == "birthdate":
            columns["birthdate"] = value.isoformat() if value else None
        else:
            columns[key] = value
    return columns

class SQLiteCatStore:
    """SQLite 기반 고양이 저장소"""

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
        log.info(f"SQLiteCatStore 스키마 초기화 완료: {self.path}")

    async def _select(self, where: str = "", params: tuple = (), suffix: str = "") -> List[CatRecord]:
        async with connect(self.path) as db:
            cursor = await db.execute(f"SELECT {COLUMNS} FROM cats {where} ORDER BY rowid {suffix}", params)
            rows = await cursor.fetchall()
        return [_row_to_cat(r) for r in rows]

    async def create(self, cat: CatRecord) -> CatRecord:
        columns = {"id": cat.id, **_to_columns(cat.model_dump(exclude={"id"}))}
        names = ", ".join(columns)
        marks = ", ".join("?" for _ in columns)

        with store_query_seconds.labels("cat_create").time():
            try:
                async with connect(self.path) as db:
                    await db.execute(f"INSERT INTO cats ({names}) VALUES ({marks})", tuple(columns.values()))
                    await db.commit()
            except aiosqlite.IntegrityError as e:
                raise ValidationError(f"Cat rejected by store: {e}") from e

        log.info(f"고양이 생성: {cat.id} owner={cat.owner}")
        return cat

    async def get(self, cat_id: str) -> Optional[CatRecord]:
        cats = await self._select("WHERE id = ?", (cat_id,))
        return cats[0] if cats else None

    async def list(self, limit: Optional[int] = None, offset: int = 0) -> List[CatRecord]:
        """
        삽입 순서대로 고양이를 조회합니다.

        Args:
            limit: 최대 개수 (None이면 제한 없음)
            offset: 건너뛸 개수
        """
        # SQLite는 OFFSET에 LIMIT이 필요하므로 -1로 무제한 지정
        with store_query_seconds.labels("cat_list").time():
            return await self._select(suffix="LIMIT ? OFFSET ?", params=(
                -1 if limit is None else limit, offset
            ))

    async def list_by_owner(self, owner_id: str) -> List[CatRecord]:
        return await self._select("WHERE owner = ?", (owner_id,))

    async def list_in_extent(self, min_lat: float, max_lat: float,
                             min_lng: float, max_lng: float) -> List[CatRecord]:
        """위치가 경계 범위 안에 있는 고양이를 조회합니다 (경계 포함)."""
        with store_query_seconds.labels("cat_extent").time():
            return await self._select(
                "WHERE lat IS NOT NULL AND lat BETWEEN ? AND ? AND lng BETWEEN ? AND ?",
                (min_lat, max_lat, min_lng, max_lng)
            )

    async def update(self, cat_id: str, fields: Dict[str, Any]) -> Optional[CatRecord]:
        """
        고양이 필드를 갱신합니다. 동시 갱신은 마지막 쓰기가 이깁니다.

        Returns:
            갱신된 레코드 또는 None
        """
        columns = _to_columns(fields)

        with store_query_seconds.labels("cat_update").time():
            try:
                async with connect(self.path) as db:
                    if columns:
                        assignments = ", ".join(f"{k} = ?" for k in columns)
                        await db.execute(
                            f"UPDATE cats SET {assignments} WHERE id = ?",
                            (*columns.values(), cat_id)
                        )
                    cursor = await db.execute(f"SELECT {COLUMNS} FROM cats WHERE id = ?", (cat_id,))
                    row = await cursor.fetchone()
                    await db.commit()
            except aiosqlite.IntegrityError as e:
                raise ValidationError(f"Cat rejected by store: {e}") from e

        if row:
            log.info(f"고양이 갱신: {cat_id} fields={sorted(columns)}")
        return _row_to_cat(row) if row else None

    async def delete(self, cat_id: str, owner_id: Optional[str] = None) -> Optional[CatRecord]:
        """
        고양이를 삭제합니다.

        Args:
            cat_id: 삭제할 고양이 ID
            owner_id: 지정되면 소유자까지 일치해야 삭제

        Returns:
            삭제된 레코드 또는 None
        """
        where, params = "WHERE id = ?", (cat_id,)
        if owner_id is not None:
            where, params = "WHERE id = ? AND owner = ?", (cat_id, owner_id)

        with store_query_seconds.labels("cat_delete").time():
            async with connect(self.path) as db:
                await db.execute("BEGIN IMMEDIATE")
                cursor = await db.execute(f"SELECT {COLUMNS} FROM cats {where}", params)
                row = await cursor.fetchone()
                if row:
                    await db.execute(f"DELETE FROM cats {where}", params)
                await db.commit()

        if row:
            log.info(f"고양이 삭제: {cat_id}")
        return _row_to_cat(row) if row else None
