"""
Resource query engine for GeoCat.

Builds list queries from raw request parameters: pagination is
clamped instead of rejected, and area queries are prefiltered by the
polygon extent in the store before the exact containment test.
"""

from typing import List, Optional, Union
from geocat.core.geo import build_bounding_polygon, parse_coordinate
from geocat.core.errors import GeometryError
from geocat.core.models import CatRecord, Polygon
from geocat.core.query import clamp_page, within_polygon
from geocat.observability.logging_setup import get_logger
from geocat.observability.metrics import geo_queries
from geocat.ports.store import CatStorePort

log = get_logger("geocat.query")

class ResourceQueryEngine:
    """고양이 목록 조회 엔진"""

    def __init__(self, cats: CatStorePort):
        """
        초기화합니다.

        Args:
            cats: 고양이 저장소 포트
        """
        self.cats = cats

    async def list_paged(self, limit: Union[str, int, None] = None,
                         offset: Union[str, int, None] = None) -> List[CatRecord]:
        """
        페이지 단위로 고양이를 조회합니다. 최대 페이지 크기는 강제하지 않습니다.

        Args:
            limit: 최대 개수 (없거나 숫자가 아니면 제한 없음, 음수는 0)
            offset: 건너뛸 개수 (없거나 숫자가 아니면 0, 음수는 0)
        """
        page = clamp_page(limit, offset)
        return await self.cats.list(limit=page.limit, offset=page.offset)

    async def list_within_polygon(self, polygon: Polygon) -> List[CatRecord]:
        """폴리곤 내부 또는 경계 위에 있는 고양이를 조회합니다."""
        min_lat, max_lat, min_lng, max_lng = polygon.extent()
        candidates = await self.cats.list_in_extent(min_lat, max_lat, min_lng, max_lng)
        return within_polygon(candidates, polygon)

    async def list_in_bounding_box(self, top_right: Optional[str],
                                   bottom_left: Optional[str]) -> List[CatRecord]:
        """
        두 대각 꼭짓점 문자열로 영역 조회를 수행합니다.

        Args:
            top_right: "lat,lng" 우상단
            bottom_left: "lat,lng" 좌하단

        Raises:
            MalformedCoordinate, InvalidBounds, UnsupportedRegion
        """
        try:
            polygon = build_bounding_polygon(parse_coordinate(top_right), parse_coordinate(bottom_left))
        except GeometryError as e:
            geo_queries.labels(type(e).__name__).inc()
            raise

        cats = await self.list_within_polygon(polygon)
        geo_queries.labels("ok").inc()
        log.debug("영역 조회 완료", polygon=polygon.to_geojson(), count=len(cats))
        return cats
