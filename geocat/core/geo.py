"""
Geographic utilities for GeoCat.

This module parses and validates coordinates, builds the bounding
polygon used for area queries and provides the point-in-polygon
containment test applied to stored locations.
"""

import math
import re
from typing import List, Optional, Tuple
from .errors import InvalidBounds, MalformedCoordinate, UnsupportedRegion
from .models import Coordinate, Polygon

# 지수 표기, nan, inf 는 허용하지 않음
_DECIMAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

# 경계선 판정 허용 오차 (도 단위)
EDGE_EPSILON = 1e-12

def validate_coordinates(lat: float, lng: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        lat: 위도
        lng: 경도

    Returns:
        좌표가 유효하면 True
    """
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180

def parse_coordinate(raw: Optional[str]) -> Coordinate:
    """
    "lat,lng" 문자열을 좌표로 변환합니다.

    Args:
        raw: 쉼표로 구분된 위도, 경도 문자열

    Returns:
        검증된 좌표

    Raises:
        MalformedCoordinate: 형식이 틀렸거나 범위를 벗어난 경우
    """
    if raw is None:
        raise MalformedCoordinate("Coordinate is missing")

    tokens = [t.strip() for t in raw.split(",")]
    if len(tokens) != 2:
        raise MalformedCoordinate(f"Expected 'lat,lng', got {raw!r}")

    for token in tokens:
        if not _DECIMAL.match(token):
            raise MalformedCoordinate(f"Not a decimal number: {token!r}")

    lat, lng = float(tokens[0]), float(tokens[1])
    if not validate_coordinates(lat, lng):
        raise MalformedCoordinate(f"Coordinate out of range: {raw!r}")

    return Coordinate(lat=lat, lng=lng)

def build_bounding_polygon(top_right: Coordinate, bottom_left: Coordinate) -> Polygon:
    """
    두 대각 꼭짓점으로 닫힌 사각형 폴리곤을 만듭니다.

    링은 bottomLeft에서 시작해 반시계 방향으로 진행하며
    마지막 점은 첫 점과 같습니다.

    Args:
        top_right: 우상단 꼭짓점
        bottom_left: 좌하단 꼭짓점

    Returns:
        5개의 점으로 이루어진 폴리곤

    Raises:
        InvalidBounds: 위도가 뒤집혔거나 면적이 0인 경우
        UnsupportedRegion: 날짜변경선을 가로지르는 경우
    """
    if top_right.lat < bottom_left.lat:
        raise InvalidBounds("topRight latitude is below bottomLeft latitude")
    if top_right.lng < bottom_left.lng:
        raise UnsupportedRegion("Bounding boxes crossing the antimeridian are not supported")
    if top_right.lat == bottom_left.lat and top_right.lng == bottom_left.lng:
        raise InvalidBounds("Bounding box has zero area")

    ring = [
        bottom_left,
        Coordinate(lat=bottom_left.lat, lng=top_right.lng),
        top_right,
        Coordinate(lat=top_right.lat, lng=bottom_left.lng),
        bottom_left,
    ]
    return Polygon(ring=ring)

def _on_segment(x: float, y: float, x1: float, y1: float, x2: float, y2: float) -> bool:
    """점이 선분 위에 있는지 확인합니다."""
    if x < min(x1, x2) - EDGE_EPSILON or x > max(x1, x2) + EDGE_EPSILON:
        return False
    if y < min(y1, y2) - EDGE_EPSILON or y > max(y1, y2) + EDGE_EPSILON:
        return False
    cross = (x2 - x1) * (y - y1) - (y2 - y1) * (x - x1)
    return abs(cross) <= EDGE_EPSILON

def point_in_polygon(point: Tuple[float, float], polygon: List[Tuple[float, float]]) -> bool:
    """
    점이 폴리곤 내부 또는 경계에 있는지 Ray casting 알고리즘으로 확인합니다.

    Args:
        point: 확인할 점 (경도, 위도)
        polygon: 폴리곤의 꼭짓점들 [(경도, 위도), ...]

    Returns:
        점이 폴리곤 내부나 경계 위에 있으면 True
    """
    if len(polygon) < 3:
        return False

    x, y = point
    n = len(polygon)

    # 경계 포함
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        if _on_segment(x, y, x1, y1, x2, y2):
            return True

    inside = False
    p1x, p1y = polygon[0]
    for i in range(1, n + 1):
        p2x, p2y = polygon[i % n]
        if (p1y > y) != (p2y > y):
            xinters = (y - p1y) * (p2x - p1x) / (p2y - p1y) + p1x
            if x < xinters:
                inside = not inside
        p1x, p1y = p2x, p2y

    return inside

def contains(polygon: Polygon, location: Optional[Coordinate]) -> bool:
    """폴리곤이 좌표를 포함하는지 확인합니다 (위치 없음은 False)."""
    if location is None:
        return False
    ring = [(c.lng, c.lat) for c in polygon.ring]
    return point_in_polygon((location.lng, location.lat), ring)
