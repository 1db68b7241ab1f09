"""
Error taxonomy for GeoCat.

Every failure raised by the core and the orchestrators carries a
human readable message and the status it maps to at the HTTP boundary.
"""

from .models import Denial

class GeoCatError(Exception):
    """GeoCat 기본 예외"""
    status = 500

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status}

class ValidationError(GeoCatError):
    status = 400

class GeometryError(ValidationError):
    """지오메트리 모듈 오류 공통 기반"""

class MalformedCoordinate(GeometryError):
    pass

class InvalidBounds(GeometryError):
    pass

class UnsupportedRegion(GeometryError):
    pass

class NotAuthenticated(GeoCatError):
    status = 401

class AccessDenied(GeoCatError):
    status = 403

class NotFound(GeoCatError):
    status = 404

class Conflict(GeoCatError):
    status = 409

def from_denial(denial: Denial, message: str = None) -> GeoCatError:
    """정책 거부 사유를 예외로 변환합니다."""
    if denial is Denial.NOT_AUTHENTICATED:
        return NotAuthenticated(message or "Not authenticated")
    return AccessDenied(message or "Access restricted")
