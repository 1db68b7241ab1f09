"""
Signed bearer tokens for GeoCat.

Tokens are itsdangerous timed signatures over the user id; nothing
is kept server side.
"""

from typing import Optional
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from geocat.observability.logging_setup import get_logger

log = get_logger("geocat.tokens")

TOKEN_SALT = "geocat.auth"

class SignedTokenCodec:
    """서명된 시간 제한 토큰 발급/검증"""

    def __init__(self, secret_key: str, max_age_sec: int):
        """
        초기화합니다.

        Args:
            secret_key: 서명 키
            max_age_sec: 토큰 유효 기간 (초)
        """
        self.serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self.max_age = max_age_sec

    def issue(self, user_id: str) -> str:
        return self.serializer.dumps({"id": user_id})

    def verify(self, token: str) -> Optional[str]:
        """
        토큰을 검증합니다.

        Returns:
            사용자 ID 또는 None (위조/만료/형식 오류)
        """
        try:
            data = self.serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            log.debug("만료된 토큰")
            return None
        except BadSignature:
            log.debug("서명이 올바르지 않은 토큰")
            return None

        if not isinstance(data, dict) or not isinstance(data.get("id"), str):
            return None
        return data["id"]
