"""
Security port interfaces.

This module defines the protocols for password hashing and
token issuance/verification.
"""

from typing import Optional, Protocol

class PasswordHasherPort(Protocol):
    """비밀번호 해시 포트 인터페이스"""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, hashed: str) -> bool:
        ...

class TokenCodecPort(Protocol):
    """토큰 발급/검증 포트 인터페이스"""

    def issue(self, user_id: str) -> str:
        ...

    def verify(self, token: str) -> Optional[str]:
        """
        토큰을 검증합니다.

        Returns:
            토큰에 담긴 사용자 ID 또는 None (위조/만료)
        """
        ...
