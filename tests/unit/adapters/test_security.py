"""
Security Adapter 모듈 단위 테스트

bcrypt 해시와 서명 토큰을 테스트합니다.
"""

from unittest.mock import patch
from itsdangerous import SignatureExpired
from geocat.adapters.security import BcryptPasswordHasher, SignedTokenCodec


class TestBcryptPasswordHasher:
    """비밀번호 해시 테스트"""

    def test_hash_and_verify(self, hasher):
        hashed = hasher.hash("secret1")
        assert hashed != "secret1"
        assert hasher.verify("secret1", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_fresh_salt_per_hash(self, hasher):
        assert hasher.hash("same") != hasher.hash("same")

    def test_corrupt_hash(self, hasher):
        assert not hasher.verify("secret1", "not-a-bcrypt-hash")

    def test_rounds(self):
        hashed = BcryptPasswordHasher(rounds=5).hash("pw")
        assert hashed.startswith("$2b$05$")


class TestSignedTokenCodec:
    """토큰 코덱 테스트"""

    def test_issue_and_verify(self, tokens):
        token = tokens.issue("u1")
        assert tokens.verify(token) == "u1"

    def test_tampered_token(self, tokens):
        token = tokens.issue("u1")
        assert tokens.verify("x" + token) is None

    def test_other_secret(self, tokens):
        other = SignedTokenCodec("different", max_age_sec=3600)
        assert other.verify(tokens.issue("u1")) is None

    def test_expired(self, tokens):
        token = tokens.issue("u1")
        with patch.object(tokens.serializer, "loads", side_effect=SignatureExpired("expired")):
            assert tokens.verify(token) is None

    def test_garbage(self, tokens):
        assert tokens.verify("garbage") is None
