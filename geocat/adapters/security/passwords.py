"""
bcrypt password hasher for GeoCat.
"""

import bcrypt

class BcryptPasswordHasher:
    """bcrypt 비밀번호 해시 (해시마다 새 salt 생성)"""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # 손상된 해시
            return False
