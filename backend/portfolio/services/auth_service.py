from __future__ import annotations

import hashlib
import hmac
import logging
import os
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..config import settings


logger = logging.getLogger(__name__)

TOKEN_SALT = "admin-token"
ITERATIONS = 390000


def hash_password(password: str, salt: bytes | None = None, iterations: int = ITERATIONS) -> str:
    if salt is None:
        salt = os.urandom(16)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"pbkdf2_sha256${iterations}${salt.hex()}${derived.hex()}"


def verify_password(stored: str | None, password: str) -> bool:
    if not stored:
        return False
    try:
        algo, iter_str, salt_hex, _ = stored.split("$", 3)
        iterations = int(iter_str)
        if iterations <= 0:
            raise ValueError("iteration count must be positive")
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    if algo != "pbkdf2_sha256":
        return False
    candidate = hash_password(password, salt=salt, iterations=iterations)
    return hmac.compare_digest(candidate, stored)


class AuthService:
    """Single-admin authentication: password check plus signed expiring tokens."""

    def __init__(
        self,
        password_hash: Optional[str] = None,
        secret: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self.password_hash = password_hash if password_hash is not None else settings.ADMIN_PASSWORD_HASH
        self.ttl_seconds = ttl_seconds or settings.ADMIN_TOKEN_TTL_SECONDS
        self._serializer = URLSafeTimedSerializer(secret or settings.APP_SECRET, salt=TOKEN_SALT)

    @property
    def configured(self) -> bool:
        return bool(self.password_hash)

    def authenticate(self, password: str) -> bool:
        if not self.configured:
            logger.warning("admin login attempted but ADMIN_PASSWORD_HASH is not set")
            return False
        ok = verify_password(self.password_hash, password or "")
        if not ok:
            logger.warning("admin login failed")
        return ok

    def issue_token(self) -> str:
        return self._serializer.dumps({"role": "admin"})

    def verify_token(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            data = self._serializer.loads(token, max_age=self.ttl_seconds)
        except SignatureExpired:
            logger.info("admin token expired")
            return False
        except BadSignature:
            logger.warning("admin token rejected")
            return False
        return isinstance(data, dict) and data.get("role") == "admin"

    def login(self, password: str) -> Optional[str]:
        """Return a fresh token when ``password`` matches, else None."""
        if not self.authenticate(password):
            return None
        return self.issue_token()
