"""
Session token codec and password hashing.

Session tokens are HS256-signed JWTs carrying the session claims; nothing in
them is trusted unless the signature verifies against SECRET_KEY. Passwords
are stored as salted PBKDF2 hashes.
"""

import logging
import math
import time
from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from passlib.context import CryptContext

from society.config import settings
from society.models.role import Role

if TYPE_CHECKING:
    from society.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def current_time_ms() -> int:
    """Current time as epoch milliseconds"""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SessionClaims:
    """
    Payload embedded in a session token.

    Attributes:
        subject_id: User primary key, as a string (JWT 'sub')
        email: User email at login time
        role: User role at login time
        name: Display name at login time
        expires_at: Expiry as epoch milliseconds
    """

    subject_id: str
    email: str
    role: Role
    name: str
    expires_at: int

    def is_expired(self, now_ms: int | None = None) -> bool:
        return self.expires_at <= (current_time_ms() if now_ms is None else now_ms)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data


def issue_session_claims(user: "User", now_ms: int | None = None) -> SessionClaims:
    """
    Build claims for a freshly authenticated user.

    Args:
        user: Authenticated user
        now_ms: Issue time (defaults to now)

    Returns:
        Claims expiring SESSION_TTL_DAYS after issue
    """
    issued = current_time_ms() if now_ms is None else now_ms
    return SessionClaims(
        subject_id=str(user.id),
        email=user.email,
        role=Role(user.role),
        name=user.name,
        expires_at=issued + settings.session_max_age * 1000,
    )


def encode_session_token(claims: SessionClaims) -> str:
    """
    Sign session claims into a token.

    'exp' (seconds, rounded up) lets any JWT library reject stale tokens;
    'exp_ms' keeps the exact expiry so decoding reproduces the claims.
    """
    payload = {
        "sub": claims.subject_id,
        "email": claims.email,
        "role": claims.role.value,
        "name": claims.name,
        "exp": math.ceil(claims.expires_at / 1000),
        "exp_ms": claims.expires_at,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.TOKEN_ALGORITHM)


def decode_session_token(token: str, now_ms: int | None = None) -> SessionClaims | None:
    """
    Verify and decode a session token.

    Never raises: a bad signature, malformed payload, unknown role, or an
    expiry at or before ``now_ms`` all yield None ("no session").

    Args:
        token: Encoded token from the session cookie
        now_ms: Reference time in epoch milliseconds (defaults to now)

    Returns:
        SessionClaims or None
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.TOKEN_ALGORITHM]
        )
        claims = SessionClaims(
            subject_id=str(payload["sub"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
            name=str(payload["name"]),
            expires_at=int(payload["exp_ms"]),
        )
    except (JWTError, KeyError, ValueError, TypeError) as e:
        logger.debug("Rejected session token: %s", e)
        return None

    if claims.is_expired(now_ms):
        logger.debug("Session token for %s expired", claims.email)
        return None
    return claims


def hash_password(plain: str) -> str:
    """Hash a plaintext password for storage"""
    return pwd_context.hash(plain)


def verify_password(plain: str, stored: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Stored values that are not recognised hashes never match.
    """
    try:
        return pwd_context.verify(plain, stored)
    except (ValueError, TypeError):
        return False
