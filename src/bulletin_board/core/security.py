"""Password hashing and access token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from bulletin_board.core.settings import settings


def hash_password(password: str) -> str:
    """Return an Argon2id hash string for the given password."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password_hash: str, password: str) -> bool:
    """Return True if `password` matches the stored Argon2id hash."""
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token for the given user id."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str | None:
    """Return the subject of a valid token, or None when it cannot be trusted."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
