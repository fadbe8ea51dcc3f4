# app/core/security.py
import re
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import Settings
from app.core.errors import UnauthorizedError, ValidationError
from app.database import utcnow

PASSWORD_ROUNDS = 12
# bcrypt only reads the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72
CODE_ROUNDS = 10

TokenType = Literal["access", "refresh"]


# ----- Passwords & one-time codes -----


def validate_password_strength(password: str) -> None:
    """
    Minimum policy: 8+ characters, at least one letter and one digit.
    At most 72 bytes once UTF-8 encoded.

    Raises:
        ValidationError(400)
    """
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise ValidationError("Password must contain at least one letter and one number")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=PASSWORD_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False


def generate_verification_code() -> str:
    """Random 6-digit numeric code."""
    return f"{secrets.randbelow(1_000_000):06d}"


def hash_code(code: str) -> str:
    return bcrypt.hashpw(code.encode(), bcrypt.gensalt(rounds=CODE_ROUNDS)).decode()


def verify_code(code: str, code_hash: str) -> bool:
    return verify_password(code, code_hash)


# ----- JWT -----


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


def _encode(
    settings: Settings,
    claims: dict[str, Any],
    token_type: TokenType,
    expires_at: datetime,
) -> str:
    secret = settings.JWT_ACCESS_SECRET if token_type == "access" else settings.JWT_REFRESH_SECRET
    payload = {
        **claims,
        "type": token_type,
        # jti keeps two tokens minted in the same second distinct
        "jti": uuid.uuid4().hex,
        "iat": int(utcnow().timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALG)


def create_token_pair(
    settings: Settings,
    user_id: uuid.UUID,
    email: str,
    role_id: uuid.UUID,
) -> TokenPair:
    """
    Mint an access token (short-lived) and a refresh token (long-lived),
    each signed with its own secret.
    """
    now = utcnow()
    access_exp = now + timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)
    refresh_exp = now + timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)
    claims = {"sub": str(user_id), "email": email, "role_id": str(role_id)}

    return TokenPair(
        access_token=_encode(settings, claims, "access", access_exp),
        refresh_token=_encode(settings, claims, "refresh", refresh_exp),
        access_expires_at=access_exp,
        refresh_expires_at=refresh_exp,
    )


def decode_token(settings: Settings, token: str, token_type: TokenType) -> dict[str, Any]:
    """
    Decode and verify a JWT.

    Verification:
      - signature (secret depends on token_type)
      - expiration time (exp)
      - `type` claim matches token_type

    Raises:
        UnauthorizedError(401): if token is invalid/expired.
    """
    secret = settings.JWT_ACCESS_SECRET if token_type == "access" else settings.JWT_REFRESH_SECRET
    label = "Access" if token_type == "access" else "Refresh"
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALG])
    except ExpiredSignatureError:
        raise UnauthorizedError(f"{label} token has expired")
    except JWTError:
        raise UnauthorizedError(f"Invalid {label.lower()} token")

    if payload.get("type") != token_type or not payload.get("sub"):
        raise UnauthorizedError(f"Invalid {label.lower()} token")
    return payload
