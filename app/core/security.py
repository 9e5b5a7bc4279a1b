"""Password hashing, bearer secrets, and the cross-subdomain session cookie."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import urlparse

import bcrypt
import jwt

from app.core.config import Settings, settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Bytes of entropy in a generated bearer secret.
SECRET_TOKEN_BYTES = 32

SESSION_COOKIE_NAME = "session-token"
SECURE_SESSION_COOKIE_NAME = "__Secure-session-token"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash. A missing hash never matches."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_secret() -> str:
    """Return a new URL-safe bearer secret for a user record."""
    return secrets.token_urlsafe(SECRET_TOKEN_BYTES)


def root_domain(url: str) -> str:
    """
    Return the last two labels of the URL's host.

    `https://initiatives.socis.ca` -> `socis.ca`; `http://localhost:3000` -> `localhost`.
    """
    hostname = urlparse(url).hostname or "localhost"
    return ".".join(hostname.split(".")[-2:])


def is_secure_cookie(cfg: Settings) -> bool:
    """Cookies are marked Secure everywhere except local development."""
    return cfg.APP_ENV != "dev"


def session_cookie_name(cfg: Settings) -> str:
    return SECURE_SESSION_COOKIE_NAME if is_secure_cookie(cfg) else SESSION_COOKIE_NAME


def session_cookie_options(cfg: Settings) -> dict[str, Any]:
    """Keyword arguments for Response.set_cookie; the leading dot shares it across subdomains."""
    return {
        "httponly": True,
        "samesite": "lax",
        "path": "/",
        "domain": f".{root_domain(cfg.SITE_URL)}",
        "secure": is_secure_cookie(cfg),
        "max_age": cfg.SESSION_EXPIRE_MINUTES * 60,
    }


def create_session_token(email: str) -> str:
    """Create a signed session token with sub (user email), exp and iat."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": email,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token; return payload (sub, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
    )
