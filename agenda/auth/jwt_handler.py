"""Bearer tokens identifying the user acting on a business agenda."""

from datetime import datetime, timedelta, timezone

import jwt

from agenda.core import config

REQUIRED_CLAIMS = ["sub", "exp", "iss"]


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    lifetime = timedelta(minutes=expires_minutes or config.JWT_EXPIRES_MINUTES)
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": subject.strip().lower(),
        "iss": config.JWT_ISSUER,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode ``token`` and check signature, expiry and issuer.

    Raises ``jwt.PyJWTError`` subclasses on any failure.
    """
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        issuer=config.JWT_ISSUER,
        leeway=config.JWT_LEEWAY_SECONDS,
        options={"require": REQUIRED_CLAIMS},
    )


def subject_email(claims: dict) -> str | None:
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        return None
    return subject.strip().lower()
