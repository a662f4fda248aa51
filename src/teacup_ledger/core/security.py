"""Bearer token helpers carrying the caller's account identifier."""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt

from teacup_ledger.core.settings import Settings, settings
from teacup_ledger.db.time import utcnow


def create_access_token(
    account: str,
    *,
    config: Settings | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Return a signed JWT whose ``sub`` claim is ``account``."""
    config = config or settings
    minutes = config.access_token_expire_minutes if expires_minutes is None else expires_minutes
    claims: dict[str, object] = {
        "sub": account,
        "exp": utcnow() + timedelta(minutes=minutes),
    }
    encoded: str = jwt.encode(claims, config.secret_key, algorithm=config.jwt_algorithm)
    return encoded


def decode_account(token: str, *, config: Settings | None = None) -> str:
    """Return the account identifier carried by ``token``.

    Raises:
        JWTError: If the token is malformed, expired or has no subject.
    """
    config = config or settings
    payload = jwt.decode(token, config.secret_key, algorithms=[config.jwt_algorithm])
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise JWTError("token has no subject")
    return subject
