"""Identity tokens.

The comment service does not log users in itself: the site embedding the
comments issues an HS256 token naming the commenter and their
capabilities, and the browser sends it back in the ``auth_token`` cookie.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from chatter.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims carried by an identity token."""

    user_id: int
    name: str
    capabilities: list[str] = []
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """Token is malformed, forged or expired."""


def create_token(
    user_id: int, name: str, capabilities: list[str], settings: AuthSettings
) -> str:
    """Issue a token for a commenter.

    Args:
        user_id: Commenter's user ID on the embedding site
        name: Display name, also the commenter's voting identity
        capabilities: Capability names ("comment", "commentadmin")
        settings: Signing secret, algorithm and lifetime

    Returns:
        Encoded token
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "name": name,
        "capabilities": capabilities,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check a token's signature and expiry and return its claims.

    Raises:
        JWTError: If the token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id", "name"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload.model_validate(claims)
