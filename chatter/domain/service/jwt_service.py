"""JWT token domain service."""

import logfire

from chatter.config import AuthSettings
from chatter.domain.value import ANONYMOUS_USER_ID, Actor, Capability, UserId
from chatter.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations and request identity."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self, user_id: int, name: str, capabilities: list[Capability]
    ) -> str:
        """Create JWT token for a commenter.

        Args:
            user_id: User ID
            name: User name
            capabilities: Granted capabilities

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, name=name):
            return create_token(
                user_id,
                name,
                [capability.value for capability in capabilities],
                self.auth_settings,
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_actor(self, token: str | None, ip: str) -> Actor:
        """Resolve the identity of a request without raising.

        A missing or invalid token yields an anonymous actor named after
        the client IP, holding the configured anonymous capabilities.

        Args:
            token: JWT token string (optional)
            ip: Client IP address

        Returns:
            The request's actor
        """
        if token:
            try:
                payload = self.verify_token(token)
                return Actor(
                    user_id=UserId(payload.user_id),
                    name=payload.name,
                    ip=ip,
                    capabilities=frozenset(
                        capability
                        for capability in Capability
                        if capability.value in payload.capabilities
                    ),
                )
            except JWTError as e:
                # Invalid or expired token, treat as anonymous
                logfire.debug(
                    "JWT verification failed, treating as anonymous", error=str(e)
                )

        return Actor(
            user_id=ANONYMOUS_USER_ID,
            name=ip or "anonymous",
            ip=ip,
            capabilities=frozenset(self.auth_settings.anonymous_capabilities),
        )
