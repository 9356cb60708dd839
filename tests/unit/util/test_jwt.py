"""Unit tests for JWT utilities and request identity."""

import pytest

from chatter.config import AuthSettings
from chatter.domain.service import JWTService
from chatter.domain.value import ANONYMOUS_USER_ID, Capability
from chatter.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def settings():
    return AuthSettings(jwt_secret="test-secret")


class TestTokens:
    """Tests for create_token and verify_token."""

    def test_round_trip(self, settings):
        token = create_token(7, "dana", ["comment"], settings)

        payload = verify_token(token, settings)

        assert payload.user_id == 7
        assert payload.name == "dana"
        assert payload.capabilities == ["comment"]

    def test_wrong_secret_is_rejected(self, settings):
        token = create_token(7, "dana", [], settings)

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other"))

    def test_expired_token_is_rejected(self, settings):
        token = create_token(
            7, "dana", [], settings.model_copy(update={"jwt_expiry_days": -1})
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)


class TestGetActor:
    """Tests for JWTService.get_actor."""

    def test_token_grants_capabilities(self, settings):
        # Arrange
        service = JWTService(settings)
        token = service.create_token(
            9, "mod", [Capability.COMMENT, Capability.MODERATE]
        )

        # Act
        actor = service.get_actor(token, "10.0.0.9")

        # Assert
        assert actor.user_id == 9
        assert actor.name == "mod"
        assert actor.ip == "10.0.0.9"
        assert actor.can(Capability.MODERATE)

    def test_unknown_capabilities_are_ignored(self, settings):
        token = create_token(9, "mod", ["comment", "superuser"], settings)

        actor = JWTService(settings).get_actor(token, "10.0.0.9")

        assert actor.capabilities == frozenset({Capability.COMMENT})

    def test_missing_token_is_anonymous(self, settings):
        actor = JWTService(settings).get_actor(None, "203.0.113.7")

        assert actor.user_id == ANONYMOUS_USER_ID
        assert actor.name == "203.0.113.7"
        assert actor.voter_key == "203.0.113.7"
        assert actor.can(Capability.COMMENT)

    def test_anonymous_readers_only(self, settings):
        """Sites can take the comment capability away from anonymous callers."""
        read_only = settings.model_copy(update={"anonymous_capabilities": []})

        actor = JWTService(read_only).get_actor("not-a-token", "203.0.113.7")

        assert actor.is_anonymous
        assert actor.capabilities == frozenset()
