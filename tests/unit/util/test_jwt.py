"""Unit tests for session token handling."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from qa.config import AuthSettings
from qa.domain.service import JWTService
from qa.util.jwt import JWTError, create_token, verify_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestTokens:
    def test_round_trip(self):
        user_id = str(uuid4())

        payload = verify_token(create_token(user_id, "Alice", SETTINGS), SETTINGS)

        assert payload.user_id == user_id
        assert payload.name == "Alice"

    def test_expired_token(self):
        token = jwt.encode(
            {
                "user_id": str(uuid4()),
                "name": "Alice",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_wrong_secret(self):
        token = create_token(str(uuid4()), "Alice", AuthSettings(jwt_secret="other"))

        with pytest.raises(JWTError, match="Invalid"):
            verify_token(token, SETTINGS)

    def test_missing_claims(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(days=1)},
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="claims"):
            verify_token(token, SETTINGS)


class TestJWTService:
    @pytest.mark.asyncio
    async def test_user_id_from_valid_token(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        user_id = uuid4()

        token = jwt_service.create_token(str(user_id), "Alice")

        assert jwt_service.get_user_id_from_token(token) == user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "garbage"])
    async def test_bad_tokens_mean_anonymous(self, unit_env, token):
        jwt_service = await unit_env.get(JWTService)

        assert jwt_service.get_user_id_from_token(token) is None

    @pytest.mark.asyncio
    async def test_non_uuid_subject_means_anonymous(self, unit_env):
        jwt_service = await unit_env.get(JWTService)

        token = jwt_service.create_token("not-a-uuid", "Alice")

        assert jwt_service.get_user_id_from_token(token) is None
