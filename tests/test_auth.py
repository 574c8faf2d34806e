"""Tests for account registration rules and RS256 token handling."""

from types import SimpleNamespace

import jwt
import pytest
from fastapi_users import exceptions

from app.core.jwt_strategy import RS256JWTStrategyWithKid


class FakeUserManager:
    def __init__(self, users: dict[int, object]) -> None:
        self.users = users

    def parse_id(self, value):
        try:
            return int(value)
        except ValueError as e:
            raise exceptions.InvalidID() from e

    async def get(self, user_id: int):
        if user_id not in self.users:
            raise exceptions.UserNotExists()
        return self.users[user_id]


@pytest.fixture
def strategy(tmp_path) -> RS256JWTStrategyWithKid:
    return RS256JWTStrategyWithKid(
        lifetime_seconds=600, key_id="test-kid", key_file=str(tmp_path / "key.pem")
    )


class TestRS256Strategy:
    @pytest.mark.asyncio
    async def test_token_round_trip(self, strategy) -> None:
        owner = SimpleNamespace(id=7, email="owner@example.com")
        token = await strategy.write_token(owner)

        assert jwt.get_unverified_header(token)["kid"] == "test-kid"
        assert await strategy.read_token(token, FakeUserManager({7: owner})) is owner

    @pytest.mark.asyncio
    async def test_rejects_unknown_user_and_garbage(self, strategy) -> None:
        token = await strategy.write_token(SimpleNamespace(id=7, email="a@b.c"))
        manager = FakeUserManager({})

        assert await strategy.read_token(token, manager) is None
        assert await strategy.read_token("not-a-jwt", manager) is None
        assert await strategy.read_token(None, manager) is None

    def test_key_is_persisted_and_reused(self, tmp_path) -> None:
        key_file = tmp_path / "key.pem"
        first = RS256JWTStrategyWithKid(600, key_id="a", key_file=str(key_file))
        second = RS256JWTStrategyWithKid(600, key_id="a", key_file=str(key_file))

        assert key_file.exists()
        assert first.get_jwks() == second.get_jwks()

    def test_jwks_publishes_public_key_only(self, strategy) -> None:
        (key,) = strategy.get_jwks()["keys"]
        assert key["kty"] == "RSA"
        assert key["kid"] == "test-kid"
        assert "d" not in key


class TestRegistration:
    @pytest.mark.asyncio
    async def test_short_password_rejected(self, client) -> None:
        resp = await client.post(
            "/v1/auth/register", json={"email": "new@example.com", "password": "short"}
        )
        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "REGISTER_INVALID_PASSWORD"

    @pytest.mark.asyncio
    async def test_password_containing_email_rejected(self, client) -> None:
        resp = await client.post(
            "/v1/auth/register",
            json={"email": "learner@example.com", "password": "learner-2024!"},
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_register_succeeds(self, client) -> None:
        resp = await client.post(
            "/v1/auth/register",
            json={"email": "learner@example.com", "password": "correct horse battery"},
        )
        assert resp.status_code == 201
        assert resp.json()["email"] == "learner@example.com"
