"""
인증 서비스 테스트

비밀번호 해시, 토큰 발급/검증, 가입/로그인/갱신
"""

from datetime import timedelta

import jwt
import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import AuthConfig
from core.domain.entities import User
from core.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
    UnauthorizedError,
)
from core.storage.category_store import CategoryStore
from core.storage.user_store import UserStore
from core.utils.dates import now_utc
from web.models.requests import RegisterRequest
from web.services.auth_service import AuthService, TokenIssuer, hash_password, verify_password

AUTH = AuthConfig(jwt_secret="access-secret", jwt_refresh_secret="refresh-secret")


def _register_request(email: str = "Jane@Example.com") -> RegisterRequest:
    return RegisterRequest(
        email=email,
        password="secret123",
        first_name="Jane",
        last_name="Doe",
    )


class TestPasswordHash:
    def test_verify(self) -> None:
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestTokenIssuer:
    """TokenIssuer 테스트"""

    def _user(self) -> User:
        return User(email="a@b.co", password_hash="x", first_name="A", last_name="B")

    def test_issue_and_decode(self) -> None:
        issuer = TokenIssuer(AUTH)
        user = self._user()

        tokens = issuer.issue(user)

        assert issuer.decode_access(tokens["accessToken"])["userId"] == user.id
        assert issuer.decode_refresh(tokens["refreshToken"])["email"] == "a@b.co"

    def test_secrets_not_interchangeable(self) -> None:
        """refresh 토큰은 access 검증을 통과하지 못함"""
        issuer = TokenIssuer(AUTH)
        tokens = issuer.issue(self._user())

        with pytest.raises(TokenInvalidError):
            issuer.decode_access(tokens["refreshToken"])

    def test_expired(self) -> None:
        issuer = TokenIssuer(AUTH)
        past = now_utc() - timedelta(hours=1)
        token = jwt.encode(
            {"userId": "u1", "iat": past, "exp": past + timedelta(minutes=1)},
            AUTH.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            issuer.decode_access(token)

    def test_garbage(self) -> None:
        with pytest.raises(TokenInvalidError):
            TokenIssuer(AUTH).decode_access("not.a.token")

    def test_missing_user_id(self) -> None:
        token = jwt.encode({"email": "x"}, AUTH.jwt_secret, algorithm="HS256")

        with pytest.raises(TokenInvalidError):
            TokenIssuer(AUTH).decode_access(token)


class TestAuthService:
    """AuthService 테스트"""

    async def test_register_creates_defaults(self, db: SQLiteAdapter) -> None:
        """가입 시 기본 카테고리 15개 생성, 이메일 소문자"""
        result = await AuthService(db, AUTH).register(_register_request())

        user_id = result["user"]["id"]
        assert result["user"]["email"] == "jane@example.com"
        assert "passwordHash" not in result["user"]
        assert set(result["tokens"]) == {"accessToken", "refreshToken"}
        assert await CategoryStore(db).count_documents({"user_id": user_id}) == 15

        stored = await UserStore(db).find_by_id(user_id)
        assert stored.last_login is not None

    async def test_register_duplicate(self, db: SQLiteAdapter) -> None:
        service = AuthService(db, AUTH)
        await service.register(_register_request())

        with pytest.raises(AlreadyExistsError, match="User already exists"):
            await service.register(_register_request("jane@example.com"))

    async def test_login(self, db: SQLiteAdapter) -> None:
        service = AuthService(db, AUTH)
        await service.register(_register_request())

        result = await service.login("JANE@example.com", "secret123")

        assert result["user"]["profile"]["firstName"] == "Jane"

    async def test_login_wrong_password(self, db: SQLiteAdapter) -> None:
        service = AuthService(db, AUTH)
        await service.register(_register_request())

        with pytest.raises(InvalidCredentialsError):
            await service.login("jane@example.com", "nope")

    async def test_login_unknown_user(self, db: SQLiteAdapter) -> None:
        with pytest.raises(InvalidCredentialsError):
            await AuthService(db, AUTH).login("ghost@example.com", "secret123")

    async def test_login_inactive_user(self, db: SQLiteAdapter) -> None:
        service = AuthService(db, AUTH)
        result = await service.register(_register_request())
        store = UserStore(db)
        user = await store.find_by_id(result["user"]["id"])
        async with db.transaction():
            user.is_active = False
            await store.save(user)

        with pytest.raises(InvalidCredentialsError):
            await service.login("jane@example.com", "secret123")

    async def test_refresh(self, db: SQLiteAdapter) -> None:
        service = AuthService(db, AUTH)
        result = await service.register(_register_request())

        tokens = await service.refresh(result["tokens"]["refreshToken"])

        payload = service.tokens.decode_access(tokens["accessToken"])
        assert payload["userId"] == result["user"]["id"]

    async def test_refresh_deleted_user(self, db: SQLiteAdapter) -> None:
        """사용자가 없으면 갱신 거부"""
        service = AuthService(db, AUTH)
        result = await service.register(_register_request())
        async with db.transaction():
            await UserStore(db).delete_one({"id": result["user"]["id"]})

        with pytest.raises(UnauthorizedError):
            await service.refresh(result["tokens"]["refreshToken"])
