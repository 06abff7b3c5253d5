"""
인증 서비스

가입/로그인/토큰 갱신.
access / refresh 토큰은 HS256, 서로 다른 secret으로 서명.
"""

import logging
from datetime import timedelta
from typing import Any

import bcrypt
import jwt

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import AuthConfig
from core.constants import Defaults
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
from web.services.serializers import user_to_dict

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """bcrypt 해시"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """bcrypt 검증"""
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


class TokenIssuer:
    """JWT 발급/검증

    Args:
        auth: 토큰 설정 (secret, 만료 시간)
    """

    def __init__(self, auth: AuthConfig):
        self.auth = auth

    def _encode(self, user: User, secret: str, lifetime: timedelta) -> str:
        issued_at = now_utc()
        payload = {
            "userId": user.id,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + lifetime,
        }
        return jwt.encode(payload, secret, algorithm=Defaults.JWT_ALGORITHM)

    def issue(self, user: User) -> dict[str, str]:
        """access/refresh 토큰 쌍 발급"""
        return {
            "accessToken": self._encode(
                user,
                self.auth.jwt_secret,
                timedelta(minutes=self.auth.access_token_expire_minutes),
            ),
            "refreshToken": self._encode(
                user,
                self.auth.jwt_refresh_secret,
                timedelta(days=self.auth.refresh_token_expire_days),
            ),
        }

    def _decode(self, token: str, secret: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(token, secret, algorithms=[Defaults.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError("Invalid token") from e

        if not payload.get("userId"):
            raise TokenInvalidError("Invalid token")
        return payload

    def decode_access(self, token: str) -> dict[str, Any]:
        """access 토큰 검증

        Raises:
            TokenExpiredError: 만료
            TokenInvalidError: 서명/형식 오류
        """
        return self._decode(token, self.auth.jwt_secret)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        """refresh 토큰 검증"""
        return self._decode(token, self.auth.jwt_refresh_secret)


class AuthService:
    """인증 서비스

    Args:
        db: SQLiteAdapter (쓰기 연결)
        auth: 토큰 설정
    """

    def __init__(self, db: SQLiteAdapter, auth: AuthConfig):
        self.db = db
        self.users = UserStore(db)
        self.categories = CategoryStore(db)
        self.tokens = TokenIssuer(auth)

    async def register(self, request: RegisterRequest) -> dict[str, Any]:
        """회원 가입

        기본 카테고리 세트를 함께 만든다.

        Raises:
            AlreadyExistsError: 이미 가입된 이메일
        """
        async with self.db.transaction():
            if await self.users.find_by_email(request.email) is not None:
                raise AlreadyExistsError("User already exists")

            user = User(
                email=request.email,
                password_hash=hash_password(request.password),
                first_name=request.first_name,
                last_name=request.last_name,
            )
            user.last_login = now_utc()
            await self.users.insert(user)
            await self.categories.insert_defaults(user.id)

        logger.info(f"User registered: {user.id}")
        return {"user": user_to_dict(user), "tokens": self.tokens.issue(user)}

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """로그인

        Raises:
            InvalidCredentialsError: 없는 사용자, 비활성 사용자, 비밀번호 불일치
        """
        async with self.db.transaction():
            user = await self.users.find_by_email(email)
            if user is None or not user.is_active:
                raise InvalidCredentialsError("Invalid credentials")

            if not verify_password(password, user.password_hash):
                raise InvalidCredentialsError("Invalid credentials")

            user.last_login = now_utc()
            await self.users.save(user)

        logger.info(f"User logged in: {user.id}")
        return {"user": user_to_dict(user), "tokens": self.tokens.issue(user)}

    async def refresh(self, refresh_token: str) -> dict[str, str]:
        """refresh 토큰으로 새 토큰 쌍 발급

        Raises:
            TokenExpiredError / TokenInvalidError: 토큰 오류
            UnauthorizedError: 사용자가 없거나 비활성
        """
        payload = self.tokens.decode_refresh(refresh_token)

        user = await self.users.find_by_id(payload["userId"])
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found")

        return self.tokens.issue(user)
