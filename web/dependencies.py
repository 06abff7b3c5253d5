"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from dataclasses import dataclass
from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.errors import UnauthorizedError
from web.services.auth_service import TokenIssuer

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """인증된 호출자"""

    user_id: str
    email: str


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)

    조회 요청용. 마지막으로 커밋된 상태를 본다.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    생성/수정/삭제 요청용. 쓰기는 transaction() 안에서 수행.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser:
    """Authorization: Bearer <access token> 검증

    Raises:
        UnauthorizedError: 토큰 없음
        TokenExpiredError / TokenInvalidError: 토큰 오류
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    payload = TokenIssuer(settings.auth).decode_access(credentials.credentials)
    return CurrentUser(user_id=payload["userId"], email=payload.get("email", ""))
