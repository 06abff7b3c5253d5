"""
FastAPI 애플리케이션

라우터 등록, 예외 핸들러, 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings, get_settings
from core.constants import Defaults, ErrorCodes
from core.errors import AppError
from web.models.responses import ApiIndexResponse
from web.routes import (
    accounts,
    auth,
    categories,
    dashboard,
    health,
    investments,
    loans,
    reminders,
    transactions,
    users,
)

logger = logging.getLogger(__name__)

API_ENDPOINTS: dict[str, str] = {
    "auth": "/api/auth",
    "users": "/api/users",
    "accounts": "/api/accounts",
    "transactions": "/api/transactions",
    "categories": "/api/categories",
    "reminders": "/api/reminders",
    "investments": "/api/investments",
    "loans": "/api/loans",
    "dashboard": "/api/dashboard",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    details=None,
) -> JSONResponse:
    """{ error: { message, code, details? } } 응답"""
    error: dict = {"message": message, "code": code}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    """필드별 검증 오류 (body/query 접두어 제외)"""
    details = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return details


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """예외 → 오류 응답 변환 등록

    details는 개발 환경에서만 포함 (요청 검증 오류는 항상 포함).
    """

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} 실패: {exc.message}")
        details = exc.details if settings.is_development else None
        return error_response(exc.status_code, exc.message, exc.code, details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        return error_response(
            400,
            "Validation failed",
            ErrorCodes.VALIDATION_ERROR,
            _validation_details(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == 404:
            return error_response(
                404,
                f"Route {request.url.path} not found",
                ErrorCodes.ROUTE_NOT_FOUND,
            )
        code = ErrorCodes.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCodes.INVALID_INPUT
        return error_response(exc.status_code, str(exc.detail), code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"{request.method} {request.url.path} 처리 중 예외: {exc}")
        details = repr(exc) if settings.is_development else None
        return error_response(
            500,
            "Internal server error",
            ErrorCodes.INTERNAL_ERROR,
            details,
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """앱 생성

    Args:
        settings: 설정 (None이면 settings.yaml 로드)

    Returns:
        FastAPI 인스턴스
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 생명주기 관리"""
        # 시작 시 - DB 스키마 자동 초기화
        async with SQLiteAdapter(settings.db_path) as db:
            await init_schema(db)
        logger.info(f"Web 시작: environment={settings.environment.value}")

        yield

        logger.info("Web 종료")

    app = FastAPI(
        title=Defaults.API_TITLE,
        description="개인 재무 관리 API (계좌, 거래, 예산, 투자, 대출)",
        version=Defaults.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(accounts.router)
    app.include_router(transactions.router)
    app.include_router(categories.router)
    app.include_router(reminders.router)
    app.include_router(investments.router)
    app.include_router(loans.router)
    app.include_router(dashboard.router)

    @app.get("/api", response_model=ApiIndexResponse)
    async def api_index() -> ApiIndexResponse:
        """API 인덱스 (영역별 경로)"""
        return ApiIndexResponse(
            message=Defaults.API_TITLE,
            version=Defaults.API_VERSION,
            endpoints=API_ENDPOINTS,
        )

    return app
