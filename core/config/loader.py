"""
설정 로더

settings.yaml 로드 및 인증/DB/예산 설정 생성
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from core.constants import DEFAULT_BUDGET_LIMITS, Defaults, Paths
from core.types import AppEnvironment


@dataclass(frozen=True)
class AuthConfig:
    """토큰 발급 설정

    access / refresh 토큰은 서로 다른 secret으로 서명
    """

    jwt_secret: str
    jwt_refresh_secret: str
    access_token_expire_minutes: int = Defaults.ACCESS_TOKEN_EXPIRE_MINUTES
    refresh_token_expire_days: int = Defaults.REFRESH_TOKEN_EXPIRE_DAYS


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    environment: AppEnvironment
    auth: AuthConfig
    db_path: Path | None = None
    cors_origins: tuple[str, ...] = ("http://localhost:5173",)
    budget_limits: dict[str, Decimal] = field(default_factory=dict)


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _parse_budget_limits(raw: Any) -> dict[str, Decimal]:
    """budget.limits 섹션 파싱 (없으면 기본값)"""
    if raw is None:
        return {k: Decimal(v) for k, v in DEFAULT_BUDGET_LIMITS.items()}

    if not isinstance(raw, dict):
        raise SettingsLoadError("settings.yaml의 budget.limits는 매핑이어야 합니다")

    limits: dict[str, Decimal] = {}
    for category, value in raw.items():
        try:
            limit = Decimal(str(value))
        except InvalidOperation as e:
            raise SettingsLoadError(
                f"budget.limits.{category} 값이 숫자가 아닙니다: {value!r}"
            ) from e
        if limit <= 0:
            raise SettingsLoadError(
                f"budget.limits.{category} 값은 0보다 커야 합니다: {value!r}"
            )
        limits[str(category)] = limit
    return limits


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 environment인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    # environment 검증
    env_str = data.get("environment")
    if env_str is None:
        raise SettingsLoadError("settings.yaml에 'environment' 필드가 없습니다")

    try:
        environment = AppEnvironment(env_str)
    except ValueError as e:
        valid = [m.value for m in AppEnvironment]
        raise ValueError(
            f"유효하지 않은 environment입니다: '{env_str}'. "
            f"유효한 값: {valid}"
        ) from e

    # 인증 설정
    auth_data = data.get("auth")
    if auth_data is None:
        raise SettingsLoadError("settings.yaml에 'auth' 설정이 없습니다")

    jwt_secret = auth_data.get("jwt_secret")
    jwt_refresh_secret = auth_data.get("jwt_refresh_secret")

    if not jwt_secret:
        raise SettingsLoadError("settings.yaml의 auth 섹션에 'jwt_secret'이 없습니다")
    if not jwt_refresh_secret:
        raise SettingsLoadError(
            "settings.yaml의 auth 섹션에 'jwt_refresh_secret'이 없습니다"
        )

    auth = AuthConfig(
        jwt_secret=jwt_secret,
        jwt_refresh_secret=jwt_refresh_secret,
        access_token_expire_minutes=int(
            auth_data.get(
                "access_token_expire_minutes",
                Defaults.ACCESS_TOKEN_EXPIRE_MINUTES,
            )
        ),
        refresh_token_expire_days=int(
            auth_data.get(
                "refresh_token_expire_days",
                Defaults.REFRESH_TOKEN_EXPIRE_DAYS,
            )
        ),
    )

    # DB 경로 (선택)
    db_config = data.get("database") or {}
    db_path_str = db_config.get("path")
    db_path = Path(db_path_str) if db_path_str else None

    # Web 설정 (선택)
    web_config = data.get("web") or {}
    cors_origins = tuple(web_config.get("cors_origins", ["http://localhost:5173"]))

    budget_config = data.get("budget") or {}
    budget_limits = _parse_budget_limits(budget_config.get("limits"))

    return AppConfig(
        environment=environment,
        auth=auth,
        db_path=db_path,
        cors_origins=cors_origins,
        budget_limits=budget_limits,
    )


def get_db_path(config: AppConfig) -> Path:
    """환경에 따른 DB 경로 반환

    database.path가 지정되면 그 경로를 우선 사용.

    Args:
        config: AppConfig 인스턴스

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if config.db_path is not None:
        return config.db_path
    if config.environment == AppEnvironment.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def environment(self) -> AppEnvironment:
        """현재 실행 환경"""
        assert self._config is not None
        return self._config.environment

    @property
    def is_development(self) -> bool:
        """개발 환경 여부 (에러 details 노출 기준)"""
        return self.environment == AppEnvironment.DEVELOPMENT

    @property
    def auth(self) -> AuthConfig:
        """토큰 발급 설정"""
        assert self._config is not None
        return self._config.auth

    @property
    def cors_origins(self) -> list[str]:
        """허용 CORS Origin 목록"""
        assert self._config is not None
        return list(self._config.cors_origins)

    @property
    def budget_limits(self) -> dict[str, Decimal]:
        """카테고리별 월 예산 한도"""
        assert self._config is not None
        return dict(self._config.budget_limits)

    @property
    def db_path(self) -> Path:
        """현재 환경의 DB 경로"""
        assert self._config is not None
        return get_db_path(self._config)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
