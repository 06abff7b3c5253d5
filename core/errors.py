"""
애플리케이션 예외

모든 도메인 예외는 AppError를 상속하며
HTTP 상태 코드와 기계 판독용 에러 코드를 함께 가진다.
Web 계층의 예외 핸들러가 { error: { message, code } } 형태로 변환.
"""

from typing import Any

from core.constants import ErrorCodes


class AppError(Exception):
    """애플리케이션 예외 기본 클래스

    Args:
        message: 사용자에게 보여줄 메시지
        details: 추가 정보 (개발 환경에서만 응답에 포함)
    """

    status_code: int = 500
    code: str = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    """리소스가 없거나 호출자 소유가 아님

    타 사용자 리소스도 권한 오류가 아닌 NotFound로 처리 (정보 은닉).
    """

    status_code = 404
    code = ErrorCodes.NOT_FOUND


class ValidationError(AppError):
    """잘못된 입력 또는 허용되지 않는 상태 전이"""

    status_code = 400
    code = ErrorCodes.VALIDATION_ERROR


class AlreadyExistsError(AppError):
    """중복 리소스"""

    status_code = 400
    code = ErrorCodes.ALREADY_EXISTS


class InvalidCredentialsError(AppError):
    """로그인 실패"""

    status_code = 401
    code = ErrorCodes.INVALID_CREDENTIALS


class UnauthorizedError(AppError):
    """인증 정보 없음 또는 사용자 비활성"""

    status_code = 401
    code = ErrorCodes.UNAUTHORIZED


class TokenExpiredError(AppError):
    """토큰 만료"""

    status_code = 401
    code = ErrorCodes.TOKEN_EXPIRED


class TokenInvalidError(AppError):
    """토큰 서명/형식 오류"""

    status_code = 401
    code = ErrorCodes.TOKEN_INVALID
