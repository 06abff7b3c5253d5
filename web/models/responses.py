"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
성공: { data, message? }, 오류: { error: { message, code, details? } }
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    environment: str = Field(..., description="실행 환경 (development/production)")
    version: str = Field(..., description="API 버전")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class ApiIndexResponse(BaseModel):
    """API 인덱스 응답"""

    message: str = Field(..., description="API 이름")
    version: str = Field(..., description="API 버전")
    endpoints: dict[str, str] = Field(default_factory=dict, description="영역별 경로")


class MessageResponse(BaseModel):
    """메시지만 있는 응답 (삭제, 로그아웃 등)"""

    message: str = Field(..., description="결과 메시지")


class ErrorBody(BaseModel):
    """오류 내용"""

    message: str = Field(..., description="오류 메시지")
    code: str = Field(..., description="에러 코드")
    details: Any = Field(default=None, description="추가 정보")


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: ErrorBody
