"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    InvestmentCreateRequest,
    InvestmentUpdateRequest,
    LoanCreateRequest,
    LoanPaymentRequest,
    LoanUpdateRequest,
    LoginRequest,
    PreferencesUpdateRequest,
    ProfileUpdateRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ReminderCreateRequest,
    ReminderUpdateRequest,
    TransactionCreateRequest,
    TransactionUpdateRequest,
)
from web.models.responses import (
    ApiIndexResponse,
    ErrorBody,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "InvestmentCreateRequest",
    "InvestmentUpdateRequest",
    "LoanCreateRequest",
    "LoanPaymentRequest",
    "LoanUpdateRequest",
    "LoginRequest",
    "PreferencesUpdateRequest",
    "ProfileUpdateRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "ReminderCreateRequest",
    "ReminderUpdateRequest",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    # Responses
    "ApiIndexResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
