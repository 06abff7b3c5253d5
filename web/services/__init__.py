"""
Web 서비스 패키지

비즈니스 로직 처리 (요청마다 DB 어댑터로 생성)
"""

from web.services.auth_service import AuthService
from web.services.user_service import UserService
from web.services.account_service import AccountService
from web.services.transaction_service import TransactionService
from web.services.category_service import CategoryService
from web.services.reminder_service import ReminderService
from web.services.investment_service import InvestmentService
from web.services.loan_service import LoanService
from web.services.dashboard_service import DashboardService

__all__ = [
    "AuthService",
    "UserService",
    "AccountService",
    "TransactionService",
    "CategoryService",
    "ReminderService",
    "InvestmentService",
    "LoanService",
    "DashboardService",
]
