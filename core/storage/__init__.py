"""
스토리지 모듈

사용자 소유 문서(계좌, 거래, 카테고리, 투자, 대출, 리마인더)와
사용자 저장소 인터페이스 제공
"""

from core.storage.document_store import DocumentStore
from core.storage.user_store import UserStore
from core.storage.account_store import AccountStore
from core.storage.transaction_store import TransactionStore
from core.storage.category_store import CategoryStore
from core.storage.investment_store import InvestmentStore
from core.storage.loan_store import LoanStore
from core.storage.reminder_store import ReminderStore

__all__ = [
    "DocumentStore",
    "UserStore",
    "AccountStore",
    "TransactionStore",
    "CategoryStore",
    "InvestmentStore",
    "LoanStore",
    "ReminderStore",
]
