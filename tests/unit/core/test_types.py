"""
core/types.py 테스트

모든 Enum이 문자열 값으로 직렬화/비교 가능한지 확인
"""

from core.types import (
    AccountType,
    AppEnvironment,
    BudgetStatus,
    InvestmentType,
    LoanStatus,
    LoanType,
    ReminderFrequency,
    SortOrder,
    StatsPeriod,
    TransactionType,
)


class TestTransactionType:
    """TransactionType 테스트"""

    def test_values(self) -> None:
        assert TransactionType.INCOME.value == "income"
        assert TransactionType.EXPENSE.value == "expense"

    def test_str_comparison(self) -> None:
        """저장된 문자열과 직접 비교"""
        assert "expense" == TransactionType.EXPENSE
        assert TransactionType("income") is TransactionType.INCOME


class TestAccountType:
    def test_values(self) -> None:
        assert {t.value for t in AccountType} == {
            "savings",
            "current",
            "credit_card",
            "cash",
            "digital_wallet",
        }


class TestLoanEnums:
    """대출 관련 Enum"""

    def test_status_values(self) -> None:
        assert {s.value for s in LoanStatus} == {"active", "paid_off", "defaulted"}

    def test_type_values(self) -> None:
        assert "mortgage" in {t.value for t in LoanType}
        assert "other" in {t.value for t in LoanType}


class TestMiscEnums:
    def test_investment_types(self) -> None:
        assert InvestmentType("real_estate") is InvestmentType.REAL_ESTATE

    def test_reminder_frequency(self) -> None:
        assert ReminderFrequency.ONCE.value == "once"
        assert len(ReminderFrequency) == 6

    def test_budget_status_uses_hyphen(self) -> None:
        """API 값은 on-track (하이픈)"""
        assert BudgetStatus.ON_TRACK.value == "on-track"

    def test_stats_period(self) -> None:
        assert [p.value for p in StatsPeriod] == ["week", "month", "year"]

    def test_sort_order(self) -> None:
        assert SortOrder("asc") is SortOrder.ASC

    def test_environment(self) -> None:
        assert AppEnvironment("production") is AppEnvironment.PRODUCTION
