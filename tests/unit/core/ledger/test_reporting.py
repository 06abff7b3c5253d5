"""
집계/리포팅 테스트

순자산, 저축률, 지출 분류, 예산, 통계
"""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.entities import Account, Investment, Reminder, Transaction
from core.ledger import reporting
from core.types import StatsPeriod


def _account(balance: str, is_active: bool = True, type: str = "current") -> Account:
    return Account(user_id="u", name="A", type=type, balance=Decimal(balance), is_active=is_active)


def _tx(type: str, amount: str, category: str = "Shopping", account_id: str = "a") -> Transaction:
    return Transaction(
        user_id="u",
        account_id=account_id,
        type=type,
        amount=Decimal(amount),
        category=category,
        date=date(2026, 3, 10),
    )


def _investment(quantity: str, purchase: str, current: str, type: str = "stocks", broker: str = "B1") -> Investment:
    return Investment(
        user_id="u",
        name="I",
        type=type,
        quantity=Decimal(quantity),
        purchase_price=Decimal(purchase),
        current_price=Decimal(current),
        purchase_date=date(2026, 1, 1),
        broker=broker,
    )


class TestPercentage:
    def test_zero_whole(self) -> None:
        assert reporting.percentage(Decimal("5"), Decimal("0")) == 0.0

    def test_rounding(self) -> None:
        assert reporting.percentage(Decimal("1"), Decimal("3")) == 33.33


class TestNetWorth:
    """순자산 계산"""

    def test_components(self, make_loan) -> None:
        accounts = [_account("1000"), _account("500", is_active=False)]
        investments = [_investment("10", "10", "12")]
        loans = [
            make_loan(current_balance=Decimal("300")),
            make_loan(current_balance=Decimal("0"), status="paid_off"),
        ]

        assert reporting.net_worth(accounts, investments, loans) == Decimal("820")

    def test_idempotent(self, make_loan) -> None:
        """같은 입력이면 같은 결과"""
        accounts = [_account("1000")]
        loans = [make_loan()]

        first = reporting.net_worth(accounts, [], loans)
        second = reporting.net_worth(accounts, [], loans)

        assert first == second == Decimal("-200")


class TestSavingsRate:
    def test_rate(self) -> None:
        assert reporting.savings_rate(Decimal("4000"), Decimal("3000")) == 25.0

    def test_no_income(self) -> None:
        assert reporting.savings_rate(Decimal("0"), Decimal("100")) == 0.0

    def test_negative(self) -> None:
        assert reporting.savings_rate(Decimal("100"), Decimal("150")) == -50.0


class TestDashboardOverview:
    def test_overview(self, make_loan) -> None:
        overview = reporting.dashboard_overview(
            [_account("1000"), _account("200"), _account("50", is_active=False)],
            [_tx("income", "3000"), _tx("expense", "750")],
            [_investment("2", "100", "150")],
            [make_loan(current_balance=Decimal("400"))],
        )

        assert overview == {
            "totalBalance": Decimal("1200"),
            "monthlyIncome": Decimal("3000"),
            "monthlyExpenses": Decimal("750"),
            "savingsRate": 75.0,
            "netWorth": Decimal("1100"),
            "debtAmount": Decimal("400"),
            "investmentValue": Decimal("300"),
            "accountsCount": 2,
        }


class TestExpenseBreakdown:
    """지출 카테고리 분류"""

    def test_sorted_and_colored(self) -> None:
        rows = reporting.expense_breakdown([
            _tx("expense", "30", "Food & Dining"),
            _tx("expense", "70", "Shopping"),
            _tx("expense", "20", "Food & Dining"),
            _tx("income", "999", "Salary"),
        ])

        assert [r["category"] for r in rows] == ["Shopping", "Food & Dining"]
        assert rows[0]["amount"] == Decimal("70")
        assert rows[1]["count"] == 2
        assert rows[0]["percentage"] == pytest.approx(58.33)
        assert rows[0]["color"] == "#3b82f6"

    def test_top_eight(self) -> None:
        """상위 8개만, 비율은 목록 합계 기준"""
        txs = [_tx("expense", str(10 + i), f"C{i}") for i in range(10)]

        rows = reporting.expense_breakdown(txs)

        assert len(rows) == 8
        assert sum(r["percentage"] for r in rows) == pytest.approx(100, abs=0.05)

    def test_empty(self) -> None:
        assert reporting.expense_breakdown([]) == []


class TestBudgetProgress:
    """예산 진행률"""

    def test_statuses(self) -> None:
        limits = {
            "Food & Dining": Decimal("1000"),
            "Shopping": Decimal("500"),
            "Entertainment": Decimal("400"),
        }
        txs = [
            _tx("expense", "850", "Food & Dining"),
            _tx("expense", "600", "Shopping"),
            _tx("expense", "100", "Entertainment"),
            _tx("income", "100", "Entertainment"),
        ]

        rows = {r["category"]: r for r in reporting.budget_progress(txs, limits)}

        assert rows["Food & Dining"]["status"] == "warning"
        assert rows["Food & Dining"]["percentage"] == 85.0
        assert rows["Shopping"]["status"] == "exceeded"
        assert rows["Shopping"]["percentage"] == 100.0
        assert rows["Shopping"]["remaining"] == Decimal("-100")
        assert rows["Entertainment"]["status"] == "on-track"
        assert rows["Entertainment"]["spent"] == Decimal("100")

    def test_boundaries(self) -> None:
        """정확히 80%는 on-track, 정확히 100%는 warning"""
        assert reporting.budget_status(Decimal("80")).value == "on-track"
        assert reporting.budget_status(Decimal("100")).value == "warning"
        assert reporting.budget_status(Decimal("100.01")).value == "exceeded"


class TestTransactionStats:
    def test_period_start(self) -> None:
        today = date(2026, 3, 31)

        assert reporting.stats_period_start(StatsPeriod.WEEK, today) == date(2026, 3, 24)
        assert reporting.stats_period_start("month", today) == date(2026, 2, 28)
        assert reporting.stats_period_start("year", today) == date(2025, 3, 31)

    def test_stats(self) -> None:
        stats = reporting.transaction_stats([
            _tx("income", "1000"),
            _tx("expense", "250", "Food & Dining"),
            _tx("expense", "150", "Shopping"),
        ])

        assert stats["totalIncome"] == Decimal("1000")
        assert stats["totalExpense"] == Decimal("400")
        assert stats["netAmount"] == Decimal("600")
        assert stats["transactionCount"] == 3
        assert stats["categoryBreakdown"][0] == {
            "category": "Food & Dining",
            "amount": Decimal("250"),
            "count": 1,
            "percentage": 62.5,
        }


class TestAccountStats:
    def test_summary(self) -> None:
        summary = reporting.account_summary([_account("10"), _account("5", is_active=False)])

        assert summary == {"totalAccounts": 2, "activeAccounts": 1, "totalBalance": Decimal("10")}

    def test_stats(self) -> None:
        checking = _account("100")
        savings = _account("900", type="savings")

        stats = reporting.account_stats(
            [checking, savings],
            [
                _tx("expense", "10", account_id=checking.id),
                _tx("expense", "5", account_id=checking.id),
                _tx("income", "50", account_id=savings.id),
            ],
        )

        assert stats["totalBalance"] == Decimal("1000")
        assert stats["accountCount"] == 2
        assert stats["statsByType"]["savings"]["count"] == 1
        assert {"accountId": checking.id, "type": "expense", "total": Decimal("15")} in stats["cashFlow"]


class TestInvestmentStats:
    def test_summary(self) -> None:
        summary = reporting.investment_summary([
            _investment("10", "10", "15"),
            _investment("1", "100", "50"),
        ])

        assert summary["totalInvested"] == Decimal("200")
        assert summary["currentValue"] == Decimal("200")
        assert summary["totalGainLoss"] == Decimal("0")
        assert summary["count"] == 2

    def test_by_type(self) -> None:
        stats = reporting.investment_stats([
            _investment("1", "10", "10", type="bonds", broker="B1"),
            _investment("1", "100", "120", type="crypto", broker="B2"),
            _investment("1", "50", "40", type="crypto", broker="B2"),
        ])

        assert [row["type"] for row in stats["byType"]] == ["crypto", "bonds"]
        assert stats["byType"][0]["gainLoss"] == Decimal("10")
        assert stats["overall"]["brokersCount"] == 2
        assert stats["overall"]["totalInvestments"] == 3


class TestLoanStats:
    def test_summary(self, make_loan) -> None:
        summary = reporting.loan_summary([
            make_loan(current_balance=Decimal("700")),
            make_loan(current_balance=Decimal("0"), status="paid_off"),
        ])

        assert summary["totalPrincipal"] == Decimal("2400")
        assert summary["totalPaidOff"] == Decimal("1700")
        assert summary["totalMonthlyPayment"] == Decimal("100")
        assert summary["activeLoans"] == 1
        assert summary["paidOffLoans"] == 1

    def test_stats_and_upcoming(self, make_loan) -> None:
        loans = [
            make_loan(next_payment_date=date(2026, 2, 20)),
            make_loan(loan_type="mortgage", next_payment_date=date(2026, 2, 5), interest_rate=Decimal("3")),
            make_loan(next_payment_date=date(2026, 5, 1)),
        ]

        stats = reporting.loan_stats(loans, today=date(2026, 2, 1))

        assert stats["overall"]["totalLoans"] == 3
        assert stats["overall"]["averageInterestRate"] == 4.33
        assert stats["overall"]["payoffProgress"] == 0.0
        assert [p["nextPaymentDate"] for p in stats["upcomingPayments"]] == [
            date(2026, 2, 5),
            date(2026, 2, 20),
        ]
        assert {row["type"] for row in stats["byType"]} == {"auto", "mortgage"}


class TestUpcomingBills:
    def test_filter_and_order(self) -> None:
        today = date(2026, 4, 1)
        reminders = [
            Reminder(user_id="u", title="Power", due_date=date(2026, 4, 20), frequency="monthly", category="Bills & Utilities", amount=Decimal("80")),
            Reminder(user_id="u", title="Rent", due_date=date(2026, 4, 3), frequency="monthly", category="Rent", amount=Decimal("1500")),
            Reminder(user_id="u", title="Gym", due_date=date(2026, 4, 4), frequency="monthly", category="Health"),
            Reminder(user_id="u", title="Far", due_date=date(2026, 6, 1), frequency="once", category="Rent"),
            Reminder(user_id="u", title="Past", due_date=date(2026, 3, 1), frequency="once", category="Rent"),
        ]

        bills = reporting.upcoming_bills(reminders, today)

        assert [b["name"] for b in bills] == ["Rent", "Power"]
        assert bills[0]["isPaid"] is False
        assert bills[0]["isRecurring"] is True
        assert bills[0]["amount"] == Decimal("1500")
