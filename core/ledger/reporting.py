"""
집계/리포팅

조회 시점마다 다시 계산하는 순수 함수 모음 (캐시 없음).
입력은 이미 사용자 범위로 필터링된 엔티티 목록.

반환 dict의 키는 API 응답 필드명(camelCase) 그대로 사용.
금액은 Decimal, 비율(%)은 소수 둘째 자리 float.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Mapping

from core.constants import (
    BILL_CATEGORIES,
    BUDGET_EXCEEDED_PERCENT,
    BUDGET_WARNING_PERCENT,
    EXPENSE_BREAKDOWN_COLORS,
    EXPENSE_BREAKDOWN_LIMIT,
    TRANSACTION_STATS_CATEGORY_LIMIT,
    UPCOMING_BILLS_DAYS,
    UPCOMING_BILLS_LIMIT,
    UPCOMING_LOAN_PAYMENTS_LIMIT,
)
from core.domain.entities import Account, Investment, Loan, Reminder, Transaction
from core.types import (
    BudgetStatus,
    LoanStatus,
    ReminderFrequency,
    StatsPeriod,
    TransactionType,
)
from core.utils.dates import add_months

ZERO = Decimal("0")


def percentage(part: Decimal, whole: Decimal) -> float:
    """part / whole × 100 (whole이 0이면 0)"""
    if whole == 0:
        return 0.0
    return round(float(part / whole * 100), 2)


def totals_by_type(transactions: Iterable[Transaction]) -> dict[str, dict[str, Any]]:
    """유형별 합계/건수

    Returns:
        {"income": {"total", "count"}, "expense": {"total", "count"}}
    """
    totals = {
        TransactionType.INCOME.value: {"total": ZERO, "count": 0},
        TransactionType.EXPENSE.value: {"total": ZERO, "count": 0},
    }
    for tx in transactions:
        bucket = totals[TransactionType(tx.type).value]
        bucket["total"] += tx.amount
        bucket["count"] += 1
    return totals


def _sum_by_category(transactions: Iterable[Transaction]) -> list[tuple[str, Decimal, int]]:
    """지출 카테고리별 (이름, 합계, 건수), 합계 내림차순"""
    amounts: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for tx in transactions:
        if tx.type != TransactionType.EXPENSE:
            continue
        amounts[tx.category] += tx.amount
        counts[tx.category] += 1
    return sorted(
        ((name, amount, counts[name]) for name, amount in amounts.items()),
        key=lambda item: item[1],
        reverse=True,
    )


# =============================================================================
# 순자산 / 저축률
# =============================================================================

def total_account_balance(accounts: Iterable[Account]) -> Decimal:
    """활성 계좌 잔액 합계"""
    return sum((a.balance for a in accounts if a.is_active), ZERO)


def total_investment_value(investments: Iterable[Investment]) -> Decimal:
    """투자 평가액 합계"""
    return sum((i.total_value for i in investments), ZERO)


def total_debt(loans: Iterable[Loan]) -> Decimal:
    """진행 중 대출 잔액 합계"""
    return sum(
        (loan.current_balance for loan in loans if loan.status == LoanStatus.ACTIVE),
        ZERO,
    )


def net_worth(
    accounts: Iterable[Account],
    investments: Iterable[Investment],
    loans: Iterable[Loan],
) -> Decimal:
    """순자산 = 활성 계좌 잔액 + 투자 평가액 - 진행 중 대출 잔액"""
    return total_account_balance(accounts) + total_investment_value(investments) - total_debt(loans)


def savings_rate(income: Decimal, expenses: Decimal) -> float:
    """저축률 (%) = (수입 - 지출) / 수입 × 100, 수입이 0이면 0"""
    return percentage(income - expenses, income)


def dashboard_overview(
    accounts: list[Account],
    month_transactions: list[Transaction],
    investments: list[Investment],
    loans: list[Loan],
) -> dict[str, Any]:
    """대시보드 개요

    Args:
        accounts: 사용자 계좌 전체
        month_transactions: 이번 달 거래
        investments: 투자 전체
        loans: 대출 전체
    """
    active_accounts = [a for a in accounts if a.is_active]
    totals = totals_by_type(month_transactions)
    income = totals[TransactionType.INCOME.value]["total"]
    expenses = totals[TransactionType.EXPENSE.value]["total"]

    return {
        "totalBalance": total_account_balance(active_accounts),
        "monthlyIncome": income,
        "monthlyExpenses": expenses,
        "savingsRate": savings_rate(income, expenses),
        "netWorth": net_worth(active_accounts, investments, loans),
        "debtAmount": total_debt(loans),
        "investmentValue": total_investment_value(investments),
        "accountsCount": len(active_accounts),
    }


# =============================================================================
# 지출 분석
# =============================================================================

def expense_breakdown(month_transactions: Iterable[Transaction]) -> list[dict[str, Any]]:
    """이번 달 지출 카테고리 상위 8개

    비율은 목록에 포함된 카테고리 합계 기준.
    """
    top = _sum_by_category(month_transactions)[:EXPENSE_BREAKDOWN_LIMIT]
    listed_total = sum((amount for _, amount, _ in top), ZERO)

    return [
        {
            "category": name,
            "amount": amount,
            "count": count,
            "percentage": percentage(amount, listed_total),
            "color": EXPENSE_BREAKDOWN_COLORS[index % len(EXPENSE_BREAKDOWN_COLORS)],
        }
        for index, (name, amount, count) in enumerate(top)
    ]


def budget_status(percent: Decimal) -> BudgetStatus:
    """예산 사용률 → 상태"""
    if percent > BUDGET_EXCEEDED_PERCENT:
        return BudgetStatus.EXCEEDED
    if percent > BUDGET_WARNING_PERCENT:
        return BudgetStatus.WARNING
    return BudgetStatus.ON_TRACK


def budget_progress(
    month_transactions: Iterable[Transaction],
    limits: Mapping[str, Decimal],
) -> list[dict[str, Any]]:
    """카테고리별 이번 달 예산 대비 지출

    비율은 100으로 상한, 상태는 상한 전 비율로 판정.
    """
    spent: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for tx in month_transactions:
        if tx.type == TransactionType.EXPENSE and tx.category in limits:
            spent[tx.category] += tx.amount

    lines: list[dict[str, Any]] = []
    for category, budget in limits.items():
        amount = spent[category]
        raw_percent = amount / budget * 100 if budget > 0 else ZERO
        lines.append({
            "category": category,
            "spent": amount,
            "budget": budget,
            "percentage": round(float(min(raw_percent, Decimal("100"))), 2),
            "remaining": budget - amount,
            "status": budget_status(raw_percent).value,
        })
    return lines


def stats_period_start(period: StatsPeriod | str, today: date) -> date:
    """통계 기간 시작일 (오늘 기준 1주/1개월/1년 전)"""
    period = StatsPeriod(period)
    if period == StatsPeriod.WEEK:
        return today - timedelta(days=7)
    if period == StatsPeriod.YEAR:
        return add_months(today, -12)
    return add_months(today, -1)


def transaction_stats(transactions: Iterable[Transaction]) -> dict[str, Any]:
    """기간 거래 통계 (수입/지출 합계, 지출 상위 10 카테고리)"""
    transactions = list(transactions)
    totals = totals_by_type(transactions)
    income = totals[TransactionType.INCOME.value]
    expense = totals[TransactionType.EXPENSE.value]

    top = _sum_by_category(transactions)[:TRANSACTION_STATS_CATEGORY_LIMIT]

    return {
        "totalIncome": income["total"],
        "totalExpense": expense["total"],
        "netAmount": income["total"] - expense["total"],
        "transactionCount": income["count"] + expense["count"],
        "categoryBreakdown": [
            {
                "category": name,
                "amount": amount,
                "count": count,
                "percentage": percentage(amount, expense["total"]),
            }
            for name, amount, count in top
        ],
    }


# =============================================================================
# 계좌
# =============================================================================

def account_summary(accounts: list[Account]) -> dict[str, Any]:
    """계좌 목록 요약"""
    return {
        "totalAccounts": len(accounts),
        "activeAccounts": sum(1 for a in accounts if a.is_active),
        "totalBalance": total_account_balance(accounts),
    }


def account_stats(
    active_accounts: list[Account],
    recent_transactions: Iterable[Transaction],
) -> dict[str, Any]:
    """계좌 유형별 통계와 최근 현금 흐름

    Args:
        active_accounts: 활성 계좌
        recent_transactions: 현금 흐름 집계 기간의 거래
    """
    by_type: dict[str, dict[str, Any]] = {}
    for account in active_accounts:
        entry = by_type.setdefault(
            account.type,
            {"count": 0, "totalBalance": ZERO, "accounts": []},
        )
        entry["count"] += 1
        entry["totalBalance"] += account.balance
        entry["accounts"].append({
            "id": account.id,
            "name": account.name,
            "balance": account.balance,
            "color": account.color,
        })

    flows: dict[tuple[str, str], Decimal] = defaultdict(lambda: ZERO)
    for tx in recent_transactions:
        flows[(tx.account_id, tx.type)] += tx.amount

    return {
        "statsByType": by_type,
        "totalBalance": sum((a.balance for a in active_accounts), ZERO),
        "accountCount": len(active_accounts),
        "cashFlow": [
            {"accountId": account_id, "type": type, "total": total}
            for (account_id, type), total in flows.items()
        ],
    }


# =============================================================================
# 투자
# =============================================================================

def _investment_totals(investments: list[Investment]) -> dict[str, Any]:
    invested = sum((i.invested_amount for i in investments), ZERO)
    current = total_investment_value(investments)
    return {
        "totalInvested": invested,
        "currentValue": current,
        "gainLoss": current - invested,
        "gainLossPercentage": percentage(current - invested, invested),
    }


def investment_summary(investments: list[Investment]) -> dict[str, Any]:
    """투자 목록 요약"""
    totals = _investment_totals(investments)
    return {
        "totalInvested": totals["totalInvested"],
        "currentValue": totals["currentValue"],
        "totalGainLoss": totals["gainLoss"],
        "totalGainLossPercentage": totals["gainLossPercentage"],
        "count": len(investments),
    }


def investment_stats(investments: list[Investment]) -> dict[str, Any]:
    """투자 유형별/전체 통계"""
    grouped: dict[str, list[Investment]] = defaultdict(list)
    for investment in investments:
        grouped[investment.type].append(investment)

    by_type = [
        {"type": type, "count": len(items), **_investment_totals(items)}
        for type, items in grouped.items()
    ]
    by_type.sort(key=lambda row: row["currentValue"], reverse=True)

    overall = _investment_totals(investments)
    overall["brokersCount"] = len({i.broker for i in investments})
    overall["totalInvestments"] = len(investments)

    return {"byType": by_type, "overall": overall}


# =============================================================================
# 대출
# =============================================================================

def _average_rate(loans: list[Loan]) -> float:
    if not loans:
        return 0.0
    total = sum((loan.interest_rate for loan in loans), ZERO)
    return round(float(total / len(loans)), 2)


def _active_monthly_payment(loans: Iterable[Loan]) -> Decimal:
    return sum(
        (loan.monthly_payment for loan in loans if loan.status == LoanStatus.ACTIVE),
        ZERO,
    )


def loan_summary(loans: list[Loan]) -> dict[str, Any]:
    """대출 목록 요약"""
    principal = sum((loan.principal_amount for loan in loans), ZERO)
    balance = sum((loan.current_balance for loan in loans), ZERO)
    return {
        "totalPrincipal": principal,
        "totalBalance": balance,
        "totalPaidOff": principal - balance,
        "totalMonthlyPayment": _active_monthly_payment(loans),
        "activeLoans": sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
        "paidOffLoans": sum(1 for loan in loans if loan.status == LoanStatus.PAID_OFF),
    }


def upcoming_loan_payments(loans: Iterable[Loan], today: date) -> list[dict[str, Any]]:
    """한 달 안에 납부일이 오는 진행 중 대출 (최대 5건)"""
    horizon = add_months(today, 1)
    due = sorted(
        (
            loan for loan in loans
            if loan.status == LoanStatus.ACTIVE
            and today <= loan.next_payment_date <= horizon
        ),
        key=lambda loan: loan.next_payment_date,
    )
    return [
        {
            "id": loan.id,
            "loanName": loan.loan_name,
            "monthlyPayment": loan.monthly_payment,
            "nextPaymentDate": loan.next_payment_date,
        }
        for loan in due[:UPCOMING_LOAN_PAYMENTS_LIMIT]
    ]


def loan_stats(loans: list[Loan], today: date) -> dict[str, Any]:
    """대출 유형별/전체 통계"""
    grouped: dict[str, list[Loan]] = defaultdict(list)
    for loan in loans:
        grouped[loan.loan_type].append(loan)

    by_type: list[dict[str, Any]] = []
    for type, items in grouped.items():
        principal = sum((loan.principal_amount for loan in items), ZERO)
        balance = sum((loan.current_balance for loan in items), ZERO)
        by_type.append({
            "type": type,
            "count": len(items),
            "totalPrincipal": principal,
            "currentBalance": balance,
            "monthlyPayment": _active_monthly_payment(items),
            "averageInterestRate": _average_rate(items),
            "paidAmount": principal - balance,
        })
    by_type.sort(key=lambda row: row["currentBalance"], reverse=True)

    principal = sum((loan.principal_amount for loan in loans), ZERO)
    balance = sum((loan.current_balance for loan in loans), ZERO)
    overall = {
        "totalLoans": len(loans),
        "activeLoans": sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
        "paidOffLoans": sum(1 for loan in loans if loan.status == LoanStatus.PAID_OFF),
        "totalPrincipal": principal,
        "currentBalance": balance,
        "totalPaidOff": principal - balance,
        "totalMonthlyPayment": _active_monthly_payment(loans),
        "averageInterestRate": _average_rate(loans),
        "payoffProgress": percentage(principal - balance, principal),
    }

    return {
        "byType": by_type,
        "overall": overall,
        "upcomingPayments": upcoming_loan_payments(loans, today),
    }


# =============================================================================
# 청구서
# =============================================================================

def upcoming_bills(reminders: Iterable[Reminder], today: date) -> list[dict[str, Any]]:
    """30일 안에 만기인 활성 청구서 리마인더 (최대 10건, 만기일 순)"""
    horizon = today + timedelta(days=UPCOMING_BILLS_DAYS)
    due = sorted(
        (
            r for r in reminders
            if r.is_active
            and r.category in BILL_CATEGORIES
            and today <= r.due_date <= horizon
        ),
        key=lambda r: r.due_date,
    )
    return [
        {
            "id": r.id,
            "name": r.title,
            "amount": r.amount if r.amount is not None else ZERO,
            "dueDate": r.due_date,
            "category": r.category or BILL_CATEGORIES[0],
            "isPaid": False,
            "isRecurring": r.frequency != ReminderFrequency.ONCE,
            "frequency": r.frequency,
        }
        for r in due[:UPCOMING_BILLS_LIMIT]
    ]
