"""
응답 직렬화

엔티티 → API dict (camelCase), 금액은 문자열.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from core.domain.entities import (
    Account,
    Category,
    Investment,
    Loan,
    Reminder,
    Transaction,
    User,
)
from core.ledger.loan import loan_metrics


def money(value: Decimal) -> str:
    """금액 문자열 (지수 표기 없음)"""
    return format(value, "f")


def encode(value: Any) -> Any:
    """JSON 직렬화 가능한 값으로 재귀 변환

    Decimal → 문자열, date/datetime → ISO 문자열.
    """
    if isinstance(value, Decimal):
        return money(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode(v) for v in value]
    return value


def user_to_dict(user: User) -> dict[str, Any]:
    """사용자 (비밀번호 해시 제외)"""
    preferences = user.preferences or {}
    notifications = preferences.get("notifications") or {}
    return encode({
        "id": user.id,
        "email": user.email,
        "profile": {
            "firstName": user.first_name,
            "lastName": user.last_name,
            "avatar": user.avatar,
            "currency": user.currency,
            "timezone": user.timezone,
        },
        "preferences": {
            "dashboardLayout": preferences.get("dashboard_layout"),
            "notifications": {
                "email": notifications.get("email", True),
                "inApp": notifications.get("in_app", True),
                "reminders": notifications.get("reminders", True),
            },
        },
        "isActive": user.is_active,
        "lastLogin": user.last_login,
        "createdAt": user.created_at,
        "updatedAt": user.updated_at,
    })


def account_to_dict(account: Account) -> dict[str, Any]:
    return encode({
        "id": account.id,
        "userId": account.user_id,
        "name": account.name,
        "type": account.type,
        "balance": account.balance,
        "currency": account.currency,
        "color": account.color,
        "icon": account.icon,
        "description": account.description,
        "isActive": account.is_active,
        "createdAt": account.created_at,
        "updatedAt": account.updated_at,
    })


def account_ref(account: Account | None) -> dict[str, Any] | None:
    """거래에 포함되는 계좌 요약"""
    if account is None:
        return None
    return {
        "id": account.id,
        "name": account.name,
        "type": account.type,
        "color": account.color,
    }


def transaction_to_dict(
    transaction: Transaction,
    account: Account | None = None,
) -> dict[str, Any]:
    """거래 (account 지정 시 계좌 요약 포함)"""
    recurring = transaction.recurring_details or None
    data = {
        "id": transaction.id,
        "userId": transaction.user_id,
        "accountId": transaction.account_id,
        "type": transaction.type,
        "amount": transaction.amount,
        "category": transaction.category,
        "description": transaction.description,
        "date": transaction.date,
        "tags": list(transaction.tags),
        "isRecurring": transaction.is_recurring,
        "recurringDetails": (
            {
                "frequency": recurring.get("frequency"),
                "endDate": recurring.get("end_date"),
                "parentTransactionId": recurring.get("parent_transaction_id"),
            }
            if recurring
            else None
        ),
        "createdAt": transaction.created_at,
        "updatedAt": transaction.updated_at,
    }
    if account is not None:
        data["account"] = account_ref(account)
    return encode(data)


def category_to_dict(category: Category) -> dict[str, Any]:
    return encode({
        "id": category.id,
        "userId": category.user_id,
        "name": category.name,
        "type": category.type,
        "icon": category.icon,
        "color": category.color,
        "isDefault": category.is_default,
        "isActive": category.is_active,
        "createdAt": category.created_at,
        "updatedAt": category.updated_at,
    })


def reminder_to_dict(reminder: Reminder) -> dict[str, Any]:
    return encode({
        "id": reminder.id,
        "userId": reminder.user_id,
        "title": reminder.title,
        "description": reminder.description,
        "amount": reminder.amount,
        "dueDate": reminder.due_date,
        "frequency": reminder.frequency,
        "category": reminder.category,
        "isActive": reminder.is_active,
        "lastNotified": reminder.last_notified,
        "completedDates": reminder.completed_dates,
        "createdAt": reminder.created_at,
        "updatedAt": reminder.updated_at,
    })


def investment_to_dict(investment: Investment, derived: bool = True) -> dict[str, Any]:
    """투자 (derived=True면 평가액/손익 포함)"""
    data: dict[str, Any] = {
        "id": investment.id,
        "userId": investment.user_id,
        "name": investment.name,
        "type": investment.type,
        "quantity": investment.quantity,
        "purchasePrice": investment.purchase_price,
        "currentPrice": investment.current_price,
        "purchaseDate": investment.purchase_date,
        "broker": investment.broker,
        "notes": investment.notes,
        "createdAt": investment.created_at,
        "updatedAt": investment.updated_at,
    }
    if derived:
        data.update({
            "totalValue": investment.total_value,
            "investedAmount": investment.invested_amount,
            "gainLoss": investment.gain_loss,
            "gainLossPercentage": investment.gain_loss_percentage,
        })
    return encode(data)


def loan_to_dict(loan: Loan, today: date | None = None, derived: bool = False) -> dict[str, Any]:
    """대출 (derived=True면 남은 개월/이자/상환률 포함)"""
    data: dict[str, Any] = {
        "id": loan.id,
        "userId": loan.user_id,
        "loanName": loan.loan_name,
        "loanType": loan.loan_type,
        "lender": loan.lender,
        "principalAmount": loan.principal_amount,
        "currentBalance": loan.current_balance,
        "interestRate": loan.interest_rate,
        "monthlyPayment": loan.monthly_payment,
        "startDate": loan.start_date,
        "endDate": loan.end_date,
        "nextPaymentDate": loan.next_payment_date,
        "status": loan.status,
        "notes": loan.notes,
        "createdAt": loan.created_at,
        "updatedAt": loan.updated_at,
    }
    if derived:
        metrics = loan_metrics(loan, today)
        data.update({
            "monthsRemaining": metrics.months_remaining,
            "totalInterest": metrics.total_interest,
            "paidAmount": metrics.paid_amount,
            "progressPercentage": metrics.progress_percentage,
        })
    return encode(data)
