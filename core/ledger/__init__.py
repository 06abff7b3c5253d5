"""
원장 규칙

계좌 잔액 유지, 대출 상환, 조회용 집계.

사용 예시:
```python
from core.ledger import BalanceMaintainer

async with db.transaction():
    await BalanceMaintainer(db).apply_create(tx)
    await transaction_store.insert(tx)
```
"""

from core.ledger.balance import BalanceMaintainer, signed_amount
from core.ledger.loan import LoanMetrics, loan_metrics, record_payment

__all__ = [
    "BalanceMaintainer",
    "signed_amount",
    "LoanMetrics",
    "loan_metrics",
    "record_payment",
]
