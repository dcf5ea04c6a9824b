"""
고객 원장 (Customer Ledger)

고객별 외상(DEBIT)과 결제(CREDIT) movement를 기록하고
잔액 불변식(잔액 == Σ DEBIT - Σ CREDIT)을 유지한다.

사용 예시:
```python
from core.ledger import LedgerStore, create_balance_view

store = LedgerStore(db)
balance_view = create_balance_view(BalanceStrategy.STORED, store)

async with store.unit_of_work():
    movement = await store.insert_movement(...)
    await balance_view.apply(customer_id, movement.type, movement.amount)
```
"""

from core.ledger.balance import (
    BalanceView,
    DerivedBalanceView,
    StoredBalanceView,
    create_balance_view,
)
from core.ledger.errors import (
    InvalidArgumentError,
    LedgerConfigError,
    LedgerError,
    NotFoundError,
    PaymentExceedsBalanceError,
    StorageFailureError,
)
from core.ledger.schema import init_ledger_schema
from core.ledger.store import LedgerStore, fold_balance

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "BalanceView",
    "StoredBalanceView",
    "DerivedBalanceView",
    "create_balance_view",
    "init_ledger_schema",
    "fold_balance",
    # 예외
    "LedgerError",
    "InvalidArgumentError",
    "NotFoundError",
    "PaymentExceedsBalanceError",
    "StorageFailureError",
    "LedgerConfigError",
]
