"""
잔액 뷰 (BalanceView)

고객 잔액 불변식을 책임지는 교체 가능한 전략:

    balance == Σ(DEBIT amount) - Σ(CREDIT amount)

- StoredBalanceView: customers.current_account_balance를 movement 변경과
  같은 트랜잭션 안에서 증분 갱신 (조회 O(1)). 결제는 단일 movement(MIXTO 가능).
- DerivedBalanceView: 잔액을 저장하지 않고 조회 시 movement를 합산.
  현금+이체 결제는 movement 2건으로 분리.

MovementService는 어느 전략이든 같은 계약으로 동작한다.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from decimal import Decimal

from core.ledger.store import LedgerStore, fold_balance
from core.types import BalanceStrategy, Customer, MovementType

logger = logging.getLogger(__name__)


class BalanceView(ABC):
    """잔액 조회/반영 인터페이스

    Args:
        store: LedgerStore (같은 연결을 공유해야 트랜잭션이 묶임)
    """

    strategy: BalanceStrategy
    # 현금+이체 결제를 movement 2건으로 분리할지 여부
    split_payments: bool

    def __init__(self, store: LedgerStore):
        self.store = store

    @abstractmethod
    async def balance(self, customer_id: int) -> Decimal:
        """고객 잔액"""

    @abstractmethod
    async def customer(self, customer_id: int) -> Customer | None:
        """잔액이 반영된 고객 조회"""

    @abstractmethod
    async def customers(self) -> list[Customer]:
        """잔액이 반영된 고객 목록 (이름순)"""

    @abstractmethod
    async def apply(
        self,
        customer_id: int,
        movement_type: MovementType,
        amount: Decimal,
    ) -> None:
        """movement 효과 반영

        movement_type 방향으로 amount만큼 잔액을 움직인다.
        효과를 되돌리려면 음수 amount를 전달.
        반드시 LedgerStore.unit_of_work() 안에서 호출.
        """


class StoredBalanceView(BalanceView):
    """저장 잔액 (증분 갱신)"""

    strategy = BalanceStrategy.STORED
    split_payments = False

    async def balance(self, customer_id: int) -> Decimal:
        customer = await self.store.get_customer(customer_id)
        return customer.balance if customer else Decimal("0.00")

    async def customer(self, customer_id: int) -> Customer | None:
        return await self.store.get_customer(customer_id)

    async def customers(self) -> list[Customer]:
        return await self.store.list_customers()

    async def apply(
        self,
        customer_id: int,
        movement_type: MovementType,
        amount: Decimal,
    ) -> None:
        if amount == 0:
            return

        current = await self.balance(customer_id)
        new_balance = current + amount * movement_type.sign
        await self.store.set_stored_balance(customer_id, new_balance)

        logger.debug(
            f"잔액 갱신: customer={customer_id} {current} → {new_balance}",
            extra={"customer_id": customer_id, "movement_type": movement_type.value},
        )


class DerivedBalanceView(BalanceView):
    """파생 잔액 (조회 시 합산)"""

    strategy = BalanceStrategy.DERIVED
    split_payments = True

    async def balance(self, customer_id: int) -> Decimal:
        rows = await self.store.get_movement_amounts(customer_id)
        return fold_balance(rows)

    async def customer(self, customer_id: int) -> Customer | None:
        customer = await self.store.get_customer(customer_id)
        if customer is None:
            return None
        return replace(customer, balance=await self.balance(customer_id))

    async def customers(self) -> list[Customer]:
        customers = await self.store.list_customers()
        amounts = await self.store.get_all_movement_amounts()
        return [
            replace(c, balance=fold_balance(amounts.get(c.id, [])))
            for c in customers
        ]

    async def apply(
        self,
        customer_id: int,
        movement_type: MovementType,
        amount: Decimal,
    ) -> None:
        # 저장된 잔액이 없으므로 반영할 것이 없음
        return None


def create_balance_view(strategy: BalanceStrategy, store: LedgerStore) -> BalanceView:
    """전략에 맞는 BalanceView 생성"""
    if strategy == BalanceStrategy.DERIVED:
        return DerivedBalanceView(store)
    return StoredBalanceView(store)
