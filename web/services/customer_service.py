"""
Customer 서비스

고객 생성/조회/삭제 및 전체 잔액 요약
"""

import logging
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import LedgerConfig
from core.ledger.balance import create_balance_view
from core.ledger.errors import InvalidArgumentError, NotFoundError
from core.ledger.store import LedgerStore
from core.types import Customer
from core.utils.amount import ZERO

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    """공백 제거, 빈 문자열은 None"""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class CustomerService:
    """Customer 서비스

    Args:
        db: SQLite 어댑터
        config: 원장 설정 (잔액 전략)
    """

    def __init__(self, db: SQLiteAdapter, config: LedgerConfig):
        self.db = db
        self.store = LedgerStore(db)
        self.balance_view = create_balance_view(config.balance_strategy, self.store)

    async def create_customer(
        self,
        name: str | None,
        address: str | None = None,
        phone: str | None = None,
        city: str | None = None,
    ) -> Customer:
        """고객 생성 (잔액 0으로 시작)

        Raises:
            InvalidArgumentError: 이름이 비어 있음
        """
        clean_name = _clean(name)
        if not clean_name:
            raise InvalidArgumentError("name", "Customer name is required.")

        async with self.store.unit_of_work():
            customer = await self.store.insert_customer(
                name=clean_name,
                address=_clean(address),
                phone=_clean(phone),
                city=_clean(city),
            )

        logger.info(
            f"고객 생성: {customer.name}",
            extra={"customer_id": customer.id},
        )
        return customer

    async def list_customers(self) -> list[Customer]:
        """고객 목록 (이름순, 잔액 포함)"""
        return await self.balance_view.customers()

    async def get_customer(self, customer_id: int) -> Customer:
        """고객 조회

        Raises:
            NotFoundError: 고객 없음
        """
        customer = await self.balance_view.customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    async def get_summary(self) -> dict[str, Any]:
        """고객 수 및 전체 잔액 합계"""
        customers = await self.balance_view.customers()
        total: Decimal = sum((c.balance for c in customers), ZERO)

        return {
            "customer_count": len(customers),
            "total_balance": total,
        }

    async def delete_customer(self, customer_id: int) -> None:
        """고객과 소유 movement를 함께 삭제

        Raises:
            NotFoundError: 고객 없음
        """
        async with self.store.unit_of_work():
            deleted = await self.store.delete_customer(customer_id)
            if not deleted:
                raise NotFoundError("Customer", customer_id)

        logger.info(
            f"고객 삭제: id={customer_id}",
            extra={"customer_id": customer_id},
        )
