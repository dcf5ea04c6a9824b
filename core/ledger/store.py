"""
Ledger 저장소

customers / movements 테이블 저장 및 조회.
잔액 계산 규칙은 core.ledger.balance의 BalanceView가 담당.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, AsyncIterator

import aiosqlite

from core.ledger.errors import StorageFailureError
from core.types import Customer, Movement, MovementType, PaymentMethod
from core.utils.amount import ZERO, format_amount

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_CUSTOMER_COLUMNS = "id, name, address, phone, city, current_account_balance, created_at"
_MOVEMENT_COLUMNS = "id, customer_id, type, method, amount, date, description, created_at"


def fold_balance(rows: list[tuple[str, str]]) -> Decimal:
    """(type, amount) 행들을 잔액으로 합산

    balance = Σ(DEBIT amount) - Σ(CREDIT amount)
    """
    balance = ZERO
    for movement_type, amount in rows:
        balance += Decimal(amount) * MovementType(movement_type).sign
    return balance


class LedgerStore:
    """Ledger 저장소

    고객과 movement를 저장하고 조회하는 클래스.
    쓰기 메서드는 커밋하지 않으므로 unit_of_work() 안에서 호출해야 한다.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[None]:
        """원자적 작업 단위

        BEGIN IMMEDIATE로 쓰기 락을 잡고, 블록이 정상 종료되면 커밋,
        예외 시 전체 롤백. DB 오류는 StorageFailureError로 변환.
        """
        try:
            async with self.db.transaction(immediate=True):
                yield
        except aiosqlite.Error as e:
            logger.exception("원장 트랜잭션 실패 (롤백 완료)")
            raise StorageFailureError("Storage operation failed") from e

    # -------------------------------------------------------------------------
    # customers
    # -------------------------------------------------------------------------

    async def insert_customer(
        self,
        name: str,
        address: str | None = None,
        phone: str | None = None,
        city: str | None = None,
    ) -> Customer:
        """고객 생성 (잔액 0)"""
        cursor = await self.db.execute(
            """
            INSERT INTO customers (name, address, phone, city, current_account_balance)
            VALUES (?, ?, ?, ?, ?)
            """,
            (name, address, phone, city, format_amount(ZERO)),
        )
        customer = await self.get_customer(cursor.lastrowid)
        assert customer is not None
        return customer

    async def get_customer(self, customer_id: int) -> Customer | None:
        """고객 조회 (balance는 저장된 컬럼 값)"""
        row = await self.db.fetchone(
            f"SELECT {_CUSTOMER_COLUMNS} FROM customers WHERE id = ?",
            (customer_id,),
        )
        return self._row_to_customer(row) if row else None

    async def list_customers(self) -> list[Customer]:
        """고객 목록 (이름 대소문자 무시 오름차순, 동명이면 id 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_CUSTOMER_COLUMNS} FROM customers
            ORDER BY lower(name) ASC, id ASC
            """
        )
        return [self._row_to_customer(row) for row in rows]

    async def set_stored_balance(self, customer_id: int, balance: Decimal) -> None:
        """저장된 잔액 컬럼 갱신"""
        await self.db.execute(
            "UPDATE customers SET current_account_balance = ? WHERE id = ?",
            (format_amount(balance), customer_id),
        )

    async def delete_customer(self, customer_id: int) -> bool:
        """고객 및 소유 movement 삭제

        Returns:
            삭제 여부 (없던 고객이면 False)
        """
        await self.db.execute(
            "DELETE FROM movements WHERE customer_id = ?",
            (customer_id,),
        )
        cursor = await self.db.execute(
            "DELETE FROM customers WHERE id = ?",
            (customer_id,),
        )
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # movements
    # -------------------------------------------------------------------------

    async def insert_movement(
        self,
        customer_id: int,
        movement_type: MovementType,
        method: PaymentMethod,
        amount: Decimal,
        movement_date: date,
        description: str,
    ) -> Movement:
        """movement 저장"""
        cursor = await self.db.execute(
            """
            INSERT INTO movements (customer_id, type, method, amount, date, description)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                customer_id,
                movement_type.value,
                method.value,
                format_amount(amount),
                movement_date.isoformat(),
                description,
            ),
        )
        movement = await self.get_movement(cursor.lastrowid)
        assert movement is not None
        return movement

    async def get_movement(self, movement_id: int) -> Movement | None:
        """movement 단건 조회"""
        row = await self.db.fetchone(
            f"SELECT {_MOVEMENT_COLUMNS} FROM movements WHERE id = ?",
            (movement_id,),
        )
        return self._row_to_movement(row) if row else None

    async def list_movements(self, customer_id: int) -> list[Movement]:
        """고객 movement 내역 (날짜 내림차순, 같은 날짜는 id 내림차순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_MOVEMENT_COLUMNS} FROM movements
            WHERE customer_id = ?
            ORDER BY date DESC, id DESC
            """,
            (customer_id,),
        )
        return [self._row_to_movement(row) for row in rows]

    async def update_movement(
        self,
        movement_id: int,
        method: PaymentMethod,
        amount: Decimal,
        movement_date: date,
        description: str,
    ) -> Movement:
        """movement 수정 (type, customer_id는 변경 불가)"""
        await self.db.execute(
            """
            UPDATE movements
            SET method = ?, amount = ?, date = ?, description = ?,
                updated_at = datetime('now')
            WHERE id = ?
            """,
            (
                method.value,
                format_amount(amount),
                movement_date.isoformat(),
                description,
                movement_id,
            ),
        )
        movement = await self.get_movement(movement_id)
        assert movement is not None
        return movement

    async def delete_movement(self, movement_id: int) -> None:
        """movement 삭제"""
        await self.db.execute(
            "DELETE FROM movements WHERE id = ?",
            (movement_id,),
        )

    async def get_movement_amounts(self, customer_id: int) -> list[tuple[str, str]]:
        """고객의 (type, amount) 목록"""
        return await self.db.fetchall(
            "SELECT type, amount FROM movements WHERE customer_id = ?",
            (customer_id,),
        )

    async def get_all_movement_amounts(self) -> dict[int, list[tuple[str, str]]]:
        """전체 고객의 (type, amount) 목록 (customer_id별 그룹)"""
        rows = await self.db.fetchall(
            "SELECT customer_id, type, amount FROM movements"
        )

        grouped: dict[int, list[tuple[str, str]]] = {}
        for customer_id, movement_type, amount in rows:
            grouped.setdefault(customer_id, []).append((movement_type, amount))
        return grouped

    # -------------------------------------------------------------------------
    # 정합성 점검
    # -------------------------------------------------------------------------

    async def find_balance_mismatches(self) -> list[dict[str, Any]]:
        """저장된 잔액과 movement 합산 결과가 다른 고객 목록

        STORED 전략 DB에서 의미가 있음.

        Returns:
            [{"customer_id", "name", "stored", "computed"}, ...]
        """
        customers = await self.list_customers()
        amounts = await self.get_all_movement_amounts()

        mismatches = []
        for customer in customers:
            computed = fold_balance(amounts.get(customer.id, []))
            if computed != customer.balance:
                mismatches.append({
                    "customer_id": customer.id,
                    "name": customer.name,
                    "stored": customer.balance,
                    "computed": computed,
                })

        return mismatches

    # -------------------------------------------------------------------------
    # 변환
    # -------------------------------------------------------------------------

    def _row_to_customer(self, row: tuple[Any, ...]) -> Customer:
        """DB 행 → Customer 변환"""
        return Customer(
            id=row[0],
            name=row[1],
            address=row[2],
            phone=row[3],
            city=row[4],
            balance=Decimal(row[5]),
            created_at=row[6],
        )

    def _row_to_movement(self, row: tuple[Any, ...]) -> Movement:
        """DB 행 → Movement 변환"""
        return Movement(
            id=row[0],
            customer_id=row[1],
            type=MovementType(row[2]),
            method=PaymentMethod(row[3]),
            amount=Decimal(row[4]),
            date=date.fromisoformat(row[5]),
            description=row[6],
            created_at=row[7],
        )
