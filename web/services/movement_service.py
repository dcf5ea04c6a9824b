"""
Movement 서비스

외상 등록, 결제 등록, 전액 정산, movement 수정/삭제.
모든 변경은 LedgerStore.unit_of_work() 하나 안에서 movement 쓰기와
잔액 반영이 함께 커밋되거나 함께 롤백된다.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import LedgerConfig
from core.constants import Descriptions
from core.ledger.balance import create_balance_view
from core.ledger.errors import (
    InvalidArgumentError,
    NotFoundError,
    PaymentExceedsBalanceError,
)
from core.ledger.store import LedgerStore
from core.types import Movement, MovementType, PaymentMethod
from core.utils.amount import ZERO, format_amount, to_amount
from core.utils.dates import parse_date, today

logger = logging.getLogger(__name__)

AmountInput = str | int | float | Decimal | None


@dataclass(frozen=True)
class MovementResult:
    """변경 결과 (생성/수정된 movement + 변경 후 잔액)"""

    movements: list[Movement]
    balance: Decimal


def payment_method(cash: Decimal, transfer: Decimal) -> PaymentMethod:
    """결제 구성으로 결제 수단 결정

    - 현금/이체 모두 > 0: MIXTO
    - 이체만 > 0: TRANSFERENCIA
    - 그 외: EFECTIVO
    """
    if cash > 0 and transfer > 0:
        return PaymentMethod.MIXED
    if transfer > 0:
        return PaymentMethod.TRANSFER
    return PaymentMethod.CASH


def payment_description(cash: Decimal, transfer: Decimal) -> str:
    """결제 기본 설명 ("Pago recibido (Efectivo $30.00 + Transferencia $20.00)")"""
    parts = []
    if cash > 0:
        parts.append(f"Efectivo ${format_amount(cash)}")
    if transfer > 0:
        parts.append(f"Transferencia ${format_amount(transfer)}")
    breakdown = " + ".join(parts) or "sin detalle"
    return f"{Descriptions.PAYMENT} ({breakdown})"


def _default_description(
    movement_type: MovementType,
    method: PaymentMethod,
    amount: Decimal,
    cash: AmountInput,
    transfer: AmountInput,
) -> str:
    """수정 시 설명을 비웠을 때 사용할 기본 설명"""
    if movement_type == MovementType.DEBIT:
        return Descriptions.DEBT
    if method == PaymentMethod.TRANSFER:
        return payment_description(ZERO, amount)
    if method == PaymentMethod.MIXED:
        cash_amount, transfer_amount = _payment_parts(cash, transfer)
        if cash_amount + transfer_amount != amount:
            return Descriptions.PAYMENT
        return payment_description(cash_amount, transfer_amount)
    return payment_description(amount, ZERO)


def _parse_date_field(raw: str | date | None) -> date | None:
    try:
        return parse_date(raw)
    except ValueError as e:
        raise InvalidArgumentError("date", f"Invalid date: {raw}") from e


def _payment_parts(cash: AmountInput, transfer: AmountInput) -> tuple[Decimal, Decimal]:
    """현금/이체 금액 정규화 (음수 거부)"""
    cash_amount = to_amount(cash)
    transfer_amount = to_amount(transfer)

    if cash_amount < 0:
        raise InvalidArgumentError("cash", "Cash amount cannot be negative.")
    if transfer_amount < 0:
        raise InvalidArgumentError("transfer", "Transfer amount cannot be negative.")

    return cash_amount, transfer_amount


class MovementService:
    """Movement 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        config: 원장 설정 (잔액 전략, 결제 한도 정책)
    """

    def __init__(self, db: SQLiteAdapter, config: LedgerConfig):
        self.db = db
        self.config = config
        self.store = LedgerStore(db)
        self.balance_view = create_balance_view(config.balance_strategy, self.store)

    async def list_movements(self, customer_id: int) -> list[Movement]:
        """고객 movement 내역 (날짜 내림차순, id 내림차순)"""
        return await self.store.list_movements(customer_id)

    async def register_debt(
        self,
        customer_id: int,
        amount: AmountInput,
        movement_date: str | date | None = None,
        description: str | None = None,
    ) -> MovementResult:
        """외상 등록 (DEBIT)

        Raises:
            InvalidArgumentError: 금액이 0 이하이거나 날짜 형식 오류
            NotFoundError: 고객 없음
        """
        value = to_amount(amount)
        if not value > 0:
            raise InvalidArgumentError("amount", "Invalid debt amount.")

        when = _parse_date_field(movement_date) or today()
        text = (description or "").strip() or Descriptions.DEBT

        async with self.store.unit_of_work():
            await self._require_customer(customer_id)

            movement = await self.store.insert_movement(
                customer_id=customer_id,
                movement_type=MovementType.DEBIT,
                method=PaymentMethod.DEBT,
                amount=value,
                movement_date=when,
                description=text,
            )
            await self.balance_view.apply(customer_id, MovementType.DEBIT, value)
            balance = await self.balance_view.balance(customer_id)

        logger.info(
            f"외상 등록: customer={customer_id} amount={value}",
            extra={"customer_id": customer_id, "movement_id": movement.id},
        )

        return MovementResult(movements=[movement], balance=balance)

    async def register_payment(
        self,
        customer_id: int,
        cash: AmountInput = None,
        transfer: AmountInput = None,
        movement_date: str | date | None = None,
        description: str | None = None,
    ) -> MovementResult:
        """결제 등록 (CREDIT)

        STORED: movement 1건 (현금+이체면 MIXTO)
        DERIVED: 현금/이체 각각 movement 1건

        Raises:
            InvalidArgumentError: 합계가 0 이하
            PaymentExceedsBalanceError: 결제 한도 정책 위반
            NotFoundError: 고객 없음
        """
        cash_amount, transfer_amount = _payment_parts(cash, transfer)
        total = cash_amount + transfer_amount
        if not total > 0:
            raise InvalidArgumentError("amount", "Payment amount must be greater than zero.")

        when = _parse_date_field(movement_date) or today()
        text = (description or "").strip() or None

        async with self.store.unit_of_work():
            await self._require_customer(customer_id)
            await self._check_payment_limit(customer_id, total)

            movements = await self._insert_payment(
                customer_id, cash_amount, transfer_amount, when, text
            )
            balance = await self.balance_view.balance(customer_id)

        logger.info(
            f"결제 등록: customer={customer_id} total={total}",
            extra={
                "customer_id": customer_id,
                "movement_ids": [m.id for m in movements],
            },
        )

        return MovementResult(movements=movements, balance=balance)

    async def settle_balance(
        self,
        customer_id: int,
        movement_date: str | date | None = None,
    ) -> MovementResult:
        """현재 잔액 전액을 현금 결제로 정산

        Raises:
            InvalidArgumentError: 정산할 잔액이 없음
            NotFoundError: 고객 없음
        """
        when = _parse_date_field(movement_date) or today()

        async with self.store.unit_of_work():
            await self._require_customer(customer_id)

            outstanding = await self.balance_view.balance(customer_id)
            if not outstanding > 0:
                raise InvalidArgumentError("balance", "Customer has no outstanding balance.")

            movements = await self._insert_payment(
                customer_id, outstanding, ZERO, when, Descriptions.SETTLEMENT
            )
            balance = await self.balance_view.balance(customer_id)

        logger.info(
            f"전액 정산: customer={customer_id} amount={outstanding}",
            extra={"customer_id": customer_id},
        )

        return MovementResult(movements=movements, balance=balance)

    async def edit_movement(
        self,
        movement_id: int,
        amount: AmountInput = None,
        cash: AmountInput = None,
        transfer: AmountInput = None,
        movement_date: str | date | None = None,
        description: str | None = None,
    ) -> MovementResult:
        """movement 수정

        type과 고객은 변경 불가. 잔액은 (새 금액 - 기존 금액)만큼만
        movement 방향으로 조정.

        Raises:
            InvalidArgumentError: 금액이 0 이하
            NotFoundError: movement 또는 고객 없음
        """
        when = _parse_date_field(movement_date)

        async with self.store.unit_of_work():
            old = await self.store.get_movement(movement_id)
            if old is None:
                raise NotFoundError("Movement", movement_id)
            await self._require_customer(old.customer_id)

            if old.type == MovementType.DEBIT:
                new_amount = self._edited_debt_amount(old, amount)
                method = old.method
            elif self.balance_view.split_payments:
                new_amount = self._edited_split_payment_amount(old, cash, transfer)
                method = old.method
            else:
                new_amount, method = self._edited_combined_payment(old, amount, cash, transfer)

            if description is None:
                text = old.description
            else:
                text = description.strip() or _default_description(
                    old.type, method, new_amount, cash, transfer
                )

            movement = await self.store.update_movement(
                movement_id,
                method=method,
                amount=new_amount,
                movement_date=when or old.date,
                description=text,
            )

            diff = new_amount - old.amount
            await self.balance_view.apply(old.customer_id, old.type, diff)
            balance = await self.balance_view.balance(old.customer_id)

        logger.info(
            f"movement 수정: id={movement_id} {old.amount} → {new_amount}",
            extra={"movement_id": movement_id, "customer_id": old.customer_id},
        )

        return MovementResult(movements=[movement], balance=balance)

    async def delete_movement(self, movement_id: int) -> bool:
        """movement 삭제 (멱등)

        Returns:
            실제 삭제 여부 (없던 movement면 False)
        """
        async with self.store.unit_of_work():
            movement = await self.store.get_movement(movement_id)
            if movement is None:
                return False

            # 원래 효과 되돌리기
            await self.balance_view.apply(movement.customer_id, movement.type, -movement.amount)
            await self.store.delete_movement(movement_id)

        logger.info(
            f"movement 삭제: id={movement_id} type={movement.type.value} amount={movement.amount}",
            extra={"movement_id": movement_id, "customer_id": movement.customer_id},
        )

        return True

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    async def _require_customer(self, customer_id: int) -> None:
        if await self.store.get_customer(customer_id) is None:
            raise NotFoundError("Customer", customer_id)

    async def _check_payment_limit(self, customer_id: int, total: Decimal) -> None:
        """잔액이 양수일 때 허용 오차를 넘는 초과 결제 거부"""
        if not self.config.enforce_payment_limit:
            return

        current = await self.balance_view.balance(customer_id)
        if current > 0 and total > current + self.config.payment_tolerance:
            raise PaymentExceedsBalanceError()

    async def _insert_payment(
        self,
        customer_id: int,
        cash: Decimal,
        transfer: Decimal,
        when: date,
        description: str | None,
    ) -> list[Movement]:
        """결제 movement 저장 + 잔액 반영"""
        if self.balance_view.split_payments:
            parts = [
                (PaymentMethod.CASH, cash, ZERO),
                (PaymentMethod.TRANSFER, ZERO, transfer),
            ]
        else:
            parts = [(payment_method(cash, transfer), cash, transfer)]

        movements = []
        for method, part_cash, part_transfer in parts:
            part_total = part_cash + part_transfer
            if not part_total > 0:
                continue

            movement = await self.store.insert_movement(
                customer_id=customer_id,
                movement_type=MovementType.CREDIT,
                method=method,
                amount=part_total,
                movement_date=when,
                description=description or payment_description(part_cash, part_transfer),
            )
            await self.balance_view.apply(customer_id, MovementType.CREDIT, part_total)
            movements.append(movement)

        return movements

    def _edited_debt_amount(self, old: Movement, amount: AmountInput) -> Decimal:
        new_amount = old.amount if amount is None else to_amount(amount)
        if not new_amount > 0:
            raise InvalidArgumentError("amount", "Invalid debt amount.")
        return new_amount

    def _edited_combined_payment(
        self,
        old: Movement,
        amount: AmountInput,
        cash: AmountInput,
        transfer: AmountInput,
    ) -> tuple[Decimal, PaymentMethod]:
        """단일 결제 movement 수정 (STORED)

        현금/이체 내역이 오면 합계와 수단을 다시 계산,
        없으면 amount(또는 기존 금액) 사용.
        """
        cash_amount, transfer_amount = _payment_parts(cash, transfer)
        total = cash_amount + transfer_amount

        if total > 0:
            return total, payment_method(cash_amount, transfer_amount)

        new_amount = old.amount if amount is None else to_amount(amount)
        if not new_amount > 0:
            raise InvalidArgumentError("amount", "Invalid payment amount.")
        return new_amount, old.method

    def _edited_split_payment_amount(
        self,
        old: Movement,
        cash: AmountInput,
        transfer: AmountInput,
    ) -> Decimal:
        """분리 결제 movement 수정 (DERIVED)

        저장된 수단에 해당하는 필드만 읽음 (TRANSFERENCIA → transfer, 그 외 → cash).
        """
        if old.method == PaymentMethod.TRANSFER:
            field, raw = "transfer", transfer
        else:
            field, raw = "cash", cash

        if raw is None:
            return old.amount

        new_amount = to_amount(raw)
        if not new_amount > 0:
            raise InvalidArgumentError(field, "Invalid payment amount.")
        return new_amount
