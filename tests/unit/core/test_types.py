"""
core/types.py 테스트
"""

from datetime import date
from decimal import Decimal

import pytest

from core.types import (
    BalanceStrategy,
    Customer,
    Movement,
    MovementType,
    PaymentMethod,
)


class TestEnums:
    """Enum 값 테스트"""

    def test_movement_type_values(self) -> None:
        assert MovementType.DEBIT.value == "DEBIT"
        assert MovementType.CREDIT.value == "CREDIT"

    def test_movement_type_sign(self) -> None:
        """DEBIT은 잔액 증가, CREDIT은 감소"""
        assert MovementType.DEBIT.sign == 1
        assert MovementType.CREDIT.sign == -1

    def test_payment_method_values(self) -> None:
        assert PaymentMethod("EFECTIVO") == PaymentMethod.CASH
        assert PaymentMethod("TRANSFERENCIA") == PaymentMethod.TRANSFER
        assert PaymentMethod("MIXTO") == PaymentMethod.MIXED
        assert PaymentMethod("DEUDA") == PaymentMethod.DEBT

    def test_balance_strategy_from_string(self) -> None:
        assert BalanceStrategy("stored") == BalanceStrategy.STORED
        assert BalanceStrategy("derived") == BalanceStrategy.DERIVED

    def test_str_enum_serialization(self) -> None:
        """str 상속으로 문자열 비교 가능"""
        assert MovementType.CREDIT == "CREDIT"


class TestMovement:
    """Movement 데이터클래스 테스트"""

    def _movement(self, movement_type: MovementType) -> Movement:
        return Movement(
            id=1,
            customer_id=1,
            type=movement_type,
            method=PaymentMethod.CASH,
            amount=Decimal("40.00"),
            date=date(2026, 10, 1),
            description="Pago",
        )

    def test_frozen(self) -> None:
        movement = self._movement(MovementType.DEBIT)

        with pytest.raises(AttributeError):
            movement.type = MovementType.CREDIT  # type: ignore


class TestCustomer:
    """Customer 데이터클래스 테스트"""

    def test_creation(self) -> None:
        customer = Customer(
            id=1,
            name="Ana",
            address=None,
            phone="123",
            city=None,
            balance=Decimal("0.00"),
        )

        assert customer.balance == Decimal("0")
        assert customer.created_at is None
