"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class BalanceStrategy(str, Enum):
    """잔액 관리 전략

    - STORED: customers 테이블의 잔액 컬럼을 movement 변경 시 증분 갱신
    - DERIVED: 잔액을 저장하지 않고 조회 시 movement를 합산
    """

    STORED = "stored"
    DERIVED = "derived"


class MovementType(str, Enum):
    """movement 유형 (생성 후 변경 불가)"""

    DEBIT = "DEBIT"  # 외상 증가
    CREDIT = "CREDIT"  # 결제 (외상 감소)

    @property
    def sign(self) -> int:
        """잔액에 미치는 방향 (+1 / -1)"""
        return 1 if self is MovementType.DEBIT else -1


class PaymentMethod(str, Enum):
    """결제 수단 (정보용, 잔액 불변식과 무관)"""

    DEBT = "DEUDA"  # 외상 movement 표시용
    CASH = "EFECTIVO"
    TRANSFER = "TRANSFERENCIA"
    MIXED = "MIXTO"


@dataclass(frozen=True)
class Customer:
    """고객

    balance: 양수이면 고객이 운영자에게 갚아야 할 금액
    """

    id: int
    name: str
    address: str | None
    phone: str | None
    city: str | None
    balance: Decimal
    created_at: str | None = None


@dataclass(frozen=True)
class Movement:
    """원장 항목 (외상 또는 결제)"""

    id: int
    customer_id: int
    type: MovementType
    method: PaymentMethod
    amount: Decimal
    date: date
    description: str
    created_at: str | None = None
