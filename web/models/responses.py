"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 소수점 2자리 문자열 ("60.00").
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from core.types import Customer, Movement
from core.utils.amount import format_amount


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    balance_strategy: str = Field(..., description="잔액 전략 (stored/derived)")
    version: str = Field(..., description="API 버전")


class CustomerResponse(BaseModel):
    """고객 응답"""

    id: int = Field(..., description="고객 ID")
    name: str = Field(..., description="이름")
    address: str | None = Field(default=None, description="주소")
    phone: str | None = Field(default=None, description="전화번호")
    city: str | None = Field(default=None, description="도시")
    balance: str = Field(..., description="잔액 (양수 = 고객이 갚을 금액)")

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=customer.id,
            name=customer.name,
            address=customer.address,
            phone=customer.phone,
            city=customer.city,
            balance=format_amount(customer.balance),
        )


class CustomerSummaryResponse(BaseModel):
    """전체 고객 요약"""

    customer_count: int = Field(..., description="고객 수")
    total_balance: str = Field(..., description="전체 잔액 합계")


class MovementResponse(BaseModel):
    """movement 응답"""

    id: int = Field(..., description="movement ID")
    customer_id: int = Field(..., description="고객 ID")
    type: str = Field(..., description="유형 (DEBIT/CREDIT)")
    method: str = Field(..., description="수단 (DEUDA/EFECTIVO/TRANSFERENCIA/MIXTO)")
    amount: str = Field(..., description="금액")
    date: str = Field(..., description="날짜 (YYYY-MM-DD)")
    description: str = Field(..., description="설명")

    @classmethod
    def from_movement(cls, movement: Movement) -> "MovementResponse":
        return cls(
            id=movement.id,
            customer_id=movement.customer_id,
            type=movement.type.value,
            method=movement.method.value,
            amount=format_amount(movement.amount),
            date=movement.date.isoformat(),
            description=movement.description,
        )


class MovementResultResponse(BaseModel):
    """movement 변경 결과 (생성/수정된 movement + 변경 후 잔액)"""

    movements: list[MovementResponse] = Field(default_factory=list, description="movement 목록")
    balance: str = Field(..., description="변경 후 고객 잔액")

    @classmethod
    def from_result(cls, movements: list[Movement], balance: Decimal) -> "MovementResultResponse":
        return cls(
            movements=[MovementResponse.from_movement(m) for m in movements],
            balance=format_amount(balance),
        )


class OkResponse(BaseModel):
    """단순 성공 응답"""

    ok: bool = True


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str = Field(..., description="오류 메시지")
