"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
금액 필드는 폼 입력("1.234,50" 등)을 그대로 받아 서비스에서 정규화한다.
"""

from pydantic import BaseModel, Field

# 폼 문자열 또는 JSON 숫자
AmountField = str | int | float | None


class CustomerCreateRequest(BaseModel):
    """고객 생성 요청"""

    name: str | None = Field(default=None, description="고객 이름 (필수)")
    address: str | None = Field(default=None, description="주소")
    phone: str | None = Field(default=None, description="전화번호")
    city: str | None = Field(default=None, description="도시")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Juan Pérez", "phone": "351-555-0101", "city": "Córdoba"},
            ]
        }
    }


class DebtCreateRequest(BaseModel):
    """외상 등록 요청"""

    amount: AmountField = Field(default=None, description="외상 금액")
    date: str | None = Field(default=None, description="날짜 (YYYY-MM-DD, 기본: 오늘)")
    description: str | None = Field(default=None, description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"amount": "15.000,50", "date": "2026-10-01", "description": "Mercadería"},
            ]
        }
    }


class PaymentCreateRequest(BaseModel):
    """결제 등록 요청"""

    cash: AmountField = Field(default=None, description="현금 금액")
    transfer: AmountField = Field(default=None, description="이체 금액")
    date: str | None = Field(default=None, description="날짜 (YYYY-MM-DD, 기본: 오늘)")
    description: str | None = Field(default=None, description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"cash": "3.000", "transfer": "2.000", "date": "2026-10-05"},
            ]
        }
    }


class SettleRequest(BaseModel):
    """전액 정산 요청"""

    date: str | None = Field(default=None, description="날짜 (YYYY-MM-DD, 기본: 오늘)")


class MovementUpdateRequest(BaseModel):
    """movement 수정 요청

    외상은 amount, 결제는 cash/transfer (또는 amount) 사용.
    type은 받지 않는다 (저장된 값 유지).
    """

    amount: AmountField = Field(default=None, description="외상/결제 금액")
    cash: AmountField = Field(default=None, description="현금 금액 (결제)")
    transfer: AmountField = Field(default=None, description="이체 금액 (결제)")
    date: str | None = Field(default=None, description="날짜 (YYYY-MM-DD)")
    description: str | None = Field(default=None, description="설명")
