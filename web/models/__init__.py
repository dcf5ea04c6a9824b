"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    CustomerCreateRequest,
    DebtCreateRequest,
    MovementUpdateRequest,
    PaymentCreateRequest,
    SettleRequest,
)
from web.models.responses import (
    CustomerResponse,
    CustomerSummaryResponse,
    ErrorResponse,
    HealthResponse,
    MovementResponse,
    MovementResultResponse,
    OkResponse,
)

__all__ = [
    # Requests
    "CustomerCreateRequest",
    "DebtCreateRequest",
    "MovementUpdateRequest",
    "PaymentCreateRequest",
    "SettleRequest",
    # Responses
    "CustomerResponse",
    "CustomerSummaryResponse",
    "ErrorResponse",
    "HealthResponse",
    "MovementResponse",
    "MovementResultResponse",
    "OkResponse",
]
