"""
Customers 라우트

고객 관리, 고객별 movement 내역, 외상/결제 등록 API
"""

from fastapi import APIRouter, Depends, Path

from core.utils.amount import format_amount
from web.dependencies import (
    get_customer_reader,
    get_customer_writer,
    get_movement_reader,
    get_movement_writer,
)
from web.models.requests import (
    CustomerCreateRequest,
    DebtCreateRequest,
    PaymentCreateRequest,
    SettleRequest,
)
from web.models.responses import (
    CustomerResponse,
    CustomerSummaryResponse,
    ErrorResponse,
    MovementResponse,
    MovementResultResponse,
    OkResponse,
)
from web.services.customer_service import CustomerService
from web.services.movement_service import MovementService

router = APIRouter(
    prefix="/api/customers",
    tags=["Customers"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    service: CustomerService = Depends(get_customer_reader),
) -> list[CustomerResponse]:
    """고객 목록 (이름순, 잔액 포함)"""
    customers = await service.list_customers()
    return [CustomerResponse.from_customer(c) for c in customers]


@router.get("/summary", response_model=CustomerSummaryResponse)
async def get_summary(
    service: CustomerService = Depends(get_customer_reader),
) -> CustomerSummaryResponse:
    """고객 수 및 전체 잔액 합계"""
    summary = await service.get_summary()
    return CustomerSummaryResponse(
        customer_count=summary["customer_count"],
        total_balance=format_amount(summary["total_balance"]),
    )


@router.post("", response_model=CustomerResponse)
async def create_customer(
    request: CustomerCreateRequest,
    service: CustomerService = Depends(get_customer_writer),
) -> CustomerResponse:
    """고객 생성

    이름은 필수, 나머지 필드는 공백 제거 후 비어 있으면 null.
    """
    customer = await service.create_customer(
        name=request.name,
        address=request.address,
        phone=request.phone,
        city=request.city,
    )
    return CustomerResponse.from_customer(customer)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: CustomerService = Depends(get_customer_reader),
) -> CustomerResponse:
    """고객 상세"""
    customer = await service.get_customer(customer_id)
    return CustomerResponse.from_customer(customer)


@router.delete("/{customer_id}", response_model=OkResponse)
async def delete_customer(
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: CustomerService = Depends(get_customer_writer),
) -> OkResponse:
    """고객 삭제 (소유 movement 포함)"""
    await service.delete_customer(customer_id)
    return OkResponse()


@router.get("/{customer_id}/movements", response_model=list[MovementResponse])
async def list_movements(
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: MovementService = Depends(get_movement_reader),
) -> list[MovementResponse]:
    """고객 movement 내역 (날짜 내림차순, id 내림차순)"""
    movements = await service.list_movements(customer_id)
    return [MovementResponse.from_movement(m) for m in movements]


@router.post("/{customer_id}/debt", response_model=MovementResultResponse)
async def register_debt(
    request: DebtCreateRequest,
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: MovementService = Depends(get_movement_writer),
) -> MovementResultResponse:
    """외상 등록"""
    result = await service.register_debt(
        customer_id,
        amount=request.amount,
        movement_date=request.date,
        description=request.description,
    )
    return MovementResultResponse.from_result(result.movements, result.balance)


@router.post("/{customer_id}/payment", response_model=MovementResultResponse)
async def register_payment(
    request: PaymentCreateRequest,
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: MovementService = Depends(get_movement_writer),
) -> MovementResultResponse:
    """결제 등록

    **결제 수단**:
    - 현금만: EFECTIVO
    - 이체만: TRANSFERENCIA
    - 둘 다: MIXTO (stored 전략) 또는 movement 2건 (derived 전략)
    """
    result = await service.register_payment(
        customer_id,
        cash=request.cash,
        transfer=request.transfer,
        movement_date=request.date,
        description=request.description,
    )
    return MovementResultResponse.from_result(result.movements, result.balance)


@router.post("/{customer_id}/settle", response_model=MovementResultResponse)
async def settle_balance(
    request: SettleRequest | None = None,
    customer_id: int = Path(..., ge=1, description="고객 ID"),
    service: MovementService = Depends(get_movement_writer),
) -> MovementResultResponse:
    """현재 잔액 전액을 현금 결제로 정산"""
    result = await service.settle_balance(
        customer_id,
        movement_date=request.date if request else None,
    )
    return MovementResultResponse.from_result(result.movements, result.balance)
