"""
Movements 라우트

movement 수정/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from web.dependencies import get_movement_writer
from web.models.requests import MovementUpdateRequest
from web.models.responses import ErrorResponse, MovementResultResponse, OkResponse
from web.services.movement_service import MovementService

router = APIRouter(
    prefix="/api/movements",
    tags=["Movements"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.put("/{movement_id}", response_model=MovementResultResponse)
async def update_movement(
    request: MovementUpdateRequest,
    movement_id: int = Path(..., ge=1, description="movement ID"),
    service: MovementService = Depends(get_movement_writer),
) -> MovementResultResponse:
    """movement 수정

    type(DEBIT/CREDIT)은 변경되지 않으며, 잔액은 금액 차이만큼만 조정.
    """
    result = await service.edit_movement(
        movement_id,
        amount=request.amount,
        cash=request.cash,
        transfer=request.transfer,
        movement_date=request.date,
        description=request.description,
    )
    return MovementResultResponse.from_result(result.movements, result.balance)


@router.delete("/{movement_id}", response_model=OkResponse)
async def delete_movement(
    movement_id: int = Path(..., ge=1, description="movement ID"),
    service: MovementService = Depends(get_movement_writer),
) -> OkResponse:
    """movement 삭제 (없는 movement도 성공 처리)"""
    await service.delete_movement(movement_id)
    return OkResponse()
