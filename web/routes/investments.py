"""
투자 라우트

보유 투자 CRUD / 통계
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.types import InvestmentType, SortOrder
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import InvestmentCreateRequest, InvestmentUpdateRequest
from web.models.responses import MessageResponse
from web.services.investment_service import InvestmentService

router = APIRouter(prefix="/api/investments", tags=["Investments"])


@router.get("")
async def list_investments(
    type: InvestmentType | None = Query(default=None, description="투자 유형"),
    broker: str | None = Query(default=None, description="증권사"),
    sort_by: str = Query(default="purchaseDate", alias="sortBy", description="정렬 필드"),
    order: SortOrder = Query(default=SortOrder.DESC, description="정렬 방향"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """투자 목록 + 요약 (원금, 평가액, 손익)"""
    service = InvestmentService(db)

    data = await service.list_investments(
        user.user_id,
        type=type.value if type else None,
        broker=broker,
        sort_by=sort_by,
        order=order,
    )

    return {"data": data}


@router.get("/stats")
async def get_investment_stats(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """유형별/전체 투자 통계"""
    service = InvestmentService(db)

    return {"data": await service.get_stats(user.user_id)}


@router.get("/{investment_id}")
async def get_investment(
    investment_id: str = Path(..., description="투자 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    service = InvestmentService(db)

    return {"data": await service.get_investment(user.user_id, investment_id)}


@router.post("", status_code=201)
async def create_investment(
    request: InvestmentCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = InvestmentService(db)

    data = await service.create_investment(user.user_id, request)

    return {"data": data, "message": "Investment created successfully"}


@router.put("/{investment_id}")
async def update_investment(
    request: InvestmentUpdateRequest,
    investment_id: str = Path(..., description="투자 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = InvestmentService(db)

    data = await service.update_investment(user.user_id, investment_id, request)

    return {"data": data, "message": "Investment updated successfully"}


@router.delete("/{investment_id}", response_model=MessageResponse)
async def delete_investment(
    investment_id: str = Path(..., description="투자 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    service = InvestmentService(db)

    await service.delete_investment(user.user_id, investment_id)

    return MessageResponse(message="Investment deleted successfully")
