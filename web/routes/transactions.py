"""
거래 라우트

거래 CRUD / 통계 / CSV 내보내기
"""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Pagination
from core.types import SortOrder, StatsPeriod, TransactionType
from core.utils.dates import today_utc
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.models.responses import MessageResponse
from web.services.transaction_service import TransactionFilter, TransactionService

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


def get_transaction_filter(
    account_id: str | None = Query(default=None, alias="accountId", description="계좌 ID"),
    category: str | None = Query(default=None, description="카테고리"),
    type: TransactionType | None = Query(default=None, description="거래 유형"),
    start_date: date | None = Query(default=None, alias="startDate", description="시작일 (포함)"),
    end_date: date | None = Query(default=None, alias="endDate", description="종료일 (포함)"),
    search: str | None = Query(default=None, description="설명 검색 (대소문자 무시)"),
) -> TransactionFilter:
    """목록/내보내기 공통 필터"""
    return TransactionFilter(
        account_id=account_id,
        category=category,
        type=type.value if type else None,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )


@router.get("")
async def list_transactions(
    page: int = Query(default=Pagination.DEFAULT_PAGE, ge=1, description="페이지 (1부터)"),
    limit: int = Query(
        default=Pagination.DEFAULT_LIMIT,
        ge=1,
        le=Pagination.MAX_LIMIT,
        description="페이지 크기",
    ),
    sort_by: str = Query(default="date", alias="sortBy", description="정렬 필드"),
    sort_order: SortOrder = Query(default=SortOrder.DESC, alias="sortOrder", description="정렬 방향"),
    filter: TransactionFilter = Depends(get_transaction_filter),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 목록 (필터/정렬/페이지네이션)"""
    service = TransactionService(db)

    return await service.list_transactions(
        user.user_id,
        filter,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/stats")
async def get_transaction_stats(
    period: StatsPeriod = Query(default=StatsPeriod.MONTH, description="기간 (week/month/year)"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """기간 통계 (수입/지출 합계, 지출 상위 카테고리)"""
    service = TransactionService(db)

    return {"data": await service.get_stats(user.user_id, period)}


@router.get("/export")
async def export_transactions(
    filter: TransactionFilter = Depends(get_transaction_filter),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
) -> Response:
    """CSV 내보내기"""
    service = TransactionService(db)

    content = await service.export_csv(user.user_id, filter)
    filename = f"transactions_{today_utc().isoformat()}.csv"

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 상세"""
    service = TransactionService(db)

    return {"data": await service.get_transaction(user.user_id, transaction_id)}


@router.post("", status_code=201)
async def create_transaction(
    request: TransactionCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """거래 생성 (계좌 잔액 반영)"""
    service = TransactionService(db)

    data = await service.create_transaction(user.user_id, request)

    return {"data": data, "message": "Transaction created successfully"}


@router.put("/{transaction_id}")
async def update_transaction(
    request: TransactionUpdateRequest,
    transaction_id: str = Path(..., description="거래 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """거래 수정 (계좌 잔액 보정)"""
    service = TransactionService(db)

    data = await service.update_transaction(user.user_id, transaction_id, request)

    return {"data": data, "message": "Transaction updated successfully"}


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: str = Path(..., description="거래 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    """거래 삭제 (계좌 잔액 되돌림)"""
    service = TransactionService(db)

    await service.delete_transaction(user.user_id, transaction_id)

    return MessageResponse(message="Transaction deleted successfully")
