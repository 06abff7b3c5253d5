"""
대출 라우트

대출 CRUD / 상환 기록 / 통계
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.types import LoanStatus, LoanType, SortOrder
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import LoanCreateRequest, LoanPaymentRequest, LoanUpdateRequest
from web.models.responses import MessageResponse
from web.services.loan_service import LoanService

router = APIRouter(prefix="/api/loans", tags=["Loans"])


@router.get("")
async def list_loans(
    type: LoanType | None = Query(default=None, description="대출 유형"),
    status: LoanStatus | None = Query(default=None, description="대출 상태"),
    sort_by: str = Query(default="nextPaymentDate", alias="sortBy", description="정렬 필드"),
    order: SortOrder = Query(default=SortOrder.ASC, description="정렬 방향"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """대출 목록 + 요약 (active 대출 기준 부채/월 납부액)"""
    service = LoanService(db)

    data = await service.list_loans(
        user.user_id,
        type=type.value if type else None,
        status=status.value if status else None,
        sort_by=sort_by,
        order=order,
    )

    return {"data": data}


@router.get("/stats")
async def get_loan_stats(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """유형별/전체 대출 통계 + 납부 예정"""
    service = LoanService(db)

    return {"data": await service.get_stats(user.user_id)}


@router.get("/{loan_id}")
async def get_loan(
    loan_id: str = Path(..., description="대출 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """대출 상세 (남은 개월, 총 이자, 상환률)"""
    service = LoanService(db)

    return {"data": await service.get_loan(user.user_id, loan_id)}


@router.post("", status_code=201)
async def create_loan(
    request: LoanCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = LoanService(db)

    data = await service.create_loan(user.user_id, request)

    return {"data": data, "message": "Loan created successfully"}


@router.put("/{loan_id}")
async def update_loan(
    request: LoanUpdateRequest,
    loan_id: str = Path(..., description="대출 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = LoanService(db)

    data = await service.update_loan(user.user_id, loan_id, request)

    return {"data": data, "message": "Loan updated successfully"}


@router.delete("/{loan_id}", response_model=MessageResponse)
async def delete_loan(
    loan_id: str = Path(..., description="대출 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    service = LoanService(db)

    await service.delete_loan(user.user_id, loan_id)

    return MessageResponse(message="Loan deleted successfully")


@router.post("/{loan_id}/payment")
async def record_loan_payment(
    request: LoanPaymentRequest,
    loan_id: str = Path(..., description="대출 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """상환 기록

    잔액이 0이 되면 paid_off, 아니면 다음 납부일 1개월 이동.
    """
    service = LoanService(db)

    data = await service.record_payment(user.user_id, loan_id, request.amount)

    return {"data": data, "message": "Payment recorded successfully"}
