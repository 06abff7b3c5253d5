"""
계좌 라우트

계좌 CRUD / 통계
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.models.responses import MessageResponse
from web.services.account_service import AccountService

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


@router.get("")
async def list_accounts(
    is_active: bool | None = Query(default=None, alias="isActive", description="활성 여부 필터"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌 목록 + 요약 (총 계좌 수, 활성 계좌 수, 활성 계좌 잔액 합계)"""
    service = AccountService(db)

    return await service.list_accounts(user.user_id, is_active=is_active)


@router.get("/stats")
async def get_account_stats(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌 유형별 통계 + 최근 30일 현금 흐름"""
    service = AccountService(db)

    return {"data": await service.get_stats(user.user_id)}


@router.get("/{account_id}")
async def get_account(
    account_id: str = Path(..., description="계좌 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """계좌 상세 (최근 거래 10건 포함)"""
    service = AccountService(db)

    return {"data": await service.get_account(user.user_id, account_id)}


@router.post("", status_code=201)
async def create_account(
    request: AccountCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """계좌 생성 (balance = 기초 잔액)"""
    service = AccountService(db)

    data = await service.create_account(user.user_id, request)

    return {"data": data, "message": "Account created successfully"}


@router.put("/{account_id}")
async def update_account(
    request: AccountUpdateRequest,
    account_id: str = Path(..., description="계좌 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """계좌 수정 (balance는 무시)"""
    service = AccountService(db)

    data = await service.update_account(user.user_id, account_id, request)

    return {"data": data, "message": "Account updated successfully"}


@router.delete("/{account_id}", response_model=MessageResponse)
async def delete_account(
    account_id: str = Path(..., description="계좌 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    """계좌 삭제 (거래 이력이 있으면 거부)"""
    service = AccountService(db)

    await service.delete_account(user.user_id, account_id)

    return MessageResponse(message="Account deleted successfully")
