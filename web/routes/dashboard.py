"""
대시보드 라우트

요약 지표 조회 API (순자산, 이번 달 수입/지출, 예산, 청구서)
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.constants import RECENT_TRANSACTIONS_LIMIT, Pagination
from web.dependencies import CurrentUser, get_app_settings, get_current_user, get_db
from web.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


def get_dashboard_service(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> DashboardService:
    return DashboardService(db, settings.budget_limits)


@router.get("")
async def get_overview(
    user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """대시보드 개요

    총 잔액, 이번 달 수입/지출, 저축률, 순자산, 부채, 투자 평가액을 한 번에 조회.
    """
    return {"data": await service.get_overview(user.user_id)}


@router.get("/recent-transactions")
async def get_recent_transactions(
    limit: int = Query(
        default=RECENT_TRANSACTIONS_LIMIT,
        ge=1,
        le=Pagination.MAX_LIMIT,
        description="조회 개수",
    ),
    user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """최근 거래 (거래일 최신순)"""
    return {"data": await service.get_recent_transactions(user.user_id, limit)}


@router.get("/expense-breakdown")
async def get_expense_breakdown(
    user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """이번 달 지출 카테고리 분류 (상위 8개)"""
    return {"data": await service.get_expense_breakdown(user.user_id)}


@router.get("/budget-progress")
async def get_budget_progress(
    user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """설정된 예산 한도 대비 이번 달 지출"""
    return {"data": await service.get_budget_progress(user.user_id)}


@router.get("/upcoming-bills")
async def get_upcoming_bills(
    user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """30일 안에 만기인 청구서 리마인더"""
    return {"data": await service.get_upcoming_bills(user.user_id)}
