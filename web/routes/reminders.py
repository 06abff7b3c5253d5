"""
리마인더 라우트
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import ReminderCreateRequest, ReminderUpdateRequest
from web.models.responses import MessageResponse
from web.services.reminder_service import ReminderService

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.get("")
async def list_reminders(
    is_active: bool | None = Query(default=None, alias="isActive", description="활성 여부 필터"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """리마인더 목록 (만기일 순)"""
    service = ReminderService(db)

    return {"data": await service.list_reminders(user.user_id, is_active=is_active)}


@router.get("/{reminder_id}")
async def get_reminder(
    reminder_id: str = Path(..., description="리마인더 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    service = ReminderService(db)

    return {"data": await service.get_reminder(user.user_id, reminder_id)}


@router.post("", status_code=201)
async def create_reminder(
    request: ReminderCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = ReminderService(db)

    data = await service.create_reminder(user.user_id, request)

    return {"data": data, "message": "Reminder created successfully"}


@router.put("/{reminder_id}")
async def update_reminder(
    request: ReminderUpdateRequest,
    reminder_id: str = Path(..., description="리마인더 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = ReminderService(db)

    data = await service.update_reminder(user.user_id, reminder_id, request)

    return {"data": data, "message": "Reminder updated successfully"}


@router.delete("/{reminder_id}", response_model=MessageResponse)
async def delete_reminder(
    reminder_id: str = Path(..., description="리마인더 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    service = ReminderService(db)

    await service.delete_reminder(user.user_id, reminder_id)

    return MessageResponse(message="Reminder deleted successfully")
