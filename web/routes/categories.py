"""
카테고리 라우트
"""

from fastapi import APIRouter, Depends, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.types import TransactionType
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import CategoryCreateRequest, CategoryUpdateRequest
from web.models.responses import MessageResponse
from web.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("")
async def list_categories(
    type: TransactionType | None = Query(default=None, description="유형 필터"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """카테고리 목록"""
    service = CategoryService(db)

    data = await service.list_categories(user.user_id, type=type.value if type else None)

    return {"data": data}


@router.get("/{category_id}")
async def get_category(
    category_id: str = Path(..., description="카테고리 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    service = CategoryService(db)

    return {"data": await service.get_category(user.user_id, category_id)}


@router.post("", status_code=201)
async def create_category(
    request: CategoryCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """카테고리 생성 (이름/유형 중복 불가)"""
    service = CategoryService(db)

    data = await service.create_category(user.user_id, request)

    return {"data": data, "message": "Category created successfully"}


@router.put("/{category_id}")
async def update_category(
    request: CategoryUpdateRequest,
    category_id: str = Path(..., description="카테고리 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    service = CategoryService(db)

    data = await service.update_category(user.user_id, category_id, request)

    return {"data": data, "message": "Category updated successfully"}


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str = Path(..., description="카테고리 ID"),
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> MessageResponse:
    service = CategoryService(db)

    await service.delete_category(user.user_id, category_id)

    return MessageResponse(message="Category deleted successfully")
