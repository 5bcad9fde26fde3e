# fintrack/api/routes/categories.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from fintrack.schemas.category import CategoryCreate, CategoryRead
from fintrack.crud.category import create_category_for_user, get_categories_for_user
from fintrack.core.database import get_async_session
from fintrack.core.auth import AuthSession
from fintrack.api.deps import get_current_session

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    return await get_categories_for_user(auth_session.user_id, db)

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    return await create_category_for_user(auth_session.user_id, cat_in, db)
