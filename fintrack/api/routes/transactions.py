# fintrack/api/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date
import logging
import uuid

from fintrack.schemas.common import SuccessResponse
from fintrack.schemas.transaction import (
    TransactionCreate,
    TransactionFilters,
    TransactionRead,
    TransactionUpdate,
)
from fintrack.crud.transaction import (
    create_transaction_for_user,
    delete_transaction_for_user,
    get_transaction_by_id,
    get_transactions_for_user,
    update_transaction_for_user,
)
from fintrack.crud.category import get_category_by_id
from fintrack.core.database import get_async_session
from fintrack.core.auth import AuthSession
from fintrack.api.deps import get_current_session, parse_resource_id

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = logging.getLogger(__name__)

async def ensure_category_owned(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> None:
    """A transaction may only reference one of the caller's own categories."""
    if await get_category_by_id(category_id, user_id, db) is None:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("body", "categoryId"),
            "msg": "Category not found",
            "input": str(category_id),
        }])

@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    start_date: Optional[date] = Query(None, alias="startDate", description="Inclusive, YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Inclusive of the whole day, YYYY-MM-DD"),
    category_id: Optional[uuid.UUID] = Query(None, alias="categoryId"),
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    """
    List the current user's transactions, newest first.

    - **startDate**: keep rows dated on or after this day
    - **endDate**: keep rows dated on or before the end of this day
    - **categoryId**: keep rows in this category
    """
    filters = TransactionFilters(start_date=start_date, end_date=end_date, category_id=category_id)
    return await get_transactions_for_user(auth_session.user_id, db, filters)

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    await ensure_category_owned(tx_in.category_id, auth_session.user_id, db)
    return await create_transaction_for_user(auth_session.user_id, tx_in, db)

@router.put("/", include_in_schema=False)
@router.delete("/", include_in_schema=False)
async def transaction_id_missing(
    auth_session: AuthSession = Depends(get_current_session),
):
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Transaction ID is required")

@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: str,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    tx_id = parse_resource_id(transaction_id)
    if tx_id is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")

    tx = await update_transaction_for_user(tx_id, auth_session.user_id, tx_in, db)
    if tx:
        return tx

    # Nothing matched: someone else's or missing row first, then the category
    if await get_transaction_by_id(tx_id, auth_session.user_id, db) is None:
        logger.info(f"Update of transaction {transaction_id} by user {auth_session.user_id}: not found")
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await ensure_category_owned(tx_in.category_id, auth_session.user_id, db)
    raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")

@router.delete("/{transaction_id}", response_model=SuccessResponse)
async def delete_transaction_endpoint(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    auth_session: AuthSession = Depends(get_current_session),
):
    tx_id = parse_resource_id(transaction_id)
    if tx_id is None or not await delete_transaction_for_user(tx_id, auth_session.user_id, db):
        logger.info(f"Delete of transaction {transaction_id} by user {auth_session.user_id}: not found")
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return SuccessResponse()
