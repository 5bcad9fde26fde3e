# fintrack/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, and_, update, delete
from sqlalchemy.sql.elements import ColumnElement
from fintrack.models.category import Category
from fintrack.models.transaction import Transaction
from typing import List, Optional
from datetime import datetime, time, timedelta
import uuid
from fintrack.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionFilters

def build_transaction_conditions(
    user_id: uuid.UUID,
    filters: Optional[TransactionFilters] = None,
) -> List[ColumnElement]:
    """
    Conjunctive WHERE clause for a user's transactions.

    The end date covers its whole calendar day: rows are kept while
    date < (end_date + 1 day) 00:00.
    """
    conditions = [Transaction.user_id == user_id]
    if filters is None:
        return conditions

    if filters.start_date is not None:
        conditions.append(Transaction.date >= datetime.combine(filters.start_date, time.min))

    if filters.end_date is not None:
        end_exclusive = datetime.combine(filters.end_date + timedelta(days=1), time.min)
        conditions.append(Transaction.date < end_exclusive)

    if filters.category_id is not None:
        conditions.append(Transaction.category_id == filters.category_id)

    return conditions

async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(and_(*build_transaction_conditions(user_id, filters)))
        .order_by(desc(Transaction.date), Transaction.id)
    )
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    new_tx = Transaction(**tx_in.model_dump(), user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction_for_user(
    transaction_id: uuid.UUID,
    user_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession,
) -> Optional[Transaction]:
    """
    Replace the mutable fields in one conditional statement.

    The row must belong to the user and the new category must too; returns
    None when either does not hold.
    """
    category_owned = (
        select(Category.id)
        .where(Category.id == tx_in.category_id, Category.user_id == user_id)
        .exists()
    )
    result = await db.execute(
        update(Transaction)
        .where(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id,
            category_owned,
        )
        .values(**tx_in.model_dump())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        return None
    await db.commit()
    return await get_transaction_by_id(transaction_id, user_id, db)

async def delete_transaction_for_user(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> bool:
    """Delete a transaction, ensuring it belongs to the specified user"""
    result = await db.execute(
        delete(Transaction)
        .where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0
