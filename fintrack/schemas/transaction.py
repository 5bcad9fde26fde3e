# fintrack/schemas/transaction.py
from typing import Optional
from pydantic import Field, field_validator
from datetime import date as date_type, datetime, timezone
import uuid

from fintrack.models.enums import EntryType
from fintrack.schemas.common import CamelModel

class TransactionBase(CamelModel):
    category_id: uuid.UUID
    type: EntryType
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Positive amount; the direction comes from `type`")
    description: str = Field(..., min_length=1, max_length=500, description="E.g. Grocery at Costco")
    date: datetime = Field(..., description="ISO 8601 date/time of transaction")

    @field_validator("date")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        # Stored as naive UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(TransactionBase):
    """Full replace of every mutable field."""
    pass

class TransactionRead(TransactionBase):
    id: uuid.UUID
    user_id: uuid.UUID

class TransactionFilters(CamelModel):
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None
    category_id: Optional[uuid.UUID] = None

    def to_query_params(self) -> dict:
        """Query-string form understood by GET /api/transactions."""
        return {
            key: str(value)
            for key, value in self.model_dump(by_alias=True, exclude_none=True).items()
        }
