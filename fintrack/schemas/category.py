# fintrack/schemas/category.py
from datetime import datetime
from pydantic import Field
import uuid

from fintrack.models.enums import EntryType
from fintrack.schemas.common import CamelModel

class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, description="E.g. Groceries")
    type: EntryType

class CategoryCreate(CategoryBase):
    pass

class CategoryRead(CategoryBase):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
