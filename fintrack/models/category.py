# fintrack/models/category.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, ForeignKey, Enum, DateTime
from fastapi_users_db_sqlalchemy.generics import GUID
from fintrack.core.database import Base
from fintrack.models.enums import EntryType

def utc_now() -> datetime:
    """Naive UTC timestamp, the form every datetime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)

class Category(Base):
    __tablename__ = "categories"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    type = Column(Enum(EntryType, name="entry_type"), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"<Category name={self.name} type={self.type} user_id={self.user_id}>"
