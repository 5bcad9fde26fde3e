# fintrack/models/transaction.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Enum
from fastapi_users_db_sqlalchemy.generics import GUID
from fintrack.core.database import Base
from fintrack.models.category import utc_now
from fintrack.models.enums import EntryType

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # RESTRICT: a category still in use cannot be deleted
    category_id = Column(GUID, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    type = Column(Enum(EntryType, name="entry_type"), nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(String(length=500), nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"<Transaction amount={self.amount} date={self.date} user_id={self.user_id}>"
