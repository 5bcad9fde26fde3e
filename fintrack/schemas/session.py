# fintrack/schemas/session.py
from typing import Optional
from datetime import datetime
import uuid

from fintrack.schemas.common import CamelModel

class SessionUser(CamelModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    is_active: bool = True
    is_verified: bool = False

class SessionInfo(CamelModel):
    user_id: uuid.UUID
    created_at: datetime
    expires_at: datetime

class SessionResponse(CamelModel):
    session: SessionInfo
    user: SessionUser
