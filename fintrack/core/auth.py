# fintrack/core/auth.py

import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from fastapi import Depends, Request, Response
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin, exceptions
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    CookieTransport,
)
from fastapi_users.authentication.strategy.db import AccessTokenDatabase, DatabaseStrategy
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users import schemas
from fastapi_users_db_sqlalchemy.access_token import SQLAlchemyAccessTokenDatabase
from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware, now_utc

from pydantic import ConfigDict, Field
from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import Headers
from starlette.requests import cookie_parser

from .database import Base, get_async_session
from .config import settings
from .routing import API_PREFIX

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# 1. DB models
class User(Base):
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    name = Column(String(length=100), nullable=True)

    def __repr__(self):
        return f"<User email={self.email}>"

class AccessToken(Base):
    """A server-side session: one row per signed-in client."""
    __tablename__ = "access_tokens"

    token = Column(String(length=43), primary_key=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(TIMESTAMPAware(timezone=True), index=True, nullable=False, default=now_utc)

    def __repr__(self):
        return f"<AccessToken user_id={self.user_id} created_at={self.created_at}>"

# 2. Pydantic schemas
class UserRead(schemas.BaseUser[uuid.UUID]):
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class UserCreate(schemas.BaseUserCreate):
    name: str = Field(..., min_length=1, max_length=100)

# 3. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise exceptions.InvalidPasswordException(
                reason=f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if user.email.lower() in password.lower():
            raise exceptions.InvalidPasswordException(
                reason="Password should not contain e-mail"
            )

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered.")

    async def on_after_login(
        self,
        user: User,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
    ):
        logger.info(f"User {user.email} signed in")

# 4. User and session databases
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

async def get_access_token_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyAccessTokenDatabase(session, AccessToken)

# 5. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 6. Authentication - browser sessions ride on a cookie, API clients may use a bearer token.
#    Both store the session server-side so sign-out invalidates it.
cookie_transport = CookieTransport(
    cookie_name=settings.SESSION_COOKIE_NAME,
    cookie_max_age=settings.SESSION_LIFETIME_SECONDS,
    cookie_secure=settings.SESSION_COOKIE_SECURE,
    cookie_httponly=True,
    cookie_samesite="lax",
)
bearer_transport = BearerTransport(tokenUrl=f"{API_PREFIX}/auth/token/login")

def get_database_strategy(
    access_token_db: AccessTokenDatabase[AccessToken] = Depends(get_access_token_db),
) -> DatabaseStrategy:
    return DatabaseStrategy(access_token_db, lifetime_seconds=settings.SESSION_LIFETIME_SECONDS)

cookie_backend = AuthenticationBackend(
    name="cookie",
    transport=cookie_transport,
    get_strategy=get_database_strategy,
)

bearer_backend = AuthenticationBackend(
    name="bearer",
    transport=bearer_transport,
    get_strategy=get_database_strategy,
)

# 7. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [cookie_backend, bearer_backend])

# 8. Session resolution
@dataclass
class AuthSession:
    token: str
    # Plain copy of user.id; stays readable if `user` gets expired
    user_id: uuid.UUID
    user: User
    created_at: datetime
    expires_at: datetime

def extract_session_token(headers: Headers) -> Optional[str]:
    """
    Pull the session token out of raw request headers:
    - session cookie
    - Authorization: Bearer header
    """
    cookie_header = headers.get("cookie")
    if cookie_header:
        token = cookie_parser(cookie_header).get(settings.SESSION_COOKIE_NAME)
        if token:
            return token

    auth_header = headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None

    return None

async def resolve_session(headers: Headers, db: AsyncSession) -> Optional[AuthSession]:
    """Return the current session and its user, or None when there is no valid session."""
    token = extract_session_token(headers)
    if not token:
        return None

    lifetime = timedelta(seconds=settings.SESSION_LIFETIME_SECONDS)
    access_token = await SQLAlchemyAccessTokenDatabase(db, AccessToken).get_by_token(
        token, max_age=now_utc() - lifetime
    )
    if access_token is None:
        return None

    user = await SQLAlchemyUserDatabase(db, User).get(access_token.user_id)
    if user is None or not user.is_active:
        return None

    return AuthSession(
        token=token,
        user_id=uuid.UUID(str(user.id)),
        user=user,
        created_at=access_token.created_at,
        expires_at=access_token.created_at + lifetime,
    )

__all__ = [
    "fastapi_users",
    "cookie_backend",
    "bearer_backend",
    "get_user_db",
    "get_user_manager",
    "resolve_session",
    "AuthSession",
    "AccessToken",
    "User",
    "UserRead",
    "UserCreate",
]
