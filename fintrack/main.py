# fintrack/main.py
import uvicorn
import enum
import os
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.core.config import settings
from fintrack.core.database import create_db_and_tables, get_async_session
from fintrack.core.auth import (
    fastapi_users,
    cookie_backend,
    bearer_backend,
    UserRead,
    UserCreate,
)
from fintrack.core.routing import API_PREFIX
from fintrack.api.middleware import AuthGuardMiddleware
from fintrack.api.routes import auth, categories, transactions, pages
from fintrack.schemas.common import ErrorResponse

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_url=f"{API_PREFIX}/openapi.json",
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Sign-up, sign-in, sign-out and the current session"},
        {"name": "categories", "description": "Income and expense categories owned by the current user"},
        {"name": "transactions", "description": "Transactions owned by the current user"},
    ],
)

# Guard first so CORS (added last) wraps it and answers preflights itself
app.add_middleware(AuthGuardMiddleware)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------
# ERROR HANDLERS
# ------------------------------------------------------------
def error_response(status_code: int, message: str, data: Any = None, headers=None) -> JSONResponse:
    body = ErrorResponse(statusCode=status_code, statusMessage=message, data=data)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )

def format_validation_errors(errors) -> Dict[str, List[str]]:
    """Group validation messages by field path, e.g. {"amount": ["Input should be greater than 0"]}."""
    fields: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the request section ("body", "query", ...) unless it is all there is
        key = ".".join(loc[1:]) or (loc[0] if loc else "request")
        fields.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return fields

def as_message(value: Any) -> str:
    # fastapi-users error codes are str enums
    return str(value.value) if isinstance(value, enum.Enum) else str(value)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        # fastapi-users reports {"code": ..., "reason": ...}
        data = {key: as_message(value) for key, value in detail.items()}
        return error_response(exc.status_code, data.get("code", "Error"), data=data, headers=exc.headers)
    return error_response(exc.status_code, as_message(detail), headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Validation error", data=format_validation_errors(exc.errors()))

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Internal server error")

# ------------------------------------------------------------
# AUTHENTICATION ROUTES
# ------------------------------------------------------------
app.include_router(auth.router, prefix=f"{API_PREFIX}/auth")

# Cookie sign-in / sign-out for browsers
app.include_router(
    fastapi_users.get_auth_router(cookie_backend),
    prefix=f"{API_PREFIX}/auth",
    tags=["Authentication"],
)

# Bearer sign-in / sign-out for API clients
app.include_router(
    fastapi_users.get_auth_router(bearer_backend),
    prefix=f"{API_PREFIX}/auth/token",
    tags=["Authentication"],
)

# Registration
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix=f"{API_PREFIX}/auth",
    tags=["Authentication"],
)

# ------------------------------------------------------------
# SERVICE ENDPOINTS
# ------------------------------------------------------------
@app.get(API_PREFIX, tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

@app.get(f"{API_PREFIX}/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_async_session)):
    """Health check endpoint, including a database round-trip"""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(categories.router, prefix=API_PREFIX)
app.include_router(transactions.router, prefix=API_PREFIX)
app.include_router(pages.router)

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Startup event to create database tables"""
    try:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")
        logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")
    except SQLAlchemyError as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("fintrack.main:app", host="0.0.0.0", port=port, reload=False)
