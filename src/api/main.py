"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, bookmarks, health, users
from core.config import get_settings
from core.logging_config import setup_logging
from db.session import dispose_engine
from services.exceptions import (
    BookmarkNotFoundError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidInputError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    setup_logging(get_settings().log_level)
    logger.info("Application startup complete")

    yield

    # Shutdown: release pooled database connections
    await dispose_engine()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Multi-user bookmark management with password authentication.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed or missing request fields as 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(_request: Request, exc: InvalidInputError) -> JSONResponse:
    """Handle input the service layer rejected."""
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(EmailTakenError)
async def email_taken_handler(_request: Request, exc: EmailTakenError) -> JSONResponse:
    """Handle signup or profile edit with an email already in use."""
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(
    _request: Request, exc: InvalidCredentialsError,
) -> JSONResponse:
    """Handle failed login. Same response for unknown email and wrong password."""
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(UnauthenticatedError)
async def unauthenticated_handler(
    _request: Request, exc: UnauthenticatedError,
) -> JSONResponse:
    """Handle missing, invalid or expired bearer tokens."""
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(BookmarkNotFoundError)
async def bookmark_not_found_handler(
    _request: Request, exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Handle missing bookmarks and bookmarks owned by someone else alike."""
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log storage failures server-side; never send their details to the client."""
    logger.exception(
        "database_error",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(bookmarks.router)
