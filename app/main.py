"""FastAPI application entrypoint. No business logic; only wiring, error mapping and middleware.

Run with:
    uvicorn app.main:app --host 0.0.0.0 --port 3300

Or directly:
    python -m app.main
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import SessionLocal, check_db_connected, classify_integrity_error
from app.core.errors import AppError, InternalError
from app.core.security import TokenService

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI validation errors into one readable line, e.g. 'body.year: Input should be a valid integer'."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", "invalid value"))
    return "; ".join(parts) or "Invalid request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, _format_validation_errors(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _error_response(404, "route not found")
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations that escaped a service: map by SQLSTATE / message."""
    error = classify_integrity_error(exc)
    if isinstance(error, InternalError):
        logger.exception("Unclassified integrity error on %s %s", request.method, request.url.path)
    return _error_response(error.status_code, error.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(500, InternalError.default_message)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. The JWT secret is read from `settings` here, once,
    and handed to a TokenService stored on app.state for the dependencies.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "%s starting: env=%s admin_registration=%s",
            settings.SERVICE_NAME,
            settings.APP_ENV,
            settings.ADMIN_REGISTRATION,
        )
        db = SessionLocal()
        try:
            if check_db_connected(db):
                logger.info("Database reachable")
            else:
                logger.warning("Database not reachable at startup; requests touching it will fail")
        finally:
            db.close()
        yield
        logger.info("%s stopped", settings.SERVICE_NAME)

    app = FastAPI(
        title="Film API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
