import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from onlyzines.core.config import get_settings
from onlyzines.core.errors import AppError
from onlyzines.db import engine
from onlyzines.monitoring import MetricsMiddleware, router as monitoring_router
from onlyzines.routers import auth, health, public, publisher


logger = logging.getLogger(__name__)
settings = get_settings()

DATABASE_MAX_ATTEMPTS = 5
DATABASE_INITIAL_DELAY_SECONDS = 1.0


async def wait_for_database() -> None:
    """Ensure the database accepts connections, retrying while it starts up."""

    delay = DATABASE_INITIAL_DELAY_SECONDS
    for attempt in range(1, DATABASE_MAX_ATTEMPTS + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            if attempt > 1:
                logger.info("Connected to database after %d attempts", attempt)
            return
        except SQLAlchemyError as exc:  # pragma: no cover - service dependent
            if attempt == DATABASE_MAX_ATTEMPTS:
                logger.error(
                    "Failed to connect to database after %d attempts: %s",
                    attempt,
                    exc,
                )
                raise
            logger.warning(
                "Database not ready (attempt %d/%d): %s",
                attempt,
                DATABASE_MAX_ATTEMPTS,
                exc,
            )
            await asyncio.sleep(delay)
            delay *= 2


@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_database()
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(MetricsMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.resolved_cors_allowed_origins,
    allow_origin_regex=settings.cors_allow_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, payload: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": payload})


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        422,
        {
            "code": "VALIDATION_ERROR",
            "message": "Validation failed",
            "details": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                for error in exc.errors()
            ],
        },
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Storage failure during %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(500, {"code": "INTERNAL_ERROR", "message": "Internal server error"})


@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    """Reject bodies larger than the configured limit before reading them."""

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.max_request_bytes:
        return _error_response(
            413, {"code": "PAYLOAD_TOO_LARGE", "message": "Request body too large"}
        )
    return await call_next(request)


app.include_router(auth.router, prefix="/api")
app.include_router(publisher.router, prefix="/api")
app.include_router(public.router, prefix="/api")
app.include_router(health.router, prefix="/api")
app.include_router(monitoring_router)


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Plain liveness probe."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Explicit health endpoint for readiness probes."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
