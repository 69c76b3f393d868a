import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routers.admin import router as admin_router
from app.api.routers.bookings import router as bookings_router
from app.api.routers.cars import router as cars_router
from app.api.routers.external_v1 import router as external_v1_router
from app.api.routers.health import router as health_router
from app.api.routers.partner import router as partner_router
from app.config import get_settings
from app.domain.errors import DomainError
from app.infrastructure.db.engine import build_engine, build_sessionmaker, create_schema

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    engine = None
    if not settings.use_in_memory:
        engine = build_engine(settings)
        app.state.session_maker = build_sessionmaker(engine)
        if settings.create_schema_on_startup:
            await create_schema(engine)
        logger.info("SQL persistence enabled")
    else:
        logger.info("In-memory persistence enabled")
    yield
    # Cleanup
    if engine is not None:
        await engine.dispose()


app = FastAPI(
    title=get_settings().app_name,
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.http_status >= 500:
        logger.error("Domain error", extra={"code": exc.code, "path": request.url.path})
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.message, "code": exc.code, **exc.details},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Invalid input is a 400 carrying the first issue found."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"error": message, "code": "VALIDATION_ERROR"},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    # Log the full error with context for internal debugging
    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    # Return a generic error to the client without exposing internal details
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
            "error_id": error_id,
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(cars_router, prefix="/api", tags=["Cars"])
app.include_router(bookings_router, prefix="/api", tags=["Bookings"])
app.include_router(partner_router, prefix="/api", tags=["Partner"])
app.include_router(admin_router, prefix="/api", tags=["Admin"])
app.include_router(external_v1_router, prefix="/api", tags=["External API v1"])
