from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import List

from hrms_admin.core.config import get_settings, validate_settings
from hrms_admin.core.error_handlers import register_exception_handlers
from hrms_admin.core.exceptions import ConfigurationError
from hrms_admin.core.hrms_client import create_client
from hrms_admin.core.logging_config import setup_logging, get_logger
from hrms_admin.core.security_middleware import SecurityHeadersMiddleware
from hrms_admin.api.v1.router import api_router

# Logging comes up before settings are validated so config errors are logged
setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        validate_settings()
    except ConfigurationError as e:
        logger.error(f"Startup aborted, configuration error: {e.message}")
        raise

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")
    logger.info(f"HRMS backend: {settings.HRMS_API_BASE_URL}")
    if settings.DEBUG:
        logger.warning("Debug mode is ON; error details and API docs are exposed")

    yield

    logger.info("Shutting down application")


def cors_origins() -> List[str]:
    """Console front end origins, without duplicates."""
    origins = []
    for origin in (settings.FRONTEND_URL, "http://localhost:5173", "http://127.0.0.1:5173"):
        if origin not in origins:
            origins.append(origin)
    return origins


# API docs are only served in debug mode
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Admin console API for HR records and office supplies",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
)

register_exception_handlers(app)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs" if settings.DEBUG else None,
    }


@app.get("/health")
async def health_check():
    """Liveness plus a reachability check of the HRMS backend."""
    async with create_client() as client:
        reachable = await client.ping()

    if not reachable:
        logger.error("Health check: HRMS backend unreachable")

    return JSONResponse(
        status_code=status.HTTP_200_OK if reachable else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if reachable else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "backend": "reachable" if reachable else "unreachable",
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
