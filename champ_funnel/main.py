from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

load_dotenv()

from champ_funnel.config import get_settings
from champ_funnel.core.exceptions import (
    GateLockedException,
    GateSessionNotFoundException,
    RepositoryException,
    ScoringInputException,
)
from champ_funnel.core.logging import configure_logging

# IMPORT ROUTERS
from champ_funnel.routers.admin import router as admin_router
from champ_funnel.routers.errors import (
    gate_locked_exception_handler,
    gate_not_found_exception_handler,
    http_exception_handler,
    repository_exception_handler,
    scoring_input_exception_handler,
    validation_exception_handler,
)
from champ_funnel.routers.gate import router as gate_router
from champ_funnel.routers.health import router as health_router
from champ_funnel.routers.quiz import router as quiz_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = structlog.get_logger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Calibration Gate"},
    {"name": "Quiz"},
    {"name": "Submissions"},
    {"name": "Admin"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ScoringInputException, scoring_input_exception_handler)
app.add_exception_handler(GateLockedException, gate_locked_exception_handler)
app.add_exception_handler(GateSessionNotFoundException, gate_not_found_exception_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)   # Health
app.include_router(gate_router)     # Calibration Gate
app.include_router(quiz_router)     # Quiz / Submissions
app.include_router(admin_router)    # Admin


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info(
        "startup",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        store=settings.SUBMISSION_STORE,
        cache_enabled=settings.CACHE_ENABLED,
        require_calibration=settings.REQUIRE_CALIBRATION,
    )
    if not settings.admin_enabled:
        logger.warning("admin_disabled", reason="ADMIN_PASSWORD not set")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "champ_funnel.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
