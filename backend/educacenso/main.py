# backend/educacenso/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.api import api_router
from .config import get_settings, setup_logging, validate_settings
from .core.exceptions import AppError
from .logging_config import build_logging_config
from .schemas.system import HealthResponse

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")
    for issue in validate_settings(settings):
        logger.warning(f"Configuration issue: {issue}")

    yield

    logger.info("Shutting down the application...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Educacenso census file export and data inconsistency reports",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Structured application errors carry their own status code."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything else becomes an opaque 500 in the same error envelope."""
    logger.exception(f"{request.method} {request.url.path} raised {type(exc).__name__}")
    wrapped = AppError.from_exception(exc, "Erro interno ao processar a requisição")
    payload = wrapped.to_dict()
    payload["error"].pop("context", None)
    return JSONResponse(status_code=wrapped.status_code, content=payload)


app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint providing basic API information."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "status": "active",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint; lists configuration issues without failing."""
    issues = validate_settings(settings)
    return HealthResponse(
        status="healthy" if not issues else "degraded",
        service="educacenso-export",
        version=settings.APP_VERSION,
        config_issues=issues,
    )


if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_config=build_logging_config(settings),
    )
