from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded

from apkstudio.core.config import settings
from apkstudio.core.database import init_db, close_db
from apkstudio.core.exceptions import ApkStudioError, error_response
from apkstudio.core.logging_config import logger
from apkstudio.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from apkstudio.core.rate_limiter import limiter, rate_limit_exceeded_handler
from apkstudio.api.v1.router import api_router
from apkstudio.services.build_driver import BuildProgressDriver
from apkstudio.services.build_log_store import BuildLogStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API Version: {settings.API_VERSION}")
    logger.info(f"Build step interval: {app.state.build_driver.step_interval}s")
    logger.info("=" * 60)

    await init_db()
    logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")

    # Pending build steps would fire into a closed loop
    app.state.build_driver.shutdown()

    await close_db()


async def apkstudio_exception_handler(request: Request, exc: ApkStudioError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


def create_app() -> FastAPI:
    """Build the application with its own build store and driver."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Manage Python app projects, simulate APK builds and proxy AI providers",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False  # Prevent 307 redirects that break CORS
    )

    store = BuildLogStore()
    app.state.build_store = store
    app.state.build_driver = BuildProgressDriver(store)

    # Add rate limiter state and exception handler
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(ApkStudioError, apkstudio_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Add middleware (order matters - last added runs first)
    # 1. Request logging (runs first for all requests)
    app.add_middleware(RequestLoggingMiddleware)

    # 2. Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # 3. Request size limit (multi-file uploads)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)

    # 4. CORS - Origins from CORS_ORIGINS_STR in .env
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT
        }

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    # Include API router
    app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")

    return app


app = create_app()


def run():
    """Console entry point (apkstudio-server)"""
    import uvicorn
    uvicorn.run(
        "apkstudio.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
