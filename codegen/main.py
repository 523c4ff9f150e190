"""FastAPI application entry point.

Ties together:
- API routes (workspaces, generation, health)
- Lifecycle management (startup, shutdown)
- Middleware (CORS, request logging)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from codegen import __version__
from codegen.api.routes import health_router, workspaces_router
from codegen.api.routes.health import set_ready
from codegen.config import get_settings
from codegen.services.workspace_manager import get_workspace_manager
from codegen.utils.logging import get_logger, setup_logging

settings = get_settings()
setup_logging(
    log_level="DEBUG" if settings.debug else "INFO",
    json_logs=settings.json_logs,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Mark the service ready on startup; remove workspaces on shutdown."""
    logger.info(f"Starting playground code generator (instance: {settings.full_instance_id})")

    get_workspace_manager().ensure_base_dir()

    set_ready(True)
    logger.info("Service is ready")

    yield

    logger.info("Shutting down...")
    set_ready(False)

    try:
        await get_workspace_manager().cleanup_all_workspaces()
    except OSError as e:
        logger.error(f"Error cleaning up workspaces: {e}")

    logger.info("Shutdown complete")


app = FastAPI(
    title="Playground Code Generator",
    description="""
    Generates Angular components with Gemini and wires them into the
    playground's bootstrap file.

    ## Usage
    1. Create a workspace with POST /api/workspaces
    2. POST /api/workspaces/{id}/generate with a prompt
    3. Load the returned files into the editor (entry file is last)
    4. Delete the workspace when done
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


ALLOWED_ORIGINS = [
    "https://angular.dev",
    "http://localhost:4200",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-API-Key"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests except health probes."""
    start_time = datetime.now(timezone.utc)

    if request.url.path in ("/health", "/ready", "/"):
        return await call_next(request)

    response = await call_next(request)

    duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000

    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)",
        extra={
            "extra_data": {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        },
    )

    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


app.include_router(health_router)
app.include_router(workspaces_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "codegen.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="debug" if settings.debug else "info",
    )
