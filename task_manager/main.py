"""
Task Manager - Main application module.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.database import check_db_connection, init_db
from .core.exceptions import AppError, UnauthenticatedError
from .routers import auth, labels, task_statuses, tasks, users

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    logger.info("Starting Task Manager...")
    if init_db():
        logger.info("Database initialized successfully")
    else:
        logger.error("Database initialization failed")
    logger.info("Task Manager startup completed")
    yield
    logger.info("Task Manager shutdown completed")


# Create FastAPI application
app = FastAPI(
    title="Task Manager",
    description="Task management API with JWT authentication",
    version=settings.service_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log all requests with timing"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    response.headers["X-Process-Time"] = str(process_time)
    if request.url.path not in ["/health", "/"]:
        logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
    return response


def _error_response(request: Request, status_code: int, error_type: str, message: str, details=None, headers=None):
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "error": {
                "type": error_type,
                "status_code": status_code,
                "message": message,
                "details": jsonable_encoder(details or []),
                "path": str(request.url.path),
                "timestamp": time.time()
            }
        }
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Map domain errors to the error envelope"""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return _error_response(request, exc.status_code, exc.error_type, exc.message, exc.details, headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query strings are client errors"""
    details = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "validation_error", "Invalid request", details)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.exception(f"Unhandled exception: {exc}")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        str(exc) if settings.debug else "Internal server error"
    )


# Include routers
app.include_router(auth.router, prefix=settings.api_prefix, tags=["auth"])
app.include_router(users.router, prefix=settings.api_prefix + "/users", tags=["users"])
app.include_router(tasks.router, prefix=settings.api_prefix + "/tasks", tags=["tasks"])
app.include_router(labels.router, prefix=settings.api_prefix + "/labels", tags=["labels"])
app.include_router(task_statuses.router, prefix=settings.api_prefix + "/task_statuses", tags=["task_statuses"])


@app.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    db_healthy = check_db_connection()
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("task_manager.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
