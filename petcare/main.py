from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import logging

from .api.v1 import appointments, auth, dashboard, pets, users
from .core.config import settings
from .core.database import init_db
from .core.exceptions import AppError
from .core.rate_limit import rate_limit_check
from .core.responses import failure_response, generate_request_id
from .schemas.validation import format_error

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Pet healthcare clinic API: pets, appointments and role-scoped dashboards",
    openapi_url="/api/v1/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id, timing and request logging
@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request.state.request_id = generate_request_id()
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    response.headers["X-Request-ID"] = request.state.request_id

    # Log request
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response

# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, AppError):
        message, errors = exc.message, exc.errors
    elif exc.status_code == 404:
        message, errors = "The requested resource was not found", None
    else:
        message, errors = str(exc.detail), None
    return failure_response(
        request,
        message,
        exc.status_code,
        errors=errors,
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = [format_error(error) for error in exc.errors()]
    return failure_response(request, messages[0] if messages else "Invalid request", 400, errors=messages)

@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}", exc_info=exc)
    return failure_response(request, "An unexpected error occurred", 500)

# Include routers
for api_router in (auth.router, pets.router, appointments.router, users.router, dashboard.router):
    app.include_router(
        api_router,
        prefix="/api/v1",
        dependencies=[Depends(rate_limit_check)],
    )

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("Starting Pet Healthcare API...")

    db_url = settings.get_database_url
    db_type = "PostgreSQL" if "postgresql" in db_url else "SQLite" if "sqlite" in db_url else "Unknown"
    logger.info(f"Using {db_type} database")

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    logger.info("Application startup complete")

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on application shutdown."""
    logger.info("Shutting down Pet Healthcare API...")

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION
    }

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Welcome to the Pet Healthcare API",
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "authentication": "/api/v1/auth",
            "pets": "/api/v1/pets",
            "appointments": "/api/v1/appointments",
            "users": "/api/v1/users",
            "dashboard": "/api/v1/dashboard"
        }
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "petcare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
