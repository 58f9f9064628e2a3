"""
Main application module for VentureScope.

This module initializes the FastAPI application and includes all routes.
It also sets up CORS middleware, request logging and error handlers.
"""
from contextlib import asynccontextmanager
from datetime import datetime
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .routes import evaluate
from .utils.config import settings
from .utils.logger import app_logger as logger, configure_loggers


# Request logging middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging request information."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(
            f"Incoming request: {request.method} {request.url.path} "
            f"Client: {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"Error: {str(e)} "
                f"Duration: {time.time() - start_time:.3f}s"
            )
            raise

        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Duration: {time.time() - start_time:.3f}s"
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure file logging on startup."""
    configure_loggers(settings.LOGS_DIR)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    if not settings.YOU_API_KEY:
        logger.warning("YOU_API_KEY is not set; evaluations will fail until it is configured")
    yield
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    VentureScope API

    Key Features:
    - Startup evaluation across industry news, competitors, research synthesis,
      regional TAM and business-model risk
    """,
    version=settings.VERSION,
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(evaluate.router, prefix="/api")


# Custom exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unreadable request bodies fail like any other evaluation error."""
    errors = exc.errors()
    logger.error(f"Invalid request body for {request.url.path}: {errors}")
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "An unexpected error occurred"}
    )


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "documentation": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy" if settings.YOU_API_KEY else "degraded",
        "version": settings.VERSION,
        "components": {
            "agents_api": {
                "status": "configured" if settings.YOU_API_KEY else "missing_api_key",
                "url": settings.AGENTS_URL,
            },
        },
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now().isoformat()
    }


# For local development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "venturescope.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
