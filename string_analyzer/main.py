from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer import __version__
from string_analyzer.api.routes import router
from string_analyzer.config import Settings, get_settings
from string_analyzer.exceptions import InvalidRequestError, InvalidTypeError, StringAnalyzerError
from string_analyzer.store import StringStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store on startup and close it on shutdown"""
    logger.info("Initializing string store...")
    store = StringStore()
    store.init(app.state.settings.db_path)
    app.state.store = store
    try:
        yield
    finally:
        store.close()
        app.state.store = None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze, store and filter string properties",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    app.include_router(router, tags=["strings"])

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": "String Analyzer Service",
            "version": __version__,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis (by value or SHA-256 id)",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/natural": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string"
            }
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    # Domain error handler
    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": "Internal server error"}
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message}
        )

    # Validation error handler: wrong type for "value" is 422, anything else 400
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(error.get("type") == "string_type" for error in errors):
            error = InvalidTypeError()
        else:
            error = InvalidRequestError()
        return JSONResponse(
            status_code=error.status_code,
            content={"error": error.message}
        )

    # HTTPException handler, also covers unmatched routes
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error"
            }
        )

    return app


app = create_app()


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run("string_analyzer.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
