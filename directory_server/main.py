import logging
import time
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_server.api import api
from directory_server.core.config import Settings, settings as default_settings, setup_logging
from directory_server.core.database import EmployeeStore
from directory_server.core.errors import DirectoryError, StoreError
from directory_server.schemas.schema import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting server...")

    await app.state.store.init_db()

    yield

    logger.info("Shutting down, closing connections...")

    try:
        await app.state.store.close()
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        if isinstance(exc, StoreError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unmatched paths and unsupported methods are both unknown endpoints
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, "Endpoint not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Rejected request to {request.url.path}: {errors}")

        if any(error.get("loc", ())[:1] == ("path",) for error in errors):
            return _error(status.HTTP_404_NOT_FOUND, "Employee not found")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Optional[Settings] = None, store: Optional[EmployeeStore] = None) -> FastAPI:
    """
    Build the API application

    Args:
        settings: Server settings, the environment-derived ones by default
        store: Employee store to serve from, built from settings.DATABASE_URL when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    if store is None:
        store = EmployeeStore(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    app = FastAPI(
        title="Employee Directory API",
        description="API for managing employee directory records",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    register_exception_handlers(app)

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    async def health_check():
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return HealthResponse(status="OK", timestamp=timestamp.replace("+00:00", "Z"))

    app.include_router(api.router)

    return app


setup_logging(default_settings)
app = create_app()


def run():
    import uvicorn
    logger.info(f"Server running on port {default_settings.PORT}")
    logger.info(f"API base URL: http://localhost:{default_settings.PORT}/api/employees")
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
